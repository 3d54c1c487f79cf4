# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Exports: the staggered video download plan and the plain-text script."""

import json
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlencode

from common.storage import store_media, unique_file_name
from config.default import Default
from config.messages import field_label, message
from models.storyboard import Scene

config = Default()

SCRIPT_FILE_NAME = "storyboard_script.txt"
SCRIPT_FOLDER = "exports"


@dataclass(frozen=True)
class Download:
    file_name: str
    url: str
    delay_ms: int


def video_file_name(scene: Scene) -> str:
    return f"scene_{scene.scene_number:02d}.mp4"


def download_url(media_url: str, file_name: str) -> str:
    """Adds the `download` query the media router turns into an attachment."""
    separator = "&" if "?" in media_url else "?"
    return f"{media_url}{separator}{urlencode({'download': file_name})}"


def build_video_export_plan(
    scenes: List[Scene], stagger_ms: Optional[int] = None
) -> List[Download]:
    """One download per scene with a video, in ordinal order.

    Downloads are spaced `stagger_ms` apart so the browser does not drop
    them as a burst.
    """
    stagger_ms = config.EXPORT_STAGGER_MS if stagger_ms is None else stagger_ms
    with_video = [scene for scene in scenes if scene.media.has_video]
    plan = []
    for index, scene in enumerate(with_video):
        file_name = video_file_name(scene)
        plan.append(
            Download(
                file_name=file_name,
                url=download_url(scene.media.video_url, file_name),
                delay_ms=index * stagger_ms,
            )
        )
    return plan


def build_script_text(plot: str, style: str, scenes: List[Scene]) -> str:
    lines = [
        message("app_title"),
        f"{message('plot_label')}: {plot}",
        f"{message('style_label')}: {style}",
        "",
    ]
    for scene in scenes:
        lines.extend(
            [
                message("scene_heading", number=f"{scene.scene_number:02d}"),
                f"{field_label('camera_angle').capitalize()}: {scene.camera_angle}",
                f"{field_label('description').capitalize()}: {scene.description}",
                f"{field_label('lighting').capitalize()}: {scene.lighting}",
                f"{field_label('product_action').capitalize()}: {scene.product_action}",
                "",
            ]
        )
    return "\n".join(lines)


def script_download(media_url: str) -> Download:
    return Download(
        file_name=SCRIPT_FILE_NAME,
        url=download_url(media_url, SCRIPT_FILE_NAME),
        delay_ms=0,
    )


def plan_to_json(plan: List[Download]) -> str:
    return json.dumps(
        [{"fileName": d.file_name, "url": d.url, "delayMs": d.delay_ms} for d in plan],
        ensure_ascii=False,
    )


def plan_from_json(plan_json: str) -> List[Download]:
    if not plan_json:
        return []
    return [
        Download(file_name=item["fileName"], url=item["url"], delay_ms=item["delayMs"])
        for item in json.loads(plan_json)
    ]


def export_script(plot: str, style: str, scenes: List[Scene]) -> Download:
    """Stores the script text as a media file and returns its download."""
    text = build_script_text(plot, style, scenes)
    media_url = store_media(
        SCRIPT_FOLDER, unique_file_name("txt"), "text/plain", text.encode("utf-8")
    )
    return script_download(media_url)
