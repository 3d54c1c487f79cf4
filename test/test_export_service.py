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

import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from common import storage
from config.messages import field_label, message
from models.storyboard import Scene, SceneMedia
from services import export_service


def scene(number, video_url=""):
    return Scene(
        id=f"s{number}",
        scene_number=number,
        description=f"shot {number}",
        camera_angle="close-up",
        lighting="soft",
        product_action="spins",
        media=SceneMedia(video_url=video_url),
    )


def test_export_plan_covers_only_scenes_with_video_and_staggers():
    scenes = [
        scene(1, "/media/videos/a.mp4"),
        scene(2),
        scene(3, "/media/videos/c.mp4"),
        scene(12, "/media/videos/l.mp4"),
    ]

    plan = export_service.build_video_export_plan(scenes, stagger_ms=500)

    assert [d.file_name for d in plan] == ["scene_01.mp4", "scene_03.mp4", "scene_12.mp4"]
    assert [d.delay_ms for d in plan] == [0, 500, 1000]
    assert plan[0].url == "/media/videos/a.mp4?download=scene_01.mp4"


def test_export_plan_is_empty_without_videos():
    assert export_service.build_video_export_plan([scene(1), scene(2)]) == []


def test_plan_json_round_trip():
    plan = export_service.build_video_export_plan([scene(1, "/media/videos/a.mp4")], stagger_ms=250)
    assert export_service.plan_from_json(export_service.plan_to_json(plan)) == plan
    assert export_service.plan_from_json("") == []


def test_script_text_lists_every_scene_in_order():
    text = export_service.build_script_text("a watch", "macro", [scene(1), scene(2)])
    lines = text.split("\n")

    assert f"{message('plot_label')}: a watch" in lines
    assert f"{message('style_label')}: macro" in lines
    first = lines.index(message("scene_heading", number="01"))
    second = lines.index(message("scene_heading", number="02"))
    assert first < second
    assert lines[first + 1] == f"{field_label('camera_angle').capitalize()}: close-up"
    assert lines[first + 2] == f"{field_label('description').capitalize()}: shot 1"
    assert lines[first + 5] == ""


def test_export_script_stores_a_downloadable_file(tmp_path, monkeypatch):
    monkeypatch.setattr(storage.config, "MEDIA_DIR", str(tmp_path))

    download = export_service.export_script("a watch", "macro", [scene(1)])

    assert download.file_name == "storyboard_script.txt"
    media_path, query = download.url.split("?")
    assert query == "download=storyboard_script.txt"
    stored = tmp_path / media_path[len("/media/"):]
    assert "shot 1" in stored.read_text(encoding="utf-8")
