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
"""Local media storage for generated videos."""

import os
import uuid
from pathlib import Path

from common.analytics import get_logger
from config.default import Default

config = Default()
logger = get_logger(__name__)

MEDIA_URL_PREFIX = "/media/"


def media_root() -> Path:
    return Path(config.MEDIA_DIR).resolve()


def store_media(folder: str, file_name: str, mime_type: str, contents: bytes) -> str:
    """Stores bytes under the media directory and returns the /media/ URL."""
    target_dir = media_root() / folder
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / file_name
    target.write_bytes(contents)
    logger.info(
        f"Stored {len(contents)} bytes ({mime_type}) at {target}",
        extra={"extra_data": {"folder": folder, "mime_type": mime_type}},
    )
    return f"{MEDIA_URL_PREFIX}{folder}/{file_name}"


def unique_file_name(extension: str) -> str:
    return f"{uuid.uuid4()}.{extension.lstrip('.')}"


def resolve_media_path(relative_path: str) -> Path | None:
    """Maps a /media/ relative path to a file inside the media root.

    Returns None for paths that escape the media root or do not exist.
    """
    root = media_root()
    candidate = (root / relative_path).resolve()
    if os.path.commonpath([root, candidate]) != str(root):
        return None
    if not candidate.is_file():
        return None
    return candidate
