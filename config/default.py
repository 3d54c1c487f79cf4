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
"""Application defaults, read from the environment."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv(override=True)


def _int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return int(value)


@dataclass
class Default:
    """Defaults class"""

    # Gemini API
    GEMINI_API_KEY: str = os.environ.get("GEMINI_API_KEY", "")
    TEXT_MODEL_ID: str = os.environ.get("TEXT_MODEL_ID", "2.5-flash")
    IMAGE_MODEL_ID: str = os.environ.get("IMAGE_MODEL_ID", "2.5-flash-image")

    # Veo
    VEO_MODEL_ID: str = os.environ.get("VEO_MODEL_ID", "3.1-fast-preview")
    VEO_REFERENCE_MODEL_ID: str = os.environ.get("VEO_REFERENCE_MODEL_ID", "3.1-preview")
    VIDEO_POLL_INTERVAL_SECONDS: int = _int_env("VIDEO_POLL_INTERVAL_SECONDS", 10)
    # 90 polls of 10s is 15 minutes; Veo usually answers in 1-3.
    VIDEO_MAX_POLL_ATTEMPTS: int = _int_env("VIDEO_MAX_POLL_ATTEMPTS", 90)
    DOWNLOAD_TIMEOUT_SECONDS: int = _int_env("DOWNLOAD_TIMEOUT_SECONDS", 120)

    # Storyboard
    ASPECT_RATIO: str = "16:9"
    DEFAULT_SCENE_COUNT: int = 5
    MIN_SCENE_COUNT: int = 1
    MAX_SCENE_COUNT: int = 50
    MAX_REFERENCE_IMAGES: int = 3

    # Export / storage
    EXPORT_STAGGER_MS: int = _int_env("EXPORT_STAGGER_MS", 500)
    MEDIA_DIR: str = os.environ.get("MEDIA_DIR", "media")

    # UI
    UI_LOCALE: str = os.environ.get("UI_LOCALE", "en")
    APP_PORT: int = _int_env("PORT", 8080)
