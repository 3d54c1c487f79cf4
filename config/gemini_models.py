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

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class GeminiModelConfig:
    """Configuration for a Gemini model used by the storyboard."""

    version_id: str  # Short ID for UI/Logic (e.g., "2.5-flash")
    model_name: str  # Full API Model ID (e.g., "gemini-2.5-flash")
    display_name: str

    # Capabilities
    max_input_images: int
    outputs_images: bool = False
    supported_aspect_ratios: List[str] = field(
        default_factory=lambda: ["1:1", "3:4", "4:3", "9:16", "16:9"]
    )


# Single source of truth
GEMINI_MODELS: List[GeminiModelConfig] = [
    GeminiModelConfig(
        version_id="2.5-flash",
        model_name="gemini-2.5-flash",
        display_name="Gemini 2.5 Flash",
        max_input_images=16,
    ),
    GeminiModelConfig(
        version_id="3-flash-preview",
        model_name="gemini-3-flash-preview",
        display_name="Gemini 3 Flash Preview",
        max_input_images=16,
    ),
    GeminiModelConfig(
        version_id="2.5-flash-image",
        model_name="gemini-2.5-flash-image",
        display_name="Gemini 2.5 Flash Image",
        max_input_images=3,
        outputs_images=True,
    ),
    GeminiModelConfig(
        version_id="3-pro-image-preview",
        model_name="gemini-3-pro-image-preview",
        display_name="Gemini 3 Pro Image Preview",
        max_input_images=6,
        outputs_images=True,
    ),
]


def get_gemini_model_config(model_name_or_version: str) -> Optional[GeminiModelConfig]:
    """Finds config by either full model name or short version ID."""
    for model in GEMINI_MODELS:
        if (
            model.model_name == model_name_or_version
            or model.version_id == model_name_or_version
        ):
            return model
    return None
