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

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class ModeOverride:
    """Defines specific overrides for a particular mode."""

    supported_durations: Optional[List[int]] = None
    resolutions: Optional[List[str]] = None


@dataclass
class VeoModelConfig:
    """Configuration for a specific VEO model version."""

    version_id: str
    model_name: str
    display_name: str
    supported_modes: List[str]
    resolutions: List[str]
    supported_durations: List[int]
    max_reference_images: int = 0
    mode_overrides: Optional[Dict[str, ModeOverride]] = None

    def durations_for(self, mode: str) -> List[int]:
        override = (self.mode_overrides or {}).get(mode)
        if override and override.supported_durations:
            return override.supported_durations
        return self.supported_durations

    def resolutions_for(self, mode: str) -> List[str]:
        override = (self.mode_overrides or {}).get(mode)
        if override and override.resolutions:
            return override.resolutions
        return self.resolutions


# This list is the single source of truth for the Veo models the storyboard uses.
VEO_MODELS: List[VeoModelConfig] = [
    VeoModelConfig(
        version_id="3.1-fast-preview",
        model_name="veo-3.1-fast-generate-preview",
        display_name="Veo 3.1 Fast Preview",
        supported_modes=["t2v", "i2v"],
        resolutions=["720p", "1080p"],
        supported_durations=[4, 6, 8],
    ),
    VeoModelConfig(
        version_id="3.1-preview",
        model_name="veo-3.1-generate-preview",
        display_name="Veo 3.1 Preview",
        supported_modes=["t2v", "i2v", "r2v"],
        resolutions=["720p", "1080p"],
        supported_durations=[4, 6, 8],
        max_reference_images=3,
        mode_overrides={
            "r2v": ModeOverride(supported_durations=[8], resolutions=["720p"]),
        },
    ),
]


def get_veo_model_config(version_id: str) -> Optional[VeoModelConfig]:
    """Finds and returns the configuration for a given VEO model version_id."""
    for model in VEO_MODELS:
        if model.version_id == version_id:
            return model
    return None


def resolve_duration(model: VeoModelConfig, mode: str, requested: int) -> int:
    """Largest supported duration not exceeding the request, else the shortest."""
    durations = sorted(model.durations_for(mode))
    fitting = [d for d in durations if d <= requested]
    return fitting[-1] if fitting else durations[0]


def resolve_resolution(model: VeoModelConfig, mode: str, requested: str) -> str:
    resolutions = model.resolutions_for(mode)
    return requested if requested in resolutions else resolutions[0]
