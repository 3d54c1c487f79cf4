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

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SceneDraft(BaseModel):
    """One scene as returned by the script model.

    The model speaks camelCase (`sceneNumber`, `cameraAngle`, ...); fields
    the model leaves out default to empty text.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    scene_number: Optional[int] = None
    description: str = ""
    camera_angle: str = ""
    lighting: str = ""
    product_action: str = ""


class InlineImage(BaseModel):
    """A reference image sent inline with a request."""

    data: str  # base64, no data URL prefix
    mime_type: str


class VideoGenerationRequest(BaseModel):
    """
    Defines the contract for a scene video generation request.
    Built by the generation service from a scene and the product assets.
    """

    prompt: str
    model_version_id: str
    mode: str = "t2v"  # t2v, i2v or r2v
    duration_seconds: int = Field(..., gt=0)
    aspect_ratio: str = "16:9"
    resolution: str = "720p"
    video_count: int = 1

    # For I2V
    first_frame: Optional[InlineImage] = None

    # For R2V
    reference_images: List[InlineImage] = Field(default_factory=list)
