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
"""The generation client used by the storyboard lifecycles."""

import threading
import time
from typing import Callable, List, Optional, Protocol

from config.default import Default
from models import gemini, veo
from models.requests import InlineImage, SceneDraft, VideoGenerationRequest
from models.storyboard import ProductAsset, Scene
from services.credentials import CredentialProvider

config = Default()

VIDEO_PROMPT = (
    "Cinematic video: {description}. Camera: {camera_angle}. "
    "Lighting: {lighting}. Product action: {product_action}. "
    "Keep the product's structure consistent. Professional quality."
)


class GenerationService(Protocol):
    def generate_scenes(
        self, plot: str, style: str, count: int, assets: List[ProductAsset]
    ) -> List[SceneDraft]: ...

    def regenerate_scene(
        self, plot: str, style: str, scene_number: int, current_description: str
    ) -> SceneDraft: ...

    def generate_image(self, scene: Scene, assets: List[ProductAsset]) -> str: ...

    def generate_video(
        self, scene: Scene, assets: List[ProductAsset], resolution: str, duration: int
    ) -> str: ...


def inline_images(assets: List[ProductAsset]) -> List[InlineImage]:
    """Image assets as inline request parts; video assets are never sent."""
    return [
        InlineImage(data=asset.data, mime_type=asset.mime_type)
        for asset in assets
        if asset.kind == "image"
    ]


def scene_draft(scene: Scene) -> SceneDraft:
    return SceneDraft(
        scene_number=scene.scene_number,
        description=scene.description,
        camera_angle=scene.camera_angle,
        lighting=scene.lighting,
        product_action=scene.product_action,
    )


def build_video_request(
    scene: Scene, assets: List[ProductAsset], resolution: str, duration: int
) -> VideoGenerationRequest:
    """Chooses the Veo model and mode for a scene.

    More than one product image uses the reference model with up to
    MAX_REFERENCE_IMAGES asset references at 720p. Otherwise the fast model
    runs with the single image, if any, as the first frame.
    """
    images = inline_images(assets)
    prompt = VIDEO_PROMPT.format(
        description=scene.description,
        camera_angle=scene.camera_angle,
        lighting=scene.lighting,
        product_action=scene.product_action,
    )
    if len(images) > 1:
        return VideoGenerationRequest(
            prompt=prompt,
            model_version_id=config.VEO_REFERENCE_MODEL_ID,
            mode="r2v",
            duration_seconds=duration,
            aspect_ratio=config.ASPECT_RATIO,
            resolution="720p",
            reference_images=images[: config.MAX_REFERENCE_IMAGES],
        )
    return VideoGenerationRequest(
        prompt=prompt,
        model_version_id=config.VEO_MODEL_ID,
        mode="i2v" if images else "t2v",
        duration_seconds=duration,
        aspect_ratio=config.ASPECT_RATIO,
        resolution=resolution,
        first_frame=images[0] if images else None,
    )


class GeminiGenerationService:
    """GenerationService backed by Gemini and Veo through google-genai."""

    def __init__(
        self,
        credentials: Optional[CredentialProvider] = None,
        sleep: Callable[[float], None] = time.sleep,
        cancel: Optional[threading.Event] = None,
    ):
        self._credentials = credentials or CredentialProvider()
        self._sleep = sleep
        self._cancel = cancel

    def generate_scenes(self, plot, style, count, assets):
        return gemini.generate_scenes(
            plot, style, count, inline_images(assets), api_key=self._credentials.api_key
        )

    def regenerate_scene(self, plot, style, scene_number, current_description):
        return gemini.regenerate_scene(
            plot,
            style,
            scene_number,
            current_description,
            api_key=self._credentials.api_key,
        )

    def generate_image(self, scene, assets):
        return gemini.generate_scene_image(
            scene_draft(scene), inline_images(assets), api_key=self._credentials.api_key
        )

    def generate_video(self, scene, assets, resolution, duration):
        request = build_video_request(scene, assets, resolution, duration)
        return veo.generate_video(
            request,
            api_key=self._credentials.api_key,
            sleep=self._sleep,
            cancel=self._cancel,
        )
