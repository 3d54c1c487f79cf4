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
"""Gemini calls for the storyboard: scene scripts and scene frames."""

from typing import List, Optional

from google import genai
from google.genai import types
from pydantic import TypeAdapter, ValidationError

from common.analytics import get_logger, track_model_call
from common.error_handling import (
    AuthorizationError,
    EmptyResponseError,
    GenerationError,
    as_generation_error,
)
from common.utils import decode_base64, encode_base64, to_data_url
from config.default import Default
from config.gemini_models import get_gemini_model_config
from config.messages import message
from models.requests import InlineImage, SceneDraft

cfg = Default()

logger = get_logger(__name__)

SCRIPT_PROMPT = """You are a professional film director and storyboard artist.
Plot outline: "{plot}"
Camera and shot style guide: "{style}"

Write a detailed, professional storyboard with exactly {count} scenes as JSON.
Requirements:
1. "cameraAngle": use professional cinematography terms (close-up, high angle, low angle, dolly in, dolly out, orbit shot and so on).
2. "description": describe the visual composition, focusing on the actors and the environment.
3. "productAction": describe in detail where the product sits in the frame or how it moves.
4. If product reference images are provided, analyze their structure and design every scene so that it shows off the product's structural features.
Write every text field in {language}.
"""

REGENERATE_PROMPT = """You are a professional film director and storyboard artist.
Overall plot outline: "{plot}"
Style guide: "{style}"

Redesign the script of scene {scene_number}. Its current content is "{current_description}"; provide a new version that is more creative or closer to the style guide.
Requirements:
1. "cameraAngle": use professional cinematography terms.
2. "description": the visual composition.
3. "productAction": how the product moves.
Write every text field in {language}. Return the JSON object for this one scene only.
"""

FRAME_PROMPT = """STORYBOARD PRODUCTION FRAME.
CAMERA DIRECTION: {camera_angle}.
SCENE DESCRIPTION: {description}.
LIGHTING DESIGN: {lighting}.
PRODUCT SPECIFICS: {product_action}.

TECHNICAL STIPULATIONS:
- Strictly render from the angle: {camera_angle}.
- Please preserve the product's structure, branding, and shape from the provided reference images.
- Style: Clean cinematic concept art, highly legible for production crews.
"""

SCENE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "sceneNumber": types.Schema(type=types.Type.INTEGER),
        "description": types.Schema(type=types.Type.STRING),
        "cameraAngle": types.Schema(type=types.Type.STRING),
        "lighting": types.Schema(type=types.Type.STRING),
        "productAction": types.Schema(type=types.Type.STRING),
    },
    required=["sceneNumber", "description", "cameraAngle", "lighting", "productAction"],
)

SCENE_LIST_SCHEMA = types.Schema(type=types.Type.ARRAY, items=SCENE_SCHEMA)

_scene_list_adapter = TypeAdapter(List[SceneDraft])


def init_client(api_key: Optional[str]) -> genai.Client:
    """Initializes the GenAI client with the session's key.

    A blank key means the session has none, so no client is built.
    """
    if not api_key:
        raise AuthorizationError("No Gemini API key is selected for this session.")
    return genai.Client(api_key=api_key)


def _model_name(version_id: str) -> str:
    model_config = get_gemini_model_config(version_id)
    if not model_config:
        raise GenerationError(f"Unsupported Gemini model: {version_id}")
    return model_config.model_name


def _image_parts(images: List[InlineImage]) -> list:
    return [
        types.Part.from_bytes(data=decode_base64(image.data), mime_type=image.mime_type)
        for image in images
    ]


def build_script_prompt(plot: str, style: str, count: int) -> str:
    return SCRIPT_PROMPT.format(
        plot=plot, style=style, count=count, language=message("language_name")
    )


def build_regenerate_prompt(
    plot: str, style: str, scene_number: int, current_description: str
) -> str:
    return REGENERATE_PROMPT.format(
        plot=plot,
        style=style,
        scene_number=scene_number,
        current_description=current_description,
        language=message("language_name"),
    )


def build_frame_prompt(draft: SceneDraft) -> str:
    return FRAME_PROMPT.format(
        camera_angle=draft.camera_angle,
        description=draft.description,
        lighting=draft.lighting,
        product_action=draft.product_action,
    )


def parse_scene_list(text: Optional[str]) -> List[SceneDraft]:
    """Parses the script model's JSON array into drafts."""
    if not text:
        raise EmptyResponseError("The model returned no script.")
    try:
        return _scene_list_adapter.validate_json(text)
    except ValidationError as e:
        raise EmptyResponseError(f"The model returned an unreadable script: {e}") from e


def parse_scene(text: Optional[str]) -> SceneDraft:
    """Parses a single scene object."""
    if not text:
        raise EmptyResponseError("The model returned no scene.")
    try:
        return SceneDraft.model_validate_json(text)
    except ValidationError as e:
        raise EmptyResponseError(f"The model returned an unreadable scene: {e}") from e


def generate_scenes(
    plot: str,
    style: str,
    count: int,
    images: List[InlineImage],
    api_key: Optional[str] = None,
) -> List[SceneDraft]:
    """Asks the text model for a storyboard of `count` scenes.

    Every reference image is attached inline so the model can design the
    shots around the product's structure.

    Raises:
        EmptyResponseError: The model returned no parsable script.
        GenerationError: Any other failure of the call.
    """
    model_name = _model_name(cfg.TEXT_MODEL_ID)
    contents = [build_script_prompt(plot, style, count), *_image_parts(images)]
    logger.info(f"Generating {count} scenes with {model_name} ({len(images)} reference images)")

    with track_model_call(model_name, operation="generate_scenes", scene_count=count):
        try:
            response = init_client(api_key).models.generate_content(
                model=model_name,
                contents=contents,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=SCENE_LIST_SCHEMA,
                ),
            )
        except Exception as e:
            raise as_generation_error(e) from e
        drafts = parse_scene_list(response.text)

    logger.info(f"Script model returned {len(drafts)} scenes")
    return drafts


def regenerate_scene(
    plot: str,
    style: str,
    scene_number: int,
    current_description: str,
    api_key: Optional[str] = None,
) -> SceneDraft:
    """Asks the text model for a new version of one scene."""
    model_name = _model_name(cfg.TEXT_MODEL_ID)
    prompt = build_regenerate_prompt(plot, style, scene_number, current_description)

    with track_model_call(model_name, operation="regenerate_scene", scene_number=scene_number):
        try:
            response = init_client(api_key).models.generate_content(
                model=model_name,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=SCENE_SCHEMA,
                ),
            )
        except Exception as e:
            raise as_generation_error(e) from e
        return parse_scene(response.text)


def first_inline_image(response) -> Optional[types.Blob]:
    for candidate in response.candidates or []:
        if not candidate.content:
            continue
        for part in candidate.content.parts or []:
            if part.inline_data and part.inline_data.data:
                return part.inline_data
    return None


def generate_scene_image(
    draft: SceneDraft,
    images: List[InlineImage],
    api_key: Optional[str] = None,
) -> str:
    """Renders one storyboard frame and returns it as a data URL.

    Raises:
        EmptyResponseError: The response carried no inline image.
        GenerationError: Any other failure of the call.
    """
    model_name = _model_name(cfg.IMAGE_MODEL_ID)
    contents = [build_frame_prompt(draft), *_image_parts(images)]

    with track_model_call(model_name, operation="generate_scene_image"):
        try:
            response = init_client(api_key).models.generate_content(
                model=model_name,
                contents=contents,
                config=types.GenerateContentConfig(
                    response_modalities=["TEXT", "IMAGE"],
                    image_config=types.ImageConfig(aspect_ratio=cfg.ASPECT_RATIO),
                ),
            )
        except Exception as e:
            raise as_generation_error(e) from e

        blob = first_inline_image(response)
        if blob is None:
            raise EmptyResponseError("The image model returned no frame.")

    return to_data_url(blob.mime_type or "image/png", encode_base64(blob.data))
