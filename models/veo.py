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

import threading
import time
from typing import Callable, Optional

import requests
from google import genai
from google.genai import types

from common.analytics import get_logger, track_model_call
from common.error_handling import (
    AuthorizationError,
    GenerationError,
    MissingResultError,
    VideoPollingTimeoutError,
    as_generation_error,
    is_authorization_error,
)
from common.storage import store_media, unique_file_name
from common.utils import decode_base64
from config.default import Default
from config.veo_models import get_veo_model_config, resolve_duration, resolve_resolution
from models.requests import InlineImage, VideoGenerationRequest

config = Default()

logger = get_logger(__name__)

VIDEO_FOLDER = "videos"


def init_client(api_key: Optional[str]) -> genai.Client:
    """Initializes the GenAI client with the session's key."""
    if not api_key:
        raise AuthorizationError("No Gemini API key is selected for this session.")
    return genai.Client(api_key=api_key)


def _to_image(image: InlineImage) -> types.Image:
    return types.Image(image_bytes=decode_base64(image.data), mime_type=image.mime_type)


def build_generation_config(request: VideoGenerationRequest) -> types.GenerateVideosConfig:
    """Builds the Veo config, clamping duration and resolution to the model."""
    model_config = get_veo_model_config(request.model_version_id)
    if not model_config:
        raise GenerationError(
            f"Unsupported VEO model version: {request.model_version_id}"
        )
    if request.mode not in model_config.supported_modes:
        raise GenerationError(
            f"Mode {request.mode} is not supported by model: {request.model_version_id}"
        )

    gen_config_args = {
        "aspect_ratio": request.aspect_ratio,
        "number_of_videos": request.video_count,
        "duration_seconds": resolve_duration(model_config, request.mode, request.duration_seconds),
        "resolution": resolve_resolution(model_config, request.mode, request.resolution),
    }

    if request.mode == "r2v":
        references = request.reference_images[: model_config.max_reference_images]
        gen_config_args["reference_images"] = [
            types.VideoGenerationReferenceImage(
                image=_to_image(ref),
                reference_type="asset",
            )
            for ref in references
        ]

    return types.GenerateVideosConfig(**gen_config_args)


def poll_operation(
    client: genai.Client,
    operation,
    sleep: Callable[[float], None] = time.sleep,
    interval: Optional[float] = None,
    max_attempts: Optional[int] = None,
    cancel: Optional[threading.Event] = None,
):
    """Polls a long-running video operation until it is done.

    Raises:
        VideoPollingTimeoutError: The operation is still running after
            `max_attempts` polls.
        GenerationError: `cancel` was set while waiting.
    """
    interval = config.VIDEO_POLL_INTERVAL_SECONDS if interval is None else interval
    max_attempts = config.VIDEO_MAX_POLL_ATTEMPTS if max_attempts is None else max_attempts

    attempts = 0
    while not operation.done:
        if attempts >= max_attempts:
            raise VideoPollingTimeoutError(
                f"Video generation did not finish after {attempts} polls."
            )
        if cancel is not None and cancel.is_set():
            raise GenerationError("Video generation was cancelled.")
        sleep(interval)
        attempts += 1
        operation = client.operations.get(operation)
        logger.info(f"Operation in progress: {operation.name} (poll {attempts})")
    return operation


def result_uri(operation) -> str:
    """Returns the first generated video's URI from a finished operation."""
    if operation.error:
        error_details = str(operation.error)
        logger.info(f"Video generation failed with error: {error_details}")
        if is_authorization_error(error_details):
            raise AuthorizationError(error_details)
        raise MissingResultError(f"API Error: {error_details}")

    response = operation.response
    videos = getattr(response, "generated_videos", None) if response else None
    if not videos or not videos[0].video or not videos[0].video.uri:
        raise MissingResultError(
            "API reported success but no video URI was found in the response."
        )
    return videos[0].video.uri


def download_video(uri: str, api_key: str) -> bytes:
    """Fetches the generated video; the result URI needs the API key."""
    try:
        response = requests.get(
            uri,
            params={"key": api_key},
            timeout=config.DOWNLOAD_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise GenerationError(f"Failed to download the generated video: {e}") from e
    return response.content


def generate_video(
    request: VideoGenerationRequest,
    api_key: Optional[str] = None,
    sleep: Callable[[float], None] = time.sleep,
    cancel: Optional[threading.Event] = None,
) -> str:
    """Generates one scene video and returns its /media/ URL.

    Handles text-to-video, first-frame image-to-video and asset
    reference-to-video. The call is submitted, polled on a fixed interval,
    downloaded with the API key and stored locally.
    """
    model_config = get_veo_model_config(request.model_version_id)
    model_name = model_config.model_name if model_config else request.model_version_id

    with track_model_call(model_name, operation="generate_video", mode=request.mode):
        try:
            gen_config = build_generation_config(request)
            image_input = None
            if request.mode == "i2v" and request.first_frame:
                logger.info("Mode: Image-to-Video")
                image_input = _to_image(request.first_frame)
            elif request.mode == "r2v":
                logger.info(f"Mode: Reference-to-Video ({len(gen_config.reference_images)} assets)")
            else:
                logger.info("Mode: Text-to-Video")

            logger.info(f"Calling generate_videos with model: {model_name}")
            client = init_client(api_key)
            operation = client.models.generate_videos(
                model=model_name,
                prompt=request.prompt,
                image=image_input,
                config=gen_config,
            )

            logger.info("Polling video generation operation...")
            operation = poll_operation(client, operation, sleep=sleep, cancel=cancel)
            uri = result_uri(operation)
            contents = download_video(uri, api_key)
            video_url = store_media(VIDEO_FOLDER, unique_file_name("mp4"), "video/mp4", contents)
        except GenerationError:
            raise
        except Exception as e:
            logger.info(f"An unexpected error occurred in generate_video: {e}")
            raise as_generation_error(e) from e

    logger.info(f"Stored generated video at {video_url}")
    return video_url
