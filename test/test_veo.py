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
import threading
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
import requests

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from common import storage
from common.error_handling import (
    AuthorizationError,
    GenerationError,
    MissingResultError,
    VideoPollingTimeoutError,
)
from common.utils import encode_base64
from config.veo_models import get_veo_model_config, resolve_duration
from models import veo
from models.requests import InlineImage, VideoGenerationRequest

RESULT_URI = "https://generativelanguage.googleapis.com/v1beta/files/abc:download?alt=media"


def operation(done=True, error=None, uri=RESULT_URI):
    videos = [SimpleNamespace(video=SimpleNamespace(uri=uri))] if uri else []
    return SimpleNamespace(
        name="operations/123",
        done=done,
        error=error,
        response=SimpleNamespace(generated_videos=videos),
    )


def image(payload=b"png"):
    return InlineImage(data=encode_base64(payload), mime_type="image/png")


def request(mode="t2v", duration=5, resolution="1080p", **kwargs):
    model = "3.1-preview" if mode == "r2v" else "3.1-fast-preview"
    return VideoGenerationRequest(
        prompt="Cinematic video: a watch.",
        model_version_id=model,
        mode=mode,
        duration_seconds=duration,
        resolution=resolution,
        **kwargs,
    )


@pytest.fixture
def media_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(storage.config, "MEDIA_DIR", str(tmp_path))
    return tmp_path


@pytest.mark.parametrize("requested, expected", [(5, 4), (10, 8), (15, 8), (2, 4)])
def test_fast_model_duration_mapping(requested, expected):
    model = get_veo_model_config("3.1-fast-preview")
    assert resolve_duration(model, "i2v", requested) == expected


@pytest.mark.parametrize("requested", [5, 10, 15])
def test_reference_mode_is_always_eight_seconds_at_720p(requested):
    config = veo.build_generation_config(
        request("r2v", duration=requested, reference_images=[image(b"a"), image(b"b")])
    )
    assert config.duration_seconds == 8
    assert config.resolution == "720p"
    assert len(config.reference_images) == 2
    assert all(ref.image.mime_type == "image/png" for ref in config.reference_images)


def test_reference_images_are_capped_at_three():
    config = veo.build_generation_config(
        request("r2v", reference_images=[image(bytes([i])) for i in range(5)])
    )
    assert len(config.reference_images) == 3


def test_fast_model_keeps_requested_resolution():
    config = veo.build_generation_config(request("t2v", resolution="1080p"))
    assert config.resolution == "1080p"
    assert config.aspect_ratio == "16:9"
    assert config.number_of_videos == 1
    assert not config.reference_images


def test_unknown_model_is_rejected():
    with pytest.raises(GenerationError):
        veo.build_generation_config(
            VideoGenerationRequest(prompt="x", model_version_id="0.1", duration_seconds=5)
        )


def test_poll_operation_sleeps_between_polls():
    client = MagicMock()
    client.operations.get.side_effect = [operation(done=False), operation(done=True)]
    sleeps = []

    result = veo.poll_operation(client, operation(done=False), sleep=sleeps.append, interval=10, max_attempts=5)

    assert result.done
    assert sleeps == [10, 10]
    assert client.operations.get.call_count == 2


def test_poll_operation_gives_up_after_budget():
    client = MagicMock()
    client.operations.get.return_value = operation(done=False)

    with pytest.raises(VideoPollingTimeoutError):
        veo.poll_operation(client, operation(done=False), sleep=lambda _: None, interval=10, max_attempts=3)
    assert client.operations.get.call_count == 3


def test_poll_operation_can_be_cancelled():
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(GenerationError):
        veo.poll_operation(MagicMock(), operation(done=False), sleep=lambda _: None, cancel=cancel)


def test_result_uri_errors():
    with pytest.raises(MissingResultError):
        veo.result_uri(operation(uri=None))
    with pytest.raises(MissingResultError):
        veo.result_uri(operation(error={"code": 13, "message": "internal"}))
    with pytest.raises(AuthorizationError):
        veo.result_uri(operation(error={"code": 404, "message": "Requested entity was not found."}))


@patch("models.veo.requests.get")
@patch("models.veo.init_client")
def test_generate_video_downloads_with_key_and_stores(mock_init_client, mock_get, media_dir):
    client = MagicMock()
    client.models.generate_videos.return_value = operation(done=False)
    client.operations.get.return_value = operation(done=True)
    mock_init_client.return_value = client
    mock_get.return_value = MagicMock(content=b"mp4-bytes", raise_for_status=MagicMock())

    url = veo.generate_video(request("i2v", first_frame=image()), api_key="test-key", sleep=lambda _: None)

    assert url.startswith("/media/videos/") and url.endswith(".mp4")
    stored = media_dir / url[len("/media/"):]
    assert stored.read_bytes() == b"mp4-bytes"

    mock_get.assert_called_once()
    assert mock_get.call_args.args[0] == RESULT_URI
    assert mock_get.call_args.kwargs["params"] == {"key": "test-key"}

    kwargs = client.models.generate_videos.call_args.kwargs
    assert kwargs["model"] == "veo-3.1-fast-generate-preview"
    assert kwargs["image"].image_bytes == b"png"
    assert kwargs["config"].duration_seconds == 4


@patch("models.veo.init_client")
def test_generate_video_maps_rejected_key(mock_init_client, media_dir):
    client = MagicMock()
    client.models.generate_videos.side_effect = RuntimeError("404 NOT_FOUND. Requested entity was not found.")
    mock_init_client.return_value = client

    with pytest.raises(AuthorizationError):
        veo.generate_video(request(), api_key="stale-key", sleep=lambda _: None)


@patch("models.veo.init_client")
def test_generate_video_without_uri_is_missing_result(mock_init_client, media_dir):
    client = MagicMock()
    client.models.generate_videos.return_value = operation(uri=None)
    mock_init_client.return_value = client

    with pytest.raises(MissingResultError):
        veo.generate_video(request(), api_key="k", sleep=lambda _: None)


@patch("models.veo.requests.get")
@patch("models.veo.init_client")
def test_failed_download_is_a_generation_error(mock_init_client, mock_get, media_dir):
    client = MagicMock()
    client.models.generate_videos.return_value = operation()
    mock_init_client.return_value = client
    mock_get.side_effect = requests.exceptions.ConnectionError("reset")

    with pytest.raises(GenerationError):
        veo.generate_video(request(), api_key="k", sleep=lambda _: None)
    assert list(media_dir.iterdir()) == []


@patch("models.veo.genai.Client")
def test_generate_video_without_key_never_submits(mock_client_cls, media_dir):
    with pytest.raises(AuthorizationError):
        veo.generate_video(request(), api_key="", sleep=lambda _: None)
    mock_client_cls.assert_not_called()
