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

import json
import os
import sys
from unittest.mock import MagicMock, patch

import pytest
from google.genai import types

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from common.error_handling import AuthorizationError, EmptyResponseError, GenerationError
from common.utils import encode_base64
from config.gemini_models import get_gemini_model_config
from models import gemini
from models.requests import InlineImage, SceneDraft

SCENES_JSON = json.dumps(
    [
        {
            "sceneNumber": 1,
            "description": "A watch on a pedestal",
            "cameraAngle": "macro close-up",
            "lighting": "soft key light",
            "productAction": "the pedestal turns",
        },
        {
            "sceneNumber": 2,
            "description": "The dial catches the light",
            "cameraAngle": "dolly in",
            "lighting": "rim light",
            "productAction": "the hands sweep",
        },
    ]
)


def mock_client(mock_init_client, response):
    client = MagicMock()
    client.models.generate_content.return_value = response
    mock_init_client.return_value = client
    return client


@patch("models.gemini.init_client")
def test_generate_scenes_requests_schema_and_inline_images(mock_init_client):
    client = mock_client(mock_init_client, MagicMock(text=SCENES_JSON))
    images = [InlineImage(data=encode_base64(b"png-bytes"), mime_type="image/png")]

    drafts = gemini.generate_scenes("a watch", "macro, slow motion", 2, images, api_key="test-key")

    mock_init_client.assert_called_once_with("test-key")
    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == get_gemini_model_config(gemini.cfg.TEXT_MODEL_ID).model_name
    assert kwargs["config"].response_mime_type == "application/json"
    assert kwargs["config"].response_schema == gemini.SCENE_LIST_SCHEMA

    prompt, image_part = kwargs["contents"]
    assert "exactly 2 scenes" in prompt
    assert '"a watch"' in prompt
    assert image_part.inline_data.data == b"png-bytes"
    assert image_part.inline_data.mime_type == "image/png"

    assert [d.scene_number for d in drafts] == [1, 2]
    assert drafts[0].camera_angle == "macro close-up"
    assert drafts[1].product_action == "the hands sweep"


def test_scene_schema_uses_camel_case_names():
    assert set(gemini.SCENE_SCHEMA.properties) == {
        "sceneNumber",
        "description",
        "cameraAngle",
        "lighting",
        "productAction",
    }
    assert gemini.SCENE_LIST_SCHEMA.items == gemini.SCENE_SCHEMA


@pytest.mark.parametrize("text", [None, "", "not json", '{"sceneNumber": 1}'])
@patch("models.gemini.init_client")
def test_generate_scenes_without_parsable_text_raises(mock_init_client, text):
    mock_client(mock_init_client, MagicMock(text=text))
    with pytest.raises(EmptyResponseError):
        gemini.generate_scenes("plot", "style", 3, [])


@patch("models.gemini.init_client")
def test_sdk_errors_are_mapped(mock_init_client):
    client = MagicMock()
    client.models.generate_content.side_effect = RuntimeError("500 internal")
    mock_init_client.return_value = client
    with pytest.raises(GenerationError) as excinfo:
        gemini.generate_scenes("plot", "style", 3, [])
    assert not isinstance(excinfo.value, AuthorizationError)

    client.models.generate_content.side_effect = RuntimeError("404 Requested entity was not found.")
    with pytest.raises(AuthorizationError):
        gemini.generate_scenes("plot", "style", 3, [])


@patch("models.gemini.init_client")
def test_regenerate_scene_parses_single_object(mock_init_client):
    client = mock_client(
        mock_init_client,
        MagicMock(text=json.dumps(json.loads(SCENES_JSON)[1])),
    )

    draft = gemini.regenerate_scene("a watch", "macro", 2, "The dial catches the light")

    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["config"].response_schema == gemini.SCENE_SCHEMA
    assert "scene 2" in kwargs["contents"]
    assert "The dial catches the light" in kwargs["contents"]
    assert draft.lighting == "rim light"


def image_response(*parts):
    candidate = MagicMock()
    candidate.content.parts = list(parts)
    response = MagicMock()
    response.candidates = [candidate]
    return response


@patch("models.gemini.init_client")
def test_generate_scene_image_returns_first_inline_image(mock_init_client):
    text_part = MagicMock(inline_data=None)
    image_part = MagicMock(inline_data=types.Blob(data=b"frame", mime_type="image/png"))
    client = mock_client(mock_init_client, image_response(text_part, image_part))
    draft = SceneDraft(
        description="A watch", camera_angle="low angle", lighting="neon", product_action="spins"
    )

    data_url = gemini.generate_scene_image(draft, [])

    assert data_url == f"data:image/png;base64,{encode_base64(b'frame')}"
    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == get_gemini_model_config(gemini.cfg.IMAGE_MODEL_ID).model_name
    assert kwargs["config"].image_config.aspect_ratio == "16:9"
    prompt = kwargs["contents"][0]
    assert "CAMERA DIRECTION: low angle." in prompt
    assert "preserve the product's structure" in prompt


@patch("models.gemini.init_client")
def test_generate_scene_image_without_image_raises(mock_init_client):
    mock_client(mock_init_client, image_response(MagicMock(inline_data=None)))
    with pytest.raises(EmptyResponseError):
        gemini.generate_scene_image(SceneDraft(), [])


@patch("models.gemini.genai.Client")
def test_blank_key_is_rejected_without_building_a_client(mock_client_cls):
    with pytest.raises(AuthorizationError):
        gemini.generate_scenes("plot", "style", 3, [], api_key="")
    with pytest.raises(AuthorizationError):
        gemini.generate_scene_image(SceneDraft(scene_number=1), [], api_key=None)
    mock_client_cls.assert_not_called()


@patch("models.gemini.genai.Client")
def test_client_uses_the_key_as_given(mock_client_cls):
    gemini.init_client("session-key")
    mock_client_cls.assert_called_once_with(api_key="session-key")
