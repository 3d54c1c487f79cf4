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

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from common.utils import encode_base64
from models.storyboard import ProductAsset, Scene
from services.generation_service import build_video_request, inline_images, scene_draft


def asset(kind="image", name="a.png", payload=b"img"):
    return ProductAsset(
        id=name,
        kind=kind,
        data=encode_base64(payload),
        mime_type="video/mp4" if kind == "video" else "image/png",
        name=name,
    )


SCENE = Scene(
    id="s1",
    scene_number=1,
    description="A watch on a pedestal",
    camera_angle="orbit shot",
    lighting="soft light",
    product_action="the watch turns",
)


def test_video_assets_are_never_sent_as_images():
    images = inline_images([asset("video", "clip.mp4"), asset("image", "a.png")])
    assert [image.mime_type for image in images] == ["image/png"]


def test_no_images_is_text_to_video_on_the_fast_model():
    request = build_video_request(SCENE, [asset("video", "clip.mp4")], "1080p", 10)
    assert request.mode == "t2v"
    assert request.model_version_id == "3.1-fast-preview"
    assert request.resolution == "1080p"
    assert request.first_frame is None
    assert request.duration_seconds == 10


def test_single_image_is_the_first_frame():
    request = build_video_request(SCENE, [asset()], "1080p", 5)
    assert request.mode == "i2v"
    assert request.first_frame.data == encode_base64(b"img")
    assert request.resolution == "1080p"
    assert request.reference_images == []


def test_several_images_use_asset_references_at_720p():
    assets = [asset(name=f"{i}.png", payload=bytes([i])) for i in range(5)]
    request = build_video_request(SCENE, assets, "1080p", 15)
    assert request.mode == "r2v"
    assert request.model_version_id == "3.1-preview"
    assert request.resolution == "720p"
    assert len(request.reference_images) == 3
    assert request.first_frame is None


def test_video_prompt_carries_all_scene_fields():
    request = build_video_request(SCENE, [], "720p", 5)
    for text in ("A watch on a pedestal", "orbit shot", "soft light", "the watch turns"):
        assert text in request.prompt


def test_scene_draft_copies_text_fields():
    draft = scene_draft(SCENE)
    assert draft.scene_number == 1
    assert draft.camera_angle == "orbit shot"
    assert draft.product_action == "the watch turns"
