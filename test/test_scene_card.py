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

from components.scene_card.scene_card import (
    busy_messages,
    field_key,
    parse_field_key,
    scene_id_from_key,
)
from config.messages import message
from models.storyboard import Scene


def test_field_key_round_trip_keeps_ids_with_separators():
    key = field_key("scene_1", "camera_angle")
    assert parse_field_key(key) == ("scene_1", "camera_angle")


def test_scene_id_from_button_key():
    assert scene_id_from_key("video_3f2a_b") == "3f2a_b"


def test_idle_scene_shows_no_status():
    assert busy_messages(Scene(id="a")) == []


def test_text_regeneration_has_its_own_status():
    scene = Scene(id="a", is_generating=True, generating_task="text")
    assert busy_messages(scene) == [message("rewriting_text")]


def test_image_and_video_statuses_show_together():
    scene = Scene(id="a", is_generating=True, generating_task="image", is_video_generating=True)
    assert busy_messages(scene) == [message("rendering_image"), message("rendering_video")]
