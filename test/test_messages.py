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
import string
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config.messages import FIELD_LABELS, MESSAGES, field_label, message


def placeholders(template):
    return {name for _, name, _, _ in string.Formatter().parse(template) if name}


def test_catalogs_define_the_same_keys_and_placeholders():
    english, chinese = MESSAGES["en"], MESSAGES["zh"]
    assert set(english) == set(chinese)
    for key in english:
        assert placeholders(english[key]) == placeholders(chinese[key]), key
    assert set(FIELD_LABELS["en"]) == set(FIELD_LABELS["zh"])


def test_lookup_by_locale_with_english_fallback():
    assert message("scene_deleted", locale="en", number=3) != message("scene_deleted", locale="zh", number=3)
    assert message("session_started", locale="fr") == message("session_started", locale="en")
    assert field_label("lighting", locale="zh") == FIELD_LABELS["zh"]["lighting"]
