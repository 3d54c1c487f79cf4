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

import pytest
import os
import sys

# Setup sys.path to allow imports from the parent directory.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config.default import Default
from models import gemini
from models.storyboard import Scene
from services.credentials import CredentialProvider
from services.generation_service import GeminiGenerationService

config = Default()

requires_key = pytest.mark.skipif(
    not config.GEMINI_API_KEY, reason="GEMINI_API_KEY is not set"
)


@pytest.mark.integration
@requires_key
def test_live_script_generation():
    """Validates that the text model returns a well-formed three scene script."""
    drafts = gemini.generate_scenes(
        "a watch on a rotating pedestal", "macro, slow motion", 3, []
    )

    assert 1 <= len(drafts) <= 3
    for draft in drafts:
        assert draft.description
        assert draft.camera_angle
    print(f"SUCCESS: {len(drafts)} scenes, first: {drafts[0].description}")


@pytest.mark.integration
@requires_key
def test_live_scene_video(tmp_path, monkeypatch):
    """Validates a text-to-video render end to end, including the download."""
    from common import storage

    monkeypatch.setattr(storage.config, "MEDIA_DIR", str(tmp_path))
    service = GeminiGenerationService(CredentialProvider(config.GEMINI_API_KEY))
    scene = Scene(
        id="live",
        scene_number=1,
        description="A steel watch turns slowly on a black pedestal",
        camera_angle="macro orbit shot",
        lighting="single soft key light",
        product_action="the watch rotates a quarter turn",
    )

    video_url = service.generate_video(scene, [], "720p", 5)

    assert video_url.startswith("/media/videos/")
    assert (tmp_path / video_url[len("/media/"):]).stat().st_size > 0
    print(f"SUCCESS: video stored at {video_url}")


if __name__ == "__main__":
    pytest.main([__file__, "-m", "integration", "-s"])
