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
"""Per-scene generation lifecycles.

Each function turns one user intent into a sequence of events: storyboard
commands to apply, `Alert`s to show, and `CredentialRequired` when the
credential picker must open. The page applies every command as it arrives,
so a scene's busy flag is visible while the model call runs.
"""

import dataclasses
from dataclasses import dataclass
from typing import Callable, Iterator

from common.analytics import get_logger
from common.error_handling import AuthorizationError
from config.messages import message
from models.storyboard import (
    CredentialSelected,
    SceneImageGenerated,
    SceneImageGenerationFailed,
    SceneImageGenerationStarted,
    SceneTextRegenerated,
    SceneTextRegenerationFailed,
    SceneTextRegenerationStarted,
    SceneVideoGenerated,
    SceneVideoGenerationFailed,
    SceneVideoGenerationStarted,
    ScriptGenerated,
    ScriptGenerationFailed,
    ScriptGenerationStarted,
    StoryboardState,
    apply,
    find_scene,
)
from services.credentials import save_session_credentials, session_credentials
from services.generation_service import GenerationService

logger = get_logger(__name__)


@dataclass(frozen=True)
class Alert:
    message: str


@dataclass(frozen=True)
class CredentialRequired:
    pass


# A storyboard command, an Alert or a CredentialRequired.
LifecycleEvent = object


def generate_script(state: StoryboardState, service: GenerationService) -> Iterator[LifecycleEvent]:
    """Replaces the storyboard with a freshly generated script."""
    if not state.plot.strip() or state.is_generating_text:
        return

    yield ScriptGenerationStarted()
    try:
        drafts = service.generate_scenes(state.plot, state.style, state.scene_count, state.assets)
    except Exception as e:
        logger.error(f"Script generation failed: {e}")
        yield ScriptGenerationFailed()
        yield Alert(message("alert_script_failed"))
        return
    yield ScriptGenerated(tuple(drafts))


def regenerate_text(
    state: StoryboardState, scene_id: str, service: GenerationService
) -> Iterator[LifecycleEvent]:
    """Rewrites one scene's text; the new text invalidates its media."""
    scene = find_scene(state, scene_id)
    if scene is None or scene.is_generating:
        return

    yield SceneTextRegenerationStarted(scene_id)
    try:
        draft = service.regenerate_scene(
            state.plot, state.style, scene.scene_number, scene.description
        )
    except Exception as e:
        # Only the history log records this failure.
        logger.error(f"Text regeneration failed for scene {scene.scene_number}: {e}")
        yield SceneTextRegenerationFailed(scene_id)
        return
    yield SceneTextRegenerated(scene_id, draft)


def generate_image(
    state: StoryboardState, scene_id: str, service: GenerationService
) -> Iterator[LifecycleEvent]:
    scene = find_scene(state, scene_id)
    if scene is None or scene.is_generating:
        return

    yield SceneImageGenerationStarted(scene_id)
    try:
        image_url = service.generate_image(scene, state.assets)
    except Exception as e:
        logger.error(f"Image generation failed for scene {scene.scene_number}: {e}")
        yield SceneImageGenerationFailed(scene_id)
        yield Alert(message("alert_image_failed"))
        return
    yield SceneImageGenerated(scene_id, image_url)


def generate_video(
    state: StoryboardState, scene_id: str, service: GenerationService
) -> Iterator[LifecycleEvent]:
    """Renders one scene video.

    Without a selected credential the endpoint is never called; the caller
    gets `CredentialRequired` instead. An authorization failure revokes the
    credential flag.
    """
    if not state.has_credential:
        yield CredentialRequired()
        return
    scene = find_scene(state, scene_id)
    if scene is None or scene.is_video_generating:
        return

    yield SceneVideoGenerationStarted(scene_id)
    try:
        video_url = service.generate_video(scene, state.assets, state.resolution, state.duration)
    except AuthorizationError as e:
        logger.error(f"Video generation was not authorized for scene {scene.scene_number}: {e}")
        yield SceneVideoGenerationFailed(scene_id, authorization_revoked=True)
        yield Alert(message("alert_authorization"))
        return
    except Exception as e:
        logger.error(f"Video generation failed for scene {scene.scene_number}: {e}")
        yield SceneVideoGenerationFailed(scene_id)
        yield Alert(message("alert_video_failed"))
        return
    yield SceneVideoGenerated(scene_id, video_url)


def generate_all_videos(
    current: Callable[[], StoryboardState], service: GenerationService
) -> Iterator[LifecycleEvent]:
    """Renders every scene that has no video yet, one at a time in ordinal order.

    `current` returns the live storyboard; it is re-read before each scene so
    a video that landed meanwhile is not requested again. The run stops once
    the credential is gone.
    """
    scene_ids = [scene.id for scene in current().scenes]
    for scene_id in scene_ids:
        state = current()
        scene = find_scene(state, scene_id)
        if scene is None or scene.media.has_video:
            continue
        if not state.has_credential:
            yield CredentialRequired()
            return
        yield from generate_video(state, scene_id, service)


def apply_event(page, event: LifecycleEvent) -> None:
    """Applies one lifecycle event to a session's page state.

    Alerts open the error dialog, `CredentialRequired` opens the credential
    picker, and commands go through the storyboard reducer. A video failure
    that revoked the credential also forgets the session's key.
    """
    if isinstance(event, Alert):
        page.error_message = event.message
        page.show_error_dialog = True
    elif isinstance(event, CredentialRequired):
        page.show_credential_dialog = True
    else:
        page.storyboard = apply(page.storyboard, event)
        if isinstance(event, SceneVideoGenerationFailed) and event.authorization_revoked:
            credentials = session_credentials(page)
            credentials.revoke()
            save_session_credentials(page, credentials)


def sync_credential(page) -> None:
    """Mirrors the session's key into the storyboard when the page loads."""
    has_credential = session_credentials(page).has_credential()
    page.storyboard = dataclasses.replace(page.storyboard, has_credential=has_credential)
    page.show_credential_dialog = not has_credential


def select_credential(page, api_key: str) -> bool:
    """Stores a pasted key for the session; a blank key changes nothing."""
    credentials = session_credentials(page)
    if not credentials.select(api_key):
        return False
    save_session_credentials(page, credentials)
    page.storyboard = apply(page.storyboard, CredentialSelected())
    page.show_credential_dialog = False
    return True
