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
"""Storyboard aggregate, the commands that change it, and the reducer.

Every change to a storyboard goes through `apply(state, command)`, which
returns a new `StoryboardState` and never mutates the one passed in. A
command that changes the state appends exactly one history entry; a command
that leaves the state unchanged (unknown id, same value) is a no-op.
"""

import dataclasses
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from common.utils import to_data_url, truncate
from config.default import Default
from config.messages import field_label, message
from models.requests import SceneDraft

config = Default()

RESOLUTIONS = ("720p", "1080p")
DURATIONS = (5, 10, 15)
SCENE_TEXT_FIELDS = ("description", "camera_angle", "lighting", "product_action")
PLOT_PREVIEW_LENGTH = 20


class MediaKind(str, Enum):
    """What a scene card displays; a video wins over a still image."""

    NONE = "none"
    IMAGE = "image"
    VIDEO = "video"


@dataclass
class SceneMedia:
    image_url: str = ""
    video_url: str = ""

    @property
    def kind(self) -> MediaKind:
        if self.video_url:
            return MediaKind.VIDEO
        if self.image_url:
            return MediaKind.IMAGE
        return MediaKind.NONE

    @property
    def has_video(self) -> bool:
        return bool(self.video_url)

    def with_image(self, image_url: str) -> "SceneMedia":
        return dataclasses.replace(self, image_url=image_url)

    def with_video(self, video_url: str) -> "SceneMedia":
        return dataclasses.replace(self, video_url=video_url)


@dataclass
class Scene:
    id: str = ""
    scene_number: int = 0
    description: str = ""
    camera_angle: str = ""
    lighting: str = ""
    product_action: str = ""
    media: SceneMedia = field(default_factory=SceneMedia)
    is_generating: bool = False
    generating_task: str = ""  # "text" or "image" while is_generating
    is_video_generating: bool = False

    @property
    def is_busy(self) -> bool:
        return self.is_generating or self.is_video_generating


@dataclass
class ProductAsset:
    id: str = ""
    kind: str = "image"  # "image" or "video"
    data: str = ""  # base64 payload of the whole file
    mime_type: str = ""
    name: str = ""

    @property
    def data_url(self) -> str:
        return to_data_url(self.mime_type, self.data)


@dataclass
class HistoryItem:
    id: str = ""
    timestamp: float = 0.0
    action: str = ""


@dataclass
class StoryboardState:
    plot: str = ""
    style: str = ""
    scene_count: int = config.DEFAULT_SCENE_COUNT
    scenes: list[Scene] = field(default_factory=list)
    assets: list[ProductAsset] = field(default_factory=list)
    history: list[HistoryItem] = field(default_factory=list)
    is_generating_text: bool = False
    has_credential: bool = True
    resolution: str = "720p"
    duration: int = 5


def find_scene(state: StoryboardState, scene_id: str) -> Optional[Scene]:
    for scene in state.scenes:
        if scene.id == scene_id:
            return scene
    return None


def image_assets(state: StoryboardState) -> list[ProductAsset]:
    return [asset for asset in state.assets if asset.kind == "image"]


def scenes_with_video(state: StoryboardState) -> list[Scene]:
    return [scene for scene in state.scenes if scene.media.has_video]


# --- Commands ---


@dataclass(frozen=True)
class SetPlot:
    text: str


@dataclass(frozen=True)
class SetStyle:
    text: str


@dataclass(frozen=True)
class SetSceneCount:
    count: int


@dataclass(frozen=True)
class SetResolution:
    resolution: str


@dataclass(frozen=True)
class SetDuration:
    duration: int


@dataclass(frozen=True)
class ScriptGenerationStarted:
    pass


@dataclass(frozen=True)
class ScriptGenerated:
    drafts: tuple[SceneDraft, ...]


@dataclass(frozen=True)
class ScriptGenerationFailed:
    pass


@dataclass(frozen=True)
class EditScene:
    scene_id: str
    field_name: str
    value: str


@dataclass(frozen=True)
class SceneTextRegenerationStarted:
    scene_id: str


@dataclass(frozen=True)
class SceneTextRegenerated:
    scene_id: str
    draft: SceneDraft


@dataclass(frozen=True)
class SceneTextRegenerationFailed:
    scene_id: str


@dataclass(frozen=True)
class SceneImageGenerationStarted:
    scene_id: str


@dataclass(frozen=True)
class SceneImageGenerated:
    scene_id: str
    image_url: str


@dataclass(frozen=True)
class SceneImageGenerationFailed:
    scene_id: str


@dataclass(frozen=True)
class SceneVideoGenerationStarted:
    scene_id: str


@dataclass(frozen=True)
class SceneVideoGenerated:
    scene_id: str
    video_url: str


@dataclass(frozen=True)
class SceneVideoGenerationFailed:
    scene_id: str
    authorization_revoked: bool = False


@dataclass(frozen=True)
class DeleteScene:
    scene_id: str


@dataclass(frozen=True)
class AddAsset:
    asset: ProductAsset


@dataclass(frozen=True)
class RemoveAsset:
    asset_id: str


@dataclass(frozen=True)
class CredentialSelected:
    pass


@dataclass(frozen=True)
class VideosExported:
    count: int


@dataclass(frozen=True)
class ScriptExported:
    pass


@dataclass(frozen=True)
class ResetSession:
    pass


# --- Reducer ---

Clock = Callable[[], float]
IdFactory = Callable[[], str]
# A handler returns (new_state, history action) or None for a no-op.
HandlerResult = Optional[tuple[StoryboardState, str]]

_HANDLERS: dict[type, Callable] = {}
_ALWAYS_LOGGED: set[type] = set()


def new_id() -> str:
    return str(uuid.uuid4())


def _handles(command_type: type, always_log: bool = False):
    def register(handler):
        _HANDLERS[command_type] = handler
        if always_log:
            _ALWAYS_LOGGED.add(command_type)
        return handler
    return register


def apply(
    state: StoryboardState,
    command,
    clock: Clock = time.time,
    id_factory: IdFactory = new_id,
) -> StoryboardState:
    """Applies one command and returns the resulting storyboard.

    Raises:
        TypeError: If the command type is unknown.
        ValueError: If a command carries a value outside its domain.
    """
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unknown storyboard command: {command!r}")

    result = handler(state, command, id_factory)
    if result is None:
        return state
    new_state, action = result
    if new_state == state and type(command) not in _ALWAYS_LOGGED:
        return state

    entry = HistoryItem(id=id_factory(), timestamp=clock(), action=action)
    return dataclasses.replace(new_state, history=[*new_state.history, entry])


def apply_all(state: StoryboardState, commands, clock: Clock = time.time) -> StoryboardState:
    for command in commands:
        state = apply(state, command, clock=clock)
    return state


def _renumber(scenes: list[Scene]) -> list[Scene]:
    return [
        scene if scene.scene_number == index + 1 else dataclasses.replace(scene, scene_number=index + 1)
        for index, scene in enumerate(scenes)
    ]


def _patch_scene(state: StoryboardState, scene_id: str, **changes) -> Optional[tuple[StoryboardState, Scene]]:
    """Returns (new state, the scene as it was) or None when the id is unknown."""
    for index, scene in enumerate(state.scenes):
        if scene.id == scene_id:
            scenes = list(state.scenes)
            scenes[index] = dataclasses.replace(scene, **changes)
            return dataclasses.replace(state, scenes=scenes), scene
    return None


@_handles(SetPlot)
def _set_plot(state, command, _):
    return dataclasses.replace(state, plot=command.text), message("plot_updated")


@_handles(SetStyle)
def _set_style(state, command, _):
    return dataclasses.replace(state, style=command.text), message("style_updated")


@_handles(SetSceneCount)
def _set_scene_count(state, command, _):
    count = min(config.MAX_SCENE_COUNT, max(config.MIN_SCENE_COUNT, int(command.count)))
    return dataclasses.replace(state, scene_count=count), message("scene_count_set", count=count)


@_handles(SetResolution)
def _set_resolution(state, command, _):
    if command.resolution not in RESOLUTIONS:
        raise ValueError(f"Unsupported resolution: {command.resolution}")
    return (
        dataclasses.replace(state, resolution=command.resolution),
        message("resolution_set", resolution=command.resolution),
    )


@_handles(SetDuration)
def _set_duration(state, command, _):
    if command.duration not in DURATIONS:
        raise ValueError(f"Unsupported duration: {command.duration}")
    return (
        dataclasses.replace(state, duration=command.duration),
        message("duration_set", duration=command.duration),
    )


@_handles(ScriptGenerationStarted)
def _script_started(state, command, _):
    return (
        dataclasses.replace(state, is_generating_text=True),
        message("script_started", preview=truncate(state.plot, PLOT_PREVIEW_LENGTH)),
    )


@_handles(ScriptGenerated)
def _script_generated(state, command, id_factory):
    drafts = command.drafts[: state.scene_count]
    scenes = [
        Scene(
            id=id_factory(),
            scene_number=index + 1,
            description=draft.description,
            camera_angle=draft.camera_angle,
            lighting=draft.lighting,
            product_action=draft.product_action,
        )
        for index, draft in enumerate(drafts)
    ]
    return (
        dataclasses.replace(state, scenes=scenes, is_generating_text=False),
        message("script_generated", count=len(scenes)),
    )


@_handles(ScriptGenerationFailed)
def _script_failed(state, command, _):
    return dataclasses.replace(state, is_generating_text=False), message("script_failed")


@_handles(EditScene)
def _edit_scene(state, command, _):
    if command.field_name not in SCENE_TEXT_FIELDS:
        raise ValueError(f"Not an editable scene field: {command.field_name}")
    patched = _patch_scene(state, command.scene_id, **{command.field_name: command.value})
    if patched is None:
        return None
    new_state, scene = patched
    return new_state, message(
        "scene_edited", field=field_label(command.field_name), number=scene.scene_number
    )


@_handles(SceneTextRegenerationStarted)
def _text_started(state, command, _):
    patched = _patch_scene(state, command.scene_id, is_generating=True, generating_task="text")
    if patched is None:
        return None
    new_state, scene = patched
    return new_state, message("text_started", number=scene.scene_number)


@_handles(SceneTextRegenerated)
def _text_regenerated(state, command, _):
    draft = command.draft
    patched = _patch_scene(
        state,
        command.scene_id,
        description=draft.description,
        camera_angle=draft.camera_angle,
        lighting=draft.lighting,
        product_action=draft.product_action,
        media=SceneMedia(),
        is_generating=False,
        generating_task="",
    )
    if patched is None:
        return None
    new_state, scene = patched
    return new_state, message("text_done", number=scene.scene_number)


@_handles(SceneTextRegenerationFailed)
def _text_failed(state, command, _):
    patched = _patch_scene(state, command.scene_id, is_generating=False, generating_task="")
    if patched is None:
        return None
    new_state, scene = patched
    return new_state, message("text_failed", number=scene.scene_number)


@_handles(SceneImageGenerationStarted)
def _image_started(state, command, _):
    patched = _patch_scene(state, command.scene_id, is_generating=True, generating_task="image")
    if patched is None:
        return None
    new_state, scene = patched
    return new_state, message("image_started", number=scene.scene_number)


@_handles(SceneImageGenerated)
def _image_generated(state, command, _):
    scene = find_scene(state, command.scene_id)
    if scene is None:
        return None
    new_state, _ = _patch_scene(
        state,
        command.scene_id,
        media=scene.media.with_image(command.image_url),
        is_generating=False,
        generating_task="",
    )
    return new_state, message("image_done", number=scene.scene_number)


@_handles(SceneImageGenerationFailed)
def _image_failed(state, command, _):
    patched = _patch_scene(state, command.scene_id, is_generating=False, generating_task="")
    if patched is None:
        return None
    new_state, scene = patched
    return new_state, message("image_failed", number=scene.scene_number)


@_handles(SceneVideoGenerationStarted)
def _video_started(state, command, _):
    patched = _patch_scene(state, command.scene_id, is_video_generating=True)
    if patched is None:
        return None
    new_state, scene = patched
    return new_state, message("video_started", number=scene.scene_number)


@_handles(SceneVideoGenerated)
def _video_generated(state, command, _):
    scene = find_scene(state, command.scene_id)
    if scene is None:
        return None
    new_state, _ = _patch_scene(
        state,
        command.scene_id,
        media=scene.media.with_video(command.video_url),
        is_video_generating=False,
    )
    return new_state, message("video_done", number=scene.scene_number)


@_handles(SceneVideoGenerationFailed)
def _video_failed(state, command, _):
    if command.authorization_revoked:
        state = dataclasses.replace(state, has_credential=False)
    patched = _patch_scene(state, command.scene_id, is_video_generating=False)
    if patched is None:
        # The scene is gone but a revoked key still has to be recorded.
        if command.authorization_revoked:
            return state, message("alert_authorization")
        return None
    new_state, scene = patched
    return new_state, message("video_failed", number=scene.scene_number)


@_handles(DeleteScene)
def _delete_scene(state, command, _):
    scene = find_scene(state, command.scene_id)
    if scene is None:
        return None
    remaining = [s for s in state.scenes if s.id != command.scene_id]
    return (
        dataclasses.replace(state, scenes=_renumber(remaining)),
        message("scene_deleted", number=scene.scene_number),
    )


@_handles(AddAsset)
def _add_asset(state, command, _):
    if any(asset.id == command.asset.id for asset in state.assets):
        return None
    return (
        dataclasses.replace(state, assets=[*state.assets, command.asset]),
        message("asset_added", name=command.asset.name),
    )


@_handles(RemoveAsset)
def _remove_asset(state, command, _):
    remaining = [asset for asset in state.assets if asset.id != command.asset_id]
    if len(remaining) == len(state.assets):
        return None
    return dataclasses.replace(state, assets=remaining), message("asset_removed")


@_handles(CredentialSelected, always_log=True)
def _credential_selected(state, command, _):
    return dataclasses.replace(state, has_credential=True), message("credential_selected")


@_handles(VideosExported, always_log=True)
def _videos_exported(state, command, _):
    return state, message("videos_exported", count=command.count)


@_handles(ScriptExported, always_log=True)
def _script_exported(state, command, _):
    return state, message("script_exported")


@_handles(ResetSession)
def _reset_session(state, command, _):
    fresh = StoryboardState(has_credential=state.has_credential)
    return fresh, message("session_started")
