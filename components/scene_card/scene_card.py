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
"""Card for one storyboard scene: its media, editable script fields and actions."""

import typing

import mesop as me

from config.messages import field_label, message
from models.storyboard import SCENE_TEXT_FIELDS, MediaKind, Scene

EditHandler = typing.Callable[[me.InputBlurEvent], typing.Any]
ClickHandler = typing.Callable[[me.ClickEvent], typing.Any]

FIELD_KEY_SEPARATOR = "|"


def field_key(scene_id: str, field_name: str) -> str:
    return f"{scene_id}{FIELD_KEY_SEPARATOR}{field_name}"


def parse_field_key(key: str) -> tuple[str, str]:
    scene_id, _, field_name = key.rpartition(FIELD_KEY_SEPARATOR)
    return scene_id, field_name


@me.component
def scene_card(
    scene: Scene,
    *,
    on_edit: EditHandler,
    on_regenerate_text: ClickHandler,
    on_generate_image: ClickHandler,
    on_generate_video: ClickHandler,
    on_delete: ClickHandler,
):
    """Renders a scene; every button carries the scene id as its key."""
    with me.box(
        style=me.Style(
            background=me.theme_var("surface-container-lowest"),
            border=me.Border.all(me.BorderSide(width=1, color=me.theme_var("outline-variant"))),
            border_radius=24,
            display="flex",
            flex_direction="column",
            overflow_x="hidden",
            overflow_y="hidden",
        )
    ):
        _scene_media(scene)
        with me.box(
            style=me.Style(display="flex", flex_direction="column", gap=8, padding=me.Padding.all(16))
        ):
            with me.box(style=me.Style(display="flex", justify_content="space-between", align_items="center")):
                me.text(
                    message("scene_heading", number=f"{scene.scene_number:02d}"),
                    style=me.Style(font_weight="bold", font_size=14),
                )
                with me.content_button(
                    type="icon",
                    key=f"delete_{scene.id}",
                    on_click=on_delete,
                    disabled=scene.is_busy,
                ):
                    me.icon("delete")

            for field_name in SCENE_TEXT_FIELDS:
                me.textarea(
                    label=field_label(field_name),
                    value=getattr(scene, field_name),
                    key=field_key(scene.id, field_name),
                    on_blur=on_edit,
                    rows=3 if field_name == "description" else 1,
                    autosize=True,
                    disabled=scene.is_generating,
                    style=me.Style(width="100%"),
                )

            with me.box(style=me.Style(display="flex", flex_wrap="wrap", gap=8)):
                me.button(
                    message("regenerate_text"),
                    key=f"text_{scene.id}",
                    on_click=on_regenerate_text,
                    disabled=scene.is_generating,
                )
                me.button(
                    message("update_image") if scene.media.image_url else message("generate_image"),
                    key=f"image_{scene.id}",
                    on_click=on_generate_image,
                    disabled=scene.is_generating,
                )
                me.button(
                    message("rerender_video") if scene.media.has_video else message("generate_video"),
                    key=f"video_{scene.id}",
                    on_click=on_generate_video,
                    type="raised",
                    disabled=scene.is_video_generating,
                )


def scene_id_from_key(key: str) -> str:
    """Strips the action prefix from a button key."""
    return key.split("_", 1)[1]


@me.component
def _scene_media(scene: Scene):
    with me.box(
        style=me.Style(
            aspect_ratio="16 / 9",
            background=me.theme_var("surface-container"),
            display="flex",
            align_items="center",
            justify_content="center",
            position="relative",
            width="100%",
        )
    ):
        kind = scene.media.kind
        if kind == MediaKind.VIDEO:
            me.video(src=scene.media.video_url, style=me.Style(width="100%", height="100%"))
        elif kind == MediaKind.IMAGE:
            me.image(
                src=scene.media.image_url,
                style=me.Style(width="100%", height="100%", object_fit="cover"),
            )
        else:
            me.text(message("no_media"), style=me.Style(color=me.theme_var("outline")))

        if scene.is_busy:
            with me.box(
                style=me.Style(
                    background="rgba(255, 255, 255, 0.8)",
                    display="flex",
                    flex_direction="column",
                    align_items="center",
                    justify_content="center",
                    gap=8,
                    position="absolute",
                    top=0,
                    left=0,
                    width="100%",
                    height="100%",
                )
            ):
                me.progress_spinner(diameter=32)
                for status in busy_messages(scene):
                    me.text(status, style=me.Style(font_size=12, font_weight="bold"))


def busy_messages(scene: Scene) -> list[str]:
    """One status line per running task; text and video can run together."""
    statuses = []
    if scene.is_generating:
        statuses.append(
            message("rewriting_text") if scene.generating_task == "text" else message("rendering_image")
        )
    if scene.is_video_generating:
        statuses.append(message("rendering_video"))
    return statuses
