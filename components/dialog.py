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
"""A modal dialog used for confirmations, alerts and the export list."""

import mesop as me
import typing


@me.content_component
def dialog(
    *,
    is_open: bool,
    title: str = "",
    on_close: typing.Callable[[me.ClickEvent], typing.Any] | None = None,
    key: str | None = None,
):
    """Render a centered modal over a dimmed page.

    The close icon is only shown when `on_close` is given; confirmation
    dialogs close through their own action buttons.
    """

    with me.box(
        key=key,
        style=me.Style(
            background="rgba(15, 23, 42, 0.7)",
            display="flex" if is_open else "none",
            align_items="center",
            justify_content="center",
            height="100%",
            left=0,
            top=0,
            position="fixed",
            width="100%",
            z_index=1000,
        ),
    ):
        with me.box(
            style=me.Style(
                background=me.theme_var("surface"),
                border_radius=24,
                box_shadow=me.theme_var("shadow_elevation_2"),
                display="flex",
                flex_direction="column",
                gap=16,
                max_width=480,
                width="90vw",
                padding=me.Padding.all(32),
                position="relative",
            )
        ):
            if on_close:
                with me.content_button(
                    on_click=on_close,
                    type="icon",
                    style=me.Style(position="absolute", top=12, right=12),
                ):
                    me.icon("close")
            if title:
                me.text(title, type="headline-6", style=me.Style(font_weight="bold"))
            me.slot()


@me.content_component
def dialog_actions():
    """Right-aligned row for a dialog's buttons."""
    with me.box(
        style=me.Style(
            display="flex",
            justify_content="end",
            gap=8,
            margin=me.Margin(top=8),
        )
    ):
        me.slot()
