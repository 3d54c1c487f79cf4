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

import datetime

import mesop as me

from config.messages import message
from models.storyboard import HistoryItem


@me.component
def history_log(history: list[HistoryItem]):
    """Append-only activity log, oldest first."""
    with me.box(style=me.Style(display="flex", flex_direction="column", gap=8)):
        me.text(message("history_label"), style=me.Style(font_size=12, font_weight="bold"))
        with me.box(
            style=me.Style(
                background=me.theme_var("surface-container-low"),
                border_radius=12,
                display="flex",
                flex_direction="column",
                gap=6,
                height=160,
                overflow_y="auto",
                padding=me.Padding.all(12),
                font_family="monospace",
                font_size=11,
            )
        ):
            if not history:
                me.text(message("history_empty"), style=me.Style(font_style="italic"))
            for item in history:
                with me.box(
                    key=item.id,
                    style=me.Style(
                        display="flex",
                        gap=8,
                        border=me.Border(left=me.BorderSide(width=2, style="solid", color=me.theme_var("primary"))),
                        padding=me.Padding(left=8),
                    ),
                ):
                    me.text(
                        datetime.datetime.fromtimestamp(item.timestamp).strftime("%H:%M:%S"),
                        style=me.Style(opacity=0.5),
                    )
                    me.text(item.action, style=me.Style(font_weight="bold"))
