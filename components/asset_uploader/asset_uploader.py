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

import typing

import mesop as me

from config.messages import message
from models.storyboard import ProductAsset
from services.asset_service import ACCEPTED_FILE_TYPES


@me.component
def asset_uploader(
    assets: list[ProductAsset],
    *,
    on_upload: typing.Callable[[me.UploadEvent], typing.Any],
    on_remove: typing.Callable[[me.ClickEvent], typing.Any],
):
    """Product reference uploader with a thumbnail strip of the current assets."""
    with me.box(style=me.Style(display="flex", flex_direction="column", gap=8)):
        me.text(message("assets_label"), style=me.Style(font_size=12, font_weight="bold"))
        with me.box(style=me.Style(display="flex", flex_wrap="wrap", gap=8)):
            for asset in assets:
                _asset_thumbnail(asset, on_remove=on_remove)
        me.uploader(
            label=message("add_assets"),
            on_upload=on_upload,
            accepted_file_types=ACCEPTED_FILE_TYPES,
            multiple=True,
            key="asset_uploader",
            type="stroked",
        )


@me.component
def _asset_thumbnail(asset: ProductAsset, on_remove):
    with me.box(
        style=me.Style(
            height=72,
            width=72,
            border_radius=12,
            overflow_x="hidden",
            overflow_y="hidden",
            position="relative",
            background=me.theme_var("surface-container"),
        )
    ):
        if asset.kind == "video":
            me.video(src=asset.data_url, style=me.Style(width="100%", height="100%"))
        else:
            me.image(
                src=asset.data_url,
                style=me.Style(width="100%", height="100%", object_fit="cover"),
            )
        with me.content_button(
            type="icon",
            key=asset.id,
            on_click=on_remove,
            style=me.Style(position="absolute", top=0, right=0),
        ):
            me.icon("close")
