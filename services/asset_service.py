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
"""Turns uploaded files into product reference assets."""

from typing import Callable

from common.utils import encode_base64, media_kind
from models.storyboard import ProductAsset, new_id

ACCEPTED_FILE_TYPES = ["image/*", "video/*"]


def is_accepted(mime_type: str) -> bool:
    return bool(mime_type) and mime_type.split("/", 1)[0] in ("image", "video")


def asset_from_upload(
    name: str,
    mime_type: str,
    contents: bytes,
    id_factory: Callable[[], str] = new_id,
) -> ProductAsset:
    """Builds a ProductAsset holding the whole file, base64 encoded.

    Raises:
        ValueError: If the file is neither an image nor a video.
    """
    if not is_accepted(mime_type):
        raise ValueError(f"Unsupported product asset type: {mime_type or 'unknown'}")
    return ProductAsset(
        id=id_factory(),
        kind=media_kind(mime_type),
        data=encode_base64(contents),
        mime_type=mime_type,
        name=name,
    )
