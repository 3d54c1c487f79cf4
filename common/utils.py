# Copyright 2025 Google LLC.
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

from __future__ import annotations

import base64
import re

DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(;[^,]*)?;base64,(?P<data>.*)$", re.DOTALL)


def encode_base64(contents: bytes) -> str:
    """Encodes raw bytes as a base64 ASCII string."""
    return base64.b64encode(contents).decode("ascii")


def decode_base64(data: str) -> bytes:
    """Decodes base64 data, accepting a bare payload or a data URL."""
    if data.startswith("data:"):
        _, data = split_data_url(data)
    return base64.b64decode(data)


def to_data_url(mime_type: str, data: str) -> str:
    """Builds a data URL from a mime type and a base64 payload."""
    return f"data:{mime_type};base64,{data}"


def split_data_url(data_url: str) -> tuple[str, str]:
    """Splits a base64 data URL into (mime_type, payload).

    Raises:
        ValueError: If the string is not a base64 data URL.
    """
    match = DATA_URL_PATTERN.match(data_url)
    if not match:
        raise ValueError("Not a base64 data URL")
    return match.group("mime") or "application/octet-stream", match.group("data")


def media_kind(mime_type: str | None) -> str:
    """Classifies an uploaded file as 'video' or 'image' from its mime type."""
    if mime_type and mime_type.startswith("video"):
        return "video"
    return "image"


def truncate(text: str, length: int) -> str:
    """Returns the first `length` characters of text, stripped."""
    return text.strip()[:length]
