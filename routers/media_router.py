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

import mimetypes
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from common.storage import resolve_media_path

router = APIRouter(prefix="/media", tags=["media"])


@router.get("/{media_path:path}")
async def get_media(media_path: str, download: Optional[str] = None):
    """
    Serves a stored storyboard video or image.
    With `download`, the file is sent as an attachment under that name.
    """
    path = resolve_media_path(media_path)
    if path is None:
        raise HTTPException(status_code=404, detail="Media not found")

    media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    if download:
        return FileResponse(path=str(path), media_type=media_type, filename=download)
    return FileResponse(path=str(path), media_type=media_type)
