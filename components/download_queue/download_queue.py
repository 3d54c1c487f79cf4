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
"""Python wrapper for the Download Queue Lit component."""

import typing

import mesop as me


@me.web_component(path="./download_queue.js")
def download_queue(
    *,
    downloads_json: str,
    run: int,
    on_finished: typing.Callable[[me.WebEvent], None] | None = None,
    key: str | None = None,
):
    """Starts the browser downloads each time `run` increases, honoring every delay."""
    return me.insert_web_component(
        key=key,
        name="download-queue",
        properties={
            "downloadsJson": downloads_json,
            "run": run,
        },
        events={"finished": on_finished} if on_finished else {},
    )
