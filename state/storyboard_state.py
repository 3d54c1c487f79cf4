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

from dataclasses import field
import mesop as me

from models.storyboard import StoryboardState


@me.stateclass
class PageState:
    """Storyboard Page State"""

    storyboard: StoryboardState = field(default_factory=StoryboardState)

    # Confirmations
    pending_delete_scene_id: str = ""
    show_delete_dialog: bool = False
    show_bulk_dialog: bool = False

    # Credential picker. The pasted key belongs to this session only.
    show_credential_dialog: bool = False
    credential_input: str = ""
    api_key: str = ""
    credential_revoked: bool = False

    # Export
    show_export_dialog: bool = False
    export_plan_json: str = ""
    export_run: int = 0  # bumped on every export so the queue runs again

    # Alerts
    show_error_dialog: bool = False
    error_message: str = ""
