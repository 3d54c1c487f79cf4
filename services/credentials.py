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
"""API key selection for the Gemini API.

Keys are scoped to one session. A key pasted in the credential dialog lives
in that session's page state and is never shared with other sessions. A
session without a pasted key falls back to the deployment key from
`GEMINI_API_KEY` until an authorization failure revokes it for that session.
"""

from typing import Optional

from common.analytics import get_logger
from config.default import Default

logger = get_logger(__name__)


class CredentialProvider:
    def __init__(
        self,
        selected_key: str = "",
        revoked: bool = False,
        default_key: Optional[str] = None,
    ):
        self._selected_key = (selected_key or "").strip()
        self._revoked = revoked
        if default_key is None:
            default_key = Default().GEMINI_API_KEY
        self._default_key = (default_key or "").strip()

    @property
    def selected_key(self) -> str:
        """The key this session pasted, if any."""
        return self._selected_key

    @property
    def revoked(self) -> bool:
        return self._revoked

    @property
    def api_key(self) -> str:
        if self._selected_key:
            return self._selected_key
        if self._revoked:
            return ""
        return self._default_key

    def has_credential(self) -> bool:
        return bool(self.api_key)

    def select(self, api_key: str) -> bool:
        """Stores a new key. Returns False, leaving the old key, when blank."""
        api_key = (api_key or "").strip()
        if not api_key:
            return False
        self._selected_key = api_key
        self._revoked = False
        logger.info("A new Gemini API key was selected for this session.")
        return True

    def revoke(self) -> None:
        """Forgets the session's key after the provider rejected it.

        The deployment key stays in place for other sessions.
        """
        self._selected_key = ""
        self._revoked = True
        logger.info("The Gemini API key was revoked for this session after an authorization failure.")


def session_credentials(page) -> CredentialProvider:
    """Builds the provider for the session whose page state is `page`."""
    return CredentialProvider(page.api_key, page.credential_revoked)


def save_session_credentials(page, credentials: CredentialProvider) -> None:
    page.api_key = credentials.selected_key
    page.credential_revoked = credentials.revoked
