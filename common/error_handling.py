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

import logging

# Dedicated logger for tracking the suppressed error
race_condition_logger = logging.getLogger("storyboard.race_condition_tracker")

AUTHORIZATION_ERROR_MARKER = "Requested entity was not found"


class GenerationError(Exception):
    """Custom exception for generation errors."""

    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class EmptyResponseError(GenerationError):
    """The model answered without a usable payload."""


class MissingResultError(GenerationError):
    """A video job finished without a downloadable result."""


class VideoPollingTimeoutError(GenerationError):
    """A video job did not finish within the polling budget."""


class AuthorizationError(GenerationError):
    """The provider rejected the API key; the user must select a new one."""


def is_authorization_error(error: BaseException) -> bool:
    """True when the provider reports the credential's entity as missing."""
    return AUTHORIZATION_ERROR_MARKER in str(error)


def as_generation_error(error: BaseException) -> GenerationError:
    """Maps an SDK or transport exception onto the generation error hierarchy."""
    if isinstance(error, GenerationError):
        return error
    if is_authorization_error(error):
        return AuthorizationError(str(error))
    return GenerationError(f"An unexpected error occurred: {error}")


class UnknownHandlerIdFilter(logging.Filter):
    """A logging filter to suppress 'Unknown handler id' errors."""
    def filter(self, record):
        # Suppress the specific benign error message from Mesop
        if "Unknown handler id" in record.getMessage():
            # Log to a separate, non-disruptive logger for tracking purposes
            race_condition_logger.info("Suppressed 'Unknown handler id' error", extra={"original_record": record.getMessage()})
            return False # Prevent the original logger from processing it
        return True
