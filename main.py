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
"""Storyboard Studio: FastAPI app serving the media router and the Mesop UI."""

import logging
import os

import mesop as me
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.wsgi import WSGIMiddleware

import pages.storyboard  # noqa: F401  registers the Mesop pages
from common.analytics import get_logger
from common.error_handling import UnknownHandlerIdFilter
from config.default import Default
from routers import media_router

config = Default()

logging.basicConfig(level=logging.INFO)
for handler in logging.getLogger().handlers:
    handler.addFilter(UnknownHandlerIdFilter())

logger = get_logger(__name__)

app = FastAPI(title="Storyboard Studio")
app.include_router(media_router.router)

# Mesop owns every path the API does not.
app.mount(
    "/",
    WSGIMiddleware(
        me.create_wsgi_app(debug_mode=os.environ.get("DEBUG_MODE", "") == "true")
    ),
)


if __name__ == "__main__":
    logger.info(f"Starting Storyboard Studio on port {config.APP_PORT}")
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=config.APP_PORT,
        reload=os.environ.get("DEBUG_MODE", "") == "true",
    )
