"""
Storage backend on top of the Gemini Files API.

Files are uploaded through the async client surface (`client.aio.files`) and
their processing state is re-fetched by resource name.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Any

from google import genai
from google.genai import types

from assessment_extractor.entities.media import ResourceHandle, ResourceState
from assessment_extractor.services.StorageService.storage_service_interface import (
    StorageServiceInterface,
)


def to_resource_state(state: Any) -> ResourceState:
    """
    Map a Gemini FileState (or its string value) onto ResourceState.

    A missing state is treated as still processing. Any state other than
    PROCESSING or ACTIVE (e.g. STATE_UNSPECIFIED) can never become usable and
    maps to FAILED.
    """
    if state is None:
        return ResourceState.PROCESSING

    value = str(getattr(state, "value", state)).upper()
    if value == ResourceState.PROCESSING.value:
        return ResourceState.PROCESSING
    if value == ResourceState.ACTIVE.value:
        return ResourceState.ACTIVE
    return ResourceState.FAILED


class GeminiStorageService(StorageServiceInterface):
    def __init__(self, client: genai.Client, logger: logging.Logger) -> None:
        self.client = client
        self.logger = logger

    async def submit(
        self, data: bytes, mime_type: str, display_name: str
    ) -> ResourceHandle:
        uploaded: types.File = await self.client.aio.files.upload(
            file=BytesIO(data),
            config=types.UploadFileConfig(
                mime_type=mime_type,
                display_name=display_name,
            ),
        )

        self.logger.debug(
            "Files API accepted %s (%d bytes): name=%s state=%s",
            display_name,
            len(data),
            uploaded.name,
            uploaded.state,
        )

        return ResourceHandle(
            id=uploaded.name or "",
            display_name=uploaded.display_name or display_name,
            mime_type=uploaded.mime_type or mime_type,
            remote_uri=uploaded.uri or "",
            state=to_resource_state(uploaded.state),
        )

    async def get_state(self, resource_id: str) -> ResourceState:
        file: types.File = await self.client.aio.files.get(name=resource_id)
        return to_resource_state(file.state)
