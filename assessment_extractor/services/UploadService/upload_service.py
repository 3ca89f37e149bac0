from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from assessment_extractor.components.concurrency import gather_or_cancel
from assessment_extractor.entities.errors import UploadError
from assessment_extractor.entities.media import MediaItem, ResourceHandle
from assessment_extractor.services.StorageService.storage_service_interface import (
    StorageServiceInterface,
)
from assessment_extractor.services.UploadService.upload_service_interface import (
    UploadServiceInterface,
)


class UploadService(UploadServiceInterface):
    """
    Submits local files to remote storage.

    Each call performs exactly one submission and is never retried; whether a
    failure aborts the run is up to the caller.
    """

    def __init__(
        self,
        storage_service: StorageServiceInterface,
        logger: logging.Logger,
    ) -> None:
        self.storage_service = storage_service
        self.logger = logger

    async def upload(self, local_path: str, mime_type: str) -> ResourceHandle:
        """
        Upload a single file.

        Args:
            local_path: Path of a readable local file
            mime_type: Declared media type; not checked against the file contents

        Returns:
            The handle reported by the storage endpoint (usually PROCESSING)

        Raises:
            UploadError: If the MIME type is empty, the file cannot be read, or
                the storage endpoint rejects the submission.
        """
        if not mime_type or not mime_type.strip():
            raise UploadError(local_path, "declared MIME type is empty")

        path = Path(local_path)
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise UploadError(local_path, f"file cannot be read ({e})") from e

        try:
            handle = await self.storage_service.submit(data, mime_type, path.name)
        except Exception as e:
            raise UploadError(local_path, f"remote submission failed ({e})") from e

        self.logger.info("Uploaded file %s as: %s", handle.display_name, handle.id)
        return handle

    async def upload_all(self, items: Sequence[MediaItem]) -> list[ResourceHandle]:
        self.logger.info("Uploading %d files", len(items))
        return await gather_or_cancel(
            self.upload(item.local_path, item.mime_type) for item in items
        )
