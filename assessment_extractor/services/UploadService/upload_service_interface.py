from abc import ABC, abstractmethod
from collections.abc import Sequence

from assessment_extractor.entities.media import MediaItem, ResourceHandle


class UploadServiceInterface(ABC):
    @abstractmethod
    async def upload(self, local_path: str, mime_type: str) -> ResourceHandle:
        """Upload one local file and return its remote handle."""

    @abstractmethod
    async def upload_all(self, items: Sequence[MediaItem]) -> list[ResourceHandle]:
        """Upload every item, returning handles in the same order as the items."""
