from abc import ABC, abstractmethod

from assessment_extractor.entities.media import ResourceHandle, ResourceState


class StorageServiceInterface(ABC):
    """Remote file storage that accepts uploads and reports their processing state."""

    @abstractmethod
    async def submit(
        self, data: bytes, mime_type: str, display_name: str
    ) -> ResourceHandle:
        """
        Upload raw bytes with a declared media type.

        Returns:
            A handle carrying the state reported at submission time.
        """

    @abstractmethod
    async def get_state(self, resource_id: str) -> ResourceState:
        """Fetch the authoritative state of a previously submitted file."""
