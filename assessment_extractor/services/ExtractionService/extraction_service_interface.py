from abc import ABC, abstractmethod
from collections.abc import Sequence

from assessment_extractor.entities.media import MediaItem
from assessment_extractor.entities.payload import InferenceResponse


class ExtractionServiceInterface(ABC):
    @abstractmethod
    async def run(self, items: Sequence[MediaItem]) -> InferenceResponse:
        """
        Upload the items, wait for all of them, and issue one extraction request.

        Raises:
            ExtractionRunError: The first failure of any stage, unchanged.
        """
