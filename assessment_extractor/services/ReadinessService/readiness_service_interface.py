from abc import ABC, abstractmethod
from collections.abc import Sequence

from assessment_extractor.entities.media import ResourceHandle


class ReadinessServiceInterface(ABC):
    @abstractmethod
    async def await_all_ready(self, handles: Sequence[ResourceHandle]) -> None:
        """
        Block until every handle is ACTIVE.

        Raises:
            ResourceProcessingError: If any handle ends in a non-ACTIVE state.
            ReadinessTimeoutError: If any handle is still processing when the
                polling budget runs out.
        """
