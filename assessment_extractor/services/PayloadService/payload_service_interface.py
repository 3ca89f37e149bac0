from abc import ABC, abstractmethod
from collections.abc import Sequence

from assessment_extractor.entities.media import ResourceHandle
from assessment_extractor.entities.payload import RequestPayload


class PayloadServiceInterface(ABC):
    @abstractmethod
    def build_request(
        self, ready_handles: Sequence[ResourceHandle], instruction_text: str
    ) -> RequestPayload:
        """Build the request referencing every ready handle, in order."""
