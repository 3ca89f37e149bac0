from abc import ABC, abstractmethod
from typing import Any

from assessment_extractor.entities.payload import InferenceResponse, RequestPayload


class InferenceServiceInterface(ABC):
    @abstractmethod
    def create_session(self, payload: RequestPayload) -> Any:
        """
        Open a chat session seeded with the payload.

        The payload instruction becomes the system instruction and its parts
        become the first user turn of the session history.
        """

    @abstractmethod
    async def send(self, session: Any, message: str) -> InferenceResponse:
        """Send one user message on the session and return the raw reply."""
