from abc import ABC, abstractmethod

from assessment_extractor.entities.payload import InferenceResponse, RequestPayload


class DispatchServiceInterface(ABC):
    @abstractmethod
    async def dispatch(
        self, payload: RequestPayload, trailing_message: str
    ) -> InferenceResponse:
        """
        Send exactly one request made of the payload plus a trailing message.

        Raises:
            InferenceError: If the model endpoint rejects or fails the request.
        """
