from __future__ import annotations

import logging

from assessment_extractor.entities.errors import InferenceError
from assessment_extractor.entities.payload import InferenceResponse, RequestPayload
from assessment_extractor.services.DispatchService.dispatch_service_interface import (
    DispatchServiceInterface,
)
from assessment_extractor.services.InferenceService.inference_service_interface import (
    InferenceServiceInterface,
)


class DispatchService(DispatchServiceInterface):
    """Single-shot dispatcher; the response text is returned verbatim and never parsed."""

    def __init__(
        self,
        inference_service: InferenceServiceInterface,
        logger: logging.Logger,
    ) -> None:
        self.inference_service = inference_service
        self.logger = logger

    async def dispatch(
        self, payload: RequestPayload, trailing_message: str
    ) -> InferenceResponse:
        self.logger.info(
            "Dispatching request with %d parts (%d files)",
            len(payload.parts),
            len(payload.file_parts),
        )

        try:
            session = self.inference_service.create_session(payload)
            response = await self.inference_service.send(session, trailing_message)
        except Exception as e:
            self.logger.error("Inference request failed: %s", e, exc_info=True)
            raise InferenceError(f"Inference request failed: {e}") from e

        self.logger.info(
            "Usage: prompt=%d completion=%d total=%d",
            response.usage.prompt_tokens,
            response.usage.completion_tokens,
            response.usage.total_tokens,
        )

        if not response.text:
            self.logger.warning("Model returned an empty response")

        return response
