"""
End-to-end extraction run.

Stages run strictly in order: every upload finishes before polling starts,
the readiness barrier resolves for all files before the payload is built,
and exactly one request is dispatched at the end. Any stage failure aborts
the run before dispatch and is re-raised unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from assessment_extractor.entities.errors import ExtractionRunError
from assessment_extractor.entities.media import MediaItem
from assessment_extractor.entities.payload import InferenceResponse
from assessment_extractor.services.DispatchService.dispatch_service_interface import (
    DispatchServiceInterface,
)
from assessment_extractor.services.ExtractionService.extraction_service_interface import (
    ExtractionServiceInterface,
)
from assessment_extractor.services.PayloadService.payload_service_interface import (
    PayloadServiceInterface,
)
from assessment_extractor.services.ReadinessService.readiness_service_interface import (
    ReadinessServiceInterface,
)
from assessment_extractor.services.UploadService.upload_service_interface import (
    UploadServiceInterface,
)


class RunState(str, Enum):
    IDLE = "IDLE"
    UPLOADING = "UPLOADING"
    POLLING = "POLLING"
    ASSEMBLING = "ASSEMBLING"
    DISPATCHING = "DISPATCHING"
    DONE = "DONE"
    ABORTED = "ABORTED"


_ACTIVE_STATES = {
    RunState.UPLOADING,
    RunState.POLLING,
    RunState.ASSEMBLING,
    RunState.DISPATCHING,
}


class ExtractionService(ExtractionServiceInterface):
    def __init__(
        self,
        upload_service: UploadServiceInterface,
        readiness_service: ReadinessServiceInterface,
        payload_service: PayloadServiceInterface,
        dispatch_service: DispatchServiceInterface,
        instruction_text: str,
        trailing_message: str,
        logger: logging.Logger,
    ) -> None:
        self.upload_service = upload_service
        self.readiness_service = readiness_service
        self.payload_service = payload_service
        self.dispatch_service = dispatch_service
        self.instruction_text = instruction_text
        self.trailing_message = trailing_message
        self.logger = logger
        self.state: RunState = RunState.IDLE

    def _enter(self, state: RunState) -> None:
        self.logger.debug("Run state %s -> %s", self.state.value, state.value)
        self.state = state

    async def run(self, items: Sequence[MediaItem]) -> InferenceResponse:
        if not items:
            raise ValueError("At least one media item is required")

        # Handles belong to a single run; never interleave two runs
        if self.state in _ACTIVE_STATES:
            raise RuntimeError("An extraction run is already in progress")

        try:
            self._enter(RunState.UPLOADING)
            handles = await self.upload_service.upload_all(items)

            self._enter(RunState.POLLING)
            await self.readiness_service.await_all_ready(handles)

            self._enter(RunState.ASSEMBLING)
            payload = self.payload_service.build_request(handles, self.instruction_text)

            self._enter(RunState.DISPATCHING)
            response = await self.dispatch_service.dispatch(
                payload, self.trailing_message
            )

            self._enter(RunState.DONE)
            return response
        except ExtractionRunError as e:
            self.logger.error(
                "Extraction run aborted during %s: %s", self.state.value, e
            )
            raise
        finally:
            if self.state is not RunState.DONE:
                self._enter(RunState.ABORTED)
