"""
Readiness barrier for uploaded files.

Each handle gets its own poll loop that re-fetches the state from storage
while it is PROCESSING. The loops run concurrently and the barrier only
resolves once every handle is ACTIVE; the first failure cancels the rest.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    stop_never,
    wait_fixed,
)

from assessment_extractor.components.concurrency import gather_or_cancel
from assessment_extractor.entities.errors import (
    ReadinessTimeoutError,
    ResourceProcessingError,
)
from assessment_extractor.entities.media import ResourceHandle, ResourceState
from assessment_extractor.services.ReadinessService.readiness_service_interface import (
    ReadinessServiceInterface,
)
from assessment_extractor.services.StorageService.storage_service_interface import (
    StorageServiceInterface,
)


def _is_processing(state: ResourceState) -> bool:
    return state is ResourceState.PROCESSING


class ReadinessService(ReadinessServiceInterface):
    def __init__(
        self,
        storage_service: StorageServiceInterface,
        logger: logging.Logger,
        poll_interval: float = 10.0,
        max_attempts: int | None = 60,
        max_wait_seconds: float | None = None,
    ) -> None:
        """
        Args:
            storage_service: Storage endpoint used to re-fetch file states
            logger: Logger instance
            poll_interval: Seconds to wait between two state checks of one file
            max_attempts: State checks per file before giving up (None = unbounded)
            max_wait_seconds: Wall-clock budget per file (None = unbounded)
        """
        if poll_interval < 0:
            raise ValueError("poll_interval must not be negative")
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.storage_service = storage_service
        self.logger = logger
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.max_wait_seconds = max_wait_seconds

    def _make_retrying(self, handle: ResourceHandle) -> AsyncRetrying:
        stop = stop_never
        if self.max_attempts is not None:
            stop = stop_after_attempt(self.max_attempts)
        if self.max_wait_seconds is not None:
            stop = stop | stop_after_delay(self.max_wait_seconds)

        return AsyncRetrying(
            retry=retry_if_result(_is_processing),
            wait=wait_fixed(self.poll_interval),
            stop=stop,
            before_sleep=self._log_still_processing(handle),
        )

    def _log_still_processing(
        self, handle: ResourceHandle
    ) -> Callable[[RetryCallState], None]:
        def before_sleep(retry_state: RetryCallState) -> None:
            self.logger.debug(
                "File %s still PROCESSING after %d checks, next check in %ss",
                handle.id,
                retry_state.attempt_number,
                self.poll_interval,
            )

        return before_sleep

    async def _fetch_state(self, handle: ResourceHandle) -> ResourceState:
        try:
            state = await self.storage_service.get_state(handle.id)
        except Exception as e:
            raise ResourceProcessingError(
                handle.id, handle.state.value, f"state check failed ({e})"
            ) from e

        if handle.state.is_terminal and state is not handle.state:
            raise ResourceProcessingError(
                handle.id,
                state.value,
                f"state changed after it was reported {handle.state.value}",
            )

        handle.transition(state)
        return state

    async def _await_ready(self, handle: ResourceHandle) -> None:
        try:
            state = await self._make_retrying(handle)(self._fetch_state, handle)
        except RetryError as e:
            raise ReadinessTimeoutError(handle.id, e.last_attempt.attempt_number) from e

        if state is not ResourceState.ACTIVE:
            self.logger.error(
                "File %s (%s) ended in state %s",
                handle.id,
                handle.display_name,
                state.value,
            )
            raise ResourceProcessingError(handle.id, state.value)

        self.logger.debug("File %s is ACTIVE", handle.id)

    async def await_all_ready(self, handles: Sequence[ResourceHandle]) -> None:
        self.logger.info("Waiting for file processing...")
        await gather_or_cancel(self._await_ready(handle) for handle in handles)
        self.logger.info("...all files ready")
