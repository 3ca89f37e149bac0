"""
Unit tests for ReadinessService.

Uses an in-memory storage fake whose state sequences are scripted per file,
with short poll intervals so the barrier behaviour can be timed.
"""

import asyncio
import logging

import pytest

from assessment_extractor.entities.errors import (
    ReadinessTimeoutError,
    ResourceProcessingError,
)
from assessment_extractor.entities.media import ResourceHandle, ResourceState
from assessment_extractor.services.ReadinessService.readiness_service import (
    ReadinessService,
)
from assessment_extractor.services.StorageService.storage_service_interface import (
    StorageServiceInterface,
)

PROCESSING = ResourceState.PROCESSING
ACTIVE = ResourceState.ACTIVE
FAILED = ResourceState.FAILED


class ScriptedStorage(StorageServiceInterface):
    """Storage fake returning the next scripted state on every check."""

    def __init__(self, sequences: dict[str, list[ResourceState]]) -> None:
        self.sequences = {key: list(value) for key, value in sequences.items()}
        self.calls: list[str] = []
        self.error: Exception | None = None

    async def submit(self, data: bytes, mime_type: str, display_name: str):
        raise AssertionError("submit must not be called while polling")

    async def get_state(self, resource_id: str) -> ResourceState:
        self.calls.append(resource_id)
        if self.error:
            raise self.error
        sequence = self.sequences[resource_id]
        # The last scripted state repeats forever
        return sequence.pop(0) if len(sequence) > 1 else sequence[0]

    def count(self, resource_id: str) -> int:
        return self.calls.count(resource_id)


def make_handle(resource_id: str) -> ResourceHandle:
    return ResourceHandle(
        id=resource_id,
        display_name=f"{resource_id}.bin",
        mime_type="application/octet-stream",
        remote_uri=f"https://storage.test/{resource_id}",
        state=PROCESSING,
    )


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("ReadinessServiceTest")


def make_service(
    storage: ScriptedStorage,
    logger: logging.Logger,
    poll_interval: float = 0.01,
    max_attempts: int | None = 60,
    max_wait_seconds: float | None = None,
) -> ReadinessService:
    return ReadinessService(
        storage_service=storage,
        logger=logger,
        poll_interval=poll_interval,
        max_attempts=max_attempts,
        max_wait_seconds=max_wait_seconds,
    )


class TestConvergence:
    @pytest.mark.asyncio
    async def test_processing_twice_then_active_takes_three_checks(
        self, logger: logging.Logger
    ) -> None:
        storage = ScriptedStorage({"files/a": [PROCESSING, PROCESSING, ACTIVE]})
        handle = make_handle("files/a")

        await make_service(storage, logger).await_all_ready([handle])

        assert storage.count("files/a") == 3
        assert handle.state is ACTIVE

    @pytest.mark.asyncio
    async def test_immediately_active_does_not_wait(
        self, logger: logging.Logger
    ) -> None:
        storage = ScriptedStorage({"files/a": [ACTIVE]})
        handle = make_handle("files/a")
        service = make_service(storage, logger, poll_interval=5.0)

        # Any sleep would exceed the timeout
        await asyncio.wait_for(service.await_all_ready([handle]), timeout=1.0)

        assert storage.count("files/a") == 1
        assert handle.state is ACTIVE

    @pytest.mark.asyncio
    async def test_progress_is_logged_at_debug_before_each_sleep(
        self, logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG, logger=logger.name)
        storage = ScriptedStorage({"files/a": [PROCESSING, PROCESSING, ACTIVE]})

        await make_service(storage, logger).await_all_ready([make_handle("files/a")])

        progress = [
            record
            for record in caplog.records
            if "still PROCESSING" in record.getMessage()
        ]
        assert len(progress) == 2
        assert all(record.levelno == logging.DEBUG for record in progress)

    @pytest.mark.asyncio
    async def test_empty_set_returns_without_checks(
        self, logger: logging.Logger
    ) -> None:
        storage = ScriptedStorage({})

        await make_service(storage, logger).await_all_ready([])

        assert storage.calls == []


class TestConcurrentPolling:
    @pytest.mark.asyncio
    async def test_wait_is_one_interval_when_one_file_needs_one_interval(
        self, logger: logging.Logger
    ) -> None:
        storage = ScriptedStorage(
            {"files/a": [ACTIVE], "files/b": [PROCESSING, ACTIVE]}
        )
        handles = [make_handle("files/a"), make_handle("files/b")]
        service = make_service(storage, logger, poll_interval=0.2)

        loop = asyncio.get_running_loop()
        started = loop.time()
        await service.await_all_ready(handles)
        elapsed = loop.time() - started

        assert 0.2 <= elapsed < 0.35
        assert all(handle.state is ACTIVE for handle in handles)

    @pytest.mark.asyncio
    async def test_files_are_polled_independently(
        self, logger: logging.Logger
    ) -> None:
        storage = ScriptedStorage(
            {"files/a": [PROCESSING, ACTIVE], "files/b": [PROCESSING, ACTIVE]}
        )
        handles = [make_handle("files/a"), make_handle("files/b")]
        service = make_service(storage, logger, poll_interval=0.2)

        loop = asyncio.get_running_loop()
        started = loop.time()
        await service.await_all_ready(handles)
        elapsed = loop.time() - started

        # Sequential waits would take two intervals
        assert elapsed < 0.35
        assert storage.count("files/a") == 2
        assert storage.count("files/b") == 2


class TestFailures:
    @pytest.mark.asyncio
    async def test_failed_state_raises_naming_the_file(
        self, logger: logging.Logger
    ) -> None:
        storage = ScriptedStorage({"files/a": [PROCESSING, FAILED]})
        handle = make_handle("files/a")

        with pytest.raises(ResourceProcessingError) as exc_info:
            await make_service(storage, logger).await_all_ready([handle])

        assert exc_info.value.resource_id == "files/a"
        assert exc_info.value.state == "FAILED"
        assert "files/a" in str(exc_info.value)
        assert handle.state is FAILED

    @pytest.mark.asyncio
    async def test_failure_cancels_outstanding_polls(
        self, logger: logging.Logger
    ) -> None:
        storage = ScriptedStorage({"files/bad": [FAILED], "files/slow": [PROCESSING]})
        handles = [make_handle("files/slow"), make_handle("files/bad")]
        service = make_service(storage, logger, poll_interval=0.05, max_attempts=None)

        with pytest.raises(ResourceProcessingError) as exc_info:
            await asyncio.wait_for(service.await_all_ready(handles), timeout=1.0)

        assert exc_info.value.resource_id == "files/bad"
        checks_after_failure = storage.count("files/slow")
        await asyncio.sleep(0.15)
        assert storage.count("files/slow") == checks_after_failure

    @pytest.mark.asyncio
    async def test_state_check_error_aborts_with_processing_error(
        self, logger: logging.Logger
    ) -> None:
        storage = ScriptedStorage({"files/a": [PROCESSING]})
        storage.error = ConnectionError("connection reset")

        with pytest.raises(ResourceProcessingError) as exc_info:
            await make_service(storage, logger).await_all_ready([make_handle("files/a")])

        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert "connection reset" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_terminal_state_cannot_change(self, logger: logging.Logger) -> None:
        storage = ScriptedStorage({"files/a": [FAILED]})
        handle = make_handle("files/a")
        handle.state = ACTIVE

        with pytest.raises(ResourceProcessingError):
            await make_service(storage, logger).await_all_ready([handle])

        assert handle.state is ACTIVE


class TestBoundedWait:
    @pytest.mark.asyncio
    async def test_attempt_limit_raises_timeout(self, logger: logging.Logger) -> None:
        storage = ScriptedStorage({"files/a": [PROCESSING]})
        service = make_service(storage, logger, max_attempts=3)

        with pytest.raises(ReadinessTimeoutError) as exc_info:
            await service.await_all_ready([make_handle("files/a")])

        assert isinstance(exc_info.value, TimeoutError)
        assert exc_info.value.attempts == 3
        assert storage.count("files/a") == 3

    @pytest.mark.asyncio
    async def test_wall_clock_limit_raises_timeout(
        self, logger: logging.Logger
    ) -> None:
        storage = ScriptedStorage({"files/a": [PROCESSING]})
        service = make_service(
            storage,
            logger,
            poll_interval=0.05,
            max_attempts=None,
            max_wait_seconds=0.1,
        )

        with pytest.raises(ReadinessTimeoutError):
            await asyncio.wait_for(
                service.await_all_ready([make_handle("files/a")]), timeout=1.0
            )

    def test_rejects_invalid_limits(self, logger: logging.Logger) -> None:
        storage = ScriptedStorage({})

        with pytest.raises(ValueError):
            make_service(storage, logger, poll_interval=-1)
        with pytest.raises(ValueError):
            make_service(storage, logger, max_attempts=0)
