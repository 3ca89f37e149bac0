from __future__ import annotations


class ExtractionRunError(Exception):
    """Base error for anything that aborts an extraction run."""


class UploadError(ExtractionRunError):
    """Raised when a local file cannot be read or the remote upload is rejected."""

    def __init__(self, local_path: str, reason: str) -> None:
        self.local_path = local_path
        self.reason = reason
        super().__init__(f"Failed to upload {local_path}: {reason}")


class ResourceProcessingError(ExtractionRunError):
    """Raised when an uploaded file ends in a state other than ACTIVE."""

    def __init__(self, resource_id: str, state: str, reason: str | None = None) -> None:
        self.resource_id = resource_id
        self.state = state
        message = f"File {resource_id} failed to process (state: {state})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ReadinessTimeoutError(ExtractionRunError, TimeoutError):
    """Raised when a file is still PROCESSING once the polling budget is spent."""

    def __init__(self, resource_id: str, attempts: int) -> None:
        self.resource_id = resource_id
        self.attempts = attempts
        super().__init__(
            f"File {resource_id} was still PROCESSING after {attempts} state checks"
        )


class InferenceError(ExtractionRunError):
    """Raised when the model endpoint rejects or fails the request."""
