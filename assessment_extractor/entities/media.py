from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ResourceState(str, Enum):
    """Lifecycle state of an uploaded file as reported by the storage endpoint."""

    PROCESSING = "PROCESSING"
    ACTIVE = "ACTIVE"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self is not ResourceState.PROCESSING


@dataclass(frozen=True)
class MediaItem:
    """A local file to upload, with the media type declared in the manifest."""

    local_path: str
    mime_type: str


@dataclass
class ResourceHandle:
    """Reference to a file after it has been submitted to remote storage."""

    id: str
    display_name: str
    mime_type: str
    remote_uri: str
    state: ResourceState = ResourceState.PROCESSING

    def transition(self, state: ResourceState) -> None:
        """
        Move the handle to a new state.

        Terminal states are final: re-applying the same terminal state is a
        no-op, anything else raises ValueError.
        """
        if self.state.is_terminal and state is not self.state:
            raise ValueError(
                f"File {self.id} is already {self.state.value} and cannot become {state.value}"
            )
        self.state = state
