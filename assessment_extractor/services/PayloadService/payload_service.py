from __future__ import annotations

from collections.abc import Sequence

from assessment_extractor.entities.errors import ResourceProcessingError
from assessment_extractor.entities.media import ResourceHandle, ResourceState
from assessment_extractor.entities.payload import (
    FilePart,
    RequestPart,
    RequestPayload,
    TextPart,
)
from assessment_extractor.services.PayloadService.payload_service_interface import (
    PayloadServiceInterface,
)


class PayloadService(PayloadServiceInterface):
    """
    Assembles the multi-part request from ready handles.

    Holds no state besides the optional text parts placed around the file
    references, so the same handles always produce an equal payload.
    """

    def __init__(
        self,
        leading_text: str | None = None,
        trailing_text: str | None = None,
    ) -> None:
        self.leading_text = leading_text
        self.trailing_text = trailing_text

    def build_request(
        self, ready_handles: Sequence[ResourceHandle], instruction_text: str
    ) -> RequestPayload:
        if not instruction_text or not instruction_text.strip():
            raise ValueError("instruction_text must not be empty")

        parts: list[RequestPart] = []
        if self.leading_text:
            parts.append(TextPart(text=self.leading_text))

        for handle in ready_handles:
            # Only handles that passed the readiness barrier may be referenced
            if handle.state is not ResourceState.ACTIVE:
                raise ResourceProcessingError(
                    handle.id, handle.state.value, "file is not ready for use"
                )
            parts.append(
                FilePart(mime_type=handle.mime_type, remote_uri=handle.remote_uri)
            )

        if self.trailing_text:
            parts.append(TextPart(text=self.trailing_text))

        return RequestPayload(instruction=instruction_text, parts=tuple(parts))
