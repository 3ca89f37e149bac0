from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class FilePart:
    """Reference to an uploaded file inside a request."""

    mime_type: str
    remote_uri: str


@dataclass(frozen=True)
class TextPart:
    text: str


RequestPart = Union[FilePart, TextPart]


@dataclass(frozen=True)
class RequestPayload:
    """Instruction text plus the ordered parts sent as the first user turn."""

    instruction: str
    parts: tuple[RequestPart, ...] = ()

    @property
    def file_parts(self) -> tuple[FilePart, ...]:
        return tuple(part for part in self.parts if isinstance(part, FilePart))


@dataclass(frozen=True)
class GenerationSettings:
    """Model configuration applied to every extraction session."""

    model_name: str
    temperature: float = 1.0
    max_output_tokens: int = 8192
    response_mime_type: str = "application/json"


@dataclass(frozen=True)
class UsageMetadata:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True)
class InferenceResponse:
    """Raw model output and its token accounting."""

    text: str
    usage: UsageMetadata = field(default_factory=UsageMetadata)
