"""
Domain entities shared by the extraction services.
"""

from assessment_extractor.entities.errors import (
    ExtractionRunError,
    InferenceError,
    ReadinessTimeoutError,
    ResourceProcessingError,
    UploadError,
)
from assessment_extractor.entities.media import MediaItem, ResourceHandle, ResourceState
from assessment_extractor.entities.payload import (
    FilePart,
    GenerationSettings,
    InferenceResponse,
    RequestPayload,
    TextPart,
    UsageMetadata,
)

__all__ = [
    "ExtractionRunError",
    "FilePart",
    "GenerationSettings",
    "InferenceError",
    "InferenceResponse",
    "MediaItem",
    "ReadinessTimeoutError",
    "RequestPayload",
    "ResourceHandle",
    "ResourceProcessingError",
    "ResourceState",
    "TextPart",
    "UploadError",
    "UsageMetadata",
]
