"""Manifest of media files to upload, validated with Pydantic."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from assessment_extractor.entities.media import MediaItem


class ManifestEntry(BaseModel):
    path: str
    mime_type: str

    @field_validator("path", "mime_type")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


def load_manifest(entries: list[Any], base_dir: str | Path = ".") -> list[MediaItem]:
    """
    Turn raw manifest entries into MediaItems, preserving their order.

    Relative paths are resolved against `base_dir`.

    Raises:
        ValueError: If the manifest is empty or an entry is invalid.
    """
    if not entries:
        raise ValueError("Manifest must list at least one file")

    base = Path(base_dir)
    items: list[MediaItem] = []
    for index, raw in enumerate(entries):
        try:
            entry = ManifestEntry.model_validate(raw)
        except ValidationError as e:
            raise ValueError(f"Invalid manifest entry #{index}: {e}") from e

        path = Path(entry.path)
        if not path.is_absolute():
            path = base / path
        items.append(MediaItem(local_path=str(path), mime_type=entry.mime_type))

    return items
