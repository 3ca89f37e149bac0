"""
Environment-aware configuration.

Values come from `<config_path>/<env>.yaml`; an environment variable with the
same name as a key takes precedence over the file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, TypeVar, cast as typing_cast

import yaml

from assessment_extractor.components.configuration.configuration_interface import (
    ConfigurationInterface,
)

T = TypeVar("T")

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "off"}

logger = logging.getLogger(__name__)


class Configuration(ConfigurationInterface):
    def __init__(self, env: str, config_path: str) -> None:
        self.env = env
        self.config_file = Path(config_path) / f"{env}.yaml"
        self._values: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        if not self.config_file.exists():
            logger.warning(
                "Configuration file %s not found, using environment only",
                self.config_file,
            )
            return {}

        with self.config_file.open(encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}

        if not isinstance(data, dict):
            raise ValueError(
                f"Configuration file {self.config_file} must contain a mapping"
            )
        return data

    def get_configuration(self, key: str, cast: type[T], default: Any = ...) -> T:
        raw: Any = os.getenv(key)
        # A blank variable (e.g. `KEY=` in .env) counts as unset
        if raw is None or not raw.strip():
            raw = self._values.get(key)

        if raw is None:
            if default is ...:
                raise ValueError(f"Missing required configuration key: {key}")
            return typing_cast(T, default)

        try:
            return self._cast(raw, cast)
        except (TypeError, ValueError, yaml.YAMLError) as e:
            raise ValueError(
                f"Configuration key {key} cannot be read as {cast.__name__}: {raw!r}"
            ) from e

    @staticmethod
    def _cast(raw: Any, cast: type[T]) -> T:
        if cast is bool:
            if isinstance(raw, bool):
                return typing_cast(T, raw)
            value = str(raw).strip().lower()
            if value in _TRUE_VALUES:
                return typing_cast(T, True)
            if value in _FALSE_VALUES:
                return typing_cast(T, False)
            raise ValueError(f"Not a boolean: {raw!r}")

        if cast in (list, dict):
            # Structured values given through the environment are YAML/JSON text
            if isinstance(raw, str):
                raw = yaml.safe_load(raw)
            if not isinstance(raw, cast):
                raise TypeError(f"Expected {cast.__name__}, got {type(raw).__name__}")
            return typing_cast(T, raw)

        return cast(raw)  # type: ignore[call-arg]
