from abc import ABC, abstractmethod
from typing import Any, TypeVar

T = TypeVar("T")


class ConfigurationInterface(ABC):
    @abstractmethod
    def get_configuration(self, key: str, cast: type[T], default: Any = ...) -> T:
        """
        Return the value for `key` converted to `cast`.

        Raises:
            ValueError: If the key is missing and no default was given, or the
                value cannot be converted.
        """
