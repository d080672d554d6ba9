"""Validation interface shared by configuration objects."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List


class ConfigurationError(Exception):
    """Base exception for configuration failures."""


class ValidationError(ConfigurationError):
    """A configuration holds invalid or incomplete settings."""


class SerializationError(ConfigurationError):
    """Configuration data could not be read from the environment or a mapping."""


@dataclass
class ConfigValidationResult:
    """Problems found while validating a configuration; none means valid."""

    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def add_error(self, error: str) -> None:
        self.errors.append(error)


class Configuration(ABC):
    """Settings object that can check itself and round-trip through a dict."""

    @abstractmethod
    def validate(self) -> ConfigValidationResult: ...

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]: ...

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> Configuration:
        """Build a configuration from a mapping.

        Raises:
            SerializationError: If the mapping has the wrong type or unknown keys
        """

    def is_valid(self) -> bool:
        return self.validate().is_valid

    def validate_or_raise(self) -> None:
        """Raise ValidationError listing every problem, one per line."""
        result = self.validate()
        if result.errors:
            lines = "\n".join(f"  - {error}" for error in result.errors)
            raise ValidationError(f"Invalid aB-Agenta configuration:\n{lines}")
