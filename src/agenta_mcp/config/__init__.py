"""Configuration helpers for the aB-Agenta MCP server."""

from .agenta import AgentaConfig
from .base import ConfigurationError, ConfigValidationResult, SerializationError, ValidationError

__all__ = [
    "AgentaConfig",
    "ConfigValidationResult",
    "ConfigurationError",
    "SerializationError",
    "ValidationError",
]
