"""Shared exception types for the aB-Agenta MCP server.

Validation errors are raised by the dispatcher before any backend call.
Backend errors (``RemoteApiError``, ``TransportError``, ``LocalFileError``)
are raised by the execution backends and turned into diagnostic text by
``agenta_mcp.classifier``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence


class AgentaMCPError(RuntimeError):
    """Base exception for aB-Agenta MCP server errors."""

    def __init__(self, message: str, *, error_code: str = "agenta_mcp_error") -> None:
        super().__init__(message)
        self.error_code = error_code


class UnknownOperationError(AgentaMCPError):
    """No operation with the requested name exists in the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}", error_code="UNKNOWN_OPERATION")
        self.name = name


class MissingRequiredParameterError(AgentaMCPError):
    """One or more required parameters were not supplied."""

    def __init__(self, operation: str, missing: Sequence[str]) -> None:
        self.operation = operation
        self.missing = list(missing)
        if len(self.missing) == 1:
            message = f"{self.missing[0]} is a required parameter"
        else:
            names = ", ".join(self.missing[:-1]) + f" and {self.missing[-1]}"
            message = f"{names} are required parameters"
        super().__init__(message, error_code="MISSING_REQUIRED_PARAMETER")


class ParameterValidationError(AgentaMCPError):
    """Supplied parameters do not match the declared parameter kinds."""

    def __init__(self, operation: str, errors: Mapping[str, str]) -> None:
        self.operation = operation
        self.errors = dict(errors)
        details = "; ".join(f"{name}: {reason}" for name, reason in self.errors.items())
        super().__init__(f"Invalid parameters for {operation}: {details}", error_code="INVALID_PARAMETER")


@dataclass(frozen=True)
class RequestContext:
    """Outgoing request details kept for diagnostics."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)


class RemoteApiError(AgentaMCPError):
    """The aB-Agenta API answered with a non-success HTTP status.

    Attributes:
        status: HTTP status code
        reason: HTTP status text (e.g. ``Unauthorized``)
        body: Decoded JSON body when the response was JSON, else the raw text
        request: The request that produced the response
    """

    def __init__(
        self,
        status: int,
        *,
        reason: str = "",
        body: Any = None,
        request: Optional[RequestContext] = None,
    ) -> None:
        super().__init__(f"Request failed with status code {status}", error_code="REMOTE_API_ERROR")
        self.status = status
        self.reason = reason
        self.body = body
        self.request = request

    @property
    def body_text(self) -> str:
        """The response body as text, whatever its decoded form."""
        if self.body is None:
            return ""
        if isinstance(self.body, str):
            return self.body
        return json.dumps(self.body, ensure_ascii=False)


class TransportError(AgentaMCPError):
    """The request could not be completed (connection, timeout, decoding)."""

    def __init__(self, message: str, *, request: Optional[RequestContext] = None) -> None:
        super().__init__(message, error_code="TRANSPORT_FAILURE")
        self.request = request


class LocalFileError(AgentaMCPError):
    """A local file needed for an upload could not be read."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, error_code="LOCAL_FILE_ERROR")
        self.path = path


__all__: List[str] = [
    "AgentaMCPError",
    "LocalFileError",
    "MissingRequiredParameterError",
    "ParameterValidationError",
    "RemoteApiError",
    "RequestContext",
    "TransportError",
    "UnknownOperationError",
]
