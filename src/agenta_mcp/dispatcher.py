"""Dispatcher: the single entry point for operation invocations.

Each invocation moves through ``received -> validated -> executed ->
normalized | classified -> responded``. Validation happens here, before a
backend is touched. Every failure, expected or not, comes back as an
error-flagged ``ToolResponse``; ``dispatch`` itself never raises.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from agenta_mcp.backends.protocol import AgentaBackend
from agenta_mcp.catalog import CATALOG, Operation, OperationCatalog
from agenta_mcp.classifier import classify
from agenta_mcp.exceptions import (
    AgentaMCPError,
    MissingRequiredParameterError,
    ParameterValidationError,
)
from agenta_mcp.models.inputs import OperationParams
from agenta_mcp.models.responses import ClassifiedError, ToolResponse
from agenta_mcp.normalizer import normalize, render

logger = logging.getLogger(__name__)


def _is_missing(arguments: Mapping[str, Any], name: str) -> bool:
    if name not in arguments:
        return True
    value = arguments[name]
    return value is None or (isinstance(value, str) and not value.strip())


def find_missing(operation: Operation, arguments: Mapping[str, Any]) -> List[str]:
    """Required parameters that are absent, ``None`` or blank."""
    return [name for name in operation.required_params if _is_missing(arguments, name)]


def validate_arguments(operation: Operation, arguments: Optional[Mapping[str, Any]]) -> OperationParams:
    """Check an argument mapping against an operation's parameter model.

    Raises:
        MissingRequiredParameterError: Naming every missing required parameter
        ParameterValidationError: If supplied values have the wrong kind
    """
    arguments = dict(arguments or {})

    missing = find_missing(operation, arguments)
    if missing:
        raise MissingRequiredParameterError(operation.name, missing)

    try:
        return operation.params_model.model_validate(arguments)
    except ValidationError as exc:
        errors: Dict[str, str] = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "arguments"
            errors.setdefault(field, error["msg"])
        raise ParameterValidationError(operation.name, errors) from None


class Dispatcher:
    """Route named invocations through validation, execution and rendering.

    Args:
        backend: Execution backend chosen by ``create_backend``
        catalog: Operations that may be invoked
        debug: Include request details in API error diagnostics
    """

    def __init__(
        self,
        backend: AgentaBackend,
        catalog: OperationCatalog = CATALOG,
        debug: bool = False,
    ) -> None:
        self.backend = backend
        self.catalog = catalog
        self.debug = debug

    def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResponse:
        """Run one invocation to completion and return its response."""
        logger.debug("%s: received", name)
        try:
            operation = self.catalog.lookup(name)
            params = validate_arguments(operation, arguments)
            logger.debug("%s: validated", name)

            raw = self.backend.execute(operation, params)
            logger.debug("%s: executed", name)

            envelope = normalize(raw)
            logger.debug("%s: normalized as %s", name, envelope.kind.value)
            response = ToolResponse(text=render(envelope), envelope=envelope)
        except AgentaMCPError as exc:
            response = self._failure(name, exc)
        except Exception as exc:
            logger.exception("Unexpected error while dispatching %s", name)
            response = self._failure(name, exc)

        logger.debug("%s: responded (is_error=%s)", name, response.is_error)
        return response

    async def dispatch_async(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResponse:
        """Like ``dispatch``, but runs the blocking call in a worker thread."""
        return await asyncio.to_thread(self.dispatch, name, arguments)

    def _failure(self, name: str, exc: BaseException) -> ToolResponse:
        classified: ClassifiedError = classify(exc, debug=self.debug)
        logger.info("%s: classified as %s: %s", name, classified.kind, classified.summary)
        return ToolResponse.from_error(classified)


__all__ = ["Dispatcher", "ToolResponse", "find_missing", "validate_arguments"]
