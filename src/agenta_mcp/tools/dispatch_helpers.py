"""Shared plumbing between the MCP tool functions and the Dispatcher."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastmcp.exceptions import ToolError

from ..backends import create_backend
from ..config import AgentaConfig
from ..dispatcher import Dispatcher

logger = logging.getLogger(__name__)

_dispatcher: Optional[Dispatcher] = None


def set_dispatcher(dispatcher: Optional[Dispatcher]) -> None:
    """Install the dispatcher used by every tool; ``None`` resets it."""
    global _dispatcher
    _dispatcher = dispatcher


def get_dispatcher() -> Dispatcher:
    """Return the installed dispatcher, building one from the environment if needed."""
    global _dispatcher
    if _dispatcher is None:
        config = AgentaConfig.from_environment()
        config.validate_or_raise()
        _dispatcher = Dispatcher(create_backend(config), debug=config.debug)
        logger.debug("Created dispatcher from environment (mode=%s)", _dispatcher.backend.mode)
    return _dispatcher


def supplied(arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Drop arguments the caller left unset."""
    return {name: value for name, value in arguments.items() if value is not None}


async def invoke(operation: str, arguments: Dict[str, Any]) -> str:
    """Dispatch an operation and return its text.

    Raises:
        ToolError: If the invocation failed; FastMCP reports it with ``isError``
    """
    response = await get_dispatcher().dispatch_async(operation, supplied(arguments))
    if response.is_error:
        raise ToolError(response.text)
    return response.text
