"""aB-Agenta MCP Server - MCP tools for the aB-Agenta records service.

This package exposes the record, document and metadata operations of the
aB-Agenta REST API (``api2_1``) as Model Context Protocol tools, backed
either by the live service or by a deterministic offline simulation.
"""

from __future__ import annotations

from .catalog import Operation, list_operations, lookup
from .config import AgentaConfig
from .dispatcher import Dispatcher, ToolResponse

__version__ = "1.0.0"

__all__ = [
    "AgentaConfig",
    "Dispatcher",
    "Operation",
    "ToolResponse",
    "list_operations",
    "lookup",
    "__version__",
]
