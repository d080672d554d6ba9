"""MCP tools for aB-Agenta data access.

This package contains the MCP tool implementations organized by functionality:
- records: Load, filter and create records
- documents: Download and upload documents
- objecttypes: Objecttype and property definitions

Every tool is a thin wrapper that hands its arguments to the shared
``Dispatcher``. The functions are registered by ``agenta_mcp.utils.register_tools``.

Example usage:
    from agenta_mcp.tools import records

    text = await records.get_record(objecttype="-54346245", id="aad2210a-...")
"""

from importlib import import_module
from types import ModuleType
from typing import Dict

_MODULE_PATHS = {
    "records": "agenta_mcp.tools.records",
    "documents": "agenta_mcp.tools.documents",
    "objecttypes": "agenta_mcp.tools.objecttypes",
}

AVAILABLE_MODULES = list(_MODULE_PATHS.keys())
__all__ = AVAILABLE_MODULES.copy()

_LOADED_MODULES: Dict[str, ModuleType] = {}


def __getattr__(name: str) -> ModuleType:
    if name not in _MODULE_PATHS:
        raise AttributeError(f"module 'agenta_mcp.tools' has no attribute '{name}'")
    if name not in _LOADED_MODULES:
        _LOADED_MODULES[name] = import_module(_MODULE_PATHS[name])
    return _LOADED_MODULES[name]


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + AVAILABLE_MODULES)
