"""Execution backends for aB-Agenta operations.

Two implementations of the ``AgentaBackend`` protocol exist: ``LiveBackend``
talks to the aB-Agenta REST API and ``SimulatedBackend`` serves canned data
in test mode. Use ``create_backend()`` to obtain the right one.

Example:
    from agenta_mcp.backends import create_backend

    backend = create_backend(AgentaConfig.from_environment())
    raw = backend.execute(lookup("get_objecttypes"), GetObjectTypesParams())
"""

from agenta_mcp.backends.protocol import AgentaBackend
from agenta_mcp.backends.factory import create_backend
from agenta_mcp.backends.live import LiveBackend
from agenta_mcp.backends.simulated import SimulatedBackend
from agenta_mcp.backends.types import DocumentContent, RawResult, RecordPage, UploadFile

__all__ = [
    "AgentaBackend",
    "DocumentContent",
    "LiveBackend",
    "RawResult",
    "RecordPage",
    "SimulatedBackend",
    "UploadFile",
    "create_backend",
]
