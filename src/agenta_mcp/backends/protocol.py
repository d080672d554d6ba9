"""AgentaBackend Protocol - Contract for execution backend implementations.

The protocol uses structural subtyping (Protocol) rather than inheritance.
Two implementations exist: ``LiveBackend`` issues HTTP calls against the
aB-Agenta API and ``SimulatedBackend`` fabricates deterministic canned data
of the same shape. Both must be indistinguishable to the normalizer.

The protocol covers:
- Generic execution (1 method)
- Record operations (4 methods)
- Document operations (2 methods)
- Metadata operations (4 methods)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from agenta_mcp.backends.types import DocumentContent, RawResult, RecordPage
    from agenta_mcp.catalog import Operation
    from agenta_mcp.models.inputs import (
        CreateRecordParams,
        DownloadDocumentParams,
        FilterObjectTypesParams,
        FilterRecordsParams,
        GetObjectTypeParams,
        GetObjectTypesParams,
        GetPropertiesParams,
        GetRecordParams,
        GetRecordsParams,
        OperationParams,
        UploadDocumentParams,
    )


@runtime_checkable
class AgentaBackend(Protocol):
    """Protocol defining the contract for execution backends.

    Every method may raise ``RemoteApiError`` (HTTP status from the API),
    ``TransportError`` (no usable response) or ``LocalFileError`` (upload
    source unreadable). Validation has already happened when a method is
    called; parameters arrive as validated pydantic models.
    """

    mode: str

    def execute(self, operation: "Operation", params: "OperationParams") -> "RawResult":
        """Run ``operation`` and return its result tagged with the operation's kind."""
        ...

    # Record operations

    def get_record(self, params: "GetRecordParams") -> Dict[str, Any]:
        """Load a single record."""
        ...

    def get_records(self, params: "GetRecordsParams") -> "RecordPage":
        """Load a page of records with optional pagination metadata."""
        ...

    def filter_records(self, params: "FilterRecordsParams") -> "RecordPage":
        """Load a page of records matching a filter expression."""
        ...

    def create_record(self, params: "CreateRecordParams") -> Union[str, Any]:
        """Create a record and return the generated identifier."""
        ...

    # Document operations

    def download_document(self, params: "DownloadDocumentParams") -> "DocumentContent":
        """Fetch a document's raw bytes and metadata."""
        ...

    def upload_document(self, params: "UploadDocumentParams") -> Union[str, Any]:
        """Upload a local file and return the new document identifier."""
        ...

    # Metadata operations

    def get_objecttypes(self, params: "GetObjectTypesParams") -> List[Dict[str, Any]]:
        """List all objecttype definitions."""
        ...

    def filter_objecttypes(self, params: "FilterObjectTypesParams") -> List[Dict[str, Any]]:
        """List objecttype definitions matching a filter expression."""
        ...

    def get_objecttype(self, params: "GetObjectTypeParams") -> Dict[str, Any]:
        """Load a single objecttype definition."""
        ...

    def get_properties(self, params: "GetPropertiesParams") -> List[Dict[str, Any]]:
        """List the property definitions of an objecttype."""
        ...
