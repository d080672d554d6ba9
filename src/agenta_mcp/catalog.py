"""Operation catalog for the aB-Agenta MCP server.

Static registry of every operation the dispatcher can route. Each entry
pairs a name with its parameter model, description and result shape. The
catalog holds no behavior beyond lookup; it is built at import time and
never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Tuple, Type

from agenta_mcp.exceptions import UnknownOperationError
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
from agenta_mcp.models.responses import ResultKind


def _schema_kind(schema: Dict[str, Any]) -> str:
    """Collapse a JSON schema property into its primitive kind name."""
    if "type" in schema:
        return schema["type"]
    for option in schema.get("anyOf", []):
        if option.get("type") != "null":
            return _schema_kind(option)
    return "any"


@dataclass(frozen=True)
class Operation:
    """A named, schema-described action the dispatcher can route.

    Attributes:
        name: Operation (and MCP tool) name
        description: Human-readable description shown to MCP clients
        params_model: Pydantic model validating the argument mapping
        result_kind: Which result envelope the operation produces
        entity: What the operation creates, for ``CREATED_ID`` results
    """

    name: str
    description: str
    params_model: Type[OperationParams]
    result_kind: ResultKind
    entity: str = "record"

    @property
    def required_params(self) -> Tuple[str, ...]:
        return tuple(name for name, info in self.params_model.model_fields.items() if info.is_required())

    @property
    def optional_params(self) -> Dict[str, str]:
        """Optional parameter names mapped to their declared kind."""
        properties = self.input_schema()["properties"]
        return {
            name: _schema_kind(properties[name])
            for name, info in self.params_model.model_fields.items()
            if not info.is_required()
        }

    def input_schema(self) -> Dict[str, Any]:
        """JSON schema for the operation's argument object."""
        schema = self.params_model.model_json_schema()
        schema.pop("title", None)
        schema.setdefault("properties", {})
        return schema


OPERATIONS: Tuple[Operation, ...] = (
    Operation(
        name="get_record",
        description="Retrieve a record by ID and object type from aB-Agenta",
        params_model=GetRecordParams,
        result_kind=ResultKind.SINGLE_RECORD,
    ),
    Operation(
        name="get_records",
        description="Retrieve multiple records by object type from aB-Agenta",
        params_model=GetRecordsParams,
        result_kind=ResultKind.RECORD_LIST,
    ),
    Operation(
        name="filter_records",
        description="Retrieve records by object type with filter criteria from aB-Agenta",
        params_model=FilterRecordsParams,
        result_kind=ResultKind.RECORD_LIST,
    ),
    Operation(
        name="create_record",
        description="Create a new record in aB-Agenta",
        params_model=CreateRecordParams,
        result_kind=ResultKind.CREATED_ID,
    ),
    Operation(
        name="download_document",
        description="Download a document by ID from aB-Agenta",
        params_model=DownloadDocumentParams,
        result_kind=ResultKind.BINARY,
        entity="document",
    ),
    Operation(
        name="upload_document",
        description="Upload a file as a new document in aB-Agenta",
        params_model=UploadDocumentParams,
        result_kind=ResultKind.CREATED_ID,
        entity="document",
    ),
    Operation(
        name="get_objecttypes",
        description="Load list of all objecttype definitions from aB-Agenta",
        params_model=GetObjectTypesParams,
        result_kind=ResultKind.RECORD_LIST,
        entity="objecttype",
    ),
    Operation(
        name="filter_objecttypes",
        description="Load list of objecttype definitions according to a filter from aB-Agenta",
        params_model=FilterObjectTypesParams,
        result_kind=ResultKind.RECORD_LIST,
        entity="objecttype",
    ),
    Operation(
        name="get_objecttype",
        description="Load a single objecttype definition from aB-Agenta",
        params_model=GetObjectTypeParams,
        result_kind=ResultKind.SINGLE_RECORD,
        entity="objecttype",
    ),
    Operation(
        name="get_properties",
        description="Load list of property definitions for an objecttype from aB-Agenta",
        params_model=GetPropertiesParams,
        result_kind=ResultKind.RECORD_LIST,
        entity="property",
    ),
)


class OperationCatalog:
    """Ordered, read-only collection of operations keyed by name."""

    def __init__(self, operations: Iterable[Operation] = OPERATIONS) -> None:
        self._operations: Tuple[Operation, ...] = tuple(operations)
        self._by_name: Dict[str, Operation] = {op.name: op for op in self._operations}
        if len(self._by_name) != len(self._operations):
            raise ValueError("Operation names must be unique")

    def list(self) -> Tuple[Operation, ...]:
        return self._operations

    def lookup(self, name: str) -> Operation:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownOperationError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)


CATALOG = OperationCatalog()


def list_operations() -> Tuple[Operation, ...]:
    """All operations in their stable listing order."""
    return CATALOG.list()


def lookup(name: str) -> Operation:
    """Find an operation by name.

    Raises:
        UnknownOperationError: If no operation has that name
    """
    return CATALOG.lookup(name)
