"""Pydantic models for operation input parameters.

One model per catalog operation. The dispatcher validates the caller's
argument mapping against these models before anything reaches a backend,
and the JSON schemas advertised to MCP clients are generated from them.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

RecordState = Literal[1, 2, 3]


class OperationParams(BaseModel):
    """Base model for all operation parameters."""

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)


# ============================================================================
# Shared field definitions
# ============================================================================

ObjectType = Annotated[
    str,
    Field(
        description="The objecttype of the records (e.g., -54346245)",
        examples=["-54346245"],
    ),
]

FilterExpression = Annotated[
    Dict[str, Any],
    Field(
        description=(
            "Filter criteria in MongoDB-like query format "
            "(e.g., {'$or': [{'idadresse': '7'}, {'ablauf': {'$gt': '2010-01-01T00:00:00.000'}}]})"
        ),
    ),
]

IdempotencyKey = Annotated[
    Optional[str],
    Field(
        validation_alias=AliasChoices("idempotency_key", "idempotencyKey"),
        description="A unique key to realize idempotent behaviour (optional but recommended)",
    ),
]


class RecordQueryParams(OperationParams):
    """Query-string options shared by the record list operations."""

    fields: Annotated[
        Optional[str],
        Field(
            description="Comma-separated list of fields to load (e.g., 'system_id,idadresse,ablauf,spartennr')",
        ),
    ] = None
    order: Annotated[
        Optional[str],
        Field(
            description="Comma-separated list of fields to order by (e.g., 'spartennr,ablauf desc')",
        ),
    ] = None
    limit: Annotated[
        Optional[int],
        Field(ge=1, description="Maximal number of records to return (default: 10)"),
    ] = None
    offset: Annotated[
        Optional[int],
        Field(ge=0, description="Number of records to skip (default: 0)"),
    ] = None
    resolvetexts: Annotated[
        Optional[bool],
        Field(
            description="Resolve encoded fields and references to nice text with 'plaintext__' prefix",
        ),
    ] = None
    deletedrecords: Annotated[
        Optional[RecordState],
        Field(
            description=(
                "Whether deleted records are loaded: 1=active only, 2=deleted only, "
                "3=active and deleted (default: 1)"
            ),
        ),
    ] = None
    archivedrecords: Annotated[
        Optional[RecordState],
        Field(
            description=(
                "Whether archived records are loaded: 1=active only, 2=archived only, "
                "3=active and archived (default: 1)"
            ),
        ),
    ] = None


# ============================================================================
# Record operations
# ============================================================================


class GetRecordParams(OperationParams):
    """Parameters for get_record."""

    objecttype: ObjectType
    id: Annotated[
        str,
        Field(
            description="The ID of the record to retrieve",
            examples=["aad2210a-89b8-4556-9091-d94598dcd9eb"],
        ),
    ]
    fields: Annotated[
        Optional[str],
        Field(description="Comma-separated list of record fields to load; omit to load all fields"),
    ] = None
    resolvetexts: Annotated[
        Optional[bool],
        Field(description="Resolve encoded fields and references to nice text"),
    ] = None


class GetRecordsParams(RecordQueryParams):
    """Parameters for get_records."""

    objecttype: ObjectType


class FilterRecordsParams(RecordQueryParams):
    """Parameters for filter_records."""

    objecttype: ObjectType
    filter: FilterExpression


class CreateRecordParams(OperationParams):
    """Parameters for create_record."""

    objecttype: ObjectType
    data: Annotated[Dict[str, Any], Field(description="The fields of the new record")]
    idempotency_key: IdempotencyKey = None


# ============================================================================
# Document operations
# ============================================================================


class DownloadDocumentParams(OperationParams):
    """Parameters for download_document."""

    id: Annotated[
        str,
        Field(
            description="ID of the document to download",
            examples=["8573a0d3-f6ea-4029-86d4-7a5359e054cc"],
        ),
    ]


class UploadDocumentParams(OperationParams):
    """Parameters for upload_document."""

    addressid: Annotated[
        str,
        Field(description="ID of address-record to which the document belongs (e.g., 7)", examples=["7"]),
    ]
    filepath: Annotated[str, Field(description="Path to the file to upload")]
    filename: Annotated[
        Optional[str],
        Field(
            description="Filename for the document (e.g., scan_2022_1_1.pdf); defaults to the file's name",
        ),
    ] = None
    referenceid: Annotated[
        Optional[str],
        Field(description="ID of another record to which the document also belongs"),
    ] = None
    referenceobjecttype: Annotated[
        Optional[str],
        Field(description="Objecttype of the reference record (e.g., -54346245)"),
    ] = None
    info: Annotated[
        Optional[str],
        Field(description="Info text of the document (e.g., correspondence)"),
    ] = None
    type: Annotated[
        Optional[str],
        Field(description="Type of the document (e.g., scan)"),
    ] = None
    changedate: Annotated[
        Optional[str],
        Field(
            description="Datetime of last change of the document (ISO 8601 format, e.g., 2022-01-01T00:00:00)",
        ),
    ] = None
    idempotency_key: IdempotencyKey = None


# ============================================================================
# Metadata operations
# ============================================================================


class GetObjectTypesParams(OperationParams):
    """get_objecttypes takes no parameters."""


class FilterObjectTypesParams(OperationParams):
    """Parameters for filter_objecttypes."""

    filter: Annotated[
        Dict[str, Any],
        Field(description="Filter criteria in MongoDB-like query format (e.g., {'name': {'$endsWith': 'daten'}})"),
    ]


class GetObjectTypeParams(OperationParams):
    """Parameters for get_objecttype."""

    objecttype: Annotated[str, Field(description="The objecttype to retrieve (e.g., -54346245)")]


class GetPropertiesParams(OperationParams):
    """Parameters for get_properties."""

    objecttype: Annotated[str, Field(description="The objecttype whose properties to load (e.g., -54346245)")]
