from __future__ import annotations

from typing import Annotated, Any, Dict, Optional, Union

from pydantic import Field

from .dispatch_helpers import invoke

# Every parameter is optional here; the dispatcher reports missing or invalid
# arguments in one place.

ObjectType = Annotated[
    Optional[Union[str, int]],
    Field(
        description="The objecttype of the records (e.g., -54346245)",
        examples=["-54346245"],
    ),
]

Fields = Annotated[
    Optional[str],
    Field(description="Comma-separated list of fields to load (e.g., 'system_id,idadresse,ablauf,spartennr')"),
]

ResolveTexts = Annotated[
    Optional[bool],
    Field(description="Resolve encoded fields and references to nice text with 'plaintext__' prefix"),
]

Order = Annotated[
    Optional[str],
    Field(description="Comma-separated list of fields to order by (e.g., 'spartennr,ablauf desc')"),
]

Limit = Annotated[Optional[int], Field(description="Maximal number of records to return (default: 10)")]

Offset = Annotated[Optional[int], Field(description="Number of records to skip (default: 0)")]

DeletedRecords = Annotated[
    Optional[int],
    Field(description="1=active only, 2=deleted only, 3=active and deleted (default: 1)"),
]

ArchivedRecords = Annotated[
    Optional[int],
    Field(description="1=active only, 2=archived only, 3=active and archived (default: 1)"),
]

FilterExpression = Annotated[
    Optional[Dict[str, Any]],
    Field(
        description=(
            "Filter criteria in MongoDB-like query format "
            "(e.g., {'$or': [{'idadresse': '7'}, {'ablauf': {'$gt': '2010-01-01T00:00:00.000'}}]})"
        ),
    ),
]

IdempotencyKey = Annotated[
    Optional[str],
    Field(description="A unique key to realize idempotent behaviour (optional but recommended)"),
]


async def get_record(
    objecttype: ObjectType = None,
    id: Annotated[
        Optional[Union[str, int]],
        Field(description="The ID of the record to retrieve", examples=["aad2210a-89b8-4556-9091-d94598dcd9eb"]),
    ] = None,
    fields: Fields = None,
    resolvetexts: ResolveTexts = None,
) -> str:
    """Retrieve a record by ID and object type from aB-Agenta

    Args:
        objecttype: The objecttype of the record (e.g., -54346245)
        id: The ID of the record to retrieve
        fields: Comma-separated list of fields to load; omit to load all fields
        resolvetexts: Add 'plaintext__' fields with readable text for encoded fields and references

    Returns:
        The record as pretty-printed JSON.
    """
    return await invoke("get_record", dict(locals()))


async def get_records(
    objecttype: ObjectType = None,
    fields: Fields = None,
    order: Order = None,
    limit: Limit = None,
    offset: Offset = None,
    resolvetexts: ResolveTexts = None,
    deletedrecords: DeletedRecords = None,
    archivedrecords: ArchivedRecords = None,
) -> str:
    """Retrieve multiple records by object type from aB-Agenta

    Returns:
        The records as pretty-printed JSON, followed by the total count and
        content range when the service reports them.
    """
    return await invoke("get_records", dict(locals()))


async def filter_records(
    objecttype: ObjectType = None,
    filter: FilterExpression = None,
    fields: Fields = None,
    order: Order = None,
    limit: Limit = None,
    offset: Offset = None,
    resolvetexts: ResolveTexts = None,
    deletedrecords: DeletedRecords = None,
    archivedrecords: ArchivedRecords = None,
) -> str:
    """Retrieve records by object type with filter criteria from aB-Agenta

    Returns:
        The matching records as pretty-printed JSON with pagination details.
    """
    return await invoke("filter_records", dict(locals()))


async def create_record(
    objecttype: ObjectType = None,
    data: Annotated[Optional[Dict[str, Any]], Field(description="The fields of the new record")] = None,
    idempotency_key: IdempotencyKey = None,
    idempotencyKey: Annotated[Optional[str], Field(description="Same as idempotency_key")] = None,
) -> str:
    """Create a new record in aB-Agenta

    Returns:
        Confirmation text with the ID generated for the new record.
    """
    return await invoke("create_record", dict(locals()))
