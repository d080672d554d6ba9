"""Simulated backend serving deterministic canned data.

Used when ``AB_AGENTA_TEST_MODE=true``. Never touches the network; the only
I/O is reading the local file named by an upload so that a missing file
fails the same way it would against the live service.
"""

from __future__ import annotations

import copy
import logging
import time
import uuid
from typing import Any, Dict, List, Optional, Sequence

from agenta_mcp.backends.base import BaseBackend, read_upload_file
from agenta_mcp.backends.types import DocumentContent, RecordPage
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
    RecordQueryParams,
    UploadDocumentParams,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

PLAINTEXT_PREFIX = "plaintext__"
RESOLVED_TEXTS: Dict[str, str] = {
    "idadresse": "Test User, John",
    "spartennr": "KFZ",
}

MOCK_DOCUMENT = DocumentContent(
    data=b"Mock PDF document content for testing",
    content_type="application/pdf",
    filename="test-document.pdf",
)

_RECORDS: List[Dict[str, Any]] = [
    {
        "system_id": "test-id-1",
        "vertragsnummer": "VD-TEST-123456",
        "idadresse": "7",
        "spartennr": "139",
        "beitraginclst": 21.55,
        "test_mode": True,
    },
    {
        "system_id": "test-id-2",
        "vertragsnummer": "VD-TEST-789012",
        "idadresse": "8",
        "spartennr": "140",
        "beitraginclst": 45.20,
        "test_mode": True,
    },
]

_FILTERED_RECORDS: List[Dict[str, Any]] = [
    dict(_RECORDS[0], ablauf="2025-12-31T00:00:00.000", filter_applied=True),
    dict(_RECORDS[1], ablauf="2026-06-30T00:00:00.000", filter_applied=True),
]

_OBJECT_TYPES: List[Dict[str, Any]] = [
    {"system_id": "-54346245", "name": "Vertragsdaten", "basicidobject": "-54346245"},
    {"system_id": "-54346246", "name": "Adressdaten", "basicidobject": "-54346246"},
]


def _properties(objecttype: str) -> List[Dict[str, Any]]:
    return [
        {
            "system_ID": "prop-1",
            "idobject": objecttype,
            "name": "vertragsnummer",
            "bound_on": "field1",
            "datatype_user": 1,
            "plaintext__datatype_user": "Text",
            "type": 0,
            "plaintext__type": "Standard",
            "idlist": "",
            "plaintext__idlist": "",
        },
        {
            "system_ID": "prop-2",
            "idobject": objecttype,
            "name": "idadresse",
            "bound_on": "field2",
            "datatype_user": 2,
            "plaintext__datatype_user": "Number",
            "type": 1,
            "plaintext__type": "Reference",
            "idlist": "list-123",
            "plaintext__idlist": "Address List",
        },
    ]


def _with_objecttype(records: Sequence[Dict[str, Any]], objecttype: str) -> List[Dict[str, Any]]:
    """Copy canned records stamped with the requested objecttype."""
    return [{"system_id": r["system_id"], "system_idobject": objecttype, **r} for r in records]


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def resolve_texts(record: Dict[str, Any]) -> Dict[str, Any]:
    """Add ``plaintext__`` shadow fields for every resolvable field present."""
    resolved = dict(record)
    for name, text in RESOLVED_TEXTS.items():
        if name in record:
            resolved[f"{PLAINTEXT_PREFIX}{name}"] = text
    return resolved


def select_fields(record: Dict[str, Any], fields: Optional[str]) -> Dict[str, Any]:
    """Keep only the requested fields; no selection keeps everything."""
    names = _split(fields)
    if not names:
        return record
    return {name: record[name] for name in names if name in record}


def sort_records(records: Sequence[Dict[str, Any]], order: Optional[str]) -> List[Dict[str, Any]]:
    """Sort by a comma-separated order expression such as ``spartennr,ablauf desc``.

    Keys are applied right to left so the first key has the highest
    precedence. Records missing a key sort last.
    """
    result = list(records)
    for term in reversed(_split(order)):
        parts = term.split()
        name = parts[0]
        descending = len(parts) > 1 and parts[1].lower() == "desc"
        present = [r for r in result if r.get(name) is not None]
        missing = [r for r in result if r.get(name) is None]
        present.sort(key=lambda r: (str(type(r[name]).__name__), r[name]), reverse=descending)
        result = present + missing
    return result


def page_records(records: Sequence[Dict[str, Any]], limit: Optional[int], offset: Optional[int]) -> RecordPage:
    """Slice records and compute the pagination metadata the API would send."""
    total = len(records)
    start = offset or 0
    size = DEFAULT_LIMIT if limit is None else limit
    window = list(records[start : start + size])

    if window:
        content_range = f"items {start}-{start + len(window) - 1}/{total}"
    else:
        content_range = f"items */{total}"
    return RecordPage(records=window, total_count=total, content_range=content_range)


def _generate_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


class SimulatedBackend(BaseBackend):
    """Backend answering every operation with canned data of the live shape."""

    mode = "simulated"

    def __init__(self) -> None:
        logger.info("[TEST MODE] Simulated backend initialized; no requests will reach aB-Agenta")

    def _shape(self, record: Dict[str, Any], params: Any) -> Dict[str, Any]:
        if params.resolvetexts:
            record = resolve_texts(record)
        return select_fields(record, params.fields)

    def _list(self, records: Sequence[Dict[str, Any]], params: RecordQueryParams) -> RecordPage:
        for flag in ("deletedrecords", "archivedrecords"):
            value = getattr(params, flag)
            if value is not None:
                logger.debug("[TEST MODE] %s=%s has no effect on canned records", flag, value)

        ordered = sort_records(copy.deepcopy(list(records)), params.order)
        page = page_records(ordered, params.limit, params.offset)
        return RecordPage(
            records=[self._shape(r, params) for r in page.records],
            total_count=page.total_count,
            content_range=page.content_range,
        )

    # ---------------------------------------------------------------------
    # Records
    # ---------------------------------------------------------------------

    def get_record(self, params: GetRecordParams) -> Dict[str, Any]:
        logger.info("[TEST MODE] get_record objecttype=%s id=%s", params.objecttype, params.id)
        record = {
            "system_id": params.id,
            "system_idobject": params.objecttype,
            "vertragsnummer": "VD-TEST-123456",
            "idadresse": "7",
            "spartennr": "139",
            "beitraginclst": 21.55,
            "test_mode": True,
        }
        return self._shape(record, params)

    def get_records(self, params: GetRecordsParams) -> RecordPage:
        logger.info("[TEST MODE] get_records objecttype=%s", params.objecttype)
        return self._list(_with_objecttype(_RECORDS, params.objecttype), params)

    def filter_records(self, params: FilterRecordsParams) -> RecordPage:
        logger.info("[TEST MODE] filter_records objecttype=%s filter=%s", params.objecttype, params.filter)
        return self._list(_with_objecttype(_FILTERED_RECORDS, params.objecttype), params)

    def create_record(self, params: CreateRecordParams) -> str:
        identifier = _generate_id("test")
        logger.info(
            "[TEST MODE] create_record objecttype=%s fields=%s -> %s",
            params.objecttype,
            sorted(params.data),
            identifier,
        )
        return identifier

    # ---------------------------------------------------------------------
    # Documents
    # ---------------------------------------------------------------------

    def download_document(self, params: DownloadDocumentParams) -> DocumentContent:
        logger.info("[TEST MODE] download_document id=%s", params.id)
        return MOCK_DOCUMENT

    def upload_document(self, params: UploadDocumentParams) -> str:
        upload = read_upload_file(params)
        identifier = _generate_id("doc-test")
        logger.info(
            "[TEST MODE] upload_document %s (%d bytes) for address %s -> %s",
            upload.filename,
            upload.size,
            params.addressid,
            identifier,
        )
        return identifier

    # ---------------------------------------------------------------------
    # Metadata
    # ---------------------------------------------------------------------

    def get_objecttypes(self, params: GetObjectTypesParams) -> List[Dict[str, Any]]:
        logger.info("[TEST MODE] get_objecttypes")
        return copy.deepcopy(_OBJECT_TYPES)

    def filter_objecttypes(self, params: FilterObjectTypesParams) -> List[Dict[str, Any]]:
        logger.info("[TEST MODE] filter_objecttypes filter=%s", params.filter)
        return copy.deepcopy(_OBJECT_TYPES[:1])

    def get_objecttype(self, params: GetObjectTypeParams) -> Dict[str, Any]:
        logger.info("[TEST MODE] get_objecttype objecttype=%s", params.objecttype)
        return {"system_id": params.objecttype, "name": "Vertragsdaten", "basicidobject": params.objecttype}

    def get_properties(self, params: GetPropertiesParams) -> List[Dict[str, Any]]:
        logger.info("[TEST MODE] get_properties objecttype=%s", params.objecttype)
        return _properties(params.objecttype)
