"""Turn tagged backend output into result envelopes and response text.

``normalize`` is keyed solely on the kind the backend attached to the raw
result; it never inspects the payload to guess a shape. ``render`` produces
the text shown to MCP clients.
"""

from __future__ import annotations

import base64
import json
from typing import Any

from agenta_mcp.backends.types import RawResult
from agenta_mcp.models.responses import (
    BinaryPayload,
    CreatedId,
    RecordList,
    ResultEnvelope,
    ResultKind,
    SingleRecord,
)

UNKNOWN = "unknown"


def normalize(raw: RawResult) -> ResultEnvelope:
    """Build the envelope for a raw backend result."""
    if raw.kind is ResultKind.RECORD_LIST:
        return RecordList(records=raw.payload, total_count=raw.total_count, content_range=raw.content_range)
    if raw.kind is ResultKind.SINGLE_RECORD:
        return SingleRecord(record=raw.payload)
    if raw.kind is ResultKind.CREATED_ID:
        entity = "document" if raw.entity == "document" else "record"
        return CreatedId(identifier=str(raw.payload), entity=entity)
    if raw.kind is ResultKind.BINARY:
        return BinaryPayload(data=raw.payload, content_type=raw.content_type, filename=raw.filename)
    raise ValueError(f"Unhandled result kind: {raw.kind}")


def to_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def render(envelope: ResultEnvelope) -> str:
    """Render an envelope as the text of a successful tool response."""
    if isinstance(envelope, RecordList):
        text = to_json(envelope.records)
        if envelope.total_count is not None:
            text += f"\n\nTotal Count: {envelope.total_count}"
        if envelope.content_range:
            text += f"\nContent-Range: {envelope.content_range}"
        return text

    if isinstance(envelope, SingleRecord):
        return to_json(envelope.record)

    if isinstance(envelope, CreatedId):
        if envelope.entity == "document":
            return f"Document uploaded successfully with ID: {envelope.identifier}"
        return f"Record created successfully with ID: {envelope.identifier}"

    if isinstance(envelope, BinaryPayload):
        encoded = base64.b64encode(envelope.data).decode("ascii")
        return (
            "Document downloaded successfully\n"
            f"Content-Type: {envelope.content_type or UNKNOWN}\n"
            f"Filename: {envelope.filename or UNKNOWN}\n"
            f"Size: {envelope.size} bytes\n\n"
            f"Data (base64): {encoded}"
        )

    raise TypeError(f"Cannot render {type(envelope).__name__}")
