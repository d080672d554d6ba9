"""Pydantic models for operation results and tool responses.

Every successful invocation produces exactly one ``ResultEnvelope`` variant;
every failed one produces a ``ClassifiedError``. Both end up as a
``ToolResponse`` handed back to the MCP layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict


class ResultKind(str, Enum):
    """Shape of an operation's result, fixed per catalog operation."""

    RECORD_LIST = "record_list"
    SINGLE_RECORD = "single_record"
    CREATED_ID = "created_id"
    BINARY = "binary"


class Envelope(BaseModel):
    """Base model for result envelopes."""

    model_config = ConfigDict(frozen=True)


# ============================================================================
# Result envelopes
# ============================================================================


class RecordList(Envelope):
    """An ordered list of records, with pagination metadata when the API sent it."""

    kind: Literal[ResultKind.RECORD_LIST] = ResultKind.RECORD_LIST
    records: List[Dict[str, Any]]
    total_count: Optional[int] = None
    content_range: Optional[str] = None


class SingleRecord(Envelope):
    """A single record or descriptor mapping."""

    kind: Literal[ResultKind.SINGLE_RECORD] = ResultKind.SINGLE_RECORD
    record: Dict[str, Any]


class CreatedId(Envelope):
    """Identifier generated by the service for a newly created entity."""

    kind: Literal[ResultKind.CREATED_ID] = ResultKind.CREATED_ID
    identifier: str
    entity: Literal["record", "document"] = "record"


class BinaryPayload(Envelope):
    """Raw document content."""

    kind: Literal[ResultKind.BINARY] = ResultKind.BINARY
    data: bytes
    content_type: Optional[str] = None
    filename: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)


ResultEnvelope = Union[RecordList, SingleRecord, CreatedId, BinaryPayload]


# ============================================================================
# Errors and tool responses
# ============================================================================


class ClassifiedError(BaseModel):
    """Human-actionable description of a failed invocation.

    Attributes:
        kind: Error category (authentication, api_error, transport, ...)
        summary: First line of the diagnostic (e.g. ``API Error: 404 - Not Found``)
        guidance: Optional multi-line remediation text
        debug_detail: Optional request dump, only when debugging is enabled
    """

    model_config = ConfigDict(frozen=True)

    kind: str
    summary: str
    guidance: Optional[str] = None
    debug_detail: Optional[str] = None

    @property
    def message(self) -> str:
        text = self.summary
        if self.guidance:
            text += self.guidance
        if self.debug_detail:
            text += self.debug_detail
        return text


class ToolResponse(BaseModel):
    """What the dispatcher hands back for every invocation, success or not."""

    model_config = ConfigDict(frozen=True)

    text: str
    is_error: bool = False
    envelope: Optional[ResultEnvelope] = None
    error: Optional[ClassifiedError] = None

    @classmethod
    def from_error(cls, error: ClassifiedError) -> ToolResponse:
        return cls(text=f"Error: {error.message}", is_error=True, error=error)
