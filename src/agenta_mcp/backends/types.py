"""Value types exchanged between execution backends and the normalizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from agenta_mcp.models.responses import ResultKind


@dataclass(frozen=True)
class RecordPage:
    """Records returned by a list endpoint plus its out-of-band pagination headers."""

    records: List[Dict[str, Any]]
    total_count: Optional[int] = None
    content_range: Optional[str] = None


@dataclass(frozen=True)
class DocumentContent:
    """Binary document body with the metadata taken from its response headers."""

    data: bytes
    content_type: Optional[str] = None
    filename: Optional[str] = None


@dataclass(frozen=True)
class UploadFile:
    """A local file read for upload."""

    content: bytes
    filename: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class RawResult:
    """Backend output tagged with the operation that produced it.

    ``kind`` is copied from the originating operation when the result is
    built, so the normalizer never has to guess the envelope from the
    payload's structure.
    """

    operation: str
    kind: ResultKind
    payload: Any
    entity: str = "record"
    total_count: Optional[int] = None
    content_range: Optional[str] = None
    content_type: Optional[str] = None
    filename: Optional[str] = None
