"""Shared base class for execution backends.

``BaseBackend.execute`` routes an operation to the backend method of the same
name and tags whatever comes back with the operation's result kind. The
shape checks here are what keep live responses and canned data
interchangeable for the normalizer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from agenta_mcp.backends.types import DocumentContent, RawResult, RecordPage, UploadFile
from agenta_mcp.catalog import Operation
from agenta_mcp.exceptions import LocalFileError, TransportError
from agenta_mcp.models.inputs import OperationParams, UploadDocumentParams
from agenta_mcp.models.responses import ResultKind

logger = logging.getLogger(__name__)


def read_upload_file(params: UploadDocumentParams) -> UploadFile:
    """Read the file named by an upload request.

    The document name defaults to the file's base name.

    Raises:
        LocalFileError: If the file does not exist or cannot be read
    """
    path = Path(params.filepath).expanduser()
    try:
        content = path.read_bytes()
    except FileNotFoundError:
        raise LocalFileError(f"File not found: {params.filepath}", path=params.filepath) from None
    except IsADirectoryError:
        raise LocalFileError(f"Not a file: {params.filepath}", path=params.filepath) from None
    except OSError as exc:
        raise LocalFileError(
            f"Could not read file {params.filepath}: {exc.strerror or exc}", path=params.filepath
        ) from exc

    return UploadFile(content=content, filename=params.filename or path.name)


class BaseBackend:
    """Base class with operation routing and result tagging."""

    mode = "base"

    def execute(self, operation: Operation, params: OperationParams) -> RawResult:
        handler = getattr(self, operation.name, None)
        if handler is None:
            raise NotImplementedError(f"{type(self).__name__} does not implement {operation.name}")

        logger.debug("Executing %s via %s backend", operation.name, self.mode)
        value = handler(params)
        return self._tag(operation, value)

    def _tag(self, operation: Operation, value: Any) -> RawResult:
        kind = operation.result_kind

        if kind is ResultKind.RECORD_LIST:
            page = value if isinstance(value, RecordPage) else RecordPage(records=value)
            if not isinstance(page.records, list) or not all(isinstance(r, dict) for r in page.records):
                raise self._shape_error(operation, "a list of objects", page.records)
            return RawResult(
                operation=operation.name,
                kind=kind,
                payload=page.records,
                entity=operation.entity,
                total_count=page.total_count,
                content_range=page.content_range,
            )

        if kind is ResultKind.SINGLE_RECORD:
            if not isinstance(value, dict):
                raise self._shape_error(operation, "an object", value)
            return RawResult(operation=operation.name, kind=kind, payload=value, entity=operation.entity)

        if kind is ResultKind.CREATED_ID:
            if isinstance(value, bool) or not isinstance(value, (str, int)) or not str(value).strip():
                raise self._shape_error(operation, "an identifier", value)
            return RawResult(operation=operation.name, kind=kind, payload=str(value).strip(), entity=operation.entity)

        if kind is ResultKind.BINARY:
            if not isinstance(value, DocumentContent):
                raise self._shape_error(operation, "document content", value)
            return RawResult(
                operation=operation.name,
                kind=kind,
                payload=value.data,
                entity=operation.entity,
                content_type=value.content_type,
                filename=value.filename,
            )

        raise ValueError(f"Unhandled result kind: {kind}")

    @staticmethod
    def _shape_error(operation: Operation, expected: str, value: Any) -> TransportError:
        return TransportError(
            f"Unexpected response for {operation.name}: expected {expected}, got {type(value).__name__}"
        )
