"""Pydantic models for operation inputs, result envelopes and tool responses."""

from .inputs import (
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
    RecordQueryParams,
    UploadDocumentParams,
)
from .responses import (
    BinaryPayload,
    ClassifiedError,
    CreatedId,
    RecordList,
    ResultEnvelope,
    ResultKind,
    SingleRecord,
    ToolResponse,
)

__all__ = [
    # Input models
    "CreateRecordParams",
    "DownloadDocumentParams",
    "FilterObjectTypesParams",
    "FilterRecordsParams",
    "GetObjectTypeParams",
    "GetObjectTypesParams",
    "GetPropertiesParams",
    "GetRecordParams",
    "GetRecordsParams",
    "OperationParams",
    "RecordQueryParams",
    "UploadDocumentParams",
    # Responses
    "BinaryPayload",
    "ClassifiedError",
    "CreatedId",
    "RecordList",
    "ResultEnvelope",
    "ResultKind",
    "SingleRecord",
    "ToolResponse",
]
