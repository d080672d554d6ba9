"""Tests for result normalization and rendering."""

import base64

import pytest

from agenta_mcp.backends.types import RawResult
from agenta_mcp.models.responses import BinaryPayload, CreatedId, RecordList, ResultKind, SingleRecord
from agenta_mcp.normalizer import normalize, render


class TestNormalize:
    """Envelopes are chosen by the tagged kind only."""

    def test_record_list(self):
        raw = RawResult(
            operation="get_records",
            kind=ResultKind.RECORD_LIST,
            payload=[{"system_id": "a"}],
            total_count=2,
            content_range="items 0-0/2",
        )
        envelope = normalize(raw)
        assert envelope == RecordList(records=[{"system_id": "a"}], total_count=2, content_range="items 0-0/2")

    def test_single_record(self):
        raw = RawResult(operation="get_record", kind=ResultKind.SINGLE_RECORD, payload={"system_id": "a"})
        assert normalize(raw) == SingleRecord(record={"system_id": "a"})

    def test_empty_list_stays_a_list(self):
        raw = RawResult(operation="get_objecttypes", kind=ResultKind.RECORD_LIST, payload=[])
        assert isinstance(normalize(raw), RecordList)

    @pytest.mark.parametrize("entity, expected", [("record", "record"), ("document", "document")])
    def test_created_id(self, entity, expected):
        raw = RawResult(operation="x", kind=ResultKind.CREATED_ID, payload="id-1", entity=entity)
        assert normalize(raw) == CreatedId(identifier="id-1", entity=expected)

    def test_binary(self):
        raw = RawResult(
            operation="download_document",
            kind=ResultKind.BINARY,
            payload=b"abc",
            content_type="text/plain",
            filename="a.txt",
        )
        envelope = normalize(raw)
        assert isinstance(envelope, BinaryPayload)
        assert envelope.size == 3


class TestRender:
    """Text shown to MCP clients."""

    def test_record_list_with_pagination(self):
        text = render(RecordList(records=[{"name": "Müller"}], total_count=2, content_range="items 0-0/2"))
        assert text == '[\n  {\n    "name": "Müller"\n  }\n]\n\nTotal Count: 2\nContent-Range: items 0-0/2'

    def test_record_list_without_pagination(self):
        assert render(RecordList(records=[])) == "[]"

    def test_zero_total_count_is_shown(self):
        assert render(RecordList(records=[], total_count=0)).endswith("\n\nTotal Count: 0")

    def test_single_record(self):
        assert render(SingleRecord(record={"a": 1})) == '{\n  "a": 1\n}'

    def test_created_record(self):
        assert render(CreatedId(identifier="r1")) == "Record created successfully with ID: r1"

    def test_uploaded_document(self):
        text = render(CreatedId(identifier="d1", entity="document"))
        assert text == "Document uploaded successfully with ID: d1"

    def test_binary(self):
        payload = BinaryPayload(data=b"hello", content_type="text/plain", filename="hello.txt")
        assert render(payload) == (
            "Document downloaded successfully\n"
            "Content-Type: text/plain\n"
            "Filename: hello.txt\n"
            "Size: 5 bytes\n\n"
            f"Data (base64): {base64.b64encode(b'hello').decode()}"
        )

    def test_binary_unknown_metadata(self):
        text = render(BinaryPayload(data=b""))
        assert "Content-Type: unknown\nFilename: unknown\nSize: 0 bytes" in text
