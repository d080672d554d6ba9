"""Tests for BaseBackend routing and result tagging."""

import pytest

from agenta_mcp.backends.base import BaseBackend, read_upload_file
from agenta_mcp.backends.types import DocumentContent, RecordPage
from agenta_mcp.catalog import lookup
from agenta_mcp.exceptions import LocalFileError, TransportError
from agenta_mcp.models.inputs import UploadDocumentParams
from agenta_mcp.models.responses import ResultKind


class StubBackend(BaseBackend):
    mode = "stub"

    def __init__(self, value):
        self.value = value

    def get_records(self, params):
        return self.value

    def get_objecttype(self, params):
        return self.value

    def create_record(self, params):
        return self.value

    def download_document(self, params):
        return self.value


def _execute(value, name, **arguments):
    op = lookup(name)
    return StubBackend(value).execute(op, op.params_model(**arguments))


class TestTagging:
    """Results are tagged with the operation's declared kind."""

    def test_plain_list_becomes_record_list(self):
        raw = _execute([{"a": 1}], "get_records", objecttype="-1")
        assert raw.kind is ResultKind.RECORD_LIST
        assert raw.total_count is None

    def test_record_page_keeps_metadata(self):
        raw = _execute(RecordPage(records=[], total_count=0, content_range="items */0"), "get_records", objecttype="-1")
        assert raw.total_count == 0
        assert raw.content_range == "items */0"

    def test_numeric_id_is_stringified(self):
        raw = _execute(42, "create_record", objecttype="-1", data={})
        assert raw.payload == "42"

    @pytest.mark.parametrize("value", [True, None, "", "  ", {"id": 1}])
    def test_invalid_identifier(self, value):
        with pytest.raises(TransportError, match="expected an identifier"):
            _execute(value, "create_record", objecttype="-1", data={})

    def test_single_record_requires_mapping(self):
        with pytest.raises(TransportError, match="expected an object"):
            _execute(["x"], "get_objecttype", objecttype="-1")

    def test_binary_requires_document_content(self):
        with pytest.raises(TransportError, match="expected document content"):
            _execute(b"raw", "download_document", id="d1")
        raw = _execute(DocumentContent(data=b"raw"), "download_document", id="d1")
        assert raw.kind is ResultKind.BINARY

    def test_missing_handler(self):
        op = lookup("get_properties")
        with pytest.raises(NotImplementedError):
            StubBackend(None).execute(op, op.params_model(objecttype="-1"))


class TestReadUploadFile:
    """Reading upload sources."""

    def test_reads_content_and_name(self, upload_file):
        upload = read_upload_file(UploadDocumentParams(addressid="7", filepath=str(upload_file)))
        assert upload.content == b"%PDF-1.4 test scan"
        assert upload.filename == "scan_2022_1_1.pdf"
        assert upload.size == len(b"%PDF-1.4 test scan")

    def test_explicit_filename(self, upload_file):
        params = UploadDocumentParams(addressid="7", filepath=str(upload_file), filename="renamed.pdf")
        assert read_upload_file(params).filename == "renamed.pdf"

    def test_missing_file(self, tmp_path):
        with pytest.raises(LocalFileError) as exc_info:
            read_upload_file(UploadDocumentParams(addressid="7", filepath=str(tmp_path / "gone.pdf")))
        assert exc_info.value.path.endswith("gone.pdf")
        assert exc_info.value.error_code == "LOCAL_FILE_ERROR"
