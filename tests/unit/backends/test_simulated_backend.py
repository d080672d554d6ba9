"""Tests for the simulated (test mode) backend."""

import pytest

from agenta_mcp.backends.protocol import AgentaBackend
from agenta_mcp.backends.simulated import (
    page_records,
    select_fields,
    sort_records,
)
from agenta_mcp.catalog import lookup
from agenta_mcp.exceptions import LocalFileError
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
    UploadDocumentParams,
)
from agenta_mcp.models.responses import ResultKind


def _run(backend, name, **arguments):
    op = lookup(name)
    return backend.execute(op, op.params_model(**arguments))


def test_satisfies_backend_protocol(simulated_backend):
    assert isinstance(simulated_backend, AgentaBackend)
    assert simulated_backend.mode == "simulated"


class TestGetRecord:
    """Canned single records."""

    def test_echoes_identity(self, simulated_backend):
        record = simulated_backend.get_record(GetRecordParams(objecttype="-54346245", id="abc"))
        assert record == {
            "system_id": "abc",
            "system_idobject": "-54346245",
            "vertragsnummer": "VD-TEST-123456",
            "idadresse": "7",
            "spartennr": "139",
            "beitraginclst": 21.55,
            "test_mode": True,
        }

    def test_repeated_reads_are_identical(self, simulated_backend):
        first = _run(simulated_backend, "get_record", objecttype="-54346245", id="abc", resolvetexts=True)
        second = _run(simulated_backend, "get_record", objecttype="-54346245", id="abc", resolvetexts=True)
        assert first == second

    def test_resolvetexts_adds_only_shadow_fields(self, simulated_backend):
        plain = simulated_backend.get_record(GetRecordParams(objecttype="-54346245", id="abc"))
        resolved = simulated_backend.get_record(
            GetRecordParams(objecttype="-54346245", id="abc", resolvetexts=True)
        )
        added = set(resolved) - set(plain)
        assert added == {"plaintext__idadresse", "plaintext__spartennr"}
        assert resolved["plaintext__idadresse"] == "Test User, John"
        assert resolved["plaintext__spartennr"] == "KFZ"
        assert {k: resolved[k] for k in plain} == plain

    def test_fields_restricts_to_intersection(self, simulated_backend):
        record = simulated_backend.get_record(
            GetRecordParams(objecttype="-54346245", id="abc", fields="system_id, idadresse,nonexistent")
        )
        assert record == {"system_id": "abc", "idadresse": "7"}

    def test_fields_applied_after_resolving(self, simulated_backend):
        record = simulated_backend.get_record(
            GetRecordParams(
                objecttype="-54346245", id="abc", fields="idadresse,plaintext__idadresse", resolvetexts=True
            )
        )
        assert record == {"idadresse": "7", "plaintext__idadresse": "Test User, John"}

    def test_tagged_as_single_record(self, simulated_backend):
        raw = _run(simulated_backend, "get_record", objecttype="-54346245", id="abc")
        assert raw.kind is ResultKind.SINGLE_RECORD
        assert raw.operation == "get_record"


class TestRecordLists:
    """Paging over the canned record lists."""

    @pytest.mark.parametrize(
        "limit, offset, expected_len, expected_range",
        [
            (None, None, 2, "items 0-1/2"),
            (1, None, 1, "items 0-0/2"),
            (1, 1, 1, "items 1-1/2"),
            (5, 1, 1, "items 1-1/2"),
            (2, 0, 2, "items 0-1/2"),
            (3, 2, 0, "items */2"),
        ],
    )
    def test_slice_matches_content_range(self, simulated_backend, limit, offset, expected_len, expected_range):
        page = simulated_backend.get_records(GetRecordsParams(objecttype="-54346245", limit=limit, offset=offset))
        assert len(page.records) == expected_len
        assert page.total_count == 2
        assert page.content_range == expected_range

    def test_offset_selects_second_record(self, simulated_backend):
        page = simulated_backend.get_records(GetRecordsParams(objecttype="-54346245", limit=1, offset=1))
        assert page.records[0]["system_id"] == "test-id-2"

    def test_order_descending(self, simulated_backend):
        page = simulated_backend.get_records(GetRecordsParams(objecttype="-54346245", order="beitraginclst desc"))
        assert [r["system_id"] for r in page.records] == ["test-id-2", "test-id-1"]

    def test_fields_applies_to_lists(self, simulated_backend):
        page = simulated_backend.get_records(GetRecordsParams(objecttype="-54346245", fields="system_id"))
        assert page.records == [{"system_id": "test-id-1"}, {"system_id": "test-id-2"}]

    def test_list_records_carry_requested_objecttype(self, simulated_backend):
        records = simulated_backend.get_records(GetRecordsParams(objecttype="-54346245")).records
        filtered = simulated_backend.filter_records(FilterRecordsParams(objecttype="-99", filter={})).records
        assert [r["system_idobject"] for r in records] == ["-54346245", "-54346245"]
        assert [r["system_idobject"] for r in filtered] == ["-99", "-99"]
        assert list(records[0])[:2] == ["system_id", "system_idobject"]

    def test_deleted_flag_is_accepted(self, simulated_backend):
        page = simulated_backend.get_records(GetRecordsParams(objecttype="-54346245", deletedrecords=3))
        assert len(page.records) == 2

    def test_filter_records_scenario(self, simulated_backend):
        raw = _run(
            simulated_backend,
            "filter_records",
            objecttype="-54346245",
            filter={"$or": [{"idadresse": "7"}]},
            resolvetexts=True,
            limit=1,
        )
        assert raw.kind is ResultKind.RECORD_LIST
        assert len(raw.payload) == 1
        record = raw.payload[0]
        assert record["idadresse"] == "7"
        assert record["plaintext__idadresse"] == "Test User, John"
        assert record["plaintext__spartennr"] == "KFZ"
        assert record["filter_applied"] is True
        assert record["ablauf"] == "2025-12-31T00:00:00.000"
        assert raw.total_count == 2
        assert raw.content_range == "items 0-0/2"

    def test_canned_data_is_not_mutated(self, simulated_backend):
        simulated_backend.get_records(GetRecordsParams(objecttype="-54346245", resolvetexts=True))
        page = simulated_backend.get_records(GetRecordsParams(objecttype="-54346245"))
        assert "plaintext__idadresse" not in page.records[0]


class TestCreateAndUpload:
    """Generated identifiers."""

    def test_create_ids_are_distinct(self, simulated_backend):
        params = CreateRecordParams(objecttype="-54346245", data={"idadresse": "7"})
        ids = {simulated_backend.create_record(params) for _ in range(20)}
        assert len(ids) == 20
        assert all(i.startswith("test-") for i in ids)

    def test_upload_ids_are_distinct(self, simulated_backend, upload_file):
        params = UploadDocumentParams(addressid="7", filepath=str(upload_file))
        first = simulated_backend.upload_document(params)
        second = simulated_backend.upload_document(params)
        assert first != second
        assert first.startswith("doc-test-")

    def test_upload_missing_file(self, simulated_backend, tmp_path):
        params = UploadDocumentParams(addressid="7", filepath=str(tmp_path / "missing.pdf"))
        with pytest.raises(LocalFileError, match="File not found"):
            simulated_backend.upload_document(params)

    def test_upload_entity_is_document(self, simulated_backend, upload_file):
        raw = _run(simulated_backend, "upload_document", addressid="7", filepath=str(upload_file))
        assert raw.kind is ResultKind.CREATED_ID
        assert raw.entity == "document"


class TestDocumentsAndMetadata:
    """Download and metadata fixtures."""

    def test_download(self, simulated_backend):
        raw = _run(simulated_backend, "download_document", id="doc-1")
        assert raw.kind is ResultKind.BINARY
        assert raw.payload == b"Mock PDF document content for testing"
        assert raw.content_type == "application/pdf"
        assert raw.filename == "test-document.pdf"

    def test_objecttypes(self, simulated_backend):
        types = simulated_backend.get_objecttypes(GetObjectTypesParams())
        assert [t["name"] for t in types] == ["Vertragsdaten", "Adressdaten"]

    def test_filter_objecttypes_returns_first(self, simulated_backend):
        types = simulated_backend.filter_objecttypes(FilterObjectTypesParams(filter={"name": "x"}))
        assert types == [{"system_id": "-54346245", "name": "Vertragsdaten", "basicidobject": "-54346245"}]

    def test_get_objecttype_echoes_id(self, simulated_backend):
        descriptor = simulated_backend.get_objecttype(GetObjectTypeParams(objecttype="-1"))
        assert descriptor == {"system_id": "-1", "name": "Vertragsdaten", "basicidobject": "-1"}

    def test_properties(self, simulated_backend):
        props = simulated_backend.get_properties(GetPropertiesParams(objecttype="-54346245"))
        assert [p["name"] for p in props] == ["vertragsnummer", "idadresse"]
        assert all(p["idobject"] == "-54346245" for p in props)
        assert props[1]["plaintext__idlist"] == "Address List"

    def test_download_content_ignores_id(self, simulated_backend):
        content = simulated_backend.download_document(DownloadDocumentParams(id="x"))
        assert content.filename == "test-document.pdf"


class TestHelpers:
    """Module-level helpers."""

    def test_sort_missing_values_last(self):
        records = [{"a": None}, {"a": 2}, {"a": 1}]
        assert sort_records(records, "a") == [{"a": 1}, {"a": 2}, {"a": None}]

    def test_sort_multiple_keys(self):
        records = [{"a": 1, "b": 1}, {"a": 1, "b": 2}, {"a": 0, "b": 3}]
        assert sort_records(records, "a,b desc") == [{"a": 0, "b": 3}, {"a": 1, "b": 2}, {"a": 1, "b": 1}]

    def test_page_default_limit(self):
        page = page_records([{"i": i} for i in range(15)], None, None)
        assert len(page.records) == 10
        assert page.content_range == "items 0-9/15"

    def test_select_fields_without_selection(self):
        record = {"a": 1}
        assert select_fields(record, None) is record

    def test_filter_records_params_model(self):
        params = FilterRecordsParams(objecttype=-54346245, filter={})
        assert params.objecttype == "-54346245"
