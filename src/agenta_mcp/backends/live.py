"""Live backend issuing HTTP calls against the aB-Agenta REST API.

Each operation performs exactly one request on a shared ``requests.Session``
carrying basic auth and the ``ab-*`` credential headers. Optional query
parameters are only sent when the caller supplied them; defaults are left
to the service.
"""

from __future__ import annotations

import base64
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional
from urllib.parse import quote

import requests
from requests.auth import HTTPBasicAuth

from agenta_mcp import constants
from agenta_mcp.backends.base import BaseBackend, read_upload_file
from agenta_mcp.backends.types import DocumentContent, RecordPage
from agenta_mcp.config import AgentaConfig
from agenta_mcp.exceptions import RemoteApiError, RequestContext, TransportError
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
    OperationParams,
    UploadDocumentParams,
)

logger = logging.getLogger(__name__)

LIST_QUERY_FIELDS = ("fields", "order", "limit", "offset", "resolvetexts", "deletedrecords", "archivedrecords")
RECORD_QUERY_FIELDS = ("fields", "resolvetexts")
UPLOAD_QUERY_FIELDS = ("addressid", "referenceid", "referenceobjecttype", "filename", "info", "type", "changedate")

_FILENAME_PATTERN = re.compile(r'filename="?(.+?)"?$')


def build_query(params: OperationParams, names: Iterable[str]) -> Dict[str, Any]:
    """Collect the named parameters that were supplied into a query mapping."""
    query: Dict[str, Any] = {}
    for name in names:
        value = getattr(params, name)
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        query[name] = value
    return query


def parse_filename(content_disposition: Optional[str]) -> Optional[str]:
    """Extract the filename from a Content-Disposition header, if there is one."""
    if not content_disposition:
        return None
    match = _FILENAME_PATTERN.search(content_disposition)
    return match.group(1) if match else None


def parse_total_count(value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError:
        logger.warning("Ignoring non-numeric %s header: %r", constants.TOTAL_COUNT_HEADER, value)
        return None


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def _decode_body(response: requests.Response) -> Any:
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            pass
    return response.text


class LiveBackend(BaseBackend):
    """Backend talking to a real aB-Agenta installation."""

    mode = "live"

    def __init__(self, config: AgentaConfig, session: Optional[requests.Session] = None) -> None:
        self._config = config
        self._api_url = config.api_url
        self._timeout = config.timeout

        self._session = session or requests.Session()
        self._session.headers.update(self._credential_headers(config))
        if config.has_basic_auth:
            self._session.auth = HTTPBasicAuth(config.username, config.password)

        logger.info("Live backend initialized for %s", self._api_url)

    @staticmethod
    def _credential_headers(config: AgentaConfig) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if config.service_password:
            headers[constants.SERVICE_PASSWORD_HEADER] = config.service_password
        if config.data_directory:
            headers[constants.DATA_DIRECTORY_HEADER] = config.data_directory
        if config.client_secret:
            headers[constants.CLIENT_SECRET_HEADER] = config.client_secret
        return headers

    # ---------------------------------------------------------------------
    # Request plumbing
    # ---------------------------------------------------------------------

    def _request_context(
        self, method: str, url: str, params: Optional[Mapping[str, Any]], headers: Optional[Mapping[str, str]]
    ) -> RequestContext:
        prepared = requests.PreparedRequest()
        prepared.prepare_url(url, dict(params or {}))

        sent = {str(k): str(v) for k, v in self._session.headers.items()}
        if self._config.has_basic_auth:
            token = base64.b64encode(f"{self._config.username}:{self._config.password}".encode()).decode()
            sent["Authorization"] = f"Basic {token}"
        sent.update(headers or {})
        return RequestContext(method=method, url=prepared.url or url, headers=sent)

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json_body: Any = None,
        data: Optional[bytes] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}"
        logger.debug("%s %s params=%s", method, path, sorted((params or {}).keys()))

        try:
            response = self._session.request(
                method,
                url,
                params=params or None,
                json=json_body,
                data=data,
                headers=dict(headers) if headers else None,
                timeout=self._timeout,
            )
        except requests.Timeout as exc:
            context = self._request_context(method, url, params, headers)
            logger.warning("%s %s timed out after %ss", method, path, self._timeout)
            raise TransportError(
                f"Request to {context.url} timed out after {self._timeout:g} seconds", request=context
            ) from exc
        except requests.RequestException as exc:
            context = self._request_context(method, url, params, headers)
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransportError(f"Request to {context.url} failed: {exc}", request=context) from exc

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            context = self._request_context(method, url, params, headers)
            logger.warning("%s %s returned HTTP %s", method, path, response.status_code)
            raise RemoteApiError(
                response.status_code,
                reason=response.reason or "",
                body=_decode_body(response),
                request=context,
            ) from exc

        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"Invalid JSON in response from {response.url}: {exc}") from exc

    @staticmethod
    def _identifier(response: requests.Response) -> Any:
        """Created ids come back either as a JSON string or as plain text."""
        try:
            return response.json()
        except ValueError:
            return response.text.strip()

    def _page(self, response: requests.Response) -> RecordPage:
        return RecordPage(
            records=self._json(response),
            total_count=parse_total_count(response.headers.get(constants.TOTAL_COUNT_HEADER)),
            content_range=response.headers.get(constants.CONTENT_RANGE_HEADER) or None,
        )

    @staticmethod
    def _idempotency_headers(key: Optional[str]) -> Dict[str, str]:
        return {constants.IDEMPOTENCY_KEY_HEADER: key} if key else {}

    # ---------------------------------------------------------------------
    # Records
    # ---------------------------------------------------------------------

    def get_record(self, params: GetRecordParams) -> Dict[str, Any]:
        response = self._request(
            "GET",
            f"/records/{_segment(params.objecttype)}/{_segment(params.id)}",
            params=build_query(params, RECORD_QUERY_FIELDS),
        )
        return self._json(response)

    def get_records(self, params: GetRecordsParams) -> RecordPage:
        response = self._request(
            "GET",
            f"/records/{_segment(params.objecttype)}",
            params=build_query(params, LIST_QUERY_FIELDS),
        )
        return self._page(response)

    def filter_records(self, params: FilterRecordsParams) -> RecordPage:
        response = self._request(
            "POST",
            f"/records/{_segment(params.objecttype)}",
            params=build_query(params, LIST_QUERY_FIELDS),
            json_body=params.filter,
        )
        return self._page(response)

    def create_record(self, params: CreateRecordParams) -> Any:
        response = self._request(
            "POST",
            f"/records/{_segment(params.objecttype)}/new",
            json_body=params.data,
            headers=self._idempotency_headers(params.idempotency_key),
        )
        return self._identifier(response)

    # ---------------------------------------------------------------------
    # Documents
    # ---------------------------------------------------------------------

    def download_document(self, params: DownloadDocumentParams) -> DocumentContent:
        response = self._request("GET", f"/documents/{_segment(params.id)}")
        return DocumentContent(
            data=response.content,
            content_type=response.headers.get("content-type"),
            filename=parse_filename(response.headers.get("content-disposition")),
        )

    def upload_document(self, params: UploadDocumentParams) -> Any:
        upload = read_upload_file(params)
        query = build_query(params, UPLOAD_QUERY_FIELDS)
        query["filename"] = upload.filename

        headers = {"Content-Type": "application/octet-stream"}
        headers.update(self._idempotency_headers(params.idempotency_key))

        logger.info("Uploading %s (%d bytes) for address %s", upload.filename, upload.size, params.addressid)
        response = self._request("POST", "/documents/new", params=query, data=upload.content, headers=headers)
        return self._identifier(response)

    # ---------------------------------------------------------------------
    # Metadata
    # ---------------------------------------------------------------------

    def get_objecttypes(self, params: GetObjectTypesParams) -> List[Dict[str, Any]]:
        return self._json(self._request("GET", "/objecttypes"))

    def filter_objecttypes(self, params: FilterObjectTypesParams) -> List[Dict[str, Any]]:
        return self._json(self._request("POST", "/objecttypes", json_body=params.filter))

    def get_objecttype(self, params: GetObjectTypeParams) -> Dict[str, Any]:
        return self._json(self._request("GET", f"/objecttype/{_segment(params.objecttype)}"))

    def get_properties(self, params: GetPropertiesParams) -> List[Dict[str, Any]]:
        return self._json(self._request("GET", f"/properties/{_segment(params.objecttype)}"))
