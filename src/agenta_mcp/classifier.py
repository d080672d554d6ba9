"""Map failures to human-actionable diagnostics.

Rules, first match wins:

1. ``RemoteApiError`` with status 401: authentication guidance, refined by
   marker substrings in the response body, followed by a credential
   checklist.
2. Any other ``RemoteApiError``: the status plus the best message the body
   offers.
3. Everything else: the error's own message.

With debugging enabled, API errors also carry the request URL and headers.
Credential header values are masked in that dump.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from agenta_mcp import constants
from agenta_mcp.exceptions import (
    LocalFileError,
    MissingRequiredParameterError,
    ParameterValidationError,
    RemoteApiError,
    RequestContext,
    TransportError,
    UnknownOperationError,
)
from agenta_mcp.models.responses import ClassifiedError

SERVICE_PASSWORD_MARKER = "service-password"
BASIC_AUTH_MARKER = "Authorization"

CREDENTIAL_CHECKLIST = (
    "\n\nPlease verify your credentials in the .env file:"
    f"\n- {constants.ENV_USERNAME} and {constants.ENV_PASSWORD} for basic auth"
    f"\n- {constants.ENV_SERVICE_PASSWORD} for API access"
    f"\n- {constants.ENV_DATA_DIRECTORY} and {constants.ENV_CLIENT_SECRET} if required"
)

MASK = "***"

_KINDS = (
    (UnknownOperationError, "unknown_operation"),
    (MissingRequiredParameterError, "missing_parameter"),
    (ParameterValidationError, "invalid_parameter"),
    (LocalFileError, "local_file"),
    (TransportError, "transport"),
)


def mask_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    return {
        name: MASK if name.lower() in constants.SENSITIVE_HEADERS and value else value
        for name, value in headers.items()
    }


def _debug_block(request: Optional[RequestContext]) -> str:
    if request is None:
        return ""
    headers = json.dumps(mask_headers(request.headers), indent=2)
    return f"\n\nDebug info:\n- URL: {request.url}\n- Headers sent: {headers}"


def _body_message(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        message = body.get("message")
        if message:
            return str(message)
    return None


def _classify_remote(error: RemoteApiError) -> ClassifiedError:
    summary = f"API Error: {error.status}"

    if error.status == 401:
        guidance = "\nAuthentication failed. "
        body = error.body_text
        if SERVICE_PASSWORD_MARKER in body:
            guidance += "The service password is invalid or incorrectly formatted."
        elif BASIC_AUTH_MARKER in body:
            guidance += "Basic authentication (username/password) is missing or invalid."
        elif error.body is None or isinstance(error.body, str):
            guidance += f"Server message: {body}"
        else:
            guidance += f"Server response: {body}"
        guidance += CREDENTIAL_CHECKLIST
        return ClassifiedError(kind="authentication", summary=summary, guidance=guidance)

    detail = _body_message(error.body) or error.body_text or error.reason
    if detail:
        summary += f" - {detail}"
    return ClassifiedError(kind="api_error", summary=summary)


def classify(error: BaseException, debug: bool = False) -> ClassifiedError:
    """Build the diagnostic for a failed invocation.

    Args:
        error: The exception raised during validation or execution
        debug: Append the request URL and (masked) headers when available
    """
    if not isinstance(error, RemoteApiError):
        kind = next((name for cls, name in _KINDS if isinstance(error, cls)), "internal")
        return ClassifiedError(kind=kind, summary=str(error) or type(error).__name__)

    classified = _classify_remote(error)
    if debug:
        detail = _debug_block(error.request)
        if detail:
            classified = classified.model_copy(update={"debug_detail": detail})
    return classified
