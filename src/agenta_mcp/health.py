"""Health check endpoint handlers for MCP server."""

import os
from datetime import datetime, timezone

from starlette.requests import Request
from starlette.responses import JSONResponse

from agenta_mcp import __version__, constants

_HEADERS = {
    "Content-Type": "application/json",
    "Cache-Control": "no-cache, no-store, must-revalidate",
}


def get_server_info() -> dict:
    """Get basic server information for health check response."""
    try:
        from importlib.metadata import version

        server_version = version("agenta-mcp")
    except Exception:
        server_version = __version__

    return {
        "name": constants.SERVER_NAME,
        "version": server_version,
        "transport": os.environ.get("FASTMCP_TRANSPORT", "stdio"),
    }


def _test_mode() -> bool:
    from agenta_mcp.tools.dispatch_helpers import get_dispatcher

    return get_dispatcher().backend.mode == "simulated"


def _build_health_response(route: str) -> JSONResponse:
    """Build a health check response with route information.

    Args:
        route: The route path being checked

    Returns:
        JSONResponse with health status information
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        response_data = {
            "status": "ok",
            "timestamp": timestamp,
            "route": route,
            "server": get_server_info(),
            "test_mode": _test_mode(),
        }
        return JSONResponse(content=response_data, status_code=200, headers=_HEADERS)

    except Exception as e:
        error_response = {
            "status": "unhealthy",
            "timestamp": timestamp,
            "route": route,
            "error": str(e),
        }
        return JSONResponse(content=error_response, status_code=503, headers=_HEADERS)


async def health_check_handler(request: Request) -> JSONResponse:
    """Handle health check requests at /health."""
    return _build_health_response("/health")


async def healthz_handler(request: Request) -> JSONResponse:
    """Handle health check requests at /healthz."""
    return _build_health_response("/healthz")
