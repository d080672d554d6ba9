"""Server assembly and startup helpers for the aB-Agenta MCP server."""

from __future__ import annotations

import inspect
import logging
import os
import sys
from typing import Any, Callable, Literal, Optional

from fastmcp import FastMCP

from agenta_mcp import constants
from agenta_mcp.backends import create_backend
from agenta_mcp.config import AgentaConfig
from agenta_mcp.dispatcher import Dispatcher

HTTP_TRANSPORTS = ("http", "sse", "streamable-http")
VALID_TRANSPORTS = ("stdio",) + HTTP_TRANSPORTS

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Send log records to stderr; stdout belongs to the stdio transport."""
    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def create_mcp_server() -> FastMCP:
    """Create the FastMCP server instance."""
    return FastMCP(constants.SERVER_NAME)


def get_tool_modules() -> list[Any]:
    """Get list of tool modules to register."""
    from importlib import import_module

    from agenta_mcp.tools import _MODULE_PATHS

    return [import_module(module_path) for module_path in _MODULE_PATHS.values()]


def register_tools(mcp: FastMCP, tool_modules: list[Any] | None = None, verbose: bool = True) -> int:
    """Register all public functions from tool modules as MCP tools.

    Args:
        mcp: The FastMCP server instance
        tool_modules: List of modules to register tools from (defaults to all)
        verbose: Whether to print registration messages

    Returns:
        Number of tools registered
    """
    if tool_modules is None:
        tool_modules = get_tool_modules()

    tools_registered = 0

    for module in tool_modules:

        def make_predicate(mod: Any) -> Callable[[Any], bool]:
            return lambda obj: (
                inspect.isfunction(obj)
                and not obj.__name__.startswith("_")
                and obj.__module__ == mod.__name__  # Only functions defined in this module
            )

        for name, func in inspect.getmembers(module, predicate=make_predicate(module)):
            mcp.tool(func)
            tools_registered += 1
            if verbose:
                # stderr, to keep stdout clean for JSON-RPC
                print(f"Registered tool: {module.__name__}.{name}", file=sys.stderr)

    return tools_registered


def get_transport() -> Literal["stdio", "http", "sse", "streamable-http"]:
    """Transport from ``FASTMCP_TRANSPORT``, falling back to stdio."""
    transport = os.environ.get("FASTMCP_TRANSPORT", "stdio")
    if transport not in VALID_TRANSPORTS:
        logger.warning(f"Invalid transport '{transport}', using 'stdio'")
        return "stdio"
    return transport  # type: ignore[return-value]


def create_configured_server(config: Optional[AgentaConfig] = None, verbose: bool = False) -> FastMCP:
    """Create a fully configured MCP server with all tools registered.

    Args:
        config: Connection settings; read from the environment when omitted
        verbose: Whether to print registration messages

    Returns:
        Configured FastMCP server instance
    """
    from agenta_mcp.tools.dispatch_helpers import set_dispatcher

    if config is None:
        config = AgentaConfig.from_environment()
    config.validate_or_raise()

    dispatcher = Dispatcher(create_backend(config), debug=config.debug)
    set_dispatcher(dispatcher)

    mcp = create_mcp_server()
    tools_count = register_tools(mcp, verbose=verbose)

    if get_transport() in HTTP_TRANSPORTS:
        from agenta_mcp.health import health_check_handler, healthz_handler

        # /mcp/* paths are reserved by FastMCP for protocol endpoints
        for route, handler in (("/health", health_check_handler), ("/healthz", healthz_handler)):
            mcp.custom_route(route, methods=["GET"])(handler)
            if verbose:
                print(f"Registered health check endpoint: {route}", file=sys.stderr)

    if verbose:
        print(f"Successfully registered {tools_count} tools", file=sys.stderr)

    logger.info("Server ready with %d tools (mode=%s)", tools_count, dispatcher.backend.mode)
    return mcp


def build_http_app(mcp: FastMCP, transport: Literal["http", "sse", "streamable-http"] = "http"):
    """Build the Starlette app for an HTTP transport, with CORS enabled."""
    from starlette.middleware.cors import CORSMiddleware

    app = mcp.http_app(transport=transport)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*", "Authorization", "Mcp-Session-Id", "MCP-Protocol-Version"],
        expose_headers=["mcp-session-id"],
        allow_credentials=False,
    )
    return app


def get_port() -> int:
    """Listening port from ``FASTMCP_PORT`` or ``PORT``."""
    raw = os.environ.get("FASTMCP_PORT") or os.environ.get("PORT")
    if not raw:
        return constants.DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid port '{raw}', using {constants.DEFAULT_PORT}")
        return constants.DEFAULT_PORT


def run_server(config: Optional[AgentaConfig] = None, skip_banner: bool = False) -> None:
    """Run the MCP server with proper error handling.

    Args:
        config: Connection settings; read from the environment when omitted
        skip_banner: If True, skip the FastMCP startup banner display.
    """
    try:
        mcp = create_configured_server(config)
        transport = get_transport()

        if transport == "stdio":
            mcp.run(transport=transport, show_banner=not skip_banner)
            return

        import uvicorn

        app = build_http_app(mcp, transport=transport)
        host = os.environ.get("FASTMCP_HOST") or "127.0.0.1"
        port = get_port()
        logger.info(f"Serving {transport} transport on http://{host}:{port}")
        uvicorn.run(app, host=host, port=port, log_level="info")

    except (ImportError, ModuleNotFoundError) as e:
        print(f"Error starting MCP server - Missing dependency: {e}", file=sys.stderr)
        print(file=sys.stderr)
        print("This error usually means a required Python package is not installed.", file=sys.stderr)
        print("Please install agenta-mcp with: pip install agenta-mcp", file=sys.stderr)
        raise

    except Exception as e:
        error_msg = str(e)
        print(f"Error starting MCP server: {error_msg}", file=sys.stderr)

        if "address already in use" in error_msg.lower():
            print(file=sys.stderr)
            print("The server port is already in use. Try:", file=sys.stderr)
            print("1. Change the port with the PORT or FASTMCP_PORT environment variable", file=sys.stderr)
            print("2. Stop the existing server process", file=sys.stderr)
        elif "permission denied" in error_msg.lower():
            print(file=sys.stderr)
            print("Permission denied. Check file/directory permissions or try a different port.", file=sys.stderr)

        raise
