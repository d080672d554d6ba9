#!/usr/bin/env python3
"""Command line entry point for the aB-Agenta MCP server."""

import argparse
import os
import sys

from dotenv import load_dotenv

from agenta_mcp import constants
from agenta_mcp.config import AgentaConfig, ConfigurationError
from agenta_mcp.utils import VALID_TRANSPORTS, configure_logging, run_server


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agenta-mcp",
        description="aB-Agenta MCP Server - records, documents and metadata via Model Context Protocol",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--transport",
        choices=VALID_TRANSPORTS,
        help="MCP transport (default: FASTMCP_TRANSPORT or stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        help=f"Port for HTTP transports (default: PORT or {constants.DEFAULT_PORT})",
    )
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help=f"Serve canned data instead of calling the API (same as {constants.ENV_TEST_MODE}=true)",
    )
    parser.add_argument(
        "--skip-banner",
        action="store_true",
        help="Skip startup banner display (useful for multi-server setups)",
    )
    return parser


def main(argv=None) -> None:
    """Main entry point for the MCP server."""
    args = build_parser().parse_args(argv)

    # Loads .env from the current working directory; real environment wins
    load_dotenv()

    # CLI flags take precedence over the environment
    if args.transport:
        os.environ["FASTMCP_TRANSPORT"] = args.transport
    os.environ.setdefault("FASTMCP_TRANSPORT", "stdio")
    if args.port is not None:
        os.environ["FASTMCP_PORT"] = str(args.port)
    if args.test_mode:
        os.environ[constants.ENV_TEST_MODE] = "true"

    configure_logging()

    try:
        config = AgentaConfig.from_environment()
        config.validate_or_raise()
    except ConfigurationError as e:
        print(f"Invalid aB-Agenta configuration: {e}", file=sys.stderr)
        sys.exit(2)

    if config.test_mode:
        print("Running in TEST MODE - no requests will be sent to aB-Agenta", file=sys.stderr)

    skip_banner = args.skip_banner
    if not skip_banner and "MCP_SKIP_BANNER" in os.environ:
        skip_banner = os.environ.get("MCP_SKIP_BANNER", "false").lower() == "true"

    run_server(config, skip_banner=skip_banner)


if __name__ == "__main__":
    main()
