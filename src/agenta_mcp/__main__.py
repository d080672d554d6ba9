"""Run the aB-Agenta MCP server with ``python -m agenta_mcp``.

Environment variables control behavior:

- FASTMCP_TRANSPORT: 'stdio', 'http', 'sse' or 'streamable-http' (default: 'stdio')
- AB_AGENTA_TEST_MODE: 'true' to serve canned data instead of calling the API
- LOG_LEVEL: Logging level (default: 'INFO')
"""

from .main import main

if __name__ == "__main__":
    main()
