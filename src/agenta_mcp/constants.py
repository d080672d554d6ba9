"""Constants shared across the aB-Agenta MCP server."""

SERVER_NAME = "agenta-mcp"

DEFAULT_BASE_URL = "https://abagenta-mobile.de"
DEFAULT_API_PATH = "/api2_1"
DEFAULT_TIMEOUT = 60
DEFAULT_PORT = 3000

# Request headers understood by the aB-Agenta API
SERVICE_PASSWORD_HEADER = "ab-servicepassword"
DATA_DIRECTORY_HEADER = "ab-datadirectory"
CLIENT_SECRET_HEADER = "ab-client-secret"
IDEMPOTENCY_KEY_HEADER = "ab-idempotency-key"

# Response headers carrying list pagination metadata
TOTAL_COUNT_HEADER = "ab-totalcount"
CONTENT_RANGE_HEADER = "content-range"

SENSITIVE_HEADERS = frozenset({"authorization", SERVICE_PASSWORD_HEADER, CLIENT_SECRET_HEADER})

# Environment variables consumed by AgentaConfig.from_environment
ENV_BASE_URL = "AB_AGENTA_BASE_URL"
ENV_API_PATH = "AB_AGENTA_API_PATH"
ENV_USERNAME = "AB_AGENTA_USERNAME"
ENV_PASSWORD = "AB_AGENTA_PASSWORD"
ENV_SERVICE_PASSWORD = "AB_AGENTA_SERVICE_PASSWORD"
ENV_DATA_DIRECTORY = "AB_AGENTA_DATA_DIRECTORY"
ENV_CLIENT_SECRET = "AB_AGENTA_CLIENT_SECRET"
ENV_TEST_MODE = "AB_AGENTA_TEST_MODE"
ENV_TIMEOUT = "AB_AGENTA_TIMEOUT"
ENV_DEBUG = "DEBUG"
