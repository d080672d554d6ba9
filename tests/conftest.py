"""Test configuration for pytest."""

import pytest

from agenta_mcp import constants
from agenta_mcp.backends.simulated import SimulatedBackend
from agenta_mcp.config import AgentaConfig
from agenta_mcp.dispatcher import Dispatcher
from agenta_mcp.tools.dispatch_helpers import set_dispatcher

AGENTA_ENV_VARS = (
    constants.ENV_BASE_URL,
    constants.ENV_API_PATH,
    constants.ENV_USERNAME,
    constants.ENV_PASSWORD,
    constants.ENV_SERVICE_PASSWORD,
    constants.ENV_DATA_DIRECTORY,
    constants.ENV_CLIENT_SECRET,
    constants.ENV_TEST_MODE,
    constants.ENV_TIMEOUT,
    constants.ENV_DEBUG,
    "FASTMCP_TRANSPORT",
    "FASTMCP_HOST",
    "FASTMCP_PORT",
    "PORT",
    "MCP_SKIP_BANNER",
)


@pytest.fixture(autouse=True)
def clean_agenta_env(monkeypatch):
    """Keep developer credentials out of the test run."""
    for name in AGENTA_ENV_VARS:
        # registers the variable for restore on teardown
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def reset_tool_dispatcher():
    """Tools share one module-level dispatcher; never leak it between tests."""
    set_dispatcher(None)
    yield
    set_dispatcher(None)


@pytest.fixture
def live_config() -> AgentaConfig:
    return AgentaConfig(
        base_url="https://agenta.example.com",
        username="alice",
        password="wonderland",
        service_password="svc-secret",
        data_directory="mandant1",
        client_secret="client-secret",
        timeout=5,
    )


@pytest.fixture
def simulated_backend() -> SimulatedBackend:
    return SimulatedBackend()


@pytest.fixture
def simulated_dispatcher(simulated_backend) -> Dispatcher:
    return Dispatcher(simulated_backend)


@pytest.fixture
def upload_file(tmp_path):
    path = tmp_path / "scan_2022_1_1.pdf"
    path.write_bytes(b"%PDF-1.4 test scan")
    return path
