"""aB-Agenta connection configuration.

``AgentaConfig`` is built once at process start (usually from environment
variables) and handed to the backend factory. It is immutable; nothing in
the server reads the environment after it has been constructed.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from agenta_mcp import constants
from .base import Configuration, ConfigValidationResult, SerializationError

_SECRET_FIELDS = ("password", "service_password", "client_secret")


def _env_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


def _env_str(environ: Mapping[str, str], key: str) -> Optional[str]:
    value = environ.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class AgentaConfig(Configuration):
    """Connection settings for the aB-Agenta API.

    Attributes:
        base_url: Root URL of the aB-Agenta installation
        api_path: API prefix prepended to every request path
        username: Basic auth user name
        password: Basic auth password
        service_password: Value for the ``ab-servicepassword`` header
        data_directory: Value for the ``ab-datadirectory`` header
        client_secret: Value for the ``ab-client-secret`` header
        test_mode: Serve canned data instead of calling the API
        debug: Include request URL and headers in error diagnostics
        timeout: Per-request timeout in seconds
    """

    base_url: str = constants.DEFAULT_BASE_URL
    api_path: str = constants.DEFAULT_API_PATH
    username: Optional[str] = None
    password: Optional[str] = None
    service_password: Optional[str] = None
    data_directory: Optional[str] = None
    client_secret: Optional[str] = None
    test_mode: bool = False
    debug: bool = False
    timeout: float = constants.DEFAULT_TIMEOUT

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> AgentaConfig:
        """Build a configuration from ``AB_AGENTA_*`` environment variables."""
        env = os.environ if environ is None else environ

        timeout_raw = _env_str(env, constants.ENV_TIMEOUT)
        try:
            timeout = float(timeout_raw) if timeout_raw else float(constants.DEFAULT_TIMEOUT)
        except ValueError:
            raise SerializationError(f"{constants.ENV_TIMEOUT} must be a number, got {timeout_raw!r}") from None

        return cls(
            base_url=_env_str(env, constants.ENV_BASE_URL) or constants.DEFAULT_BASE_URL,
            api_path=_env_str(env, constants.ENV_API_PATH) or constants.DEFAULT_API_PATH,
            username=_env_str(env, constants.ENV_USERNAME),
            password=_env_str(env, constants.ENV_PASSWORD),
            service_password=_env_str(env, constants.ENV_SERVICE_PASSWORD),
            data_directory=_env_str(env, constants.ENV_DATA_DIRECTORY),
            client_secret=_env_str(env, constants.ENV_CLIENT_SECRET),
            test_mode=_env_flag(env.get(constants.ENV_TEST_MODE)),
            debug=_env_flag(env.get(constants.ENV_DEBUG)),
            timeout=timeout,
        )

    @property
    def api_url(self) -> str:
        """Base URL joined with the API path, without trailing slash."""
        path = self.api_path.strip("/")
        root = self.base_url.rstrip("/")
        return f"{root}/{path}" if path else root

    @property
    def has_basic_auth(self) -> bool:
        return bool(self.username and self.password)

    def validate(self) -> ConfigValidationResult:
        result = ConfigValidationResult()

        if not self.base_url or not self.base_url.strip():
            result.add_error("Base URL is required")
        elif not self.base_url.startswith(("http://", "https://")):
            result.add_error(
                "Base URL must start with 'http://' or 'https://' (e.g., 'https://abagenta-mobile.de')"
            )
        elif not urlparse(self.base_url).netloc:
            result.add_error("Base URL must specify a hostname (e.g., 'https://abagenta-mobile.de')")

        if bool(self.username) != bool(self.password):
            result.add_error(
                f"Basic authentication needs both {constants.ENV_USERNAME} and {constants.ENV_PASSWORD}"
            )

        if self.timeout <= 0:
            result.add_error(f"Timeout must be positive, got {self.timeout}")

        return result

    def to_dict(self, mask_secrets: bool = True) -> Dict[str, Any]:
        """Serialize the configuration; secrets are masked unless asked otherwise."""
        data = asdict(self)
        if mask_secrets:
            for name in _SECRET_FIELDS:
                if data.get(name):
                    data[name] = "***"
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AgentaConfig:
        if not isinstance(data, dict):
            raise SerializationError(f"Configuration data must be a dict, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise SerializationError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)
