"""Tests for AgentaConfig."""

import dataclasses

import pytest

from agenta_mcp.config import AgentaConfig, ConfigValidationResult, SerializationError, ValidationError


class TestFromEnvironment:
    """Reading configuration from environment variables."""

    def test_defaults(self):
        config = AgentaConfig.from_environment({})
        assert config.base_url == "https://abagenta-mobile.de"
        assert config.api_path == "/api2_1"
        assert config.api_url == "https://abagenta-mobile.de/api2_1"
        assert config.test_mode is False
        assert config.debug is False
        assert config.timeout == 60
        assert config.has_basic_auth is False

    def test_reads_all_variables(self):
        config = AgentaConfig.from_environment(
            {
                "AB_AGENTA_BASE_URL": "https://agenta.example.com/",
                "AB_AGENTA_API_PATH": "/api2_1/",
                "AB_AGENTA_USERNAME": "alice",
                "AB_AGENTA_PASSWORD": "wonderland",
                "AB_AGENTA_SERVICE_PASSWORD": "svc",
                "AB_AGENTA_DATA_DIRECTORY": "mandant1",
                "AB_AGENTA_CLIENT_SECRET": "secret",
                "AB_AGENTA_TEST_MODE": "true",
                "AB_AGENTA_TIMEOUT": "12.5",
                "DEBUG": "TRUE",
            }
        )
        assert config.api_url == "https://agenta.example.com/api2_1"
        assert config.has_basic_auth is True
        assert config.service_password == "svc"
        assert config.data_directory == "mandant1"
        assert config.client_secret == "secret"
        assert config.test_mode is True
        assert config.debug is True
        assert config.timeout == 12.5

    def test_flags_require_literal_true(self):
        config = AgentaConfig.from_environment({"AB_AGENTA_TEST_MODE": "1", "DEBUG": "yes"})
        assert config.test_mode is False
        assert config.debug is False

    def test_blank_values_are_unset(self):
        config = AgentaConfig.from_environment({"AB_AGENTA_USERNAME": "  ", "AB_AGENTA_BASE_URL": ""})
        assert config.username is None
        assert config.base_url == "https://abagenta-mobile.de"

    def test_invalid_timeout(self):
        with pytest.raises(SerializationError, match="AB_AGENTA_TIMEOUT"):
            AgentaConfig.from_environment({"AB_AGENTA_TIMEOUT": "soon"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("AB_AGENTA_TEST_MODE", "true")
        assert AgentaConfig.from_environment().test_mode is True


class TestValidation:
    """AgentaConfig.validate rules."""

    def test_default_config_is_valid(self):
        assert AgentaConfig().is_valid()

    def test_base_url_needs_scheme(self):
        result = AgentaConfig(base_url="abagenta-mobile.de").validate()
        assert not result.is_valid
        assert "http://" in result.errors[0]

    def test_base_url_needs_host(self):
        result = AgentaConfig(base_url="https://").validate()
        assert not result.is_valid
        assert "hostname" in result.errors[0]

    def test_username_without_password(self):
        result = AgentaConfig(username="alice").validate()
        assert result.error_count == 1
        assert "AB_AGENTA_PASSWORD" in result.errors[0]

    def test_non_positive_timeout(self):
        assert not AgentaConfig(timeout=0).is_valid()

    def test_validate_or_raise_lists_errors(self):
        with pytest.raises(ValidationError) as exc_info:
            AgentaConfig(base_url="ftp://x", password="p").validate_or_raise()
        message = str(exc_info.value)
        assert "Base URL" in message
        assert "Basic authentication" in message
        assert message.startswith("Invalid aB-Agenta configuration:\n  - ")
        assert message.count("\n  - ") == 2

    def test_result_validity_follows_errors(self):
        result = ConfigValidationResult()
        assert result.is_valid
        result.add_error("Timeout must be positive, got 0")
        assert not result.is_valid
        assert result.error_count == 1


class TestSerialization:
    """to_dict / from_dict."""

    def test_to_dict_masks_secrets(self, live_config):
        data = live_config.to_dict()
        assert data["password"] == "***"
        assert data["service_password"] == "***"
        assert data["client_secret"] == "***"
        assert data["username"] == "alice"

    def test_to_dict_unmasked_round_trip(self, live_config):
        assert AgentaConfig.from_dict(live_config.to_dict(mask_secrets=False)) == live_config

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(SerializationError, match="verbose"):
            AgentaConfig.from_dict({"verbose": True})

    def test_from_dict_rejects_non_dict(self):
        with pytest.raises(SerializationError):
            AgentaConfig.from_dict(["base_url"])

    def test_config_is_immutable(self, live_config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            live_config.test_mode = True
