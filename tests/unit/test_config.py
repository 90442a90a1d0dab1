"""Unit tests for configuration management.

Tests cover configuration loading, validation, environment variable overrides,
service URL normalization and error handling.
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from connect_xmlapi.config import (
    Config,
    CredentialsConfig,
    ProxyConfig,
    ServiceConfig,
    config_from_dict,
    get_logging_config,
    get_service_url,
    get_transport_config,
    load_config,
    normalize_service_url,
)
from connect_xmlapi.utils.exceptions import ConfigurationError

ENV_VARS = [
    "CONNECT_XMLAPI_SERVICE_URL",
    "CONNECT_XMLAPI_USER",
    "CONNECT_XMLAPI_PASSWORD",
    "CONNECT_XMLAPI_DOMAIN",
    "CONNECT_XMLAPI_PROXY_URL",
    "CONNECT_XMLAPI_PROXY_USER",
    "CONNECT_XMLAPI_PROXY_PASSWORD",
    "CONNECT_XMLAPI_PROXY_DOMAIN",
    "CONNECT_XMLAPI_USE_SESSION_PARAM",
    "CONNECT_XMLAPI_VERIFY_TLS",
    "CONNECT_XMLAPI_TIMEOUT_CONNECT",
    "CONNECT_XMLAPI_TIMEOUT_READ",
    "CONNECT_XMLAPI_LOG_LEVEL",
    "CONNECT_XMLAPI_LOG_FILE",
    "CONNECT_XMLAPI_REDACT_CREDENTIALS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate each test from the caller's environment and any .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def _write_config(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestServiceUrlNormalization:
    """Test that every accepted form ends in exactly one /api/xml."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://connect.example.com",
            "https://connect.example.com/",
            "https://connect.example.com/api/xml",
            "https://connect.example.com/api/xml/",
            "https://connect.example.com/api/xml?",
            "https://connect.example.com//",
            "  https://connect.example.com/  ",
        ],
    )
    def test_normalized_form(self, url: str) -> None:
        assert normalize_service_url(url) == "https://connect.example.com/api/xml"

    def test_service_config_normalizes(self) -> None:
        assert ServiceConfig(url="http://host:8080/").url == "http://host:8080/api/xml"

    def test_service_config_rejects_other_schemes(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ServiceConfig(url="ftp://connect.example.com")

        assert "Must start with http:// or https://" in str(exc_info.value)


class TestConfigurationSchema:
    """Test pydantic configuration models validation."""

    def test_defaults(self) -> None:
        # Act
        config = Config(service={"url": "https://connect.example.com"})

        # Assert
        assert config.session.use_session_param is False
        assert config.transport.verify_tls is False
        assert config.transport.timeout_connect == 10
        assert config.transport.timeout_read == 1200
        assert config.logging.level == "INFO"
        assert config.logging.redact_credentials is True
        assert config.proxy.url is None

    def test_login_includes_domain(self) -> None:
        assert CredentialsConfig(user="jdoe", domain="CORP").login == "CORP\\jdoe"
        assert CredentialsConfig(user="jdoe").login == "jdoe"
        assert CredentialsConfig().login is None

    def test_proxy_user_without_password_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ProxyConfig(url="http://proxy:3128", user="bob")

        assert "set together" in str(exc_info.value)

    def test_blank_proxy_url_reads_as_none(self) -> None:
        assert ProxyConfig(url="  ").url is None

    def test_timeout_range_enforced(self) -> None:
        with pytest.raises(ValidationError):
            Config(service={"url": "https://h"}, transport={"timeout_connect": 0})

    def test_logging_level_upper_cased(self) -> None:
        config = Config(service={"url": "https://h"}, logging={"level": "debug"})

        assert config.logging.level == "DEBUG"

    def test_invalid_logging_level(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Config(service={"url": "https://h"}, logging={"level": "LOUD"})

        assert "Invalid log level" in str(exc_info.value)

    def test_config_from_dict_wraps_errors(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            config_from_dict({"service": {"url": "mailto:x"}})

        assert "Configuration validation failed" in str(exc_info.value)


class TestLoadConfig:
    """Test loading from file, defaults and environment."""

    def test_load_from_file(self, tmp_path: Path) -> None:
        # Arrange
        path = _write_config(
            tmp_path / "config.json",
            {
                "service": {"url": "https://connect.example.com/"},
                "credentials": {"user": "admin@example.com"},
                "session": {"use_session_param": True},
            },
        )

        # Act
        config = load_config(path)

        # Assert
        assert get_service_url(config) == "https://connect.example.com/api/xml"
        assert config.credentials.user == "admin@example.com"
        assert config.session.use_session_param is True
        assert get_transport_config(config).timeout_read == 1200
        assert get_logging_config(config).level == "INFO"

    def test_missing_file_without_url_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(tmp_path / "absent.json")

        assert "No service URL configured" in str(exc_info.value)
        assert "CONNECT_XMLAPI_SERVICE_URL" in str(exc_info.value)

    def test_missing_file_with_env_url(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("CONNECT_XMLAPI_SERVICE_URL", "https://env.example.com")

        config = load_config(tmp_path / "absent.json")

        assert config.service.url == "https://env.example.com/api/xml"

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch) -> None:
        # Arrange
        path = _write_config(
            tmp_path / "config.json",
            {
                "service": {"url": "https://file.example.com"},
                "transport": {"verify_tls": False, "timeout_read": 60},
            },
        )
        monkeypatch.setenv("CONNECT_XMLAPI_SERVICE_URL", "https://env.example.com/api/xml/")
        monkeypatch.setenv("CONNECT_XMLAPI_USER", "jdoe")
        monkeypatch.setenv("CONNECT_XMLAPI_PASSWORD", "from-env")
        monkeypatch.setenv("CONNECT_XMLAPI_DOMAIN", "CORP")
        monkeypatch.setenv("CONNECT_XMLAPI_USE_SESSION_PARAM", "yes")
        monkeypatch.setenv("CONNECT_XMLAPI_VERIFY_TLS", "true")
        monkeypatch.setenv("CONNECT_XMLAPI_TIMEOUT_READ", "300")
        monkeypatch.setenv("CONNECT_XMLAPI_LOG_LEVEL", "warning")

        # Act
        config = load_config(path)

        # Assert
        assert config.service.url == "https://env.example.com/api/xml"
        assert config.credentials.login == "CORP\\jdoe"
        assert config.credentials.password == "from-env"
        assert config.session.use_session_param is True
        assert config.transport.verify_tls is True
        assert config.transport.timeout_read == 300
        assert config.logging.level == "WARNING"

    def test_proxy_env_overrides(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("CONNECT_XMLAPI_SERVICE_URL", "https://h.example.com")
        monkeypatch.setenv("CONNECT_XMLAPI_PROXY_URL", "http://proxy:3128")
        monkeypatch.setenv("CONNECT_XMLAPI_PROXY_USER", "bob")
        monkeypatch.setenv("CONNECT_XMLAPI_PROXY_PASSWORD", "pw")

        config = load_config(tmp_path / "absent.json")

        assert config.proxy.url == "http://proxy:3128"
        assert config.proxy.user == "bob"

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text('{"service": {"url": ', encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert "Invalid JSON" in str(exc_info.value)

    def test_schema_violation_raises(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path / "config.json",
            {"service": {"url": "https://h"}, "transport": {"timeout_read": 99999}},
        )

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert "Configuration validation failed" in str(exc_info.value)

    def test_password_in_file_warns(self, tmp_path: Path, caplog) -> None:
        path = _write_config(
            tmp_path / "config.json",
            {"service": {"url": "https://h"}, "credentials": {"user": "u", "password": "p"}},
        )

        with caplog.at_level("WARNING"):
            load_config(path)

        assert "Login password found in configuration file" in caplog.text
