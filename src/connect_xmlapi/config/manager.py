"""Configuration manager for loading and managing configuration.

This module provides the main configuration loading and management functionality,
including support for JSON configuration files, environment variable overrides,
and configuration validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from connect_xmlapi.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH
from connect_xmlapi.config.schema import Config, LoggingConfig, TransportConfig
from connect_xmlapi.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variable prefix for all configuration overrides
ENV_PREFIX = "CONNECT_XMLAPI_"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file and environment variables.

    Configuration is loaded with the following precedence (highest to lowest):
    1. CLI arguments (handled by caller)
    2. Environment variables (CONNECT_XMLAPI_* prefix)
    3. Configuration file (JSON)
    4. Default values

    Args:
        config_path: Path to configuration file. If None, uses ./config/config.json

    Returns:
        Validated Config instance

    Raises:
        ConfigurationError: If configuration is invalid or malformed, or no
            service URL is configured

    Example:
        >>> config = load_config(Path("config/config.json"))
        >>> config.service.url
        'https://connect.example.com/api/xml'
    """
    # Load .env file if present in project root
    load_dotenv()

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_PATH)

    config_dict = _load_config_file(config_path)
    _check_sensitive_values(config_dict)
    config_dict = _apply_env_overrides(config_dict)

    if not config_dict.get("service", {}).get("url"):
        raise ConfigurationError(
            "No service URL configured.\n"
            f"Fix: Set service.url in {config_path} or the "
            f"{ENV_PREFIX}SERVICE_URL environment variable."
        )

    try:
        return Config(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed:\n{e}\n\n"
            f"Fix: Check your configuration file at {config_path} and ensure all "
            f"values match the expected format."
        ) from e


def config_from_dict(config_dict: dict[str, Any]) -> Config:
    """Validate an in-memory configuration dictionary.

    Raises:
        ConfigurationError: If the dictionary does not match the schema
    """
    try:
        return Config(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed:\n{e}") from e


def _load_config_file(config_path: Path) -> dict[str, Any]:
    """Load configuration file or return defaults.

    Raises:
        ConfigurationError: If JSON is malformed or unreadable
    """
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_dict = json.load(f)
            logger.info(f"Loaded configuration from {config_path}")
            return config_dict
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {config_path}\n"
                f"Error: {e}\n"
                f"Fix: Check JSON syntax at line {e.lineno}, column {e.colno}"
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read config file: {config_path}\n"
                f"Error: {e}\n"
                f"Fix: Check file permissions and path"
            ) from e
    else:
        logger.info(
            f"Config file not found: {config_path}. Using default configuration."
        )
        # Return a deep copy of defaults to avoid mutation
        return json.loads(json.dumps(DEFAULT_CONFIG))


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides with CONNECT_XMLAPI_ prefix.

    Environment variables follow the pattern: CONNECT_XMLAPI_<SECTION>_<FIELD>
    For example: CONNECT_XMLAPI_SERVICE_URL, CONNECT_XMLAPI_LOG_LEVEL

    Args:
        config_dict: Configuration dictionary to update

    Returns:
        Updated configuration dictionary with environment overrides applied
    """
    # Service section
    if service_url := os.getenv(f"{ENV_PREFIX}SERVICE_URL"):
        config_dict.setdefault("service", {})["url"] = service_url
        logger.debug("Override: service_url from environment")

    # Credentials section
    if user := os.getenv(f"{ENV_PREFIX}USER"):
        config_dict.setdefault("credentials", {})["user"] = user
        logger.debug("Override: user from environment")

    if password := os.getenv(f"{ENV_PREFIX}PASSWORD"):
        config_dict.setdefault("credentials", {})["password"] = password
        logger.debug("Override: password from environment")

    if domain := os.getenv(f"{ENV_PREFIX}DOMAIN"):
        config_dict.setdefault("credentials", {})["domain"] = domain
        logger.debug("Override: domain from environment")

    # Proxy section
    if proxy_url := os.getenv(f"{ENV_PREFIX}PROXY_URL"):
        config_dict.setdefault("proxy", {})["url"] = proxy_url
        logger.debug("Override: proxy_url from environment")

    if proxy_user := os.getenv(f"{ENV_PREFIX}PROXY_USER"):
        config_dict.setdefault("proxy", {})["user"] = proxy_user
        logger.debug("Override: proxy_user from environment")

    if proxy_password := os.getenv(f"{ENV_PREFIX}PROXY_PASSWORD"):
        config_dict.setdefault("proxy", {})["password"] = proxy_password
        logger.debug("Override: proxy_password from environment")

    if proxy_domain := os.getenv(f"{ENV_PREFIX}PROXY_DOMAIN"):
        config_dict.setdefault("proxy", {})["domain"] = proxy_domain
        logger.debug("Override: proxy_domain from environment")

    # Session section
    if use_session_param := os.getenv(f"{ENV_PREFIX}USE_SESSION_PARAM"):
        config_dict.setdefault("session", {})["use_session_param"] = _parse_bool(
            use_session_param
        )
        logger.debug("Override: use_session_param from environment")

    # Transport section
    if verify_tls := os.getenv(f"{ENV_PREFIX}VERIFY_TLS"):
        config_dict.setdefault("transport", {})["verify_tls"] = _parse_bool(verify_tls)
        logger.debug("Override: verify_tls from environment")

    if timeout_connect := os.getenv(f"{ENV_PREFIX}TIMEOUT_CONNECT"):
        config_dict.setdefault("transport", {})["timeout_connect"] = int(timeout_connect)
        logger.debug("Override: timeout_connect from environment")

    if timeout_read := os.getenv(f"{ENV_PREFIX}TIMEOUT_READ"):
        config_dict.setdefault("transport", {})["timeout_read"] = int(timeout_read)
        logger.debug("Override: timeout_read from environment")

    # Logging section
    if log_level := os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config_dict.setdefault("logging", {})["level"] = log_level
        logger.debug("Override: log_level from environment")

    if log_file := os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config_dict.setdefault("logging", {})["log_file"] = log_file
        logger.debug("Override: log_file from environment")

    if redact := os.getenv(f"{ENV_PREFIX}REDACT_CREDENTIALS"):
        config_dict.setdefault("logging", {})["redact_credentials"] = _parse_bool(redact)
        logger.debug("Override: redact_credentials from environment")

    return config_dict


def _parse_bool(value: str) -> bool:
    """Parse boolean value from string (case-insensitive)."""
    return value.lower() in ("true", "1", "yes", "on")


def _check_sensitive_values(config_dict: dict[str, Any]) -> None:
    """Warn when passwords are stored in the configuration file itself.

    Passwords should be supplied through environment variables (or a .env
    file that stays out of version control).
    """
    if (config_dict.get("credentials") or {}).get("password"):
        logger.warning(
            "WARNING: Login password found in configuration file! "
            f"Use the {ENV_PREFIX}PASSWORD environment variable instead."
        )
    if (config_dict.get("proxy") or {}).get("password"):
        logger.warning(
            "WARNING: Proxy password found in configuration file! "
            f"Use the {ENV_PREFIX}PROXY_PASSWORD environment variable instead."
        )


def get_service_url(config: Config) -> str:
    """Get the normalized /api/xml endpoint URL."""
    return config.service.url


def get_transport_config(config: Config) -> TransportConfig:
    """Get transport configuration."""
    return config.transport


def get_logging_config(config: Config) -> LoggingConfig:
    """Get logging configuration."""
    return config.logging
