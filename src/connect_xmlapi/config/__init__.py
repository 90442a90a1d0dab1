"""Config module.

This module provides configuration management functionality.
"""

from connect_xmlapi.config.manager import (
    config_from_dict,
    get_logging_config,
    get_service_url,
    get_transport_config,
    load_config,
)
from connect_xmlapi.config.schema import (
    Config,
    CredentialsConfig,
    LoggingConfig,
    ProxyConfig,
    ServiceConfig,
    SessionConfig,
    TransportConfig,
    normalize_service_url,
)

__all__ = [
    # Main configuration loading
    "load_config",
    "config_from_dict",
    # Helper functions
    "get_service_url",
    "get_transport_config",
    "get_logging_config",
    "normalize_service_url",
    # Configuration models
    "Config",
    "ServiceConfig",
    "CredentialsConfig",
    "ProxyConfig",
    "SessionConfig",
    "TransportConfig",
    "LoggingConfig",
]
