"""Default configuration values.

The service URL has no sensible default; it must come from the configuration
file or the CONNECT_XMLAPI_SERVICE_URL environment variable.
"""

from typing import Any

DEFAULT_CONFIG_PATH = "config/config.json"

DEFAULT_CONFIG: dict[str, Any] = {
    "credentials": {
        "user": None,
        "password": None,
        "domain": None,
    },
    "proxy": {
        "url": None,
        "user": None,
        "password": None,
        "domain": None,
    },
    "session": {
        "use_session_param": False,
    },
    "transport": {
        "verify_tls": False,
        "timeout_connect": 10,
        "timeout_read": 1200,
    },
    "logging": {
        "level": "INFO",
        "log_file": "logs/connect-xmlapi.log",
        "redact_credentials": True,
    },
}
