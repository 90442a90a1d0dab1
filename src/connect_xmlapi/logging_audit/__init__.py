"""Logging Audit module.

This module provides logging configuration and audit trail functionality.
"""

from .audit import log_api_call, log_audit_event
from .formatters import CredentialRedactingFormatter, redact_query
from .logger import configure_logging, configure_logging_from_config, get_logger

__all__ = [
    "configure_logging",
    "configure_logging_from_config",
    "get_logger",
    "log_api_call",
    "log_audit_event",
    "redact_query",
    "CredentialRedactingFormatter",
]
