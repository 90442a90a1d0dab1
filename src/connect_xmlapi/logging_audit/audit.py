"""Audit trail for XML API calls.

Every call through the transport produces one structured line on the
``connect_xmlapi.audit`` logger. Request parameters pass through
redact_query before they are written, regardless of formatter settings.
"""

import time
import uuid
from typing import Any, Dict, Optional

from .formatters import redact_query
from .logger import get_logger

logger = get_logger("connect_xmlapi.audit")


def log_audit_event(event_type: str, details: Dict[str, Any]) -> None:
    """Log an audit trail event.

    Creates a structured audit log entry. Events whose ``status`` is
    ``failure`` are logged at ERROR level, everything else at INFO.

    Args:
        event_type: Type of operation (e.g., "LOGIN", "LOGOUT", "SCO_ROLLBACK")
        details: Dictionary with event details such as ``status``, ``action``,
                ``duration`` and ``error_message``

    Example:
        >>> log_audit_event("LOGIN", {"status": "success", "login": "jdoe"})
    """
    details = dict(details)
    details.setdefault("timestamp", time.time())
    details.setdefault("correlation_id", str(uuid.uuid4()))

    message_parts = [f"AUDIT [{event_type}]"]

    field_order = [
        "status",
        "action",
        "code",
        "subcode",
        "duration",
        "error_message",
        "correlation_id",
    ]

    for field in field_order:
        if field in details:
            value = details[field]
            if field == "duration" and isinstance(value, (int, float)):
                message_parts.append(f"{field}={value:.2f}s")
            else:
                message_parts.append(f"{field}={value}")

    for key, value in details.items():
        if key not in field_order and key != "timestamp":
            message_parts.append(f"{key}={value}")

    audit_message = " | ".join(message_parts)

    if details.get("status") == "failure":
        logger.error(audit_message)
    else:
        logger.info(audit_message)


def log_api_call(
    action: str,
    query: str,
    code: str,
    duration: float,
    error: Optional[Exception] = None,
    response: Optional[str] = None,
) -> None:
    """Log one XML API round trip.

    The summary goes out at INFO (ERROR on client-side failure); the full
    response body, when given, at DEBUG.

    Args:
        action: API action name
        query: Request parameters as sent
        code: Resulting status code wire name
        duration: Round-trip time in seconds
        error: Client-side failure, if any
        response: Raw response body
    """
    details: Dict[str, Any] = {
        "status": "failure" if error is not None else "success",
        "action": action,
        "code": code,
        "duration": duration,
        "query": redact_query(query),
    }
    if error is not None:
        details["error_message"] = redact_query(f"{type(error).__name__}: {error}")
    log_audit_event("API_CALL", details)

    if response is not None:
        logger.debug(f"API RESPONSE [{action}]\n{response}")
