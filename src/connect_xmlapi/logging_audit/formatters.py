"""Custom log formatters for the Connect XML API client.

This module provides a formatter that masks credentials and session tokens.
"""

import logging
import re
from typing import List, Tuple

REDACTED = "[REDACTED]"

# Query parameters whose values never belong in a log file
SENSITIVE_PARAMS = ("password", "password-old", "password-verify", "session")

_QUERY_VALUE = re.compile(
    r"(?P<key>(?<![\w-])(?:" + "|".join(re.escape(p) for p in SENSITIVE_PARAMS) + r"))=[^&\s'\"]*"
)


def redact_query(query: str) -> str:
    """Mask sensitive parameter values in a query string.

    Example:
        >>> redact_query("login=jdoe&password=s3cret")
        'login=jdoe&password=[REDACTED]'
    """
    return _QUERY_VALUE.sub(lambda m: f"{m.group('key')}={REDACTED}", query)


class CredentialRedactingFormatter(logging.Formatter):
    """Formatter that masks passwords and session tokens in log messages.

    Attributes:
        redact_credentials: Whether to enable redaction
        patterns: List of (regex_pattern, replacement_text) tuples for redaction

    Example:
        >>> formatter = CredentialRedactingFormatter(
        ...     fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        ...     redact_credentials=True
        ... )
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(formatter)
    """

    def __init__(
        self,
        fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt: str | None = None,
        redact_credentials: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.redact_credentials = redact_credentials

        self.patterns: List[Tuple[re.Pattern[str], str]] = [
            # Query parameters: password=..., session=...
            (_QUERY_VALUE, rf"\g<key>={REDACTED}"),
            # Session cookie: BREEZESESSION=breezbreez123...
            (re.compile(r"BREEZESESSION=[^;&\s'\"]+"), f"BREEZESESSION={REDACTED}"),
            # Cookie dictionaries: {'BREEZESESSION': '...'}
            (re.compile(r"(['\"]BREEZESESSION['\"]\s*:\s*)['\"][^'\"]*['\"]"),
             rf"\1'{REDACTED}'"),
        ]

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with optional credential redaction."""
        original = super().format(record)

        if self.redact_credentials:
            for pattern, replacement in self.patterns:
                original = pattern.sub(replacement, original)

        return original
