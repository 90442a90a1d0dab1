"""Custom exception classes for the Connect XML API client.

All exceptions inherit from ConnectXmlApiError to allow catching all custom exceptions.
Call-time failures are carried inside a status envelope rather than raised; these
classes are what ends up in ``ApiStatus.error``.
"""

from typing import Optional


class ConnectXmlApiError(Exception):
    """Base exception for all Connect XML API custom exceptions."""

    pass


class ValidationError(ConnectXmlApiError):
    """Raised when a required argument is missing or malformed.

    Examples:
        - Empty sco-id passed to an update
        - Meeting create without a folder-id
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class TransportError(ConnectXmlApiError):
    """Raised when network/transport issues occur.

    Examples:
        - Connection timeout
        - DNS failure
        - HTTP error responses with no usable body
    """

    pass


class ConfigurationError(ConnectXmlApiError):
    """Raised when configuration loading or validation fails.

    Examples:
        - Missing service URL
        - Invalid configuration file format
        - Configuration value out of range
    """

    pass


class ResponseParseError(ConnectXmlApiError):
    """Raised when a response is not a recognizable status envelope.

    Examples:
        - Body is not well-formed XML
        - No ``status`` element in the document
        - Unknown status code
    """

    pass


class DecodeError(ConnectXmlApiError):
    """Raised when a payload element cannot be mapped onto a record.

    Examples:
        - Root element name does not match the expected one
        - Attribute value does not parse as the declared kind
    """

    pass


class CompensationError(ConnectXmlApiError):
    """Raised when the rollback of a partially completed create fails."""

    def __init__(self, message: str, sco_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.sco_id = sco_id
