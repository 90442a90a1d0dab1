"""Configuration schema models using pydantic.

This module defines the configuration structure and validation rules using pydantic.
All configuration values are validated according to the schema defined here.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

API_PATH = "/api/xml"


def normalize_service_url(url: str) -> str:
    """Normalize a service URL so it ends in exactly one ``/api/xml``.

    Trailing ``/`` and ``?`` characters are removed before the check.

    Example:
        >>> normalize_service_url("https://connect.example.com/")
        'https://connect.example.com/api/xml'
        >>> normalize_service_url("https://connect.example.com/api/xml?")
        'https://connect.example.com/api/xml'
    """
    url = url.strip().rstrip("/?")
    if not url.endswith(API_PATH):
        url += API_PATH
    return url


def _validate_http_url(v: str) -> str:
    if not v.startswith(("http://", "https://")):
        raise ValueError(f"Invalid URL: {v}. Must start with http:// or https://")
    return v


class ServiceConfig(BaseModel):
    """Configuration for the XML API endpoint.

    Attributes:
        url: Base URL of the service; normalized to end in /api/xml
    """

    url: str = Field(..., description="Service base URL or /api/xml endpoint")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate the URL is HTTP/HTTPS and normalize the API path.

        Raises:
            ValueError: If URL does not start with http:// or https://
        """
        return normalize_service_url(_validate_http_url(v.strip()))


class CredentialsConfig(BaseModel):
    """Login credentials used by ``login()`` when none are passed explicitly.

    Attributes:
        user: Login name
        password: Password; prefer the CONNECT_XMLAPI_PASSWORD environment variable
        domain: Optional domain prefix for the login
    """

    user: Optional[str] = None
    password: Optional[str] = None
    domain: Optional[str] = None

    @property
    def login(self) -> Optional[str]:
        """Login name including the domain prefix when one is set."""
        if self.user and self.domain:
            return f"{self.domain}\\{self.user}"
        return self.user


class ProxyConfig(BaseModel):
    """Outbound HTTP proxy.

    Attributes:
        url: Proxy URL; no proxy is used when unset
        user: Proxy user name
        password: Proxy password
        domain: Optional domain for the proxy user
    """

    url: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    domain: Optional[str] = None

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return _validate_http_url(v.strip())

    @model_validator(mode="after")
    def validate_credentials(self) -> "ProxyConfig":
        """Proxy user and password must be given together."""
        if bool(self.user) != bool(self.password):
            raise ValueError("proxy user and password must be set together")
        return self


class SessionConfig(BaseModel):
    """Session propagation mode.

    Attributes:
        use_session_param: Send ``session=<token>`` as a request parameter
            instead of the BREEZESESSION cookie
    """

    use_session_param: bool = False


class TransportConfig(BaseModel):
    """Configuration for HTTP transport.

    Attributes:
        verify_tls: Verify server certificates; off by default for legacy
            deployments with self-signed certificates
        timeout_connect: Connection timeout in seconds
        timeout_read: Read timeout in seconds; long reports can take minutes
    """

    verify_tls: bool = False
    timeout_connect: int = Field(default=10, ge=1, le=300)
    timeout_read: int = Field(default=1200, ge=1, le=3600)


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
        redact_credentials: Mask passwords and session tokens in log output
    """

    level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/connect-xmlapi.log"))
    redact_credentials: bool = True

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level.

        Raises:
            ValueError: If level is not a valid logging level
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(valid_levels)}"
            )
        return v_upper


class Config(BaseModel):
    """Root configuration model.

    Attributes:
        service: XML API endpoint
        credentials: Default login credentials
        proxy: Outbound proxy settings
        session: Session propagation mode
        transport: HTTP transport settings
        logging: Logging settings
    """

    service: ServiceConfig
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
