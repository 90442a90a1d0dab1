"""Client facade for the XML API.

ConnectXmlAPI composes the operation groups and adds the session lifecycle
(login, logout) and current-user lookup.

Example:
    >>> config = load_config(Path("config/config.json"))
    >>> api = ConnectXmlAPI(config)
    >>> if api.login().result:
    ...     meetings = api.get_my_meetings().result
    ...     api.logout()
"""

import logging
from pathlib import Path
from typing import Optional

from connect_xmlapi.api.meetings import MeetingOperations
from connect_xmlapi.api.principals import PrincipalOperations
from connect_xmlapi.api.query import build_query
from connect_xmlapi.api.reporting import ReportingOperations
from connect_xmlapi.api.users import UserOperations
from connect_xmlapi.config.manager import load_config
from connect_xmlapi.config.schema import Config
from connect_xmlapi.logging_audit.audit import log_audit_event
from connect_xmlapi.models.enums import StatusCode
from connect_xmlapi.models.status import ApiStatus, ResultStatus
from connect_xmlapi.models.user import UserInfo
from connect_xmlapi.transport.http_client import CommunicationProvider

logger = logging.getLogger(__name__)


class ConnectXmlAPI(
    MeetingOperations,
    PrincipalOperations,
    UserOperations,
    ReportingOperations,
):
    """Typed client for one XML API endpoint.

    One instance holds one session. Calls are synchronous; concurrent calls
    share the session token, and concurrent login() calls on the same
    instance are not supported.

    Args:
        config: Validated configuration; ``config.service.url`` is already
            normalized to end in ``/api/xml``
        provider: Transport; defaults to HttpCommunicationProvider

    Raises:
        ConfigurationError: If config is None or has no service URL
    """

    def __init__(
        self,
        config: Config,
        provider: Optional[CommunicationProvider] = None,
    ) -> None:
        super().__init__(config, provider)
        logger.info(
            f"XML API client initialized: endpoint={self.service_url}, "
            f"session_mode={'param' if config.session.use_session_param else 'cookie'}"
        )

    @classmethod
    def from_config_file(
        cls,
        config_path: Optional[Path] = None,
        provider: Optional[CommunicationProvider] = None,
    ) -> "ConnectXmlAPI":
        """Build a client from a configuration file plus environment overrides."""
        return cls(load_config(config_path), provider)

    def login(
        self, user: Optional[str] = None, password: Optional[str] = None
    ) -> ResultStatus[bool]:
        """Log in and keep the session token for later calls.

        Args:
            user: Login name; defaults to the configured credentials
            password: Password; defaults to the configured credentials

        Returns:
            ResultStatus whose result is True when the server answered ``ok``
            and a session token was issued. On any other outcome the held
            token is cleared.
        """
        credentials = self.config.credentials
        user = user or credentials.login
        password = password if password is not None else credentials.password
        if not user:
            return ApiStatus.missing_argument("login").with_result(False)
        if not password:
            return ApiStatus.missing_argument("password").with_result(False)

        status = self.process_api_request(
            "login",
            build_query(("login", user), ("password", password)),
            requires_session=False,
        )
        succeeded = status.code == StatusCode.OK and status.error is None and self.session.is_set
        if not succeeded:
            self.session.clear()

        log_audit_event(
            "LOGIN",
            {
                "status": "success" if succeeded else "failure",
                "code": status.code.wire_name,
                "login": user,
            },
        )
        return status.with_result(succeeded)

    def logout(self) -> ResultStatus[bool]:
        """End the session.

        The held token is cleared whatever the server answers, so a failed
        logout never leaves a stale token behind.
        """
        status = self.process_api_request("logout")
        self.session.clear()
        log_audit_event(
            "LOGOUT",
            {
                "status": "success" if status.is_ok else "failure",
                "code": status.code.wire_name,
            },
        )
        return status.with_result(status.is_ok)

    def get_user_info(self) -> ResultStatus[UserInfo]:
        """Describe the logged-in user (``common-info``)."""
        status = self.process_api_request("common-info")
        return self._decode_first(status, UserInfo, "//user")
