"""HTTP transport for the XML API.

Sends each request as an HTTP GET to ``<service>/api/xml?action=<name>&...``
and turns the response into a status envelope. There is no retry: a failed
call comes back as an envelope with ``code`` NOT_SET and the exception in
``error``.
"""

import logging
import time
from threading import Lock
from typing import Dict, Optional, Protocol
from urllib.parse import quote, urlsplit, urlunsplit

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from connect_xmlapi.api.parsers import resolve_operation_status
from connect_xmlapi.config.schema import Config, ProxyConfig
from connect_xmlapi.logging_audit.audit import log_api_call
from connect_xmlapi.logging_audit.formatters import redact_query
from connect_xmlapi.models.request import ApiRequest
from connect_xmlapi.models.status import ApiStatus
from connect_xmlapi.transport.session import SESSION_COOKIE, SessionSlot
from connect_xmlapi.utils.exceptions import ResponseParseError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "*/*",
    "Connection": "close",
}


class CommunicationProvider(Protocol):
    """Anything that can carry an ApiRequest to the service."""

    def process_request(
        self, request: ApiRequest, config: Config, session: SessionSlot
    ) -> ApiStatus:
        ...


def build_proxies(proxy: ProxyConfig) -> Optional[Dict[str, str]]:
    """Build a requests proxies mapping with embedded credentials.

    Args:
        proxy: Proxy configuration

    Returns:
        Mapping for both http and https, or None when no proxy URL is set

    Example:
        >>> build_proxies(ProxyConfig(url="http://proxy:3128", user="bob",
        ...                           password="pw", domain="CORP"))
        {'http': 'http://CORP%5Cbob:pw@proxy:3128', 'https': 'http://CORP%5Cbob:pw@proxy:3128'}
    """
    if not proxy.url:
        return None

    url = proxy.url
    if proxy.user and proxy.password:
        user = f"{proxy.domain}\\{proxy.user}" if proxy.domain else proxy.user
        parts = urlsplit(proxy.url)
        netloc = f"{quote(user, safe='')}:{quote(proxy.password, safe='')}@{parts.netloc}"
        url = urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))
    return {"http": url, "https": url}


class HttpCommunicationProvider:
    """Carries XML API requests over HTTP with session continuity.

    In cookie mode the held token is sent as the BREEZESESSION cookie; in
    parameter mode it is prepended as ``session=<token>`` to requests that
    need it. In both modes a BREEZESESSION cookie set by the server replaces
    the held token. The underlying requests.Session never keeps cookies
    between calls, so the SessionSlot is the only source of session state.

    Example:
        >>> provider = HttpCommunicationProvider()
        >>> slot = SessionSlot()
        >>> status = provider.process_request(ApiRequest("common-info"), config, slot)
    """

    def __init__(self, http_session: Optional[requests.Session] = None) -> None:
        """Initialize the provider.

        Args:
            http_session: Session to send requests with; created lazily when
                not provided
        """
        self._http = http_session
        self._lock = Lock()
        self._tls_warning_logged = False

    def _get_http_session(self) -> requests.Session:
        if self._http is None:
            with self._lock:
                if self._http is None:
                    self._http = requests.Session()
                    self._http.headers.update(DEFAULT_HEADERS)
        return self._http

    def _warn_tls_disabled(self) -> None:
        if self._tls_warning_logged:
            return
        self._tls_warning_logged = True
        urllib3.disable_warnings(InsecureRequestWarning)
        logger.warning(
            "TLS certificate verification is DISABLED. "
            "Enable transport.verify_tls unless the server uses a self-signed certificate."
        )

    def build_url(self, request: ApiRequest, config: Config) -> str:
        """Build the request URL: ``<service>?action=<name>[&<query>]``."""
        url = f"{config.service.url}?action={request.action}"
        if request.query:
            url += f"&{request.query}"
        return url

    def process_request(
        self, request: ApiRequest, config: Config, session: SessionSlot
    ) -> ApiStatus:
        """Send one request and resolve the response into a status envelope.

        Args:
            request: Action and pre-encoded parameters
            config: Client configuration (endpoint, proxy, session mode, timeouts)
            session: Session token holder of the calling client

        Returns:
            ApiStatus; transport failures and unparsable responses are
            reported through ``error`` with ``code`` left at NOT_SET
        """
        use_param = config.session.use_session_param
        token = session.get()

        if use_param and request.requires_session and token:
            request = request.with_session(token)
        cookies = {SESSION_COOKIE: token} if token and not use_param else None

        transport = config.transport
        if not transport.verify_tls:
            self._warn_tls_disabled()

        http = self._get_http_session()
        url = self.build_url(request, config)
        logger.debug(f"Sending XML API request: action={request.action}")
        start = time.monotonic()

        try:
            response = http.get(
                url,
                headers=DEFAULT_HEADERS,
                cookies=cookies,
                proxies=build_proxies(config.proxy),
                timeout=(transport.timeout_connect, transport.timeout_read),
                verify=transport.verify_tls,
            )
        except requests.Timeout as e:
            error = TransportError(
                f"Request timed out for action {request.action} "
                f"(connect={transport.timeout_connect}s, read={transport.timeout_read}s): "
                f"{redact_query(str(e))}"
            )
            return self._failed(request, error, start)
        except requests.RequestException as e:
            error = TransportError(
                f"Could not reach XML API endpoint for action {request.action}: "
                f"{redact_query(str(e))}"
            )
            return self._failed(request, error, start)
        finally:
            http.cookies.clear()

        issued = response.cookies.get(SESSION_COOKIE)
        if issued:
            session.set(issued)

        try:
            status = resolve_operation_status(response.content)
        except ResponseParseError as e:
            if response.status_code >= 400:
                error = TransportError(
                    f"HTTP {response.status_code} from XML API endpoint "
                    f"for action {request.action}"
                )
                error.__cause__ = e
            else:
                error = e
            return self._failed(request, error, start, response.text)

        if use_param:
            status.session_info = session.get()

        log_api_call(
            request.action,
            request.query,
            status.code.wire_name,
            time.monotonic() - start,
            response=response.text,
        )
        return status

    def _failed(
        self,
        request: ApiRequest,
        error: Exception,
        start: float,
        body: Optional[str] = None,
    ) -> ApiStatus:
        logger.error(f"XML API request failed: action={request.action}: {error}")
        status = ApiStatus.from_error(error)
        log_api_call(
            request.action,
            request.query,
            status.code.wire_name,
            time.monotonic() - start,
            error=error,
            response=body,
        )
        return status
