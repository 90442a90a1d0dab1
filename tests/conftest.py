"""
Shared pytest configuration and fixtures.

This module provides fixtures and configuration used across all test suites
(unit and integration tests).
"""

import logging
from typing import List, Optional, Tuple, Union

import pytest

from connect_xmlapi.api.client import ConnectXmlAPI
from connect_xmlapi.api.parsers import resolve_operation_status
from connect_xmlapi.api.serializer import clear_serializer_cache
from connect_xmlapi.config import Config, config_from_dict
from connect_xmlapi.models.request import ApiRequest
from connect_xmlapi.models.status import ApiStatus
from connect_xmlapi.transport.session import SessionSlot


class FakeProvider:
    """Communication provider that replays canned XML responses.

    Each queued entry is ``(response, token)``: the response is XML text (or
    an exception, returned as a transport failure), and a non-empty token is
    stored in the session slot the way a BREEZESESSION cookie would be.
    """

    def __init__(self) -> None:
        self.requests: List[ApiRequest] = []
        self.tokens_seen: List[Optional[str]] = []
        self._responses: List[Tuple[Union[str, Exception], Optional[str]]] = []

    def queue(self, response: Union[str, Exception], token: Optional[str] = None) -> "FakeProvider":
        self._responses.append((response, token))
        return self

    def process_request(
        self, request: ApiRequest, config: Config, session: SessionSlot
    ) -> ApiStatus:
        self.requests.append(request)
        self.tokens_seen.append(session.get())
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.action}")
        response, token = self._responses.pop(0)
        if token:
            session.set(token)
        if isinstance(response, Exception):
            return ApiStatus.from_error(response)
        return resolve_operation_status(response)

    @property
    def actions(self) -> List[str]:
        return [r.action for r in self.requests]


@pytest.fixture
def config() -> Config:
    """Validated configuration for a cookie-mode client."""
    return config_from_dict(
        {
            "service": {"url": "https://connect.example.com/"},
            "credentials": {"user": "admin@example.com", "password": "s3cret"},
        }
    )


@pytest.fixture
def param_config() -> Config:
    """Validated configuration for a parameter-mode client."""
    return config_from_dict(
        {
            "service": {"url": "https://connect.example.com"},
            "credentials": {"user": "admin@example.com", "password": "s3cret"},
            "session": {"use_session_param": True},
        }
    )


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def api(config: Config, provider: FakeProvider) -> ConnectXmlAPI:
    """Client wired to the fake provider."""
    return ConnectXmlAPI(config, provider=provider)


@pytest.fixture(autouse=True)
def _fresh_serializer_cache():
    """Start every test with an empty serializer cache."""
    clear_serializer_cache()
    yield
    clear_serializer_cache()


@pytest.fixture
def restore_root_logger():
    """Undo handler and level changes made by configure_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
