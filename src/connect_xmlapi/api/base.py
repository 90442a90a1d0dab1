"""Shared plumbing for the API facade.

ApiBase owns the configuration, the communication provider and the session
slot, and provides the request pipeline plus the decode helpers the
operation mixins build on.
"""

import logging
from typing import Callable, List, Optional, Type, TypeVar
from urllib.parse import urlsplit

from lxml import etree

from connect_xmlapi.api.query import build_query, struct_to_query_string
from connect_xmlapi.api.serializer import from_xml, from_xml_list
from connect_xmlapi.config.schema import Config
from connect_xmlapi.logging_audit.audit import log_audit_event
from connect_xmlapi.models.enums import StatusCode, SubCode
from connect_xmlapi.models.meeting import MeetingDetail, MeetingUpdateItem
from connect_xmlapi.models.request import ApiRequest
from connect_xmlapi.models.status import ApiStatus, ResultStatus
from connect_xmlapi.transport.http_client import (
    CommunicationProvider,
    HttpCommunicationProvider,
)
from connect_xmlapi.transport.session import SessionSlot
from connect_xmlapi.utils.exceptions import (
    CompensationError,
    ConfigurationError,
    DecodeError,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


def join_query(*parts: Optional[str]) -> str:
    """Join pre-encoded query fragments with ``&``, skipping empty ones."""
    return "&".join(p.strip("&") for p in parts if p and p.strip("&"))


class ApiBase:
    """Request pipeline and decode helpers shared by all operation groups.

    Attributes:
        config: Validated client configuration
        provider: Transport that carries requests to the service
        session: Session token holder for this client
    """

    def __init__(
        self,
        config: Config,
        provider: Optional[CommunicationProvider] = None,
    ) -> None:
        if config is None:
            raise ConfigurationError("Argument 'config' can not be None")
        if not config.service.url:
            raise ConfigurationError(
                "No service URL configured.\n"
                "Fix: Set service.url in the configuration file."
            )
        self.config = config
        self.provider = provider or HttpCommunicationProvider()
        self.session = SessionSlot()

    @property
    def service_url(self) -> str:
        return self.config.service.url

    def process_api_request(
        self,
        action: str,
        query: Optional[str] = None,
        requires_session: bool = True,
    ) -> ApiStatus:
        """Run one action through the pipeline.

        Args:
            action: API action name, e.g. ``sco-contents``
            query: Pre-encoded parameters without the action
            requires_session: Whether parameter mode prepends ``session=``

        Returns:
            Status envelope; never raises for transport or parse failures
        """
        request = ApiRequest(action, query or "", requires_session)
        return self.provider.process_request(request, self.config, self.session)

    def resolve_full_url(self, url_path: Optional[str]) -> str:
        """Prefix a url-path with the scheme and host of the service URL.

        Example:
            >>> api.resolve_full_url("/weekly-sync/")
            'https://connect.example.com/weekly-sync/'
        """
        if not url_path:
            return ""
        parts = urlsplit(self.service_url)
        return f"{parts.scheme}://{parts.netloc}{url_path}"

    # Decode helpers

    def _mark_decode_failure(self, status: ApiStatus, error: DecodeError) -> None:
        logger.warning(f"Failed to decode response payload: {error}")
        status.code = StatusCode.INVALID
        status.sub_code = SubCode.FORMAT
        status.error = error

    def _select(self, status: ApiStatus, xpath: str) -> List[etree._Element]:
        if status.result_document is None:
            return []
        return status.result_document.xpath(xpath)

    def _decode_many(
        self,
        status: ApiStatus,
        record_type: Type[R],
        xpath: str,
        root_name: Optional[str] = None,
        post_process: Optional[Callable[[List[R]], List[R]]] = None,
    ) -> ResultStatus[List[R]]:
        """Decode every element matching ``xpath`` in the payload.

        Returns an empty list when the call succeeded without payload and
        None when it did not succeed.
        """
        if status.code != StatusCode.OK or status.error is not None:
            return status.with_result(None)
        try:
            items = from_xml_list(record_type, self._select(status, xpath), root_name)
        except DecodeError as e:
            self._mark_decode_failure(status, e)
            return status.with_result(None)
        if post_process is not None:
            items = post_process(items)
        return status.with_result(items)

    def _decode_first(
        self,
        status: ApiStatus,
        record_type: Type[R],
        xpath: str,
        root_name: Optional[str] = None,
    ) -> ResultStatus[R]:
        """Decode the first element matching ``xpath``; None when absent."""
        if status.code != StatusCode.OK or status.error is not None:
            return status.with_result(None)
        nodes = self._select(status, xpath)
        if not nodes:
            return status.with_result(None)
        try:
            return status.with_result(from_xml(record_type, nodes[0], root_name))
        except DecodeError as e:
            self._mark_decode_failure(status, e)
            return status.with_result(None)

    def _raw_elements(self, status: ApiStatus, xpath: str) -> ResultStatus[List[etree._Element]]:
        """Return the payload elements matching ``xpath`` undecoded."""
        if status.code != StatusCode.OK or status.error is not None:
            return status.with_result(None)
        return status.with_result(self._select(status, xpath))

    # SCO maintenance shared by meeting operations

    def sco_delete(self, *sco_ids: str) -> ApiStatus:
        """Delete one or more SCOs (``sco-delete`` with repeated ``sco-id``)."""
        ids = [sco_id for sco_id in sco_ids if sco_id]
        if not ids:
            return ApiStatus.missing_argument("sco-id")
        return self.process_api_request(
            "sco-delete", build_query(*[("sco-id", sco_id) for sco_id in ids])
        )

    def sco_update(
        self, item: MeetingUpdateItem, compensate_on_failure: bool = False
    ) -> ResultStatus[MeetingDetail]:
        """Create or update a SCO and decode the returned ``sco`` element.

        When the response cannot be decoded and ``compensate_on_failure`` is
        set, the SCO the server just created is deleted again with exactly
        one ``sco-delete``. The decode failure is still reported (INVALID /
        FORMAT with DecodeError); a failed delete is attached as
        ``secondary_error``.

        Args:
            item: Field set to send
            compensate_on_failure: Delete the created SCO if decoding fails

        Returns:
            ResultStatus with the MeetingDetail, or None when the server
            returned no ``sco`` element (updates do not)
        """
        if item is None:
            return ApiStatus.missing_argument("item").with_result(None)

        status = self.process_api_request("sco-update", struct_to_query_string(item))
        if status.code != StatusCode.OK or status.error is not None:
            return status.with_result(None)

        nodes = self._select(status, "//sco")
        if not nodes:
            return status.with_result(None)
        node = nodes[0]

        try:
            detail = from_xml(MeetingDetail, node)
        except DecodeError as e:
            self._mark_decode_failure(status, e)
            created_id = node.get("sco-id")
            if compensate_on_failure and created_id:
                self._rollback_created_sco(status, created_id)
            return status.with_result(None)

        detail.full_url = self.resolve_full_url(detail.url_path)
        return status.with_result(detail)

    def _rollback_created_sco(self, status: ApiStatus, sco_id: str) -> None:
        logger.warning(f"Rolling back SCO {sco_id} after decode failure")
        rollback = self.sco_delete(sco_id)
        succeeded = rollback.is_ok
        log_audit_event(
            "SCO_ROLLBACK",
            {
                "status": "success" if succeeded else "failure",
                "action": "sco-delete",
                "sco_id": sco_id,
                "code": rollback.code.wire_name,
            },
        )
        if not succeeded:
            status.secondary_error = CompensationError(
                f"Failed to delete SCO {sco_id} after decode failure: {rollback.summary()}",
                sco_id=sco_id,
            )
