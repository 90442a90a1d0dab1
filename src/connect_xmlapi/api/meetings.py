"""Meeting and SCO operations."""

import logging
from dataclasses import replace
from datetime import timedelta
from typing import List, Optional

from lxml import etree

from connect_xmlapi.api.base import ApiBase
from connect_xmlapi.api.query import build_query
from connect_xmlapi.api.serializer import from_xml_list
from connect_xmlapi.models.enums import ScoType, StatusCode
from connect_xmlapi.models.meeting import (
    MeetingDetail,
    MeetingItem,
    MeetingUpdateItem,
    ScoShortcut,
)
from connect_xmlapi.models.status import ApiStatus, ResultStatus
from connect_xmlapi.utils.exceptions import DecodeError

logger = logging.getLogger(__name__)

MEETINGS_SHORTCUT = "meetings"


class MeetingOperations(ApiBase):
    """Listing, inspecting, creating and updating meetings."""

    def _pre_process_meeting_items(self, items: List[MeetingItem]) -> List[MeetingItem]:
        """Derive ``duration`` from the dates and ``full_url`` from ``url_path``.

        Folders carry no begin date, so their duration is zero.
        """
        for item in items:
            begin, end = item.dates.date_begin, item.dates.date_end
            item.duration = end - begin if begin and end else timedelta(0)
            if item.url_path:
                item.full_url = self.resolve_full_url(item.url_path)
        return items

    def get_all_meetings(self, like_name: Optional[str] = None) -> ResultStatus[List[MeetingItem]]:
        """List every meeting on the account (``report-bulk-objects``).

        Args:
            like_name: Only meetings whose name contains this text

        Returns:
            ResultStatus with MeetingItem list
        """
        query = build_query(("filter-type", "meeting"), ("filter-like-name", like_name or None))
        status = self.process_api_request("report-bulk-objects", query)
        return self._decode_many(
            status,
            MeetingItem,
            "//report-bulk-objects/row",
            root_name="row",
            post_process=self._pre_process_meeting_items,
        )

    def get_meetings_in_room(self, sco_id: str) -> ResultStatus[List[MeetingItem]]:
        """List the contents of a folder (``sco-contents``)."""
        if not sco_id:
            return ApiStatus.missing_argument("sco-id").with_result(None)
        status = self.process_api_request("sco-contents", build_query(sco_id=sco_id))
        return self._decode_many(
            status,
            MeetingItem,
            "//sco",
            root_name="sco",
            post_process=self._pre_process_meeting_items,
        )

    def get_meetings_in_room_raw(self, sco_id: str) -> ResultStatus[List[etree._Element]]:
        """Like get_meetings_in_room, but return the ``sco`` elements undecoded."""
        if not sco_id:
            return ApiStatus.missing_argument("sco-id").with_result(None)
        status = self.process_api_request("sco-contents", build_query(sco_id=sco_id))
        return self._raw_elements(status, "//sco")

    def get_meeting_detail(self, sco_id: str) -> ResultStatus[MeetingDetail]:
        """Fetch one SCO (``sco-info``).

        The result is None when the ``sco`` element is missing or has no
        child elements.
        """
        if not sco_id:
            return ApiStatus.missing_argument("sco-id").with_result(None)
        status = self.process_api_request("sco-info", build_query(sco_id=sco_id))

        nodes = self._select(status, "//sco")
        if status.is_ok and (not nodes or len(nodes[0]) == 0):
            return status.with_result(None)

        result = self._decode_first(status, MeetingDetail, "//sco")
        if result.result is not None:
            result.result.full_url = self.resolve_full_url(result.result.url_path)
        return result

    def meeting_create(self, item: MeetingUpdateItem) -> ResultStatus[MeetingDetail]:
        """Create a meeting (or other SCO) inside ``item.folder_id``.

        Any ``sco_id`` on the item is ignored. If the server's answer cannot
        be decoded the new SCO is deleted again.

        Returns:
            ResultStatus with the created MeetingDetail; INVALID / MISSING
            without a request when ``folder_id`` or ``item_type`` is absent
        """
        if item is None:
            return ApiStatus.missing_argument("item").with_result(None)
        if not item.folder_id:
            return ApiStatus.missing_argument("folder-id").with_result(None)
        if item.item_type is None or item.item_type == ScoType.NOT_SET:
            return ApiStatus.missing_argument("type").with_result(None)
        return self.sco_update(replace(item, sco_id=None), compensate_on_failure=True)

    def meeting_update(self, item: MeetingUpdateItem) -> ResultStatus[MeetingDetail]:
        """Update an existing SCO identified by ``item.sco_id``.

        ``folder_id`` is never sent on update.
        """
        if item is None:
            return ApiStatus.missing_argument("item").with_result(None)
        if not item.sco_id:
            return ApiStatus.missing_argument("sco-id").with_result(None)
        return self.sco_update(replace(item, folder_id=None))

    def get_my_meetings(self, like_name: Optional[str] = None) -> ResultStatus[List[MeetingItem]]:
        """List the caller's own meetings (``report-my-meetings``)."""
        query = build_query(("filter-like-name", like_name or None))
        status = self.process_api_request("report-my-meetings", query)
        return self._decode_many(
            status,
            MeetingItem,
            "//my-meetings/meeting",
            root_name="meeting",
            post_process=self._pre_process_meeting_items,
        )

    def get_quizzes_in_room(self, sco_id: str) -> ApiStatus:
        """Fetch ``sco-contents`` of a room for quiz inspection.

        Returns the envelope as is; the caller reads ``result_document``.
        """
        if not sco_id:
            return ApiStatus.missing_argument("sco-id")
        return self.process_api_request("sco-contents", build_query(sco_id=sco_id))

    def get_sco_shortcuts(self) -> ResultStatus[List[ScoShortcut]]:
        """List the well-known folders of the account (``sco-shortcuts``)."""
        status = self.process_api_request("sco-shortcuts")
        return self._decode_many(status, ScoShortcut, "//shortcuts/sco")

    def get_meeting_shortcuts(self) -> ResultStatus[List[ScoShortcut]]:
        """Shortcuts of type ``meetings`` only."""
        shortcuts = self.get_sco_shortcuts()
        if shortcuts.result is not None:
            shortcuts.result = [s for s in shortcuts.result if s.type == MEETINGS_SHORTCUT]
        return shortcuts

    def get_shared_list(self) -> ResultStatus[List[MeetingItem]]:
        """List meetings directly inside the shared meetings folder.

        Uses the first ``meetings`` shortcut as the folder and
        ``sco-expanded-contents`` filtered to meetings, keeping only items
        whose ``folder-id`` is that folder.
        """
        shortcuts = self.get_meeting_shortcuts()
        if not shortcuts.result:
            logger.info("No meetings shortcut available; shared list is empty")
            return shortcuts.with_result(None if shortcuts.result is None else [])

        folder_id = shortcuts.result[0].sco_id
        status = self.process_api_request(
            "sco-expanded-contents",
            build_query(("sco-id", folder_id), ("filter-type", "meeting")),
        )
        if status.code != StatusCode.OK or status.error is not None:
            return status.with_result(None)

        nodes = [n for n in self._select(status, "//sco") if n.get("folder-id") == folder_id]
        try:
            items = from_xml_list(MeetingItem, nodes, "sco")
        except DecodeError as e:
            self._mark_decode_failure(status, e)
            return status.with_result(None)
        return status.with_result(self._pre_process_meeting_items(items))
