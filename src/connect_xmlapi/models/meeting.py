"""Meeting and SCO records.

Meeting items come back under several root names depending on the action
(``row`` from bulk reports, ``sco`` from folder listings, ``meeting`` from
``report-my-meetings``), so callers pass the root name when decoding.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import ClassVar, Optional

from connect_xmlapi.models.dates import XmlDates
from connect_xmlapi.models.enums import PermissionId, ScoType
from connect_xmlapi.models.fields import xml_attribute, xml_element, xml_embedded


@dataclass
class MeetingItem:
    """A meeting, folder or other SCO as listed in reports and folder contents.

    Attributes:
        sco_id: Object identifier
        folder_id: Parent folder identifier
        active_participants: Number of users currently in the room
        permission_id: Caller's permission on the object
        item_type: Kind of SCO (meeting, folder, content, ...)
        icon: Icon hint reported by the server
        name: Display name
        description: Free text description
        language: Language code
        sco_tag: Tag assigned to the object
        domain_name: Host the room is served from
        url_path: Path component of the room URL
        is_folder: Whether the item is a folder
        expired: Whether the item has expired
        duration: Length of the meeting; derived from the dates when listing
        byte_count: Size in bytes for content objects
        dates: Shared date block
        full_url: Absolute room URL, derived, never on the wire
    """

    XML_ROOT: ClassVar[str] = "meeting"

    sco_id: Optional[str] = xml_attribute("sco-id")
    folder_id: Optional[str] = xml_attribute("folder-id")
    active_participants: Optional[int] = xml_attribute("active-participants")
    permission_id: Optional[PermissionId] = xml_attribute("permission-id")
    item_type: Optional[ScoType] = xml_attribute("type")
    icon: Optional[str] = xml_attribute("icon")
    name: Optional[str] = xml_element("name")
    description: Optional[str] = xml_element("description")
    language: Optional[str] = xml_element("lang")
    sco_tag: Optional[str] = xml_element("sco-tag")
    domain_name: Optional[str] = xml_element("domain-name")
    url_path: Optional[str] = xml_element("url-path")
    is_folder: Optional[bool] = xml_element("is-folder")
    expired: Optional[bool] = xml_element("expired")
    duration: Optional[timedelta] = xml_element("duration")
    byte_count: Optional[int] = xml_element("byte-count")
    dates: XmlDates = xml_embedded(XmlDates)
    full_url: Optional[str] = field(default=None, compare=False)


@dataclass
class MeetingDetail:
    """Full detail of one SCO as returned by ``sco-info`` and ``sco-update``.

    ``duration`` is an integer count of minutes here, unlike MeetingItem.
    """

    XML_ROOT: ClassVar[str] = "sco"

    sco_id: Optional[str] = xml_attribute("sco-id")
    account_id: Optional[str] = xml_attribute("account-id")
    folder_id: Optional[str] = xml_attribute("folder-id")
    language: Optional[str] = xml_attribute("lang")
    name: Optional[str] = xml_element("name")
    description: Optional[str] = xml_element("description")
    url_path: Optional[str] = xml_element("url-path")
    passing_score: Optional[int] = xml_element("passing-score")
    duration: Optional[int] = xml_element("duration")
    section_count: Optional[int] = xml_element("section-count")
    dates: XmlDates = xml_embedded(XmlDates)
    full_url: Optional[str] = field(default=None, compare=False)


@dataclass
class MeetingUpdateItem:
    """Field set sent with ``sco-update`` to create or modify a meeting.

    Creating requires ``folder_id`` and ``item_type``; updating requires
    ``sco_id``. Fields left as None are not sent.
    """

    XML_ROOT: ClassVar[str] = "meeting-update-item"

    sco_id: Optional[str] = xml_attribute("sco-id")
    folder_id: Optional[str] = xml_attribute("folder-id")
    name: Optional[str] = xml_element("name")
    description: Optional[str] = xml_element("description")
    language: Optional[str] = xml_element("lang")
    sco_tag: Optional[str] = xml_element("sco-tag")
    email: Optional[str] = xml_element("email")
    first_name: Optional[str] = xml_element("first-name")
    last_name: Optional[str] = xml_element("last-name")
    url_path: Optional[str] = xml_element("url-path")
    item_type: Optional[ScoType] = xml_element("type")
    dates: XmlDates = xml_embedded(XmlDates)


@dataclass
class ScoShortcut:
    """Entry from ``sco-shortcuts``: a well-known folder and its tree id."""

    XML_ROOT: ClassVar[str] = "sco"

    tree_id: Optional[int] = xml_attribute("tree-id")
    sco_id: Optional[str] = xml_attribute("sco-id")
    type: Optional[str] = xml_attribute("type")
    domain_name: Optional[str] = xml_element("domain-name")
