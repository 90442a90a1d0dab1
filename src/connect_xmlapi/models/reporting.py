"""Report records: quotas, transactions and events."""

from dataclasses import dataclass
from datetime import timedelta
from typing import ClassVar, List, Optional

from connect_xmlapi.models.dates import XmlDates
from connect_xmlapi.models.enums import PermissionId, ScoType
from connect_xmlapi.models.fields import (
    xml_attribute,
    xml_element,
    xml_elements,
    xml_embedded,
)


def parse_quota_limit(text: str) -> int:
    """Parse a quota ``limit`` attribute; ``unlimited`` reads as 0."""
    if text.strip() == "unlimited":
        return 0
    return int(text)


@dataclass
class Quota:
    """One account quota and its usage."""

    XML_ROOT: ClassVar[str] = "quota"

    acl_id: Optional[int] = xml_attribute("acl-id")
    quota_id: Optional[str] = xml_attribute("quota-id")
    used: Optional[int] = xml_attribute("used")
    limit: Optional[int] = xml_attribute("limit", decoder=parse_quota_limit)
    soft_limit: Optional[int] = xml_attribute("soft-limit")
    dates: XmlDates = xml_embedded(XmlDates)


@dataclass
class QuotaInfo:
    """Result of ``report-quotas``."""

    XML_ROOT: ClassVar[str] = "report-quotas"

    quotas: List[Quota] = xml_elements(Quota, "quota")


@dataclass
class TransactionInfo:
    """Row of ``report-bulk-consolidated-transactions``."""

    XML_ROOT: ClassVar[str] = "row"

    transaction_id: Optional[str] = xml_attribute("transaction-id")
    sco_id: Optional[str] = xml_attribute("sco-id")
    item_type: Optional[ScoType] = xml_attribute("type")
    principal_id: Optional[str] = xml_attribute("principal-id")
    score: Optional[str] = xml_attribute("score")
    name: Optional[str] = xml_element("name")
    url: Optional[str] = xml_element("url")
    login: Optional[str] = xml_element("login")
    user_name: Optional[str] = xml_element("user-name")
    status: Optional[str] = xml_element("status")
    dates: XmlDates = xml_embedded(XmlDates)


@dataclass
class EventInfo:
    """Entry of ``report-my-events``."""

    XML_ROOT: ClassVar[str] = "event"

    sco_id: Optional[str] = xml_attribute("sco-id")
    tree_id: Optional[int] = xml_attribute("tree-id")
    item_type: Optional[ScoType] = xml_attribute("type")
    permission_id: Optional[PermissionId] = xml_attribute("permission-id")
    name: Optional[str] = xml_element("name")
    domain_name: Optional[str] = xml_element("domain-name")
    url_path: Optional[str] = xml_element("url-path")
    expired: Optional[bool] = xml_element("expired")
    duration: Optional[timedelta] = xml_element("duration")
    dates: XmlDates = xml_embedded(XmlDates)
