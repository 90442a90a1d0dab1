"""Models module.

This module provides the records exchanged with the XML API and the status
envelope wrapped around every result.
"""

from connect_xmlapi.models.dates import XmlDates
from connect_xmlapi.models.enums import (
    PermissionId,
    PrincipalType,
    ScoType,
    SpecialPermissionId,
    StatusCode,
    SubCode,
)
from connect_xmlapi.models.meeting import (
    MeetingDetail,
    MeetingItem,
    MeetingUpdateItem,
    ScoShortcut,
)
from connect_xmlapi.models.permission import PermissionInfo
from connect_xmlapi.models.principal import (
    Contact,
    Preferences,
    Principal,
    PrincipalInfo,
    PrincipalListItem,
    PrincipalSetup,
)
from connect_xmlapi.models.reporting import EventInfo, Quota, QuotaInfo, TransactionInfo
from connect_xmlapi.models.request import ApiRequest
from connect_xmlapi.models.status import ApiStatus, ResultStatus
from connect_xmlapi.models.user import UserInfo

__all__ = [
    "ApiRequest",
    "ApiStatus",
    "ResultStatus",
    "StatusCode",
    "SubCode",
    "ScoType",
    "PermissionId",
    "SpecialPermissionId",
    "PrincipalType",
    "XmlDates",
    "MeetingItem",
    "MeetingDetail",
    "MeetingUpdateItem",
    "ScoShortcut",
    "PermissionInfo",
    "Contact",
    "Preferences",
    "Principal",
    "PrincipalInfo",
    "PrincipalListItem",
    "PrincipalSetup",
    "EventInfo",
    "Quota",
    "QuotaInfo",
    "TransactionInfo",
    "UserInfo",
]
