"""Principal, group membership and permission operations."""

import logging
from typing import List, Optional

from connect_xmlapi.api.base import ApiBase, join_query
from connect_xmlapi.api.query import build_query, struct_to_query_string
from connect_xmlapi.api.serializer import from_xml
from connect_xmlapi.models.enums import PermissionId, SpecialPermissionId, StatusCode
from connect_xmlapi.models.permission import PermissionInfo
from connect_xmlapi.models.principal import (
    Contact,
    Preferences,
    Principal,
    PrincipalInfo,
    PrincipalListItem,
    PrincipalSetup,
)
from connect_xmlapi.models.status import ApiStatus, ResultStatus
from connect_xmlapi.utils.exceptions import DecodeError

logger = logging.getLogger(__name__)

PUBLIC_ACCESS_PRINCIPAL = "public-access"

_SPECIAL_PERMISSIONS = {
    SpecialPermissionId.DENIED: PermissionId.DENIED,
    SpecialPermissionId.REMOVE: PermissionId.REMOVE,
    SpecialPermissionId.VIEW_HIDDEN: PermissionId.VIEW_HIDDEN,
}


class PrincipalOperations(ApiBase):
    """Users, groups and the permissions they hold."""

    def get_principal_info(self, principal_id: str) -> ResultStatus[PrincipalInfo]:
        """Fetch contact, preferences and principal data (``principal-info``)."""
        if not principal_id:
            return ApiStatus.missing_argument("principal-id").with_result(None)

        status = self.process_api_request(
            "principal-info", build_query(principal_id=principal_id)
        )
        if status.code != StatusCode.OK or status.error is not None:
            return status.with_result(None)

        info = PrincipalInfo()
        try:
            for xpath, record_type, attr in (
                ("//contact", Contact, "contact"),
                ("//preferences", Preferences, "preferences"),
                ("//principal", Principal, "principal"),
            ):
                nodes = self._select(status, xpath)
                if nodes:
                    setattr(info, attr, from_xml(record_type, nodes[0]))
        except DecodeError as e:
            self._mark_decode_failure(status, e)
            return status.with_result(None)
        return status.with_result(info)

    def principal_update(self, setup: PrincipalSetup) -> ResultStatus[Principal]:
        """Create or update a principal (``principal-update``).

        Returns:
            ResultStatus with the Principal the server reports back
        """
        if setup is None:
            return ApiStatus.missing_argument("setup").with_result(None)
        status = self.process_api_request("principal-update", struct_to_query_string(setup))
        return self._decode_first(status, Principal, "//principal")

    def principal_delete(self, *principal_ids: str) -> ApiStatus:
        """Delete principals (``principals-delete`` with repeated ``principal-id``)."""
        ids = [p for p in principal_ids if p]
        if not ids:
            return ApiStatus.missing_argument("principal-id")
        return self.process_api_request(
            "principals-delete", build_query(*[("principal-id", p) for p in ids])
        )

    def principal_update_password(
        self, user_id: str, password_old: str, password: str
    ) -> ApiStatus:
        """Change a user's password given the old one (``user-update-pwd``)."""
        if not user_id:
            return ApiStatus.missing_argument("user-id")
        if not password:
            return ApiStatus.missing_argument("password")
        return self.process_api_request(
            "user-update-pwd",
            build_query(
                ("user-id", user_id),
                ("password-old", password_old),
                ("password", password),
            ),
        )

    def group_membership_update(
        self, group_id: str, principal_id: str, is_member: bool
    ) -> ApiStatus:
        """Add a principal to, or remove it from, a group."""
        if not group_id:
            return ApiStatus.missing_argument("group-id")
        if not principal_id:
            return ApiStatus.missing_argument("principal-id")
        return self.process_api_request(
            "group-membership-update",
            build_query(
                ("group-id", group_id),
                ("principal-id", principal_id),
                ("is-member", is_member),
            ),
        )

    def get_principal_list(
        self, group_id: str = "", filter_by: str = ""
    ) -> ResultStatus[List[PrincipalListItem]]:
        """List principals (``principal-list``).

        Args:
            group_id: Restrict to members of this group
            filter_by: Pre-encoded filter parameters, e.g. ``filter-type=user``
        """
        query = join_query(build_query(group_id=group_id or None), filter_by)
        status = self.process_api_request("principal-list", query)
        return self._decode_many(status, PrincipalListItem, "//principal-list/principal")

    def is_admin(self, principal_id: str) -> ResultStatus[bool]:
        """Check membership of the built-in administrators group.

        Looks up the ``admins`` group with one ``principal-list`` call and
        lists its members with a second one.
        """
        if not principal_id:
            return ApiStatus.missing_argument("principal-id").with_result(None)

        groups = self.process_api_request("principal-list", build_query(filter_type="admins"))
        if groups.code != StatusCode.OK or groups.error is not None:
            return groups.with_result(None)
        group_nodes = self._select(groups, "//principal-list/principal")
        if not group_nodes:
            return groups.with_result(False)

        members = self.process_api_request(
            "principal-list",
            build_query(("group-id", group_nodes[0].get("principal-id")), ("filter-is-member", "true")),
        )
        if members.code != StatusCode.OK or members.error is not None:
            return members.with_result(None)
        found = any(
            node.get("principal-id") == principal_id
            for node in self._select(members, "//principal")
        )
        return members.with_result(found)

    def get_permissions_info(
        self,
        acl_id: str,
        principal_id: Optional[str] = None,
        filter_definition: Optional[str] = None,
    ) -> ResultStatus[List[PermissionInfo]]:
        """List principals' permissions on an ACL object (``permissions-info``)."""
        if not acl_id:
            return ApiStatus.missing_argument("acl-id").with_result(None)
        status = self.process_api_request(
            "permissions-info",
            build_query(
                ("acl-id", acl_id),
                ("principal-id", principal_id),
                ("filter-definition", filter_definition),
            ),
        )
        return self._decode_many(status, PermissionInfo, "//permissions/principal")

    def permissions_reset(self, acl_id: str) -> ApiStatus:
        """Remove every explicit permission from an ACL object."""
        if not acl_id:
            return ApiStatus.missing_argument("acl-id")
        return self.process_api_request("permissions-reset", build_query(acl_id=acl_id))

    def permissions_update(
        self, acl_id: str, principal_id: str, permission_id: PermissionId
    ) -> ApiStatus:
        """Grant ``permission_id`` on ``acl_id`` to ``principal_id``."""
        if not acl_id:
            return ApiStatus.missing_argument("acl-id")
        if not principal_id:
            return ApiStatus.missing_argument("principal-id")
        if permission_id is None:
            return ApiStatus.missing_argument("permission-id")
        return self.process_api_request(
            "permissions-update",
            build_query(
                ("acl-id", acl_id),
                ("principal-id", principal_id),
                ("permission-id", permission_id),
            ),
        )

    def special_permissions_update(
        self, acl_id: str, permission: SpecialPermissionId
    ) -> ApiStatus:
        """Set the public access level of an ACL object."""
        return self.permissions_update(
            acl_id, PUBLIC_ACCESS_PRINCIPAL, _SPECIAL_PERMISSIONS[permission]
        )

    def participant_subscribe(
        self,
        course_sco: str,
        principal_id: str,
        permission_id: PermissionId = PermissionId.VIEW,
    ) -> ApiStatus:
        return self.permissions_update(course_sco, principal_id, permission_id)

    def participant_unsubscribe(self, course_sco: str, principal_id: str) -> ApiStatus:
        return self.permissions_update(course_sco, principal_id, PermissionId.REMOVE)
