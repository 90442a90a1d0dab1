"""User account operations."""

from typing import Optional

from connect_xmlapi.api.base import ApiBase
from connect_xmlapi.api.query import build_query
from connect_xmlapi.models.status import ApiStatus


class UserOperations(ApiBase):
    def update_password(
        self, user_id: str, password: str, old_password: Optional[str] = None
    ) -> ApiStatus:
        """Set a user's password (``user-update-pwd``).

        ``password-verify`` is always sent equal to ``password``. Administrators
        may omit ``old_password``.
        """
        if not user_id:
            return ApiStatus.missing_argument("user-id")
        if not password:
            return ApiStatus.missing_argument("password")
        return self.process_api_request(
            "user-update-pwd",
            build_query(
                ("user-id", user_id),
                ("password-old", old_password),
                ("password", password),
                ("password-verify", password),
            ),
        )
