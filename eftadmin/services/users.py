"""Site user service.

This module handles create, read, update and delete of users that belong
to a single EFT site.
"""

from __future__ import annotations

from typing import Optional

from ..core import (
    LogContext,
    get_audit_logger,
    get_logger,
    validate_site_id,
    validate_user_id,
)
from ..models import User, UserAttributes, envelope, unwrap
from .base import EFTConnection


def users_path(site_id: str, user_id: Optional[str] = None) -> str:
    path = f"/admin/v2/sites/{site_id}/users"
    if user_id is not None:
        path += f"/{user_id}"
    return path


class SiteUserService:
    """Service for users of an EFT site."""

    def __init__(self, connection: EFTConnection) -> None:
        """Initialize site user service.

        Args:
            connection: EFT connection instance.
        """
        self.conn = connection
        self.log = get_logger(__name__)
        self._audit = get_audit_logger()

    def get_site_user(
        self, site_id: str, user_id: str, *, deadline: Optional[float] = None
    ) -> User:
        """Fetch a single user.

        Raises:
            ResourceNotFoundError: If the user does not exist.
        """
        site_id = validate_site_id(site_id)
        user_id = validate_user_id(user_id)
        payload = self.conn.request("GET", users_path(site_id, user_id), deadline=deadline)
        return User.from_api(unwrap(payload, source="user"))

    def create_site_user(
        self, site_id: str, attrs: UserAttributes, *, deadline: Optional[float] = None
    ) -> User:
        """Create a user on a site.

        Args:
            site_id: Site identifier.
            attrs: User attributes; ``login_name`` is required by the server.

        Returns:
            Created user including the server-assigned ID.
        """
        site_id = validate_site_id(site_id)
        body = envelope({"type": "user", "attributes": attrs.to_api()})

        with LogContext("create_site_user", self.log, site=site_id, login=attrs.login_name) as ctx:
            payload = self.conn.request("POST", users_path(site_id), body=body, deadline=deadline)
            user = User.from_api(unwrap(payload, source="user"))

            self._audit.log_operation(
                "create_site_user",
                user=self.conn.username,
                site=site_id,
                resource_id=user.id,
                details={"login_name": attrs.login_name},
                success=True,
                duration_ms=ctx.elapsed_ms,
            )
            return user

    def update_site_user(
        self,
        site_id: str,
        user_id: str,
        attrs: UserAttributes,
        *,
        deadline: Optional[float] = None,
    ) -> User:
        """Update a user; empty attributes are left untouched on the server."""
        site_id = validate_site_id(site_id)
        user_id = validate_user_id(user_id)
        body = envelope({"type": "user", "attributes": attrs.to_api()})

        with LogContext("update_site_user", self.log, site=site_id, user_id=user_id) as ctx:
            payload = self.conn.request(
                "PATCH", users_path(site_id, user_id), body=body, deadline=deadline
            )
            user = User.from_api(unwrap(payload, source="user"))

            self._audit.log_operation(
                "update_site_user",
                user=self.conn.username,
                site=site_id,
                resource_id=user_id,
                details={"login_name": attrs.login_name},
                success=True,
                duration_ms=ctx.elapsed_ms,
            )
            return user

    def delete_site_user(
        self, site_id: str, user_id: str, *, deadline: Optional[float] = None
    ) -> None:
        """Delete a user from a site."""
        site_id = validate_site_id(site_id)
        user_id = validate_user_id(user_id)

        with LogContext("delete_site_user", self.log, site=site_id, user_id=user_id) as ctx:
            self.conn.request(
                "DELETE", users_path(site_id, user_id), expect_body=False, deadline=deadline
            )
            self._audit.log_operation(
                "delete_site_user",
                user=self.conn.username,
                site=site_id,
                resource_id=user_id,
                success=True,
                duration_ms=ctx.elapsed_ms,
            )
