"""Site user resource.

The password is write-only: it is sent on create and update when set,
and is never written back to state. ``password_type`` is not returned by
the server either, so the planned value is carried over.
"""

from __future__ import annotations

from typing import Any, Optional

from ..core import YES_NO_INHERIT, LogContext, parse_import_id
from ..models import (
    User,
    UserAttributes,
    UserHomeFolder,
    UserHomeFolderValue,
    UserPassword,
    UserPersonal,
)
from .base import Attribute, Resource, Schema, State


def _value(state: State, key: str) -> str:
    value = state.get(key)
    return "" if value is None else str(value)


def _or_none(value: str) -> Optional[str]:
    return value if value else None


def to_api_model(model: State) -> UserAttributes:
    """Map resource state to API attributes, leaving unset fields empty."""
    attrs = UserAttributes(login_name=_value(model, "login_name"))
    attrs.account_enabled = _value(model, "account_enabled")
    attrs.has_home_folder_as_root = _value(model, "home_folder_root")

    display_name = _value(model, "display_name")
    email = _value(model, "email")
    if display_name or email:
        attrs.personal = UserPersonal(name=display_name, email=email)

    password = _value(model, "password")
    if password:
        attrs.password = UserPassword(type=_value(model, "password_type"), value=password)

    enabled = _value(model, "home_folder_enabled")
    path = _value(model, "home_folder_path")
    if enabled or path:
        attrs.home_folder = UserHomeFolder(enabled=enabled)
        if path:
            attrs.home_folder.value = UserHomeFolderValue(path=path)

    return attrs


def state_from_api(user: User, model: State) -> State:
    """Overlay the server's view of a user onto ``model``."""
    state = dict(model)
    a = user.attributes
    state["id"] = user.id
    state["login_name"] = a.login_name
    state["display_name"] = a.personal.name if a.personal else None
    state["email"] = a.personal.email if a.personal else None
    state["account_enabled"] = _or_none(a.account_enabled)
    if a.home_folder is not None:
        state["home_folder_enabled"] = a.home_folder.enabled
        state["home_folder_path"] = a.home_folder.value.path if a.home_folder.value else None
    else:
        state["home_folder_enabled"] = None
        state["home_folder_path"] = None
    state["home_folder_root"] = _or_none(a.has_home_folder_as_root)
    state["password"] = None
    return state


class SiteUserResource(Resource):
    """Manages EFT users for a specific site."""

    type_suffix = "site_user"

    def schema(self) -> Schema:
        return {
            "id": Attribute(computed=True, description="User identifier assigned by EFT."),
            "site_id": Attribute(
                required=True,
                requires_replace=True,
                description="Site identifier that owns the user.",
            ),
            "login_name": Attribute(
                required=True,
                requires_replace=True,
                description="Unique login name for the user.",
            ),
            "password": Attribute(
                optional=True, sensitive=True, description="Password for EFT local accounts."
            ),
            "password_type": Attribute(
                optional=True,
                computed=True,
                default="Default",
                description="Password type as expected by EFT (for example Default or Disabled).",
            ),
            "display_name": Attribute(optional=True, description="Friendly display name."),
            "email": Attribute(optional=True, description="User email address."),
            "account_enabled": Attribute(
                optional=True,
                computed=True,
                default="inherit",
                choices=YES_NO_INHERIT,
                description="Account enablement flag.",
            ),
            "home_folder_path": Attribute(
                optional=True, description="Path for the user's home folder."
            ),
            "home_folder_enabled": Attribute(
                optional=True,
                computed=True,
                default="inherit",
                choices=YES_NO_INHERIT,
                description="Whether the home folder is enabled.",
            ),
            "home_folder_root": Attribute(
                optional=True,
                computed=True,
                default="inherit",
                choices=YES_NO_INHERIT,
                description="Controls if the home folder is treated as root.",
            ),
        }

    def _finish(self, user: User, plan: State, site_id: Any) -> State:
        state = state_from_api(user, plan)
        state["site_id"] = site_id
        state["password_type"] = plan.get("password_type")
        return state

    def create(self, plan: State) -> State:
        client = self._require_client()
        site_id = plan["site_id"]
        with LogContext("site_user.create", self.log, site=site_id):
            user = client.create_site_user(site_id, to_api_model(plan))
            return self._finish(user, plan, site_id)

    def read(self, state: State) -> State:
        client = self._require_client()
        user = client.get_site_user(state["site_id"], state["id"])
        return self._finish(user, state, state["site_id"])

    def update(self, plan: State, state: State) -> State:
        client = self._require_client()
        site_id = plan["site_id"]
        user_id = state["id"]
        with LogContext("site_user.update", self.log, site=site_id, user_id=user_id):
            user = client.update_site_user(site_id, user_id, to_api_model(plan))
            return self._finish(user, plan, site_id)

    def delete(self, state: State) -> None:
        client = self._require_client()
        client.delete_site_user(state["site_id"], state["id"])

    def import_state(self, import_id: str) -> State:
        """Seed state from ``<site_id>/<user_id>``."""
        site_id, user_id = parse_import_id(import_id, "user_id")
        return {"site_id": site_id, "id": user_id, "password_type": "Default"}
