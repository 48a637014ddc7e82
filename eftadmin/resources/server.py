"""Server data source and server SMTP resource."""

from __future__ import annotations

from typing import Any, Dict

from ..core import LogContext
from ..models import Server, SMTPSettings
from .base import Attribute, DataSource, Resource, Schema, State


def smtp_state(server: Server) -> Dict[str, Any]:
    smtp = server.attributes.smtp
    return {
        "login": smtp.login,
        "password": smtp.password,
        "port": smtp.port,
        "sender_address": smtp.sender_address,
        "sender_name": smtp.sender_name,
        "server": smtp.server,
        "use_authentication": smtp.use_authentication,
        "use_implicit_tls": smtp.use_implicit_tls,
    }


class ServerDataSource(DataSource):
    """Reads server-wide settings."""

    type_suffix = "server"

    def schema(self) -> Schema:
        return {
            "id": Attribute(computed=True, description="Server identifier."),
            "version": Attribute(computed=True, description="EFT server version."),
            "general": Attribute(kind="object", computed=True),
            "listener_settings": Attribute(kind="object", computed=True),
            "smtp": Attribute(kind="object", computed=True, sensitive=True),
        }

    def read(self) -> State:
        client = self._require_client()
        server = client.get_server()
        attrs = server.attributes
        return {
            "id": server.id,
            "version": attrs.version,
            "general": {
                "config_file_path": attrs.general.config_file_path,
                "enable_utc_in_listings": attrs.general.enable_utc_in_listings,
                "last_modified_by": attrs.general.last_modified_by,
                "last_modified_time": attrs.general.last_modified_time,
            },
            "listener_settings": {
                "admin_port": attrs.listener_settings.admin_port,
                "enable_remote_administration": (
                    attrs.listener_settings.enable_remote_administration
                ),
                "listen_ips": list(attrs.listener_settings.listen_ips),
            },
            "smtp": smtp_state(server),
        }


class ServerSMTPResource(Resource):
    """Manages the server SMTP configuration.

    Create and update both send the complete SMTP block. Attributes left
    unset are sent as empty values and overwrite the server's settings.
    Delete only drops local state; the server keeps its SMTP settings.
    """

    type_suffix = "server_smtp"

    def schema(self) -> Schema:
        return {
            "id": Attribute(computed=True, description="Server identifier."),
            "login": Attribute(optional=True),
            "password": Attribute(optional=True, sensitive=True),
            "port": Attribute(kind="int", required=True),
            "sender_address": Attribute(required=True),
            "sender_name": Attribute(required=True),
            "server": Attribute(required=True),
            "use_authentication": Attribute(kind="bool", optional=True),
            "use_implicit_tls": Attribute(kind="bool", optional=True),
        }

    @staticmethod
    def to_api_model(plan: State) -> SMTPSettings:
        return SMTPSettings(
            login=plan.get("login") or "",
            password=plan.get("password") or "",
            port=int(plan.get("port") or 0),
            sender_address=plan.get("sender_address") or "",
            sender_name=plan.get("sender_name") or "",
            server=plan.get("server") or "",
            use_authentication=bool(plan.get("use_authentication")),
            use_implicit_tls=bool(plan.get("use_implicit_tls")),
        )

    def _apply(self, plan: State) -> State:
        client = self._require_client()
        with LogContext("server_smtp.apply", self.log, smtp_server=plan.get("server")):
            server = client.update_server_smtp(self.to_api_model(plan))
            return {"id": server.id, **smtp_state(server)}

    def create(self, plan: State) -> State:
        return self._apply(plan)

    def read(self, state: State) -> State:
        client = self._require_client()
        server = client.get_server()
        return {"id": server.id, **smtp_state(server)}

    def update(self, plan: State, state: State) -> State:
        return self._apply(plan)

    def delete(self, state: State) -> None:
        self.log.info("Removing SMTP settings from state only; server configuration is kept")
