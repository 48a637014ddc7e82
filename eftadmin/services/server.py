"""Server-level configuration service.

This module handles:
- Reading the server object (version, general settings, listeners, SMTP)
- Replacing the server SMTP configuration
"""

from __future__ import annotations

from typing import Optional

from ..core import LogContext, get_audit_logger, get_logger
from ..models import Server, SMTPSettings, envelope, unwrap
from .base import EFTConnection

SERVER_PATH = "/admin/v2/server"


class ServerService:
    """Service for the EFT server object."""

    def __init__(self, connection: EFTConnection) -> None:
        """Initialize server service.

        Args:
            connection: EFT connection instance.
        """
        self.conn = connection
        self.log = get_logger(__name__)
        self._audit = get_audit_logger()

    def get_server(self, *, deadline: Optional[float] = None) -> Server:
        """Fetch the server object.

        Returns:
            Server with general, listener and SMTP settings.
        """
        payload = self.conn.request("GET", SERVER_PATH, deadline=deadline)
        return Server.from_api(unwrap(payload, source="server"))

    def update_server_smtp(
        self, smtp: SMTPSettings, *, deadline: Optional[float] = None
    ) -> Server:
        """Replace the server SMTP settings.

        The whole SMTP object is sent, so fields left at their zero value
        overwrite whatever the server held before.

        Args:
            smtp: Complete SMTP settings.

        Returns:
            Server as returned after the update.
        """
        body = envelope({"type": "server", "attributes": {"smtp": smtp.to_api()}})

        with LogContext("update_server_smtp", self.log, smtp_server=smtp.server) as ctx:
            payload = self.conn.request("PATCH", SERVER_PATH, body=body, deadline=deadline)
            server = Server.from_api(unwrap(payload, source="server"))

            self._audit.log_operation(
                "update_server_smtp",
                user=self.conn.username,
                resource_id=server.id,
                details={"server": smtp.server, "port": smtp.port},
                success=True,
                duration_ms=ctx.elapsed_ms,
            )
            return server
