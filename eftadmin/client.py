"""EFTClient - unified facade for EFT admin API operations.

This module provides one object that owns an authenticated connection and
exposes every typed operation. It is what the resource layer receives when
the provider is configured.

Usage:
    from eftadmin import EFTClient, load_config

    cfg = load_config()
    client = EFTClient.from_config(cfg)
    for site in client.list_sites():
        print(site.id, site.name)

    # Services can also be used directly
    from eftadmin.services import EFTConnection, EventRuleService

    conn = EFTConnection.from_config(cfg)
    rules = EventRuleService(conn)
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests

from .config import DEFAULT_AUTH_TYPE, DEFAULT_HTTP_TIMEOUT, EFTConfig
from .core import get_logger
from .models import (
    EventRule,
    EventRuleRequestData,
    Server,
    Site,
    SMTPSettings,
    User,
    UserAttributes,
)
from .services import (
    EFTConnection,
    EventRuleService,
    ServerService,
    SiteService,
    SiteUserService,
)


class EFTClient:
    """Unified client for EFT admin API operations.

    Delegates to the specialized services:
    - EFTConnection (authentication and HTTP)
    - ServerService (server object, SMTP)
    - SiteService (sites)
    - SiteUserService (site users)
    - EventRuleService (event rules)
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        *,
        auth_type: str = DEFAULT_AUTH_TYPE,
        insecure_skip_verify: bool = False,
        timeout: int = DEFAULT_HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Create a new EFT client and authenticate.

        Args:
            host: EFT admin API base URL.
            username: Admin username.
            password: Admin password.
            auth_type: Authentication type forwarded to EFT.
            insecure_skip_verify: Disable TLS certificate verification.
            timeout: Per-request timeout in seconds.
            session: Optional pre-built requests session.
            logger: Optional logger instance.

        Raises:
            AuthenticationError: If the initial authentication fails.
        """
        self.log = logger or get_logger(__name__)

        self._conn = EFTConnection(
            host,
            username,
            password,
            auth_type=auth_type,
            insecure_skip_verify=insecure_skip_verify,
            timeout=timeout,
            session=session,
            logger=self.log,
        )

        self._server = ServerService(self._conn)
        self._sites = SiteService(self._conn)
        self._users = SiteUserService(self._conn)
        self._event_rules = EventRuleService(self._conn)

    @classmethod
    def from_config(
        cls, cfg: EFTConfig, *, session: Optional[requests.Session] = None
    ) -> "EFTClient":
        """Create client from configuration dictionary.

        Args:
            cfg: Configuration from load_config().
            session: Optional pre-built requests session.

        Returns:
            Authenticated EFTClient instance.
        """
        return cls(
            cfg["host"],
            cfg["username"],
            cfg["password"],
            auth_type=cfg.get("auth_type") or DEFAULT_AUTH_TYPE,
            insecure_skip_verify=cfg.get("insecure_skip_verify", False),
            timeout=cfg.get("http_timeout", DEFAULT_HTTP_TIMEOUT),
            session=session,
        )

    # =========================================================================
    # Properties for service access
    # =========================================================================

    @property
    def connection(self) -> EFTConnection:
        """Access the underlying connection."""
        return self._conn

    @property
    def host(self) -> str:
        """EFT admin API base URL."""
        return self._conn.base_url

    @property
    def username(self) -> str:
        return self._conn.username

    # =========================================================================
    # Server
    # =========================================================================

    def get_server(self, *, deadline: Optional[float] = None) -> Server:
        """Fetch the server object."""
        return self._server.get_server(deadline=deadline)

    def update_server_smtp(
        self, smtp: SMTPSettings, *, deadline: Optional[float] = None
    ) -> Server:
        """Replace the server SMTP settings."""
        return self._server.update_server_smtp(smtp, deadline=deadline)

    # =========================================================================
    # Sites
    # =========================================================================

    def list_sites(self, *, deadline: Optional[float] = None) -> List[Site]:
        """List all sites."""
        return self._sites.list_sites(deadline=deadline)

    def find_site(self, name_or_id: str, *, deadline: Optional[float] = None) -> Optional[Site]:
        """Find a site by ID or name."""
        return self._sites.find_site(name_or_id, deadline=deadline)

    # =========================================================================
    # Site users
    # =========================================================================

    def get_site_user(
        self, site_id: str, user_id: str, *, deadline: Optional[float] = None
    ) -> User:
        return self._users.get_site_user(site_id, user_id, deadline=deadline)

    def create_site_user(
        self, site_id: str, attrs: UserAttributes, *, deadline: Optional[float] = None
    ) -> User:
        return self._users.create_site_user(site_id, attrs, deadline=deadline)

    def update_site_user(
        self,
        site_id: str,
        user_id: str,
        attrs: UserAttributes,
        *,
        deadline: Optional[float] = None,
    ) -> User:
        return self._users.update_site_user(site_id, user_id, attrs, deadline=deadline)

    def delete_site_user(
        self, site_id: str, user_id: str, *, deadline: Optional[float] = None
    ) -> None:
        self._users.delete_site_user(site_id, user_id, deadline=deadline)

    # =========================================================================
    # Event rules
    # =========================================================================

    def get_event_rule(
        self, site_id: str, rule_id: str, *, deadline: Optional[float] = None
    ) -> EventRule:
        return self._event_rules.get_event_rule(site_id, rule_id, deadline=deadline)

    def create_event_rule(
        self, site_id: str, data: EventRuleRequestData, *, deadline: Optional[float] = None
    ) -> EventRule:
        return self._event_rules.create_event_rule(site_id, data, deadline=deadline)

    def update_event_rule(
        self,
        site_id: str,
        rule_id: str,
        data: EventRuleRequestData,
        *,
        deadline: Optional[float] = None,
    ) -> EventRule:
        return self._event_rules.update_event_rule(site_id, rule_id, data, deadline=deadline)

    def delete_event_rule(
        self, site_id: str, rule_id: str, *, deadline: Optional[float] = None
    ) -> None:
        self._event_rules.delete_event_rule(site_id, rule_id, deadline=deadline)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "EFTClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
