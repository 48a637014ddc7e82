"""EFT services module.

This module provides a modular, service-oriented architecture for EFT admin
API operations. Each service handles a specific domain of functionality.

Services:
    EFTConnection: Session, authentication and HTTP transport
    ServerService: Server object and SMTP settings
    SiteService: Site listing and lookup
    SiteUserService: Site user CRUD
    EventRuleService: Event rule CRUD with opaque JSON payloads

Usage:
    from eftadmin.services import EFTConnection, SiteService

    conn = EFTConnection.from_config(cfg)
    sites = SiteService(conn).list_sites()

For convenience, EFTClient is available as a facade that combines all
services.
"""

from .base import AuthState, EFTConnection
from .event_rules import EventRuleService
from .server import ServerService
from .sites import SiteService
from .users import SiteUserService

__all__ = [
    "AuthState",
    "EFTConnection",
    "ServerService",
    "SiteService",
    "SiteUserService",
    "EventRuleService",
]
