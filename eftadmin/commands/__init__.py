from __future__ import annotations

import argparse

from .event_rules import register as register_event_rules
from .payloads import register as register_payloads
from .server import register as register_server
from .sites import register as register_sites
from .users import register as register_users


def register_all(subparsers: argparse._SubParsersAction) -> None:
    """Register all CLI command groups."""
    register_server(subparsers)
    register_sites(subparsers)
    register_users(subparsers)
    register_event_rules(subparsers)
    register_payloads(subparsers)


__all__ = ["register_all"]
