"""Site listing service."""

from __future__ import annotations

from typing import List, Optional

from ..core import PayloadParseError, get_logger
from ..models import Site, unwrap
from .base import EFTConnection

SITES_PATH = "/admin/v2/sites"


class SiteService:
    """Service for EFT sites."""

    def __init__(self, connection: EFTConnection) -> None:
        self.conn = connection
        self.log = get_logger(__name__)

    def list_sites(self, *, deadline: Optional[float] = None) -> List[Site]:
        """List all sites configured on the server."""
        payload = self.conn.request("GET", SITES_PATH, deadline=deadline)
        data = unwrap(payload, source="sites")
        if data is None:
            return []
        if not isinstance(data, list):
            raise PayloadParseError("expected a list of sites", source="sites")
        return [Site.from_api(entry) for entry in data if isinstance(entry, dict)]

    def find_site(self, name_or_id: str, *, deadline: Optional[float] = None) -> Optional[Site]:
        """Find a site by ID, or by case-insensitive name.

        Returns:
            Matching site, or None.
        """
        needle = name_or_id.strip()
        sites = self.list_sites(deadline=deadline)
        for site in sites:
            if site.id == needle:
                return site
        for site in sites:
            if site.name.lower() == needle.lower():
                return site
        self.log.debug("No site matched %r among %d sites", needle, len(sites))
        return None
