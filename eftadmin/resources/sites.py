"""Sites data source."""

from __future__ import annotations

from .base import Attribute, DataSource, Schema, State


class SitesDataSource(DataSource):
    """Lists sites configured on the server."""

    type_suffix = "sites"

    def schema(self) -> Schema:
        return {
            "sites": Attribute(
                kind="list",
                computed=True,
                description="Sites configured on the server, each with id and name.",
            ),
        }

    def read(self) -> State:
        client = self._require_client()
        return {"sites": [{"id": s.id, "name": s.name} for s in client.list_sites()]}
