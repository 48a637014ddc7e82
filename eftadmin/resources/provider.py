"""Provider entry point for the declarative resource layer.

The provider validates its own configuration, builds one authenticated
:class:`~eftadmin.client.EFTClient` and hands it to every resource and data
source through ``configure``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from ..client import EFTClient
from ..config import DEFAULT_AUTH_TYPE, DEFAULT_HTTP_TIMEOUT
from ..core import MissingCredentialsError, get_logger, validate_server_url
from .base import Attribute, DataSource, Resource, Schema, apply_schema
from .event_rule import EventRuleResource
from .server import ServerDataSource, ServerSMTPResource
from .site_user import SiteUserResource
from .sites import SitesDataSource

PROVIDER_TYPE_NAME = "globalscapeeft"

ClientFactory = Callable[..., EFTClient]


class Provider:
    """Configures the EFT admin client and lists the managed types."""

    def __init__(
        self, version: str = "dev", *, client_factory: Optional[ClientFactory] = None
    ) -> None:
        self.version = version
        self.client: Optional[EFTClient] = None
        self._client_factory = client_factory or EFTClient
        self.log = get_logger(__name__)

    def metadata(self) -> Dict[str, str]:
        return {"type_name": PROVIDER_TYPE_NAME, "version": self.version}

    def schema(self) -> Schema:
        return {
            "host": Attribute(
                required=True,
                description="Base URL of the EFT admin API, e.g. https://eft.example.com:4450",
            ),
            "username": Attribute(required=True, description="Admin username for EFT."),
            "password": Attribute(
                required=True, sensitive=True, description="Admin password for EFT."
            ),
            "auth_type": Attribute(
                optional=True,
                default=DEFAULT_AUTH_TYPE,
                description="Authentication type used when requesting a token.",
            ),
            "insecure_skip_verify": Attribute(
                kind="bool",
                optional=True,
                default=False,
                description="Skip TLS verification for self-signed certificates.",
            ),
        }

    def configure(self, config: Mapping[str, Any]) -> EFTClient:
        """Validate provider configuration and authenticate.

        Raises:
            MissingCredentialsError: If host, username or password is empty.
            InvalidURLError: If host is not an http(s) URL.
            InvalidConfigurationError: If an attribute is unknown.
            AuthenticationError: If the initial login is rejected.
        """
        missing = [name for name in ("host", "username", "password") if not config.get(name)]
        if missing:
            raise MissingCredentialsError(missing)

        values = apply_schema(self.schema(), config, type_name="provider")
        host = validate_server_url(values["host"])
        auth_type = values.get("auth_type") or DEFAULT_AUTH_TYPE

        self.log.info(
            "Configuring EFT client",
            extra={"server": host, "user": values["username"], "auth_type": auth_type},
        )
        self.client = self._client_factory(
            host,
            values["username"],
            values["password"],
            auth_type=auth_type,
            insecure_skip_verify=bool(values.get("insecure_skip_verify")),
            timeout=DEFAULT_HTTP_TIMEOUT,
        )
        return self.client

    def resources(self) -> List[Resource]:
        return [
            self._configured(ServerSMTPResource()),
            self._configured(SiteUserResource()),
            self._configured(EventRuleResource()),
        ]

    def data_sources(self) -> List[DataSource]:
        return [
            self._configured(ServerDataSource()),
            self._configured(SitesDataSource()),
        ]

    def type_names(self) -> List[str]:
        return [r.metadata(PROVIDER_TYPE_NAME) for r in (*self.resources(), *self.data_sources())]

    def _configured(self, obj: Any) -> Any:
        obj.configure(self.client)
        return obj


def new_provider(version: str = "dev", **kwargs: Any) -> Provider:
    return Provider(version, **kwargs)
