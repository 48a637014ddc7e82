"""Declarative resource layer on top of :class:`~eftadmin.client.EFTClient`.

Resources:
    ServerSMTPResource: globalscapeeft_server_smtp
    SiteUserResource: globalscapeeft_site_user
    EventRuleResource: globalscapeeft_event_rule

Data sources:
    ServerDataSource: globalscapeeft_server
    SitesDataSource: globalscapeeft_sites
"""

from .base import (
    Attribute,
    DataSource,
    Resource,
    Schema,
    State,
    apply_schema,
    replacement_attributes,
    sensitive_attributes,
)
from .event_rule import EventRuleResource
from .provider import PROVIDER_TYPE_NAME, Provider, new_provider
from .server import ServerDataSource, ServerSMTPResource
from .site_user import SiteUserResource
from .sites import SitesDataSource

__all__ = [
    "Attribute",
    "DataSource",
    "Resource",
    "Schema",
    "State",
    "apply_schema",
    "replacement_attributes",
    "sensitive_attributes",
    "PROVIDER_TYPE_NAME",
    "Provider",
    "new_provider",
    "EventRuleResource",
    "ServerDataSource",
    "ServerSMTPResource",
    "SiteUserResource",
    "SitesDataSource",
]
