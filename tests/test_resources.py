"""Tests for the declarative resource layer."""

from __future__ import annotations

import json
import time
from unittest import mock

import pytest

from eftadmin.client import EFTClient
from eftadmin.core import (
    ConfigurationError,
    InvalidConfigurationError,
    InvalidImportIdError,
    InvalidURLError,
    MissingCredentialsError,
)
from eftadmin.models import EventRule, Server, Site, SiteAttributes, User, UserAttributes
from eftadmin.resources import (
    PROVIDER_TYPE_NAME,
    EventRuleResource,
    ServerDataSource,
    ServerSMTPResource,
    SiteUserResource,
    SitesDataSource,
    new_provider,
    replacement_attributes,
    sensitive_attributes,
)
from eftadmin.resources.site_user import to_api_model


@pytest.fixture
def client() -> mock.Mock:
    return mock.Mock(spec=EFTClient)


def _configured(resource, client):
    resource.configure(client)
    return resource


class TestProvider:
    """Tests for Provider."""

    CONFIG = {"host": "https://eft.example.com:4450/", "username": "admin", "password": "pw"}

    def test_metadata(self) -> None:
        assert new_provider("1.2.3").metadata() == {
            "type_name": "globalscapeeft",
            "version": "1.2.3",
        }

    def test_configure_builds_client(self) -> None:
        factory = mock.Mock()
        provider = new_provider(client_factory=factory)

        client = provider.configure(self.CONFIG)

        assert client is factory.return_value
        args, kwargs = factory.call_args
        assert args == ("https://eft.example.com:4450", "admin", "pw")
        assert kwargs["auth_type"] == "EFT"
        assert kwargs["insecure_skip_verify"] is False

    def test_configure_passes_options(self) -> None:
        factory = mock.Mock()
        provider = new_provider(client_factory=factory)

        provider.configure({**self.CONFIG, "auth_type": "AD", "insecure_skip_verify": True})

        kwargs = factory.call_args.kwargs
        assert kwargs["auth_type"] == "AD"
        assert kwargs["insecure_skip_verify"] is True

    @pytest.mark.parametrize("missing", ["host", "username", "password"])
    def test_missing_setting(self, missing: str) -> None:
        factory = mock.Mock()
        config = {**self.CONFIG, missing: ""}

        with pytest.raises(MissingCredentialsError) as exc_info:
            new_provider(client_factory=factory).configure(config)

        assert exc_info.value.missing_vars == [missing]
        factory.assert_not_called()

    def test_invalid_host(self) -> None:
        factory = mock.Mock()
        with pytest.raises(InvalidURLError):
            new_provider(client_factory=factory).configure({**self.CONFIG, "host": "eft:4450"})
        factory.assert_not_called()

    def test_unknown_setting(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            new_provider(client_factory=mock.Mock()).configure({**self.CONFIG, "port": 1})

    def test_resources_receive_client(self) -> None:
        provider = new_provider(client_factory=mock.Mock())
        client = provider.configure(self.CONFIG)

        assert all(r.client is client for r in provider.resources())
        assert all(d.client is client for d in provider.data_sources())

    def test_type_names(self) -> None:
        assert sorted(new_provider().type_names()) == [
            "globalscapeeft_event_rule",
            "globalscapeeft_server",
            "globalscapeeft_server_smtp",
            "globalscapeeft_site_user",
            "globalscapeeft_sites",
        ]

    def test_password_is_sensitive(self) -> None:
        assert sensitive_attributes(new_provider().schema()) == ["password"]


class TestUnconfigured:
    """Resources used before the provider configured a client."""

    def test_read_fails(self) -> None:
        resource = SiteUserResource()
        resource.configure(None)

        with pytest.raises(ConfigurationError) as exc_info:
            resource.read({"site_id": "s", "id": "u"})

        assert "Unconfigured client" in str(exc_info.value)

    def test_data_source_fails(self) -> None:
        with pytest.raises(ConfigurationError):
            SitesDataSource().read()


class TestSiteUserResource:
    """Tests for SiteUserResource."""

    API_USER = User(
        id="u-1",
        attributes=UserAttributes(
            login_name="alice",
            account_enabled="yes",
            has_home_folder_as_root="inherit",
        ),
    )

    def test_metadata(self) -> None:
        assert SiteUserResource().metadata(PROVIDER_TYPE_NAME) == "globalscapeeft_site_user"

    def test_plan_fills_defaults(self) -> None:
        plan = SiteUserResource().plan({"site_id": "s-1", "login_name": "alice"})

        assert plan["password_type"] == "Default"
        assert plan["account_enabled"] == "inherit"
        assert plan["home_folder_enabled"] == "inherit"
        assert plan["home_folder_root"] == "inherit"
        assert plan["password"] is None

    @pytest.mark.parametrize(
        "field", ["account_enabled", "home_folder_enabled", "home_folder_root"]
    )
    def test_plan_rejects_bad_choice(self, field: str) -> None:
        with pytest.raises(InvalidConfigurationError) as exc_info:
            SiteUserResource().plan({"site_id": "s-1", "login_name": "alice", field: "maybe"})
        assert exc_info.value.field == field

    def test_plan_requires_login_name(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            SiteUserResource().plan({"site_id": "s-1"})

    def test_to_api_model(self) -> None:
        plan = SiteUserResource().plan(
            {
                "site_id": "s-1",
                "login_name": "alice",
                "password": "pw",
                "email": "alice@example.com",
                "home_folder_path": "/alice",
            }
        )

        assert to_api_model(plan).to_api() == {
            "loginName": "alice",
            "accountEnabled": "inherit",
            "password": {"type": "Default", "value": "pw"},
            "personal": {"email": "alice@example.com"},
            "homeFolder": {"enabled": "inherit", "value": {"path": "/alice"}},
            "hasHomeFolderAsRoot": "inherit",
        }

    def test_to_api_model_without_optional_blocks(self) -> None:
        attrs = to_api_model({"login_name": "bob"})
        assert attrs.password is None
        assert attrs.personal is None
        assert attrs.home_folder is None

    def test_create_never_stores_password(self, client: mock.Mock) -> None:
        client.create_site_user.return_value = self.API_USER
        resource = _configured(SiteUserResource(), client)
        plan = resource.plan(
            {"site_id": "s-1", "login_name": "alice", "password": "pw", "password_type": "Custom"}
        )

        state = resource.create(plan)

        site_id, attrs = client.create_site_user.call_args.args
        assert site_id == "s-1"
        assert attrs.password.value == "pw"
        assert state["id"] == "u-1"
        assert state["site_id"] == "s-1"
        assert state["password"] is None
        assert state["password_type"] == "Custom"
        assert state["account_enabled"] == "yes"
        assert state["display_name"] is None
        assert state["home_folder_enabled"] is None

    def test_read_and_delete(self, client: mock.Mock) -> None:
        client.get_site_user.return_value = self.API_USER
        resource = _configured(SiteUserResource(), client)
        state = {"site_id": "s-1", "id": "u-1", "password_type": "Default"}

        new_state = resource.read(state)
        resource.delete(new_state)

        client.get_site_user.assert_called_once_with("s-1", "u-1")
        client.delete_site_user.assert_called_once_with("s-1", "u-1")
        assert new_state["login_name"] == "alice"

    def test_update_uses_existing_id(self, client: mock.Mock) -> None:
        client.update_site_user.return_value = self.API_USER
        resource = _configured(SiteUserResource(), client)
        plan = resource.plan({"site_id": "s-1", "login_name": "alice", "email": "a@x"})

        resource.update(plan, {"id": "u-1", "site_id": "s-1"})

        assert client.update_site_user.call_args.args[:2] == ("s-1", "u-1")

    def test_replacement_on_site_change(self) -> None:
        schema = SiteUserResource().schema()
        prior = {"site_id": "s-1", "login_name": "alice", "email": "a@x"}
        planned = {"site_id": "s-2", "login_name": "alice", "email": "b@x"}
        assert replacement_attributes(schema, prior, planned) == ["site_id"]

    def test_import_state(self) -> None:
        assert SiteUserResource().import_state("s-1/u-1")["id"] == "u-1"


class TestEventRuleResource:
    """Tests for EventRuleResource."""

    API_RULE = EventRule(
        id="r-1",
        attributes='{"name":"Nightly","action":{"password":"x","host":"h"}}',
        relationships=None,
    )

    def test_create_sanitizes_both_ways(self, client: mock.Mock) -> None:
        client.create_event_rule.return_value = self.API_RULE
        resource = _configured(EventRuleResource(), client)
        plan = resource.plan(
            {
                "site_id": "s-1",
                "attributes_json": '{"name": "Nightly", "action": {"Password": "x", "host": "h"}}',
                "relationships_json": '{"b": 2, "a": 1}',
            }
        )

        state = resource.create(plan)

        site_id, data = client.create_event_rule.call_args.args
        assert site_id == "s-1"
        assert json.loads(data.attributes) == {"name": "Nightly", "action": {"host": "h"}}
        assert data.relationships == '{"a":1,"b":2}'
        assert state["id"] == "r-1"
        assert state["attributes_json"] == '{"action":{"host":"h"},"name":"Nightly"}'
        assert state["relationships_json"] is None

    def test_create_requires_attributes(self, client: mock.Mock) -> None:
        resource = _configured(EventRuleResource(), client)

        with pytest.raises(InvalidConfigurationError):
            resource.create({"site_id": "s-1", "attributes_json": ""})

        client.create_event_rule.assert_not_called()

    def test_timeouts_become_deadlines(self, client: mock.Mock) -> None:
        client.get_event_rule.return_value = self.API_RULE
        resource = _configured(EventRuleResource(), client)

        before = time.monotonic()
        resource.read({"site_id": "s-1", "id": "r-1", "timeouts": {"read": 10}})
        deadline = client.get_event_rule.call_args.kwargs["deadline"]
        assert before + 10 <= deadline <= time.monotonic() + 10

        resource.read({"site_id": "s-1", "id": "r-1"})
        deadline = client.get_event_rule.call_args.kwargs["deadline"]
        assert deadline > time.monotonic() + 290

    def test_update_and_delete(self, client: mock.Mock) -> None:
        client.update_event_rule.return_value = EventRule(
            id="r-1", attributes='{"a":1}', relationships='{"site":{}}'
        )
        resource = _configured(EventRuleResource(), client)
        plan = {"site_id": "s-1", "attributes_json": '{"a": 1}'}

        state = resource.update(plan, {"site_id": "s-1", "id": "r-1"})
        resource.delete(state)

        site_id, rule_id, data = client.update_event_rule.call_args.args
        assert (site_id, rule_id, data.id) == ("s-1", "r-1", "r-1")
        assert state["relationships_json"] == '{"site":{}}'
        assert client.delete_event_rule.call_args.args == ("s-1", "r-1")

    def test_read_is_stable(self, client: mock.Mock) -> None:
        client.get_event_rule.return_value = self.API_RULE
        resource = _configured(EventRuleResource(), client)

        first = resource.read({"site_id": "s-1", "id": "r-1"})
        second = resource.read(first)

        assert first == second

    def test_import_state(self) -> None:
        assert EventRuleResource().import_state("site42/rule7") == {
            "site_id": "site42",
            "id": "rule7",
        }

    def test_import_state_invalid(self) -> None:
        with pytest.raises(InvalidImportIdError) as exc_info:
            EventRuleResource().import_state("badformat")
        assert "<site_id>/<rule_id>" in str(exc_info.value)


class TestServerResources:
    """Tests for the server data source and SMTP resource."""

    SERVER = Server.from_api(
        {
            "id": "srv-1",
            "attributes": {
                "version": "8.1",
                "listenerSettings": {"adminPort": 4450, "listenIps": ["10.0.0.1"]},
                "smtp": {"server": "mail", "port": 25, "senderAddr": "eft@x", "senderName": "EFT"},
            },
        }
    )

    def test_server_data_source(self, client: mock.Mock) -> None:
        client.get_server.return_value = self.SERVER

        state = _configured(ServerDataSource(), client).read()

        assert state["id"] == "srv-1"
        assert state["version"] == "8.1"
        assert state["listener_settings"]["listen_ips"] == ["10.0.0.1"]
        assert state["smtp"]["sender_address"] == "eft@x"

    def test_smtp_create_sends_full_block(self, client: mock.Mock) -> None:
        client.update_server_smtp.return_value = self.SERVER
        resource = _configured(ServerSMTPResource(), client)
        plan = resource.plan(
            {"server": "mail", "port": 25, "sender_address": "eft@x", "sender_name": "EFT"}
        )

        state = resource.create(plan)

        smtp = client.update_server_smtp.call_args.args[0]
        assert smtp.login == ""
        assert smtp.use_authentication is False
        assert state["id"] == "srv-1"
        assert state["port"] == 25

    def test_smtp_requires_fields(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            ServerSMTPResource().plan({"server": "mail"})

    def test_smtp_delete_is_local(self, client: mock.Mock) -> None:
        _configured(ServerSMTPResource(), client).delete({"id": "srv-1"})
        client.update_server_smtp.assert_not_called()

    def test_sites_data_source(self, client: mock.Mock) -> None:
        client.list_sites.return_value = [
            Site(id="s-1", attributes=SiteAttributes(name="Default Site"))
        ]

        state = _configured(SitesDataSource(), client).read()

        assert state == {"sites": [{"id": "s-1", "name": "Default Site"}]}
