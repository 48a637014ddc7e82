"""Tests for the typed services and the EFTClient facade."""

from __future__ import annotations

import json
from unittest import mock

import pytest

from eftadmin.client import EFTClient
from eftadmin.core import (
    InvalidIdentifierError,
    PayloadParseError,
    ResourceNotFoundError,
)
from eftadmin.models import EventRuleRequestData, SMTPSettings, UserAttributes, UserPassword
from eftadmin.services import EventRuleService, ServerService, SiteService, SiteUserService

HOST = "https://eft.example.com:4450"

SERVER_PAYLOAD = {
    "data": {
        "type": "server",
        "id": "srv-1",
        "attributes": {
            "version": "8.1.0.10",
            "general": {"configFilePath": "C:\\EFT", "lastModifiedTime": 1700000000},
            "listenerSettings": {"adminPort": 4450, "listenIps": ["0.0.0.0"]},
            "smtp": {
                "server": "smtp.example.com",
                "port": 25,
                "senderAddr": "eft@example.com",
                "senderName": "EFT",
                "useAuthentication": False,
            },
        },
    }
}


def _last_call(conn):
    return conn.session.request.call_args_list[-1]


class TestServerService:
    """Tests for ServerService."""

    def test_get_server(self, connection_factory, response_factory) -> None:
        conn = connection_factory(response_factory(200, SERVER_PAYLOAD))

        server = ServerService(conn).get_server()

        assert server.id == "srv-1"
        assert server.attributes.version == "8.1.0.10"
        assert server.attributes.listener_settings.admin_port == 4450
        assert server.attributes.smtp.sender_address == "eft@example.com"
        assert _last_call(conn).args == ("GET", f"{HOST}/admin/v2/server")

    def test_update_smtp_sends_full_block(
        self, connection_factory, response_factory, body_of
    ) -> None:
        conn = connection_factory(response_factory(200, SERVER_PAYLOAD))
        smtp = SMTPSettings(
            server="mail.example.com",
            port=587,
            sender_address="eft@example.com",
            sender_name="EFT",
        )

        ServerService(conn).update_server_smtp(smtp)

        call = _last_call(conn)
        assert call.args == ("PATCH", f"{HOST}/admin/v2/server")
        assert body_of(call) == {
            "data": {
                "type": "server",
                "attributes": {
                    "smtp": {
                        "login": "",
                        "password": "",
                        "port": 587,
                        "senderAddr": "eft@example.com",
                        "senderName": "EFT",
                        "server": "mail.example.com",
                        "useAuthentication": False,
                        "useImplicitTLS": False,
                    }
                },
            }
        }

    def test_update_smtp_is_audited(self, connection_factory, response_factory) -> None:
        conn = connection_factory(response_factory(200, SERVER_PAYLOAD))
        service = ServerService(conn)
        service._audit = mock.Mock()

        service.update_server_smtp(SMTPSettings(server="mail.example.com", port=25, password="pw"))

        service._audit.log_operation.assert_called_once()
        args, kwargs = service._audit.log_operation.call_args
        assert args == ("update_server_smtp",)
        assert kwargs["resource_id"] == "srv-1"
        assert kwargs["user"] == "admin"
        assert "password" not in kwargs["details"]


class TestSiteService:
    """Tests for SiteService."""

    SITES = {
        "data": [
            {"type": "site", "id": "s-1", "attributes": {"name": "Default Site"}},
            {"type": "site", "id": "s-2", "attributes": {"name": "Partners"}},
        ]
    }

    def test_list_sites(self, connection_factory, response_factory) -> None:
        conn = connection_factory(response_factory(200, self.SITES))

        sites = SiteService(conn).list_sites()

        assert [(s.id, s.name) for s in sites] == [("s-1", "Default Site"), ("s-2", "Partners")]
        assert _last_call(conn).args == ("GET", f"{HOST}/admin/v2/sites")

    def test_list_sites_null_data(self, connection_factory, response_factory) -> None:
        conn = connection_factory(response_factory(200, {"data": None}))
        assert SiteService(conn).list_sites() == []

    def test_list_sites_wrong_shape(self, connection_factory, response_factory) -> None:
        conn = connection_factory(response_factory(200, {"data": {"id": "s-1"}}))
        with pytest.raises(PayloadParseError):
            SiteService(conn).list_sites()

    def test_missing_envelope(self, connection_factory, response_factory) -> None:
        conn = connection_factory(response_factory(200, [{"id": "s-1"}]))
        with pytest.raises(PayloadParseError):
            SiteService(conn).list_sites()

    @pytest.mark.parametrize("needle,expected", [("s-2", "s-2"), ("partners", "s-2"), ("x", None)])
    def test_find_site(self, connection_factory, response_factory, needle, expected) -> None:
        conn = connection_factory(response_factory(200, self.SITES))

        site = SiteService(conn).find_site(needle)

        assert (site.id if site else None) == expected


class TestSiteUserService:
    """Tests for SiteUserService."""

    USER = {
        "data": {
            "type": "user",
            "id": "u-1",
            "attributes": {
                "loginName": "alice",
                "accountEnabled": "yes",
                "personal": {"name": "Alice", "email": "alice@example.com"},
                "homeFolder": {"enabled": "yes", "value": {"path": "/alice"}},
            },
        }
    }

    def test_get_user(self, connection_factory, response_factory) -> None:
        conn = connection_factory(response_factory(200, self.USER))

        user = SiteUserService(conn).get_site_user("s-1", "u-1")

        assert user.id == "u-1"
        assert user.attributes.login_name == "alice"
        assert user.attributes.personal.email == "alice@example.com"
        assert user.attributes.home_folder.value.path == "/alice"
        assert _last_call(conn).args == ("GET", f"{HOST}/admin/v2/sites/s-1/users/u-1")

    def test_get_missing_user(self, connection_factory, response_factory) -> None:
        conn = connection_factory(response_factory(404, text="not found"))
        with pytest.raises(ResourceNotFoundError):
            SiteUserService(conn).get_site_user("s-1", "u-9")

    def test_create_user(self, connection_factory, response_factory, body_of) -> None:
        conn = connection_factory(response_factory(201, self.USER))
        attrs = UserAttributes(
            login_name="alice",
            account_enabled="yes",
            password=UserPassword(type="Default", value="pw"),
        )

        user = SiteUserService(conn).create_site_user("s-1", attrs)

        call = _last_call(conn)
        assert user.id == "u-1"
        assert call.args == ("POST", f"{HOST}/admin/v2/sites/s-1/users")
        assert body_of(call) == {
            "data": {
                "type": "user",
                "attributes": {
                    "loginName": "alice",
                    "accountEnabled": "yes",
                    "password": {"type": "Default", "value": "pw"},
                },
            }
        }

    def test_update_user(self, connection_factory, response_factory) -> None:
        conn = connection_factory(response_factory(200, self.USER))

        SiteUserService(conn).update_site_user("s-1", "u-1", UserAttributes(login_name="alice"))

        assert _last_call(conn).args == ("PATCH", f"{HOST}/admin/v2/sites/s-1/users/u-1")

    def test_delete_user(self, connection_factory, response_factory) -> None:
        conn = connection_factory(response_factory(204))

        assert SiteUserService(conn).delete_site_user("s-1", "u-1") is None
        assert _last_call(conn).args == ("DELETE", f"{HOST}/admin/v2/sites/s-1/users/u-1")

    @pytest.mark.parametrize("bad", ["", "  ", "a/b", "x?y"])
    def test_invalid_ids_rejected_before_network(self, connection_factory, bad) -> None:
        conn = connection_factory()

        with pytest.raises(InvalidIdentifierError):
            SiteUserService(conn).get_site_user(bad, "u-1")

        assert conn.session.request.call_count == 1


class TestEventRuleService:
    """Tests for EventRuleService."""

    RULE = {
        "data": {
            "type": "eventRule",
            "id": "r-1",
            "attributes": {"name": "Nightly", "enabled": True},
            "relationships": {"site": {"data": {"id": "s-1"}}},
        }
    }

    def test_get_rule_keeps_opaque_json(self, connection_factory, response_factory) -> None:
        conn = connection_factory(response_factory(200, self.RULE))

        rule = EventRuleService(conn).get_event_rule("s-1", "r-1")

        assert rule.id == "r-1"
        assert json.loads(rule.attributes) == {"name": "Nightly", "enabled": True}
        assert json.loads(rule.relationships) == {"site": {"data": {"id": "s-1"}}}
        assert _last_call(conn).args == ("GET", f"{HOST}/admin/v2/sites/s-1/event-rules/r-1")

    def test_get_rule_without_relationships(self, connection_factory, response_factory) -> None:
        payload = {"data": {"type": "eventRule", "id": "r-1", "attributes": {}}}
        conn = connection_factory(response_factory(200, payload))

        rule = EventRuleService(conn).get_event_rule("s-1", "r-1")

        assert rule.relationships is None

    def test_create_rule(self, connection_factory, response_factory, body_of) -> None:
        conn = connection_factory(response_factory(201, self.RULE))
        data = EventRuleRequestData(attributes='{"name":"Nightly"}')

        rule = EventRuleService(conn).create_event_rule("s-1", data)

        call = _last_call(conn)
        assert rule.id == "r-1"
        assert call.args == ("POST", f"{HOST}/admin/v2/sites/s-1/event-rules")
        assert body_of(call) == {"data": {"type": "eventRule", "attributes": {"name": "Nightly"}}}

    def test_update_rule_fills_id(self, connection_factory, response_factory, body_of) -> None:
        conn = connection_factory(response_factory(200, self.RULE))
        data = EventRuleRequestData(attributes="{}", relationships='{"a":1}')

        EventRuleService(conn).update_event_rule("s-1", "r-1", data)

        call = _last_call(conn)
        assert call.args == ("PATCH", f"{HOST}/admin/v2/sites/s-1/event-rules/r-1")
        assert body_of(call)["data"] == {
            "type": "eventRule",
            "id": "r-1",
            "attributes": {},
            "relationships": {"a": 1},
        }

    def test_create_rule_with_bad_json(self, connection_factory) -> None:
        conn = connection_factory()

        with pytest.raises(PayloadParseError):
            EventRuleService(conn).create_event_rule(
                "s-1", EventRuleRequestData(attributes="{oops")
            )

        assert conn.session.request.call_count == 1

    def test_delete_rule(self, connection_factory, response_factory) -> None:
        conn = connection_factory(response_factory(200, text=""))

        EventRuleService(conn).delete_event_rule("s-1", "r-1")

        assert _last_call(conn).args == ("DELETE", f"{HOST}/admin/v2/sites/s-1/event-rules/r-1")


class TestEFTClient:
    """Tests for the EFTClient facade."""

    def test_from_config_and_delegation(self, session_factory, response_factory) -> None:
        session = session_factory(
            [
                response_factory(200, {"authToken": "tok"}),
                response_factory(200, TestSiteService.SITES),
            ]
        )
        cfg = {
            "host": HOST,
            "username": "admin",
            "password": "s3cret",
            "auth_type": "EFT",
            "insecure_skip_verify": False,
            "http_timeout": 60,
        }

        with EFTClient.from_config(cfg, session=session) as client:  # type: ignore[arg-type]
            assert client.host == HOST
            assert client.username == "admin"
            assert client.connection.token == "tok"
            assert [s.id for s in client.list_sites()] == ["s-1", "s-2"]

        session.close.assert_called_once()
