"""Typed shapes for EFT admin API objects.

The admin API wraps every object in a JSON:API envelope
``{"data": {"type", "id", "attributes", "relationships"}}``. The classes here
mirror the ``data`` member. Decoding is one-way and lenient: absent fields
take zero values, unknown fields are ignored.

Event rules are the exception: their attributes and relationships are kept
as JSON text (:data:`RawJSON`) and never decoded into fixed structures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .core.exceptions import PayloadParseError
from .core.sanitize import dump_json, load_json

RawJSON = str


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise PayloadParseError(f"field '{key}' is not an integer: {value!r}") from e


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else False


def _obj(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


def _prune(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Drop empty values, mirroring the API's omit-empty field contract."""
    return {k: v for k, v in payload.items() if v not in (None, "", {}, False)}


# =============================================================================
# Server
# =============================================================================


@dataclass
class ServerGeneral:
    config_file_path: str = ""
    enable_utc_in_listings: bool = False
    last_modified_by: str = ""
    last_modified_time: int = 0

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ServerGeneral":
        return cls(
            config_file_path=_str(data, "configFilePath"),
            enable_utc_in_listings=_bool(data, "enableUtcInListings"),
            last_modified_by=_str(data, "lastModifiedBy"),
            last_modified_time=_int(data, "lastModifiedTime"),
        )


@dataclass
class ListenerSettings:
    admin_port: int = 0
    enable_remote_administration: bool = False
    listen_ips: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ListenerSettings":
        return cls(
            admin_port=_int(data, "adminPort"),
            enable_remote_administration=_bool(data, "enableRemoteAdministration"),
            listen_ips=[str(ip) for ip in data.get("listenIps") or []],
        )


@dataclass
class SMTPSettings:
    """Server-wide SMTP block.

    ``to_api`` always emits every field: the server replaces the whole SMTP
    object on PATCH, so omitted fields would be reset remotely anyway.
    """

    server: str = ""
    port: int = 0
    sender_address: str = ""
    sender_name: str = ""
    login: str = ""
    password: str = field(default="", repr=False)
    use_authentication: bool = False
    use_implicit_tls: bool = False

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "SMTPSettings":
        return cls(
            server=_str(data, "server"),
            port=_int(data, "port"),
            sender_address=_str(data, "senderAddr"),
            sender_name=_str(data, "senderName"),
            login=_str(data, "login"),
            password=_str(data, "password"),
            use_authentication=_bool(data, "useAuthentication"),
            use_implicit_tls=_bool(data, "useImplicitTLS"),
        )

    def to_api(self) -> Dict[str, Any]:
        return {
            "login": self.login,
            "password": self.password,
            "port": self.port,
            "senderAddr": self.sender_address,
            "senderName": self.sender_name,
            "server": self.server,
            "useAuthentication": self.use_authentication,
            "useImplicitTLS": self.use_implicit_tls,
        }


@dataclass
class ServerAttributes:
    version: str = ""
    general: ServerGeneral = field(default_factory=ServerGeneral)
    listener_settings: ListenerSettings = field(default_factory=ListenerSettings)
    smtp: SMTPSettings = field(default_factory=SMTPSettings)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ServerAttributes":
        return cls(
            version=_str(data, "version"),
            general=ServerGeneral.from_api(_obj(data, "general")),
            listener_settings=ListenerSettings.from_api(_obj(data, "listenerSettings")),
            smtp=SMTPSettings.from_api(_obj(data, "smtp")),
        )


@dataclass
class Server:
    id: str
    type: str = "server"
    attributes: ServerAttributes = field(default_factory=ServerAttributes)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Server":
        return cls(
            id=_str(data, "id"),
            type=_str(data, "type") or "server",
            attributes=ServerAttributes.from_api(_obj(data, "attributes")),
        )


# =============================================================================
# Sites
# =============================================================================


@dataclass
class SiteAttributes:
    name: str = ""

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "SiteAttributes":
        return cls(name=_str(data, "name"))


@dataclass
class Site:
    id: str
    type: str = "site"
    attributes: SiteAttributes = field(default_factory=SiteAttributes)

    @property
    def name(self) -> str:
        return self.attributes.name

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Site":
        return cls(
            id=_str(data, "id"),
            type=_str(data, "type") or "site",
            attributes=SiteAttributes.from_api(_obj(data, "attributes")),
        )


# =============================================================================
# Site users
# =============================================================================


@dataclass
class UserPassword:
    type: str = ""
    value: str = field(default="", repr=False)

    def to_api(self) -> Dict[str, Any]:
        return {"type": self.type, "value": self.value}

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "UserPassword":
        return cls(type=_str(data, "type"), value=_str(data, "value"))


@dataclass
class UserPersonal:
    name: str = ""
    description: str = ""
    email: str = ""

    def to_api(self) -> Dict[str, Any]:
        return _prune({"name": self.name, "description": self.description, "email": self.email})

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "UserPersonal":
        return cls(
            name=_str(data, "name"),
            description=_str(data, "description"),
            email=_str(data, "email"),
        )


@dataclass
class UserHomeFolderValue:
    path: str = ""

    def to_api(self) -> Dict[str, Any]:
        return _prune({"path": self.path})

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "UserHomeFolderValue":
        return cls(path=_str(data, "path"))


@dataclass
class UserHomeFolder:
    enabled: str = ""
    value: Optional[UserHomeFolderValue] = None

    def to_api(self) -> Dict[str, Any]:
        return _prune(
            {
                "enabled": self.enabled,
                "value": self.value.to_api() if self.value is not None else None,
            }
        )

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "UserHomeFolder":
        value = data.get("value")
        return cls(
            enabled=_str(data, "enabled"),
            value=UserHomeFolderValue.from_api(value) if isinstance(value, Mapping) else None,
        )


@dataclass
class ChangePasswordSetValues:
    must_change_password: bool = False

    def to_api(self) -> Dict[str, Any]:
        return _prune({"mustChangePassword": self.must_change_password})

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ChangePasswordSetValues":
        return cls(must_change_password=_bool(data, "mustChangePassword"))


@dataclass
class ChangePasswordSet:
    enabled: str = ""
    value: Optional[ChangePasswordSetValues] = None

    def to_api(self) -> Dict[str, Any]:
        return _prune(
            {
                "enabled": self.enabled,
                "value": self.value.to_api() if self.value is not None else None,
            }
        )

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ChangePasswordSet":
        value = data.get("value")
        return cls(
            enabled=_str(data, "enabled"),
            value=ChangePasswordSetValues.from_api(value) if isinstance(value, Mapping) else None,
        )


@dataclass
class UserAttributes:
    """Attributes of a site user.

    Tri-state flags (``account_enabled``, ``has_home_folder_as_root``, ...)
    take ``yes``, ``no`` or ``inherit``. Empty values are omitted from the
    request body so the server keeps its own value.
    """

    login_name: str
    account_enabled: str = ""
    password: Optional[UserPassword] = None
    personal: Optional[UserPersonal] = None
    home_folder: Optional[UserHomeFolder] = None
    has_home_folder_as_root: str = ""
    agreement_to_terms: str = ""
    consent_to_privacy: str = ""
    is_eu_data_subject: str = ""
    external_authentication: str = ""
    change_password: Optional[ChangePasswordSet] = None

    def to_api(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"loginName": self.login_name}
        payload.update(
            _prune(
                {
                    "accountEnabled": self.account_enabled,
                    "password": self.password.to_api() if self.password else None,
                    "personal": self.personal.to_api() if self.personal else None,
                    "homeFolder": self.home_folder.to_api() if self.home_folder else None,
                    "hasHomeFolderAsRoot": self.has_home_folder_as_root,
                    "agreementToTermsOfService": self.agreement_to_terms,
                    "consentToPrivacyPolicy": self.consent_to_privacy,
                    "isEuDataSubject": self.is_eu_data_subject,
                    "externalAuthentication": self.external_authentication,
                    "changePassword": (
                        self.change_password.to_api() if self.change_password else None
                    ),
                }
            )
        )
        return payload

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "UserAttributes":
        def nested(key: str, kind: Any) -> Any:
            value = data.get(key)
            return kind.from_api(value) if isinstance(value, Mapping) else None

        return cls(
            login_name=_str(data, "loginName"),
            account_enabled=_str(data, "accountEnabled"),
            password=nested("password", UserPassword),
            personal=nested("personal", UserPersonal),
            home_folder=nested("homeFolder", UserHomeFolder),
            has_home_folder_as_root=_str(data, "hasHomeFolderAsRoot"),
            agreement_to_terms=_str(data, "agreementToTermsOfService"),
            consent_to_privacy=_str(data, "consentToPrivacyPolicy"),
            is_eu_data_subject=_str(data, "isEuDataSubject"),
            external_authentication=_str(data, "externalAuthentication"),
            change_password=nested("changePassword", ChangePasswordSet),
        )


@dataclass
class User:
    id: str
    type: str = "user"
    attributes: UserAttributes = field(default_factory=lambda: UserAttributes(login_name=""))

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "User":
        return cls(
            id=_str(data, "id"),
            type=_str(data, "type") or "user",
            attributes=UserAttributes.from_api(_obj(data, "attributes")),
        )


# =============================================================================
# Event rules
# =============================================================================


def _raw_member(data: Mapping[str, Any], key: str) -> Optional[RawJSON]:
    if key not in data or data[key] is None:
        return None
    return dump_json(data[key])


@dataclass
class EventRule:
    """Event rule with opaque attributes and relationships.

    ``attributes`` and ``relationships`` hold canonical JSON text; an
    absent relationships member is ``None``.
    """

    id: str
    type: str = "eventRule"
    attributes: RawJSON = "{}"
    relationships: Optional[RawJSON] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "EventRule":
        return cls(
            id=_str(data, "id"),
            type=_str(data, "type") or "eventRule",
            attributes=_raw_member(data, "attributes") or "",
            relationships=_raw_member(data, "relationships"),
        )


@dataclass
class EventRuleRequestData:
    """Body of an event rule create or update request."""

    attributes: RawJSON
    relationships: Optional[RawJSON] = None
    id: str = ""
    type: str = "eventRule"

    def to_api(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type}
        if self.id:
            data["id"] = self.id
        data["attributes"] = load_json(self.attributes, source="attributes")
        if self.relationships:
            data["relationships"] = load_json(self.relationships, source="relationships")
        return data


def envelope(data: Any) -> Dict[str, Any]:
    """Wrap a ``data`` member in the JSON:API request envelope."""
    return {"data": data}


def unwrap(payload: Any, *, source: str = "response") -> Any:
    """Return the ``data`` member of a decoded response envelope."""
    if not isinstance(payload, Mapping) or "data" not in payload:
        raise PayloadParseError("response is missing the 'data' member", source=source)
    return payload["data"]


__all__ = [
    "RawJSON",
    "ServerGeneral",
    "ListenerSettings",
    "SMTPSettings",
    "ServerAttributes",
    "Server",
    "SiteAttributes",
    "Site",
    "UserPassword",
    "UserPersonal",
    "UserHomeFolderValue",
    "UserHomeFolder",
    "ChangePasswordSetValues",
    "ChangePasswordSet",
    "UserAttributes",
    "User",
    "EventRule",
    "EventRuleRequestData",
    "envelope",
    "unwrap",
]
