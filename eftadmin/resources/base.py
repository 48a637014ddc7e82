"""Common interface for declarative resources and data sources.

Every resource type implements the same lifecycle: ``metadata``,
``schema``, ``configure`` and ``create``/``read``/``update``/``delete``.
Data sources implement ``read`` only. State is a plain dict keyed by
attribute name. The API client is injected through ``configure``; nothing
is inherited from it.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple

from ..core import (
    ConfigurationError,
    InvalidConfigurationError,
    deadline_after,
    get_logger,
    validate_choice,
)

if TYPE_CHECKING:
    from ..client import EFTClient

State = Dict[str, Any]

# Seconds allowed per operation when a resource sets no timeouts
DEFAULT_OPERATION_TIMEOUT = 300


@dataclass(frozen=True)
class Attribute:
    """Declaration of one resource attribute."""

    kind: str = "string"
    description: str = ""
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False
    default: Any = None
    choices: Tuple[str, ...] = ()
    requires_replace: bool = False


Schema = Dict[str, Attribute]


def apply_schema(schema: Schema, values: Mapping[str, Any], *, type_name: str) -> State:
    """Build a full state dict from user-supplied values.

    Defaults are filled in, required attributes and enumerated values are
    checked, and unknown attributes are rejected.

    Raises:
        InvalidConfigurationError: On a missing, unknown or disallowed value.
    """
    unknown = sorted(set(values) - set(schema))
    if unknown:
        raise InvalidConfigurationError(
            unknown[0], values[unknown[0]], f"unknown attribute for {type_name}"
        )

    state: State = {}
    for name, attr in schema.items():
        value = values.get(name)
        if value is None and attr.default is not None:
            value = attr.default
        if value is None and attr.required:
            raise InvalidConfigurationError(name, None, f"{type_name} requires a value")
        if value is not None and attr.choices:
            validate_choice(value, attr.choices, name)
        state[name] = value
    return state


def replacement_attributes(
    schema: Schema, prior: Mapping[str, Any], planned: Mapping[str, Any]
) -> List[str]:
    """Names of changed attributes that force destroy-and-recreate."""
    return [
        name
        for name, attr in schema.items()
        if attr.requires_replace and prior.get(name) != planned.get(name)
    ]


def sensitive_attributes(schema: Schema) -> List[str]:
    return [name for name, attr in schema.items() if attr.sensitive]


class _Configurable:
    type_suffix = ""

    def __init__(self) -> None:
        self.client: Optional["EFTClient"] = None
        self.log = get_logger(type(self).__module__)

    def metadata(self, provider_type_name: str) -> str:
        """Full type name, e.g. ``globalscapeeft_site_user``."""
        return f"{provider_type_name}_{self.type_suffix}"

    def configure(self, client: Optional["EFTClient"]) -> None:
        """Inject the API client; a None client leaves the object unconfigured."""
        if client is None:
            return
        self.client = client

    def _require_client(self) -> "EFTClient":
        if self.client is None:
            raise ConfigurationError(
                "Unconfigured client: the provider client was not initialized",
                operation=self.type_suffix,
            )
        return self.client


class Resource(_Configurable, abc.ABC):
    """A managed remote object with full lifecycle."""

    @abc.abstractmethod
    def schema(self) -> Schema:
        raise NotImplementedError

    def plan(self, config: Mapping[str, Any]) -> State:
        """Validate user configuration and fill defaults."""
        return apply_schema(self.schema(), config, type_name=self.type_suffix)

    @abc.abstractmethod
    def create(self, plan: State) -> State:
        raise NotImplementedError

    @abc.abstractmethod
    def read(self, state: State) -> State:
        raise NotImplementedError

    @abc.abstractmethod
    def update(self, plan: State, state: State) -> State:
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, state: State) -> None:
        raise NotImplementedError

    def operation_deadline(self, state: Mapping[str, Any], operation: str) -> Optional[float]:
        """Deadline for ``operation`` from the ``timeouts`` attribute, if any."""
        timeouts = state.get("timeouts") or {}
        seconds = timeouts.get(operation) if isinstance(timeouts, Mapping) else None
        return deadline_after(seconds if seconds is not None else DEFAULT_OPERATION_TIMEOUT)


class DataSource(_Configurable, abc.ABC):
    """A read-only view of remote data."""

    @abc.abstractmethod
    def schema(self) -> Schema:
        raise NotImplementedError

    @abc.abstractmethod
    def read(self) -> State:
        raise NotImplementedError
