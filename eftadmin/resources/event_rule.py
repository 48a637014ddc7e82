"""Event rule resource.

Attributes and relationships are supplied as JSON strings. Credentials
inside them are stripped before the request is sent and again before the
server's answer is written to state, and the stored text is canonical so
that a re-read of an unchanged rule produces an identical state.
"""

from __future__ import annotations

from typing import Any, Optional

from ..core import (
    InvalidConfigurationError,
    LogContext,
    parse_import_id,
    sanitize,
    sanitize_and_canonicalize,
)
from ..models import EventRule, EventRuleRequestData
from .base import Attribute, Resource, Schema, State

EVENT_RULE_TYPE = "eventRule"


def parse_json(value: Any, field_name: str) -> str:
    """Sanitize a required JSON string attribute."""
    if value is None or value == "":
        raise InvalidConfigurationError(field_name, value, "Value must be provided")
    return sanitize(value, source=field_name)  # type: ignore[return-value]


def parse_optional_json(value: Any, field_name: str) -> Optional[str]:
    """Sanitize an optional JSON string attribute; empty maps to None."""
    if value is None or value == "":
        return None
    return sanitize(value, source=field_name)  # type: ignore[return-value]


class EventRuleResource(Resource):
    """Manages EFT event rules via the REST API."""

    type_suffix = "event_rule"

    def schema(self) -> Schema:
        return {
            "id": Attribute(computed=True, description="Event rule identifier assigned by EFT."),
            "site_id": Attribute(
                required=True,
                requires_replace=True,
                description="Site identifier that owns the event rule.",
            ),
            "attributes_json": Attribute(
                required=True,
                description="JSON body for the event rule attributes block.",
            ),
            "relationships_json": Attribute(
                optional=True,
                description="Optional JSON body for the event rule relationships block.",
            ),
            "timeouts": Attribute(
                kind="object",
                optional=True,
                description="Per-operation timeouts in seconds (create, read, update, delete).",
            ),
        }

    def _request_data(self, plan: State, rule_id: str = "") -> EventRuleRequestData:
        return EventRuleRequestData(
            type=EVENT_RULE_TYPE,
            id=rule_id,
            attributes=parse_json(plan.get("attributes_json"), "attributes_json"),
            relationships=parse_optional_json(
                plan.get("relationships_json"), "relationships_json"
            ),
        )

    @staticmethod
    def _state_from_rule(rule: EventRule, model: State) -> State:
        state = dict(model)
        state["id"] = rule.id
        state["attributes_json"] = sanitize_and_canonicalize(
            rule.attributes, source="event rule attributes"
        )
        if rule.relationships:
            state["relationships_json"] = sanitize_and_canonicalize(
                rule.relationships, source="event rule relationships"
            )
        else:
            state["relationships_json"] = None
        return state

    def create(self, plan: State) -> State:
        client = self._require_client()
        deadline = self.operation_deadline(plan, "create")
        data = self._request_data(plan)

        with LogContext("event_rule.create", self.log, site=plan["site_id"]):
            rule = client.create_event_rule(plan["site_id"], data, deadline=deadline)
            return self._state_from_rule(rule, plan)

    def read(self, state: State) -> State:
        client = self._require_client()
        deadline = self.operation_deadline(state, "read")
        rule = client.get_event_rule(state["site_id"], state["id"], deadline=deadline)
        return self._state_from_rule(rule, state)

    def update(self, plan: State, state: State) -> State:
        client = self._require_client()
        deadline = self.operation_deadline(plan, "update")
        rule_id = state["id"]
        data = self._request_data(plan, rule_id)

        with LogContext("event_rule.update", self.log, site=plan["site_id"], rule_id=rule_id):
            rule = client.update_event_rule(plan["site_id"], rule_id, data, deadline=deadline)
            return self._state_from_rule(rule, {**plan, "id": rule_id})

    def delete(self, state: State) -> None:
        client = self._require_client()
        deadline = self.operation_deadline(state, "delete")
        client.delete_event_rule(state["site_id"], state["id"], deadline=deadline)

    def import_state(self, import_id: str) -> State:
        """Seed state from ``<site_id>/<rule_id>``; a following read fills the rest."""
        site_id, rule_id = parse_import_id(import_id, "rule_id")
        return {"site_id": site_id, "id": rule_id}
