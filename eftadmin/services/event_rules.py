"""Event rule service.

Event rule attributes and relationships are opaque JSON documents. This
service moves them between the caller and the API as :data:`RawJSON` text
without interpreting their content.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..core import (
    LogContext,
    get_audit_logger,
    get_logger,
    validate_rule_id,
    validate_site_id,
)
from ..models import EventRule, EventRuleRequestData, envelope, unwrap
from .base import EFTConnection


def event_rules_path(site_id: str, rule_id: Optional[str] = None) -> str:
    path = f"/admin/v2/sites/{site_id}/event-rules"
    if rule_id is not None:
        path += f"/{rule_id}"
    return path


class EventRuleService:
    """Service for event rules of an EFT site."""

    def __init__(self, connection: EFTConnection) -> None:
        """Initialize event rule service.

        Args:
            connection: EFT connection instance.
        """
        self.conn = connection
        self.log = get_logger(__name__)
        self._audit = get_audit_logger()

    def get_event_rule(
        self, site_id: str, rule_id: str, *, deadline: Optional[float] = None
    ) -> EventRule:
        """Fetch one event rule.

        Raises:
            ResourceNotFoundError: If the rule does not exist.
        """
        site_id = validate_site_id(site_id)
        rule_id = validate_rule_id(rule_id)
        payload = self.conn.request("GET", event_rules_path(site_id, rule_id), deadline=deadline)
        return EventRule.from_api(unwrap(payload, source="eventRule"))

    def create_event_rule(
        self,
        site_id: str,
        data: EventRuleRequestData,
        *,
        deadline: Optional[float] = None,
    ) -> EventRule:
        """Create an event rule.

        Args:
            site_id: Site identifier.
            data: Rule type, attributes and optional relationships.

        Returns:
            Created rule including the server-assigned ID.

        Raises:
            PayloadParseError: If ``data`` carries malformed JSON.
        """
        site_id = validate_site_id(site_id)
        body = envelope(data.to_api())

        with LogContext("create_event_rule", self.log, site=site_id) as ctx:
            payload = self.conn.request(
                "POST", event_rules_path(site_id), body=body, deadline=deadline
            )
            rule = EventRule.from_api(unwrap(payload, source="eventRule"))

            self._audit.log_operation(
                "create_event_rule",
                user=self.conn.username,
                site=site_id,
                resource_id=rule.id,
                success=True,
                duration_ms=ctx.elapsed_ms,
            )
            return rule

    def update_event_rule(
        self,
        site_id: str,
        rule_id: str,
        data: EventRuleRequestData,
        *,
        deadline: Optional[float] = None,
    ) -> EventRule:
        """Replace an event rule's attributes and relationships."""
        site_id = validate_site_id(site_id)
        rule_id = validate_rule_id(rule_id)
        if not data.id:
            data = replace(data, id=rule_id)
        body = envelope(data.to_api())

        with LogContext("update_event_rule", self.log, site=site_id, rule_id=rule_id) as ctx:
            payload = self.conn.request(
                "PATCH", event_rules_path(site_id, rule_id), body=body, deadline=deadline
            )
            rule = EventRule.from_api(unwrap(payload, source="eventRule"))

            self._audit.log_operation(
                "update_event_rule",
                user=self.conn.username,
                site=site_id,
                resource_id=rule_id,
                success=True,
                duration_ms=ctx.elapsed_ms,
            )
            return rule

    def delete_event_rule(
        self, site_id: str, rule_id: str, *, deadline: Optional[float] = None
    ) -> None:
        """Delete an event rule."""
        site_id = validate_site_id(site_id)
        rule_id = validate_rule_id(rule_id)

        with LogContext("delete_event_rule", self.log, site=site_id, rule_id=rule_id) as ctx:
            self.conn.request(
                "DELETE",
                event_rules_path(site_id, rule_id),
                expect_body=False,
                deadline=deadline,
            )
            self._audit.log_operation(
                "delete_event_rule",
                user=self.conn.username,
                site=site_id,
                resource_id=rule_id,
                success=True,
                duration_ms=ctx.elapsed_ms,
            )
