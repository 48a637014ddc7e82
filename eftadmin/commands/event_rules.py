from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict

from ..core import PayloadParseError
from ..core.sanitize import dump_json, load_json, strip_sensitive
from ..models import EventRuleRequestData
from .common import add_common_args, connect, print_json


def _load_rule_file(path: Path) -> EventRuleRequestData:
    """Read ``{"attributes": {...}, "relationships": {...}}`` or a ``{"data": ...}`` envelope."""
    doc = load_json(path.read_text(), source=str(path))
    if isinstance(doc, dict) and isinstance(doc.get("data"), dict):
        doc = doc["data"]
    if not isinstance(doc, dict) or not isinstance(doc.get("attributes"), dict):
        raise PayloadParseError("expected an object with an 'attributes' member", source=str(path))
    relationships = doc.get("relationships")
    return EventRuleRequestData(
        attributes=dump_json(strip_sensitive(doc["attributes"])),
        relationships=dump_json(strip_sensitive(relationships)) if relationships else None,
    )


def register(subparsers: argparse._SubParsersAction) -> None:
    get_rule = subparsers.add_parser("get-event-rule", help="Show an event rule as JSON")
    get_rule.add_argument("site_id", help="Site ID")
    get_rule.add_argument("rule_id", help="Event rule ID")
    add_common_args(get_rule)

    def handle_get_event_rule(args: argparse.Namespace) -> int:
        with connect(args) as client:
            rule = client.get_event_rule(args.site_id, args.rule_id)
        payload: Dict[str, Any] = {
            "id": rule.id,
            "type": rule.type,
            "attributes": strip_sensitive(load_json(rule.attributes or "{}")),
        }
        if rule.relationships:
            payload["relationships"] = strip_sensitive(load_json(rule.relationships))
        print_json(payload)
        return 0

    get_rule.set_defaults(func=handle_get_event_rule)

    apply_rule = subparsers.add_parser(
        "apply-event-rule",
        help="Create an event rule from a JSON file, or update it when --rule-id is given",
    )
    apply_rule.add_argument("site_id", help="Site ID")
    apply_rule.add_argument("file", type=Path, help="JSON file with attributes and relationships")
    apply_rule.add_argument("--rule-id", default=None, help="Existing event rule ID to update")
    add_common_args(apply_rule)

    def handle_apply_event_rule(args: argparse.Namespace) -> int:
        data = _load_rule_file(args.file)
        with connect(args) as client:
            if args.rule_id:
                rule = client.update_event_rule(args.site_id, args.rule_id, data)
                print(f"Updated event rule {rule.id} in site {args.site_id}")
            else:
                rule = client.create_event_rule(args.site_id, data)
                print(f"Created event rule {rule.id} in site {args.site_id}")
        return 0

    apply_rule.set_defaults(func=handle_apply_event_rule)

    delete_rule = subparsers.add_parser("delete-event-rule", help="Delete an event rule")
    delete_rule.add_argument("site_id", help="Site ID")
    delete_rule.add_argument("rule_id", help="Event rule ID")
    delete_rule.add_argument(
        "--confirm",
        action="store_true",
        help="Skip confirmation prompt (required for deletion)",
    )
    add_common_args(delete_rule)

    def handle_delete_event_rule(args: argparse.Namespace) -> int:
        if not args.confirm:
            print(
                f"WARNING: This will permanently delete event rule {args.rule_id} "
                f"from site {args.site_id}."
            )
            print("Re-run with --confirm to proceed.")
            return 1
        with connect(args) as client:
            client.delete_event_rule(args.site_id, args.rule_id)
        print(f"Deleted event rule {args.rule_id} from site {args.site_id}")
        return 0

    delete_rule.set_defaults(func=handle_delete_event_rule)
