"""Sanitizing and canonicalizing of open-schema JSON payloads.

Event rule attributes and relationships are arbitrary JSON documents whose
shape eftadmin does not model. Before such a document is stored anywhere
durable, credentials embedded in it are removed, and the document is
re-serialized in a canonical form so two renderings of the same value
compare equal as strings.
"""

from __future__ import annotations

import json
import math
from typing import Any, Optional, Union

from .exceptions import PayloadParseError

JSONInput = Union[str, bytes, bytearray]

# Matched against the lowercased key
SENSITIVE_KEYS = frozenset({"password", "passphrase"})


def is_sensitive_key(key: str) -> bool:
    """Return True when ``key`` names a credential field."""
    return key.lower() in SENSITIVE_KEYS


def strip_sensitive(value: Any) -> Any:
    """Return a copy of a decoded JSON tree without sensitive keys.

    Sensitive keys are dropped together with everything nested under them.
    Key order of surviving members is preserved.
    """
    if isinstance(value, dict):
        return {
            key: strip_sensitive(item)
            for key, item in value.items()
            if not is_sensitive_key(key)
        }
    if isinstance(value, list):
        return [strip_sensitive(item) for item in value]
    return value


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON literal {name!r}")


def _parse_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number out of range: {text}")
    return value


def load_json(raw: JSONInput, *, source: Optional[str] = None) -> Any:
    """Parse strict JSON text, raising PayloadParseError on malformed input.

    ``NaN``, ``Infinity`` and numbers that overflow a float are rejected.
    """
    try:
        return json.loads(raw, parse_constant=_reject_constant, parse_float=_parse_float)
    except (ValueError, TypeError) as e:
        raise PayloadParseError(str(e), source=source) from e


def dump_json(value: Any) -> str:
    """Serialize a decoded JSON tree in canonical form.

    Keys are sorted and separators carry no whitespace, so equal values
    always produce identical text.

    Raises:
        PayloadParseError: If ``value`` holds a non-finite float.
    """
    try:
        return json.dumps(
            value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    except ValueError as e:
        raise PayloadParseError(str(e)) from e


def sanitize(raw: Optional[JSONInput], *, source: Optional[str] = None) -> Optional[JSONInput]:
    """Remove sensitive keys from a JSON document at any depth.

    Args:
        raw: JSON text. Empty input is returned unchanged.
        source: Optional label used in error messages.

    Returns:
        Canonical JSON text without ``password``/``passphrase`` keys.

    Raises:
        PayloadParseError: If ``raw`` is not valid JSON.
    """
    if not raw:
        return raw
    return dump_json(strip_sensitive(load_json(raw, source=source)))


def canonicalize(raw: Optional[JSONInput], *, source: Optional[str] = None) -> str:
    """Re-serialize a JSON document into canonical text.

    Empty input maps to an empty string. Parsing the result yields a value
    equal to parsing ``raw``.

    Raises:
        PayloadParseError: If ``raw`` is not valid JSON.
    """
    if not raw:
        return ""
    return dump_json(load_json(raw, source=source))


def sanitize_and_canonicalize(raw: Optional[JSONInput], *, source: Optional[str] = None) -> str:
    """Sanitize then canonicalize in one pass; empty input maps to ``""``."""
    if not raw:
        return ""
    return dump_json(strip_sensitive(load_json(raw, source=source)))


__all__ = [
    "JSONInput",
    "SENSITIVE_KEYS",
    "canonicalize",
    "dump_json",
    "is_sensitive_key",
    "load_json",
    "sanitize",
    "sanitize_and_canonicalize",
    "strip_sensitive",
]
