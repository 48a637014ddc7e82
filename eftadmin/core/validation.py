"""Input validation module for eftadmin.

Validation for connection settings, remote identifiers, enumerated
attribute values and import identifiers. All validation functions raise
specific exceptions from eftadmin.core.exceptions before any network call
is made.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple, Union
from urllib.parse import urlparse

from .exceptions import (
    InvalidConfigurationError,
    InvalidIdentifierError,
    InvalidImportIdError,
    InvalidURLError,
)

# =============================================================================
# Constants
# =============================================================================

ALLOWED_URL_SCHEMES = {"http", "https"}

IDENTIFIER_MAX_LENGTH = 256

IMPORT_ID_SEPARATOR = "/"

# Tri-state flags used throughout the EFT user model
YES_NO_INHERIT = ("inherit", "yes", "no")


# =============================================================================
# URL Validation
# =============================================================================


def validate_server_url(url: str) -> str:
    """Validate the EFT admin API base URL and return its normalized form.

    Args:
        url: Base URL, e.g. https://eft.example.com:4450.

    Returns:
        Normalized URL (surrounding whitespace and trailing slash removed).

    Raises:
        InvalidURLError: If URL is malformed or uses unsupported scheme.
    """
    if not url or not isinstance(url, str):
        raise InvalidURLError(str(url), "URL cannot be empty")

    url = url.strip()
    if not url:
        raise InvalidURLError(url, "URL cannot be empty")

    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidURLError(url, f"Failed to parse URL: {e}") from e

    if not parsed.scheme:
        raise InvalidURLError(url, "URL must include scheme (http:// or https://)")

    if parsed.scheme.lower() not in ALLOWED_URL_SCHEMES:
        raise InvalidURLError(
            url,
            f"Host must use http:// or https:// scheme. Got: {parsed.scheme}",
        )

    if not parsed.netloc:
        raise InvalidURLError(url, "URL must include hostname")

    return url.rstrip("/")


# =============================================================================
# Identifier Validation
# =============================================================================


def validate_identifier(
    value: str,
    identifier_type: str = "identifier",
    *,
    max_length: int = IDENTIFIER_MAX_LENGTH,
) -> str:
    """Validate a remote identifier that is interpolated into an API path.

    EFT identifiers are opaque (usually GUIDs), so only the properties that
    would break path construction are checked.

    Args:
        value: Identifier value to validate.
        identifier_type: Type name for error messages (e.g., "site_id").
        max_length: Maximum allowed length.

    Returns:
        Stripped identifier.

    Raises:
        InvalidIdentifierError: If identifier is invalid.
    """
    if not isinstance(value, str):
        raise InvalidIdentifierError(identifier_type, str(value), "must be a string")

    value = value.strip()
    if not value:
        raise InvalidIdentifierError(identifier_type, value, "cannot be empty")

    if len(value) > max_length:
        raise InvalidIdentifierError(
            identifier_type,
            value,
            f"exceeds maximum length of {max_length} characters",
        )

    if "/" in value or "?" in value or "#" in value:
        raise InvalidIdentifierError(
            identifier_type, value, "must not contain '/', '?' or '#'"
        )

    return value


def validate_site_id(site_id: str) -> str:
    return validate_identifier(site_id, "site_id")


def validate_user_id(user_id: str) -> str:
    return validate_identifier(user_id, "user_id")


def validate_rule_id(rule_id: str) -> str:
    return validate_identifier(rule_id, "rule_id")


def parse_import_id(import_id: str, resource_label: str = "resource_id") -> Tuple[str, str]:
    """Split an import identifier of the form ``<site_id>/<resource_id>``.

    Args:
        import_id: Identifier given by the operator.
        resource_label: Name of the second component, used in the error text.

    Returns:
        Tuple of (site_id, resource_id).

    Raises:
        InvalidImportIdError: If the identifier does not have exactly two
            non-empty components.
    """
    if not isinstance(import_id, str):
        raise InvalidImportIdError(str(import_id), resource_label)

    parts = import_id.split(IMPORT_ID_SEPARATOR)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidImportIdError(import_id, resource_label)

    return parts[0], parts[1]


# =============================================================================
# Value Validation
# =============================================================================


def validate_choice(
    value: Optional[str],
    choices: Iterable[str],
    field_name: str,
    *,
    allow_none: bool = True,
) -> Optional[str]:
    """Validate that ``value`` is one of ``choices``.

    Raises:
        InvalidConfigurationError: If the value is not allowed.
    """
    allowed = tuple(choices)
    if value is None:
        if allow_none:
            return None
        raise InvalidConfigurationError(field_name, value, "value is required")

    if value not in allowed:
        raise InvalidConfigurationError(
            field_name,
            value,
            f"must be one of: {', '.join(allowed)}",
        )
    return value


def validate_timeout(
    value: Union[int, float, str, None],
    field_name: str,
    *,
    min_value: int = 1,
    max_value: int = 3600,
    default: int = 60,
) -> int:
    """Validate timeout value in seconds.

    Args:
        value: Timeout value to validate.
        field_name: Field name for error messages.
        min_value: Minimum allowed value.
        max_value: Maximum allowed value.
        default: Default value if None.

    Returns:
        Validated timeout in seconds.

    Raises:
        InvalidConfigurationError: If timeout is invalid.
    """
    if value is None:
        return default

    try:
        timeout = int(value)
    except (ValueError, TypeError) as e:
        raise InvalidConfigurationError(
            field_name,
            value,
            "must be a valid integer",
        ) from e

    if timeout < min_value:
        raise InvalidConfigurationError(
            field_name,
            timeout,
            f"must be at least {min_value} seconds",
        )

    if timeout > max_value:
        raise InvalidConfigurationError(
            field_name,
            timeout,
            f"cannot exceed {max_value} seconds",
        )

    return timeout
