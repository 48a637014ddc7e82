"""Custom exception hierarchy for eftadmin.

This module provides a structured exception hierarchy for EFT admin API
operations, enabling precise error handling and meaningful error messages
for operators.
"""

from __future__ import annotations

from typing import Any, Optional


class EFTError(Exception):
    """Base exception for all eftadmin errors.

    All eftadmin-specific exceptions inherit from this class, allowing
    callers to catch all eftadmin errors with a single except clause.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        operation: The operation that was being performed when the error occurred.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        operation: Optional[str] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        self.operation = operation
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.operation:
            parts.insert(0, f"[{self.operation}]")
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({detail_str})")
        return " ".join(parts)


# =============================================================================
# Validation and Configuration Errors
# =============================================================================


class ValidationError(EFTError):
    """Caller-supplied input failed validation before any network call."""

    pass


class ConfigurationError(ValidationError):
    """Error in configuration or environment setup."""

    pass


class MissingCredentialsError(ConfigurationError):
    """Required connection settings are missing."""

    def __init__(self, missing_vars: list[str]) -> None:
        self.missing_vars = missing_vars
        super().__init__(
            f"Missing required configuration: {', '.join(missing_vars)}",
            details={"missing": missing_vars},
            operation="configuration",
        )


class InvalidConfigurationError(ConfigurationError):
    """Configuration value is invalid."""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid configuration for '{field}': {reason}",
            details={"field": field, "value": str(value)[:100]},
            operation="configuration",
        )


class InvalidURLError(ValidationError):
    """URL format is invalid."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(
            f"Invalid URL '{url}': {reason}",
            details={"url": url[:200]},
            operation="validation",
        )


class InvalidIdentifierError(ValidationError):
    """Site, user, or event rule identifier is invalid."""

    def __init__(self, identifier_type: str, value: str, reason: str) -> None:
        self.identifier_type = identifier_type
        self.value = value
        super().__init__(
            f"Invalid {identifier_type}: '{value}' - {reason}",
            details={"type": identifier_type, "value": value},
            operation="validation",
        )


class InvalidImportIdError(ValidationError):
    """Import identifier is not of the form <site_id>/<resource_id>."""

    def __init__(self, import_id: str, resource_label: str = "resource_id") -> None:
        self.import_id = import_id
        super().__init__(
            f"Invalid import identifier '{import_id}': "
            f"expected identifier in the form <site_id>/<{resource_label}>",
            details={"import_id": import_id},
            operation="import",
        )


# =============================================================================
# Connection Errors
# =============================================================================


class ConnectionError(EFTError):
    """Error establishing or maintaining an admin session with EFT."""

    pass


class AuthenticationError(ConnectionError):
    """Authentication failed."""

    def __init__(self, server: str, reason: str = "Invalid credentials") -> None:
        self.server = server
        self.reason = reason
        super().__init__(
            f"Authentication failed: {reason}",
            details={"server": server},
            operation="authentication",
        )


class ServerUnreachableError(ConnectionError):
    """Cannot connect to the EFT admin API."""

    def __init__(self, server: str, cause: Optional[Exception] = None) -> None:
        self.server = server
        self.cause = cause
        msg = f"Cannot reach EFT server at {server}"
        if cause:
            msg += f": {cause}"
        super().__init__(msg, details={"server": server}, operation="connection")


class SessionExpiredError(ConnectionError):
    """Session is in the failed state and must be rebuilt."""

    def __init__(self, server: str) -> None:
        self.server = server
        super().__init__(
            "Session authentication failed earlier; create a new connection",
            details={"server": server},
            operation="session",
        )


# =============================================================================
# Request Errors
# =============================================================================


class RequestError(EFTError):
    """The admin API answered a request with an error status."""

    def __init__(self, method: str, path: str, status_code: int, body: str) -> None:
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"EFT API {method} {path} failed: {body}",
            details={"status": status_code},
            operation="request",
        )


class ResourceNotFoundError(RequestError):
    """Requested remote object does not exist (HTTP 404)."""

    pass


class PayloadParseError(EFTError):
    """JSON payload could not be parsed or decoded."""

    def __init__(self, reason: str, *, source: Optional[str] = None) -> None:
        self.reason = reason
        self.source = source
        super().__init__(
            f"Malformed JSON: {reason}",
            details={"source": source} if source else None,
            operation="parse",
        )


# =============================================================================
# Network Errors
# =============================================================================


class NetworkError(EFTError):
    """Network-related error during an EFT operation."""

    pass


class RequestTimeoutError(NetworkError):
    """HTTP call timed out."""

    def __init__(self, operation: str, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Operation timed out after {timeout_seconds}s",
            details={"timeout_seconds": timeout_seconds},
            operation=operation,
        )


class OperationCancelledError(NetworkError):
    """Caller deadline expired before the call could be issued."""

    def __init__(self, operation: str) -> None:
        super().__init__("Deadline exceeded before request was sent", operation=operation)
