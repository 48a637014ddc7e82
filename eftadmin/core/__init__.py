"""Foundation modules: exceptions, logging, validation, payload sanitizing."""

from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConnectionError,
    EFTError,
    InvalidConfigurationError,
    InvalidIdentifierError,
    InvalidImportIdError,
    InvalidURLError,
    MissingCredentialsError,
    NetworkError,
    OperationCancelledError,
    PayloadParseError,
    RequestError,
    RequestTimeoutError,
    ResourceNotFoundError,
    ServerUnreachableError,
    SessionExpiredError,
    ValidationError,
)
from .logging import (
    AuditLogger,
    JSONFormatter,
    LogContext,
    StandardFormatter,
    clear_correlation_id,
    generate_correlation_id,
    get_audit_logger,
    get_correlation_id,
    get_logger,
    mask_sensitive,
    sanitize_for_log,
    set_correlation_id,
    setup_logging,
)
from .sanitize import (
    SENSITIVE_KEYS,
    JSONInput,
    canonicalize,
    is_sensitive_key,
    sanitize,
    sanitize_and_canonicalize,
    strip_sensitive,
)
from .utils import deadline_after, remaining_seconds, trim_body
from .validation import (
    YES_NO_INHERIT,
    parse_import_id,
    validate_choice,
    validate_identifier,
    validate_rule_id,
    validate_server_url,
    validate_site_id,
    validate_timeout,
    validate_user_id,
)

__all__ = [
    # Exceptions
    "EFTError",
    "ValidationError",
    "ConfigurationError",
    "MissingCredentialsError",
    "InvalidConfigurationError",
    "InvalidURLError",
    "InvalidIdentifierError",
    "InvalidImportIdError",
    "ConnectionError",
    "AuthenticationError",
    "ServerUnreachableError",
    "SessionExpiredError",
    "RequestError",
    "ResourceNotFoundError",
    "PayloadParseError",
    "NetworkError",
    "RequestTimeoutError",
    "OperationCancelledError",
    # Logging
    "AuditLogger",
    "JSONFormatter",
    "LogContext",
    "StandardFormatter",
    "clear_correlation_id",
    "generate_correlation_id",
    "get_audit_logger",
    "get_correlation_id",
    "get_logger",
    "mask_sensitive",
    "sanitize_for_log",
    "set_correlation_id",
    "setup_logging",
    # Payloads
    "JSONInput",
    "SENSITIVE_KEYS",
    "canonicalize",
    "is_sensitive_key",
    "sanitize",
    "sanitize_and_canonicalize",
    "strip_sensitive",
    # Utilities
    "deadline_after",
    "remaining_seconds",
    "trim_body",
    # Validation
    "YES_NO_INHERIT",
    "parse_import_id",
    "validate_choice",
    "validate_identifier",
    "validate_rule_id",
    "validate_server_url",
    "validate_site_id",
    "validate_timeout",
    "validate_user_id",
]
