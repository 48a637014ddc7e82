"""Structured logging configuration for eftadmin.

This module provides logging with:
- Correlation IDs scoped to each top-level LogContext; nested contexts
  and the HTTP calls made inside them share the outer ID
- Structured JSON output option for log aggregation
- Context managers for operation tracking
- Audit logging for configuration changes pushed to EFT

Usage:
    from eftadmin.core import setup_logging, get_logger, LogContext

    setup_logging(level="INFO", json_output=True)

    log = get_logger(__name__)

    with LogContext("create_event_rule", log, site="site42") as ctx:
        log.info("Sending rule")
        ctx.add_detail("rule_id", "rule7")
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, Union

_correlation_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id", default=None
)

_operation_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "operation_context", default={}
)

ROOT_LOGGER_NAME = "eftadmin"
AUDIT_LOGGER_NAME = "eftadmin.audit"


# =============================================================================
# Correlation ID Management
# =============================================================================


def get_correlation_id() -> str:
    """Get current correlation ID or generate a new one."""
    cid = _correlation_id.get()
    if cid is None:
        cid = generate_correlation_id()
        _correlation_id.set(cid)
    return cid


def set_correlation_id(cid: str) -> None:
    """Set correlation ID for current context."""
    _correlation_id.set(cid)


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())[:8]


def clear_correlation_id() -> None:
    """Clear correlation ID from current context."""
    _correlation_id.set(None)


class ContextFilter(logging.Filter):
    """Filter that adds context information to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _correlation_id.get() or "-"  # type: ignore[attr-defined]
        record.operation_context = _operation_context.get()  # type: ignore[attr-defined]
        return True


# =============================================================================
# Formatters
# =============================================================================


class StandardFormatter(logging.Formatter):
    """Human-readable formatter with correlation ID."""

    def __init__(self) -> None:
        fmt = "%(asctime)s %(levelname)-8s [%(correlation_id)s] %(name)s: %(message)s"
        super().__init__(fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"  # type: ignore[attr-defined]
        return super().format(record)


_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "message",
        "correlation_id",
        "operation_context",
        "taskName",
    }
)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", None),
        }

        op_ctx = getattr(record, "operation_context", {})
        if op_ctx:
            log_data["context"] = op_ctx

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}
        if extra:
            log_data["extra"] = sanitize_for_log(extra)

        return json.dumps(log_data, default=str)


# =============================================================================
# Audit Logger
# =============================================================================


class AuditLogger:
    """Audit trail of changes pushed to the EFT server.

    Records carry the operation, the acting admin, the site and remote
    identifiers touched, and the outcome. Credentials are never recorded;
    ``details`` passes through :func:`sanitize_for_log` first.
    """

    def __init__(self, logger_name: str = AUDIT_LOGGER_NAME) -> None:
        self.logger = logging.getLogger(logger_name)

    def log_operation(
        self,
        operation: str,
        *,
        user: Optional[str] = None,
        site: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        success: bool = True,
        error: Optional[str] = None,
        duration_ms: Optional[float] = None,
    ) -> None:
        """Log an auditable operation."""
        audit_record: dict[str, Any] = {
            "audit": True,
            "operation": operation,
            "success": success,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "correlation_id": _correlation_id.get(),
        }

        if user:
            audit_record["user"] = user
        if site:
            audit_record["site"] = site
        if resource_id:
            audit_record["resource_id"] = resource_id
        if details:
            audit_record["details"] = sanitize_for_log(details)
        if error:
            audit_record["error"] = error
        if duration_ms is not None:
            audit_record["duration_ms"] = round(duration_ms, 2)

        level = logging.INFO if success else logging.WARNING
        self.logger.log(level, json.dumps(audit_record, default=str))


_audit_logger: Optional[AuditLogger] = None


def get_audit_logger() -> AuditLogger:
    """Get the shared audit logger instance."""
    global _audit_logger
    if _audit_logger is None:
        _audit_logger = AuditLogger()
    return _audit_logger


# =============================================================================
# Context Manager for Operations
# =============================================================================


class LogContext:
    """Context manager for logging operation context.

    Automatically:
    - Starts a fresh correlation ID at top level, inherits it when nested
    - Tracks operation duration
    - Logs start/end of operations
    - Logs failures with traceback and re-raises

    Usage:
        with LogContext("update_site_user", log, site=site_id) as ctx:
            ctx.add_detail("user_id", user_id)
    """

    def __init__(
        self,
        operation: str,
        logger: Optional[logging.Logger] = None,
        *,
        correlation_id: Optional[str] = None,
        log_entry_exit: bool = True,
        **context: Any,
    ) -> None:
        self.operation = operation
        self.logger = logger or logging.getLogger(ROOT_LOGGER_NAME)
        self.log_entry_exit = log_entry_exit
        self.context = {"operation": operation, **context}
        self.start_time: Optional[float] = None
        self.correlation_id = (
            correlation_id or _correlation_id.get() or generate_correlation_id()
        )
        self._token: Optional[contextvars.Token[dict[str, Any]]] = None
        self._cid_token: Optional[contextvars.Token[Optional[str]]] = None

    @property
    def elapsed_ms(self) -> float:
        return (time.monotonic() - (self.start_time or time.monotonic())) * 1000

    def __enter__(self) -> "LogContext":
        self.start_time = time.monotonic()
        self._token = _operation_context.set(self.context)
        self._cid_token = _correlation_id.set(self.correlation_id)

        if self.log_entry_exit:
            self.logger.debug("Starting %s", self.operation, extra={"ctx": self.context})

        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Any,
    ) -> bool:
        duration_ms = self.elapsed_ms

        if exc_val is not None:
            self.logger.error(
                "%s failed after %.1fms: %s",
                self.operation,
                duration_ms,
                exc_val,
                extra={"ctx": self.context, "duration_ms": duration_ms, "success": False},
            )
        elif self.log_entry_exit:
            self.logger.info(
                "Completed %s in %.1fms",
                self.operation,
                duration_ms,
                extra={"ctx": self.context, "duration_ms": duration_ms, "success": True},
            )

        if self._token is not None:
            _operation_context.reset(self._token)
        if self._cid_token is not None:
            _correlation_id.reset(self._cid_token)

        return False

    def add_detail(self, key: str, value: Any) -> None:
        """Add a detail to the operation context."""
        self.context[key] = value


# =============================================================================
# Setup Functions
# =============================================================================


def setup_logging(
    level: Union[int, str] = logging.INFO,
    *,
    json_output: bool = False,
    log_file: Optional[str] = None,
    audit_file: Optional[str] = None,
) -> None:
    """Configure logging for the eftadmin package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        json_output: If True, use JSON formatter for structured output.
        log_file: Optional path to write logs to file.
        audit_file: Optional separate file for audit logs.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    context_filter = ContextFilter()

    formatter: logging.Formatter
    if json_output:
        formatter = JSONFormatter()
    else:
        formatter = StandardFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(context_filter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        root_logger.addHandler(file_handler)

    audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)
    audit_logger.setLevel(logging.INFO)
    audit_logger.handlers.clear()

    if audit_file:
        audit_handler = logging.FileHandler(audit_file)
        audit_handler.setFormatter(JSONFormatter())
        audit_handler.addFilter(context_filter)
        audit_logger.addHandler(audit_handler)
    else:
        audit_logger.addHandler(console_handler)

    root_logger.propagate = False
    audit_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the eftadmin namespace.

    Args:
        name: Logger name (usually __name__).

    Returns:
        Logger instance with eftadmin prefix if not already present.
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


# =============================================================================
# Convenience Functions
# =============================================================================


def mask_sensitive(value: str, visible_chars: int = 4) -> str:
    """Mask sensitive values for logging.

    Args:
        value: Value to mask.
        visible_chars: Number of characters to show at end.

    Returns:
        Masked string like "****abcd".
    """
    if not value or len(value) <= visible_chars:
        return "****"
    return "*" * (len(value) - visible_chars) + value[-visible_chars:]


DEFAULT_LOG_SENSITIVE_KEYS = frozenset(
    {"password", "passphrase", "token", "secret", "authorization", "credential"}
)


def sanitize_for_log(
    data: dict[str, Any], sensitive_keys: Optional[frozenset[str]] = None
) -> dict[str, Any]:
    """Return a copy of ``data`` with sensitive values masked for logging.

    Unlike :func:`eftadmin.core.sanitize.strip_sensitive`, keys are kept and
    matched by substring so that ``authToken`` or ``smtpPassword`` are masked
    too.
    """
    if sensitive_keys is None:
        sensitive_keys = DEFAULT_LOG_SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        if any(s in str(key).lower() for s in sensitive_keys):
            result[key] = mask_sensitive(str(value)) if value else None
        elif isinstance(value, dict):
            result[key] = sanitize_for_log(value, sensitive_keys)
        else:
            result[key] = value
    return result
