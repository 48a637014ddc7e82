"""eftadmin - client library and CLI for the Globalscape EFT admin REST API.

This package authenticates against an EFT server, keeps the session token
fresh, and exposes typed operations for the server object, sites, site
users and event rules. Event rule payloads stay opaque JSON; credentials
are stripped from them before they are sent or stored.

Architecture:
    eftadmin/
    ├── core/           # Foundation modules (exceptions, logging, validation, payloads)
    ├── services/       # Connection and per-area services (EFTConnection, SiteUserService, ...)
    ├── resources/      # Declarative resources and data sources over EFTClient
    ├── commands/       # CLI command parsers and handlers
    ├── models.py       # Typed API objects and envelope helpers
    ├── client.py       # Facade (EFTClient)
    └── config.py       # Configuration loading
"""

__version__ = "0.1.0"
__description__ = "Client library and CLI for the Globalscape EFT admin REST API"

from .client import EFTClient
from .config import EFTConfig, load_config
from .core import (
    AuthenticationError,
    ConfigurationError,
    ConnectionError,
    EFTError,
    LogContext,
    NetworkError,
    OperationCancelledError,
    PayloadParseError,
    RequestError,
    ResourceNotFoundError,
    ValidationError,
    canonicalize,
    get_audit_logger,
    get_logger,
    parse_import_id,
    sanitize,
    setup_logging,
    validate_server_url,
)
from .services import (
    AuthState,
    EFTConnection,
    EventRuleService,
    ServerService,
    SiteService,
    SiteUserService,
)

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "EFTConfig",
    "load_config",
    # Client
    "EFTClient",
    # Services
    "AuthState",
    "EFTConnection",
    "ServerService",
    "SiteService",
    "SiteUserService",
    "EventRuleService",
    # Exceptions
    "EFTError",
    "ValidationError",
    "ConfigurationError",
    "ConnectionError",
    "AuthenticationError",
    "RequestError",
    "ResourceNotFoundError",
    "PayloadParseError",
    "NetworkError",
    "OperationCancelledError",
    # Payloads
    "sanitize",
    "canonicalize",
    # Logging
    "setup_logging",
    "get_logger",
    "LogContext",
    "get_audit_logger",
    # Validation
    "validate_server_url",
    "parse_import_id",
]
