from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, TypedDict

from dotenv import load_dotenv

from .core.exceptions import MissingCredentialsError
from .core.validation import validate_timeout


class EFTConfig(TypedDict):
    """Configuration dictionary for an EFT admin API connection.

    Attributes:
        host: Base URL of the EFT admin API (e.g., https://eft.example.com:4450)
        username: Admin username with access to the REST API
        password: Admin password for the REST API
        auth_type: Authentication type accepted by EFT (EFT or AD, default EFT)
        insecure_skip_verify: Skip TLS certificate verification (default False)
        http_timeout: Per-request HTTP timeout in seconds (default 60)
    """

    host: str
    username: str
    password: str
    auth_type: str
    insecure_skip_verify: bool
    http_timeout: int


def _str_to_bool(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    value_norm = value.strip().lower()
    if value_norm in {"1", "true", "yes", "y", "on"}:
        return True
    if value_norm in {"0", "false", "no", "n", "off"}:
        return False
    return default


DEFAULT_AUTH_TYPE = "EFT"
DEFAULT_HTTP_TIMEOUT = 60


def load_config(env_path: Optional[Path] = None, *, require_credentials: bool = True) -> EFTConfig:
    """Load configuration from environment variables, optionally overriding from a .env file.

    Behavior:
        - If env_path is provided, load that .env file with override=True (it overrides OS env).
        - Else, if a .env exists in the current working directory, load it with override=False.
        - Finally, read variables from the environment.

    Required variables:
        EFT_HOST: Base URL of the EFT admin API
        EFT_USERNAME: Admin username
        EFT_PASSWORD: Admin password

    Optional variables:
        EFT_AUTH_TYPE: Authentication type (default: EFT)
        EFT_INSECURE_SKIP_VERIFY: Disable TLS certificate checks (default: false)
        EFT_HTTP_TIMEOUT: Per-request timeout in seconds (default: 60)

    Returns:
        EFTConfig dictionary with all configuration values.

    Raises:
        FileNotFoundError: If explicit env_path is provided but does not exist.
        MissingCredentialsError: If required environment variables are missing.
        InvalidConfigurationError: If EFT_HTTP_TIMEOUT is not a valid timeout.
    """
    if env_path:
        p = Path(env_path).expanduser()
        if not p.exists():
            raise FileNotFoundError(f"Environment file not found: {p}")
        load_dotenv(p, override=True)
    else:
        default_env = Path.cwd() / ".env"
        if default_env.exists():
            load_dotenv(default_env, override=False)

    host = os.getenv("EFT_HOST")
    username = os.getenv("EFT_USERNAME")
    password = os.getenv("EFT_PASSWORD")

    if require_credentials and (not host or not username or not password):
        missing = [
            name
            for name, val in (
                ("EFT_HOST", host),
                ("EFT_USERNAME", username),
                ("EFT_PASSWORD", password),
            )
            if not val
        ]
        raise MissingCredentialsError(missing)

    auth_type = (os.getenv("EFT_AUTH_TYPE") or "").strip() or DEFAULT_AUTH_TYPE
    insecure = _str_to_bool(os.getenv("EFT_INSECURE_SKIP_VERIFY"), default=False)
    http_timeout = validate_timeout(
        os.getenv("EFT_HTTP_TIMEOUT") or None, "EFT_HTTP_TIMEOUT", default=DEFAULT_HTTP_TIMEOUT
    )

    return EFTConfig(
        host=(host or "").strip(),
        username=username or "",
        password=password or "",
        auth_type=auth_type,
        insecure_skip_verify=insecure,
        http_timeout=http_timeout,
    )
