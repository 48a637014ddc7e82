"""Base EFT connection with session management and HTTP utilities.

This module provides the foundational EFTConnection class that handles:
- Authentication against the EFT admin API and token storage
- Authenticated JSON requests with a single re-authentication on HTTP 401
- Per-call timeouts and caller deadlines
- Translation of transport and API failures into eftadmin exceptions
"""

from __future__ import annotations

import enum
import json
import logging
import threading
from typing import Any, Optional

import requests

from ..config import DEFAULT_AUTH_TYPE, DEFAULT_HTTP_TIMEOUT, EFTConfig
from ..core import (
    AuthenticationError,
    EFTError,
    NetworkError,
    OperationCancelledError,
    PayloadParseError,
    RequestError,
    RequestTimeoutError,
    ResourceNotFoundError,
    ServerUnreachableError,
    SessionExpiredError,
    get_logger,
    mask_sensitive,
    remaining_seconds,
    trim_body,
    validate_server_url,
    validate_timeout,
)

AUTH_PATH = "/admin/v1/authentication"
AUTH_HEADER_SCHEME = "EFTAdminAuthToken"
JSON_CONTENT_TYPE = "application/json"


class AuthState(enum.Enum):
    """Token lifecycle of an EFTConnection."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


class EFTConnection:
    """Authenticated session against the EFT admin REST API.

    Construction authenticates immediately, so a live instance always holds
    a token. Every authenticated request that comes back 401 triggers one
    re-authentication with the stored credentials and one re-issue of the
    request; a second 401 is reported as a RequestError. A failed
    authentication moves the connection to ``AuthState.FAILED`` and every
    later request raises SessionExpiredError without touching the network.

    Token reads and refreshes are guarded by a lock so one instance can be
    shared between threads.

    Usage:
        conn = EFTConnection.from_config(cfg)
        payload = conn.request("GET", "/admin/v2/sites")
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        *,
        auth_type: str = DEFAULT_AUTH_TYPE,
        insecure_skip_verify: bool = False,
        timeout: int = DEFAULT_HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Initialize and authenticate an EFT connection.

        Args:
            base_url: EFT admin API base URL (e.g., https://eft.example.com:4450).
            username: Admin username.
            password: Admin password.
            auth_type: Authentication type forwarded to EFT (EFT or AD).
            insecure_skip_verify: Disable TLS certificate verification.
            timeout: Per-request timeout in seconds.
            session: Optional pre-built requests session (used by tests).
            logger: Optional logger instance.

        Raises:
            InvalidURLError: If base_url is invalid.
            AuthenticationError: If the initial authentication fails.
        """
        self.base_url = validate_server_url(base_url)
        self.username = username
        self._password = password  # Prefixed to discourage direct access
        self.auth_type = auth_type or DEFAULT_AUTH_TYPE
        self.insecure_skip_verify = insecure_skip_verify
        self.timeout = validate_timeout(timeout, "timeout", default=DEFAULT_HTTP_TIMEOUT)
        self.log = logger or get_logger(__name__)

        self.session = session if session is not None else requests.Session()
        self.session.verify = not insecure_skip_verify
        if insecure_skip_verify:
            self.log.warning(
                "TLS certificate verification is disabled for %s", self.base_url
            )

        self._lock = threading.RLock()
        self._token: Optional[str] = None
        self._state = AuthState.UNAUTHENTICATED

        self.authenticate()

    @classmethod
    def from_config(
        cls, cfg: EFTConfig, *, session: Optional[requests.Session] = None
    ) -> "EFTConnection":
        """Create connection from configuration dictionary.

        Args:
            cfg: Configuration dictionary from load_config().
            session: Optional pre-built requests session.

        Returns:
            Authenticated EFTConnection instance.
        """
        return cls(
            base_url=cfg["host"],
            username=cfg["username"],
            password=cfg["password"],
            auth_type=cfg.get("auth_type") or DEFAULT_AUTH_TYPE,
            insecure_skip_verify=cfg.get("insecure_skip_verify", False),
            timeout=cfg.get("http_timeout", DEFAULT_HTTP_TIMEOUT),
            session=session,
        )

    # =========================================================================
    # Authentication
    # =========================================================================

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._token

    def authenticate(self, *, deadline: Optional[float] = None) -> None:
        """Obtain a fresh auth token using the stored credentials.

        Raises:
            AuthenticationError: On transport failure, an error status, or a
                response without ``authToken``. The connection is then FAILED.
            OperationCancelledError: If ``deadline`` passes before the login
                request is sent. Token and state are left unchanged.
        """
        body = {
            "userName": self.username,
            "password": self._password,
            "authType": self.auth_type,
        }
        with self._lock:
            try:
                payload = self._execute(
                    "POST", AUTH_PATH, body=body, requires_auth=False, deadline=deadline
                )
                token = payload.get("authToken") if isinstance(payload, dict) else None
                if not token or not isinstance(token, str):
                    raise PayloadParseError(
                        "authentication response has no authToken", source=AUTH_PATH
                    )
            except OperationCancelledError:
                raise
            except EFTError as e:
                self._state = AuthState.FAILED
                self._token = None
                self.log.error("Authentication to %s failed: %s", self.base_url, e)
                raise AuthenticationError(self.base_url, str(e)) from e

            self._token = token
            self._state = AuthState.AUTHENTICATED
            self.log.debug(
                "Authenticated to %s as %s (token %s)",
                self.base_url,
                self.username,
                mask_sensitive(token),
            )

    def _refresh_token(self, stale_token: Optional[str], deadline: Optional[float]) -> str:
        """Replace ``stale_token`` unless another caller already did."""
        with self._lock:
            if self._state is AuthState.FAILED:
                raise SessionExpiredError(self.base_url)
            if (
                self._state is AuthState.AUTHENTICATED
                and self._token is not None
                and self._token != stale_token
            ):
                return self._token
            self.authenticate(deadline=deadline)
            return self._token  # type: ignore[return-value]

    def _current_token(self) -> str:
        with self._lock:
            if self._state is not AuthState.AUTHENTICATED or self._token is None:
                raise SessionExpiredError(self.base_url)
            return self._token

    # =========================================================================
    # HTTP
    # =========================================================================

    def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        requires_auth: bool = True,
        expect_body: bool = True,
        deadline: Optional[float] = None,
    ) -> Any:
        """Perform a JSON request against the admin API.

        Args:
            method: HTTP method.
            path: API path relative to the base URL (e.g., /admin/v2/sites).
            body: Optional JSON-serializable request body.
            requires_auth: Attach the auth token and re-authenticate once on 401.
            expect_body: Decode the response body as JSON. When False the
                body is discarded and None is returned.
            deadline: Optional ``time.monotonic()`` instant after which no
                further HTTP attempt is started.

        Returns:
            Decoded JSON response, or None when ``expect_body`` is False.

        Raises:
            SessionExpiredError: If the connection is in the FAILED state.
            AuthenticationError: If the re-authentication after a 401 fails.
            RequestError: If the API answers with status >= 400.
            PayloadParseError: If the response body is not valid JSON.
            NetworkError: On transport failures, timeouts or an expired deadline.
        """
        return self._execute(
            method,
            path,
            body=body,
            requires_auth=requires_auth,
            expect_body=expect_body,
            deadline=deadline,
        )

    def _execute(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        requires_auth: bool = True,
        expect_body: bool = True,
        deadline: Optional[float] = None,
    ) -> Any:
        method = method.upper()
        url = self._build_url(path)
        data = json.dumps(body) if body is not None else None

        token = self._current_token() if requires_auth else None
        response = self._send(method, url, path, data, token, deadline)

        if response.status_code == 401 and requires_auth:
            response.close()
            self.log.info("Token rejected on %s %s; re-authenticating", method, path)
            token = self._refresh_token(token, deadline)
            response = self._send(method, url, path, data, token, deadline)

        try:
            if response.status_code >= 400:
                error_cls = ResourceNotFoundError if response.status_code == 404 else RequestError
                raise error_cls(method, path, response.status_code, trim_body(response.text))

            if not expect_body:
                return None

            try:
                return response.json()
            except ValueError as e:
                raise PayloadParseError(str(e), source=f"{method} {path}") from e
        finally:
            response.close()

    def _build_url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(
        self,
        method: str,
        url: str,
        path: str,
        data: Optional[str],
        token: Optional[str],
        deadline: Optional[float],
    ) -> requests.Response:
        timeout: float = self.timeout
        remaining = remaining_seconds(deadline)
        if remaining is not None:
            if remaining <= 0:
                raise OperationCancelledError(f"{method} {path}")
            timeout = min(timeout, remaining)

        headers = {"Accept": JSON_CONTENT_TYPE}
        if data is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        if token is not None:
            headers["Authorization"] = f"{AUTH_HEADER_SCHEME} {token}"

        self.log.debug("%s %s", method, url)
        try:
            return self.session.request(
                method,
                url,
                data=data,
                headers=headers,
                timeout=timeout,
            )
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(f"{method} {path}", timeout) from e
        except requests.exceptions.ConnectionError as e:
            raise ServerUnreachableError(self.base_url, e) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(str(e), operation=f"{method} {path}") from e

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> "EFTConnection":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    @property
    def is_authenticated(self) -> bool:
        return self._state is AuthState.AUTHENTICATED
