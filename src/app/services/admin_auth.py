# src/app/services/admin_auth.py
"""
Admin session handling.

A single admin account is configured out-of-band. A successful login mints
an opaque random token that is kept in an in-memory registry until logout
or process restart.
"""
from __future__ import annotations

import logging
import secrets
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from src.app.domain.errors import ConfigurationError, UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)

TOKEN_BYTES = 48


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class SessionRegistry:
    """
    Thread-safe set of valid admin tokens mapped to their issuance time.

    With ttl=None tokens never expire server-side. With a ttl, tokens older
    than it are treated as unknown and dropped on lookup.
    """

    def __init__(
        self,
        ttl: Optional[timedelta] = None,
        clock: Callable[[], datetime] = _now_utc,
    ):
        self._tokens: dict[str, datetime] = {}
        self._lock = threading.Lock()
        self._ttl = ttl
        self._clock = clock

    def issue(self) -> str:
        token = secrets.token_hex(TOKEN_BYTES)
        with self._lock:
            self._tokens[token] = self._clock()
        return token

    def contains(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._lock:
            issued_at = self._tokens.get(token)
            if issued_at is None:
                return False
            if self._ttl is not None and self._clock() - issued_at > self._ttl:
                del self._tokens[token]
                return False
            return True

    def issued_at(self, token: str) -> Optional[datetime]:
        """Issuance time of a live token, or None when unknown or expired."""
        if not self.contains(token):
            return None
        with self._lock:
            return self._tokens.get(token)

    def revoke(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._lock:
            return self._tokens.pop(token, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)


class AdminAuthenticator:
    """
    Login, logout and token checks for the admin console.

    Responsibilities:
    - Compare submitted credentials with the configured secrets
    - Issue and revoke session tokens
    - Admit or reject admin requests by token
    """

    def __init__(
        self,
        registry: SessionRegistry,
        username: Optional[str],
        password: Optional[str],
    ):
        self._registry = registry
        self._username = username
        self._password = password

    @property
    def configured(self) -> bool:
        return bool(self._username and self._password)

    def _ensure_configured(self) -> None:
        if not self.configured:
            logger.error("ADMIN_USERNAME/ADMIN_PASSWORD are not configured")
            raise ConfigurationError()

    def login(self, username: Optional[str], password: Optional[str]) -> str:
        """
        Check credentials and start a session.

        Returns:
            A fresh session token

        Raises:
            ConfigurationError: If the server has no admin credentials
            ValidationError: If either credential is missing
            UnauthorizedError: If the credentials do not match
        """
        self._ensure_configured()
        if not username or not password:
            raise ValidationError("Username and password are required")

        user_ok = secrets.compare_digest(username.encode(), self._username.encode())
        pass_ok = secrets.compare_digest(password.encode(), self._password.encode())
        if not (user_ok and pass_ok):
            logger.warning("Admin login rejected")
            raise UnauthorizedError("Invalid credentials")

        token = self._registry.issue()
        logger.info("Admin signed in (active sessions=%d)", len(self._registry))
        return token

    def check(self, token: Optional[str]) -> bool:
        return self._registry.contains(token)

    def require(self, token: Optional[str]) -> str:
        """
        Admit a request holding a registered token.

        Raises:
            ConfigurationError: If the server has no admin credentials
            UnauthorizedError: If the token is missing or unknown
        """
        self._ensure_configured()
        if not token or not self._registry.contains(token):
            raise UnauthorizedError()
        return token

    def logout(self, token: Optional[str]) -> None:
        if self._registry.revoke(token):
            logger.info("Admin signed out (active sessions=%d)", len(self._registry))
