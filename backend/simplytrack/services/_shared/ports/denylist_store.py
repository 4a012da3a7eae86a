from __future__ import annotations

import threading
from datetime import datetime
from typing import Protocol

from simplytrack.models.base import as_utc, utcnow


class TokenDenylistStore(Protocol):
    """
    Abstraction for a denylist store for **access tokens**.

    Entries only need to live until the token's own expiry; after that the
    signature check rejects the token anyway. Methods are expected to be
    idempotent.
    """

    def is_revoked(self, jti: str) -> bool: ...
    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None: ...


class InMemoryDenylistStore(TokenDenylistStore):
    """Process-local denylist for **access** tokens by JTI.

    Used when no ``REDIS_URL`` is configured. Entries are purged lazily once
    their token has expired.
    """

    def __init__(self) -> None:
        self._revoked: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def is_revoked(self, jti: str) -> bool:
        with self._lock:
            self._purge(utcnow())
            return jti in self._revoked

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None:
        with self._lock:
            self._revoked[jti] = as_utc(expires_at)

    def _purge(self, now: datetime) -> None:
        expired = [jti for jti, exp in self._revoked.items() if exp <= now]
        for jti in expired:
            del self._revoked[jti]
