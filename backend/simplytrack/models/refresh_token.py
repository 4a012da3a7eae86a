"""Persisted refresh tokens and their revocation chain."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from simplytrack.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin, as_utc, utcnow

# 64 random bytes encode to 88 base64 characters
TOKEN_MAX_LENGTH = 128


class RefreshToken(PKMixin, CreatedAtMixin, ReprMixin, db.Model):
    """
    Opaque, long-lived refresh token.

    A token is *active* while it is unrevoked and unexpired. Revocation is
    terminal: ``revoked_at`` is written once and never cleared. Rotation
    records the successor in ``replaced_by_token``, which forms a forward-only
    chain used for replay detection. Rows are never deleted.

    ``user_id`` is deliberately not a foreign key so the trail outlives the
    account it belonged to.
    """

    __tablename__ = "refresh_tokens"

    token: Mapped[str] = mapped_column(String(TOKEN_MAX_LENGTH), nullable=False, unique=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    created_by_ip: Mapped[str | None] = mapped_column(String(64))
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    revoked_by_ip: Mapped[str | None] = mapped_column(String(64))
    replaced_by_token: Mapped[str | None] = mapped_column(String(TOKEN_MAX_LENGTH))

    __table_args__ = (Index("ix_refresh_tokens_user_id", "user_id"),)

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    @property
    def is_rotated(self) -> bool:
        """``True`` when the token was revoked because a successor replaced it."""
        return self.revoked_at is not None and self.replaced_by_token is not None

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) >= as_utc(self.expires_at)

    def is_active_at(self, now: datetime | None = None) -> bool:
        """
        Return whether the token can still be exchanged.

        :param now: Reference time (defaults to the current UTC time).
        :type now: datetime | None
        :returns: ``True`` iff not revoked and ``now < expires_at``.
        :rtype: bool
        """
        return not self.is_revoked and not self.is_expired(now)

    @property
    def is_active(self) -> bool:
        return self.is_active_at()
