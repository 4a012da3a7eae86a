"""Refresh token store backed by the relational database."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import select

from simplytrack.models.base import utcnow
from simplytrack.models.refresh_token import RefreshToken
from simplytrack.repositories.base import BaseRepository
from simplytrack.services._shared.errors import TokenAlreadyRevokedError


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persistence for refresh tokens and their revocation chain.

    Revocation is monotonic: :meth:`revoke` refuses an already-revoked token
    so the first revocation's metadata (time, IP, successor) is never
    overwritten.
    """

    model = RefreshToken

    def get_by_token(self, token: str, *, for_update: bool = False) -> RefreshToken | None:
        """Exact-match lookup of a token string.

        :param token: Opaque token value presented by the client.
        :type token: str
        :param for_update: Lock the row for the rest of the transaction.
        :type for_update: bool
        :returns: The stored token or ``None``.
        :rtype: RefreshToken | None
        """
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        if for_update:
            stmt = stmt.with_for_update()
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def revoke(
        self,
        token: RefreshToken,
        *,
        revoked_by_ip: str | None,
        replaced_by_token: str | None = None,
        now: datetime | None = None,
    ) -> RefreshToken:
        """Mark ``token`` revoked, optionally recording its successor.

        :param token: Token row to revoke.
        :type token: RefreshToken
        :param revoked_by_ip: Address of the client causing the revocation.
        :type revoked_by_ip: str | None
        :param replaced_by_token: Successor token value when rotating.
        :type replaced_by_token: str | None
        :param now: Revocation time (defaults to current UTC time).
        :type now: datetime | None
        :returns: The revoked token.
        :rtype: RefreshToken
        :raises TokenAlreadyRevokedError: If ``token`` was revoked before.
        """
        if token.revoked_at is not None:
            raise TokenAlreadyRevokedError()
        token.revoked_at = now or utcnow()
        token.revoked_by_ip = revoked_by_ip
        token.replaced_by_token = replaced_by_token
        self.flush()
        return token

    def list_active_for_user(self, user_id: str, *, now: datetime | None = None) -> list[RefreshToken]:
        """Return the user's unrevoked, unexpired tokens, newest first."""
        stmt = (
            select(RefreshToken)
            .where(RefreshToken.user_id == user_id, RefreshToken.revoked_at.is_(None))
            .order_by(RefreshToken.created_at.desc(), RefreshToken.id.desc())
        )
        rows = self.session.execute(stmt).scalars().all()
        return [row for row in rows if row.is_active_at(now)]

    def revoke_all_for_user(
        self, user_id: str, *, revoked_by_ip: str | None, now: datetime | None = None
    ) -> int:
        """Revoke every active token of ``user_id``.

        :returns: Number of tokens revoked.
        :rtype: int
        """
        when = now or utcnow()
        active = self.list_active_for_user(user_id, now=when)
        for row in active:
            self.revoke(row, revoked_by_ip=revoked_by_ip, now=when)
        return len(active)

    def descendants(self, token: RefreshToken) -> list[RefreshToken]:
        """Walk the ``replaced_by_token`` chain forward from ``token``.

        :returns: Successors in rotation order, excluding ``token`` itself.
        :rtype: list[RefreshToken]
        """
        chain: list[RefreshToken] = []
        seen = {token.token}
        successor = token.replaced_by_token
        while successor and successor not in seen:
            seen.add(successor)
            row = self.get_by_token(successor, for_update=True)
            if row is None:
                break
            chain.append(row)
            successor = row.replaced_by_token
        return chain

    def revoke_descendants(
        self, token: RefreshToken, *, revoked_by_ip: str | None, now: datetime | None = None
    ) -> int:
        """Revoke the still-active successors of a replayed token.

        :returns: Number of tokens revoked.
        :rtype: int
        """
        when = now or utcnow()
        revoked = 0
        for row in self.descendants(token):
            if row.is_active_at(when):
                self.revoke(row, revoked_by_ip=revoked_by_ip, now=when)
                revoked += 1
        return revoked
