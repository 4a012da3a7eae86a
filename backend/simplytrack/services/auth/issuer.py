"""Issue access/refresh token pairs for a verified identity."""

from __future__ import annotations

import base64
import secrets
from datetime import datetime

from simplytrack.models.base import utcnow
from simplytrack.models.refresh_token import RefreshToken
from simplytrack.services._shared.ports.token_provider import TokenProvider
from simplytrack.services.auth.dto import AuthTokenConfig, TokenPairOut
from simplytrack.services.identity.dto import UserPublicOut
from simplytrack.uow.base import UnitOfWork

REFRESH_TOKEN_BYTES = 64


def generate_refresh_token() -> str:
    """Return a base64-encoded string of 64 cryptographically random bytes."""
    return base64.b64encode(secrets.token_bytes(REFRESH_TOKEN_BYTES)).decode("ascii")


class TokenIssuer:
    """
    Create a signed access token and a persisted opaque refresh token.

    The refresh token row is added to the caller's unit of work; it becomes
    durable when that unit of work commits.
    """

    def __init__(self, *, token_provider: TokenProvider, cfg: AuthTokenConfig) -> None:
        self.tokens = token_provider
        self.cfg = cfg

    def issue(
        self,
        uow: UnitOfWork,
        identity: UserPublicOut,
        *,
        client_ip: str | None,
        now: datetime | None = None,
    ) -> TokenPairOut:
        """
        Issue a token pair for ``identity``.

        :param uow: Active read-write unit of work.
        :type uow: UnitOfWork
        :param identity: Verified user.
        :type identity: UserPublicOut
        :param client_ip: Address recorded as ``created_by_ip``.
        :type client_ip: str | None
        :param now: Issuance time (defaults to current UTC time).
        :type now: datetime | None
        :returns: Access and refresh tokens with their expiries.
        :rtype: TokenPairOut
        """
        issued_at = now or utcnow()
        access = self.tokens.create_access_token(
            identity=identity.id,
            additional_claims={
                "email": identity.email,
                "given_name": identity.first_name,
                "family_name": identity.last_name,
            },
            expires_delta=self.cfg.access_expires,
        )

        refresh = RefreshToken(
            token=generate_refresh_token(),
            user_id=identity.id,
            created_by_ip=client_ip,
            expires_at=issued_at + self.cfg.refresh_expires,
        )
        uow.refresh_tokens.add(refresh)

        return TokenPairOut(
            access_token=access,
            refresh_token=refresh.token,
            access_expires_at=issued_at + self.cfg.access_expires,
            refresh_expires_at=issued_at + self.cfg.refresh_expires,
        )
