# simplytrack/services/auth/service.py
from __future__ import annotations

import logging
from datetime import datetime

from simplytrack.models.base import utcnow
from simplytrack.models.refresh_token import RefreshToken
from simplytrack.services._shared.base import BaseService, ServiceContext
from simplytrack.services._shared.errors import (
    InvalidTokenError,
    ServiceError,
    UserNotFoundError,
)
from simplytrack.services._shared.ports.denylist_store import TokenDenylistStore
from simplytrack.services._shared.ports.token_provider import TokenProvider
from simplytrack.services.auth.dto import (
    AuthResultOut,
    AuthTokenConfig,
    LoginIn,
    LogoutIn,
    RefreshIn,
    RegisterIn,
    RevokeIn,
)
from simplytrack.services.auth.issuer import TokenIssuer
from simplytrack.services.identity.dto import UserAuthIn, UserRegisterIn
from simplytrack.services.identity.service import IdentityService, create_user, to_public
from simplytrack.uow.base import UnitOfWork

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication lifecycle service (register / login / refresh / logout / revoke).

    Access tokens are signed JWTs issued through a pluggable
    :class:`TokenProvider`. Refresh tokens are opaque random strings stored in
    the database; every refresh rotates the presented token and records its
    successor, so presenting a superseded token again is detected as a replay.
    Access tokens can be revoked early through the :class:`TokenDenylistStore`.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        denylist_store: TokenDenylistStore,
        token_cfg: AuthTokenConfig,
        identity: IdentityService | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter for signing/verifying access tokens.
        :param denylist_store: Denylist for access tokens (JTI-based).
        :param token_cfg: Lifetimes, issuer/audience and replay policy.
        :param identity: Credential verifier (defaults to :class:`IdentityService`).
        :param ctx: Request-scoped context (actor, client address).
        """
        super().__init__(ctx=ctx)
        self.denylist = denylist_store
        self.cfg = token_cfg
        self.issuer = TokenIssuer(token_provider=token_provider, cfg=token_cfg)
        self.identity = identity or IdentityService(ctx=self.ctx)

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> AuthResultOut:
        """
        Create an account and sign it in, in a single transaction.

        :param dto: Registration input.
        :returns: Token pair and the new user.
        :raises ConflictError: When the email is already registered.
        """
        with self.rw_uow() as uow:
            user = create_user(
                uow.users,
                UserRegisterIn(
                    email=dto.email,
                    password=dto.password,
                    first_name=dto.first_name,
                    last_name=dto.last_name,
                ),
            )
            identity = to_public(user)
            tokens = self.issuer.issue(uow, identity, client_ip=self.ctx.client_ip)

        log.info("User registered", extra={"event": "auth.register", "user_id": identity.id})
        return AuthResultOut(tokens=tokens, user=identity)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> AuthResultOut:
        """
        Authenticate credentials and issue a fresh token pair.

        :param dto: Login input.
        :returns: Token pair and the authenticated user.
        :raises InvalidCredentialsError: If credentials are invalid.
        """
        identity = self.identity.authenticate(UserAuthIn(email=dto.email, password=dto.password))

        with self.rw_uow() as uow:
            tokens = self.issuer.issue(uow, identity, client_ip=self.ctx.client_ip)

        log.info("User logged in", extra={"event": "auth.login", "user_id": identity.id})
        return AuthResultOut(tokens=tokens, user=identity)

    # ------------------------------------------------------------------ #
    # Refresh with rotation
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> AuthResultOut:
        """
        Rotate a refresh token and emit a new token pair.

        Security
        --------
        - Requires an active (unrevoked, unexpired) refresh token.
        - Lookup, issuance and revocation of the old token share one
          transaction; the presented row is locked while it is consumed.
        - Presenting a token that was already rotated is a replay: its still
          active descendants are revoked (when enabled) and the request fails.

        :param dto: Refresh input.
        :returns: New token pair and the owning user.
        :raises InvalidTokenError: Unknown, inactive or replayed token.
        :raises UserNotFoundError: The owning account no longer exists.
        """
        now = utcnow()
        client_ip = self.ctx.client_ip

        with self.rw_uow() as uow:
            outcome = self._rotate(uow, dto.refresh_token, client_ip=client_ip, now=now)

        # Raised after commit so replay revocations persist
        if isinstance(outcome, ServiceError):
            raise outcome
        log.info("Refresh token rotated", extra={"event": "auth.refresh", "user_id": outcome.user.id})
        return outcome

    def _rotate(
        self, uow: UnitOfWork, raw_token: str, *, client_ip: str | None, now: datetime
    ) -> AuthResultOut | ServiceError:
        stored = uow.refresh_tokens.get_by_token(raw_token, for_update=True)
        if stored is None:
            return InvalidTokenError()
        if stored.is_rotated:
            self._handle_replay(uow, stored, client_ip=client_ip, now=now)
            return InvalidTokenError()
        if not stored.is_active_at(now):
            return InvalidTokenError()

        user = uow.users.get(stored.user_id)
        if user is None:
            return UserNotFoundError()
        identity = to_public(user)
        tokens = self.issuer.issue(uow, identity, client_ip=client_ip, now=now)
        uow.refresh_tokens.revoke(
            stored,
            revoked_by_ip=client_ip,
            replaced_by_token=tokens.refresh_token,
            now=now,
        )
        return AuthResultOut(tokens=tokens, user=identity)

    def _handle_replay(
        self, uow: UnitOfWork, stored: RefreshToken, *, client_ip: str | None, now: datetime
    ) -> None:
        revoked = 0
        if self.cfg.revoke_chain_on_reuse:
            revoked = uow.refresh_tokens.revoke_descendants(
                stored, revoked_by_ip=client_ip, now=now
            )
        log.warning(
            "Rotated refresh token presented again; %d descendant token(s) revoked",
            revoked,
            extra={"event": "auth.refresh_replay", "user_id": stored.user_id},
        )

    # ------------------------------------------------------------------ #
    # Logout / revoke
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        End the caller's session.

        The caller's access token is denylisted until it expires. A refresh
        token in the request is revoked only when it is active and owned by
        the caller; anything else is ignored without error.

        :param dto: Logout input.
        :raises UnauthorizedError: When no authenticated actor is present.
        """
        actor_id = self.require_actor()

        if dto.refresh_token:
            now = utcnow()
            with self.rw_uow() as uow:
                stored = uow.refresh_tokens.get_by_token(dto.refresh_token, for_update=True)
                if stored is not None and stored.user_id == actor_id and stored.is_active_at(now):
                    uow.refresh_tokens.revoke(stored, revoked_by_ip=self.ctx.client_ip, now=now)

        if dto.access_jti and dto.access_expires_at is not None:
            self.denylist.revoke_jti(jti=dto.access_jti, expires_at=dto.access_expires_at)

        log.info("User logged out", extra={"event": "auth.logout", "user_id": actor_id})

    def revoke(self, dto: RevokeIn) -> None:
        """
        Revoke one of the caller's refresh tokens.

        :param dto: Revoke input.
        :raises InvalidTokenError: When the token is unknown, inactive or not
            owned by the caller.
        """
        actor_id = self.require_actor()
        now = utcnow()

        with self.rw_uow() as uow:
            stored = uow.refresh_tokens.get_by_token(dto.refresh_token, for_update=True)
            if stored is None or stored.user_id != actor_id or not stored.is_active_at(now):
                raise InvalidTokenError()
            uow.refresh_tokens.revoke(stored, revoked_by_ip=self.ctx.client_ip, now=now)

        log.info("Refresh token revoked", extra={"event": "auth.revoke", "user_id": actor_id})
