# simplytrack/services/auth/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from simplytrack.services.identity.dto import UserPublicOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for sign-up.

    :param email: User email (any casing).
    :type email: str
    :param password: Raw password.
    :type password: str
    :param first_name: Given name.
    :type first_name: str
    :param last_name: Family name.
    :type last_name: str
    """

    email: str
    password: str
    first_name: str = ""
    last_name: str = ""


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email (any casing).
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Opaque refresh token.
    :type refresh_token: str
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param access_jti: ``jti`` of the access token used for the request.
    :type access_jti: str | None
    :param access_expires_at: Expiry of that access token.
    :type access_expires_at: datetime | None
    :param refresh_token: Optional refresh token to revoke as well.
    :type refresh_token: str | None
    """

    access_jti: str | None = None
    access_expires_at: datetime | None = None
    refresh_token: str | None = None


@dataclass(frozen=True, slots=True)
class RevokeIn:
    """
    Input DTO for explicit refresh-token revocation.

    :param refresh_token: Opaque refresh token owned by the caller.
    :type refresh_token: str
    """

    refresh_token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Opaque refresh token.
    :type refresh_token: str
    :param access_expires_at: Access token expiry.
    :type access_expires_at: datetime
    :param refresh_expires_at: Refresh token expiry.
    :type refresh_expires_at: datetime
    """

    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime


@dataclass(frozen=True, slots=True)
class AuthResultOut:
    """Token pair plus the identity it was issued for."""

    tokens: TokenPairOut
    user: UserPublicOut


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller extracted from a verified access token.

    :param user_id: Token subject.
    :type user_id: str
    :param jti: Token identifier (denylist key).
    :type jti: str
    :param expires_at: Token expiry.
    :type expires_at: datetime
    """

    user_id: str
    jti: str
    expires_at: datetime


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission and validation configuration, built once at startup.

    :param issuer: ``iss`` stamped into and required from access tokens.
    :type issuer: str
    :param audience: ``aud`` stamped into and required from access tokens.
    :type audience: str
    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    :param clock_skew: Leeway applied to ``exp``/``nbf`` checks.
    :type clock_skew: timedelta
    :param revoke_chain_on_reuse: Revoke active descendants of a replayed token.
    :type revoke_chain_on_reuse: bool
    """

    issuer: str
    audience: str
    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=30)
    clock_skew: timedelta = timedelta(0)
    revoke_chain_on_reuse: bool = True

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> AuthTokenConfig:
        """
        Build the configuration from Flask-style settings.

        :param config: Application configuration mapping.
        :type config: Mapping[str, Any]
        :returns: Immutable token configuration.
        :rtype: AuthTokenConfig
        """
        return cls(
            issuer=str(config["JWT_ISSUER"]),
            audience=str(config["JWT_AUDIENCE"]),
            access_expires=timedelta(minutes=int(config["ACCESS_TOKEN_EXPIRATION_MINUTES"])),
            refresh_expires=timedelta(days=int(config["REFRESH_TOKEN_DAYS"])),
            clock_skew=timedelta(seconds=int(config.get("JWT_CLOCK_SKEW_SECONDS", 0))),
            revoke_chain_on_reuse=bool(config.get("AUTH_REVOKE_CHAIN_ON_REUSE", True)),
        )
