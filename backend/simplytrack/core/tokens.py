"""Token configuration and adapter wiring.

Builds the immutable :class:`AuthTokenConfig` once at startup, mirrors it into
the ``flask-jwt-extended`` settings, and registers the token provider and the
access-token denylist on ``app.extensions``. The denylist is consulted by
``verify_jwt_in_request`` through the ``jwt`` blocklist loader.
"""

from __future__ import annotations

import logging
from typing import cast

from flask import Flask, current_app

from simplytrack.core.extensions import jwt
from simplytrack.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from simplytrack.infra.redis.redis_denylist_store import RedisTokenDenylistStore
from simplytrack.services._shared.ports import (
    InMemoryDenylistStore,
    TokenDenylistStore,
    TokenProvider,
)
from simplytrack.services.auth.dto import AuthTokenConfig

log = logging.getLogger(__name__)

TOKEN_CONFIG_KEY = "auth_token_config"
TOKEN_PROVIDER_KEY = "token_provider"
DENYLIST_KEY = "token_denylist"


def init_app(app: Flask) -> None:
    """Register token configuration and adapters on ``app``.

    Must run after :func:`simplytrack.core.extensions.init_app` so the Redis
    client (when configured) is available.
    """
    cfg = AuthTokenConfig.from_mapping(app.config)

    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = cfg.access_expires
    app.config["JWT_DECODE_LEEWAY"] = int(cfg.clock_skew.total_seconds())
    app.config["JWT_ENCODE_ISSUER"] = cfg.issuer
    app.config["JWT_DECODE_ISSUER"] = cfg.issuer
    app.config["JWT_ENCODE_AUDIENCE"] = cfg.audience
    app.config["JWT_DECODE_AUDIENCE"] = cfg.audience

    redis_client = app.extensions.get("redis_client")
    denylist: TokenDenylistStore
    if redis_client is not None:
        denylist = RedisTokenDenylistStore(redis_client)
    else:
        denylist = InMemoryDenylistStore()
        if not app.testing:
            log.warning("REDIS_URL not set; access-token denylist is process-local.")

    app.extensions[TOKEN_CONFIG_KEY] = cfg
    app.extensions[TOKEN_PROVIDER_KEY] = JWTTokenProvider()
    app.extensions[DENYLIST_KEY] = denylist

    jwt.token_in_blocklist_loader(_access_token_revoked)


def get_token_config() -> AuthTokenConfig:
    return cast(AuthTokenConfig, current_app.extensions[TOKEN_CONFIG_KEY])


def get_token_provider() -> TokenProvider:
    return cast(TokenProvider, current_app.extensions[TOKEN_PROVIDER_KEY])


def get_denylist() -> TokenDenylistStore:
    return cast(TokenDenylistStore, current_app.extensions[DENYLIST_KEY])


def _access_token_revoked(jwt_header: dict, jwt_payload: dict) -> bool:
    jti = jwt_payload.get("jti")
    return bool(jti) and get_denylist().is_revoked(str(jti))
