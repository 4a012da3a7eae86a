"""Shared API helpers: authentication, request parsing, service wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Mapping
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import (
    JWTExtendedException,
    NoAuthorizationError,
    RevokedTokenError,
)
from jwt.exceptions import PyJWTError
from marshmallow import Schema

from simplytrack.core.logger import ensure_request_id
from simplytrack.core.proxy import client_ip
from simplytrack.core.tokens import get_denylist, get_token_config, get_token_provider
from simplytrack.services._shared.base import ServiceContext
from simplytrack.services._shared.errors import UnauthorizedError
from simplytrack.services.auth.authenticator import TokenAuthenticator
from simplytrack.services.auth.service import AuthService

F = TypeVar("F", bound=Callable[..., Any])


def require_auth(func: F) -> F:
    """Ensure the request carries a valid, non-revoked access token.

    ``verify_jwt_in_request`` reads the ``Authorization: Bearer`` header and
    checks signature, time window, issuer, audience and the denylist. On
    success the caller is available as ``g.current_user_id`` and the token's
    ``jti``/expiry as ``g.access_jti``/``g.access_expires_at``. Every failure
    raises :class:`UnauthorizedError` (401).
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            verify_jwt_in_request(optional=False)
        except NoAuthorizationError as exc:
            raise UnauthorizedError("Missing bearer token.") from exc
        except RevokedTokenError as exc:
            raise UnauthorizedError("Token has been revoked.") from exc
        except (JWTExtendedException, PyJWTError) as exc:
            raise UnauthorizedError("Invalid or expired access token.") from exc

        principal = TokenAuthenticator().principal(get_jwt())
        g.current_user_id = principal.user_id
        g.access_jti = principal.jti
        g.access_expires_at = principal.expires_at
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> str:
    return cast(str, g.current_user_id)


def service_context() -> ServiceContext:
    """Build the request-scoped context handed to services."""
    return ServiceContext(
        actor_id=g.get("current_user_id"),
        request_id=ensure_request_id(),
        client_ip=client_ip(request),
    )


def auth_service() -> AuthService:
    return AuthService(
        token_provider=get_token_provider(),
        denylist_store=get_denylist(),
        token_cfg=get_token_config(),
        ctx=service_context(),
    )


def load_json(schema: Schema) -> dict[str, Any]:
    """Validate the JSON body with ``schema`` (missing body counts as ``{}``)."""
    return cast(dict[str, Any], schema.load(request.get_json(silent=True) or {}))


def load_args(schema: Schema) -> dict[str, Any]:
    """Validate the query string with ``schema``."""
    return cast(dict[str, Any], schema.load(cast(Mapping[str, Any], request.args)))


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""
    response = jsonify(payload)
    response.status_code = status
    return response


def data_response(schema: Schema, obj: Any, *, status: int = 200, many: bool = False) -> Response:
    """Serialize ``obj`` with ``schema`` and wrap it as ``{"data": ...}``."""
    return json_response({"data": schema.dump(obj, many=many)}, status=status)


def no_content() -> Response:
    return Response(status=204)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
