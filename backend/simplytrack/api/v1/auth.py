"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, g

from simplytrack.api.deps import (
    auth_service,
    data_response,
    load_json,
    no_content,
    require_auth,
    timing,
)
from simplytrack.core.errors import APIError
from simplytrack.schemas import (
    AuthResultSchema,
    LoginSchema,
    LogoutSchema,
    RefreshSchema,
    RegisterSchema,
    RevokeSchema,
)
from simplytrack.services._shared.errors import InvalidTokenError
from simplytrack.services.auth.dto import LoginIn, LogoutIn, RefreshIn, RegisterIn, RevokeIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
logout_schema = LogoutSchema()
revoke_schema = RevokeSchema()
result_schema = AuthResultSchema()


@bp.post("/register")
@timing
def register():
    """Create an account and return a token pair with the new user."""
    data = load_json(register_schema)
    result = auth_service().register(RegisterIn(**data))
    return data_response(result_schema, result, status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue a token pair."""
    data = load_json(login_schema)
    result = auth_service().login(LoginIn(**data))
    return data_response(result_schema, result)


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a refresh token for a new pair (the old token is consumed)."""
    data = load_json(refresh_schema)
    result = auth_service().refresh(RefreshIn(**data))
    return data_response(result_schema, result)


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Revoke the current access token and, optionally, a refresh token."""
    data = load_json(logout_schema)
    auth_service().logout(
        LogoutIn(
            access_jti=g.access_jti,
            access_expires_at=g.access_expires_at,
            refresh_token=data.get("refresh_token"),
        )
    )
    return no_content()


@bp.post("/revoke")
@require_auth
@timing
def revoke():
    """Revoke one of the caller's refresh tokens."""
    data = load_json(revoke_schema)
    try:
        auth_service().revoke(RevokeIn(**data))
    except InvalidTokenError as err:
        raise APIError.from_service_error(err, status_code=400) from err
    return no_content()
