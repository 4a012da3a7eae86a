"""Endpoints for the authenticated user's own account."""

from __future__ import annotations

from flask import Blueprint

from simplytrack.api.deps import (
    current_user_id,
    data_response,
    load_json,
    no_content,
    require_auth,
    service_context,
    timing,
)
from simplytrack.schemas import UserSchema, UserUpdateSchema
from simplytrack.services.identity.dto import UserUpdateIn
from simplytrack.services.identity.service import IdentityService

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_update_schema = UserUpdateSchema()


@bp.get("/me")
@require_auth
@timing
def get_me():
    user = IdentityService(ctx=service_context()).get_user(current_user_id())
    return data_response(user_schema, user)


@bp.patch("/me")
@require_auth
@timing
def update_me():
    """Update first and/or last name."""
    data = load_json(user_update_schema)
    user = IdentityService(ctx=service_context()).update_user(current_user_id(), UserUpdateIn(**data))
    return data_response(user_schema, user)


@bp.delete("/me")
@require_auth
@timing
def delete_me():
    """Delete the account with everything it owns and revoke its refresh tokens."""
    ctx = service_context()
    IdentityService(ctx=ctx).delete_user(current_user_id(), client_ip=ctx.client_ip)
    return no_content()
