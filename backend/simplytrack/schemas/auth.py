"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import fields, validate

from .common import CamelCaseSchema
from .user import UserSchema


class RegisterSchema(CamelCaseSchema):
    """Input payload for account registration."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))
    first_name = fields.String(load_default="", validate=validate.Length(max=100))
    last_name = fields.String(load_default="", validate=validate.Length(max=100))


class LoginSchema(CamelCaseSchema):
    """Input payload for authenticating a user."""

    email = fields.String(required=True, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshSchema(CamelCaseSchema):
    """Input payload for rotating a refresh token."""

    refresh_token = fields.String(required=True, validate=validate.Length(min=1, max=256))


class LogoutSchema(CamelCaseSchema):
    """Input payload for logout; the refresh token is optional."""

    refresh_token = fields.String(load_default=None, allow_none=True)


class RevokeSchema(CamelCaseSchema):
    """Input payload for explicit refresh-token revocation."""

    refresh_token = fields.String(required=True, validate=validate.Length(min=1, max=256))


class AuthResultSchema(CamelCaseSchema):
    """Response payload: token pair plus the signed-in user."""

    access_token = fields.String(attribute="tokens.access_token")
    refresh_token = fields.String(attribute="tokens.refresh_token")
    access_token_expires_at = fields.DateTime(attribute="tokens.access_expires_at")
    refresh_token_expires_at = fields.DateTime(attribute="tokens.refresh_expires_at")
    token_type = fields.Constant("Bearer")
    user = fields.Nested(UserSchema)
