"""User schemas."""

from __future__ import annotations

from marshmallow import fields, validate

from .common import CamelCaseSchema


class UserSchema(CamelCaseSchema):
    """Public representation of a user."""

    id = fields.String(dump_only=True)
    email = fields.Email(dump_only=True)
    first_name = fields.String()
    last_name = fields.String()
    created_at = fields.DateTime(dump_only=True)


class UserUpdateSchema(CamelCaseSchema):
    """Profile update; omitted fields are left unchanged."""

    first_name = fields.String(load_default=None, validate=validate.Length(max=100))
    last_name = fields.String(load_default=None, validate=validate.Length(max=100))
