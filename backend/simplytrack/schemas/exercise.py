"""Exercise schemas."""

from __future__ import annotations

from marshmallow import fields, validate

from .common import CamelCaseSchema
from .workout import LastSessionSchema, SessionSchema

NAME_LENGTH = validate.Length(min=1, max=100)
NOTES_LENGTH = validate.Length(max=500)


class ExerciseSchema(CamelCaseSchema):
    """Exercise representation. Shared templates carry ``isShared`` and a null ``userId``."""

    id = fields.String(dump_only=True)
    user_id = fields.String(dump_only=True, allow_none=True)
    name = fields.String()
    notes = fields.String(allow_none=True)
    created_at = fields.DateTime(dump_only=True)
    is_shared = fields.Boolean(dump_only=True)


class ExerciseCreateSchema(CamelCaseSchema):
    name = fields.String(required=True, validate=NAME_LENGTH)
    notes = fields.String(load_default=None, allow_none=True, validate=NOTES_LENGTH)


class ExerciseUpdateSchema(CamelCaseSchema):
    name = fields.String(load_default=None, validate=NAME_LENGTH)
    notes = fields.String(load_default=None, allow_none=True, validate=NOTES_LENGTH)


class ExerciseListQuerySchema(CamelCaseSchema):
    """Query string of ``GET /exercises``."""

    q = fields.String(load_default=None, validate=validate.Length(max=100))
    include_last_session = fields.Boolean(load_default=True)
    include_shared = fields.Boolean(load_default=False)


class ExerciseItemSchema(CamelCaseSchema):
    """An exercise with its latest session summary (null when none)."""

    exercise = fields.Nested(ExerciseSchema)
    last_session = fields.Nested(LastSessionSchema, allow_none=True)


class ExerciseDetailSchema(CamelCaseSchema):
    exercise = fields.Nested(ExerciseSchema)
    sessions_count = fields.Integer()
    last_session = fields.Nested(SessionSchema, allow_none=True)


class DashboardQuerySchema(CamelCaseSchema):
    limit = fields.Integer(load_default=100)
