"""Workout session and set schemas."""

from __future__ import annotations

from marshmallow import ValidationError, fields, validate, validates_schema

from simplytrack.models.workout import MAX_REPS, MAX_WEIGHT

from .common import CamelCaseSchema

MAX_PAGE_SIZE = 200


class SessionSchema(CamelCaseSchema):
    """Session representation including its derived totals."""

    id = fields.String(dump_only=True)
    exercise_id = fields.String(dump_only=True)
    date = fields.Date()
    created_at = fields.DateTime(dump_only=True)
    total_weight = fields.Float(dump_only=True)
    total_reps = fields.Integer(dump_only=True)
    sets_count = fields.Integer(dump_only=True)


class LastSessionSchema(CamelCaseSchema):
    session_id = fields.String()
    date = fields.Date()
    total_weight = fields.Float()
    total_reps = fields.Integer()
    sets_count = fields.Integer()


class SessionCreateSchema(CamelCaseSchema):
    date = fields.Date(load_default=None, allow_none=True)


class SessionListQuerySchema(CamelCaseSchema):
    """Query string of ``GET /exercises/{id}/sessions``."""

    limit = fields.Integer(load_default=50, validate=validate.Range(min=1, max=MAX_PAGE_SIZE))
    offset = fields.Integer(load_default=0, validate=validate.Range(min=0))
    date_from = fields.Date(data_key="from", load_default=None)
    date_to = fields.Date(data_key="to", load_default=None)

    @validates_schema
    def _check_range(self, data, **_):
        start, end = data.get("date_from"), data.get("date_to")
        if start and end and start > end:
            raise ValidationError("'from' must not be after 'to'.", field_name="from")


class SetSchema(CamelCaseSchema):
    id = fields.String(dump_only=True)
    session_id = fields.String(dump_only=True)
    reps = fields.Integer()
    weight = fields.Float()
    created_at = fields.DateTime(dump_only=True)


class SetCreateSchema(CamelCaseSchema):
    """New set: 1 to ``MAX_REPS`` repetitions at 0 to ``MAX_WEIGHT``."""

    reps = fields.Integer(
        required=True, strict=True, validate=validate.Range(min=1, max=MAX_REPS)
    )
    weight = fields.Float(
        required=True, allow_nan=False, validate=validate.Range(min=0, max=MAX_WEIGHT)
    )


class SetUpdateSchema(CamelCaseSchema):
    reps = fields.Integer(
        load_default=None, strict=True, validate=validate.Range(min=1, max=MAX_REPS)
    )
    weight = fields.Float(
        load_default=None, allow_nan=False, validate=validate.Range(min=0, max=MAX_WEIGHT)
    )


class SessionDetailSchema(CamelCaseSchema):
    session = fields.Nested(SessionSchema)
    sets = fields.List(fields.Nested(SetSchema))
