"""Workout set endpoints."""

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
from simplytrack.schemas import SetSchema, SetUpdateSchema
from simplytrack.services.workouts.dto import SetUpdateIn
from simplytrack.services.workouts.sets import WorkoutSetService

bp = Blueprint("sets", __name__)

set_schema = SetSchema()
set_update_schema = SetUpdateSchema()


@bp.patch("/<set_id>")
@require_auth
@timing
def update_set(set_id: str):
    data = load_json(set_update_schema)
    updated = WorkoutSetService(ctx=service_context()).update_set(
        current_user_id(), set_id, SetUpdateIn(**data)
    )
    return data_response(set_schema, updated)


@bp.delete("/<set_id>")
@require_auth
@timing
def delete_set(set_id: str):
    WorkoutSetService(ctx=service_context()).delete_set(current_user_id(), set_id)
    return no_content()
