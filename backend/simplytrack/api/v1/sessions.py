"""Workout session endpoints."""

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
from simplytrack.schemas import SessionDetailSchema, SetCreateSchema, SetSchema
from simplytrack.services.workouts.dto import SetCreateIn
from simplytrack.services.workouts.sessions import WorkoutSessionService
from simplytrack.services.workouts.sets import WorkoutSetService

bp = Blueprint("sessions", __name__)

session_detail_schema = SessionDetailSchema()
set_schema = SetSchema()
set_create_schema = SetCreateSchema()


@bp.get("/<session_id>")
@require_auth
@timing
def get_session(session_id: str):
    """Return the session with its sets in logging order."""
    detail = WorkoutSessionService(ctx=service_context()).get_session(current_user_id(), session_id)
    return data_response(session_detail_schema, detail)


@bp.delete("/<session_id>")
@require_auth
@timing
def delete_session(session_id: str):
    WorkoutSessionService(ctx=service_context()).delete_session(current_user_id(), session_id)
    return no_content()


@bp.post("/<session_id>/sets")
@require_auth
@timing
def add_set(session_id: str):
    """Log a set; the session totals are recomputed in the same transaction."""
    data = load_json(set_create_schema)
    created = WorkoutSetService(ctx=service_context()).add_set(
        current_user_id(), session_id, SetCreateIn(**data)
    )
    return data_response(set_schema, created, status=201)
