"""Exercise endpoints (personal exercises plus read-only shared templates)."""

from __future__ import annotations

from flask import Blueprint

from simplytrack.api.deps import (
    current_user_id,
    data_response,
    load_args,
    load_json,
    no_content,
    require_auth,
    service_context,
    timing,
)
from simplytrack.schemas import (
    ExerciseCreateSchema,
    ExerciseDetailSchema,
    ExerciseItemSchema,
    ExerciseListQuerySchema,
    ExerciseSchema,
    ExerciseUpdateSchema,
    SessionCreateSchema,
    SessionListQuerySchema,
    SessionSchema,
)
from simplytrack.services.exercises.dto import ExerciseCreateIn, ExerciseListIn, ExerciseUpdateIn
from simplytrack.services.exercises.service import ExerciseService
from simplytrack.services.workouts.dto import SessionCreateIn, SessionListIn
from simplytrack.services.workouts.sessions import WorkoutSessionService

bp = Blueprint("exercises", __name__)

exercise_schema = ExerciseSchema()
exercise_create_schema = ExerciseCreateSchema()
exercise_update_schema = ExerciseUpdateSchema()
exercise_item_schema = ExerciseItemSchema()
exercise_detail_schema = ExerciseDetailSchema()
exercise_list_query_schema = ExerciseListQuerySchema()
session_schema = SessionSchema()
session_create_schema = SessionCreateSchema()
session_list_query_schema = SessionListQuerySchema()


def _service() -> ExerciseService:
    return ExerciseService(ctx=service_context())


@bp.get("")
@require_auth
@timing
def list_exercises():
    """List the caller's exercises, newest first, with their latest session."""
    args = load_args(exercise_list_query_schema)
    items = _service().list_exercises(current_user_id(), ExerciseListIn(**args))
    return data_response(exercise_item_schema, items, many=True)


@bp.post("")
@require_auth
@timing
def create_exercise():
    data = load_json(exercise_create_schema)
    exercise = _service().create_exercise(current_user_id(), ExerciseCreateIn(**data))
    return data_response(exercise_schema, exercise, status=201)


@bp.get("/<exercise_id>")
@require_auth
@timing
def get_exercise(exercise_id: str):
    detail = _service().get_exercise(current_user_id(), exercise_id)
    return data_response(exercise_detail_schema, detail)


@bp.patch("/<exercise_id>")
@require_auth
@timing
def update_exercise(exercise_id: str):
    data = load_json(exercise_update_schema)
    exercise = _service().update_exercise(current_user_id(), exercise_id, ExerciseUpdateIn(**data))
    return data_response(exercise_schema, exercise)


@bp.delete("/<exercise_id>")
@require_auth
@timing
def delete_exercise(exercise_id: str):
    """Delete the exercise together with its sessions and sets."""
    _service().delete_exercise(current_user_id(), exercise_id)
    return no_content()


# ---------------------------------------------------------------------------
# Nested sessions
# ---------------------------------------------------------------------------


@bp.get("/<exercise_id>/sessions")
@require_auth
@timing
def list_sessions(exercise_id: str):
    """List sessions of an exercise (``limit``, ``offset``, ``from``, ``to``)."""
    args = load_args(session_list_query_schema)
    sessions = WorkoutSessionService(ctx=service_context()).list_sessions(
        current_user_id(), exercise_id, SessionListIn(**args)
    )
    return data_response(session_schema, sessions, many=True)


@bp.post("/<exercise_id>/sessions")
@require_auth
@timing
def create_session(exercise_id: str):
    data = load_json(session_create_schema)
    session = WorkoutSessionService(ctx=service_context()).create_session(
        current_user_id(), exercise_id, SessionCreateIn(**data)
    )
    return data_response(session_schema, session, status=201)
