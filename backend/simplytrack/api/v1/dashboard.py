"""Dashboard overview endpoint."""

from __future__ import annotations

from flask import Blueprint

from simplytrack.api.deps import (
    current_user_id,
    data_response,
    load_args,
    require_auth,
    service_context,
    timing,
)
from simplytrack.schemas import DashboardQuerySchema, ExerciseItemSchema
from simplytrack.services.dashboard.service import DashboardService

bp = Blueprint("dashboard", __name__)

dashboard_query_schema = DashboardQuerySchema()
exercise_item_schema = ExerciseItemSchema()


@bp.get("/exercises")
@require_auth
@timing
def dashboard_exercises():
    """Return up to ``limit`` (default 100) exercises with their latest session."""
    args = load_args(dashboard_query_schema)
    items = DashboardService(ctx=service_context()).exercises(current_user_id(), limit=args["limit"])
    return data_response(exercise_item_schema, items, many=True)
