from .aggregates import recompute_session_totals
from .sessions import WorkoutSessionService
from .sets import WorkoutSetService

__all__ = ["WorkoutSessionService", "WorkoutSetService", "recompute_session_totals"]
