from simplytrack.models.exercise import Exercise, Ownership, Personal, Shared
from simplytrack.models.refresh_token import RefreshToken
from simplytrack.models.user import User
from simplytrack.models.workout import WorkoutSession, WorkoutSet

__all__ = [
    "Exercise",
    "Ownership",
    "Personal",
    "RefreshToken",
    "Shared",
    "User",
    "WorkoutSession",
    "WorkoutSet",
]
