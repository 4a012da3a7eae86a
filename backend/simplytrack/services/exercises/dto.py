# simplytrack/services/exercises/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from simplytrack.services.workouts.dto import LastSessionOut, SessionOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class ExerciseListIn:
    """
    Listing options.

    :param q: Optional case-insensitive name filter.
    :type q: str | None
    :param include_last_session: Attach each exercise's latest session summary.
    :type include_last_session: bool
    :param include_shared: Also list shared templates.
    :type include_shared: bool
    :param limit: Optional cap on the number of exercises.
    :type limit: int | None
    """

    q: str | None = None
    include_last_session: bool = True
    include_shared: bool = False
    limit: int | None = None


@dataclass(frozen=True, slots=True)
class ExerciseCreateIn:
    """
    Input DTO for a personal exercise.

    :param name: Display name (1..100 characters).
    :type name: str
    :param notes: Free text (<= 500 characters).
    :type notes: str | None
    """

    name: str
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class ExerciseUpdateIn:
    """
    Partial update. ``None`` leaves a field unchanged; empty notes clear them.

    :param name: New display name.
    :type name: str | None
    :param notes: New notes.
    :type notes: str | None
    """

    name: str | None = None
    notes: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class ExerciseOut:
    """Projection of an exercise. Shared templates have no ``user_id``."""

    id: str
    user_id: str | None
    name: str
    notes: str | None
    created_at: datetime | None
    is_shared: bool = False


@dataclass(frozen=True, slots=True)
class ExerciseItemOut:
    """List/dashboard item: an exercise with its latest session summary."""

    exercise: ExerciseOut
    last_session: LastSessionOut | None = None


@dataclass(frozen=True, slots=True)
class ExerciseDetailOut:
    """Exercise detail with session count and the full latest session."""

    exercise: ExerciseOut
    sessions_count: int
    last_session: SessionOut | None
