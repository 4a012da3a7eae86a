"""
DTOs for workout sessions and sets.

All inputs are validated by the API schemas first; the models re-check the
numeric rules (``reps >= 1``, ``weight >= 0``) on assignment.
"""

from __future__ import annotations

from dataclasses import dataclass
import datetime as dt

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SessionListIn:
    """
    Filter and paging options for the sessions of one exercise.

    :param limit: Page size (default 50).
    :type limit: int
    :param offset: Rows to skip.
    :type offset: int
    :param date_from: Inclusive lower bound on the session date.
    :type date_from: date | None
    :param date_to: Inclusive upper bound on the session date.
    :type date_to: date | None
    """

    limit: int = 50
    offset: int = 0
    date_from: dt.date | None = None
    date_to: dt.date | None = None


@dataclass(frozen=True, slots=True)
class SessionCreateIn:
    """
    Input DTO for a new session.

    :param date: Logical training date; today (UTC) when omitted.
    :type date: date | None
    """

    date: dt.date | None = None


@dataclass(frozen=True, slots=True)
class SetCreateIn:
    """
    Input DTO for a new set.

    :param reps: Repetitions (>= 1).
    :type reps: int
    :param weight: Load (>= 0).
    :type weight: float
    """

    reps: int
    weight: float


@dataclass(frozen=True, slots=True)
class SetUpdateIn:
    """
    Partial update of a set. ``None`` leaves a field unchanged.

    :param reps: New repetitions.
    :type reps: int | None
    :param weight: New load.
    :type weight: float | None
    """

    reps: int | None = None
    weight: float | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SessionOut:
    """Projection of a session including its derived totals."""

    id: str
    exercise_id: str
    date: dt.date
    created_at: dt.datetime | None
    total_weight: float
    total_reps: int
    sets_count: int


@dataclass(frozen=True, slots=True)
class LastSessionOut:
    """Compact summary of an exercise's most recent session."""

    session_id: str
    date: dt.date
    total_weight: float
    total_reps: int
    sets_count: int


@dataclass(frozen=True, slots=True)
class SetOut:
    """Projection of a single set."""

    id: str
    session_id: str
    reps: int
    weight: float
    created_at: dt.datetime | None


@dataclass(frozen=True, slots=True)
class SessionDetailOut:
    """A session together with its sets in logging order."""

    session: SessionOut
    sets: list[SetOut]
