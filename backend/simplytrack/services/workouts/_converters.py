"""ORM -> DTO converters for the workouts package."""

from __future__ import annotations

from simplytrack.models.workout import WorkoutSession, WorkoutSet
from simplytrack.services.workouts.dto import LastSessionOut, SessionOut, SetOut


def session_to_out(row: WorkoutSession) -> SessionOut:
    return SessionOut(
        id=row.id,
        exercise_id=row.exercise_id,
        date=row.date,
        created_at=row.created_at,
        total_weight=float(row.total_weight or 0),
        total_reps=int(row.total_reps or 0),
        sets_count=int(row.sets_count or 0),
    )


def session_to_last(row: WorkoutSession) -> LastSessionOut:
    return LastSessionOut(
        session_id=row.id,
        date=row.date,
        total_weight=float(row.total_weight or 0),
        total_reps=int(row.total_reps or 0),
        sets_count=int(row.sets_count or 0),
    )


def set_to_out(row: WorkoutSet) -> SetOut:
    return SetOut(
        id=row.id,
        session_id=row.session_id,
        reps=int(row.reps),
        weight=float(row.weight),
        created_at=row.created_at,
    )
