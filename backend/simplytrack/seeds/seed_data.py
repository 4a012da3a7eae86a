"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from simplytrack.models.exercise import Exercise
from simplytrack.models.user import User, normalize_email
from simplytrack.models.workout import WorkoutSession, WorkoutSet
from simplytrack.repositories.workout import WorkoutSessionRepository

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

SHARED_EXERCISE_FIXTURES: list[dict[str, str]] = [
    {"name": "Bench Press", "description": "Barbell, flat bench."},
    {"name": "Back Squat", "description": "High-bar barbell squat."},
    {"name": "Deadlift", "description": "Conventional stance."},
    {"name": "Overhead Press", "description": "Standing barbell press."},
    {"name": "Barbell Row", "description": "Bent-over, pronated grip."},
    {"name": "Pull-up", "description": "Bodyweight; add load with a belt."},
]

DEMO_USER: dict[str, str] = {
    "email": "demo@simplytrack.dev",
    "password": "DemoPass123!",
    "first_name": "Demo",
    "last_name": "Lifter",
}

# (days ago, [(reps, weight), ...])
DEMO_SESSIONS: list[tuple[int, list[tuple[int, float]]]] = [
    (7, [(10, 60.0), (8, 65.0), (6, 70.0)]),
    (3, [(10, 62.5), (8, 67.5), (6, 72.5)]),
]


def _session(database: SQLAlchemy) -> Session:
    """Return the SQLAlchemy session bound to ``database``."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalars().first()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    return instance, True


def seed_shared_exercises(
    database: SQLAlchemy, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Create the shared exercise templates (``user_id IS NULL``)."""
    if verbose:
        LOGGER.info("Seeding shared exercise templates...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    for fixture in SHARED_EXERCISE_FIXTURES:
        _, created = _get_or_create(
            session,
            Exercise,
            user_id=None,
            name=fixture["name"],
            defaults={"description": fixture["description"]},
        )
        _touch(summary, "exercises", created)

    session.commit()
    return summary


def seed_demo_user(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create a demo account with one personal exercise and a short history."""
    if verbose:
        LOGGER.info("Seeding demo user...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    email = normalize_email(DEMO_USER["email"])
    user = session.execute(select(User).filter_by(email=email)).scalars().first()
    created = user is None
    if user is None:
        user = User(
            email=email,
            password=DEMO_USER["password"],
            first_name=DEMO_USER["first_name"],
            last_name=DEMO_USER["last_name"],
        )
        session.add(user)
        session.flush()
    _touch(summary, "users", created)

    exercise, created = _get_or_create(
        session,
        Exercise,
        user_id=user.id,
        name="Bench Press",
        defaults={"description": "Personal log"},
    )
    session.flush()
    _touch(summary, "exercises", created)

    repo = WorkoutSessionRepository(session=session)
    today = date.today()
    for days_ago, sets in DEMO_SESSIONS:
        workout, created = _get_or_create(
            session,
            WorkoutSession,
            exercise_id=exercise.id,
            date=today - timedelta(days=days_ago),
        )
        session.flush()
        _touch(summary, "workout_sessions", created)
        if not created:
            continue
        for reps, weight in sets:
            session.add(WorkoutSet(session_id=workout.id, reps=reps, weight=weight))
            _touch(summary, "workout_sets", True)
        session.flush()
        totals = repo.totals_of(workout.id)
        workout.sets_count = totals.sets_count
        workout.total_reps = totals.total_reps
        workout.total_weight = totals.total_weight

    session.commit()
    return summary


def run_all(
    database: SQLAlchemy, *, demo: bool = True, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Seed shared templates, then (unless ``demo`` is false) the demo account.

    Returns per-table ``created``/``existing`` counters.
    """
    seeders = [seed_shared_exercises]
    if demo:
        seeders.append(seed_demo_user)
    combined: dict[str, dict[str, int]] = {}
    for seeder in seeders:
        if verbose:
            LOGGER.info("Running %s", seeder.__name__)
        for table, counters in seeder(database, verbose=verbose).items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined
