"""Session listing and aggregate queries."""

from __future__ import annotations

import datetime

import pytest

from simplytrack.repositories import SetTotals, WorkoutSessionRepository, WorkoutSetRepository
from tests.factories.exercise import ExerciseFactory
from tests.factories.workout import WorkoutSessionFactory, WorkoutSetFactory


@pytest.fixture()
def sessions(session):
    return WorkoutSessionRepository(session=session)


def test_totals_of_empty_session(sessions):
    ws = WorkoutSessionFactory()
    assert sessions.totals_of(ws.id) == SetTotals(0, 0, 0.0)


def test_totals_of_sums_live_sets(sessions):
    ws = WorkoutSessionFactory()
    WorkoutSetFactory(session=ws, reps=10, weight=60)
    WorkoutSetFactory(session=ws, reps=8, weight=65)

    totals = sessions.totals_of(ws.id)
    assert totals.sets_count == 2
    assert totals.total_reps == 18
    assert totals.total_weight == pytest.approx(1120.0)


def test_list_for_exercise_orders_by_date_desc_and_filters(sessions):
    ex = ExerciseFactory()
    d = datetime.date(2024, 3, 1)
    old = WorkoutSessionFactory(exercise=ex, date=d)
    mid = WorkoutSessionFactory(exercise=ex, date=d + datetime.timedelta(days=1))
    new = WorkoutSessionFactory(exercise=ex, date=d + datetime.timedelta(days=2))
    WorkoutSessionFactory()  # other exercise

    assert [s.id for s in sessions.list_for_exercise(ex.id)] == [new.id, mid.id, old.id]
    ranged = sessions.list_for_exercise(
        ex.id, date_from=d + datetime.timedelta(days=1), date_to=d + datetime.timedelta(days=1)
    )
    assert [s.id for s in ranged] == [mid.id]
    assert [s.id for s in sessions.list_for_exercise(ex.id, limit=1, offset=1)] == [mid.id]
    assert sessions.count_for_exercise(ex.id) == 3


def test_latest_for_exercises_single_query(sessions):
    ex1, ex2, ex3 = ExerciseFactory(), ExerciseFactory(), ExerciseFactory()
    WorkoutSessionFactory(exercise=ex1, date=datetime.date(2024, 1, 1))
    latest1 = WorkoutSessionFactory(exercise=ex1, date=datetime.date(2024, 2, 1))
    latest2 = WorkoutSessionFactory(exercise=ex2, date=datetime.date(2023, 5, 5))

    latest = sessions.latest_for_exercises([ex1.id, ex2.id, ex3.id])
    assert latest[ex1.id].id == latest1.id
    assert latest[ex2.id].id == latest2.id
    assert ex3.id not in latest
    assert sessions.latest_for_exercises([]) == {}
    assert sessions.latest_for_exercise(ex1.id).id == latest1.id


def test_list_for_session_in_logging_order(session):
    ws = WorkoutSessionFactory()
    first = WorkoutSetFactory(session=ws)
    second = WorkoutSetFactory(session=ws)
    repo = WorkoutSetRepository(session=session)
    assert [s.id for s in repo.list_for_session(ws.id)] == [first.id, second.id]


def test_set_update_whitelist(session):
    ws = WorkoutSetFactory()
    repo = WorkoutSetRepository(session=session)
    repo.update(ws, reps=3)
    assert ws.reps == 3
    with pytest.raises(ValueError):
        repo.update(ws, session_id="elsewhere")
