"""Tests for :class:`simplytrack.services.exercises.service.ExerciseService`."""

from __future__ import annotations

import datetime

import pytest

from simplytrack.repositories import WorkoutSessionRepository
from simplytrack.services._shared.errors import NotFoundError, ValidationFailedError
from simplytrack.services.exercises import ExerciseService
from simplytrack.services.exercises.dto import ExerciseCreateIn, ExerciseListIn, ExerciseUpdateIn
from tests.factories.exercise import ExerciseFactory, SharedExerciseFactory
from tests.factories.user import UserFactory
from tests.factories.workout import WorkoutSessionFactory


@pytest.fixture()
def service():
    return ExerciseService()


@pytest.fixture()
def alice():
    return UserFactory()


def test_create_and_get(service, alice):
    out = service.create_exercise(alice.id, ExerciseCreateIn(name=" Deadlift ", notes="Sumo"))
    assert out.name == "Deadlift"
    assert out.notes == "Sumo"
    assert out.user_id == alice.id
    assert out.is_shared is False

    detail = service.get_exercise(alice.id, out.id)
    assert detail.exercise.id == out.id
    assert detail.sessions_count == 0
    assert detail.last_session is None


def test_create_rejects_blank_name(service, alice):
    with pytest.raises(ValidationFailedError):
        service.create_exercise(alice.id, ExerciseCreateIn(name="   "))


def test_get_reports_latest_session_and_count(service, alice):
    ex = ExerciseFactory(owner=alice)
    WorkoutSessionFactory(exercise=ex, date=datetime.date(2024, 1, 1))
    latest = WorkoutSessionFactory(exercise=ex, date=datetime.date(2024, 1, 8))

    detail = service.get_exercise(alice.id, ex.id)
    assert detail.sessions_count == 2
    assert detail.last_session.id == latest.id


def test_foreign_exercise_is_not_found(service, alice):
    foreign = ExerciseFactory()
    with pytest.raises(NotFoundError):
        service.get_exercise(alice.id, foreign.id)
    with pytest.raises(NotFoundError):
        service.update_exercise(alice.id, foreign.id, ExerciseUpdateIn(name="Mine"))
    with pytest.raises(NotFoundError):
        service.delete_exercise(alice.id, foreign.id)


def test_shared_template_readable_but_immutable(service, alice):
    tpl = SharedExerciseFactory()
    detail = service.get_exercise(alice.id, tpl.id)
    assert detail.exercise.user_id is None
    assert detail.exercise.is_shared is True
    assert detail.sessions_count == 0
    assert detail.last_session is None
    with pytest.raises(NotFoundError):
        service.update_exercise(alice.id, tpl.id, ExerciseUpdateIn(name="Hijack"))
    with pytest.raises(NotFoundError):
        service.delete_exercise(alice.id, tpl.id)


def test_update_partial_fields(service, alice):
    ex = ExerciseFactory(owner=alice, name="Row", description="Old")
    out = service.update_exercise(alice.id, ex.id, ExerciseUpdateIn(notes="New"))
    assert (out.name, out.notes) == ("Row", "New")

    out = service.update_exercise(alice.id, ex.id, ExerciseUpdateIn(notes=""))
    assert out.notes is None

    with pytest.raises(ValidationFailedError):
        service.update_exercise(alice.id, ex.id, ExerciseUpdateIn(name=""))


def test_delete_removes_sessions(service, alice, session):
    ex = ExerciseFactory(owner=alice)
    ws_id = WorkoutSessionFactory(exercise=ex).id

    service.delete_exercise(alice.id, ex.id)
    assert WorkoutSessionRepository(session=session).get(ws_id) is None
    with pytest.raises(NotFoundError):
        service.get_exercise(alice.id, ex.id)


def test_list_with_last_session_summary(service, alice):
    with_history = ExerciseFactory(owner=alice)
    WorkoutSessionFactory(exercise=with_history, total_reps=18, total_weight=1120.0, sets_count=2)
    ExerciseFactory(owner=alice)
    ExerciseFactory()  # foreign

    items = service.list_exercises(alice.id, ExerciseListIn())
    assert len(items) == 2
    by_id = {i.exercise.id: i for i in items}
    summary = by_id[with_history.id].last_session
    assert (summary.sets_count, summary.total_reps, summary.total_weight) == (2, 18, 1120.0)

    bare = service.list_exercises(alice.id, ExerciseListIn(include_last_session=False))
    assert all(i.last_session is None for i in bare)


def test_list_include_shared(service, alice):
    ExerciseFactory(owner=alice)
    SharedExerciseFactory()
    assert len(service.list_exercises(alice.id, ExerciseListIn())) == 1
    assert len(service.list_exercises(alice.id, ExerciseListIn(include_shared=True))) == 2


def test_listing_flags_templates_as_shared(service, alice):
    own = ExerciseFactory(owner=alice)
    tpl = SharedExerciseFactory()
    items = service.list_exercises(alice.id, ExerciseListIn(include_shared=True))
    flags = {i.exercise.id: (i.exercise.is_shared, i.exercise.user_id) for i in items}
    assert flags == {own.id: (False, alice.id), tpl.id: (True, None)}
