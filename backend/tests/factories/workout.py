"""Factory Boy definitions for workout sessions and sets."""

from __future__ import annotations

import datetime

import factory

from simplytrack.models.workout import WorkoutSession, WorkoutSet
from tests.factories import BaseFactory
from tests.factories.exercise import ExerciseFactory


class WorkoutSessionFactory(BaseFactory):
    """Build a persisted :class:`WorkoutSession` with zeroed totals.

    Totals are only consistent with the sets when the sets are logged through
    :class:`~simplytrack.services.workouts.WorkoutSetService`.
    """

    class Meta:
        model = WorkoutSession

    exercise = factory.SubFactory(ExerciseFactory)
    date = factory.LazyFunction(datetime.date.today)
    total_weight = 0.0
    total_reps = 0
    sets_count = 0


class WorkoutSetFactory(BaseFactory):
    """Build a persisted :class:`WorkoutSet` (totals are not recomputed)."""

    class Meta:
        model = WorkoutSet

    session = factory.SubFactory(WorkoutSessionFactory)
    reps = 10
    weight = 50.0
