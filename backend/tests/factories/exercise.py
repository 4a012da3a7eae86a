"""Factory Boy definitions for :class:`simplytrack.models.exercise.Exercise`."""

from __future__ import annotations

import factory

from simplytrack.models.exercise import Exercise
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class ExerciseFactory(BaseFactory):
    """Build a persisted personal exercise (owner created on demand)."""

    class Meta:
        model = Exercise

    owner = factory.SubFactory(UserFactory)
    name = factory.Sequence(lambda n: f"Exercise {n}")
    description = None


class SharedExerciseFactory(BaseFactory):
    """Build a persisted shared template (``user_id IS NULL``)."""

    class Meta:
        model = Exercise

    user_id = None
    name = factory.Sequence(lambda n: f"Template {n}")
    description = "Shared template"
