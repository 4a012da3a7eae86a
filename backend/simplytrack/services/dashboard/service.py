"""Dashboard overview: the caller's exercises with their latest session."""

from __future__ import annotations

from simplytrack.services._shared.base import BaseService
from simplytrack.services.exercises.dto import ExerciseItemOut, ExerciseListIn
from simplytrack.services.exercises.service import list_items

DEFAULT_LIMIT = 100


class DashboardService(BaseService):
    """Read-only projections for the landing screen."""

    def exercises(self, user_id: str, *, limit: int = DEFAULT_LIMIT) -> list[ExerciseItemOut]:
        """
        Return up to ``limit`` personal exercises, newest first, each with its
        latest session summary. A non-positive ``limit`` returns everything.

        :param user_id: Authenticated user id.
        :type user_id: str
        :param limit: Maximum number of exercises.
        :type limit: int
        :rtype: list[ExerciseItemOut]
        """
        with self.ro_uow() as uow:
            return list_items(
                uow,
                user_id,
                ExerciseListIn(include_last_session=True, limit=limit if limit > 0 else None),
            )
