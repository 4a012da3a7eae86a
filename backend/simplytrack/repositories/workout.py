"""Repositories for workout sessions and sets (ownership-scoped through Exercise)."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any, NamedTuple, cast

from sqlalchemy import Select, func, select

from simplytrack.models.exercise import Exercise
from simplytrack.models.workout import WorkoutSession, WorkoutSet
from simplytrack.repositories.ownership import OwnershipScopedRepository


class SetTotals(NamedTuple):
    """Aggregates over the live sets of one session."""

    sets_count: int
    total_reps: int
    total_weight: float


class WorkoutSessionRepository(OwnershipScopedRepository[WorkoutSession]):
    """Persistence-only repository for :class:`WorkoutSession`."""

    model = WorkoutSession

    def _join_to_owner(self, stmt: Select[Any]) -> Select[Any]:
        return stmt.join(Exercise, WorkoutSession.exercise_id == Exercise.id)

    @staticmethod
    def _recency(stmt: Select[Any]) -> Select[Any]:
        return stmt.order_by(
            WorkoutSession.date.desc(),
            WorkoutSession.created_at.desc(),
            WorkoutSession.id.asc(),
        )

    def list_for_exercise(
        self,
        exercise_id: str,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[WorkoutSession]:
        """List sessions of one exercise, most recent first.

        The caller is expected to have checked ownership of ``exercise_id``.

        :param exercise_id: Parent exercise id.
        :type exercise_id: str
        :param date_from: Inclusive lower bound on ``date``.
        :type date_from: date | None
        :param date_to: Inclusive upper bound on ``date``.
        :type date_to: date | None
        :param limit: Page size.
        :type limit: int
        :param offset: Rows to skip.
        :type offset: int
        :returns: Sessions ordered by ``date`` then ``created_at`` descending.
        :rtype: list[WorkoutSession]
        """
        stmt = select(WorkoutSession).where(WorkoutSession.exercise_id == exercise_id)
        if date_from is not None:
            stmt = stmt.where(WorkoutSession.date >= date_from)
        if date_to is not None:
            stmt = stmt.where(WorkoutSession.date <= date_to)
        stmt = self._recency(stmt).limit(int(limit)).offset(int(offset))
        return list(self.session.execute(stmt).scalars().all())

    def count_for_exercise(self, exercise_id: str) -> int:
        stmt = select(func.count(WorkoutSession.id)).where(
            WorkoutSession.exercise_id == exercise_id
        )
        return int(self.session.execute(stmt).scalar_one())

    def latest_for_exercise(self, exercise_id: str) -> WorkoutSession | None:
        stmt = self._recency(
            select(WorkoutSession).where(WorkoutSession.exercise_id == exercise_id)
        ).limit(1)
        return cast(WorkoutSession | None, self.session.execute(stmt).scalars().first())

    def latest_for_exercises(self, exercise_ids: Iterable[str]) -> dict[str, WorkoutSession]:
        """Return the most recent session per exercise in a single query.

        :param exercise_ids: Exercise ids to look up.
        :type exercise_ids: Iterable[str]
        :returns: Mapping ``exercise_id -> latest session``; exercises without
            sessions are absent.
        :rtype: dict[str, WorkoutSession]
        """
        ids = list(exercise_ids)
        if not ids:
            return {}
        stmt = self._recency(select(WorkoutSession).where(WorkoutSession.exercise_id.in_(ids)))
        latest: dict[str, WorkoutSession] = {}
        for row in self.session.execute(stmt).scalars():
            latest.setdefault(row.exercise_id, row)
        return latest

    def totals_of(self, session_id: str) -> SetTotals:
        """Compute count, Σ reps and Σ (reps × weight) over the session's sets."""
        stmt = select(
            func.count(WorkoutSet.id),
            func.coalesce(func.sum(WorkoutSet.reps), 0),
            func.coalesce(func.sum(WorkoutSet.reps * WorkoutSet.weight), 0),
        ).where(WorkoutSet.session_id == session_id)
        count, reps, volume = self.session.execute(stmt).one()
        return SetTotals(
            sets_count=int(count), total_reps=int(reps), total_weight=round(float(volume), 2)
        )


class WorkoutSetRepository(OwnershipScopedRepository[WorkoutSet]):
    """Persistence-only repository for :class:`WorkoutSet`."""

    model = WorkoutSet

    def _join_to_owner(self, stmt: Select[Any]) -> Select[Any]:
        return stmt.join(WorkoutSession, WorkoutSet.session_id == WorkoutSession.id).join(
            Exercise, WorkoutSession.exercise_id == Exercise.id
        )

    def _updatable_fields(self):
        return {"reps", "weight"}

    def list_for_session(self, session_id: str) -> list[WorkoutSet]:
        """Return the session's sets in logging order."""
        stmt = (
            select(WorkoutSet)
            .where(WorkoutSet.session_id == session_id)
            .order_by(WorkoutSet.created_at.asc(), WorkoutSet.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def owned_session_id(self, set_id: str, user_id: str) -> str | None:
        """Return the parent session id of an owned set without loading the set."""
        stmt = self._join_to_owner(select(WorkoutSet.session_id)).where(
            WorkoutSet.id == set_id, Exercise.user_id == user_id
        )
        return cast(str | None, self.session.execute(stmt).scalar())
