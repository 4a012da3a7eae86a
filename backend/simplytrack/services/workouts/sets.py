"""Workout set use-cases. Every mutation ends by recomputing session totals."""

from __future__ import annotations

from typing import Any

from simplytrack.models.workout import WorkoutSet
from simplytrack.services._shared.base import BaseService
from simplytrack.services._shared.errors import NotFoundError, ValidationFailedError
from simplytrack.services.workouts._converters import set_to_out
from simplytrack.services.workouts.aggregates import recompute_session_totals
from simplytrack.services.workouts.dto import SetCreateIn, SetOut, SetUpdateIn
from simplytrack.uow.base import UnitOfWork


class WorkoutSetService(BaseService):
    """
    Application service for workout sets.

    Concurrency
    -----------
    Each mutation locks the parent session row before touching its sets, so
    mutations on the same session serialize and the recomputed totals always
    reflect every committed set. Different sessions never block each other.
    """

    def add_set(self, user_id: str, session_id: str, dto: SetCreateIn) -> SetOut:
        """
        Log a set on an owned session.

        :param user_id: Authenticated user id.
        :type user_id: str
        :param session_id: Parent session.
        :type session_id: str
        :param dto: Reps and weight.
        :type dto: SetCreateIn
        :returns: The new set.
        :rtype: SetOut
        :raises NotFoundError: If the session is not owned by ``user_id``.
        :raises ValidationFailedError: If reps or weight are out of range.
        """
        with self.rw_uow() as uow:
            session = uow.workout_sessions.get_owned(session_id, user_id, for_update=True)
            if session is None:
                raise NotFoundError("Session", session_id)

            try:
                row = WorkoutSet(session_id=session.id, reps=dto.reps, weight=dto.weight)
            except ValueError as exc:
                raise ValidationFailedError("set", str(exc)) from exc
            uow.workout_sets.add(row)

            recompute_session_totals(uow, session.id)
            return set_to_out(row)

    def update_set(self, user_id: str, set_id: str, dto: SetUpdateIn) -> SetOut:
        """
        Change the reps and/or weight of an owned set.

        :raises NotFoundError: If the set is not owned by ``user_id``.
        :raises ValidationFailedError: If reps or weight are out of range.
        """
        with self.rw_uow() as uow:
            row = self._lock_owned_set(uow, user_id, set_id)

            updates: dict[str, Any] = {
                k: v for k, v in {"reps": dto.reps, "weight": dto.weight}.items() if v is not None
            }
            if updates:
                try:
                    uow.workout_sets.update(row, **updates)
                except ValueError as exc:
                    raise ValidationFailedError("set", str(exc)) from exc

            recompute_session_totals(uow, row.session_id)
            return set_to_out(row)

    def delete_set(self, user_id: str, set_id: str) -> None:
        """
        Remove an owned set.

        :raises NotFoundError: If the set is not owned by ``user_id``.
        """
        with self.rw_uow() as uow:
            row = self._lock_owned_set(uow, user_id, set_id)
            session_id = row.session_id
            uow.workout_sets.delete(row)
            recompute_session_totals(uow, session_id)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    @staticmethod
    def _lock_owned_set(uow: UnitOfWork, user_id: str, set_id: str) -> WorkoutSet:
        """Lock the parent session, then load the set under that lock."""
        session_id = uow.workout_sets.owned_session_id(set_id, user_id)
        if session_id is None:
            raise NotFoundError("Set", set_id)
        if uow.workout_sessions.get_owned(session_id, user_id, for_update=True) is None:
            raise NotFoundError("Set", set_id)
        row = uow.workout_sets.get_owned(set_id, user_id)
        if row is None:
            # deleted between the lookup and the lock
            raise NotFoundError("Set", set_id)
        return row
