"""Workout session use-cases, scoped to the authenticated owner."""

from __future__ import annotations

from simplytrack.models.base import utcnow
from simplytrack.models.workout import WorkoutSession
from simplytrack.services._shared.base import BaseService
from simplytrack.services._shared.errors import NotFoundError, ValidationFailedError
from simplytrack.services.workouts._converters import session_to_out, set_to_out
from simplytrack.services.workouts.dto import (
    SessionCreateIn,
    SessionDetailOut,
    SessionListIn,
    SessionOut,
)

MAX_PAGE_SIZE = 200


class WorkoutSessionService(BaseService):
    """
    Application service for workout sessions.

    Every operation takes the caller's ``user_id`` and resolves resources
    through the ownership-scoped repositories; a resource owned by someone
    else raises :class:`NotFoundError`, exactly like a missing one.
    """

    def list_sessions(self, user_id: str, exercise_id: str, dto: SessionListIn) -> list[SessionOut]:
        """
        List the sessions of an owned exercise, most recent first.

        :param user_id: Authenticated user id.
        :type user_id: str
        :param exercise_id: Parent exercise.
        :type exercise_id: str
        :param dto: Paging and date-range options.
        :type dto: SessionListIn
        :returns: Session projections.
        :rtype: list[SessionOut]
        :raises NotFoundError: If the exercise is not owned by ``user_id``.
        :raises ValidationFailedError: If the date range is inverted.
        """
        if dto.date_from and dto.date_to and dto.date_from > dto.date_to:
            raise ValidationFailedError("from", "must not be after 'to'")
        limit = max(1, min(int(dto.limit), MAX_PAGE_SIZE))
        offset = max(0, int(dto.offset))

        with self.ro_uow() as uow:
            if not uow.exercises.belongs_to(exercise_id, user_id):
                raise NotFoundError("Exercise", exercise_id)
            rows = uow.workout_sessions.list_for_exercise(
                exercise_id,
                date_from=dto.date_from,
                date_to=dto.date_to,
                limit=limit,
                offset=offset,
            )
            return [session_to_out(r) for r in rows]

    def get_session(self, user_id: str, session_id: str) -> SessionDetailOut:
        """
        Return a session with its sets.

        :raises NotFoundError: If the session is not owned by ``user_id``.
        """
        with self.ro_uow() as uow:
            row = uow.workout_sessions.get_owned(session_id, user_id)
            if row is None:
                raise NotFoundError("Session", session_id)
            sets = uow.workout_sets.list_for_session(row.id)
            return SessionDetailOut(
                session=session_to_out(row),
                sets=[set_to_out(s) for s in sets],
            )

    def create_session(self, user_id: str, exercise_id: str, dto: SessionCreateIn) -> SessionOut:
        """
        Start a session on an owned exercise.

        Shared templates cannot host sessions and are reported as not found.

        :param user_id: Authenticated user id.
        :type user_id: str
        :param exercise_id: Parent exercise.
        :type exercise_id: str
        :param dto: Optional logical date.
        :type dto: SessionCreateIn
        :returns: The new session with zeroed totals.
        :rtype: SessionOut
        :raises NotFoundError: If the exercise is not owned by ``user_id``.
        """
        with self.rw_uow() as uow:
            exercise = uow.exercises.get_owned(exercise_id, user_id)
            if exercise is None:
                raise NotFoundError("Exercise", exercise_id)

            row = WorkoutSession(
                exercise_id=exercise.id,
                date=dto.date or utcnow().date(),
                total_weight=0.0,
                total_reps=0,
                sets_count=0,
            )
            uow.workout_sessions.add(row)
            return session_to_out(row)

    def delete_session(self, user_id: str, session_id: str) -> None:
        """
        Delete a session and its sets.

        :raises NotFoundError: If the session is not owned by ``user_id``.
        """
        with self.rw_uow() as uow:
            row = uow.workout_sessions.get_owned(session_id, user_id, for_update=True)
            if row is None:
                raise NotFoundError("Session", session_id)
            uow.workout_sessions.delete(row)
