# simplytrack/services/exercises/service.py
from __future__ import annotations

from simplytrack.models.exercise import Exercise, Personal, Shared
from simplytrack.repositories.exercise import ExerciseRepository
from simplytrack.services._shared.base import BaseService
from simplytrack.services._shared.errors import NotFoundError, ValidationFailedError
from simplytrack.services.exercises.dto import (
    ExerciseCreateIn,
    ExerciseDetailOut,
    ExerciseItemOut,
    ExerciseListIn,
    ExerciseOut,
    ExerciseUpdateIn,
)
from simplytrack.services.workouts._converters import session_to_last, session_to_out
from simplytrack.uow.base import UnitOfWork


def exercise_to_out(row: Exercise) -> ExerciseOut:
    match row.ownership:
        case Personal(owner_id=owner_id):
            user_id, shared = owner_id, False
        case Shared():
            user_id, shared = None, True
    return ExerciseOut(
        id=row.id,
        user_id=user_id,
        name=row.name,
        notes=row.description,
        created_at=row.created_at,
        is_shared=shared,
    )


def list_items(uow: UnitOfWork, user_id: str, dto: ExerciseListIn) -> list[ExerciseItemOut]:
    """
    Build exercise list items inside an open unit of work.

    Latest sessions are fetched for all listed exercises in one query.

    :param uow: Active unit of work.
    :type uow: UnitOfWork
    :param user_id: Authenticated user id.
    :type user_id: str
    :param dto: Listing options.
    :type dto: ExerciseListIn
    :rtype: list[ExerciseItemOut]
    """
    rows = uow.exercises.list_for_user(
        user_id,
        search=dto.q,
        include_shared=dto.include_shared,
        limit=dto.limit,
    )
    latest = (
        uow.workout_sessions.latest_for_exercises(r.id for r in rows)
        if dto.include_last_session
        else {}
    )
    items: list[ExerciseItemOut] = []
    for row in rows:
        last = latest.get(row.id)
        items.append(
            ExerciseItemOut(
                exercise=exercise_to_out(row),
                last_session=session_to_last(last) if last is not None else None,
            )
        )
    return items


class ExerciseService(BaseService):
    """
    Application service for the caller's exercises.

    Responsibilities
    ----------------
    - List personal exercises (optionally with shared templates) and their
      latest sessions.
    - Create/read/update/delete personal exercises.

    Notes
    -----
    - Shared templates are readable but never mutable; a mutation aimed at one
      is reported as :class:`NotFoundError`, like an exercise of another user.
    - Deleting an exercise removes its sessions and their sets.
    """

    # ------------------------------------------------------------------ #
    # Read
    # ------------------------------------------------------------------ #

    def list_exercises(self, user_id: str, dto: ExerciseListIn) -> list[ExerciseItemOut]:
        """
        List exercises visible to the caller, newest first.

        :param user_id: Authenticated user id.
        :type user_id: str
        :param dto: Listing options.
        :type dto: ExerciseListIn
        :returns: Items with optional last-session summaries.
        :rtype: list[ExerciseItemOut]
        """
        with self.ro_uow() as uow:
            return list_items(uow, user_id, dto)

    def get_exercise(self, user_id: str, exercise_id: str) -> ExerciseDetailOut:
        """
        Return one exercise with its session count and latest session.

        :param user_id: Authenticated user id.
        :type user_id: str
        :param exercise_id: Exercise id.
        :type exercise_id: str
        :rtype: ExerciseDetailOut
        :raises NotFoundError: If the exercise is neither owned nor shared.
        """
        with self.ro_uow() as uow:
            repo: ExerciseRepository = uow.exercises
            row = repo.get_visible(exercise_id, user_id)
            if row is None:
                raise NotFoundError("Exercise", exercise_id)
            match row.ownership:
                case Shared():
                    # templates never host sessions
                    return ExerciseDetailOut(
                        exercise=exercise_to_out(row), sessions_count=0, last_session=None
                    )
                case Personal():
                    last = uow.workout_sessions.latest_for_exercise(row.id)
                    return ExerciseDetailOut(
                        exercise=exercise_to_out(row),
                        sessions_count=uow.workout_sessions.count_for_exercise(row.id),
                        last_session=session_to_out(last) if last is not None else None,
                    )
            raise NotFoundError("Exercise", exercise_id)  # pragma: no cover

    # ------------------------------------------------------------------ #
    # Write
    # ------------------------------------------------------------------ #

    def create_exercise(self, user_id: str, dto: ExerciseCreateIn) -> ExerciseOut:
        """
        Create a personal exercise.

        :param user_id: Owner id.
        :type user_id: str
        :param dto: Name and optional notes.
        :type dto: ExerciseCreateIn
        :rtype: ExerciseOut
        :raises ValidationFailedError: If the name or notes are invalid.
        """
        with self.rw_uow() as uow:
            try:
                row = Exercise(user_id=user_id, name=dto.name, description=dto.notes)
            except ValueError as exc:
                raise ValidationFailedError("exercise", str(exc)) from exc
            uow.exercises.add(row)
            return exercise_to_out(row)

    def update_exercise(self, user_id: str, exercise_id: str, dto: ExerciseUpdateIn) -> ExerciseOut:
        """
        Rename an exercise and/or change its notes.

        :raises NotFoundError: If the exercise is not owned by ``user_id``.
        :raises ValidationFailedError: If the name or notes are invalid.
        """
        with self.rw_uow() as uow:
            repo: ExerciseRepository = uow.exercises
            row = repo.get_owned(exercise_id, user_id, for_update=True)
            if row is None:
                raise NotFoundError("Exercise", exercise_id)

            updates: dict[str, str] = {}
            if dto.name is not None:
                updates["name"] = dto.name
            if dto.notes is not None:
                updates["description"] = dto.notes
            if updates:
                try:
                    repo.update(row, **updates)
                except ValueError as exc:
                    raise ValidationFailedError("exercise", str(exc)) from exc
            return exercise_to_out(row)

    def delete_exercise(self, user_id: str, exercise_id: str) -> None:
        """
        Delete an exercise with its sessions and sets.

        :raises NotFoundError: If the exercise is not owned by ``user_id``.
        """
        with self.rw_uow() as uow:
            row = uow.exercises.get_owned(exercise_id, user_id, for_update=True)
            if row is None:
                raise NotFoundError("Exercise", exercise_id)
            uow.exercises.delete(row)
