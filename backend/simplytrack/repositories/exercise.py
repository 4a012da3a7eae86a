"""Exercise repository (root of the ownership tree)."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select

from simplytrack.models.exercise import Exercise
from simplytrack.repositories.ownership import OwnershipScopedRepository


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ExerciseRepository(OwnershipScopedRepository[Exercise]):
    """Persistence-only repository for :class:`Exercise`.

    Personal exercises are scoped by ``user_id`` directly; shared templates
    (``user_id IS NULL``) are only reachable through the ``*_visible`` reads.
    """

    model = Exercise

    def _updatable_fields(self):
        return {"name", "description"}

    def _visible_to(self, user_id: str):
        return or_(Exercise.user_id == user_id, Exercise.user_id.is_(None))

    def list_for_user(
        self,
        user_id: str,
        *,
        search: str | None = None,
        include_shared: bool = False,
        limit: int | None = None,
    ) -> list[Exercise]:
        """List the user's exercises, newest first.

        :param user_id: Owner id.
        :type user_id: str
        :param search: Optional case-insensitive substring of the name.
        :type search: str | None
        :param include_shared: Also return shared templates.
        :type include_shared: bool
        :param limit: Optional maximum number of rows.
        :type limit: int | None
        :returns: Matching exercises ordered by ``created_at`` descending.
        :rtype: list[Exercise]
        """
        if include_shared:
            stmt = select(Exercise).where(self._visible_to(user_id))
        else:
            stmt = self.owned_select(user_id)
        if search:
            pattern = f"%{_escape_like(search.strip().lower())}%"
            stmt = stmt.where(Exercise.name.ilike(pattern, escape="\\"))
        stmt = stmt.order_by(Exercise.created_at.desc(), Exercise.id.asc())
        if limit is not None:
            stmt = stmt.limit(int(limit))
        return list(self.session.execute(stmt).scalars().all())

    def get_visible(self, exercise_id: str, user_id: str) -> Exercise | None:
        """Fetch a personal exercise of ``user_id`` or a shared template."""
        stmt = select(Exercise).where(Exercise.id == exercise_id, self._visible_to(user_id))
        return cast(Exercise | None, self.session.execute(stmt).scalars().first())

    def get_shared_by_name(self, name: str) -> Exercise | None:
        stmt = select(Exercise).where(Exercise.user_id.is_(None), Exercise.name == name.strip())
        return cast(Exercise | None, self.session.execute(stmt).scalars().first())
