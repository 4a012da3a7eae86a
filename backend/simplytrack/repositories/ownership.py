"""Ownership-scoped repository base for the Exercise -> Session -> Set tree.

A session or set id carries no user identity, so every lookup joins up to
``exercises.user_id`` and filters on it in the same statement. Resources of
another user are indistinguishable from missing ones.
"""

from __future__ import annotations

from typing import Any, TypeVar, cast

from sqlalchemy import Select, select

from simplytrack.models.exercise import Exercise
from simplytrack.repositories.base import BaseRepository

E = TypeVar("E")


class OwnershipScopedRepository(BaseRepository[E]):
    """Repository whose reads and writes are filtered by the owning user.

    Subclasses only describe how their model reaches :class:`Exercise` by
    overriding :meth:`_join_to_owner`; the ownership predicate itself lives
    here and nowhere else.
    """

    def _join_to_owner(self, stmt: Select[Any]) -> Select[Any]:
        """Extend ``stmt`` with the joins needed to reach ``Exercise``.

        :param stmt: Select rooted at ``self.model``.
        :type stmt: :class:`sqlalchemy.sql.Select`
        :returns: Select where ``Exercise`` columns are addressable.
        :rtype: :class:`sqlalchemy.sql.Select`
        """
        return stmt

    def owned_select(self, user_id: str) -> Select[Any]:
        """Return ``SELECT model`` restricted to rows owned by ``user_id``."""
        stmt = self._join_to_owner(select(self.model))
        return stmt.where(Exercise.user_id == user_id)

    def belongs_to(self, resource_id: str, user_id: str) -> bool:
        """Return ``True`` iff ``resource_id`` exists and its root exercise is ``user_id``'s.

        :param resource_id: Primary key of the scoped resource.
        :type resource_id: str
        :param user_id: Authenticated user id.
        :type user_id: str
        :rtype: bool
        """
        pk = self.model.id  # type: ignore[attr-defined]
        stmt = (
            self._join_to_owner(select(pk))
            .where(pk == resource_id, Exercise.user_id == user_id)
            .limit(1)
        )
        return self.session.execute(stmt).first() is not None

    def get_owned(self, resource_id: str, user_id: str, *, for_update: bool = False) -> E | None:
        """Fetch a resource only when it belongs to ``user_id``.

        :param resource_id: Primary key of the scoped resource.
        :type resource_id: str
        :param user_id: Authenticated user id.
        :type user_id: str
        :param for_update: Lock the row (``SELECT ... FOR UPDATE OF``) when supported.
        :type for_update: bool
        :returns: The entity, or ``None`` when missing or owned by someone else.
        :rtype: E | None
        """
        pk = self.model.id  # type: ignore[attr-defined]
        stmt = self.owned_select(user_id).where(pk == resource_id)
        if for_update:
            stmt = stmt.with_for_update(of=self.model)
        return cast(E | None, self.session.execute(stmt).scalars().first())
