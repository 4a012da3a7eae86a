"""Exercise model: a personal exercise or a shared template."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from simplytrack.core.extensions import db

from .base import ReprMixin, TimestampMixin, UUIDPKMixin

if TYPE_CHECKING:
    from .user import User
    from .workout import WorkoutSession

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


@dataclass(frozen=True, slots=True)
class Personal:
    """Ownership variant: the exercise belongs to ``owner_id``."""

    owner_id: str


@dataclass(frozen=True, slots=True)
class Shared:
    """Ownership variant: a template with no owner, readable by everyone."""


Ownership = Personal | Shared


class Exercise(UUIDPKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Root of the ownership chain Exercise -> WorkoutSession -> WorkoutSet.

    ``user_id`` is ``NULL`` for shared templates. Templates are listed
    alongside personal exercises on request but never host sessions and are
    never mutable through the API.
    """

    __tablename__ = "exercises"

    user_id: Mapped[str | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(String(DESCRIPTION_MAX_LENGTH))

    __table_args__ = (Index("ix_exercises_user_created", "user_id", "created_at"),)

    owner: Mapped[User | None] = relationship("User", back_populates="exercises")
    sessions: Mapped[list[WorkoutSession]] = relationship(
        "WorkoutSession",
        back_populates="exercise",
        cascade="all, delete-orphan",
        lazy="select",
    )

    @property
    def ownership(self) -> Ownership:
        """Return the tagged ownership variant of this exercise."""
        if self.user_id is None:
            return Shared()
        return Personal(owner_id=self.user_id)

    @validates("name")
    def _validate_name(self, key: str, value: str) -> str:
        """
        Trim and validate the exercise name.

        :raises ValueError: If the name is blank or too long.
        """
        v = (value or "").strip()
        if not v:
            raise ValueError("Exercise name is required.")
        if len(v) > NAME_MAX_LENGTH:
            raise ValueError(f"Exercise name must be at most {NAME_MAX_LENGTH} characters.")
        return v

    @validates("description")
    def _validate_description(self, key: str, value: str | None) -> str | None:
        if value is None:
            return None
        v = value.strip()
        if len(v) > DESCRIPTION_MAX_LENGTH:
            raise ValueError(
                f"Exercise notes must be at most {DESCRIPTION_MAX_LENGTH} characters."
            )
        return v or None
