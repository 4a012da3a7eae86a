"""Workout sessions and the sets logged within them."""

from __future__ import annotations

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from simplytrack.core.extensions import db

from .base import CreatedAtMixin, ReprMixin, UUIDPKMixin

if TYPE_CHECKING:
    from .exercise import Exercise

MAX_REPS = 1_000
MAX_WEIGHT = 10_000
WEIGHT_STEP = Decimal("0.01")


class WorkoutSession(UUIDPKMixin, CreatedAtMixin, ReprMixin, db.Model):
    """
    One training occurrence of an exercise on a logical ``date``.

    ``total_weight``, ``total_reps`` and ``sets_count`` are derived from the
    session's sets and are only written by the aggregate maintainer.
    """

    __tablename__ = "workout_sessions"

    exercise_id: Mapped[str] = mapped_column(
        ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    total_weight: Mapped[float] = mapped_column(
        Numeric(14, 2, asdecimal=False), nullable=False, default=0.0, server_default="0"
    )
    total_reps: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    sets_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )

    __table_args__ = (Index("ix_ws_exercise_date", "exercise_id", "date"),)

    exercise: Mapped[Exercise] = relationship("Exercise", back_populates="sessions")
    sets: Mapped[list[WorkoutSet]] = relationship(
        "WorkoutSet",
        back_populates="session",
        cascade="all, delete-orphan",
        lazy="select",
    )


class WorkoutSet(UUIDPKMixin, CreatedAtMixin, ReprMixin, db.Model):
    """A single set: ``reps`` repetitions at ``weight``."""

    __tablename__ = "workout_sets"

    session_id: Mapped[str] = mapped_column(
        ForeignKey("workout_sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)

    __table_args__ = (
        CheckConstraint("reps >= 1", name="reps_positive"),
        CheckConstraint("weight >= 0", name="weight_non_negative"),
    )

    session: Mapped[WorkoutSession] = relationship("WorkoutSession", back_populates="sets")

    @validates("reps")
    def _validate_reps(self, key: str, value: int) -> int:
        if isinstance(value, bool) or int(value) != value or not 1 <= value <= MAX_REPS:
            raise ValueError(f"Reps must be an integer between 1 and {MAX_REPS}.")
        return int(value)

    @validates("weight")
    def _validate_weight(self, key: str, value: float) -> float:
        """
        Bound the weight and round it to the column's two decimals.

        Rounding is half-up, as PostgreSQL does for ``NUMERIC``, so the value
        echoed after a write equals the value read back later.

        :raises ValueError: If the weight is negative or above ``MAX_WEIGHT``.
        """
        if isinstance(value, bool) or not 0 <= value <= MAX_WEIGHT:
            raise ValueError(f"Weight must be between 0 and {MAX_WEIGHT}.")
        return float(Decimal(str(value)).quantize(WEIGHT_STEP, rounding=ROUND_HALF_UP))
