"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from simplytrack.repositories.base import BaseRepository
from simplytrack.repositories.exercise import ExerciseRepository
from simplytrack.repositories.ownership import OwnershipScopedRepository
from simplytrack.repositories.refresh_token import RefreshTokenRepository
from simplytrack.repositories.user import UserRepository
from simplytrack.repositories.workout import (
    SetTotals,
    WorkoutSessionRepository,
    WorkoutSetRepository,
)

__all__ = [
    # Base
    "BaseRepository",
    "OwnershipScopedRepository",
    # Domain
    "ExerciseRepository",
    "RefreshTokenRepository",
    "SetTotals",
    "UserRepository",
    "WorkoutSessionRepository",
    "WorkoutSetRepository",
]
