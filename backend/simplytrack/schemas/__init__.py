"""Marshmallow schemas for request validation and response serialization."""

from .auth import (
    AuthResultSchema,
    LoginSchema,
    LogoutSchema,
    RefreshSchema,
    RegisterSchema,
    RevokeSchema,
)
from .common import CamelCaseSchema, camelcase
from .exercise import (
    DashboardQuerySchema,
    ExerciseCreateSchema,
    ExerciseDetailSchema,
    ExerciseItemSchema,
    ExerciseListQuerySchema,
    ExerciseSchema,
    ExerciseUpdateSchema,
)
from .user import UserSchema, UserUpdateSchema
from .workout import (
    LastSessionSchema,
    SessionCreateSchema,
    SessionDetailSchema,
    SessionListQuerySchema,
    SessionSchema,
    SetCreateSchema,
    SetSchema,
    SetUpdateSchema,
)

__all__ = [
    "AuthResultSchema",
    "CamelCaseSchema",
    "DashboardQuerySchema",
    "ExerciseCreateSchema",
    "ExerciseDetailSchema",
    "ExerciseItemSchema",
    "ExerciseListQuerySchema",
    "ExerciseSchema",
    "ExerciseUpdateSchema",
    "LastSessionSchema",
    "LoginSchema",
    "LogoutSchema",
    "RefreshSchema",
    "RegisterSchema",
    "RevokeSchema",
    "SessionCreateSchema",
    "SessionDetailSchema",
    "SessionListQuerySchema",
    "SessionSchema",
    "SetCreateSchema",
    "SetSchema",
    "SetUpdateSchema",
    "UserSchema",
    "UserUpdateSchema",
    "camelcase",
]
