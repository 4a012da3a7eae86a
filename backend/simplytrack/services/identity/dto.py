"""
DTOs for IdentityService.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRegisterIn:
    """
    Input DTO for user registration.

    :param email: Login email (normalized to lowercase by the model).
    :type email: str
    :param password: Raw password to be hashed by the model.
    :type password: str
    :param first_name: Given name.
    :type first_name: str
    :param last_name: Family name.
    :type last_name: str
    """

    email: str
    password: str
    first_name: str = ""
    last_name: str = ""


@dataclass(frozen=True, slots=True)
class UserAuthIn:
    """
    Input DTO for credential verification.

    :param email: Login email (any casing).
    :type email: str
    :param password: Raw password.
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Input DTO for profile updates. ``None`` leaves a field unchanged.

    :param first_name: New given name.
    :type first_name: str | None
    :param last_name: New family name.
    :type last_name: str | None
    """

    first_name: str | None = None
    last_name: str | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe projection of a user. Also the identity carried into tokens.

    :param id: User id (UUID string).
    :type id: str
    :param email: Normalized email.
    :type email: str
    :param first_name: Given name.
    :type first_name: str
    :param last_name: Family name.
    :type last_name: str
    :param created_at: Registration time.
    :type created_at: datetime | None
    """

    id: str
    email: str
    first_name: str
    last_name: str
    created_at: datetime | None = None
