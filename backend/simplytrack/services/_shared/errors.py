"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or HTTP.
They are stable contracts between repositories, domain models, and
application services. Each carries a stable upper-case ``code`` that the API
boundary (``simplytrack/core/errors.py``) uses to build an RFC 7807 response.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').

    Returns
    -------
    bool
        True if the IntegrityError message mentions the given constraint.

    Notes
    -----
    SQLite reports the offending column (``users.email``) instead of the
    constraint name, so the column suffix of the constraint is accepted too.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    # uq_users_email -> "users.email"
    parts = name.split("_", 2)
    return len(parts) == 3 and f"{parts[1]}.{parts[2]}" in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    - The API layer translates them to problem responses using ``code``.
    """

    code = "BAD_REQUEST"


# --------------------------------------------------------------------------- #
# Authentication
# --------------------------------------------------------------------------- #


class InvalidCredentialsError(ServiceError):
    """Email unknown or password mismatch (deliberately indistinguishable)."""

    code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid email or password.") -> None:
        super().__init__(message)


class InvalidTokenError(ServiceError):
    """Refresh token unknown, expired, revoked, or owned by someone else."""

    code = "INVALID_TOKEN"

    def __init__(self, message: str = "Invalid or expired refresh token.") -> None:
        super().__init__(message)


class UserNotFoundError(ServiceError):
    """The user behind an otherwise valid refresh token no longer exists."""

    code = "USER_NOT_FOUND"

    def __init__(self, message: str = "User no longer exists.") -> None:
        super().__init__(message)


class UnauthorizedError(ServiceError):
    """Bearer access token missing, malformed, expired or revoked."""

    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required.") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Resource errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found, or is not visible to the caller.

    :param entity: Entity name (e.g., "Exercise").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    code = "NOT_FOUND"

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    code = "CONFLICT"

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


@dataclass(slots=True)
class ValidationFailedError(ServiceError):
    """
    Raised when a command carries values outside the domain rules.

    :param field: Offending field name (public, camelCase).
    :type field: str
    :param detail: Human-readable reason.
    :type detail: str
    """

    field: str
    detail: str

    code = "VALIDATION_FAILED"

    def __str__(self) -> str:
        return f"{self.field}: {self.detail}"


class InvalidOperationError(ServiceError):
    """A state transition that the entity's lifecycle does not allow."""

    code = "INVALID_OPERATION"


class TokenAlreadyRevokedError(InvalidOperationError):
    """Revocation is terminal; a revoked refresh token cannot be revoked again."""

    def __init__(self, message: str = "Refresh token is already revoked.") -> None:
        super().__init__(message)
