"""
IdentityService
===============

Aggregate service responsible for managing the `User` aggregate:
- Direct PII (email, first and last name)
- Credential verification (no token issuance)
- Account deletion
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from simplytrack.models.user import User
from simplytrack.repositories.user import UserRepository
from simplytrack.services._shared.base import BaseService
from simplytrack.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationFailedError,
    violates,
)
from simplytrack.services.identity.dto import (
    UserAuthIn,
    UserPublicOut,
    UserRegisterIn,
    UserUpdateIn,
)

log = logging.getLogger(__name__)


def to_public(user: User) -> UserPublicOut:
    """Project a loaded :class:`User` into its public DTO."""
    return UserPublicOut(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        created_at=user.created_at,
    )


def create_user(repo: UserRepository, dto: UserRegisterIn) -> User:
    """
    Persist a new user inside the caller's unit of work.

    :param repo: User repository bound to the active unit of work.
    :type repo: UserRepository
    :param dto: Registration input.
    :type dto: UserRegisterIn
    :returns: Flushed user with its id assigned.
    :rtype: User
    :raises ConflictError: When the email is already registered.
    :raises ValidationFailedError: When the model rejects a field.
    """
    if repo.exists_by_email(dto.email):
        raise ConflictError("User", "email already in use")

    try:
        user = User(
            email=dto.email,
            password=dto.password,  # model hashes via setter
            first_name=dto.first_name,
            last_name=dto.last_name,
        )
    except ValueError as exc:
        raise ValidationFailedError("user", str(exc)) from exc

    try:
        repo.add(user)
    except IntegrityError as exc:
        # Concurrent registration of the same address
        if violates(exc, "uq_users_email"):
            raise ConflictError("User", "email already in use") from exc
        raise
    return user


class IdentityService(BaseService):
    """
    Application service for the `User` aggregate.

    Responsibilities
    ----------------
    - Registration lives in :func:`create_user`, which the auth service runs
      in the same unit of work as the first token pair.
    - Verify credentials, failing uniformly for unknown email and bad password.
    - Retrieve and update user PII safely.
    - Delete accounts together with everything they own.
    """

    # --------------------------------------------------------------------- #
    # Authentication
    # --------------------------------------------------------------------- #

    def authenticate(self, dto: UserAuthIn) -> UserPublicOut:
        """
        Verify an email/password pair.

        :param dto: Authentication input DTO.
        :type dto: UserAuthIn
        :returns: Identity of the verified user.
        :rtype: UserPublicOut
        :raises InvalidCredentialsError: When the email is unknown or the
            password does not match. Both cases are indistinguishable.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.authenticate(dto.email, dto.password)
            if user is None:
                log.info("Credential check failed", extra={"event": "auth.login_failed"})
                raise InvalidCredentialsError()
            return to_public(user)

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_user(self, user_id: str) -> UserPublicOut:
        """
        Retrieve a user by identifier.

        :param user_id: User primary key.
        :type user_id: str
        :returns: Public-safe user DTO.
        :rtype: UserPublicOut
        :raises NotFoundError: If user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return to_public(user)

    # --------------------------------------------------------------------- #
    # Update PII
    # --------------------------------------------------------------------- #

    def update_user(self, user_id: str, dto: UserUpdateIn) -> UserPublicOut:
        """
        Update the user's first and last name.

        :param user_id: User identifier.
        :type user_id: str
        :param dto: Input DTO containing new values.
        :type dto: UserUpdateIn
        :returns: Updated user DTO.
        :rtype: UserPublicOut
        :raises NotFoundError: When user not found.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)

            updates: dict[str, Any] = {
                k: v
                for k, v in {"first_name": dto.first_name, "last_name": dto.last_name}.items()
                if v is not None
            }
            if updates:
                repo.update(user, **updates)
            return to_public(user)

    # --------------------------------------------------------------------- #
    # Deletion
    # --------------------------------------------------------------------- #

    def delete_user(self, user_id: str, *, client_ip: str | None = None) -> None:
        """
        Delete an account, its exercises, sessions and sets.

        Active refresh tokens are revoked first; token rows are kept as an
        audit trail.

        :param user_id: User identifier.
        :type user_id: str
        :param client_ip: Caller address recorded on the revocations.
        :type client_ip: str | None
        :raises NotFoundError: When user not found.
        """
        with self.rw_uow() as uow:
            user = uow.users.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            revoked = uow.refresh_tokens.revoke_all_for_user(user_id, revoked_by_ip=client_ip)
            uow.users.delete(user)
        log.info(
            "Account deleted (%d refresh tokens revoked)",
            revoked,
            extra={"event": "user.deleted", "user_id": user_id},
        )
