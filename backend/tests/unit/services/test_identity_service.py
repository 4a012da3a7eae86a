"""Tests for :class:`simplytrack.services.identity.service.IdentityService`."""

from __future__ import annotations

import pytest

from simplytrack.repositories import (
    RefreshTokenRepository,
    UserRepository,
    WorkoutSessionRepository,
    WorkoutSetRepository,
)
from simplytrack.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationFailedError,
)
from simplytrack.services.identity.dto import UserAuthIn, UserRegisterIn, UserUpdateIn
from simplytrack.services.identity.service import IdentityService, create_user, to_public
from tests.factories.exercise import ExerciseFactory
from tests.factories.refresh_token import RefreshTokenFactory
from tests.factories.user import UserFactory
from tests.factories.workout import WorkoutSessionFactory, WorkoutSetFactory


@pytest.fixture()
def service():
    return IdentityService()


@pytest.fixture()
def users(session):
    return UserRepository(session=session)


def test_create_user_returns_public_dto(users):
    out = to_public(
        create_user(
            users, UserRegisterIn(email="Reg@Example.com", password="abc12345", first_name=" Bo ")
        )
    )
    assert out.email == "reg@example.com"
    assert out.first_name == "Bo"
    assert not hasattr(out, "password_hash")


def test_create_user_duplicate(users):
    UserFactory(email="dup@example.com")
    with pytest.raises(ConflictError):
        create_user(users, UserRegisterIn(email="DUP@example.com", password="abc12345"))


def test_create_user_invalid_email(users):
    with pytest.raises(ValidationFailedError):
        create_user(users, UserRegisterIn(email="not-an-email", password="abc12345"))


def test_authenticate(service):
    user = UserFactory(password="pw-123456")
    assert service.authenticate(UserAuthIn(email=user.email, password="pw-123456")).id == user.id
    with pytest.raises(InvalidCredentialsError):
        service.authenticate(UserAuthIn(email=user.email, password="nope"))


def test_get_and_update_user(service):
    user = UserFactory(first_name="Old", last_name="Name")
    assert service.get_user(user.id).first_name == "Old"

    out = service.update_user(user.id, UserUpdateIn(first_name="New"))
    assert out.first_name == "New"
    assert out.last_name == "Name"

    with pytest.raises(NotFoundError):
        service.get_user("missing")
    with pytest.raises(NotFoundError):
        service.update_user("missing", UserUpdateIn(first_name="x"))


def test_delete_user_cascades_and_revokes_tokens(service, session):
    user = UserFactory()
    user_id = user.id
    ws = WorkoutSetFactory(session=WorkoutSessionFactory(exercise=ExerciseFactory(owner=user)))
    set_id, session_id = ws.id, ws.session_id
    token = RefreshTokenFactory(user_id=user_id)

    service.delete_user(user_id, client_ip="10.1.1.1")

    assert UserRepository(session=session).get(user_id) is None
    assert WorkoutSessionRepository(session=session).get(session_id) is None
    assert WorkoutSetRepository(session=session).get(set_id) is None
    kept = RefreshTokenRepository(session=session).get_by_token(token.token)
    assert kept is not None and kept.is_revoked
    assert kept.revoked_by_ip == "10.1.1.1"

    with pytest.raises(NotFoundError):
        service.delete_user(user_id)
