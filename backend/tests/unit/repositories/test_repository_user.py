"""Tests for :class:`simplytrack.repositories.user.UserRepository`."""

from __future__ import annotations

import pytest

from simplytrack.repositories import UserRepository
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session):
    return UserRepository(session=session)


def test_lookup_is_case_insensitive(repo):
    user = UserFactory(email="mixed@example.com")
    assert repo.get_by_email("MIXED@Example.com").id == user.id
    assert repo.exists_by_email(" mixed@example.com ")
    assert not repo.exists_by_email("nobody@example.com")


def test_authenticate(repo):
    user = UserFactory(email="auth@example.com", password="right-one")
    assert repo.authenticate("auth@example.com", "right-one").id == user.id
    assert repo.authenticate("auth@example.com", "wrong") is None
    assert repo.authenticate("missing@example.com", "right-one") is None


def test_update_rejects_email_and_password(repo):
    user = UserFactory()
    repo.update(user, first_name="New")
    assert user.first_name == "New"
    with pytest.raises(ValueError):
        repo.update(user, email="x@example.com")
