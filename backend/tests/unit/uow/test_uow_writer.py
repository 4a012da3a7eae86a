"""Read-write unit of work: commit on success, rollback on error."""

from __future__ import annotations

import pytest

from simplytrack.models.user import User
from simplytrack.repositories import UserRepository
from simplytrack.uow import SQLAlchemyUnitOfWork


def test_commit_on_normal_exit(session):
    with SQLAlchemyUnitOfWork() as uow:
        uow.users.add(User(email="commit@example.com", password="pw-12345"))
    session.rollback()  # nothing pending; the row must already be committed
    assert UserRepository(session=session).exists_by_email("commit@example.com")


def test_rollback_on_exception(session):
    with pytest.raises(RuntimeError):
        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(User(email="rollback@example.com", password="pw-12345"))
            raise RuntimeError("boom")
    assert not UserRepository(session=session).exists_by_email("rollback@example.com")


def test_repositories_share_the_session():
    uow = SQLAlchemyUnitOfWork()
    assert uow.users.session is uow.exercises.session is uow.refresh_tokens.session
