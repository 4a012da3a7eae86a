"""Persistence tests for the refresh-token store and its revocation chain."""

from __future__ import annotations

from datetime import timedelta

import pytest

from simplytrack.models.base import as_utc, utcnow
from simplytrack.repositories import RefreshTokenRepository
from simplytrack.services._shared.errors import TokenAlreadyRevokedError
from tests.factories.refresh_token import RefreshTokenFactory


@pytest.fixture()
def repo(session):
    return RefreshTokenRepository(session=session)


def test_get_by_token_exact_match(repo):
    rt = RefreshTokenFactory()
    assert repo.get_by_token(rt.token).id == rt.id
    assert repo.get_by_token(rt.token + "x") is None
    assert repo.get_by_token(rt.token, for_update=True).id == rt.id


def test_revoke_records_metadata(repo):
    rt = RefreshTokenFactory()
    when = utcnow()
    repo.revoke(rt, revoked_by_ip="10.0.0.1", replaced_by_token="successor", now=when)

    assert as_utc(rt.revoked_at) == when
    assert rt.revoked_by_ip == "10.0.0.1"
    assert rt.replaced_by_token == "successor"
    assert rt.is_rotated


def test_revoke_is_terminal(repo):
    rt = RefreshTokenFactory()
    repo.revoke(rt, revoked_by_ip="1.1.1.1")
    first = rt.revoked_at

    with pytest.raises(TokenAlreadyRevokedError):
        repo.revoke(rt, revoked_by_ip="2.2.2.2", replaced_by_token="other")
    assert rt.revoked_at == first
    assert rt.revoked_by_ip == "1.1.1.1"
    assert rt.replaced_by_token is None


def test_list_active_skips_revoked_and_expired(repo):
    user_id = "u-1"
    live = RefreshTokenFactory(user_id=user_id)
    RefreshTokenFactory(user_id=user_id, revoked_at=utcnow())
    RefreshTokenFactory(user_id=user_id, expires_at=utcnow() - timedelta(seconds=1))
    RefreshTokenFactory(user_id="someone-else")

    assert [t.id for t in repo.list_active_for_user(user_id)] == [live.id]


def test_revoke_all_for_user(repo):
    user_id = "u-2"
    tokens = [RefreshTokenFactory(user_id=user_id) for _ in range(3)]
    other = RefreshTokenFactory(user_id="u-3")

    assert repo.revoke_all_for_user(user_id, revoked_by_ip=None) == 3
    assert all(t.is_revoked for t in tokens)
    assert other.is_active


def test_descendants_follow_the_chain(repo):
    c = RefreshTokenFactory(user_id="u")
    b = RefreshTokenFactory(user_id="u", revoked_at=utcnow(), replaced_by_token=c.token)
    a = RefreshTokenFactory(user_id="u", revoked_at=utcnow(), replaced_by_token=b.token)

    assert [t.id for t in repo.descendants(a)] == [b.id, c.id]
    assert repo.descendants(c) == []


def test_descendants_stop_on_cycle(repo):
    a = RefreshTokenFactory(user_id="u")
    b = RefreshTokenFactory(user_id="u", replaced_by_token=a.token)
    a.replaced_by_token = b.token

    assert [t.id for t in repo.descendants(a)] == [b.id]


def test_revoke_descendants_only_touches_active_successors(repo):
    c = RefreshTokenFactory(user_id="u")
    b = RefreshTokenFactory(user_id="u", revoked_at=utcnow(), replaced_by_token=c.token)
    a = RefreshTokenFactory(user_id="u", revoked_at=utcnow(), replaced_by_token=b.token)

    assert repo.revoke_descendants(a, revoked_by_ip="9.9.9.9") == 1
    assert c.is_revoked
    assert c.revoked_by_ip == "9.9.9.9"
