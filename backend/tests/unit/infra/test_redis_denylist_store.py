"""Redis-backed access-token denylist, exercised against fakeredis."""

from __future__ import annotations

from datetime import timedelta

import fakeredis
import pytest

from simplytrack.infra.redis import RedisTokenDenylistStore
from simplytrack.models.base import utcnow


@pytest.fixture()
def store():
    return RedisTokenDenylistStore(fakeredis.FakeRedis())


def test_revoke_and_check(store):
    assert not store.is_revoked("abc")
    store.revoke_jti(jti="abc", expires_at=utcnow() + timedelta(minutes=10))
    assert store.is_revoked("abc")
    assert not store.is_revoked("other")


def test_entry_ttl_matches_token_lifetime(store):
    store.revoke_jti(jti="ttl", expires_at=utcnow() + timedelta(minutes=10))
    ttl = store.r.ttl("deny:at:ttl")
    assert 590 <= ttl <= 600


def test_already_expired_token_gets_minimal_ttl(store):
    store.revoke_jti(jti="old", expires_at=utcnow() - timedelta(minutes=1))
    assert store.r.ttl("deny:at:old") == 1


def test_revoke_is_idempotent(store):
    exp = utcnow() + timedelta(minutes=5)
    store.revoke_jti(jti="twice", expires_at=exp)
    store.revoke_jti(jti="twice", expires_at=exp)
    assert store.is_revoked("twice")
