# tests/unit/services/test_auth_service.py
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import timedelta

import pytest
from freezegun import freeze_time

from simplytrack.models.base import utcnow
from simplytrack.repositories import RefreshTokenRepository
from simplytrack.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    UnauthorizedError,
    UserNotFoundError,
)
from simplytrack.services.auth.dto import (
    AuthResultOut,
    LoginIn,
    LogoutIn,
    RefreshIn,
    RegisterIn,
    RevokeIn,
)
from tests.factories.refresh_token import RefreshTokenFactory
from tests.factories.user import UserFactory


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def service(auth_service_factory):
    return auth_service_factory()


@pytest.fixture()
def tokens(session):
    return RefreshTokenRepository(session=session)


@pytest.fixture()
def alice():
    return UserFactory(email="alice@example.com", password="s3cret-pass")


def _login(service, email="alice@example.com", password="s3cret-pass") -> AuthResultOut:
    return service.login(LoginIn(email=email, password=password))


# ---------------------------- Register / login ------------------------------ #
def test_register_creates_user_and_issues_pair(service, tokens):
    result = service.register(
        RegisterIn(email=" New@Example.com ", password="long-enough", first_name="Ada")
    )

    assert result.user.email == "new@example.com"
    assert result.user.first_name == "Ada"
    stored = tokens.get_by_token(result.tokens.refresh_token)
    assert stored is not None and stored.user_id == result.user.id
    assert stored.created_by_ip == "127.0.0.1"


def test_register_duplicate_email_conflicts(service, alice):
    with pytest.raises(ConflictError):
        service.register(RegisterIn(email="ALICE@example.com", password="whatever-1"))


def test_login_issues_pair_with_configured_lifetimes(service, alice):
    before = utcnow()
    result = _login(service)

    assert result.user.id == alice.id
    assert result.tokens.access_token.count(".") == 2
    assert len(result.tokens.refresh_token) == 88
    access_ttl = result.tokens.access_expires_at - before
    refresh_ttl = result.tokens.refresh_expires_at - before
    assert timedelta(minutes=14) < access_ttl <= timedelta(minutes=15, seconds=5)
    assert timedelta(days=29) < refresh_ttl <= timedelta(days=30, seconds=5)


def test_login_email_is_case_insensitive(service, alice):
    assert _login(service, email="  ALICE@Example.com").user.id == alice.id


@pytest.mark.parametrize(
    "email,password",
    [("alice@example.com", "wrong"), ("nobody@example.com", "s3cret-pass")],
)
def test_login_failures_are_indistinguishable(service, alice, email, password):
    with pytest.raises(InvalidCredentialsError) as exc:
        _login(service, email=email, password=password)
    assert str(exc.value) == "Invalid email or password."


def test_login_fails_after_password_mutation(service, alice, session):
    alice.password = "changed-pass"
    session.commit()
    with pytest.raises(InvalidCredentialsError):
        _login(service)
    assert _login(service, password="changed-pass").user.id == alice.id


# --------------------------------- Refresh -------------------------------- #
def test_refresh_rotates_and_links_successor(service, alice, tokens):
    first = _login(service)
    second = service.refresh(RefreshIn(refresh_token=first.tokens.refresh_token))

    assert second.tokens.refresh_token != first.tokens.refresh_token
    assert second.user.id == alice.id
    old = tokens.get_by_token(first.tokens.refresh_token)
    assert old.is_rotated
    assert old.replaced_by_token == second.tokens.refresh_token
    assert tokens.get_by_token(second.tokens.refresh_token).is_active


def test_refresh_with_consumed_token_fails(service, alice):
    first = _login(service)
    service.refresh(RefreshIn(refresh_token=first.tokens.refresh_token))
    with pytest.raises(InvalidTokenError):
        service.refresh(RefreshIn(refresh_token=first.tokens.refresh_token))


def test_replay_revokes_the_whole_chain(service, alice, tokens):
    a = _login(service)
    b = service.refresh(RefreshIn(refresh_token=a.tokens.refresh_token))
    c = service.refresh(RefreshIn(refresh_token=b.tokens.refresh_token))

    with pytest.raises(InvalidTokenError):
        service.refresh(RefreshIn(refresh_token=a.tokens.refresh_token))

    # the revocation is committed even though the request failed
    assert tokens.get_by_token(c.tokens.refresh_token).is_revoked
    with pytest.raises(InvalidTokenError):
        service.refresh(RefreshIn(refresh_token=c.tokens.refresh_token))


def test_replay_keeps_chain_when_disabled(auth_service_factory, alice, tokens):
    service = auth_service_factory()
    service.cfg = replace(service.cfg, revoke_chain_on_reuse=False)
    a = _login(service)
    b = service.refresh(RefreshIn(refresh_token=a.tokens.refresh_token))

    with pytest.raises(InvalidTokenError):
        service.refresh(RefreshIn(refresh_token=a.tokens.refresh_token))
    assert tokens.get_by_token(b.tokens.refresh_token).is_active


def test_refresh_unknown_token(service):
    with pytest.raises(InvalidTokenError):
        service.refresh(RefreshIn(refresh_token="does-not-exist"))


def test_refresh_expired_token(service, alice):
    pair = _login(service)
    with freeze_time(utcnow() + timedelta(days=31)):
        with pytest.raises(InvalidTokenError):
            service.refresh(RefreshIn(refresh_token=pair.tokens.refresh_token))


def test_refresh_for_deleted_user(service, tokens):
    orphan = RefreshTokenFactory(user_id="gone-user")
    with pytest.raises(UserNotFoundError):
        service.refresh(RefreshIn(refresh_token=orphan.token))
    assert not tokens.get_by_token(orphan.token).is_rotated


def test_only_successful_rotation_is_logged(service, alice, caplog):
    pair = _login(service)
    with caplog.at_level(logging.INFO, logger="simplytrack.services.auth.service"):
        with pytest.raises(InvalidTokenError):
            service.refresh(RefreshIn(refresh_token="does-not-exist"))
        assert not [r for r in caplog.records if getattr(r, "event", None) == "auth.refresh"]

        service.refresh(RefreshIn(refresh_token=pair.tokens.refresh_token))

    rotated = [r for r in caplog.records if getattr(r, "event", None) == "auth.refresh"]
    assert len(rotated) == 1
    assert rotated[0].user_id == alice.id


# ------------------------------ Logout / revoke ----------------------------- #
def test_logout_denylists_access_and_revokes_own_refresh(auth_service_factory, alice, tokens):
    pair = _login(auth_service_factory())
    service = auth_service_factory(actor_id=alice.id)
    expires = utcnow() + timedelta(minutes=15)

    service.logout(
        LogoutIn(access_jti="jti-1", access_expires_at=expires, refresh_token=pair.tokens.refresh_token)
    )

    assert service.denylist.is_revoked("jti-1")
    stored = tokens.get_by_token(pair.tokens.refresh_token)
    assert stored.is_revoked and not stored.is_rotated


def test_logout_ignores_foreign_refresh_token(auth_service_factory, alice, tokens):
    bob = UserFactory(password="bob-pass-1")
    bob_pair = _login(auth_service_factory(), email=bob.email, password="bob-pass-1")

    auth_service_factory(actor_id=alice.id).logout(
        LogoutIn(refresh_token=bob_pair.tokens.refresh_token)
    )
    assert tokens.get_by_token(bob_pair.tokens.refresh_token).is_active


def test_logout_requires_actor(service):
    with pytest.raises(UnauthorizedError):
        service.logout(LogoutIn())


def test_revoke_own_active_token(auth_service_factory, alice, tokens):
    pair = _login(auth_service_factory())
    service = auth_service_factory(actor_id=alice.id)

    service.revoke(RevokeIn(refresh_token=pair.tokens.refresh_token))
    assert tokens.get_by_token(pair.tokens.refresh_token).is_revoked
    with pytest.raises(InvalidTokenError):
        service.revoke(RevokeIn(refresh_token=pair.tokens.refresh_token))


def test_revoke_foreign_or_unknown_token(auth_service_factory, alice, tokens):
    foreign = RefreshTokenFactory(user_id="someone-else")
    service = auth_service_factory(actor_id=alice.id)

    with pytest.raises(InvalidTokenError):
        service.revoke(RevokeIn(refresh_token=foreign.token))
    with pytest.raises(InvalidTokenError):
        service.revoke(RevokeIn(refresh_token="nope"))
    assert tokens.get_by_token(foreign.token).is_active


def test_any_single_character_password_mutation_fails(service):
    password = "Passw0rd!"
    service.register(RegisterIn(email="mut@example.com", password=password))
    assert service.login(LoginIn(email="mut@example.com", password=password)).user.email

    for i in range(len(password)):
        mutated = password[:i] + chr(ord(password[i]) ^ 1) + password[i + 1 :]
        with pytest.raises(InvalidCredentialsError):
            service.login(LoginIn(email="mut@example.com", password=mutated))
