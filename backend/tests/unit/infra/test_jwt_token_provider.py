"""Flask-JWT-Extended adapter: claims stamped into access tokens."""

from __future__ import annotations

from datetime import timedelta

import pytest
from flask_jwt_extended import decode_token

from simplytrack.infra.jwt import JWTTokenProvider


@pytest.fixture()
def provider(app):
    return JWTTokenProvider()


def test_claims_include_issuer_audience_and_extras(app, provider):
    token = provider.create_access_token(
        identity="user-42",
        additional_claims={"email": "a@example.com", "given_name": "A", "family_name": "B"},
        expires_delta=timedelta(minutes=15),
    )
    claims = decode_token(token)

    assert claims["sub"] == "user-42"
    assert claims["iss"] == app.config["JWT_ISSUER"]
    assert claims["aud"] == app.config["JWT_AUDIENCE"]
    assert claims["email"] == "a@example.com"
    assert claims["type"] == "access"
    assert claims["exp"] - claims["iat"] == 15 * 60


def test_each_token_gets_its_own_jti(provider):
    first = decode_token(provider.create_access_token(identity="u"))
    second = decode_token(provider.create_access_token(identity="u"))
    assert first["jti"] and first["jti"] != second["jti"]
