"""Configuration selection and fail-fast validation."""

from __future__ import annotations

import pytest

from simplytrack.core.config import (
    PLACEHOLDER_JWT_KEY,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
    validate_config,
)


@pytest.mark.parametrize(
    "name,expected",
    [("testing", TestingConfig), ("PRODUCTION", ProductionConfig), ("weird", DevelopmentConfig)],
)
def test_get_config_by_env(monkeypatch, name, expected):
    monkeypatch.setenv("APP_ENV", name)
    assert get_config() is expected


def test_env_parsers(monkeypatch):
    monkeypatch.setenv("FLAG", "Yes")
    monkeypatch.setenv("NUM", " 42 ")
    assert env_bool("FLAG") is True
    assert env_bool("MISSING_FLAG", default=True) is True
    assert env_int("NUM", 1) == 42
    assert env_int("MISSING_NUM", 7) == 7


def test_production_refuses_placeholder_key():
    cfg = {
        "ACCESS_TOKEN_EXPIRATION_MINUTES": 15,
        "REFRESH_TOKEN_DAYS": 30,
        "JWT_SECRET_KEY": PLACEHOLDER_JWT_KEY,
    }
    with pytest.raises(RuntimeError):
        validate_config(cfg)
    validate_config({**cfg, "DEBUG": True})
    validate_config({**cfg, "JWT_SECRET_KEY": "real-secret"})


@pytest.mark.parametrize("key", ["ACCESS_TOKEN_EXPIRATION_MINUTES", "REFRESH_TOKEN_DAYS"])
def test_lifetimes_must_be_positive(key):
    cfg = {"ACCESS_TOKEN_EXPIRATION_MINUTES": 15, "REFRESH_TOKEN_DAYS": 30, "TESTING": True}
    cfg[key] = 0
    with pytest.raises(RuntimeError):
        validate_config(cfg)
