"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

PLACEHOLDER_JWT_KEY: Final[str] = "CHANGE_ME_JWT"

# Loads .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: int
        Value returned when the variable is unset or blank.

    Returns
    -------
    int
        Parsed integer value.

    Raises
    ------
    ValueError
        If the variable is set to something that is not an integer.
    """
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val.strip())


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_SECRET_KEY: str
        Symmetric key used by ``flask-jwt-extended`` for HS256 access tokens.
    JWT_ISSUER / JWT_AUDIENCE: str
        Values stamped into (and required from) every access token.
    ACCESS_TOKEN_EXPIRATION_MINUTES: int
        Access token lifetime (15 minutes by default).
    REFRESH_TOKEN_DAYS: int
        Refresh token lifetime (30 days by default).
    JWT_CLOCK_SKEW_SECONDS: int
        Leeway applied to ``exp``/``nbf`` checks. ``0`` means strict.
    AUTH_REVOKE_CHAIN_ON_REUSE: bool
        Revoke the still-active descendants of a rotated refresh token when
        that token is presented again.
    REDIS_URL: str | None
        Optional Redis connection used by the access-token denylist.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes. The ``JWT_ENCODE_*``/``JWT_DECODE_*``
    keys are the names ``flask-jwt-extended`` reads; they are derived from the
    public ``JWT_ISSUER``/``JWT_AUDIENCE`` settings.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", PLACEHOLDER_JWT_KEY)
    JWT_ALGORITHM = "HS256"
    JWT_ISSUER = os.getenv("JWT_ISSUER", "simplytrack-api")
    JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "simplytrack-clients")
    JWT_ENCODE_ISSUER = JWT_ISSUER
    JWT_ENCODE_AUDIENCE = JWT_AUDIENCE
    JWT_DECODE_ISSUER = JWT_ISSUER
    JWT_DECODE_AUDIENCE = JWT_AUDIENCE
    JWT_TOKEN_LOCATION = ["headers"]

    ACCESS_TOKEN_EXPIRATION_MINUTES = env_int("ACCESS_TOKEN_EXPIRATION_MINUTES", 15)
    REFRESH_TOKEN_DAYS = env_int("REFRESH_TOKEN_DAYS", 30)
    JWT_CLOCK_SKEW_SECONDS = env_int("JWT_CLOCK_SKEW_SECONDS", 0)
    AUTH_REVOKE_CHAIN_ON_REUSE = env_bool("AUTH_REVOKE_CHAIN_ON_REUSE", True)

    # Redis (optional)
    REDIS_URL = os.getenv("REDIS_URL") or None

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Never talks to Redis.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    JWT_SECRET_KEY = "testing-secret-key-with-enough-length-for-hs256"
    REDIS_URL = None
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control. :func:`validate_config` refuses to boot
    with the placeholder JWT key.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


def validate_config(config: Mapping[str, object]) -> None:
    """Fail fast on settings that must never reach a production deployment.

    Parameters
    ----------
    config: Mapping[str, object]
        Loaded Flask configuration.

    Raises
    ------
    RuntimeError
        When running outside debug/testing with the placeholder signing key,
        or when token lifetimes are not positive.
    """
    if int(config.get("ACCESS_TOKEN_EXPIRATION_MINUTES", 0)) <= 0:  # type: ignore[call-overload]
        raise RuntimeError("ACCESS_TOKEN_EXPIRATION_MINUTES must be positive.")
    if int(config.get("REFRESH_TOKEN_DAYS", 0)) <= 0:  # type: ignore[call-overload]
        raise RuntimeError("REFRESH_TOKEN_DAYS must be positive.")

    relaxed = bool(config.get("DEBUG")) or bool(config.get("TESTING"))
    if not relaxed and config.get("JWT_SECRET_KEY") == PLACEHOLDER_JWT_KEY:
        raise RuntimeError("JWT_SECRET_KEY must be configured outside development.")
