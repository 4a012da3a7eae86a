"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside an outer transaction on a dedicated connection to an
in-memory SQLite database. The session joins that transaction through
SAVEPOINTs, so the services' own commits and rollbacks stay local to the test
and nothing leaks between cases.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from simplytrack.core.config import TestingConfig
from simplytrack.core.extensions import db as _db
from simplytrack.core.tokens import get_denylist, get_token_config, get_token_provider
from simplytrack.factory import create_app
from simplytrack.services._shared.base import ServiceContext
from simplytrack.services.auth.service import AuthService


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Never talks to Redis.
    - Disables ProxyFix so ``remote_addr`` is the test client's address.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    USE_PROXYFIX = False


def _enable_sqlite_savepoints(engine) -> None:
    """Let pysqlite emit BEGIN itself so SAVEPOINTs behave.

    The driver defers BEGIN on its own, which breaks nested transactions;
    see the SQLAlchemy SQLite dialect notes on serializable isolation.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, connection_record):  # pragma: no cover
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn):  # pragma: no cover
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Parameters
    ----------
    app: flask.Flask
        Application fixture ensuring the Flask context is available.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _enable_sqlite_savepoints(_db.engine)
        _db.create_all()
    yield _db
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(app, db):
    """Keep a dedicated DBAPI connection open for the whole session.

    Parameters
    ----------
    app: flask.Flask
        Application owning the engine.
    db: flask_sqlalchemy.SQLAlchemy
        Database extension used to retrieve the engine.

    Yields
    ------
    sqlalchemy.engine.Connection
        Connection reused by the per-test transactions.
    """
    with app.app_context():
        conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(app, db, connection):
    """Provide a SQLAlchemy session joined to a per-test outer transaction.

    Parameters
    ----------
    db: flask_sqlalchemy.SQLAlchemy
        Database extension whose ``session`` attribute is temporarily
        reassigned.
    connection: sqlalchemy.engine.Connection
        Shared connection maintaining the outer transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection; everything it commits
        is discarded when the outer transaction rolls back.

    Notes
    -----
    ``join_transaction_mode="create_savepoint"`` turns ``commit()`` and
    ``rollback()`` into SAVEPOINT release/rollback, which is the SQLAlchemy 2.0
    recipe for joining an external transaction. A fresh application context
    is pushed per test so ``g`` never carries state across cases.
    """
    ctx = app.app_context()
    ctx.push()

    # 1) Top-level transaction
    top_trans = connection.begin()

    # 2) Scoped session bound to the connection
    factory = sessionmaker(
        bind=connection,
        autoflush=False,
        join_transaction_mode="create_savepoint",
    )
    scoped = scoped_session(factory)

    # 3) Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()
        ctx.pop()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def client(app, session):
    """Flask test client sharing the transactional session."""
    return app.test_client()


@pytest.fixture()
def auth_service_factory(app):
    """Build :class:`AuthService` instances wired to the app's adapters."""

    def _build(actor_id: str | None = None, client_ip: str | None = "127.0.0.1") -> AuthService:
        return AuthService(
            token_provider=get_token_provider(),
            denylist_store=get_denylist(),
            token_cfg=get_token_config(),
            ctx=ServiceContext(actor_id=actor_id, client_ip=client_ip),
        )

    return _build


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
