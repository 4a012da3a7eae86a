"""Problem responses for storage failures raised from a view."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from simplytrack.core.config import TestingConfig
from simplytrack.factory import create_app
from simplytrack.services._shared.errors import ConflictError


class _ErrorsConfig(TestingConfig):
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    USE_PROXYFIX = False


@pytest.fixture()
def failing_client():
    app = create_app(_ErrorsConfig)

    @app.get("/_fail/integrity")
    def _integrity():
        raise IntegrityError(
            "INSERT INTO workout_sets ...", {}, Exception("FOREIGN KEY constraint failed")
        )

    @app.get("/_fail/operational")
    def _operational():
        raise OperationalError("SELECT 1", {}, Exception("server closed the connection"))

    @app.get("/_fail/conflict")
    def _conflict():
        raise ConflictError("User", "email already registered")

    return app.test_client()


def test_integrity_error_is_a_generic_server_error(failing_client):
    resp = failing_client.get("/_fail/integrity")
    body = resp.get_json()

    assert resp.status_code == 500
    assert resp.mimetype == "application/problem+json"
    assert body["code"] == "INTERNAL_SERVER_ERROR"
    assert "FOREIGN KEY" not in resp.get_data(as_text=True)
    assert "workout_sets" not in resp.get_data(as_text=True)


def test_operational_error_is_service_unavailable(failing_client):
    resp = failing_client.get("/_fail/operational")
    assert resp.status_code == 503
    assert resp.get_json()["code"] == "SERVICE_UNAVAILABLE"


def test_business_conflict_keeps_conflict_code(failing_client):
    resp = failing_client.get("/_fail/conflict")
    assert resp.status_code == 409
    assert resp.get_json()["code"] == "CONFLICT"
