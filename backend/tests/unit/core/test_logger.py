"""JSON log formatting and request correlation."""

from __future__ import annotations

import json
import logging

from simplytrack.core.logger import REQUEST_ID_HEADER, JSONFormatter, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("simplytrack.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_known_extras():
    line = JSONFormatter().format(_record(event="auth.login", user_id="u1", request_id="r1", other="x"))
    payload = json.loads(line)

    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["event"] == "auth.login"
    assert payload["user_id"] == "u1"
    assert payload["request_id"] == "r1"
    assert "other" not in payload


def test_request_id_is_echoed(client):
    resp = client.get("/api/v1/health", headers={REQUEST_ID_HEADER: "req-123"})
    assert resp.headers[REQUEST_ID_HEADER] == "req-123"


def test_request_id_generated_when_absent(client):
    resp = client.get("/api/v1/health")
    assert resp.headers.get(REQUEST_ID_HEADER)


def test_configure_logging_sets_level():

    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("DEBUG")
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        configure_logging(logging.getLevelName(previous))
