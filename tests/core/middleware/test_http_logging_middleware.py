"""Unit tests for the HTTP logging middleware.

Structured fields are asserted via `caplog`:
- X-Request-ID is generated or propagated
- Successful requests emit exactly one INFO record with metadata only
- Paths are logged as route templates, never with patient ids or query strings
- Unhandled exceptions emit an ERROR record with a stack trace and return 500
"""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.middleware.http_logging import HttpLoggingMiddleware


def _make_app() -> FastAPI:
    """Create a minimal app for middleware unit tests."""
    app = FastAPI()
    app.add_middleware(HttpLoggingMiddleware)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/patients/{patient_id}")
    async def patient(patient_id: int) -> dict[str, int]:
        return {"id": patient_id}

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("boom")

    return app


def _get_http_log_records(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == "app.http"]


def test_successful_request_sets_request_id_and_logs_one_info(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="app.http")
    app = _make_app()

    with TestClient(app) as client:
        res = client.get("/health?query=Jan+Kowalski")

    assert res.status_code == 200
    assert res.headers["x-request-id"]

    info_records = [r for r in _get_http_log_records(caplog) if r.levelno == logging.INFO]
    assert len(info_records) == 1

    record = info_records[0]
    assert record.__dict__["request_id"] == res.headers["x-request-id"]
    assert record.__dict__["http_method"] == "GET"
    assert record.__dict__["request_path"] == "/health"
    assert record.__dict__["status_code"] == 200
    assert record.__dict__["duration_ms"] >= 0


def test_path_parameters_are_logged_as_template(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="app.http")
    app = _make_app()

    with TestClient(app) as client:
        res = client.get("/api/patients/1234")

    assert res.status_code == 200
    record = _get_http_log_records(caplog)[0]
    assert record.__dict__["request_path"] == "/api/patients/{patient_id}"
    assert "1234" not in record.getMessage()


@pytest.mark.parametrize(
    ("sent", "propagated"),
    [("req_abc-123", True), ("bad id with spaces", False), ("-leading-dash", False)],
)
def test_request_id_propagation(
    caplog: pytest.LogCaptureFixture, sent: str, propagated: bool
) -> None:
    caplog.set_level(logging.INFO, logger="app.http")
    app = _make_app()

    with TestClient(app) as client:
        res = client.get("/health", headers={"X-Request-ID": sent})

    assert (res.headers["x-request-id"] == sent) is propagated
    assert _get_http_log_records(caplog)[0].__dict__["request_id"] == res.headers["x-request-id"]


def test_unhandled_exception_returns_500_and_logs_error_with_request_id(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="app.http")
    app = _make_app()

    with TestClient(app, raise_server_exceptions=False) as client:
        res = client.get("/boom", headers={"X-Request-ID": "req_err_001"})

    assert res.status_code == 500

    error_records = [r for r in _get_http_log_records(caplog) if r.levelno == logging.ERROR]
    assert len(error_records) == 1

    record = error_records[0]
    assert record.__dict__["request_id"] == "req_err_001"
    assert record.__dict__["request_path"] == "/boom"
    assert record.__dict__["status_code"] == 500
    assert record.exc_info
