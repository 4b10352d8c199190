"""
Tests for correlation ID propagation and log helpers.

System role: Verification of request tracing and safe logging
"""

import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from localchat.observability import clear_correlation_id, get_correlation_id, set_correlation_id
from localchat.observability.log_utils import safe_log_value
from localchat.observability.logger import CorrelationIdFilter
from localchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    @app.get("/echo")
    async def echo() -> dict:
        return {"correlation_id": get_correlation_id()}

    return app


class TestCorrelationMiddleware:
    """Tests for CorrelationMiddleware."""

    def test_incoming_header_is_propagated(self) -> None:
        client = TestClient(build_app())

        response = client.get("/echo", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["X-Correlation-ID"] == "abc-123"
        assert response.json() == {"correlation_id": "abc-123"}

    def test_missing_header_gets_generated_id(self) -> None:
        client = TestClient(build_app())

        response = client.get("/echo")

        generated = response.headers["X-Correlation-ID"]
        assert generated
        assert response.json()["correlation_id"] == generated


class TestCorrelationContext:
    """Tests for the correlation contextvar helpers."""

    def test_set_get_clear(self) -> None:
        assert set_correlation_id("req-1") == "req-1"
        assert get_correlation_id() == "req-1"

        clear_correlation_id()

        assert get_correlation_id() == ""

    def test_filter_uses_dash_outside_request(self) -> None:
        clear_correlation_id()
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "-"


class TestSafeLogValue:
    """Tests for safe_log_value()."""

    def test_truncates_long_strings(self) -> None:
        logged = safe_log_value("x" * 150, max_length=10)

        assert logged.startswith("x" * 10 + "... (truncated, 150 total)")

    def test_summarizes_collections(self) -> None:
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"
        assert safe_log_value(None) == "None"
