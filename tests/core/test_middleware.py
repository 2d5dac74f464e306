"""Tests for observability and rate limit middleware."""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from prerender.core.metrics import metrics
from prerender.core.middleware import ObservabilityMiddleware, RateLimitMiddleware
from prerender.core.rate_limit import RateLimiter


@pytest.fixture
def app():
    """Create a test FastAPI app with middleware."""
    test_app = FastAPI()
    test_app.add_middleware(RateLimitMiddleware, limiter=RateLimiter(max_requests=2))
    test_app.add_middleware(ObservabilityMiddleware)

    @test_app.get("/test")
    async def test_endpoint():
        return {"message": "ok"}

    @test_app.get("/error")
    async def error_endpoint():
        raise ValueError("Test error")

    return test_app


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


def test_middleware_adds_request_id(client):
    response = client.get("/test")
    assert len(response.headers["x-request-id"]) > 0


def test_middleware_preserves_provided_request_id(client):
    response = client.get("/test", headers={"X-Request-ID": "test-123-456"})
    assert response.headers["x-request-id"] == "test-123-456"


def test_middleware_records_latency(client):
    initial_count = metrics.total_requests
    client.get("/test")
    assert metrics.total_requests == initial_count + 1
    assert metrics._latencies[-1] >= 0


def test_middleware_counts_server_errors(client):
    initial_errors = metrics.total_errors
    response = client.get("/error")
    assert response.status_code == 500
    assert metrics.total_errors == initial_errors + 1


def test_rate_limit_rejects_with_429(client):
    assert client.get("/test").status_code == 200
    assert client.get("/test").status_code == 200
    response = client.get("/test")
    assert response.status_code == 429
    assert response.json() == {"error": "Too many requests, please try again later."}
    assert int(response.headers["retry-after"]) > 0
    assert "x-request-id" in response.headers


def test_access_log_carries_status_and_duration(client, caplog):
    with caplog.at_level(logging.INFO, logger="prerender.core.middleware"):
        client.get("/test", headers={"X-Request-ID": "req-7"})
    record = next(r for r in caplog.records if r.name == "prerender.core.middleware")
    assert record.status == 200
    assert record.duration_ms >= 0
    assert record.getMessage() == "GET /test 200"
