"""Tests for RequestContextMiddleware."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from structlog.contextvars import bind_contextvars, get_contextvars

from stockroom.api.middleware.context import RequestContextMiddleware


class TestRequestContextMiddleware:
    """Tests for RequestContextMiddleware."""

    @pytest.fixture
    def app(self):
        """Create a FastAPI app with middleware."""
        app = FastAPI()
        app.add_middleware(RequestContextMiddleware)

        @app.get("/context")
        async def context_endpoint():
            return dict(get_contextvars())

        return app

    @pytest.fixture
    def client(self, app):
        return TestClient(app)

    def test_binds_request_id_from_header(self, client):
        """The handler sees the caller's request id in the log context."""
        response = client.get("/context", headers={"X-Request-ID": "req-abc"})

        assert response.json()["request_id"] == "req-abc"
        assert response.headers["X-Request-ID"] == "req-abc"

    def test_generates_request_id(self, client):
        response = client.get("/context")

        request_id = response.json()["request_id"]
        assert request_id
        assert response.headers["X-Request-ID"] == request_id

    def test_each_request_gets_its_own_id(self, client):
        first = client.get("/context").headers["X-Request-ID"]
        second = client.get("/context").headers["X-Request-ID"]

        assert first != second

    def test_clears_stale_context(self, client):
        """Context bound outside the request does not leak into it."""
        bind_contextvars(stale="value")

        body = client.get("/context").json()

        assert "stale" not in body
