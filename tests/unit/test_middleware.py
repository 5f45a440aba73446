"""
Unit tests for the request ID middleware.
"""

from __future__ import annotations

import pytest
import structlog
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from hotelhub.middleware import RequestIDMiddleware


@pytest.fixture
def app_with_middleware() -> FastAPI:
    """App with RequestIDMiddleware and an endpoint echoing the request context."""
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/echo")
    async def echo(request: Request) -> dict[str, str]:
        context = structlog.contextvars.get_contextvars()
        return {
            "request_id": request.state.request_id,
            "bound_request_id": context.get("request_id", ""),
            "bound_path": context.get("path", ""),
        }

    return app


@pytest.fixture
def client(app_with_middleware: FastAPI) -> TestClient:
    return TestClient(app_with_middleware)


@pytest.mark.unit
def test_generates_uuid_request_id(client: TestClient) -> None:
    response = client.get("/echo")

    assert response.status_code == 200
    assert len(response.headers["X-Request-ID"]) == 36
    assert response.headers["X-Request-ID"] == response.json()["request_id"]


@pytest.mark.unit
def test_reuses_caller_request_id(client: TestClient) -> None:
    """The voice agent bridge sends its own id so logs can be joined."""
    response = client.get("/echo", headers={"X-Request-ID": "agent-call-42"})

    assert response.headers["X-Request-ID"] == "agent-call-42"
    assert response.json()["request_id"] == "agent-call-42"


@pytest.mark.unit
def test_binds_request_id_into_log_context(client: TestClient) -> None:
    response = client.get("/echo", headers={"X-Request-ID": "abc"})

    data = response.json()
    assert data["bound_request_id"] == "abc"
    assert data["bound_path"] == "/echo"


@pytest.mark.unit
def test_request_ids_differ_between_requests(client: TestClient) -> None:
    first = client.get("/echo").headers["X-Request-ID"]
    second = client.get("/echo").headers["X-Request-ID"]

    assert first != second
