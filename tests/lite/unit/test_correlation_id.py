"""Tests for correlation ID middleware and Lambda request ID binding."""

import uuid
from collections.abc import AsyncIterator

import pytest
from aiohttp import web
from aiohttp.test_utils import TestClient, TestServer

from statusbot_lite.middleware.correlation_id import (
    bind_request_id,
    correlation_id_middleware,
    get_request_id,
)

pytestmark = pytest.mark.unit


@pytest.fixture
async def client() -> AsyncIterator[TestClient]:
    """Test client for an app that echoes the correlation ID it sees."""
    app = web.Application(middlewares=[correlation_id_middleware])

    async def echo_handler(request: web.Request) -> web.Response:
        return web.json_response(
            {
                "correlation_id": request.get("correlation_id", "not-set"),
                "context_id": get_request_id(),
            }
        )

    app.router.add_get("/test", echo_handler)
    async with TestClient(TestServer(app)) as test_client:
        yield test_client


class TestCorrelationIdMiddleware:
    """Test correlation ID middleware functionality."""

    async def test_correlation_id_from_x_request_id_header(self, client: TestClient) -> None:
        test_id = "test-request-id-12345"
        resp = await client.get("/test", headers={"X-Request-ID": test_id})
        assert resp.status == 200

        data = await resp.json()
        assert data["correlation_id"] == test_id
        assert data["context_id"] == test_id
        assert resp.headers.get("X-Request-ID") == test_id

    async def test_correlation_id_from_x_correlation_id_header(self, client: TestClient) -> None:
        test_id = "correlation-id-67890"
        resp = await client.get("/test", headers={"X-Correlation-ID": test_id})

        data = await resp.json()
        assert data["correlation_id"] == test_id

    async def test_correlation_id_header_priority(self, client: TestClient) -> None:
        """X-Amzn-Trace-Id wins over X-Request-ID."""
        aws_id = "Root=1-aws-trace"
        resp = await client.get(
            "/test", headers={"X-Amzn-Trace-Id": aws_id, "X-Request-ID": "other"}
        )

        data = await resp.json()
        assert data["correlation_id"] == aws_id
        assert resp.headers.get("X-Request-ID") == aws_id

    async def test_correlation_id_generated_when_no_headers(self, client: TestClient) -> None:
        resp = await client.get("/test")

        data = await resp.json()
        uuid.UUID(data["correlation_id"])
        assert resp.headers.get("X-Request-ID") == data["correlation_id"]


class TestBindRequestId:
    def test_get_request_id_when_unset_then_placeholder(self) -> None:
        assert get_request_id() == "no-request-id"

    def test_bind_request_id_uses_given_id(self) -> None:
        assert bind_request_id("amzn1.echo-api.request.abc") == "amzn1.echo-api.request.abc"
        assert get_request_id() == "amzn1.echo-api.request.abc"

    def test_bind_request_id_when_missing_then_generates_uuid(self) -> None:
        bound = bind_request_id(None)
        uuid.UUID(bound)
        assert get_request_id() == bound
