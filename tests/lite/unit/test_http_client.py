"""Unit tests for statusbot_lite.core.http_client module."""

import httpx
import pytest

from statusbot_lite.core.http_client import (
    DEFAULT_HEADERS,
    build_timeout,
    close_all_clients,
    get_shared_client,
)

pytestmark = pytest.mark.unit


class TestSharedHTTPClient:
    """Test shared HTTP client management."""

    async def test_get_shared_client_creates_new_client(self) -> None:
        client = await get_shared_client("test_client")

        assert isinstance(client, httpx.AsyncClient)
        assert not client.is_closed
        assert client.headers["User-Agent"] == DEFAULT_HEADERS["User-Agent"]

    async def test_get_shared_client_reuses_existing_client(self) -> None:
        client1 = await get_shared_client("test_client")
        client2 = await get_shared_client("test_client")

        assert client1 is client2

    async def test_get_shared_client_different_ids(self) -> None:
        client1 = await get_shared_client("test_client_1")
        client2 = await get_shared_client("test_client_2")

        assert client1 is not client2

    async def test_get_shared_client_replaces_closed_client(self) -> None:
        client1 = await get_shared_client("test_client")
        await client1.aclose()

        client2 = await get_shared_client("test_client")

        assert client2 is not client1
        assert not client2.is_closed

    async def test_close_all_clients_closes_all(self) -> None:
        client1 = await get_shared_client("test_client_1")
        client2 = await get_shared_client("test_client_2")

        await close_all_clients()

        assert client1.is_closed
        assert client2.is_closed

    async def test_get_shared_client_after_close_all_then_fresh_client(self) -> None:
        client1 = await get_shared_client("test_client")
        await close_all_clients()

        client2 = await get_shared_client("test_client")

        assert client2 is not client1
        assert not client2.is_closed

    async def test_get_shared_client_applies_timeout(self) -> None:
        client = await get_shared_client("timeout_client", timeout=build_timeout(1.5))
        assert client.timeout.read == 1.5


class TestBuildTimeout:
    def test_build_timeout_when_none_then_default_read(self) -> None:
        timeout = build_timeout(None)
        assert timeout.read == 5.0
        assert timeout.connect == 3.0

    def test_build_timeout_overrides_read_only(self) -> None:
        timeout = build_timeout(7.0)
        assert timeout.read == 7.0
        assert timeout.connect == 3.0
