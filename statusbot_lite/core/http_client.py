"""Shared HTTP client manager for the skill's outbound API calls.

One skill turn makes up to five sequential calls (Alexa device address,
geocoding, timezone, Slack snooze, Slack status). Reusing a pooled
httpx.AsyncClient across turns avoids a TLS handshake per call.
"""

import asyncio
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

# Keyed by client_id; guarded by _client_lock
_shared_clients: dict[str, httpx.AsyncClient] = {}
_client_lock = asyncio.Lock()

_DEFAULT_LIMITS = httpx.Limits(
    max_connections=10,
    max_keepalive_connections=5,
)

# Alexa expects a response within 8 seconds; keep each hop well below that
_DEFAULT_TIMEOUT = httpx.Timeout(
    connect=3.0,
    read=5.0,
    write=3.0,
    pool=3.0,
)

DEFAULT_HEADERS: dict[str, str] = {
    "User-Agent": "StatusBot/1.0 (Alexa skill)",
    "Accept": "application/json",
}


def build_timeout(read_seconds: Optional[float]) -> httpx.Timeout:
    """Return the default timeout with an overridden read timeout."""
    if read_seconds is None:
        return _DEFAULT_TIMEOUT
    return httpx.Timeout(connect=3.0, read=read_seconds, write=3.0, pool=3.0)


async def get_shared_client(
    client_id: str = "default",
    limits: Optional[httpx.Limits] = None,
    timeout: Optional[httpx.Timeout] = None,
) -> httpx.AsyncClient:
    """Return the pooled client registered under ``client_id``, creating it on first use.

    A client that has been closed is replaced. ``limits`` and ``timeout`` only
    apply when a new client is built.
    """
    async with _client_lock:
        client = _shared_clients.get(client_id)
        if client is None or client.is_closed:
            client = httpx.AsyncClient(
                limits=limits or _DEFAULT_LIMITS,
                timeout=timeout or _DEFAULT_TIMEOUT,
                headers=DEFAULT_HEADERS,
            )
            _shared_clients[client_id] = client
            logger.info("Created shared HTTP client '%s' (read timeout %ss)", client_id, client.timeout.read)
        return client


async def close_all_clients() -> None:
    """Close every shared client. Called from server shutdown."""
    async with _client_lock:
        clients = list(_shared_clients.items())
        _shared_clients.clear()

    for client_id, client in clients:
        try:
            await client.aclose()
        except httpx.HTTPError as e:
            logger.warning("Error closing shared HTTP client '%s': %s", client_id, e)
        else:
            logger.debug("Closed shared HTTP client '%s'", client_id)
