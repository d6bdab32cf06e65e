"""Request correlation IDs for tracing one skill turn through the logs.

A turn fans out into up to five outbound calls (Alexa device address,
geocoding, timezone, Slack snooze, Slack status). The correlation ID ties
their log lines together.

Over HTTP the ID comes from request headers via ``correlation_id_middleware``;
under Lambda there is no middleware, so the Alexa ``requestId`` is bound
directly with ``bind_request_id``.
"""

import uuid
from collections.abc import Callable
from contextvars import ContextVar
from typing import Any, Optional

from aiohttp import web

# Uses contextvars so each asyncio task sees its own request's ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_HEADER_PRIORITY = ("X-Amzn-Trace-Id", "X-Request-ID", "X-Correlation-ID")


@web.middleware
async def correlation_id_middleware(
    request: web.Request, handler: Callable[[web.Request], Any]
) -> web.Response:
    """Extract or generate a correlation ID and echo it in ``X-Request-ID``.

    Priority: X-Amzn-Trace-Id, X-Request-ID, X-Correlation-ID, then a new UUID.
    """
    correlation_id = next(
        (request.headers[name] for name in _HEADER_PRIORITY if request.headers.get(name)),
        str(uuid.uuid4()),
    )

    request_id_var.set(correlation_id)
    request["correlation_id"] = correlation_id

    response = await handler(request)
    response.headers["X-Request-ID"] = correlation_id
    return response


def bind_request_id(request_id: Optional[str]) -> str:
    """Bind a correlation ID for code paths without the middleware.

    Args:
        request_id: Alexa ``request.requestId``; a UUID is generated when missing

    Returns:
        The bound correlation ID
    """
    correlation_id = request_id or str(uuid.uuid4())
    request_id_var.set(correlation_id)
    return correlation_id


def get_request_id() -> str:
    """Get current request correlation ID from context.

    Returns:
        Current request correlation ID, or "no-request-id" if not set
    """
    request_id = request_id_var.get()
    return request_id if request_id else "no-request-id"
