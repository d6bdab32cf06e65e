"""Operational API routes."""

from __future__ import annotations

import logging

from aiohttp import web

logger = logging.getLogger(__name__)


def register_api_routes(app: web.Application, version: str) -> None:
    """Register ``GET /api/health`` for load balancer and uptime checks."""

    async def health_check(_request: web.Request) -> web.Response:
        return web.json_response({"status": "ok", "version": version})

    app.router.add_get("/api/health", health_check)
