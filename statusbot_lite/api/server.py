"""statusbot_lite.api.server: aiohttp HTTPS-endpoint host for the Alexa skill.

Alexa can call a custom skill either through Lambda or through an HTTPS
endpoint. This module runs the endpoint flavour: an aiohttp application
exposing ``POST /api/alexa`` and ``GET /api/health``, backed by one shared
httpx client for all outbound calls.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from typing import Any, Optional

from aiohttp import web

from statusbot_lite import __version__
from statusbot_lite.alexa.alexa_protocols import TimeProvider
from statusbot_lite.alexa.alexa_skill_backend import SkillDispatcher, build_dispatcher
from statusbot_lite.api.routes import register_alexa_routes, register_api_routes
from statusbot_lite.core.config_manager import (
    DEFAULT_SERVER_BIND,
    DEFAULT_SERVER_PORT,
    ConfigManager,
    SkillConfig,
    get_config_value,
)
from statusbot_lite.core.http_client import build_timeout, close_all_clients, get_shared_client
from statusbot_lite.core.timezone_utils import now_utc
from statusbot_lite.lite_logging import configure_lite_logging
from statusbot_lite.middleware import correlation_id_middleware

logger = logging.getLogger(__name__)


def _build_default_config_from_env() -> dict[str, Any]:
    """Load .env defaults and environment variables into a config dict."""
    return ConfigManager().load_full_config()


def _make_app(dispatcher: SkillDispatcher) -> web.Application:
    """Create the aiohttp application with routes wired to ``dispatcher``."""
    app = web.Application(middlewares=[correlation_id_middleware])
    register_api_routes(app, __version__)
    register_alexa_routes(app, dispatcher)

    async def _shutdown(_app: web.Application) -> None:
        logger.info("Application shutdown requested")

    app.on_shutdown.append(_shutdown)
    return app


async def _serve(
    config: Any,
    external_stop_event: Optional[asyncio.Event] = None,
    time_provider: TimeProvider = now_utc,
) -> None:
    """Run the server until signalled to stop.

    Args:
        config: Server configuration dict
        external_stop_event: Optional event to signal shutdown. If provided,
            signal handlers will NOT be registered (caller owns signal handling).
        time_provider: Clock used for snooze calculations
    """
    stop_event = external_stop_event or asyncio.Event()
    skill_config = SkillConfig.from_mapping(config)

    http_client = await get_shared_client(
        "skill", timeout=build_timeout(skill_config.request_timeout)
    )
    dispatcher = build_dispatcher(skill_config, http_client, time_provider)
    app = _make_app(dispatcher)

    runner = web.AppRunner(app)
    await runner.setup()

    host = get_config_value(config, "server_bind", DEFAULT_SERVER_BIND)
    port = int(get_config_value(config, "server_port", DEFAULT_SERVER_PORT))
    site = web.TCPSite(runner, host=host, port=port)
    try:
        await site.start()
    except OSError:
        logger.exception("Failed to start server on %s:%d", host, port)
        await runner.cleanup()
        await close_all_clients()
        raise

    logger.info("Server started successfully on %s:%d", host, port)
    if not skill_config.alexa_app_id:
        logger.warning("No Alexa application id configured; accepting requests for any skill")

    if external_stop_event is None:
        loop = asyncio.get_running_loop()

        def _on_signal() -> None:
            logger.info("Shutdown signal received")
            stop_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError):
                loop.add_signal_handler(sig, _on_signal)

    await stop_event.wait()
    logger.info("Stop event received, shutting down")

    await runner.cleanup()
    await close_all_clients()
    logger.info("Server shutdown complete")


def start_server(config: Any) -> None:
    """Start the asyncio event loop and HTTP server.

    Args:
        config: dict with keys:
            - server_bind: host to bind (str)
            - server_port: port (int)
            - alexa_app_id: skill id inbound requests must carry (str, optional)
            - maps_api_key: Google Maps API key (str)
            - request_timeout: outbound HTTP read timeout in seconds (float, optional)
            - debug_logging: enable debug logging for statusbot_lite (bool)

    This function blocks the calling thread and runs until a SIGINT/SIGTERM is received.
    """
    debug_mode = bool(get_config_value(config, "debug_logging", False))
    configure_lite_logging(debug_mode=debug_mode)
    logger.info("Logging configuration applied: debug_mode=%s", debug_mode)

    try:
        asyncio.run(_serve(config))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
