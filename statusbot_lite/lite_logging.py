"""
Central logging configuration for statusbot_lite.

Keeps the skill's own modules at INFO (or DEBUG on request) while quieting
the per-request chatter from aiohttp and httpx, and stamps every record with
the turn's correlation ID.
"""

import logging
import os
from typing import Optional

from colorlog import ColoredFormatter

from statusbot_lite.middleware import get_request_id

CONSOLE_FORMAT = (
    "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s [%(request_id)s] %(name)s: %(message)s"
)
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

# Third-party loggers that log every request at INFO/DEBUG
NOISY_LOGGERS = (
    "aiohttp.access",
    "aiohttp.server",
    "aiohttp.web_log",
    "httpx",
    "httpcore",
    "asyncio",
)


class CorrelationIdFilter(logging.Filter):
    """Add correlation ID to all log records for distributed tracing."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


def build_console_handler(level: int = logging.NOTSET) -> logging.Handler:
    """Create a colorized stderr handler carrying the correlation ID filter."""
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS))
    handler.addFilter(CorrelationIdFilter())
    return handler


def configure_lite_logging(debug_mode: bool = False, force_debug: Optional[bool] = None) -> None:
    """
    Configure logging levels for statusbot_lite.

    Args:
        debug_mode: Whether to enable debug logging for statusbot_lite modules
        force_debug: Override debug mode setting (None to use env var detection)

    Environment Variables:
        STATUSBOT_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        STATUSBOT_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("STATUSBOT_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("STATUSBOT_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    if not root_logger.handlers:
        root_logger.addHandler(build_console_handler(root_level))
    else:
        for existing_handler in root_logger.handlers:
            if not any(isinstance(f, CorrelationIdFilter) for f in existing_handler.filters):
                existing_handler.addFilter(CorrelationIdFilter())

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.getLogger("statusbot_lite").setLevel(logging.DEBUG if final_debug else logging.INFO)

    if final_debug:
        root_logger.info("Debug logging enabled for statusbot_lite modules")
    else:
        root_logger.info("Production logging configuration applied")
