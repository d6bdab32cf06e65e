"""statusbot_lite - Alexa skill that sets your Slack status and snoozes notifications.

The package keeps imports light so it can be inspected without pulling in the
web server; ``run_server`` imports the server lazily.
"""

__version__ = "0.1.0"

from typing import Optional


def run_server(args: Optional[object] = None) -> None:
    """Start the statusbot_lite HTTPS-endpoint server.

    Args:
        args: Optional command line arguments namespace containing --host, --port, --debug

    Behavior:
    - Load configuration from .env and environment variables.
    - Apply command line argument overrides to configuration.
    - Delegate to the server's start_server(cfg), blocking until shutdown.
    """
    import logging

    from statusbot_lite.api import server

    logger = logging.getLogger(__name__)

    cfg = server._build_default_config_from_env()

    if args is not None:
        port = getattr(args, "port", None)
        if port is not None:
            cfg["server_port"] = int(port)
            logger.debug("Applied command line port override: %d", cfg["server_port"])

        host = getattr(args, "host", None)
        if host:
            cfg["server_bind"] = host

        if getattr(args, "debug", False):
            cfg["debug_logging"] = True

    server.start_server(cfg)
