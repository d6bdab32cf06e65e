"""Command-line entry for statusbot_lite.

Runs the skill as an HTTPS-endpoint server behind a TLS-terminating proxy.
"""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn

from . import run_server


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for statusbot_lite CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="statusbot_lite",
        description="StatusBot Lite - Alexa skill endpoint for Slack status and DND",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m statusbot_lite                    # Serve on default port (8080)
  python -m statusbot_lite --port 3000        # Serve on port 3000
        """,
    )

    parser.add_argument(
        "--port",
        type=int,
        metavar="PORT",
        help="Port number for the web server (default: 8080, or from STATUSBOT_WEB_PORT env var)",
    )
    parser.add_argument(
        "--host",
        metavar="HOST",
        help="Address to bind (default: 0.0.0.0, or from STATUSBOT_WEB_HOST env var)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging for statusbot_lite modules",
    )

    return parser


def main() -> NoReturn:
    """Run the statusbot_lite CLI."""
    parser = _create_parser()
    args = parser.parse_args()
    run_server(args)
    sys.exit(0)


if __name__ == "__main__":
    main()
