"""Time provider and fixed-offset timezone helpers for statusbot_lite."""

from __future__ import annotations

import datetime
import logging
import os

logger = logging.getLogger(__name__)

TEST_TIME_ENV_VAR = "STATUSBOT_TEST_TIME"


class TimeProvider:
    """Provides current time with test time override support."""

    def now_utc(self) -> datetime.datetime:
        """Return current UTC time with tzinfo.

        Can be overridden for testing via STATUSBOT_TEST_TIME environment variable.
        Format: ISO 8601 datetime string (e.g., "2025-10-27T08:20:00-07:00")

        Returns:
            Current time in UTC with timezone info
        """
        test_time = os.environ.get(TEST_TIME_ENV_VAR)
        if test_time:
            try:
                from dateutil import parser as date_parser

                dt = date_parser.isoparse(test_time)

                if dt.tzinfo is not None:
                    return dt.astimezone(datetime.UTC)
                # Assume naive datetime is already UTC
                return dt.replace(tzinfo=datetime.UTC)

            except (ValueError, OverflowError) as e:
                logger.warning("Failed to parse %s=%r: %s", TEST_TIME_ENV_VAR, test_time, e)

        return datetime.datetime.now(datetime.UTC)


_time_provider = TimeProvider()


def now_utc() -> datetime.datetime:
    """Get current UTC time (convenience function).

    Returns:
        Current time in UTC
    """
    return _time_provider.now_utc()


def offset_timezone(offset_minutes: float) -> datetime.timezone:
    """Build a fixed-offset timezone from a UTC offset in minutes.

    Args:
        offset_minutes: Signed offset from UTC, DST included (e.g. -420 for PDT)

    Returns:
        datetime.timezone for the offset

    Raises:
        ValueError: If the offset is a day or more away from UTC
    """
    return datetime.timezone(datetime.timedelta(minutes=offset_minutes))
