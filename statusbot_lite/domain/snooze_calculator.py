"""Snooze duration calculation in the user's local UTC offset."""

from __future__ import annotations

import datetime
import logging

from statusbot_lite.core.timezone_utils import offset_timezone
from statusbot_lite.domain.requested_time import ClockTime, parse_requested_time, to_clock_time

logger = logging.getLogger(__name__)


def minutes_until(target: ClockTime, offset_minutes: float, now: datetime.datetime) -> int:
    """Return whole minutes from ``now`` until the next occurrence of ``target``.

    The target is placed on today's date in the fixed-offset zone. When it has
    already passed, it is moved to the same time tomorrow; a target equal to
    ``now`` is not rolled over.

    Args:
        target: Clock time the snooze should end at
        offset_minutes: User's UTC offset in minutes (DST included)
        now: Current time, timezone-aware

    Returns:
        Minutes until the target, truncated, in the range [0, 1440)

    Raises:
        ValueError: If ``now`` is naive
    """
    if now.tzinfo is None or now.utcoffset() is None:
        raise ValueError("now must be timezone-aware")

    local_now = now.astimezone(offset_timezone(offset_minutes))
    local_target = local_now.replace(
        hour=target.hour, minute=target.minute, second=0, microsecond=0
    )

    # "9:00 am" said at 10:00 am means tomorrow
    if local_now > local_target:
        local_target += datetime.timedelta(days=1)

    minutes = int((local_target - local_now).total_seconds() // 60)
    logger.debug(
        "Snooze until %s at offset %s: %d minutes", target.to_hhmm(), offset_minutes, minutes
    )
    return minutes


def snooze_minutes_for(raw_time: str, offset_minutes: float, now: datetime.datetime) -> int:
    """Parse a raw time slot value and compute the snooze duration for it."""
    return minutes_until(to_clock_time(parse_requested_time(raw_time)), offset_minutes, now)
