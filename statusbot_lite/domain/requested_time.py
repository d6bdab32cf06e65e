"""Requested snooze end times as spoken to the AMAZON.TIME slot.

The slot delivers either a clock time ("13:00") or a coarse period of the day
("MO", "AF", "EV", "NI"). This module models that as a closed sum type so the
rest of the skill only ever sees a concrete clock time.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from statusbot_lite.alexa.alexa_exceptions import InvalidRequestedTimeError

_CLOCK_PATTERN = re.compile(r"^(?P<hour>[01]?\d|2[0-3]):(?P<minute>[0-5]\d)$")


@dataclass(frozen=True)
class ClockTime:
    """A wall-clock time of day (24-hour)."""

    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23 or not 0 <= self.minute <= 59:
            raise InvalidRequestedTimeError(f"Invalid clock time: {self.hour}:{self.minute}")

    @classmethod
    def parse(cls, value: str) -> ClockTime:
        """Parse an ``HH:mm`` string.

        Raises:
            InvalidRequestedTimeError: If the value is not a valid 24-hour time
        """
        match = _CLOCK_PATTERN.match(value.strip())
        if not match:
            raise InvalidRequestedTimeError(f"Invalid clock time: {value!r}")
        return cls(int(match.group("hour")), int(match.group("minute")))

    def to_hhmm(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class CoarsePeriod(Enum):
    """Coarse periods of the day, valued by their AMAZON.TIME slot code."""

    MORNING = "MO"
    AFTERNOON = "AF"
    EVENING = "EV"
    NIGHT = "NI"

    @property
    def clock_time(self) -> ClockTime:
        return _PERIOD_CLOCK_TIMES[self]

    @classmethod
    def from_token(cls, token: str) -> CoarsePeriod | None:
        """Look up a period by exact slot code ("MO") or lowercase word ("morning")."""
        return _PERIOD_TOKENS.get(token)


_PERIOD_CLOCK_TIMES: dict[CoarsePeriod, ClockTime] = {
    CoarsePeriod.MORNING: ClockTime(9, 0),
    CoarsePeriod.AFTERNOON: ClockTime(13, 0),
    CoarsePeriod.EVENING: ClockTime(19, 0),
    CoarsePeriod.NIGHT: ClockTime(21, 0),
}

_PERIOD_TOKENS: dict[str, CoarsePeriod] = {}
for _period in CoarsePeriod:
    _PERIOD_TOKENS[_period.value] = _period
    _PERIOD_TOKENS[_period.name.lower()] = _period

RequestedTime = Union[CoarsePeriod, ClockTime]


def normalize_time_token(value: str) -> str:
    """Map a coarse period token to its ``HH:mm`` clock time.

    Anything that is not a coarse period token is returned unchanged.

    Examples:
        >>> normalize_time_token("MO")
        '09:00'
        >>> normalize_time_token("17:30")
        '17:30'
    """
    period = CoarsePeriod.from_token(value)
    if period is None:
        return value
    return period.clock_time.to_hhmm()


def parse_requested_time(value: str) -> RequestedTime:
    """Parse a raw time slot value into a coarse period or a clock time.

    Raises:
        InvalidRequestedTimeError: If the value is neither a period token nor ``HH:mm``
    """
    period = CoarsePeriod.from_token(value)
    if period is not None:
        return period
    return ClockTime.parse(value)


def to_clock_time(requested: RequestedTime) -> ClockTime:
    if isinstance(requested, CoarsePeriod):
        return requested.clock_time
    return requested


def format_clock_time_spoken(clock: ClockTime) -> str:
    """Format a clock time for speech, e.g. "9:00 am" or "12:30 am"."""
    hour = clock.hour % 12 or 12
    am_pm = "am" if clock.hour < 12 else "pm"
    return f"{hour}:{clock.minute:02d} {am_pm}"
