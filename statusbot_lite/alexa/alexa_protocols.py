"""Protocol definitions for Alexa handler dependencies."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from statusbot_lite.domain.location_pipeline import StageResult
    from statusbot_lite.domain.status_mapper import StatusProfile


class TimeProvider(Protocol):
    """Protocol for time provider callables."""

    def __call__(self) -> datetime.datetime:
        """Return current UTC time."""
        ...


class OffsetResolver(Protocol):
    """Resolves a device's UTC offset in minutes."""

    async def resolve_utc_offset(
        self,
        device_id: Optional[str],
        consent_token: Optional[str],
        now: datetime.datetime,
        api_endpoint: Optional[str] = None,
    ) -> StageResult[float]:
        ...


class StatusClient(Protocol):
    """Sets Slack DND snooze and profile status."""

    async def set_snooze(self, minutes: int, token: str) -> None:
        ...

    async def set_status(self, status: StatusProfile, token: str) -> None:
        ...
