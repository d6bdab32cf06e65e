"""Slack Web API calls used by the skill: DND snooze and profile status."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from statusbot_lite.alexa.alexa_exceptions import UpstreamServiceError
from statusbot_lite.domain.status_mapper import StatusProfile

logger = logging.getLogger(__name__)

SLACK_API_BASE = "https://slack.com/api"
SNOOZE_ERROR_PREFIX = "I couldn't snooze notifications. The error from Slack was:"
STATUS_ERROR_PREFIX = "I couldn't set the status. The error from Slack was:"


def _slack_error(response: httpx.Response) -> Optional[str]:
    """Return the ``error`` field of a Slack reply, or None when the call succeeded."""
    try:
        body: Any = response.json()
    except ValueError:
        body = None

    if response.status_code == 200 and isinstance(body, dict) and body.get("ok"):
        return None

    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"


class SlackStatusClient:
    """Thin async client for the two Slack methods the skill calls."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str = SLACK_API_BASE):
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    async def _post(self, method: str, form: dict[str, Any], error_prefix: str) -> None:
        url = f"{self.base_url}/{method}"
        try:
            response = await self.http_client.post(url, data=form)
        except httpx.HTTPError as e:
            logger.warning("Slack %s request failed: %s", method, e)
            raise UpstreamServiceError(
                f"{error_prefix} {type(e).__name__}", service="slack", upstream_error=str(e)
            ) from e

        error = _slack_error(response)
        if error is not None:
            logger.warning("Slack %s returned error: %s", method, error)
            raise UpstreamServiceError(
                f"{error_prefix} {error}", service="slack", upstream_error=error
            )
        logger.debug("Slack %s succeeded", method)

    async def set_snooze(self, minutes: int, token: str) -> None:
        """Snooze the user's notifications for ``minutes``.

        Raises:
            UpstreamServiceError: If Slack does not reply with HTTP 200 and ``ok``
        """
        await self._post(
            "dnd.setSnooze",
            {"num_minutes": str(minutes), "token": token},
            SNOOZE_ERROR_PREFIX,
        )

    async def set_status(self, status: StatusProfile, token: str) -> None:
        """Set the user's profile status text and emoji.

        Raises:
            UpstreamServiceError: If Slack does not reply with HTTP 200 and ``ok``
        """
        await self._post(
            "users.profile.set",
            {"profile": json.dumps(status.to_slack_profile()), "token": token},
            STATUS_ERROR_PREFIX,
        )
