"""
Amazon Alexa skill backend: Slack status and do-not-disturb by voice.

This module provides the turn dispatcher shared by the aiohttp endpoint and
an AWS Lambda handler for deploying the skill directly to Lambda.

Usage:
- Deploy as AWS Lambda function with handler
  ``statusbot_lite.alexa.alexa_skill_backend.lambda_handler``
- Configure STATUSBOT_ALEXA_APP_ID (or ALEXA_APP_ID) and STATUSBOT_MAPS_API_KEY
  (or MAPS_API_KEY) environment variables
- Enable account linking with Slack and the country/postal code permission

Supported Intents:
- SlackBusyIntent: "I'm in a meeting until 3 pm"
- SlackClearStatusIntent: "Clear my status"
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

import httpx

# Importing the handlers module registers every turn handler
from statusbot_lite.alexa import alexa_handlers
from statusbot_lite.alexa.alexa_exceptions import AlexaAuthenticationError, AlexaValidationError
from statusbot_lite.alexa.alexa_models import AlexaRequestEnvelope
from statusbot_lite.alexa.alexa_protocols import TimeProvider
from statusbot_lite.alexa.alexa_registry import (
    IntentKind,
    TurnHandlerRegistry,
    get_handler_info_summary,
)
from statusbot_lite.alexa.alexa_types import AlexaResponse
from statusbot_lite.core.config_manager import SkillConfig
from statusbot_lite.core.http_client import DEFAULT_HEADERS, build_timeout
from statusbot_lite.core.timezone_utils import now_utc
from statusbot_lite.middleware import bind_request_id
from statusbot_lite.services.location_service import LocationService
from statusbot_lite.services.slack_client import SlackStatusClient

logger = logging.getLogger(__name__)

INVALID_REQUEST = "Sorry, I received an invalid request."
GENERIC_FAILURE = "Sorry, something went wrong. Please try again later."


class SkillDispatcher:
    """Routes one Alexa request to the handler for its intent kind."""

    def __init__(self, context: alexa_handlers.TurnContext, alexa_app_id: Optional[str] = None):
        """Instantiate one handler per intent kind.

        Raises:
            RuntimeError: If any intent kind has no registered handler
        """
        missing = TurnHandlerRegistry.missing_kinds()
        if missing:
            raise RuntimeError(
                "No turn handler registered for: " + ", ".join(kind.value for kind in missing)
            )

        self.alexa_app_id = alexa_app_id
        self._infos = TurnHandlerRegistry.get_handlers()
        self._handlers = {kind: info.handler_class(context) for kind, info in self._infos.items()}
        logger.debug(get_handler_info_summary())

    def verify_application(self, envelope: AlexaRequestEnvelope) -> None:
        """Reject requests addressed to a different skill.

        Raises:
            AlexaAuthenticationError: If an app id is configured and does not match
        """
        if not self.alexa_app_id:
            return  # No app id configured, accept all requests

        if envelope.application_id != self.alexa_app_id:
            raise AlexaAuthenticationError(
                f"Request application id {envelope.application_id!r} does not match this skill"
            )

    async def dispatch_envelope(self, envelope: AlexaRequestEnvelope) -> AlexaResponse:
        self.verify_application(envelope)
        kind = IntentKind.resolve(envelope.request_type, envelope.intent_name)
        logger.info("Dispatching %s", kind.value)
        if self._infos[kind].requires_account and not envelope.access_token:
            logger.info("%s needs a linked Slack account; sending link card", kind.value)
            return AlexaResponse.tell_with_link_account_card(alexa_handlers.LINK_ACCOUNT)
        return await self._handlers[kind].handle(envelope)

    async def dispatch(self, event: dict[str, Any]) -> dict[str, Any]:
        """Validate a raw event and return the Alexa response dict.

        Raises:
            AlexaValidationError: If the event is not a valid Alexa request
            AlexaAuthenticationError: If the event is for another skill
        """
        envelope = AlexaRequestEnvelope.from_event(event)
        response = await self.dispatch_envelope(envelope)
        return response.to_dict()


def build_dispatcher(
    config: SkillConfig,
    http_client: httpx.AsyncClient,
    time_provider: TimeProvider = now_utc,
) -> SkillDispatcher:
    """Wire the Slack client and location service into a dispatcher."""
    context = alexa_handlers.TurnContext(
        status_client=SlackStatusClient(http_client),
        offset_resolver=LocationService(http_client, config.maps_api_key),
        time_provider=time_provider,
    )
    return SkillDispatcher(context, alexa_app_id=config.alexa_app_id)


async def handle_event(event: dict[str, Any], config: Optional[SkillConfig] = None) -> dict[str, Any]:
    """Handle one Lambda event with a client scoped to this invocation."""
    config = config or SkillConfig.from_env()
    async with httpx.AsyncClient(
        timeout=build_timeout(config.request_timeout), headers=DEFAULT_HEADERS
    ) as client:
        dispatcher = build_dispatcher(config, client)
        try:
            return await dispatcher.dispatch(event)
        except AlexaValidationError:
            logger.warning("Invalid Alexa request", exc_info=True)
            return AlexaResponse.tell(INVALID_REQUEST).to_dict()


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:  # noqa: ARG001
    """AWS Lambda handler for Alexa skill requests.

    Args:
        event: Alexa request event
        context: Lambda context (unused)

    Returns:
        Alexa response dictionary

    Raises:
        AlexaAuthenticationError: If the request targets a different skill id
    """
    request = event.get("request") if isinstance(event, dict) else None
    if not isinstance(request, dict):
        request = {}
    bind_request_id(request.get("requestId"))
    logger.info("Received Alexa request: type=%s", request.get("type"))
    try:
        return asyncio.run(handle_event(event))
    except AlexaAuthenticationError:
        logger.warning("Rejected request for another skill")
        raise
    except Exception:
        logger.exception("Unexpected error in lambda_handler")
        return AlexaResponse.tell(GENERIC_FAILURE).to_dict()


# For local testing
if __name__ == "__main__":
    test_launch_event = {
        "session": {"user": {"accessToken": "xoxp-example"}},
        "request": {"type": "LaunchRequest"},
    }

    print("Testing LaunchRequest:")
    print(json.dumps(lambda_handler(test_launch_event, None), indent=2))
