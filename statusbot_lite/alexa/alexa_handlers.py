"""Turn handlers for each intent kind the skill understands."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import cast

from statusbot_lite.alexa.alexa_exceptions import (
    InvalidRequestedTimeError,
    UpstreamServiceError,
)
from statusbot_lite.alexa.alexa_models import AlexaRequestEnvelope
from statusbot_lite.alexa.alexa_protocols import OffsetResolver, StatusClient, TimeProvider
from statusbot_lite.alexa.alexa_registry import IntentKind, TurnHandlerRegistry
from statusbot_lite.alexa.alexa_types import AlexaResponse
from statusbot_lite.domain.location_pipeline import FailureKind, ResolutionFailure
from statusbot_lite.domain.requested_time import (
    format_clock_time_spoken,
    parse_requested_time,
    to_clock_time,
)
from statusbot_lite.domain.snooze_calculator import minutes_until
from statusbot_lite.domain.status_mapper import StatusProfile, emojify_status

logger = logging.getLogger(__name__)

LINK_ACCOUNT_ON_LAUNCH = "Please connect your Slack account to Alexa using the Alexa app."
LINK_ACCOUNT = "Please connect your Slack account to Alexa using the Alexa app on your phone."
WHAT_WOULD_YOU_LIKE = "What would you like to do?"
MISSING_STATUS = "I didn't get your status, please try again."
MISSING_TIME = "I didn't get the time, please try again."
STATUS_CLEARED = "Okay, I'll clear your status."
ACKNOWLEDGED = "Okay"
UNHANDLED = "I didn't get that. What would you like to do?"
HELP_SSML = (
    "<p>Here are a few things you can do:</p>"
    "<p>To set your status and snooze your notifications, say: I'm in status until time, "
    "for example: I'm in a call until 5:00 pm. This will set your status and mute your "
    "notifications until that time.</p>"
    "<p>To clear your status, say: clear my status.</p>"
)


@dataclass
class TurnContext:
    """Collaborators shared by all turn handlers."""

    status_client: StatusClient
    offset_resolver: OffsetResolver
    time_provider: TimeProvider


class TurnHandler(ABC):
    """Handles one kind of turn and produces exactly one response."""

    def __init__(self, context: TurnContext):
        self.context = context

    @abstractmethod
    async def handle(self, envelope: AlexaRequestEnvelope) -> AlexaResponse:
        """Produce the response for this turn."""


@TurnHandlerRegistry.register(IntentKind.LAUNCH, description="Greets the user or asks to link Slack")
class LaunchHandler(TurnHandler):
    async def handle(self, envelope: AlexaRequestEnvelope) -> AlexaResponse:
        if not envelope.access_token:
            return AlexaResponse.tell_with_link_account_card(LINK_ACCOUNT_ON_LAUNCH)
        return AlexaResponse.ask(WHAT_WOULD_YOU_LIKE)


@TurnHandlerRegistry.register(
    IntentKind.CLEAR_STATUS,
    description="Clears the Slack status text and emoji",
    requires_account=True,
)
class ClearStatusHandler(TurnHandler):
    async def handle(self, envelope: AlexaRequestEnvelope) -> AlexaResponse:
        # Linked account checked by the dispatcher (requires_account)
        token = cast(str, envelope.access_token)

        try:
            await self.context.status_client.set_status(StatusProfile.cleared(), token)
        except UpstreamServiceError as e:
            return AlexaResponse.tell(str(e))
        return AlexaResponse.tell(STATUS_CLEARED)


@TurnHandlerRegistry.register(
    IntentKind.BUSY,
    description="Sets a Slack status and snoozes notifications until a time",
    requires_account=True,
)
class BusyHandler(TurnHandler):
    """Set the user's status and snooze Slack until the requested local time.

    Each missing or malformed slot ends the turn immediately; no API call is
    made until the status and time have both been validated.
    """

    async def handle(self, envelope: AlexaRequestEnvelope) -> AlexaResponse:
        # Linked account checked by the dispatcher (requires_account)
        token = cast(str, envelope.access_token)

        status = envelope.slot_value("status")
        if not status:
            return AlexaResponse.ask(MISSING_STATUS)

        raw_time = envelope.slot_value("time")
        if not raw_time:
            return AlexaResponse.ask(MISSING_TIME)
        try:
            clock = to_clock_time(parse_requested_time(raw_time))
        except InvalidRequestedTimeError:
            logger.info("Could not interpret time slot value %r", raw_time)
            return AlexaResponse.ask(MISSING_TIME)

        now = self.context.time_provider()
        resolution = await self.context.offset_resolver.resolve_utc_offset(
            envelope.device_id, envelope.consent_token, now, envelope.api_endpoint
        )
        if isinstance(resolution, ResolutionFailure):
            if resolution.kind is FailureKind.PERMISSION_NOT_GRANTED:
                return AlexaResponse.tell_with_permission_card(resolution.message)
            return AlexaResponse.tell(resolution.message)

        minutes = minutes_until(clock, resolution.value, now)
        try:
            await self.context.status_client.set_snooze(minutes, token)
            await self.context.status_client.set_status(emojify_status(status), token)
        except UpstreamServiceError as e:
            return AlexaResponse.tell(str(e))

        logger.info("Snoozed for %d minutes until %s", minutes, clock.to_hhmm())
        return AlexaResponse.tell(
            "Okay, I'll change your status and snooze your notifications "
            f"until {format_clock_time_spoken(clock)}."
        )


@TurnHandlerRegistry.register(IntentKind.STOP, description="Acknowledges and ends the session")
class StopHandler(TurnHandler):
    async def handle(self, envelope: AlexaRequestEnvelope) -> AlexaResponse:
        return AlexaResponse.tell(ACKNOWLEDGED)


@TurnHandlerRegistry.register(IntentKind.CANCEL, description="Acknowledges and ends the session")
class CancelHandler(StopHandler):
    pass


@TurnHandlerRegistry.register(IntentKind.HELP, description="Speaks usage instructions")
class HelpHandler(TurnHandler):
    async def handle(self, envelope: AlexaRequestEnvelope) -> AlexaResponse:
        return AlexaResponse.ask(HELP_SSML, ssml=True)


@TurnHandlerRegistry.register(IntentKind.SESSION_ENDED, description="Closes the session silently")
class SessionEndedHandler(TurnHandler):
    async def handle(self, envelope: AlexaRequestEnvelope) -> AlexaResponse:
        return AlexaResponse.empty()


@TurnHandlerRegistry.register(IntentKind.UNHANDLED, description="Re-prompts for anything else")
class UnhandledHandler(TurnHandler):
    async def handle(self, envelope: AlexaRequestEnvelope) -> AlexaResponse:
        logger.info(
            "Unhandled request: type=%s intent=%s", envelope.request_type, envelope.intent_name
        )
        return AlexaResponse.ask(UNHANDLED)
