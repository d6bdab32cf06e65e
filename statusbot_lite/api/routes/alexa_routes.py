"""Alexa skill endpoint route."""

from __future__ import annotations

import logging

from aiohttp import web

from statusbot_lite.alexa.alexa_exceptions import AlexaAuthenticationError, AlexaValidationError
from statusbot_lite.alexa.alexa_skill_backend import GENERIC_FAILURE, SkillDispatcher
from statusbot_lite.alexa.alexa_types import AlexaResponse

logger = logging.getLogger(__name__)

ALEXA_ROUTE = "/api/alexa"


def register_alexa_routes(app: web.Application, dispatcher: SkillDispatcher) -> None:
    """Register the POST endpoint Alexa calls for every skill turn.

    Args:
        app: aiohttp web application
        dispatcher: Dispatcher that turns a request envelope into a response
    """

    async def alexa_handler(request: web.Request) -> web.Response:
        try:
            event = await request.json()
        except ValueError:
            # JSONDecodeError and UnicodeDecodeError
            logger.warning("Alexa request body is not valid JSON")
            return web.json_response({"error": "Bad request", "message": "Invalid JSON"}, status=400)

        try:
            return web.json_response(await dispatcher.dispatch(event))
        except AlexaAuthenticationError as e:
            logger.warning("Rejected Alexa request: %s", e)
            return web.json_response({"error": "Unauthorized"}, status=401)
        except AlexaValidationError as e:
            logger.warning("Invalid Alexa request: %s", e)
            return web.json_response({"error": "Bad request", "message": str(e)}, status=400)
        except Exception:
            logger.exception("Unexpected error handling Alexa request")
            return web.json_response(AlexaResponse.tell(GENERIC_FAILURE).to_dict())

    app.router.add_post(ALEXA_ROUTE, alexa_handler)
    logger.info("Registered Alexa route: %s", ALEXA_ROUTE)
