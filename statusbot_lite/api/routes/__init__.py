"""Route registration for the statusbot_lite web server."""

from .alexa_routes import register_alexa_routes
from .api_routes import register_api_routes

__all__ = ["register_alexa_routes", "register_api_routes"]
