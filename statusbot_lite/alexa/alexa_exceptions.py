"""Custom exception hierarchy for Alexa skill errors.

The message of an ``UpstreamServiceError`` is spoken to the user verbatim, so
it is phrased as a sentence rather than as a diagnostic.
"""

from typing import Optional


class AlexaHandlerError(Exception):
    """Base exception for all Alexa skill errors."""


class AlexaAuthenticationError(AlexaHandlerError):
    """The inbound request is not for this skill.

    Raised when:
    - The request's application id does not match the configured skill id

    Should result in HTTP 401 Unauthorized response.
    """


class AlexaValidationError(AlexaHandlerError):
    """Request validation failed.

    Raised when:
    - The request envelope is malformed
    - A slot value cannot be interpreted

    Should result in HTTP 400 Bad Request response when raised at the route.
    """


class InvalidRequestedTimeError(AlexaValidationError):
    """The time slot is neither a coarse period nor an HH:mm clock time."""


class UpstreamServiceError(AlexaHandlerError):
    """A third-party API call did not succeed.

    Attributes:
        service: Short name of the failing service (e.g. "slack")
        upstream_error: Error string reported by the service, if any
    """

    def __init__(self, message: str, service: str, upstream_error: Optional[str] = None):
        super().__init__(message)
        self.service = service
        self.upstream_error = upstream_error
