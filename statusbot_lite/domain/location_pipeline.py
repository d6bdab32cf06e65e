"""Typed stages and tagged results for the device location to UTC offset pipeline.

The pipeline runs three stages in order::

    DeviceAddress -> GeoPoint -> UTC offset (minutes)

Each stage returns either ``StageOk`` wrapping the next stage's input or a
``ResolutionFailure`` naming which stage failed. A failure ends the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

_T = TypeVar("_T")

PERMISSION_NOT_GRANTED_MESSAGE = (
    "I'm sorry, I couldn't get your location. Make sure you've given this skill "
    "permission to use your address in the Alexa app."
)


class FailureKind(Enum):
    """Which stage of location resolution failed."""

    PERMISSION_NOT_GRANTED = "permission_not_granted"
    ADDRESS_NOT_UNDERSTOOD = "address_not_understood"
    TIMEZONE_LOOKUP_FAILED = "timezone_lookup_failed"


@dataclass(frozen=True)
class ResolutionFailure:
    """A failed stage. ``message`` is spoken to the user as is."""

    kind: FailureKind
    message: str

    @classmethod
    def permission_not_granted(cls) -> ResolutionFailure:
        return cls(FailureKind.PERMISSION_NOT_GRANTED, PERMISSION_NOT_GRANTED_MESSAGE)

    @classmethod
    def address_not_understood(cls, status: object) -> ResolutionFailure:
        return cls(
            FailureKind.ADDRESS_NOT_UNDERSTOOD,
            "I'm sorry, I couldn't understand that address. "
            f"The response from Google Maps was {status}",
        )

    @classmethod
    def timezone_lookup_failed(cls, status: object) -> ResolutionFailure:
        return cls(
            FailureKind.TIMEZONE_LOOKUP_FAILED,
            "I'm sorry, I couldn't get the timezone for that location. "
            f"The response from Google Maps was {status}",
        )


@dataclass(frozen=True)
class StageOk(Generic[_T]):
    value: _T


StageResult = Union[StageOk[_T], ResolutionFailure]


@dataclass(frozen=True)
class DeviceAddress:
    """Country and postal code reported for an Alexa device."""

    postal_code: str
    country_code: str

    def to_query(self) -> str:
        """Geocoding query string, e.g. ``"20003 US"``."""
        return f"{self.postal_code} {self.country_code}"


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float

    def to_param(self) -> str:
        return f"{self.lat},{self.lng}"


def offset_from_timezone_payload(payload: dict) -> float:
    """Combine the timezone API's ``rawOffset`` and ``dstOffset`` seconds into minutes.

    Uses true division, so half-hour and quarter-hour zones stay exact.
    """
    return (payload["rawOffset"] + payload["dstOffset"]) / 60
