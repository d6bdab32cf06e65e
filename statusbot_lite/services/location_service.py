"""Resolve an Alexa device's UTC offset from its country and postal code.

Three sequential lookups, each gated on the previous one:

1. Alexa device address API -> ``DeviceAddress``
2. Google Maps geocoding API -> ``GeoPoint``
3. Google Maps timezone API -> offset in minutes
"""

from __future__ import annotations

import datetime
import logging
from typing import Any, Optional

import httpx

from statusbot_lite.domain.location_pipeline import (
    DeviceAddress,
    GeoPoint,
    ResolutionFailure,
    StageOk,
    StageResult,
    offset_from_timezone_payload,
)

logger = logging.getLogger(__name__)

DEFAULT_ALEXA_API_ENDPOINT = "https://api.amazonalexa.com"
GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
TIMEZONE_URL = "https://maps.googleapis.com/maps/api/timezone/json"


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class LocationService:
    """Looks up a device's UTC offset through the three-stage pipeline."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        maps_api_key: str,
        geocode_url: str = GEOCODE_URL,
        timezone_url: str = TIMEZONE_URL,
    ):
        self.http_client = http_client
        self.maps_api_key = maps_api_key
        self.geocode_url = geocode_url
        self.timezone_url = timezone_url

    async def fetch_device_address(
        self,
        device_id: Optional[str],
        consent_token: Optional[str],
        api_endpoint: Optional[str] = None,
    ) -> StageResult[DeviceAddress]:
        """Stage 1: ask Alexa for the device's country and postal code."""
        if not consent_token or not device_id:
            logger.info("No consent token or device id on request; address permission not granted")
            return ResolutionFailure.permission_not_granted()

        base = (api_endpoint or DEFAULT_ALEXA_API_ENDPOINT).rstrip("/")
        url = f"{base}/v1/devices/{device_id}/settings/address/countryAndPostalCode"
        try:
            response = await self.http_client.get(
                url, headers={"Authorization": f"Bearer {consent_token}"}
            )
        except httpx.HTTPError as e:
            logger.warning("Device address request failed: %s", e)
            return ResolutionFailure.permission_not_granted()

        if response.status_code != 200:
            logger.warning("Device address lookup returned HTTP %d", response.status_code)
            return ResolutionFailure.permission_not_granted()

        body = _json_body(response)
        address = DeviceAddress(
            postal_code=str(body.get("postalCode", "")),
            country_code=str(body.get("countryCode", "")),
        )
        logger.debug("Device address resolved to %s", address.to_query())
        return StageOk(address)

    async def geocode(self, address: DeviceAddress) -> StageResult[GeoPoint]:
        """Stage 2: geocode the address and take the first result."""
        try:
            response = await self.http_client.get(
                self.geocode_url,
                params={"address": address.to_query(), "key": self.maps_api_key},
            )
        except httpx.HTTPError as e:
            logger.warning("Geocode request failed: %s", e)
            return ResolutionFailure.address_not_understood(type(e).__name__)

        body = _json_body(response)
        status = body.get("status")
        results = body.get("results") or []
        if response.status_code != 200 or status != "OK" or not results:
            logger.warning("Geocode failed: HTTP %d status=%s", response.status_code, status)
            return ResolutionFailure.address_not_understood(status)

        try:
            location = results[0]["geometry"]["location"]
            point = GeoPoint(lat=float(location["lat"]), lng=float(location["lng"]))
        except (KeyError, TypeError, ValueError):
            logger.warning("Geocode result missing geometry: %r", results[0])
            return ResolutionFailure.address_not_understood(status)

        logger.debug("Geocoded %s to %s", address.to_query(), point.to_param())
        return StageOk(point)

    async def lookup_offset(
        self, point: GeoPoint, now: datetime.datetime
    ) -> StageResult[float]:
        """Stage 3: timezone offset (minutes, DST included) at ``point`` for ``now``."""
        try:
            response = await self.http_client.get(
                self.timezone_url,
                params={
                    "location": point.to_param(),
                    "timestamp": str(round(now.timestamp())),
                    "key": self.maps_api_key,
                },
            )
        except httpx.HTTPError as e:
            logger.warning("Timezone request failed: %s", e)
            return ResolutionFailure.timezone_lookup_failed(type(e).__name__)

        body = _json_body(response)
        status = body.get("status")
        if response.status_code != 200 or status != "OK":
            logger.warning("Timezone lookup failed: HTTP %d status=%s", response.status_code, status)
            return ResolutionFailure.timezone_lookup_failed(status)

        try:
            offset = offset_from_timezone_payload(body)
        except (KeyError, TypeError):
            logger.warning("Timezone response missing offsets")
            return ResolutionFailure.timezone_lookup_failed(status)

        logger.debug("Timezone offset at %s is %s minutes", point.to_param(), offset)
        return StageOk(offset)

    async def resolve_utc_offset(
        self,
        device_id: Optional[str],
        consent_token: Optional[str],
        now: datetime.datetime,
        api_endpoint: Optional[str] = None,
    ) -> StageResult[float]:
        """Run all three stages, stopping at the first failure."""
        address = await self.fetch_device_address(device_id, consent_token, api_endpoint)
        if isinstance(address, ResolutionFailure):
            return address

        point = await self.geocode(address.value)
        if isinstance(point, ResolutionFailure):
            return point

        return await self.lookup_offset(point.value, now)
