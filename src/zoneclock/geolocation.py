"""IP geolocation lookup used to suggest a default time zone.

Queries ip-api.com (free tier, no API key, HTTP only). A suggestion is
only returned when the service reports success and the zone it names is
in the catalog; every other outcome is logged and yields None so the
caller keeps its current selection.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_GEOLOCATION_URL = "http://ip-api.com/json"
DEFAULT_TIMEOUT = 5.0


class GeolocationService:
    """Suggests a zone identifier from the caller's public IP address."""

    def __init__(
        self,
        known_zones: Collection[str],
        *,
        url: str = DEFAULT_GEOLOCATION_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._known_zones = known_zones
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def lookup(self) -> dict[str, Any] | None:
        """Fetch the raw location record, or None if the request failed."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.get(self._url)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.info("Geolocation lookup failed: %s", e)
            return None
        if not isinstance(data, dict):
            logger.debug("Unexpected geolocation payload: %r", data)
            return None
        return data

    def zone_from_location(self, location: dict[str, Any] | None) -> str | None:
        """Accept a location's timezone only if the catalog knows it."""
        if not location or location.get("status") != "success":
            return None
        zone = location.get("timezone")
        if not isinstance(zone, str) or zone not in self._known_zones:
            logger.debug("Ignoring geolocated zone not in catalog: %r", zone)
            return None
        return zone

    async def suggest_zone(self) -> str | None:
        zone = self.zone_from_location(await self.lookup())
        if zone:
            logger.info("Geolocation suggests time zone %s", zone)
        return zone
