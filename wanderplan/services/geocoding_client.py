"""
Mapbox geocoding client - resolves a place name to coordinates.
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from wanderplan.config import get_settings
from wanderplan.schemas.places import GeocodeResult, MapboxGeocodeResponse
from wanderplan.services.http_base import BaseAPIClient

logger = logging.getLogger(__name__)


class GeocodingClient(BaseAPIClient):
    service_name = "mapbox"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = get_settings().mapbox
        super().__init__(self.settings.geocoding_url, self.settings.timeout_seconds, transport)

    async def geocode(self, place_name: str) -> Optional[GeocodeResult]:
        """Best match for ``place_name``, or None when nothing matches."""
        token = self._require_credential(self.settings.access_token, "MAPBOX_ACCESS_TOKEN")
        payload = await self._get_json(
            f"/{quote(place_name, safe='')}.json",
            params={"access_token": token, "limit": 1},
        )
        features = self._parse(MapboxGeocodeResponse, payload).features
        if not features:
            logger.info(f"No geocoding match for: {place_name}")
            return None

        best = features[0]
        lng, lat = best.center
        return GeocodeResult(place_name=best.place_name, latitude=lat, longitude=lng)
