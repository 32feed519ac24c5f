"""
Foursquare places client - free-text place search, optionally near a point.
"""

import logging
from typing import Dict, List, Optional

import httpx

from wanderplan.config import get_settings
from wanderplan.schemas.places import FSQSearchResponse, Place
from wanderplan.services.http_base import BaseAPIClient

logger = logging.getLogger(__name__)


class PlacesClient(BaseAPIClient):
    service_name = "foursquare"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = get_settings().places
        super().__init__(self.settings.base_url, self.settings.timeout_seconds, transport)

    def _get_headers(self) -> Dict[str, str]:
        headers = super()._get_headers()
        headers["Authorization"] = self._require_credential(self.settings.api_key, "FOURSQUARE_API_KEY")
        return headers

    async def search_places(
        self,
        query: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        radius: Optional[int] = None,
    ) -> List[Place]:
        """
        Search places matching ``query``.

        When coordinates are given the search is restricted to ``radius``
        metres around them (default from settings).
        """
        params: Dict[str, object] = {"query": query, "limit": self.settings.result_limit}
        if latitude is not None and longitude is not None:
            params["ll"] = f"{latitude},{longitude}"
            params["radius"] = radius or self.settings.default_radius_m

        logger.info(f"Searching places for: {query}")
        payload = await self._get_json("/places/search", params=params)
        return [p.to_place() for p in self._parse(FSQSearchResponse, payload).results]
