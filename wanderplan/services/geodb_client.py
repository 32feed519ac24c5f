"""
GeoDB Cities client - city prefix search and city detail lookup via RapidAPI.
"""

import logging
from typing import Dict, List, Optional
from urllib.parse import quote

import httpx

from wanderplan.config import get_settings
from wanderplan.core.cache_client import CacheClient
from wanderplan.schemas.city import City, GeoDBCityListResponse, GeoDBCityResponse
from wanderplan.services.http_base import BaseAPIClient

logger = logging.getLogger(__name__)


class GeoDBClient(BaseAPIClient):
    """Looks up cities by name prefix (most populous first) or by id."""

    service_name = "geodb"

    def __init__(
        self,
        cache: Optional[CacheClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = get_settings().geodb
        super().__init__(self.settings.base_url, self.settings.timeout_seconds, transport)
        self.cache = cache
        self.cache_ttl = get_settings().search.cache_ttl_seconds

    def _get_headers(self) -> Dict[str, str]:
        headers = super()._get_headers()
        headers["X-RapidAPI-Key"] = self._require_credential(self.settings.api_key, "GEODB_API_KEY")
        headers["X-RapidAPI-Host"] = self.settings.api_host
        return headers

    async def search_cities(self, query: str) -> List[City]:
        """
        Search cities whose name starts with ``query``.

        Args:
            query: Free-text name prefix

        Returns:
            Up to ``result_limit`` cities ordered by descending population
        """
        cache_key = f"geodb:search:{query.strip().lower()}"
        if self.cache:
            cached = await self.cache.get_json(cache_key)
            if cached is not None:
                return [City.model_validate(c) for c in cached]

        logger.info(f"Searching cities for prefix: {query}")
        payload = await self._get_json(
            "/cities",
            params={
                "namePrefix": query,
                "limit": self.settings.result_limit,
                "sort": "-population",
            },
        )
        cities = [c.to_city() for c in self._parse(GeoDBCityListResponse, payload).data]

        if self.cache:
            await self.cache.set_json(cache_key, [c.model_dump() for c in cities], self.cache_ttl)
        return cities

    async def get_city(self, city_id: str) -> City:
        """Fetch a single city by its GeoDB id."""
        cache_key = f"geodb:city:{city_id}"
        if self.cache:
            cached = await self.cache.get_json(cache_key)
            if cached is not None:
                return City.model_validate(cached)

        payload = await self._get_json(f"/cities/{quote(city_id, safe='')}")
        city = self._parse(GeoDBCityResponse, payload).data.to_city()

        if self.cache:
            await self.cache.set_json(cache_key, city.model_dump(), self.cache_ttl)
        return city
