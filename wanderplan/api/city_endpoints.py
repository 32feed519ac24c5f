"""City lookup endpoints backing the search-as-you-type box"""

from fastapi import APIRouter, Depends, Query

from wanderplan.config import get_settings
from wanderplan.core.dependencies import get_geodb_client
from wanderplan.schemas.base import Envelope
from wanderplan.schemas.city import City
from wanderplan.services.geodb_client import GeoDBClient

router = APIRouter(prefix="/cities", tags=["cities"])


@router.get("/search", response_model=Envelope[list[City]])
async def search_cities(
    q: str = Query("", max_length=100),
    client: GeoDBClient = Depends(get_geodb_client),
):
    """
    Cities whose name starts with ``q``, most populous first.

    Queries shorter than the minimum length return an empty list without
    calling the city API.
    """
    query = q.strip()
    if len(query) < get_settings().search.min_query_length:
        return Envelope(status="ok", data=[])
    cities = await client.search_cities(query)
    return Envelope(status="ok", data=cities)


@router.get("/{city_id}", response_model=Envelope[City])
async def get_city(city_id: str, client: GeoDBClient = Depends(get_geodb_client)):
    city = await client.get_city(city_id)
    return Envelope(status="ok", data=city)
