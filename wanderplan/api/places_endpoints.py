"""Places search, geocoding and map configuration endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from wanderplan.config import get_settings
from wanderplan.core.dependencies import get_geocoding_client, get_places_client
from wanderplan.core.exceptions import RemoteServiceError
from wanderplan.schemas.base import Envelope
from wanderplan.schemas.places import GeocodeResult, MapConfig, Place, PlaceSearchRequest
from wanderplan.services.geocoding_client import GeocodingClient
from wanderplan.services.places_client import PlacesClient

router = APIRouter(tags=["places"])


@router.post("/places/search", response_model=Envelope[list[Place]])
async def search_places(
    payload: PlaceSearchRequest,
    client: PlacesClient = Depends(get_places_client),
):
    """
    Search places of interest

    - **query**: What to look for ("coffee", "museum")
    - **latitude** / **longitude**: Optional search centre
    - **radius**: Metres around the centre (default 3000)
    """
    places = await client.search_places(
        payload.query, payload.latitude, payload.longitude, payload.radius
    )
    return Envelope(status="ok", data=places)


@router.get("/geocode", response_model=Envelope[Optional[GeocodeResult]])
async def geocode(
    q: str = Query(..., min_length=1, max_length=255),
    client: GeocodingClient = Depends(get_geocoding_client),
):
    """Best match for a place name; data is null when nothing matches"""
    result = await client.geocode(q)
    return Envelope(status="ok", data=result)


@router.get("/maps/token", response_model=Envelope[MapConfig])
async def map_config():
    """Public token and style for the browser map SDK"""
    mapbox = get_settings().mapbox
    if not mapbox.access_token:
        raise RemoteServiceError("mapbox", "Map access token is not configured")
    return Envelope(
        status="ok",
        data=MapConfig(access_token=mapbox.access_token, style_url=mapbox.style_url),
    )
