"""Weather endpoints"""

from fastapi import APIRouter, Depends, Query

from wanderplan.core.dependencies import get_weather_client
from wanderplan.schemas.base import Envelope
from wanderplan.schemas.weather import CurrentWeather, ForecastDay
from wanderplan.services.weather_client import WeatherClient

router = APIRouter(prefix="/weather", tags=["weather"])


@router.get("", response_model=Envelope[CurrentWeather])
async def current_weather(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    client: WeatherClient = Depends(get_weather_client),
):
    weather = await client.get_current_weather(lat, lon)
    return Envelope(status="ok", data=weather)


@router.get("/forecast", response_model=Envelope[list[ForecastDay]])
async def forecast(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    client: WeatherClient = Depends(get_weather_client),
):
    """One entry per day, midday conditions where available"""
    days = await client.get_forecast(lat, lon)
    return Envelope(status="ok", data=days)
