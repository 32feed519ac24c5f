"""
OpenWeatherMap client - current conditions and a five-day daily forecast.
"""

import logging
import math
from typing import Dict, List, Optional

import httpx

from wanderplan.config import get_settings
from wanderplan.core.cache_client import CacheClient
from wanderplan.schemas.weather import (
    CurrentWeather,
    ForecastDay,
    OWMCurrentResponse,
    OWMForecastEntry,
    OWMForecastResponse,
)
from wanderplan.services.http_base import BaseAPIClient

logger = logging.getLogger(__name__)

MIDDAY_HOURS = range(11, 15)
PREFERRED_HOUR = 12


def round_half_up(value: float) -> int:
    """Nearest whole degree with halves rounded up (20.5 -> 21, -0.5 -> 0)."""
    return math.floor(value + 0.5)


def pick_daily_forecasts(entries: List[OWMForecastEntry], days: int = 5) -> List[ForecastDay]:
    """
    Reduce 3-hourly forecast slots to one slot per date.

    The first slot of a date is kept; only a later 12:00 slot replaces it.
    Dates keep the order in which they first appear.
    """
    chosen: Dict[str, OWMForecastEntry] = {}
    for entry in entries:
        current = chosen.get(entry.date)
        if entry.hour in MIDDAY_HOURS:
            if current is None or entry.hour == PREFERRED_HOUR:
                chosen[entry.date] = entry
        elif current is None:
            chosen[entry.date] = entry

    return [
        ForecastDay(
            date=entry.date,
            temperature=round_half_up(entry.main.temp),
            description=entry.weather[0].description,
            icon=entry.weather[0].icon,
        )
        for entry in list(chosen.values())[:days]
    ]


class WeatherClient(BaseAPIClient):
    service_name = "openweather"

    def __init__(
        self,
        cache: Optional[CacheClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = get_settings().weather
        super().__init__(self.settings.base_url, self.settings.timeout_seconds, transport)
        self.cache = cache

    def _params(self, lat: float, lon: float) -> Dict[str, object]:
        return {
            "lat": lat,
            "lon": lon,
            "appid": self._require_credential(self.settings.api_key, "OPENWEATHER_API_KEY"),
            "units": self.settings.units,
        }

    async def get_current_weather(self, lat: float, lon: float) -> CurrentWeather:
        cache_key = f"weather:current:{lat:.3f}:{lon:.3f}"
        if self.cache:
            cached = await self.cache.get_json(cache_key)
            if cached is not None:
                return CurrentWeather.model_validate(cached)

        payload = await self._get_json("/weather", params=self._params(lat, lon))
        data = self._parse(OWMCurrentResponse, payload)
        weather = CurrentWeather(
            temperature=round_half_up(data.main.temp),
            feels_like=round_half_up(data.main.feels_like),
            humidity=data.main.humidity,
            description=data.weather[0].description,
            icon=data.weather[0].icon,
            wind_speed=data.wind.speed,
            sunrise=data.sys.sunrise,
            sunset=data.sys.sunset,
        )

        if self.cache:
            await self.cache.set_json(cache_key, weather.model_dump(), self.settings.cache_ttl_seconds)
        return weather

    async def get_forecast(self, lat: float, lon: float) -> List[ForecastDay]:
        cache_key = f"weather:forecast:{lat:.3f}:{lon:.3f}"
        if self.cache:
            cached = await self.cache.get_json(cache_key)
            if cached is not None:
                return [ForecastDay.model_validate(d) for d in cached]

        payload = await self._get_json("/forecast", params=self._params(lat, lon))
        data = self._parse(OWMForecastResponse, payload)
        forecast = pick_daily_forecasts(data.list, self.settings.forecast_days)

        if self.cache:
            await self.cache.set_json(
                cache_key, [d.model_dump() for d in forecast], self.settings.cache_ttl_seconds
            )
        return forecast
