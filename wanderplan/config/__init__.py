"""
Configuration package for the Wanderplan backend.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    DatabaseSettings,
    RedisSettings,
    SecuritySettings,
    AuthSettings,
    GeoDBSettings,
    WeatherSettings,
    PlacesSettings,
    MapboxSettings,
    SearchSettings,
    settings,
    get_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "DatabaseSettings",
    "RedisSettings",
    "SecuritySettings",
    "AuthSettings",
    "GeoDBSettings",
    "WeatherSettings",
    "PlacesSettings",
    "MapboxSettings",
    "SearchSettings",
    "settings",
    "get_settings",
]
