# Business logic services and third-party API clients

from .auth_service import AuthService
from .chat_service import ChatService
from .city_search import DebouncedCitySearch, SearchState
from .favorite_service import FavoriteService
from .itinerary_generator import generate_itinerary
from .itinerary_service import ItineraryService
from .user_profile_service import UserProfileService

from .geodb_client import GeoDBClient
from .weather_client import WeatherClient
from .places_client import PlacesClient
from .geocoding_client import GeocodingClient

__all__ = [
    "AuthService",
    "ChatService",
    "DebouncedCitySearch",
    "SearchState",
    "FavoriteService",
    "generate_itinerary",
    "ItineraryService",
    "UserProfileService",
    "GeoDBClient",
    "WeatherClient",
    "PlacesClient",
    "GeocodingClient",
]
