"""HTTP routers for the Wanderplan API."""

from .auth_endpoints import router as auth_router
from .chat_endpoints import router as chat_router
from .city_endpoints import router as city_router
from .destination_endpoints import router as destination_router
from .favorite_endpoints import router as favorite_router
from .itinerary_endpoints import router as itinerary_router
from .places_endpoints import router as places_router
from .user_profile_endpoints import router as user_profile_router
from .weather_endpoints import router as weather_router

all_routers = [
    auth_router,
    user_profile_router,
    favorite_router,
    itinerary_router,
    chat_router,
    city_router,
    weather_router,
    places_router,
    destination_router,
]

__all__ = ["all_routers"]
