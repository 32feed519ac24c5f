"""
Dependency injection setup for FastAPI.

The ServiceContainer owns the application-scoped objects: the identity
context, the optional Redis cache and the third-party API clients. It is
initialized in the application lifespan and torn down at shutdown.
"""

from fastapi import Depends, Request, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging
import asyncio

import httpx

from wanderplan.config import get_settings
from wanderplan.core.cache_client import CacheClient
from wanderplan.core.db import db_session, get_db
from wanderplan.core.exceptions import UnauthenticatedError
from wanderplan.core.identity import (
    IdentityContext,
    IdentityEvent,
    IdentityEventKind,
    SessionIdentity,
)
from wanderplan.services.auth_service import AuthService
from wanderplan.services.chat_service import ChatService
from wanderplan.services.favorite_service import FavoriteService
from wanderplan.services.geocoding_client import GeocodingClient
from wanderplan.services.geodb_client import GeoDBClient
from wanderplan.services.itinerary_service import ItineraryService
from wanderplan.services.places_client import PlacesClient
from wanderplan.services.user_profile_service import UserProfileService
from wanderplan.services.weather_client import WeatherClient

logger = logging.getLogger(__name__)


async def upsert_profile_on_sign_in(event: IdentityEvent) -> None:
    """Identity listener keeping the ``users`` profile in step with sign-ins."""
    if event.kind != IdentityEventKind.SIGNED_IN:
        return
    async with db_session() as session:
        await UserProfileService(session).ensure_profile(event.identity)


class ServiceContainer:
    """
    Container for application-scoped services with lifecycle management.

    ``transport`` is handed to every outbound HTTP client so tests can
    substitute ``httpx.MockTransport``.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport
        self._identity_context: Optional[IdentityContext] = None
        self._cache: Optional[CacheClient] = None
        self._geodb_client: Optional[GeoDBClient] = None
        self._weather_client: Optional[WeatherClient] = None
        self._places_client: Optional[PlacesClient] = None
        self._geocoding_client: Optional[GeocodingClient] = None
        self._unsubscribe_profile = None
        self._initialized = False
        self._initialization_lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def cache(self) -> Optional[CacheClient]:
        return self._cache

    async def initialize_services(self) -> None:
        async with self._initialization_lock:
            if self._initialized:
                return

            logger.info("Initializing service container")
            settings = get_settings()

            self._identity_context = IdentityContext(landing_path=settings.auth.landing_path)
            self._unsubscribe_profile = self._identity_context.subscribe(upsert_profile_on_sign_in)

            if settings.redis.enabled:
                self._cache = CacheClient()
                await self._cache.connect()

            self._geodb_client = GeoDBClient(cache=self._cache, transport=self.transport)
            self._weather_client = WeatherClient(cache=self._cache, transport=self.transport)
            self._places_client = PlacesClient(transport=self.transport)
            self._geocoding_client = GeocodingClient(transport=self.transport)

            self._initialized = True
            logger.info("Service container initialization completed")

    async def cleanup_services(self) -> None:
        """Cleanup services in reverse order."""
        logger.info("Cleaning up service container")
        try:
            if self._unsubscribe_profile is not None:
                self._unsubscribe_profile()
                self._unsubscribe_profile = None
            if self._identity_context is not None:
                await self._identity_context.close()
            if self._cache is not None:
                await self._cache.disconnect()
        finally:
            self._identity_context = None
            self._cache = None
            self._geodb_client = None
            self._weather_client = None
            self._places_client = None
            self._geocoding_client = None
            self._initialized = False
            logger.info("Service container cleanup completed")

    def _require(self, service, name: str):
        if not self._initialized or service is None:
            raise RuntimeError(f"Service container not initialized ({name})")
        return service

    def get_identity_context(self) -> IdentityContext:
        return self._require(self._identity_context, "identity context")

    def get_geodb_client(self) -> GeoDBClient:
        return self._require(self._geodb_client, "geodb client")

    def get_weather_client(self) -> WeatherClient:
        return self._require(self._weather_client, "weather client")

    def get_places_client(self) -> PlacesClient:
        return self._require(self._places_client, "places client")

    def get_geocoding_client(self) -> GeocodingClient:
        return self._require(self._geocoding_client, "geocoding client")


def get_service_container(request: Request) -> ServiceContainer:
    """
    Get the service container from application state.

    Raises:
        HTTPException: If the container is missing or not started
    """
    container = getattr(request.app.state, 'service_container', None)
    if container is None or not container.initialized:
        logger.error("Service container not initialized")
        raise HTTPException(status_code=500, detail="Service container not available")
    return container


def get_identity_context(
    container: ServiceContainer = Depends(get_service_container)
) -> IdentityContext:
    return container.get_identity_context()


def get_current_identity(
    request: Request,
    context: IdentityContext = Depends(get_identity_context),
) -> Optional[SessionIdentity]:
    """The caller's identity, or None when signed out."""
    return context.get_current_identity(request)


def require_identity(
    identity: Optional[SessionIdentity] = Depends(get_current_identity),
) -> SessionIdentity:
    """Gate for identity-requiring routes."""
    if identity is None:
        raise UnauthenticatedError()
    return identity


def get_geodb_client(container: ServiceContainer = Depends(get_service_container)) -> GeoDBClient:
    return container.get_geodb_client()


def get_weather_client(container: ServiceContainer = Depends(get_service_container)) -> WeatherClient:
    return container.get_weather_client()


def get_places_client(container: ServiceContainer = Depends(get_service_container)) -> PlacesClient:
    return container.get_places_client()


def get_geocoding_client(container: ServiceContainer = Depends(get_service_container)) -> GeocodingClient:
    return container.get_geocoding_client()


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    context: IdentityContext = Depends(get_identity_context),
    container: ServiceContainer = Depends(get_service_container),
) -> AuthService:
    return AuthService(db, context, transport=container.transport)


def get_favorite_service(
    db: AsyncSession = Depends(get_db),
    identity: Optional[SessionIdentity] = Depends(get_current_identity),
) -> FavoriteService:
    return FavoriteService(db, identity)


def get_itinerary_service(
    db: AsyncSession = Depends(get_db),
    identity: Optional[SessionIdentity] = Depends(get_current_identity),
) -> ItineraryService:
    return ItineraryService(db, identity)


def get_chat_service(
    db: AsyncSession = Depends(get_db),
    identity: Optional[SessionIdentity] = Depends(get_current_identity),
) -> ChatService:
    return ChatService(db, identity)


def get_user_profile_service(
    db: AsyncSession = Depends(get_db),
    identity: Optional[SessionIdentity] = Depends(get_current_identity),
) -> UserProfileService:
    return UserProfileService(db, identity)
