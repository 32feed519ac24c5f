"""
Shared fixtures: in-memory database, fake third-party APIs and an ASGI client.
"""
import os

# Must be set before wanderplan reads its settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["REDIS_ENABLED"] = "false"
os.environ["AUTH_JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["AUTH_BCRYPT_ROUNDS"] = "4"
os.environ["SECURITY_RATE_LIMIT_REQUESTS_PER_MINUTE"] = "1000"
os.environ["GEODB_API_KEY"] = "test-geodb-key"
os.environ["OPENWEATHER_API_KEY"] = "test-weather-key"
os.environ["FOURSQUARE_API_KEY"] = "test-places-key"
os.environ["MAPBOX_ACCESS_TOKEN"] = "pk.test-mapbox-token"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime
from typing import Any, Callable, Dict, List, Tuple, Union

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

import wanderplan.models  # noqa: F401  registers tables
from wanderplan.core.db import SessionLocal, create_all, dispose_engine, drop_all
from wanderplan.core.dependencies import ServiceContainer
from wanderplan.core.identity import SessionIdentity
from wanderplan.core.jwt import create_access_token
from wanderplan.main import create_app

Route = Union[Tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


class FakeUpstream:
    """Routes outbound requests by (host, path) to canned JSON responses."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.requests: List[httpx.Request] = []

    def add(self, host: str, path: str, json: Any = None, status_code: int = 200) -> None:
        self.routes[(host, path)] = (status_code, json)

    def add_handler(self, host: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(host, path)] = handler

    def requests_to(self, host: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.url.host, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "no route"})
        if callable(route):
            return route(request)
        status_code, body = route
        return httpx.Response(status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


def make_identity(uid: str = "user0001", name: str = "Test Traveler", email: str = "traveler@mail.com") -> SessionIdentity:
    return SessionIdentity(
        uid=uid,
        display_name=name,
        email=email,
        created_at=datetime(2024, 1, 1, 12, 0, 0),
    )


def auth_headers_for(identity: SessionIdentity) -> Dict[str, str]:
    token = create_access_token(identity.uid, claims=identity.to_claims())
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def db_session():
    """Fresh schema per test on the shared in-memory engine."""
    await create_all()
    async with SessionLocal() as session:
        yield session
    await drop_all()
    await dispose_engine()


@pytest.fixture
def identity() -> SessionIdentity:
    return make_identity()


@pytest.fixture
def other_identity() -> SessionIdentity:
    return make_identity(uid="user0002", name="Other Traveler", email="other@mail.com")


@pytest.fixture
def auth_headers(identity) -> Dict[str, str]:
    return auth_headers_for(identity)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest_asyncio.fixture
async def app(db_session, upstream):
    container = ServiceContainer(transport=upstream.transport)
    application = create_app(container)
    await container.initialize_services()
    yield application
    await container.cleanup_services()


@pytest_asyncio.fixture
async def async_client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
