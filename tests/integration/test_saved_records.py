"""
Integration tests for favorites, itineraries and chat history endpoints
"""
import pytest
from httpx import AsyncClient

from tests.conftest import auth_headers_for

PARIS = {"destination_id": "paris", "name": "Paris", "country": "France"}


@pytest.mark.asyncio
async def test_favorite_lifecycle(async_client: AsyncClient, auth_headers):
    created = await async_client.post("/favorites", json=PARIS, headers=auth_headers)
    assert created.status_code == 201
    favorite_id = created.json()["data"]["id"]

    status = await async_client.get("/favorites/status/paris", headers=auth_headers)
    assert status.json()["data"] == {"destination_id": "paris", "is_favorite": True}

    listed = await async_client.get("/favorites", headers=auth_headers)
    assert [f["id"] for f in listed.json()["data"]] == [favorite_id]

    removed = await async_client.delete(f"/favorites/{favorite_id}", headers=auth_headers)
    assert removed.status_code == 200

    status = await async_client.get("/favorites/status/paris", headers=auth_headers)
    assert status.json()["data"]["is_favorite"] is False


@pytest.mark.asyncio
async def test_favorites_when_signed_out(async_client: AsyncClient):
    status = await async_client.get("/favorites/status/paris")
    assert status.status_code == 200
    assert status.json()["data"]["is_favorite"] is False

    listed = await async_client.get("/favorites")
    assert listed.status_code == 401

    created = await async_client.post("/favorites", json=PARIS)
    assert created.status_code == 401


@pytest.mark.asyncio
async def test_favorites_are_private(async_client: AsyncClient, auth_headers, other_identity):
    created = await async_client.post("/favorites", json=PARIS, headers=auth_headers)
    favorite_id = created.json()["data"]["id"]
    other_headers = auth_headers_for(other_identity)

    listed = await async_client.get("/favorites", headers=other_headers)
    removed = await async_client.delete(f"/favorites/{favorite_id}", headers=other_headers)

    assert listed.json()["data"] == []
    assert removed.status_code == 404
    assert removed.json()["error_code"] == "NOT_FOUND_OR_UNAUTHORIZED"


@pytest.mark.asyncio
async def test_generate_itinerary_without_saving(async_client: AsyncClient):
    response = await async_client.post("/itineraries/generate", json={
        "destination": "Rome", "duration": "1-3 days", "budget": "Moderate", "interests": ["Food"],
    })

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["saved_id"] is None
    assert [d["day"] for d in data["itinerary"]["days"]] == [1, 2, 3]


@pytest.mark.asyncio
async def test_generate_with_save_requires_identity(async_client: AsyncClient):
    response = await async_client.post("/itineraries/generate", json={
        "destination": "Rome", "duration": "1-3 days", "save": True,
    })

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_itinerary_crud(async_client: AsyncClient, auth_headers, other_identity):
    generated = await async_client.post("/itineraries/generate", headers=auth_headers, json={
        "destination": "Kyoto", "duration": "4-7 days", "budget": "Luxury", "save": True,
    })
    itinerary_id = generated.json()["data"]["saved_id"]
    assert itinerary_id

    fetched = await async_client.get(f"/itineraries/{itinerary_id}", headers=auth_headers)
    assert fetched.json()["data"]["destination"] == "Kyoto"
    assert len(fetched.json()["data"]["days"]) == 5

    patched = await async_client.patch(
        f"/itineraries/{itinerary_id}", json={"budget": "Budget"}, headers=auth_headers
    )
    assert patched.json()["data"]["budget"] == "Budget"
    assert patched.json()["data"]["destination"] == "Kyoto"

    foreign = await async_client.get(f"/itineraries/{itinerary_id}", headers=auth_headers_for(other_identity))
    assert foreign.status_code == 404

    deleted = await async_client.delete(f"/itineraries/{itinerary_id}", headers=auth_headers)
    assert deleted.status_code == 200
    listed = await async_client.get("/itineraries", headers=auth_headers)
    assert listed.json()["data"] == []


@pytest.mark.asyncio
async def test_save_itinerary_directly(async_client: AsyncClient, auth_headers):
    response = await async_client.post("/itineraries", headers=auth_headers, json={
        "destination": "Lisbon", "duration": "1-3 days", "budget": "Moderate",
        "days": [
            {"day": 1, "title": "Arrival", "activities": []},
            {"day": 2, "title": "Old town"},
            {"day": 3, "title": "Departure"},
        ],
    })

    assert response.status_code == 201
    listed = await async_client.get("/itineraries", headers=auth_headers)
    assert listed.json()["data"][0]["days"][0]["title"] == "Arrival"


@pytest.mark.asyncio
async def test_chat_history_replay(async_client: AsyncClient, auth_headers):
    reply = await async_client.post("/chat", json={"content": "Plan Rome for me"}, headers=auth_headers)
    assert reply.status_code == 200
    assert reply.json()["data"]["saved"] is True

    history = await async_client.get("/chat/messages", headers=auth_headers)
    assert [m["role"] for m in history.json()["data"]] == ["user", "assistant"]
    assert history.json()["data"][0]["content"] == "Plan Rome for me"


@pytest.mark.asyncio
async def test_chat_anonymous_and_welcome(async_client: AsyncClient):
    reply = await async_client.post("/chat", json={"content": "Hello"})
    assert reply.status_code == 200
    assert reply.json()["data"]["saved"] is False

    welcome = await async_client.get("/chat/welcome", params={"destination": "Bali"})
    assert "Bali" in welcome.json()["data"]["message"]

    history = await async_client.get("/chat/messages")
    assert history.status_code == 401


@pytest.mark.asyncio
async def test_save_itinerary_with_broken_day_numbers(async_client: AsyncClient, auth_headers):
    response = await async_client.post("/itineraries", headers=auth_headers, json={
        "destination": "Lisbon", "duration": "1-3 days", "budget": "Moderate",
        "days": [{"day": 4, "title": "Late start"}, {"day": 9, "title": "Gap"}],
    })

    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"
    listed = await async_client.get("/itineraries", headers=auth_headers)
    assert listed.json()["data"] == []


@pytest.mark.asyncio
async def test_patch_duration_without_days_is_rejected(async_client: AsyncClient, auth_headers):
    generated = await async_client.post("/itineraries/generate", headers=auth_headers, json={
        "destination": "Rome", "duration": "1-3 days", "save": True,
    })
    itinerary_id = generated.json()["data"]["saved_id"]

    response = await async_client.patch(
        f"/itineraries/{itinerary_id}", json={"duration": "2+ weeks"}, headers=auth_headers
    )

    assert response.status_code == 422
    fetched = await async_client.get(f"/itineraries/{itinerary_id}", headers=auth_headers)
    assert fetched.json()["data"]["duration"] == "1-3 days"


@pytest.mark.asyncio
async def test_profile_reports_saved_counts(async_client: AsyncClient, auth_headers, other_identity):
    await async_client.patch("/users/me", json={"name": "Counter"}, headers=auth_headers)
    await async_client.post("/favorites", json=PARIS, headers=auth_headers)
    await async_client.post("/favorites", json=PARIS, headers=auth_headers_for(other_identity))
    for destination in ("Lisbon", "Porto"):
        saved = await async_client.post("/itineraries", headers=auth_headers, json={
            "destination": destination, "duration": "1-3 days", "budget": "Moderate",
            "days": [{"day": n, "title": f"Day {n}"} for n in (1, 2, 3)],
        })
        assert saved.status_code == 201

    profile = await async_client.get("/users/me", headers=auth_headers)

    assert profile.status_code == 200
    assert profile.json()["data"]["itinerary_count"] == 2
    assert profile.json()["data"]["favorite_count"] == 1
