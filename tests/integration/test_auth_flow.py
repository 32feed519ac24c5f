"""
Integration tests for the account endpoints and the profile kept in step with sign-ins
"""
import pytest
from httpx import AsyncClient

from tests.conftest import FakeUpstream

SIGNUP = {
    "name": "Ada Lovelace",
    "email": "ada@mail.com",
    "password": "secret1",
    "confirm_password": "secret1",
}


async def _sign_up(client: AsyncClient) -> dict:
    response = await client.post("/auth/signup", json=SIGNUP)
    assert response.status_code == 201
    return response.json()["data"]


def _bearer(result: dict) -> dict:
    return {"Authorization": f"Bearer {result['token']['access_token']}"}


@pytest.mark.asyncio
async def test_signup_creates_identity_and_profile(async_client: AsyncClient):
    result = await _sign_up(async_client)

    me = await async_client.get("/auth/me", headers=_bearer(result))
    assert me.status_code == 200
    assert me.json()["data"]["email"] == "ada@mail.com"
    assert me.json()["data"]["uid"] == result["identity"]["uid"]

    profile = await async_client.get("/users/me", headers=_bearer(result))
    assert profile.status_code == 200
    assert profile.json()["data"]["name"] == "Ada Lovelace"


@pytest.mark.asyncio
async def test_signup_password_mismatch(async_client: AsyncClient):
    response = await async_client.post(
        "/auth/signup", json={**SIGNUP, "confirm_password": "different"}
    )

    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_signup_duplicate_email(async_client: AsyncClient):
    await _sign_up(async_client)

    response = await async_client.post("/auth/signup", json=SIGNUP)

    assert response.status_code == 409
    body = response.json()
    assert body["error_code"] == "AUTH_PROVIDER_ERROR"
    assert body["details"]["kind"] == "email_in_use"


@pytest.mark.asyncio
async def test_login_and_wrong_password(async_client: AsyncClient):
    await _sign_up(async_client)

    ok = await async_client.post("/auth/login", json={"email": "ada@mail.com", "password": "secret1"})
    bad = await async_client.post("/auth/login", json={"email": "ada@mail.com", "password": "nope123"})

    assert ok.status_code == 200
    assert bad.status_code == 401
    assert bad.json()["message"] == "Invalid email or password."


@pytest.mark.asyncio
async def test_me_requires_identity(async_client: AsyncClient):
    response = await async_client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["error_code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_logout_and_refresh(async_client: AsyncClient):
    result = await _sign_up(async_client)

    logout = await async_client.post("/auth/logout", headers=_bearer(result))
    assert logout.status_code == 200

    refreshed = await async_client.post(
        "/auth/refresh", json={"refresh_token": result["token"]["refresh_token"]}
    )
    assert refreshed.status_code == 200
    assert refreshed.json()["data"]["token_type"] == "bearer"


@pytest.mark.asyncio
async def test_google_popup_closed(async_client: AsyncClient):
    response = await async_client.post(
        "/auth/google", json={"error_code": "auth/popup-closed-by-user"}
    )

    assert response.status_code == 400
    assert response.json()["details"]["kind"] == "popup_closed"


@pytest.mark.asyncio
async def test_google_sign_in_creates_profile(async_client: AsyncClient, upstream: FakeUpstream):
    upstream.add("oauth2.googleapis.com", "/tokeninfo", json={
        "sub": "google-1", "email": "grace@mail.com", "email_verified": "true", "name": "Grace Hopper",
    })

    response = await async_client.post("/auth/google", json={"id_token": "token-from-popup"})

    assert response.status_code == 200
    profile = await async_client.get("/users/me", headers=_bearer(response.json()["data"]))
    assert profile.json()["data"]["email"] == "grace@mail.com"


@pytest.mark.asyncio
async def test_password_reset_request_is_accepted_for_unknown_email(async_client: AsyncClient):
    response = await async_client.post("/auth/password-reset", json={"email": "ghost@mail.com"})

    assert response.status_code == 202


@pytest.mark.asyncio
async def test_profile_update(async_client: AsyncClient):
    result = await _sign_up(async_client)

    response = await async_client.patch(
        "/users/me", json={"name": "Countess"}, headers=_bearer(result)
    )

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Countess"
    assert response.json()["data"]["email"] == "ada@mail.com"


@pytest.mark.asyncio
async def test_google_unverified_email_is_rejected(async_client: AsyncClient, upstream: FakeUpstream):
    await _sign_up(async_client)
    upstream.add("oauth2.googleapis.com", "/tokeninfo", json={
        "sub": "attacker-g", "email": "ada@mail.com", "email_verified": "false",
    })

    response = await async_client.post("/auth/google", json={"id_token": "forged"})

    assert response.status_code == 401
    assert response.json()["details"]["kind"] == "invalid_token"
    assert "access_token" not in response.text


@pytest.mark.asyncio
async def test_signup_overlong_password_is_validation_error(async_client: AsyncClient):
    password = "z" * 80
    response = await async_client.post(
        "/auth/signup", json={**SIGNUP, "password": password, "confirm_password": password}
    )

    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"
