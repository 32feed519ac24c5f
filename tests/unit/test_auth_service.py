"""
Unit tests for the account provider
"""
import httpx
import pytest

from tests.conftest import FakeUpstream
from wanderplan.config import get_settings
from wanderplan.core.exceptions import AuthErrorKind, AuthProviderError, ValidationError
from wanderplan.core.identity import IdentityContext, IdentityEventKind, identity_from_token
from wanderplan.services.auth_service import AuthService

GOOGLE_HOST = "oauth2.googleapis.com"


@pytest.fixture
def context():
    return IdentityContext()


@pytest.mark.asyncio
async def test_sign_up_issues_identity_token_and_event(db_session, context):
    events = []
    context.subscribe(events.append)
    service = AuthService(db_session, context)

    result = await service.sign_up("Ada", "Ada@Mail.com", "secret1", "secret1")

    assert result.identity.email == "ada@mail.com"
    assert result.identity.display_name == "Ada"
    identity = identity_from_token(result.token.access_token)
    assert identity.uid == result.identity.uid
    assert [e.kind for e in events] == [IdentityEventKind.SIGNED_IN]


@pytest.mark.asyncio
async def test_sign_up_rejects_mismatched_confirmation(db_session):
    with pytest.raises(ValidationError) as exc_info:
        await AuthService(db_session).sign_up("Ada", "ada@mail.com", "secret1", "secret2")
    assert exc_info.value.field == "confirm_password"


@pytest.mark.asyncio
async def test_sign_up_rejects_short_password(db_session):
    with pytest.raises(ValidationError) as exc_info:
        await AuthService(db_session).sign_up("Ada", "ada@mail.com", "12345")
    assert exc_info.value.field == "password"


@pytest.mark.asyncio
async def test_sign_up_rejects_email_in_use(db_session):
    service = AuthService(db_session)
    await service.sign_up("Ada", "ada@mail.com", "secret1")

    with pytest.raises(AuthProviderError) as exc_info:
        await service.sign_up("Other", "ADA@mail.com", "secret2")
    assert exc_info.value.kind == AuthErrorKind.EMAIL_IN_USE


@pytest.mark.asyncio
async def test_sign_in_with_wrong_password(db_session):
    service = AuthService(db_session)
    await service.sign_up("Ada", "ada@mail.com", "secret1")

    with pytest.raises(AuthProviderError) as exc_info:
        await service.sign_in("ada@mail.com", "wrong-password")
    assert exc_info.value.kind == AuthErrorKind.INVALID_CREDENTIALS

    result = await service.sign_in("ada@mail.com", "secret1")
    assert result.identity.email == "ada@mail.com"


@pytest.mark.asyncio
async def test_sign_out_publishes_event(db_session, context):
    events = []
    service = AuthService(db_session, context)
    result = await service.sign_up("Ada", "ada@mail.com", "secret1")
    context.subscribe(events.append)

    await service.sign_out(identity_from_token(result.token.access_token))

    assert [e.kind for e in events] == [IdentityEventKind.SIGNED_OUT]


@pytest.mark.asyncio
async def test_refresh_issues_new_tokens(db_session):
    service = AuthService(db_session)
    result = await service.sign_up("Ada", "ada@mail.com", "secret1")

    token = await service.refresh(result.token.refresh_token)
    assert identity_from_token(token.access_token).email == "ada@mail.com"

    with pytest.raises(AuthProviderError):
        await service.refresh(result.token.access_token)


@pytest.mark.asyncio
@pytest.mark.parametrize("code,kind", [
    ("auth/popup-closed-by-user", AuthErrorKind.POPUP_CLOSED),
    ("auth/popup-blocked", AuthErrorKind.POPUP_BLOCKED),
    ("auth/cancelled-popup-request", AuthErrorKind.POPUP_BLOCKED),
    ("auth/network-request-failed", AuthErrorKind.NETWORK),
    ("auth/internal-error", AuthErrorKind.UNKNOWN),
])
async def test_google_popup_errors_map_to_categories(db_session, code, kind):
    with pytest.raises(AuthProviderError) as exc_info:
        await AuthService(db_session).sign_in_with_google(error_code=code)
    assert exc_info.value.kind == kind


@pytest.mark.asyncio
async def test_google_sign_in_creates_account_once(db_session, upstream: FakeUpstream):
    upstream.add(GOOGLE_HOST, "/tokeninfo", json={
        "sub": "google-123", "email": "grace@mail.com", "email_verified": "true",
        "name": "Grace", "aud": "client-id",
    })
    service = AuthService(db_session, transport=upstream.transport)

    first = await service.sign_in_with_google(id_token="id-token")
    second = await service.sign_in_with_google(id_token="id-token")

    assert first.identity.uid == second.identity.uid
    assert first.identity.display_name == "Grace"
    assert upstream.requests[0].url.params["id_token"] == "id-token"


@pytest.mark.asyncio
async def test_google_sign_in_rejects_wrong_audience(db_session, upstream: FakeUpstream, monkeypatch):
    monkeypatch.setattr(get_settings().auth, "google_client_id", "expected-client")
    upstream.add(GOOGLE_HOST, "/tokeninfo", json={
        "sub": "g", "email": "g@mail.com", "email_verified": "true", "aud": "someone-else",
    })

    with pytest.raises(AuthProviderError) as exc_info:
        await AuthService(db_session, transport=upstream.transport).sign_in_with_google(id_token="t")
    assert exc_info.value.kind == AuthErrorKind.INVALID_TOKEN


@pytest.mark.asyncio
async def test_google_sign_in_invalid_token(db_session, upstream: FakeUpstream):
    upstream.add(GOOGLE_HOST, "/tokeninfo", json={"error": "invalid_token"}, status_code=400)

    with pytest.raises(AuthProviderError) as exc_info:
        await AuthService(db_session, transport=upstream.transport).sign_in_with_google(id_token="bad")
    assert exc_info.value.kind == AuthErrorKind.INVALID_TOKEN


@pytest.mark.asyncio
async def test_google_sign_in_network_failure(db_session):
    def refuse(request):
        raise httpx.ConnectError("offline", request=request)

    service = AuthService(db_session, transport=httpx.MockTransport(refuse))
    with pytest.raises(AuthProviderError) as exc_info:
        await service.sign_in_with_google(id_token="t")
    assert exc_info.value.kind == AuthErrorKind.NETWORK


@pytest.mark.asyncio
async def test_password_reset_flow(db_session):
    service = AuthService(db_session)
    await service.sign_up("Ada", "ada@mail.com", "secret1")

    assert await service.request_password_reset("nobody@mail.com") is None
    token = await service.request_password_reset("ada@mail.com")

    await service.confirm_password_reset(token, "new-secret", "new-secret")

    result = await service.sign_in("ada@mail.com", "new-secret")
    assert result.identity.email == "ada@mail.com"
    with pytest.raises(AuthProviderError):
        await service.sign_in("ada@mail.com", "secret1")


@pytest.mark.asyncio
async def test_password_reset_rejects_bad_token(db_session):
    with pytest.raises(AuthProviderError) as exc_info:
        await AuthService(db_session).confirm_password_reset("bad-token", "new-secret")
    assert exc_info.value.kind == AuthErrorKind.INVALID_TOKEN


@pytest.mark.asyncio
@pytest.mark.parametrize("flag", ["false", False, None])
async def test_google_unverified_email_cannot_take_over_account(db_session, upstream: FakeUpstream, flag):
    service = AuthService(db_session, transport=upstream.transport)
    owner = await service.sign_up("Victim", "victim@mail.com", "secret1")
    claims = {"sub": "attacker-g", "email": "victim@mail.com"}
    if flag is not None:
        claims["email_verified"] = flag
    upstream.add(GOOGLE_HOST, "/tokeninfo", json=claims)

    with pytest.raises(AuthProviderError) as exc_info:
        await service.sign_in_with_google(id_token="forged")

    assert exc_info.value.kind == AuthErrorKind.INVALID_TOKEN
    assert exc_info.value.details["reason"] == "email_unverified"
    again = await service.sign_in("victim@mail.com", "secret1")
    assert again.identity.uid == owner.identity.uid


@pytest.mark.asyncio
async def test_google_verified_email_links_existing_account(db_session, upstream: FakeUpstream):
    service = AuthService(db_session, transport=upstream.transport)
    owner = await service.sign_up("Ada", "ada@mail.com", "secret1")
    upstream.add(GOOGLE_HOST, "/tokeninfo", json={
        "sub": "google-ada", "email": "ada@mail.com", "email_verified": True,
    })

    result = await service.sign_in_with_google(id_token="genuine")

    assert result.identity.uid == owner.identity.uid


@pytest.mark.asyncio
@pytest.mark.parametrize("password", ["x" * 80, "é" * 37])
async def test_sign_up_rejects_password_over_72_bytes(db_session, password):
    with pytest.raises(ValidationError) as exc_info:
        await AuthService(db_session).sign_up("Ada", "ada@mail.com", password, password)
    assert exc_info.value.field == "password"


@pytest.mark.asyncio
async def test_password_of_exactly_72_bytes_is_accepted(db_session):
    service = AuthService(db_session)
    await service.sign_up("Ada", "ada@mail.com", "p" * 72)

    result = await service.sign_in("ada@mail.com", "p" * 72)
    assert result.identity.email == "ada@mail.com"


@pytest.mark.asyncio
async def test_overlong_password_on_reset_and_sign_in(db_session):
    service = AuthService(db_session)
    await service.sign_up("Ada", "ada@mail.com", "secret1")
    token = await service.request_password_reset("ada@mail.com")

    with pytest.raises(ValidationError):
        await service.confirm_password_reset(token, "y" * 100, "y" * 100)
    with pytest.raises(AuthProviderError) as exc_info:
        await service.sign_in("ada@mail.com", "y" * 100)
    assert exc_info.value.kind == AuthErrorKind.INVALID_CREDENTIALS
