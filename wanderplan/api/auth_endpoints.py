"""Account endpoints: sign up, sign in, Google sign-in, sign out, refresh, password reset."""

from fastapi import APIRouter, Depends, status

from wanderplan.core.dependencies import get_auth_service, require_identity
from wanderplan.core.identity import SessionIdentity
from wanderplan.schemas.auth import (
    AuthResult,
    GoogleSignInRequest,
    IdentityRead,
    LoginRequest,
    PasswordResetConfirm,
    PasswordResetRequest,
    SignUpRequest,
    Token,
    TokenRefresh,
)
from wanderplan.schemas.base import Envelope, Message
from wanderplan.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=Envelope[AuthResult], status_code=status.HTTP_201_CREATED)
async def sign_up(payload: SignUpRequest, service: AuthService = Depends(get_auth_service)):
    result = await service.sign_up(
        payload.name, payload.email, payload.password, payload.confirm_password
    )
    return Envelope(status="ok", data=result)


@router.post("/login", response_model=Envelope[AuthResult])
async def sign_in(payload: LoginRequest, service: AuthService = Depends(get_auth_service)):
    result = await service.sign_in(payload.email, payload.password)
    return Envelope(status="ok", data=result)


@router.post("/google", response_model=Envelope[AuthResult])
async def sign_in_with_google(
    payload: GoogleSignInRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Complete a Google popup sign-in.

    - **id_token**: ID token returned by the popup
    - **error_code**: popup failure code (e.g. ``auth/popup-blocked``) when there is no token
    """
    result = await service.sign_in_with_google(payload.id_token, payload.error_code)
    return Envelope(status="ok", data=result)


@router.post("/logout", response_model=Envelope[Message])
async def sign_out(
    identity: SessionIdentity = Depends(require_identity),
    service: AuthService = Depends(get_auth_service),
):
    await service.sign_out(identity)
    return Envelope(status="ok", data=Message(message="Signed out"))


@router.post("/refresh", response_model=Envelope[Token])
async def refresh_token(payload: TokenRefresh, service: AuthService = Depends(get_auth_service)):
    token = await service.refresh(payload.refresh_token)
    return Envelope(status="ok", data=token)


@router.get("/me", response_model=Envelope[IdentityRead])
async def current_identity(identity: SessionIdentity = Depends(require_identity)):
    return Envelope(status="ok", data=IdentityRead.model_validate(identity))


@router.post("/password-reset", response_model=Envelope[Message], status_code=status.HTTP_202_ACCEPTED)
async def request_password_reset(
    payload: PasswordResetRequest,
    service: AuthService = Depends(get_auth_service),
):
    await service.request_password_reset(payload.email)
    return Envelope(
        status="ok",
        data=Message(message="If an account exists for this email, a reset link has been sent."),
    )


@router.post("/password-reset/confirm", response_model=Envelope[Message])
async def confirm_password_reset(
    payload: PasswordResetConfirm,
    service: AuthService = Depends(get_auth_service),
):
    await service.confirm_password_reset(payload.token, payload.password, payload.confirm_password)
    return Envelope(status="ok", data=Message(message="Password updated"))
