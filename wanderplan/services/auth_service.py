"""
Auth Service - the account provider behind the identity context.

Owns the ``accounts`` table (credentials and provider), issues access and
refresh tokens carrying the session identity claims, verifies Google ID
tokens and publishes sign-in / sign-out events to the identity context.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wanderplan.config import get_settings
from wanderplan.core.exceptions import AuthErrorKind, AuthProviderError, ValidationError
from wanderplan.core.identity import IdentityContext, SessionIdentity
from wanderplan.core.jwt import (
    PASSWORD_RESET,
    REFRESH,
    create_access_token,
    create_password_reset_token,
    create_refresh_token,
    decode_token,
)
from wanderplan.core.security import hash_password, verify_password
from wanderplan.models.account import Account
from wanderplan.schemas.auth import AuthResult, IdentityRead, Token

logger = logging.getLogger(__name__)

# Error codes reported by the browser-side Google popup
POPUP_ERROR_KINDS: Dict[str, AuthErrorKind] = {
    "auth/popup-closed-by-user": AuthErrorKind.POPUP_CLOSED,
    "auth/popup-blocked": AuthErrorKind.POPUP_BLOCKED,
    "auth/cancelled-popup-request": AuthErrorKind.POPUP_BLOCKED,
    "auth/network-request-failed": AuthErrorKind.NETWORK,
}

# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72

PASSWORD_PROVIDER = "password"
GOOGLE_PROVIDER = "google"


def identity_for(account: Account) -> SessionIdentity:
    return SessionIdentity(
        uid=account.id,
        display_name=account.display_name or "",
        email=account.email,
        created_at=account.created_at,
    )


def issue_tokens(identity: SessionIdentity) -> Token:
    return Token(
        access_token=create_access_token(identity.uid, claims=identity.to_claims()),
        refresh_token=create_refresh_token(identity.uid),
    )


def popup_error_kind(error_code: str) -> AuthErrorKind:
    return POPUP_ERROR_KINDS.get(error_code, AuthErrorKind.UNKNOWN)


class AuthService:
    """Sign up, sign in (password or Google), sign out, refresh and password reset"""

    def __init__(
        self,
        db: AsyncSession,
        identity_context: Optional[IdentityContext] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.db = db
        self.identity_context = identity_context
        self.transport = transport
        self.settings = get_settings().auth

    def validate_new_password(self, password: str, confirm_password: Optional[str] = None) -> None:
        if confirm_password is not None and password != confirm_password:
            raise ValidationError("Passwords do not match", field="confirm_password")
        if len(password) < self.settings.min_password_length:
            raise ValidationError(
                f"Password must be at least {self.settings.min_password_length} characters",
                field="password",
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
                field="password",
            )

    async def _account_by_email(self, email: str) -> Optional[Account]:
        stmt = select(Account).where(Account.email == email.strip().lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _complete_sign_in(self, account: Account) -> AuthResult:
        identity = identity_for(account)
        if self.identity_context is not None:
            await self.identity_context.signed_in(identity)
        return AuthResult(
            identity=IdentityRead(
                uid=identity.uid,
                display_name=identity.display_name,
                email=identity.email,
                created_at=identity.created_at,
            ),
            token=issue_tokens(identity),
        )

    async def sign_up(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: Optional[str] = None,
    ) -> AuthResult:
        """
        Create a password account and sign it in.

        Raises:
            ValidationError: mismatched confirmation or password too short
            AuthProviderError: email already registered
        """
        self.validate_new_password(password, confirm_password)
        if await self._account_by_email(email):
            raise AuthProviderError(AuthErrorKind.EMAIL_IN_USE)

        account = Account(
            email=email.strip().lower(),
            display_name=name.strip(),
            hashed_password=hash_password(password),
            provider=PASSWORD_PROVIDER,
        )
        self.db.add(account)
        await self.db.commit()
        await self.db.refresh(account)
        logger.info(f"Registered account {account.id}")
        return await self._complete_sign_in(account)

    async def sign_in(self, email: str, password: str) -> AuthResult:
        account = await self._account_by_email(email)
        if account is None or not verify_password(password, account.hashed_password):
            raise AuthProviderError(AuthErrorKind.INVALID_CREDENTIALS)
        return await self._complete_sign_in(account)

    async def _verify_google_token(self, id_token: str) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout_seconds, transport=self.transport
            ) as client:
                response = await client.get(
                    self.settings.google_tokeninfo_url, params={"id_token": id_token}
                )
        except httpx.HTTPError as e:
            logger.warning(f"Google token verification unreachable: {e}")
            raise AuthProviderError(AuthErrorKind.NETWORK)

        if response.status_code != 200:
            raise AuthProviderError(
                AuthErrorKind.INVALID_TOKEN, details={"upstream_status": response.status_code}
            )
        try:
            claims = response.json()
        except ValueError:
            raise AuthProviderError(AuthErrorKind.INVALID_TOKEN)

        if not isinstance(claims, dict) or not claims.get("email") or not claims.get("sub"):
            raise AuthProviderError(AuthErrorKind.INVALID_TOKEN)
        # tokeninfo reports the flag as a string; an unverified email cannot claim an account
        if claims.get("email_verified") not in ("true", True):
            logger.warning("Rejected Google token with unverified email")
            raise AuthProviderError(AuthErrorKind.INVALID_TOKEN, details={"reason": "email_unverified"})
        client_id = self.settings.google_client_id
        if client_id and claims.get("aud") != client_id:
            raise AuthProviderError(AuthErrorKind.INVALID_TOKEN, details={"reason": "audience"})
        return claims

    async def sign_in_with_google(
        self,
        id_token: Optional[str] = None,
        error_code: Optional[str] = None,
    ) -> AuthResult:
        """
        Sign in with a Google ID token, creating the account on first use.

        Only tokens with a verified email are accepted, so an existing
        password account with the same email is linked safely.

        ``error_code`` carries a failure reported by the browser popup and is
        mapped to its own error category.
        """
        if error_code:
            raise AuthProviderError(popup_error_kind(error_code), details={"provider_code": error_code})
        if not id_token:
            raise AuthProviderError(AuthErrorKind.INVALID_TOKEN)

        claims = await self._verify_google_token(id_token)
        account = await self._account_by_email(claims["email"])
        if account is None:
            account = Account(
                email=claims["email"].strip().lower(),
                display_name=claims.get("name") or "",
                hashed_password=None,
                provider=GOOGLE_PROVIDER,
            )
            self.db.add(account)
            await self.db.commit()
            await self.db.refresh(account)
            logger.info(f"Registered Google account {account.id}")
        return await self._complete_sign_in(account)

    async def sign_out(self, identity: SessionIdentity) -> None:
        if self.identity_context is not None:
            await self.identity_context.signed_out(identity)

    async def refresh(self, refresh_token: str) -> Token:
        decoded = decode_token(refresh_token, REFRESH)
        if not decoded:
            raise AuthProviderError(AuthErrorKind.INVALID_TOKEN)
        account = await self.db.get(Account, decoded.get("sub"))
        if account is None:
            raise AuthProviderError(AuthErrorKind.INVALID_TOKEN)
        return issue_tokens(identity_for(account))

    async def request_password_reset(self, email: str) -> Optional[str]:
        """
        Issue a password reset token for a known email.

        Unknown emails are accepted silently so callers cannot enumerate
        accounts. Delivery is out of scope; the token is logged.
        """
        account = await self._account_by_email(email)
        if account is None:
            logger.info("Password reset requested for unknown email")
            return None
        token = create_password_reset_token(account.id)
        logger.info(
            f"Password reset token issued for account {account.id}",
            extra={"uid": account.id, "reset_token": token},
        )
        return token

    async def confirm_password_reset(
        self,
        token: str,
        password: str,
        confirm_password: Optional[str] = None,
    ) -> None:
        self.validate_new_password(password, confirm_password)
        decoded = decode_token(token, PASSWORD_RESET)
        if not decoded:
            raise AuthProviderError(AuthErrorKind.INVALID_TOKEN)
        account = await self.db.get(Account, decoded.get("sub"))
        if account is None:
            raise AuthProviderError(AuthErrorKind.INVALID_TOKEN)

        account.hashed_password = hash_password(password)
        await self.db.commit()
        logger.info(f"Password reset completed for account {account.id}")
