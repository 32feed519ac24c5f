"""JWT issue / verify utilities (access, refresh & password-reset tokens)"""
from datetime import datetime, timedelta, timezone
from typing import Dict, Any
import jwt

from wanderplan.config import get_settings

ACCESS = "access"
REFRESH = "refresh"
PASSWORD_RESET = "password_reset"


def _build_payload(subject: str, token_type: str, expires_minutes: int, claims: Dict[str, Any] | None = None) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    payload = dict(claims or {})
    payload.update({
        "sub": subject,
        "type": token_type,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    })
    return payload


def _secret(token_type: str) -> str:
    auth = get_settings().auth
    return auth.refresh_secret if token_type == REFRESH else auth.jwt_secret


def create_access_token(subject: str, claims: Dict[str, Any] | None = None, expires_minutes: int | None = None) -> str:
    auth = get_settings().auth
    minutes = expires_minutes or auth.access_token_minutes
    return jwt.encode(_build_payload(subject, ACCESS, minutes, claims), _secret(ACCESS), algorithm=auth.jwt_algorithm)


def create_refresh_token(subject: str, expires_minutes: int | None = None) -> str:
    auth = get_settings().auth
    minutes = expires_minutes or auth.refresh_token_minutes
    return jwt.encode(_build_payload(subject, REFRESH, minutes), _secret(REFRESH), algorithm=auth.jwt_algorithm)


def create_password_reset_token(subject: str, expires_minutes: int | None = None) -> str:
    auth = get_settings().auth
    minutes = expires_minutes or auth.password_reset_minutes
    return jwt.encode(_build_payload(subject, PASSWORD_RESET, minutes), _secret(PASSWORD_RESET), algorithm=auth.jwt_algorithm)


def decode_token(token: str, token_type: str = ACCESS) -> Dict[str, Any] | None:
    auth = get_settings().auth
    try:
        payload = jwt.decode(token, _secret(token_type), algorithms=[auth.jwt_algorithm])
    except jwt.PyJWTError:
        return None
    if payload.get("type") != token_type:
        return None
    return payload
