from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class SignUpRequest(BaseModel):
    name: str = Field(default="", max_length=255)
    email: EmailStr
    password: str
    confirm_password: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class GoogleSignInRequest(BaseModel):
    """Either an ID token from the Google popup or the error code it reported."""
    id_token: Optional[str] = None
    error_code: Optional[str] = None


class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordResetConfirm(BaseModel):
    token: str
    password: str
    confirm_password: Optional[str] = None


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenRefresh(BaseModel):
    refresh_token: str


class IdentityRead(BaseModel):
    uid: str
    display_name: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthResult(BaseModel):
    identity: IdentityRead
    token: Token
