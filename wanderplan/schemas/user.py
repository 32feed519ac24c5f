from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional


class UserProfileRead(BaseModel):
    uid: str
    name: str
    email: str
    photo_url: str = ""
    created_at: datetime
    last_login_at: datetime
    itinerary_count: int = 0
    favorite_count: int = 0


class UserProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    photo_url: Optional[str] = Field(None, max_length=1024)
