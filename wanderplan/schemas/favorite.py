from datetime import datetime
from pydantic import BaseModel, Field


class FavoriteCreate(BaseModel):
    destination_id: str = Field(..., min_length=1, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)
    country: str = Field(..., max_length=255)
    image_url: str = Field(default="", max_length=1024)


class FavoriteRead(BaseModel):
    id: str
    user_id: str
    destination_id: str
    name: str
    country: str
    image_url: str
    added_at: datetime

    model_config = {"from_attributes": True}


class FavoriteStatus(BaseModel):
    destination_id: str
    is_favorite: bool
