from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class TripPreferences(BaseModel):
    duration: str = ""
    budget: str = ""
    interests: List[str] = Field(default_factory=list)


class ChatRequest(BaseModel):
    content: str = Field(..., max_length=4000)
    preferences: Optional[TripPreferences] = None


class ChatMessageRead(BaseModel):
    id: Optional[str] = None  # None when the message was not persisted
    role: ChatRole
    content: str
    timestamp: datetime

    model_config = {"from_attributes": True}


class ChatReply(BaseModel):
    user_message: ChatMessageRead
    assistant_message: ChatMessageRead
    context: str = ""
    saved: bool = False
