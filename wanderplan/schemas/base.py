from datetime import datetime, timezone
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional, Generic, TypeVar

T = TypeVar('T')


class Envelope(BaseModel, Generic[T]):
    status: str
    data: Optional[T] = None
    error: Optional[str] = None


class Message(BaseModel):
    message: str


class Created(BaseModel):
    id: str


class StandardErrorResponse(BaseModel):
    """Error body returned for every handled failure."""
    status: str = "error"
    error_code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    request_id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
