"""
Itinerary schemas for API requests/responses
"""
from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from typing import Dict, List, Optional

# "4-7 days" maps to 5 on purpose; saved plans depend on this day count
DURATION_DAYS: Dict[str, int] = {
    "1-3 days": 3,
    "4-7 days": 5,
    "1-2 weeks": 7,
    "2+ weeks": 7,
}


def check_day_numbers(duration: str, days: List["ItineraryDay"]) -> None:
    """
    Days are numbered 1..n in order; for a known duration label n is its day count.

    Raises:
        ValueError: if the numbering is broken or the count does not match
    """
    numbers = [d.day for d in days]
    expected = DURATION_DAYS.get(duration, len(numbers))
    if numbers != list(range(1, expected + 1)):
        raise ValueError(
            f"Itinerary days must be numbered 1 to {expected} for duration '{duration}', got {numbers}"
        )


class Activity(BaseModel):
    time: str
    description: str
    duration: str
    location: str


class ItineraryDay(BaseModel):
    day: int = Field(..., ge=1)
    title: str
    activities: List[Activity] = Field(default_factory=list)
    notes: str = ""


class ItineraryContent(BaseModel):
    """Plan body shared by generated and saved itineraries"""
    destination: str = Field(..., min_length=1, max_length=255)
    duration: str = Field(..., max_length=64)
    budget: str = Field(..., max_length=64)
    interests: List[str] = Field(default_factory=list)
    days: List[ItineraryDay] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_days(self):
        check_day_numbers(self.duration, self.days)
        return self


class ItineraryCreate(ItineraryContent):
    """Schema for saving an itinerary"""


class ItineraryUpdate(BaseModel):
    """Schema for patching an itinerary; only provided fields change"""
    destination: Optional[str] = Field(None, min_length=1, max_length=255)
    duration: Optional[str] = Field(None, max_length=64)
    budget: Optional[str] = Field(None, max_length=64)
    interests: Optional[List[str]] = None
    days: Optional[List[ItineraryDay]] = None
    tips: Optional[List[str]] = None


class ItineraryRead(ItineraryContent):
    """Schema for itinerary read response"""
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class GenerateItineraryRequest(BaseModel):
    destination: str = Field(..., max_length=255)
    duration: str
    budget: str = ""
    interests: List[str] = Field(default_factory=list)
    save: bool = False


class GeneratedItinerary(BaseModel):
    itinerary: ItineraryContent
    saved_id: Optional[str] = None
