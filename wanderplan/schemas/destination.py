from pydantic import BaseModel, Field
from typing import List


class DestinationSummary(BaseModel):
    id: str
    name: str
    country: str
    tagline: str
    rating: float


class Destination(DestinationSummary):
    description: str
    best_time: str
    currency: str
    language: str
    timezone: str
    attractions: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
