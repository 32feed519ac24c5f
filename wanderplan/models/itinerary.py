"""
Itinerary model for saved day-by-day travel plans
"""
from sqlalchemy import Column, String, DateTime

from wanderplan.core.db import Base, JSONType, new_id, utcnow


class Itinerary(Base):
    """
    Itinerary is a generated or user-edited plan for one destination.
    Days, interests and tips are stored as JSON documents.
    """
    __tablename__ = "itineraries"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), nullable=False, index=True)
    destination = Column(String(255), nullable=False)
    duration = Column(String(64), nullable=False)
    budget = Column(String(64), nullable=False)
    interests = Column(JSONType, nullable=False, default=list)
    days = Column(JSONType, nullable=False, default=list)
    tips = Column(JSONType, nullable=False, default=list)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
