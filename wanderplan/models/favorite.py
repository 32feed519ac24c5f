from sqlalchemy import Column, String, DateTime

from wanderplan.core.db import Base, new_id, utcnow


class Favorite(Base):
    __tablename__ = "favorites"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), nullable=False, index=True)
    # No unique constraint on (user_id, destination_id); duplicates are checked by callers
    destination_id = Column(String(128), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    country = Column(String(255), nullable=False)
    image_url = Column(String(1024), nullable=False, default="")
    added_at = Column(DateTime, default=utcnow, nullable=False, index=True)
