from sqlalchemy import Column, String, DateTime

from wanderplan.core.db import Base, utcnow


class User(Base):
    """Application-side profile document keyed by the session identity's uid."""
    __tablename__ = "users"

    id = Column(String(32), primary_key=True)
    name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=False, index=True)
    photo_url = Column(String(1024), nullable=False, default="")
    created_at = Column(DateTime, default=utcnow, nullable=False)
    last_login_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User id={self.id} email={self.email}>"
