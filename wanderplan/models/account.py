from sqlalchemy import Column, String, DateTime

from wanderplan.core.db import Base, new_id, utcnow


class Account(Base):
    """Credentials owned by the auth provider, separate from the profile store."""
    __tablename__ = "accounts"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    display_name = Column(String(255), nullable=False, default="")
    hashed_password = Column(String(255), nullable=True)  # null for Google-only accounts
    provider = Column(String(32), nullable=False, default="password")  # password, google
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Account id={self.id} email={self.email} provider={self.provider}>"
