from sqlalchemy import Column, String, DateTime, Text

from wanderplan.core.db import Base, new_id, utcnow


class ChatMessage(Base):
    """Append-only chat log entry."""
    __tablename__ = "chat_messages"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), nullable=False, index=True)
    role = Column(String(16), nullable=False)  # user, assistant
    content = Column(Text, nullable=False)
    timestamp = Column(DateTime, default=utcnow, nullable=False, index=True)
