"""
Chat Service - travel assistant conversation log and canned replies
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wanderplan.core.db import utcnow
from wanderplan.core.exceptions import UnauthenticatedError, ValidationError
from wanderplan.core.identity import SessionIdentity
from wanderplan.models.chat_message import ChatMessage
from wanderplan.schemas.chat import ChatMessageRead, ChatReply, ChatRole, TripPreferences

logger = logging.getLogger(__name__)

ASSISTANT_REPLY = (
    "I can help you plan your trip! Would you like me to generate a detailed "
    "itinerary for your destination?"
)
GENERIC_WELCOME = (
    "Hello! I'm your AI Travel Assistant. Tell me where you'd like to go, "
    "and I'll help you plan the perfect trip!"
)
DESTINATION_WELCOME = (
    "Great! Let's plan your trip to {destination}. I can help you with itineraries, "
    "packing tips, local culture, and recommendations. What would you like to know?"
)
NOT_SPECIFIED = "not specified"


def welcome_message(destination: Optional[str] = None) -> str:
    destination = (destination or "").strip()
    if destination:
        return DESTINATION_WELCOME.format(destination=destination)
    return GENERIC_WELCOME


def build_preferences_context(preferences: Optional[TripPreferences]) -> str:
    """Context line appended to assistant prompts; empty when nothing is set."""
    if preferences is None:
        return ""
    if not (preferences.duration or preferences.budget or preferences.interests):
        return ""
    return (
        "Trip preferences: "
        f"Duration: {preferences.duration or NOT_SPECIFIED}, "
        f"Budget: {preferences.budget or NOT_SPECIFIED}, "
        f"Interests: {', '.join(preferences.interests) or NOT_SPECIFIED}"
    )


class ChatService:
    """Chat history for the caller plus the simulated assistant"""

    def __init__(self, db: AsyncSession, identity: Optional[SessionIdentity]):
        self.db = db
        self.identity = identity

    def _require_uid(self) -> str:
        if self.identity is None:
            raise UnauthenticatedError()
        return self.identity.uid

    async def save_message(self, role: ChatRole, content: str) -> str:
        uid = self._require_uid()
        message = ChatMessage(
            user_id=uid,
            role=ChatRole(role).value,
            content=content,
            timestamp=utcnow(),
        )
        self.db.add(message)
        await self.db.commit()
        await self.db.refresh(message)
        return message.id

    async def list_chat_history(self) -> List[ChatMessage]:
        """All messages of the caller, oldest first for replay"""
        uid = self._require_uid()
        stmt = (
            select(ChatMessage)
            .where(ChatMessage.user_id == uid)
            .order_by(ChatMessage.timestamp.asc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _persist(self, role: ChatRole, content: str) -> Optional[str]:
        # The reply is still shown when saving fails
        try:
            return await self.save_message(role, content)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to save {role.value} chat message: {e}", exc_info=True)
            return None

    async def send_message(
        self,
        content: str,
        preferences: Optional[TripPreferences] = None,
    ) -> ChatReply:
        """
        Record a user message and produce the assistant's reply.

        Messages are persisted only for signed-in callers; anonymous callers
        still receive a reply.
        """
        if not content or not content.strip():
            raise ValidationError("Message content is required", field="content")

        signed_in = self.identity is not None
        user_id = await self._persist(ChatRole.USER, content) if signed_in else None
        user_message = ChatMessageRead(
            id=user_id, role=ChatRole.USER, content=content, timestamp=utcnow()
        )

        assistant_id = await self._persist(ChatRole.ASSISTANT, ASSISTANT_REPLY) if signed_in else None
        assistant_message = ChatMessageRead(
            id=assistant_id, role=ChatRole.ASSISTANT, content=ASSISTANT_REPLY, timestamp=utcnow()
        )

        return ChatReply(
            user_message=user_message,
            assistant_message=assistant_message,
            context=build_preferences_context(preferences),
            saved=user_id is not None and assistant_id is not None,
        )
