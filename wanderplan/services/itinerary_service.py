"""
Itinerary Service - saved travel plans with ownership checks
"""
import logging
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wanderplan.core.db import utcnow
from wanderplan.core.exceptions import (
    NotFoundOrUnauthorizedError,
    UnauthenticatedError,
    ValidationError,
)
from wanderplan.core.identity import SessionIdentity
from wanderplan.models.itinerary import Itinerary
from wanderplan.schemas.itinerary import (
    GeneratedItinerary,
    GenerateItineraryRequest,
    ItineraryContent,
    ItineraryUpdate,
)
from wanderplan.services.itinerary_generator import generate_itinerary

logger = logging.getLogger(__name__)


class ItineraryService:
    """Manages itinerary CRUD operations for the caller's session identity"""

    def __init__(self, db: AsyncSession, identity: Optional[SessionIdentity]):
        self.db = db
        self.identity = identity

    def _require_uid(self) -> str:
        if self.identity is None:
            raise UnauthenticatedError()
        return self.identity.uid

    async def create_itinerary(self, data: ItineraryContent) -> str:
        """
        Save an itinerary for the current user

        Args:
            data: Itinerary body, generated or hand-edited

        Returns:
            Id of the saved itinerary
        """
        uid = self._require_uid()
        now = utcnow()
        itinerary = Itinerary(
            user_id=uid,
            destination=data.destination,
            duration=data.duration,
            budget=data.budget,
            interests=list(data.interests),
            days=[d.model_dump() for d in data.days],
            tips=list(data.tips),
            created_at=now,
            updated_at=now,
        )
        self.db.add(itinerary)
        await self.db.commit()
        await self.db.refresh(itinerary)
        logger.info(f"User {uid} saved itinerary {itinerary.id} for {data.destination}")
        return itinerary.id

    async def get_itinerary(self, itinerary_id: str) -> Itinerary:
        """
        Get an itinerary owned by the caller

        Raises:
            NotFoundOrUnauthorizedError: if missing or owned by another user
        """
        uid = self._require_uid()
        itinerary = await self.db.get(Itinerary, itinerary_id)
        if itinerary is None or itinerary.user_id != uid:
            raise NotFoundOrUnauthorizedError("itinerary", itinerary_id)
        return itinerary

    async def list_itineraries(self) -> List[Itinerary]:
        """All itineraries of the caller, newest first"""
        uid = self._require_uid()
        stmt = (
            select(Itinerary)
            .where(Itinerary.user_id == uid)
            .order_by(Itinerary.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update_itinerary(self, itinerary_id: str, patch: ItineraryUpdate) -> Itinerary:
        """
        Apply the provided fields and refresh ``updated_at``

        The patched record must still be a valid itinerary: changing the
        duration alone is rejected when the stored days no longer match it.

        Raises:
            ValidationError: if the merged itinerary is invalid
        """
        itinerary = await self.get_itinerary(itinerary_id)

        update_fields = {
            field: value
            for field, value in patch.model_dump(exclude_unset=True).items()
            if value is not None
        }
        merged = {field: getattr(itinerary, field) for field in ItineraryContent.model_fields}
        merged.update(update_fields)
        try:
            ItineraryContent.model_validate(merged)
        except PydanticValidationError as e:
            messages = [err["msg"] for err in e.errors()]
            raise ValidationError(messages[0], field="days", details={"errors": messages})

        for field, value in update_fields.items():
            setattr(itinerary, field, value)
        itinerary.updated_at = utcnow()

        await self.db.commit()
        await self.db.refresh(itinerary)
        return itinerary

    async def delete_itinerary(self, itinerary_id: str) -> None:
        itinerary = await self.get_itinerary(itinerary_id)
        await self.db.delete(itinerary)
        await self.db.commit()
        logger.info(f"User {itinerary.user_id} deleted itinerary {itinerary_id}")

    async def generate(self, request: GenerateItineraryRequest) -> GeneratedItinerary:
        """Generate a mock itinerary; saving it requires a session identity"""
        content = generate_itinerary(
            request.destination,
            request.duration,
            request.budget,
            request.interests,
        )
        saved_id = None
        if request.save:
            saved_id = await self.create_itinerary(content)
        return GeneratedItinerary(itinerary=content, saved_id=saved_id)
