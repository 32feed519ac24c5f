"""
Favorite Service - per-user saved destinations
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wanderplan.core.db import utcnow
from wanderplan.core.exceptions import NotFoundOrUnauthorizedError, UnauthenticatedError
from wanderplan.core.identity import SessionIdentity
from wanderplan.models.favorite import Favorite
from wanderplan.schemas.favorite import FavoriteCreate

logger = logging.getLogger(__name__)


class FavoriteService:
    """Favorites owned by the caller's session identity"""

    def __init__(self, db: AsyncSession, identity: Optional[SessionIdentity]):
        self.db = db
        self.identity = identity

    def _require_uid(self) -> str:
        if self.identity is None:
            raise UnauthenticatedError()
        return self.identity.uid

    async def add_favorite(self, data: FavoriteCreate) -> str:
        """
        Save a destination for the current user.

        Does not check for an existing (user, destination) favorite; callers
        use ``is_favorite`` first.

        Returns:
            Id of the new favorite
        """
        uid = self._require_uid()
        favorite = Favorite(
            user_id=uid,
            destination_id=data.destination_id,
            name=data.name,
            country=data.country,
            image_url=data.image_url,
            added_at=utcnow(),
        )
        self.db.add(favorite)
        await self.db.commit()
        await self.db.refresh(favorite)
        logger.info(f"User {uid} favorited destination {data.destination_id}")
        return favorite.id

    async def is_favorite(self, destination_id: str) -> bool:
        """True when the caller has a favorite for ``destination_id``; False when signed out."""
        if self.identity is None:
            return False
        stmt = (
            select(Favorite.id)
            .where(
                Favorite.user_id == self.identity.uid,
                Favorite.destination_id == destination_id,
            )
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def find_favorite(self, destination_id: str) -> Optional[Favorite]:
        """Newest favorite of the caller for a destination, used by toggle flows."""
        uid = self._require_uid()
        stmt = (
            select(Favorite)
            .where(Favorite.user_id == uid, Favorite.destination_id == destination_id)
            .order_by(Favorite.added_at.desc())
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def remove_favorite(self, favorite_id: str) -> None:
        uid = self._require_uid()
        favorite = await self.db.get(Favorite, favorite_id)
        if favorite is None or favorite.user_id != uid:
            raise NotFoundOrUnauthorizedError("favorite", favorite_id)

        await self.db.delete(favorite)
        await self.db.commit()
        logger.info(f"User {uid} removed favorite {favorite_id}")

    async def list_favorites(self) -> List[Favorite]:
        """All favorites of the caller, newest first"""
        uid = self._require_uid()
        stmt = (
            select(Favorite)
            .where(Favorite.user_id == uid)
            .order_by(Favorite.added_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
