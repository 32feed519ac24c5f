"""
User Profile Service - the application's own record of each signed-in user
"""
import logging
from typing import Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wanderplan.core.db import utcnow
from wanderplan.core.exceptions import NotFoundOrUnauthorizedError, UnauthenticatedError
from wanderplan.core.identity import SessionIdentity
from wanderplan.models.favorite import Favorite
from wanderplan.models.itinerary import Itinerary
from wanderplan.models.user import User
from wanderplan.schemas.user import UserProfileRead, UserProfileUpdate

logger = logging.getLogger(__name__)


def to_profile(user: User, counts: Optional[Dict[str, int]] = None) -> UserProfileRead:
    return UserProfileRead(
        **(counts or {}),
        uid=user.id,
        name=user.name,
        email=user.email,
        photo_url=user.photo_url or "",
        created_at=user.created_at,
        last_login_at=user.last_login_at,
    )


class UserProfileService:
    """Profile documents keyed by session identity uid"""

    def __init__(self, db: AsyncSession, identity: Optional[SessionIdentity] = None):
        self.db = db
        self.identity = identity

    async def ensure_profile(self, identity: SessionIdentity) -> User:
        """
        Create or merge the profile for a signed-in identity.

        Missing fields are filled from the identity and ``last_login_at`` is
        refreshed; fields the user already edited are left alone.
        """
        user = await self.db.get(User, identity.uid)
        now = utcnow()
        if user is None:
            user = User(
                id=identity.uid,
                name=identity.display_name,
                email=identity.email,
                photo_url="",
                created_at=identity.created_at,
                last_login_at=now,
            )
            self.db.add(user)
            logger.info(f"Created profile for user {identity.uid}")
        else:
            if not user.name:
                user.name = identity.display_name
            if not user.email:
                user.email = identity.email
            user.last_login_at = now

        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def get_profile(self) -> User:
        if self.identity is None:
            raise UnauthenticatedError()
        user = await self.db.get(User, self.identity.uid)
        if user is None:
            raise NotFoundOrUnauthorizedError("profile", self.identity.uid)
        return user

    async def saved_counts(self) -> Dict[str, int]:
        """Number of itineraries and favorites saved by the signed-in user"""
        if self.identity is None:
            raise UnauthenticatedError()
        uid = self.identity.uid
        itineraries = await self.db.scalar(
            select(func.count()).select_from(Itinerary).where(Itinerary.user_id == uid)
        )
        favorites = await self.db.scalar(
            select(func.count()).select_from(Favorite).where(Favorite.user_id == uid)
        )
        return {"itinerary_count": itineraries or 0, "favorite_count": favorites or 0}

    async def update_profile(self, patch: UserProfileUpdate) -> User:
        """Apply profile edits; a missing profile is created from the identity first"""
        if self.identity is None:
            raise UnauthenticatedError()
        user = await self.db.get(User, self.identity.uid)
        if user is None:
            user = await self.ensure_profile(self.identity)

        for field, value in patch.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(user, field, value)
        user.last_login_at = utcnow()

        await self.db.commit()
        await self.db.refresh(user)
        return user
