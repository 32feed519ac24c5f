"""Profile endpoints for the signed-in user"""

from fastapi import APIRouter, Depends

from wanderplan.core.dependencies import get_user_profile_service
from wanderplan.schemas.base import Envelope
from wanderplan.schemas.user import UserProfileRead, UserProfileUpdate
from wanderplan.services.user_profile_service import UserProfileService, to_profile

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=Envelope[UserProfileRead])
async def get_profile(service: UserProfileService = Depends(get_user_profile_service)):
    user = await service.get_profile()
    return Envelope(status="ok", data=to_profile(user, await service.saved_counts()))


@router.patch("/me", response_model=Envelope[UserProfileRead])
async def update_profile(
    patch: UserProfileUpdate,
    service: UserProfileService = Depends(get_user_profile_service),
):
    """
    Update the profile

    - **name**: Display name
    - **photo_url**: Avatar URL
    """
    user = await service.update_profile(patch)
    return Envelope(status="ok", data=to_profile(user, await service.saved_counts()))
