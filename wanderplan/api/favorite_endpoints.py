"""
Favorite API endpoints - saved destinations of the signed-in user
"""
from fastapi import APIRouter, Depends, status

from wanderplan.core.dependencies import get_favorite_service
from wanderplan.schemas.base import Created, Envelope, Message
from wanderplan.schemas.favorite import FavoriteCreate, FavoriteRead, FavoriteStatus
from wanderplan.services.favorite_service import FavoriteService

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=Envelope[list[FavoriteRead]])
async def list_favorites(service: FavoriteService = Depends(get_favorite_service)):
    """List favorites, newest first"""
    favorites = await service.list_favorites()
    return Envelope(status="ok", data=[FavoriteRead.model_validate(f) for f in favorites])


@router.post("", response_model=Envelope[Created], status_code=status.HTTP_201_CREATED)
async def add_favorite(
    payload: FavoriteCreate,
    service: FavoriteService = Depends(get_favorite_service),
):
    """
    Save a destination

    - **destination_id**: Catalog or city id
    - **name**: Destination name
    - **country**: Destination country
    - **image_url**: Optional image
    """
    favorite_id = await service.add_favorite(payload)
    return Envelope(status="ok", data=Created(id=favorite_id))


@router.get("/status/{destination_id}", response_model=Envelope[FavoriteStatus])
async def favorite_status(
    destination_id: str,
    service: FavoriteService = Depends(get_favorite_service),
):
    """Whether the destination is saved; false when signed out"""
    is_favorite = await service.is_favorite(destination_id)
    return Envelope(
        status="ok",
        data=FavoriteStatus(destination_id=destination_id, is_favorite=is_favorite),
    )


@router.delete("/{favorite_id}", response_model=Envelope[Message])
async def remove_favorite(
    favorite_id: str,
    service: FavoriteService = Depends(get_favorite_service),
):
    await service.remove_favorite(favorite_id)
    return Envelope(status="ok", data=Message(message="Favorite removed"))
