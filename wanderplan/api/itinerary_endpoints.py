"""
Itinerary API endpoints - generation and saved plans
"""
from fastapi import APIRouter, Depends, status

from wanderplan.core.dependencies import get_itinerary_service
from wanderplan.schemas.base import Created, Envelope, Message
from wanderplan.schemas.itinerary import (
    GeneratedItinerary,
    GenerateItineraryRequest,
    ItineraryCreate,
    ItineraryRead,
    ItineraryUpdate,
)
from wanderplan.services.itinerary_service import ItineraryService

router = APIRouter(prefix="/itineraries", tags=["itineraries"])


@router.post("/generate", response_model=Envelope[GeneratedItinerary])
async def generate_itinerary(
    payload: GenerateItineraryRequest,
    service: ItineraryService = Depends(get_itinerary_service),
):
    """
    Generate a day-by-day itinerary

    - **destination**: Where to go
    - **duration**: One of "1-3 days", "4-7 days", "1-2 weeks", "2+ weeks"
    - **budget**: Budget label
    - **interests**: Interest tags (Food, Culture, Nature, Adventure, ...)
    - **save**: Also save it for the signed-in user
    """
    generated = await service.generate(payload)
    return Envelope(status="ok", data=generated)


@router.post("", response_model=Envelope[Created], status_code=status.HTTP_201_CREATED)
async def create_itinerary(
    payload: ItineraryCreate,
    service: ItineraryService = Depends(get_itinerary_service),
):
    itinerary_id = await service.create_itinerary(payload)
    return Envelope(status="ok", data=Created(id=itinerary_id))


@router.get("", response_model=Envelope[list[ItineraryRead]])
async def list_itineraries(service: ItineraryService = Depends(get_itinerary_service)):
    """List saved itineraries, newest first"""
    itineraries = await service.list_itineraries()
    return Envelope(status="ok", data=[ItineraryRead.model_validate(i) for i in itineraries])


@router.get("/{itinerary_id}", response_model=Envelope[ItineraryRead])
async def get_itinerary(
    itinerary_id: str,
    service: ItineraryService = Depends(get_itinerary_service),
):
    itinerary = await service.get_itinerary(itinerary_id)
    return Envelope(status="ok", data=ItineraryRead.model_validate(itinerary))


@router.patch("/{itinerary_id}", response_model=Envelope[ItineraryRead])
async def update_itinerary(
    itinerary_id: str,
    patch: ItineraryUpdate,
    service: ItineraryService = Depends(get_itinerary_service),
):
    itinerary = await service.update_itinerary(itinerary_id, patch)
    return Envelope(status="ok", data=ItineraryRead.model_validate(itinerary))


@router.delete("/{itinerary_id}", response_model=Envelope[Message])
async def delete_itinerary(
    itinerary_id: str,
    service: ItineraryService = Depends(get_itinerary_service),
):
    await service.delete_itinerary(itinerary_id)
    return Envelope(status="ok", data=Message(message="Itinerary deleted"))
