"""Popular destination catalog endpoints"""

from fastapi import APIRouter

from wanderplan.schemas.base import Envelope
from wanderplan.schemas.destination import Destination, DestinationSummary
from wanderplan.services.destination_catalog import get_destination, list_destinations

router = APIRouter(prefix="/destinations", tags=["destinations"])


@router.get("", response_model=Envelope[list[DestinationSummary]])
async def popular_destinations():
    return Envelope(status="ok", data=list_destinations())


@router.get("/{destination_id}", response_model=Envelope[Destination])
async def destination_details(destination_id: str):
    return Envelope(status="ok", data=get_destination(destination_id))
