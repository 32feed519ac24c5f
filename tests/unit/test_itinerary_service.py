"""
Unit tests for itinerary service CRUD and ownership checks
"""
import asyncio

import pytest

from pydantic import ValidationError as PydanticValidationError

from wanderplan.core.exceptions import NotFoundOrUnauthorizedError, UnauthenticatedError, ValidationError
from wanderplan.schemas.itinerary import (
    GenerateItineraryRequest,
    ItineraryContent,
    ItineraryDay,
    ItineraryUpdate,
)
from wanderplan.services.itinerary_generator import generate_itinerary
from wanderplan.services.itinerary_service import ItineraryService


@pytest.fixture
def rome_plan():
    return generate_itinerary("Rome", "1-3 days", "Medium ($$)", ["Food"])


@pytest.mark.asyncio
async def test_create_then_list_round_trip(db_session, identity, rome_plan):
    service = ItineraryService(db_session, identity)

    itinerary_id = await service.create_itinerary(rome_plan)
    itineraries = await service.list_itineraries()

    assert [i.id for i in itineraries] == [itinerary_id]
    saved = itineraries[0]
    assert saved.user_id == identity.uid
    assert saved.destination == "Rome"
    assert saved.duration == "1-3 days"
    assert saved.budget == "Medium ($$)"
    assert saved.interests == ["Food"]
    assert len(saved.days) == 3
    assert saved.days[0]["title"] == "Arrival in Rome"
    assert saved.created_at == saved.updated_at


@pytest.mark.asyncio
async def test_list_itineraries_newest_first(db_session, identity, rome_plan):
    service = ItineraryService(db_session, identity)

    first = await service.create_itinerary(rome_plan)
    await asyncio.sleep(0.01)
    second = await service.create_itinerary(generate_itinerary("Oslo", "2+ weeks", "High ($$$)", []))

    assert [i.id for i in await service.list_itineraries()] == [second, first]


@pytest.mark.asyncio
async def test_create_requires_identity(db_session, rome_plan):
    with pytest.raises(UnauthenticatedError):
        await ItineraryService(db_session, None).create_itinerary(rome_plan)


@pytest.mark.asyncio
async def test_update_refreshes_updated_at(db_session, identity, rome_plan):
    service = ItineraryService(db_session, identity)
    itinerary_id = await service.create_itinerary(rome_plan)
    before = (await service.get_itinerary(itinerary_id)).updated_at

    await asyncio.sleep(0.01)
    updated = await service.update_itinerary(itinerary_id, ItineraryUpdate(budget="High ($$$)"))

    assert updated.budget == "High ($$$)"
    assert updated.destination == "Rome"
    assert updated.updated_at > before


@pytest.mark.asyncio
async def test_update_by_non_owner_is_rejected_and_record_unchanged(db_session, identity, other_identity, rome_plan):
    itinerary_id = await ItineraryService(db_session, identity).create_itinerary(rome_plan)

    with pytest.raises(NotFoundOrUnauthorizedError):
        await ItineraryService(db_session, other_identity).update_itinerary(
            itinerary_id, ItineraryUpdate(destination="Hijacked")
        )

    stored = await ItineraryService(db_session, identity).get_itinerary(itinerary_id)
    assert stored.destination == "Rome"
    assert stored.updated_at == stored.created_at


@pytest.mark.asyncio
async def test_get_foreign_or_missing_itinerary(db_session, identity, other_identity, rome_plan):
    itinerary_id = await ItineraryService(db_session, identity).create_itinerary(rome_plan)
    other = ItineraryService(db_session, other_identity)

    with pytest.raises(NotFoundOrUnauthorizedError):
        await other.get_itinerary(itinerary_id)
    with pytest.raises(NotFoundOrUnauthorizedError):
        await other.get_itinerary("f" * 32)


@pytest.mark.asyncio
async def test_delete_itinerary(db_session, identity, other_identity, rome_plan):
    service = ItineraryService(db_session, identity)
    itinerary_id = await service.create_itinerary(rome_plan)

    with pytest.raises(NotFoundOrUnauthorizedError):
        await ItineraryService(db_session, other_identity).delete_itinerary(itinerary_id)

    await service.delete_itinerary(itinerary_id)
    assert await service.list_itineraries() == []


@pytest.mark.asyncio
async def test_generate_without_saving_needs_no_identity(db_session):
    service = ItineraryService(db_session, None)

    generated = await service.generate(GenerateItineraryRequest(destination="Rome", duration="4-7 days"))

    assert generated.saved_id is None
    assert len(generated.itinerary.days) == 5


@pytest.mark.asyncio
async def test_generate_and_save(db_session, identity):
    service = ItineraryService(db_session, identity)

    generated = await service.generate(
        GenerateItineraryRequest(destination="Rome", duration="1-3 days", interests=["Culture"], save=True)
    )

    saved = await service.get_itinerary(generated.saved_id)
    assert saved.interests == ["Culture"]


def _days(*numbers):
    return [ItineraryDay(day=n, title=f"Day {n}") for n in numbers]


@pytest.mark.parametrize("duration,numbers", [
    ("1-3 days", (4, 9)),
    ("1-3 days", (1, 2)),
    ("1-3 days", (1, 3, 2)),
    ("4-7 days", ()),
    ("custom", (2, 3)),
])
def test_content_rejects_broken_day_numbering(duration, numbers):
    with pytest.raises(PydanticValidationError):
        ItineraryContent(destination="Rome", duration=duration, budget="", days=_days(*numbers))


def test_content_with_custom_duration_only_needs_contiguous_days():
    content = ItineraryContent(destination="Rome", duration="a long weekend", budget="", days=_days(1, 2))
    assert [d.day for d in content.days] == [1, 2]


@pytest.mark.asyncio
async def test_update_duration_alone_is_rejected_and_record_unchanged(db_session, identity, rome_plan):
    service = ItineraryService(db_session, identity)
    itinerary_id = await service.create_itinerary(rome_plan)

    with pytest.raises(ValidationError) as exc_info:
        await service.update_itinerary(itinerary_id, ItineraryUpdate(duration="1-2 weeks"))
    assert exc_info.value.field == "days"

    stored = await service.get_itinerary(itinerary_id)
    assert stored.duration == "1-3 days"
    assert stored.updated_at == stored.created_at


@pytest.mark.asyncio
async def test_update_days_must_stay_contiguous(db_session, identity, rome_plan):
    service = ItineraryService(db_session, identity)
    itinerary_id = await service.create_itinerary(rome_plan)

    with pytest.raises(ValidationError):
        await service.update_itinerary(itinerary_id, ItineraryUpdate(days=_days(1, 2, 5)))


@pytest.mark.asyncio
async def test_update_duration_with_matching_days(db_session, identity, rome_plan):
    service = ItineraryService(db_session, identity)
    itinerary_id = await service.create_itinerary(rome_plan)

    updated = await service.update_itinerary(
        itinerary_id, ItineraryUpdate(duration="4-7 days", days=_days(1, 2, 3, 4, 5))
    )

    assert updated.duration == "4-7 days"
    assert [d["day"] for d in updated.days] == [1, 2, 3, 4, 5]
