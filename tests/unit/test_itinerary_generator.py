"""
Unit tests for the mock itinerary generator
"""
import pytest

from wanderplan.core.exceptions import ValidationError
from wanderplan.services.itinerary_generator import (
    EVENING_ACTIVITY,
    FIRST_DAY_NOTE,
    INTEREST_ACTIVITIES,
    LAST_DAY_NOTE,
    DEFAULT_NOTE,
    TRAVEL_TIPS,
    day_count_for,
    generate_itinerary,
)


def test_three_day_food_trip():
    itinerary = generate_itinerary("Rome", "1-3 days", "Medium ($$)", ["Food"])

    assert len(itinerary.days) == 3
    assert [d.day for d in itinerary.days] == [1, 2, 3]
    for day in itinerary.days:
        descriptions = [a.description for a in day.activities]
        assert descriptions == [
            INTEREST_ACTIVITIES["Food"]["description"],
            EVENING_ACTIVITY["description"],
        ]
    assert itinerary.days[0].notes == FIRST_DAY_NOTE
    assert itinerary.days[1].notes == DEFAULT_NOTE
    assert itinerary.days[2].notes == LAST_DAY_NOTE


def test_four_to_seven_days_maps_to_five_generic_days():
    itinerary = generate_itinerary("Rome", "4-7 days", "Low ($)", [])

    assert len(itinerary.days) == 5
    for day in itinerary.days:
        assert len(day.activities) == 3
        assert day.activities[-1].time == "7:00 PM"
    assert itinerary.days[0].activities[0].description == "Guided sightseeing tour"


@pytest.mark.parametrize("duration,expected", [
    ("1-3 days", 3),
    ("4-7 days", 5),
    ("1-2 weeks", 7),
    ("2+ weeks", 7),
])
def test_day_count_lookup(duration, expected):
    assert day_count_for(duration) == expected


def test_interest_activities_follow_fixed_order():
    itinerary = generate_itinerary("Kyoto", "1-3 days", "High ($$$)", ["Adventure", "Culture", "Food", "Nature"])

    descriptions = [a.description for a in itinerary.days[0].activities]
    assert descriptions == [
        INTEREST_ACTIVITIES["Food"]["description"],
        INTEREST_ACTIVITIES["Culture"]["description"],
        INTEREST_ACTIVITIES["Nature"]["description"],
        INTEREST_ACTIVITIES["Adventure"]["description"],
        EVENING_ACTIVITY["description"],
    ]


def test_unrecognized_interests_fall_back_to_defaults():
    itinerary = generate_itinerary("Lisbon", "1-3 days", "Low ($)", ["Nightlife", "Shopping"])

    assert len(itinerary.days[0].activities) == 3
    assert itinerary.interests == ["Nightlife", "Shopping"]


def test_interest_match_ignores_case():
    itinerary = generate_itinerary("Lisbon", "1-3 days", "Low ($)", ["food"])

    assert itinerary.days[0].activities[0].location == "Local food market"


def test_titles_and_tips():
    itinerary = generate_itinerary("Rome", "1-2 weeks", "Medium ($$)", [])

    assert itinerary.days[0].title == "Arrival in Rome"
    assert itinerary.days[3].title == "Exploring Rome - Day 4"
    assert itinerary.days[-1].title == "Farewell to Rome"
    assert itinerary.tips == TRAVEL_TIPS
    assert len(itinerary.tips) == 6


def test_output_is_deterministic():
    first = generate_itinerary("Rome", "2+ weeks", "Medium ($$)", ["Nature"])
    second = generate_itinerary("Rome", "2+ weeks", "Medium ($$)", ["Nature"])

    assert first == second


def test_unknown_duration_rejected():
    with pytest.raises(ValidationError) as exc_info:
        generate_itinerary("Rome", "3 months", "Low ($)", [])

    assert exc_info.value.field == "duration"


def test_blank_destination_rejected():
    with pytest.raises(ValidationError):
        generate_itinerary("   ", "1-3 days", "Low ($)", [])
