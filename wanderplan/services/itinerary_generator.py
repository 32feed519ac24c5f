"""
Mock itinerary generator.

Turns trip preferences into a day-by-day plan without any I/O. Output is a
pure function of the inputs so saved itineraries can be regenerated and
compared.
"""

from typing import Dict, List, Sequence

from wanderplan.core.exceptions import ValidationError
from wanderplan.schemas.itinerary import DURATION_DAYS, Activity, ItineraryContent, ItineraryDay

# Order in which interest activities are appended to each day
INTEREST_ORDER = ("Food", "Culture", "Nature", "Adventure")

INTEREST_ACTIVITIES: Dict[str, Dict[str, str]] = {
    "Food": {
        "time": "12:30 PM",
        "description": "Lunch tasting local specialties",
        "duration": "1.5 hours",
        "location": "Local food market",
    },
    "Culture": {
        "time": "10:00 AM",
        "description": "Visit a museum or historic landmark",
        "duration": "2 hours",
        "location": "Historic district",
    },
    "Nature": {
        "time": "2:30 PM",
        "description": "Walk through a park or nature reserve",
        "duration": "2 hours",
        "location": "City park",
    },
    "Adventure": {
        "time": "4:00 PM",
        "description": "Outdoor adventure activity",
        "duration": "3 hours",
        "location": "Adventure center",
    },
}

DEFAULT_ACTIVITIES: List[Dict[str, str]] = [
    {
        "time": "9:00 AM",
        "description": "Guided sightseeing tour",
        "duration": "3 hours",
        "location": "City center",
    },
    {
        "time": "2:00 PM",
        "description": "Explore local shops and neighborhoods",
        "duration": "2 hours",
        "location": "Main shopping street",
    },
]

EVENING_ACTIVITY: Dict[str, str] = {
    "time": "7:00 PM",
    "description": "Dinner at a recommended restaurant",
    "duration": "2 hours",
    "location": "Restaurant district",
}

FIRST_DAY_NOTE = "Take it easy on your first day and adjust to the new time zone."
LAST_DAY_NOTE = "Pack your bags and prepare for departure."
DEFAULT_NOTE = "Enjoy your day exploring at your own pace."

TRAVEL_TIPS: List[str] = [
    "Book accommodations in advance to secure the best rates.",
    "Learn a few basic phrases in the local language.",
    "Keep digital and paper copies of your travel documents.",
    "Check local weather forecasts and pack accordingly.",
    "Use public transportation to save money and travel like a local.",
    "Notify your bank of your travel dates to avoid card issues.",
]


def day_count_for(duration: str) -> int:
    """
    Number of itinerary days for a duration label.

    Raises:
        ValidationError: if the label is not one of the supported durations
    """
    try:
        return DURATION_DAYS[duration]
    except KeyError:
        raise ValidationError(
            f"Unsupported trip duration '{duration}'",
            field="duration",
            details={"supported": list(DURATION_DAYS)},
        )


def _day_title(day: int, total: int, destination: str) -> str:
    if day == 1:
        return f"Arrival in {destination}"
    if day == total:
        return f"Farewell to {destination}"
    return f"Exploring {destination} - Day {day}"


def _day_notes(day: int, total: int) -> str:
    if day == 1:
        return FIRST_DAY_NOTE
    if day == total:
        return LAST_DAY_NOTE
    return DEFAULT_NOTE


def _day_activities(interests: Sequence[str]) -> List[Activity]:
    wanted = {i.strip().lower() for i in interests}
    matched = [tag for tag in INTEREST_ORDER if tag.lower() in wanted]

    if matched:
        activities = [Activity(**INTEREST_ACTIVITIES[tag]) for tag in matched]
    else:
        activities = [Activity(**a) for a in DEFAULT_ACTIVITIES]
    activities.append(Activity(**EVENING_ACTIVITY))
    return activities


def generate_itinerary(
    destination: str,
    duration: str,
    budget: str,
    interests: Sequence[str],
) -> ItineraryContent:
    """
    Build a mock itinerary from trip preferences.

    Args:
        destination: Destination name, e.g. "Rome"
        duration: One of the DURATION_DAYS labels
        budget: Budget label, carried through unchanged
        interests: Interest tags; Food, Culture, Nature and Adventure are recognized

    Returns:
        ItineraryContent with contiguous days numbered from 1

    Raises:
        ValidationError: on an empty destination or unknown duration
    """
    destination = (destination or "").strip()
    if not destination:
        raise ValidationError("Destination is required", field="destination")

    total = day_count_for(duration)
    days = [
        ItineraryDay(
            day=day,
            title=_day_title(day, total, destination),
            activities=_day_activities(interests),
            notes=_day_notes(day, total),
        )
        for day in range(1, total + 1)
    ]

    return ItineraryContent(
        destination=destination,
        duration=duration,
        budget=budget,
        interests=list(interests),
        days=days,
        tips=list(TRAVEL_TIPS),
    )
