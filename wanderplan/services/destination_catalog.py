"""Popular destinations shown on the explore page."""

from typing import List

from wanderplan.core.exceptions import NotFoundError
from wanderplan.schemas.destination import Destination, DestinationSummary

POPULAR_DESTINATIONS = {
    "paris": {
        "name": "Paris",
        "country": "France",
        "tagline": "The City of Light",
        "rating": 4.8,
        "description": (
            "Paris, the capital of France, is synonymous with the finer things in life: art, "
            "fashion, exquisite cuisine, and intellectual and cultural pursuits."
        ),
        "best_time": "April-June, September-November",
        "currency": "Euro (€)",
        "language": "French",
        "timezone": "CET (UTC+1)",
        "attractions": [
            "Eiffel Tower", "Louvre Museum", "Notre-Dame Cathedral",
            "Champs-Élysées", "Montmartre", "Seine River Cruise",
        ],
        "categories": ["Culture", "History", "Romance", "Art", "Food"],
    },
    "tokyo": {
        "name": "Tokyo",
        "country": "Japan",
        "tagline": "Modern metropolis",
        "rating": 4.9,
        "description": (
            "Tokyo, Japan's bustling capital, mixes the ultramodern with the traditional, "
            "from neon-lit skyscrapers to historic temples."
        ),
        "best_time": "March-May, September-November",
        "currency": "Yen (¥)",
        "language": "Japanese",
        "timezone": "JST (UTC+9)",
        "attractions": [
            "Shibuya Crossing", "Tokyo Skytree", "Senso-ji Temple",
            "Tsukiji Fish Market", "Meiji Shrine", "Harajuku District",
        ],
        "categories": ["Culture", "Technology", "Food", "Shopping"],
    },
    "new-york": {
        "name": "New York",
        "country": "USA",
        "tagline": "The Big Apple",
        "rating": 4.7,
        "description": (
            "New York City is a global hub for finance, entertainment, and culture, "
            "known for its iconic skyline and diverse neighborhoods."
        ),
        "best_time": "April-June, September-November",
        "currency": "Dollar ($)",
        "language": "English",
        "timezone": "EST (UTC-5)",
        "attractions": [
            "Statue of Liberty", "Central Park", "Times Square",
            "Empire State Building", "Metropolitan Museum", "Brooklyn Bridge",
        ],
        "categories": ["Culture", "Entertainment", "Shopping", "Food"],
    },
    "bali": {
        "name": "Bali",
        "country": "Indonesia",
        "tagline": "Tropical paradise",
        "rating": 4.9,
        "description": (
            "Bali is an Indonesian island known for its forested volcanic mountains, "
            "iconic rice paddies, beaches and coral reefs."
        ),
        "best_time": "April-October",
        "currency": "Rupiah (Rp)",
        "language": "Indonesian",
        "timezone": "WITA (UTC+8)",
        "attractions": [
            "Uluwatu Temple", "Tanah Lot", "Ubud Monkey Forest",
            "Mount Batur", "Tegallalang Rice Terraces", "Seminyak Beach",
        ],
        "categories": ["Beaches", "Culture", "Nature", "Adventure"],
    },
    "london": {
        "name": "London",
        "country": "UK",
        "tagline": "Historic capital",
        "rating": 4.6,
        "description": (
            "London is a 21st-century city with history stretching back to Roman times, "
            "home to the Houses of Parliament and Westminster Abbey."
        ),
        "best_time": "March-May, September-November",
        "currency": "Pound (£)",
        "language": "English",
        "timezone": "GMT (UTC+0)",
        "attractions": [
            "Tower of London", "Buckingham Palace", "British Museum",
            "London Eye", "Big Ben", "Tower Bridge",
        ],
        "categories": ["History", "Culture", "Architecture", "Food"],
    },
    "sydney": {
        "name": "Sydney",
        "country": "Australia",
        "tagline": "Harbor city",
        "rating": 4.7,
        "description": (
            "Sydney is best known for its harbourfront Opera House; Darling Harbour and "
            "Circular Quay are hubs of waterside life."
        ),
        "best_time": "September-November, March-May",
        "currency": "Dollar (A$)",
        "language": "English",
        "timezone": "AEST (UTC+10)",
        "attractions": [
            "Sydney Opera House", "Sydney Harbour Bridge", "Bondi Beach",
            "Darling Harbour", "Taronga Zoo", "The Rocks",
        ],
        "categories": ["Beaches", "Culture", "Architecture", "Nature"],
    },
}


def list_destinations() -> List[DestinationSummary]:
    return [
        DestinationSummary(id=key, **{f: data[f] for f in ("name", "country", "tagline", "rating")})
        for key, data in POPULAR_DESTINATIONS.items()
    ]


def get_destination(destination_id: str) -> Destination:
    """
    Get a catalog destination by id.

    Raises:
        NotFoundError: if the id is not in the catalog
    """
    data = POPULAR_DESTINATIONS.get(destination_id.lower())
    if data is None:
        raise NotFoundError("destination", destination_id)
    return Destination(id=destination_id.lower(), **data)
