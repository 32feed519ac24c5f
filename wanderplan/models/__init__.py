"""
Persistence models for the Wanderplan backend.

Importing this package registers every table on ``Base.metadata``.
"""

from .account import Account
from .user import User
from .favorite import Favorite
from .itinerary import Itinerary
from .chat_message import ChatMessage

__all__ = [
    "Account",
    "User",
    "Favorite",
    "Itinerary",
    "ChatMessage",
]
