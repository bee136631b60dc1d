"""Board session - Entry points and queries for one project's board."""

from ticketboard.session.models import DropEvent, FilterChangeEvent
from ticketboard.session.session import BoardSession

__all__ = [
    "BoardSession",
    "DropEvent",
    "FilterChangeEvent",
]
