"""Board Engine - Kanban status transitions and column projection."""

from ticketboard.board.engine import BoardEngine, parse_column
from ticketboard.board.events import BoardEventManager, Event, EventType, Subscriber
from ticketboard.board.exceptions import (
    BoardError,
    InvalidTransitionError,
    RemoteUpdateFailedError,
)
from ticketboard.board.models import COLUMN_IDS, COLUMNS, Column, DragTransition
from ticketboard.board.projector import column_counts, project_columns

__all__ = [
    "COLUMNS",
    "COLUMN_IDS",
    "BoardEngine",
    "BoardError",
    "BoardEventManager",
    "Column",
    "DragTransition",
    "Event",
    "EventType",
    "InvalidTransitionError",
    "RemoteUpdateFailedError",
    "Subscriber",
    "column_counts",
    "parse_column",
    "project_columns",
]
