"""Data models for the Board Engine."""

from __future__ import annotations

from dataclasses import dataclass

from ticketboard.tickets import TicketStatus


@dataclass(frozen=True)
class Column:
    """A fixed kanban column, keyed by the status it holds."""

    status: TicketStatus
    title: str

    @property
    def id(self) -> str:
        return self.status.value


COLUMNS: tuple[Column, ...] = (
    Column(TicketStatus.OPEN, "Open"),
    Column(TicketStatus.IN_PROGRESS, "In Progress"),
    Column(TicketStatus.RESOLVED, "Resolved"),
    Column(TicketStatus.CLOSED, "Closed"),
)

COLUMN_IDS: frozenset[str] = frozenset(column.id for column in COLUMNS)


@dataclass(frozen=True)
class DragTransition:
    """A status change interpreted from a drop. Never stored.

    Attributes:
        ticket_id: The dragged ticket.
        from_status: Status before the drop.
        to_status: Destination column status.
    """

    ticket_id: str
    from_status: TicketStatus
    to_status: TicketStatus
