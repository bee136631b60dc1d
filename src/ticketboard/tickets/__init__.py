"""Ticket Store - In-memory snapshot of one project's tickets."""

from ticketboard.tickets.exceptions import TicketNotFoundError, TicketStoreError
from ticketboard.tickets.models import (
    Member,
    MemberRole,
    Priority,
    Ticket,
    TicketStats,
    TicketStatus,
)
from ticketboard.tickets.store import TicketStore

__all__ = [
    "Member",
    "MemberRole",
    "Priority",
    "Ticket",
    "TicketNotFoundError",
    "TicketStats",
    "TicketStatus",
    "TicketStore",
    "TicketStoreError",
]
