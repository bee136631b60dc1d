"""Interfaces of the collaborators the board core talks to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ticketboard.tickets import Member, Ticket, TicketStatus


class RemoteTicketApi(Protocol):
    """Remote ticket service."""

    async def update_status(self, ticket_id: str, status: TicketStatus) -> Ticket:
        """Persist a status change. Raises on failure."""
        ...

    async def list_tickets(self, project_id: str) -> list[Ticket]:
        """Fetch a project's tickets in display order."""
        ...


class MemberDirectory(Protocol):
    """Read-only project member lookup."""

    async def list_members(self, project_id: str) -> list[Member]:
        """Fetch a project's members."""
        ...
