"""TicketStore - Authoritative in-memory snapshot for one project scope."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any

from ticketboard.tickets.exceptions import TicketNotFoundError
from ticketboard.tickets.models import Ticket, TicketStats, TicketStatus

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)

_TICKET_FIELDS = frozenset(f.name for f in dataclasses.fields(Ticket))


class TicketStore:
    """Owns the ordered ticket list the board renders.

    Order is the server-provided order (typically creation order). All
    operations are synchronous and only touch the in-memory snapshot.
    """

    def __init__(self, tickets: Iterable[Ticket] = ()) -> None:
        """Initialize the store.

        Args:
            tickets: Initial snapshot, in display order.
        """
        self._tickets: list[Ticket] = []
        self._index: dict[str, int] = {}
        self.load(tickets)

    def __len__(self) -> int:
        return len(self._tickets)

    def __contains__(self, ticket_id: object) -> bool:
        return ticket_id in self._index

    def load(self, tickets: Iterable[Ticket]) -> None:
        """Replace the whole snapshot (load-complete).

        A repeated id keeps its first position and its last record.

        Args:
            tickets: New snapshot, in display order.
        """
        self._tickets = []
        self._index = {}
        for ticket in tickets:
            self.upsert_one(ticket)
        logger.debug("Loaded %d ticket(s) into store", len(self._tickets))

    def get_all(self) -> list[Ticket]:
        """Return all tickets in store order.

        Returns:
            A new list; mutating it does not affect the store.
        """
        return list(self._tickets)

    def find(self, ticket_id: str) -> Ticket | None:
        """Look up a ticket by id.

        Args:
            ticket_id: The ticket's id.

        Returns:
            The ticket, or None if it is not held.
        """
        position = self._index.get(ticket_id)
        if position is None:
            return None
        return self._tickets[position]

    def get(self, ticket_id: str) -> Ticket:
        """Get a ticket by id.

        Args:
            ticket_id: The ticket's id.

        Returns:
            The ticket.

        Raises:
            TicketNotFoundError: If the ticket is not held.
        """
        ticket = self.find(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket

    def replace(self, ticket_id: str, patch: Mapping[str, Any]) -> Ticket:
        """Merge patch fields into a held ticket.

        Fields absent from the patch are unchanged. The record is swapped
        whole, so a failing patch leaves the store untouched.

        Args:
            ticket_id: The ticket's id.
            patch: Field name to new value.

        Returns:
            The updated ticket.

        Raises:
            TicketNotFoundError: If the ticket is not held.
            ValueError: If the patch changes the id, names an unknown field,
                or carries an invalid status or priority.
        """
        position = self._index.get(ticket_id)
        if position is None:
            raise TicketNotFoundError(ticket_id)

        if "id" in patch and patch["id"] != ticket_id:
            raise ValueError(f"Ticket id is immutable (got '{patch['id']}' for '{ticket_id}')")
        unknown = set(patch) - _TICKET_FIELDS
        if unknown:
            raise ValueError(f"Unknown ticket field(s): {', '.join(sorted(unknown))}")

        updated = dataclasses.replace(self._tickets[position], **patch)
        self._tickets[position] = updated
        return updated

    def upsert_one(self, ticket: Ticket) -> Ticket:
        """Insert a ticket, or replace the held record with the same id in place.

        Args:
            ticket: The ticket to store.

        Returns:
            The stored ticket.
        """
        position = self._index.get(ticket.id)
        if position is None:
            self._index[ticket.id] = len(self._tickets)
            self._tickets.append(ticket)
        else:
            self._tickets[position] = ticket
        return ticket

    def remove(self, ticket_id: str) -> Ticket:
        """Drop a ticket from the snapshot.

        Args:
            ticket_id: The ticket's id.

        Returns:
            The removed ticket.

        Raises:
            TicketNotFoundError: If the ticket is not held.
        """
        position = self._index.get(ticket_id)
        if position is None:
            raise TicketNotFoundError(ticket_id)

        removed = self._tickets.pop(position)
        self._index = {ticket.id: i for i, ticket in enumerate(self._tickets)}
        return removed

    def stats(self) -> TicketStats:
        """Count tickets per status.

        Returns:
            TicketStats over the current snapshot.
        """
        counts = {status: 0 for status in TicketStatus}
        for ticket in self._tickets:
            counts[ticket.status] += 1
        return TicketStats(
            total=len(self._tickets),
            open=counts[TicketStatus.OPEN],
            in_progress=counts[TicketStatus.IN_PROGRESS],
            resolved=counts[TicketStatus.RESOLVED],
            closed=counts[TicketStatus.CLOSED],
        )
