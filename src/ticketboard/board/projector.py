"""Column Projector - Groups visible tickets into the fixed board columns."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ticketboard.board.models import COLUMNS, Column

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from ticketboard.tickets import Ticket, TicketStatus


def project_columns(visible: Iterable[Ticket]) -> dict[Column, list[Ticket]]:
    """Bucket tickets by status.

    Every column is present, in board order, even when empty. Tickets keep
    their relative order within a bucket.

    Args:
        visible: The filtered ticket sequence.

    Returns:
        Column to its tickets.
    """
    buckets: dict[Column, list[Ticket]] = {column: [] for column in COLUMNS}
    by_status = {column.status: bucket for column, bucket in buckets.items()}
    for ticket in visible:
        by_status[ticket.status].append(ticket)
    return buckets


def column_counts(columns: Mapping[Column, list[Ticket]]) -> dict[TicketStatus, int]:
    """Number of tickets per column status, for column headers."""
    return {column.status: len(tickets) for column, tickets in columns.items()}
