"""Custom exceptions for the Board Engine."""

from __future__ import annotations

from ticketboard.tickets import TicketStatus


class BoardError(Exception):
    """Base exception for Board Engine errors."""


class InvalidTransitionError(BoardError):
    """Drop destination is not one of the fixed columns."""

    def __init__(self, destination: object) -> None:
        super().__init__(f"Unknown destination column: {destination!r}")
        self.destination = destination


class RemoteUpdateFailedError(BoardError):
    """Remote status update failed after the optimistic change was applied.

    The store still shows ``attempted_status``; the caller decides whether
    to retry or revert to ``previous_status``.
    """

    def __init__(
        self,
        ticket_id: str,
        attempted_status: TicketStatus,
        previous_status: TicketStatus,
        reason: str,
    ) -> None:
        super().__init__(
            f"Failed to move ticket '{ticket_id}' from {previous_status} "
            f"to {attempted_status}: {reason}"
        )
        self.ticket_id = ticket_id
        self.attempted_status = attempted_status
        self.previous_status = previous_status
        self.reason = reason
