"""Custom exceptions for the Ticket Store."""


class TicketStoreError(Exception):
    """Base exception for Ticket Store errors."""


class TicketNotFoundError(TicketStoreError):
    """Ticket with given ID is not held by the store."""

    def __init__(self, ticket_id: str) -> None:
        super().__init__(f"Ticket with id '{ticket_id}' not found")
        self.ticket_id = ticket_id
