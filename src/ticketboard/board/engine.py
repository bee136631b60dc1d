"""BoardEngine - Drag-and-drop status transitions with optimistic updates."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ticketboard.board.events import BoardEventManager
from ticketboard.board.exceptions import InvalidTransitionError, RemoteUpdateFailedError
from ticketboard.board.models import DragTransition
from ticketboard.logging import sanitize_for_log
from ticketboard.tickets import Ticket, TicketStatus

if TYPE_CHECKING:
    from ticketboard.protocols import RemoteTicketApi
    from ticketboard.tickets import TicketStore

logger = logging.getLogger(__name__)


def parse_column(destination: object) -> TicketStatus:
    """Validate a drop destination against the fixed columns.

    Args:
        destination: A TicketStatus or its string id.

    Returns:
        The destination status.

    Raises:
        InvalidTransitionError: If it names no column.
    """
    try:
        return TicketStatus(destination)
    except ValueError as e:
        raise InvalidTransitionError(destination) from e


class BoardEngine:
    """Interprets drops as status transitions.

    A transition is applied to the store immediately, then confirmed
    remotely. While the remote call is outstanding the ticket is pending and
    further drops on it are refused, so at most one update per ticket is in
    flight. Different tickets move independently.

    A failed remote update is not rolled back here: the store keeps the
    attempted status and RemoteUpdateFailedError tells the caller, who may
    call revert().
    """

    def __init__(
        self,
        store: TicketStore,
        remote: RemoteTicketApi,
        event_manager: BoardEventManager | None = None,
        project_id: str | None = None,
    ) -> None:
        """Initialize the Board Engine.

        Args:
            store: Store holding the tickets being moved.
            remote: Remote API that persists status changes.
            event_manager: Receives board events. A private one is created if omitted.
            project_id: Project scope attached to emitted events.
        """
        self.store = store
        self.remote = remote
        self.event_manager = event_manager if event_manager is not None else BoardEventManager()
        self.project_id = project_id
        self._pending: set[str] = set()

    def is_pending(self, ticket_id: str) -> bool:
        """Whether a transition for the ticket awaits remote confirmation."""
        return ticket_id in self._pending

    @property
    def pending_ids(self) -> frozenset[str]:
        """Ids of tickets with an in-flight transition."""
        return frozenset(self._pending)

    async def on_drop(self, ticket_id: str, destination: object) -> DragTransition | None:
        """Handle a ticket dropped on a column.

        Args:
            ticket_id: The dragged ticket's id.
            destination: Destination column id.

        Returns:
            The applied transition, or None when the drop was a no-op
            (unknown ticket, same column, or ticket already pending).

        Raises:
            InvalidTransitionError: If the destination is not a column. Nothing
                is changed.
            RemoteUpdateFailedError: If the remote update failed. The
                optimistic status stays in the store.
        """
        to_status = parse_column(destination)

        ticket = self.store.find(ticket_id)
        if ticket is None:
            logger.debug("Ignoring drop of unknown ticket %s", ticket_id)
            return None
        if ticket.status == to_status:
            return None
        if ticket_id in self._pending:
            logger.info("Ignoring drop of ticket %s: transition already in flight", ticket_id)
            return None

        transition = DragTransition(
            ticket_id=ticket_id,
            from_status=ticket.status,
            to_status=to_status,
        )

        self._pending.add(ticket_id)
        try:
            self.store.replace(ticket_id, {"status": to_status})
            logger.info(
                "Ticket %s moved from %s to %s (awaiting confirmation)",
                ticket_id,
                transition.from_status,
                to_status,
            )
            self.event_manager.emit_ticket_moved(
                self.project_id,
                ticket_id,
                status=to_status.value,
                previous_status=transition.from_status.value,
            )

            try:
                result = await self.remote.update_status(ticket_id, to_status)
            except Exception as e:
                reason = sanitize_for_log(str(e) or type(e).__name__)
                logger.warning(
                    "Remote update of ticket %s to %s failed: %s", ticket_id, to_status, reason
                )
                self.event_manager.emit_transition_failed(
                    self.project_id, ticket_id, attempted_status=to_status.value, reason=reason
                )
                raise RemoteUpdateFailedError(
                    ticket_id=ticket_id,
                    attempted_status=to_status,
                    previous_status=transition.from_status,
                    reason=reason,
                ) from e
        finally:
            self._pending.discard(ticket_id)

        self._commit(transition, result)
        return transition

    def _commit(self, transition: DragTransition, result: object) -> None:
        """Record a confirmed transition.

        The confirmed status is reapplied, since a reload while the update was
        in flight may have restored the old one. Of the server's record only
        the timestamp is taken.
        """
        if transition.ticket_id in self.store:
            patch: dict[str, object] = {"status": transition.to_status}
            if isinstance(result, Ticket) and result.updated_at is not None:
                patch["updated_at"] = result.updated_at
            self.store.replace(transition.ticket_id, patch)

        logger.info("Ticket %s confirmed in %s", transition.ticket_id, transition.to_status)
        self.event_manager.emit_transition_committed(
            self.project_id, transition.ticket_id, status=transition.to_status.value
        )

    def revert(self, error: RemoteUpdateFailedError) -> Ticket | None:
        """Undo the optimistic change behind a failed transition.

        Only reverts while the ticket still shows the attempted status and
        has no newer transition in flight.

        Args:
            error: The failure raised by on_drop.

        Returns:
            The reverted ticket, or None if nothing was changed.
        """
        ticket = self.store.find(error.ticket_id)
        if ticket is None or ticket.status != error.attempted_status:
            return None
        if error.ticket_id in self._pending:
            return None

        reverted = self.store.replace(error.ticket_id, {"status": error.previous_status})
        logger.info("Ticket %s reverted to %s", error.ticket_id, error.previous_status)
        self.event_manager.emit_transition_reverted(
            self.project_id, error.ticket_id, status=error.previous_status.value
        )
        return reverted
