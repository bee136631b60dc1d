"""BoardSession - Event-facing surface of the board core for one project."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from ticketboard.board import (
    COLUMN_IDS,
    BoardEngine,
    BoardEventManager,
    RemoteUpdateFailedError,
    project_columns,
)
from ticketboard.config import TicketboardConfig
from ticketboard.filters import FilterCriteria, FilterEngine
from ticketboard.session.models import DropEvent, FilterChangeEvent
from ticketboard.tickets import TicketStore

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ticketboard.board import Column, DragTransition
    from ticketboard.filters import FilterSummary
    from ticketboard.protocols import MemberDirectory, RemoteTicketApi
    from ticketboard.tickets import Member, Ticket, TicketStats

logger = logging.getLogger(__name__)

_REPLACEMENT_FIELDS = (
    "status_filter",
    "search_term",
    "label_search_term",
    "selected_labels",
    "selected_priorities",
    "selected_assignees",
)


class BoardSession:
    """Wires store, filter engine, board engine and projector for a project.

    Entry points are on_drop and on_filter_change; everything else is a
    read of the current snapshot.
    """

    def __init__(
        self,
        project_id: str,
        remote: RemoteTicketApi,
        directory: MemberDirectory,
        config: TicketboardConfig | None = None,
        event_manager: BoardEventManager | None = None,
        filter_engine: FilterEngine | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            project_id: The project whose board this is.
            remote: Remote ticket API.
            directory: Member directory.
            config: Settings; defaults apply if omitted.
            event_manager: Receives board events.
            filter_engine: Filter engine to use.
        """
        self.project_id = project_id
        self.remote = remote
        self.directory = directory
        self.config = config if config is not None else TicketboardConfig()
        self.event_manager = event_manager if event_manager is not None else BoardEventManager()
        self.filter_engine = filter_engine if filter_engine is not None else FilterEngine()

        self.store = TicketStore()
        self.members: list[Member] = []
        self.criteria = FilterCriteria()
        self.engine = BoardEngine(
            store=self.store,
            remote=remote,
            event_manager=self.event_manager,
            project_id=project_id,
        )

    # --- Loading ---

    def load(self, tickets: Iterable[Ticket], members: Iterable[Member]) -> None:
        """Replace the ticket snapshot and member list."""
        self.store.load(tickets)
        self.members = list(members)
        logger.info(
            "Loaded %d ticket(s) and %d member(s) for project %s",
            len(self.store),
            len(self.members),
            self.project_id,
        )
        self.event_manager.emit_tickets_loaded(self.project_id, len(self.store))

    async def refresh(self) -> None:
        """Fetch tickets and members from the collaborators and load them.

        Both fetches run concurrently; if either fails the other is cancelled
        and the snapshot is left as it was.

        Raises:
            ExceptionGroup: Wrapping the collaborator failure(s).
        """
        async with asyncio.TaskGroup() as tg:
            tickets_task = tg.create_task(self.remote.list_tickets(self.project_id))
            members_task = tg.create_task(self.directory.list_members(self.project_id))
        self.load(tickets_task.result(), members_task.result())

    # --- Entry points ---

    def resolve_target(self, over_target_id: str | None) -> str | None:
        """Turn a drop target into a destination column id.

        A card target resolves to the column that card is in. Unknown targets
        are passed through for the engine to reject.
        """
        if over_target_id is None or over_target_id in COLUMN_IDS:
            return over_target_id
        target = self.store.find(over_target_id)
        if target is not None:
            return target.status.value
        return over_target_id

    async def on_drop(self, event: DropEvent | dict[str, Any]) -> DragTransition | None:
        """Handle a finished drag.

        Args:
            event: The drop, as a DropEvent or its dict form.

        Returns:
            The applied transition, or None for a no-op.

        Raises:
            pydantic.ValidationError: If the event payload is malformed.
            InvalidTransitionError: If the target is neither a column nor a card.
            RemoteUpdateFailedError: If the remote update failed. The move is
                reverted first when board.revert_on_failure is set.
        """
        if not isinstance(event, DropEvent):
            event = DropEvent.model_validate(event)

        destination = self.resolve_target(event.over_target_id)
        if destination is None:
            return None

        try:
            return await self.engine.on_drop(event.dragged_id, destination)
        except RemoteUpdateFailedError as e:
            if self.config.board.revert_on_failure:
                self.engine.revert(e)
            raise

    def on_filter_change(self, event: FilterChangeEvent | dict[str, Any]) -> FilterSummary:
        """Apply a filter change.

        Args:
            event: The change, as a FilterChangeEvent or its dict form.

        Returns:
            Shown-of-total counts under the new criteria.

        Raises:
            pydantic.ValidationError: If the event payload is malformed.
        """
        if not isinstance(event, FilterChangeEvent):
            event = FilterChangeEvent.model_validate(event)

        if event.clear_all:
            self.criteria.clear()

        changes = event.model_dump(include=set(_REPLACEMENT_FIELDS), exclude_none=True)
        if changes:
            merged = {**vars(self.criteria), **changes}
            self.criteria = FilterCriteria(**merged)

        if event.toggle_label is not None:
            self.criteria.toggle_label(event.toggle_label)
        if event.add_label is not None:
            self.criteria.add_label(event.add_label)
        if event.toggle_priority is not None:
            self.criteria.toggle_priority(event.toggle_priority)
        if event.toggle_assignee is not None:
            self.criteria.toggle_assignee(event.toggle_assignee)

        summary = self.summary()
        self.event_manager.emit_filters_changed(self.project_id, summary.shown, summary.total)
        return summary

    def clear_filters(self) -> FilterSummary:
        """Reset every filter facet."""
        return self.on_filter_change(FilterChangeEvent(clear_all=True))

    # --- Queries ---

    def visible_tickets(self) -> list[Ticket]:
        """Tickets passing the current criteria, in store order."""
        return self.filter_engine.apply(self.store.get_all(), self.members, self.criteria)

    def visible_columns(self) -> dict[Column, list[Ticket]]:
        """Visible tickets grouped into the fixed columns."""
        return project_columns(self.visible_tickets())

    def distinct_labels(self) -> set[str]:
        """Every label used by a ticket in the project."""
        return self.filter_engine.distinct_labels(self.store.get_all())

    def has_unassigned(self) -> bool:
        """Whether any ticket in the project is unassigned."""
        return self.filter_engine.has_unassigned(self.store.get_all())

    def label_suggestions(self) -> list[str]:
        """Labels matching the label search box."""
        return self.filter_engine.suggest_labels(
            self.store.get_all(),
            self.criteria,
            limit=self.config.board.label_suggestion_limit,
        )

    def assignee_options(self) -> list[str]:
        """Member display names selectable in the assignee facet."""
        return self.filter_engine.assignee_options(self.members)

    def summary(self) -> FilterSummary:
        """Shown-of-total counts under the current criteria."""
        tickets = self.store.get_all()
        visible = self.filter_engine.apply(tickets, self.members, self.criteria)
        return self.filter_engine.summarize(tickets, visible)

    def stats(self) -> TicketStats:
        """Per-status counts over all tickets, ignoring filters."""
        return self.store.stats()

    def is_pending(self, ticket_id: str) -> bool:
        """Whether the ticket has a transition in flight."""
        return self.engine.is_pending(ticket_id)
