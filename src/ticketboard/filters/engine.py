"""FilterEngine - Computes the visible ticket subset for a set of criteria."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ticketboard.filters.facets import DEFAULT_FACETS, Facet
from ticketboard.filters.models import FilterCriteria, FilterSummary

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ticketboard.tickets import Member, Ticket

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_LIMIT = 10


class FilterEngine:
    """Read-only evaluation of filter criteria over a ticket snapshot.

    Nothing is cached: each call evaluates the current tickets afresh.
    Output keeps the input order.
    """

    def __init__(self, facets: Sequence[Facet] = DEFAULT_FACETS) -> None:
        """Initialize the engine.

        Args:
            facets: Facets to compose by conjunction.
        """
        self.facets = tuple(facets)

    def active_facets(self, criteria: FilterCriteria) -> list[Facet]:
        """Facets that constrain the result for these criteria."""
        return [facet for facet in self.facets if facet.is_active(criteria)]

    def apply(
        self,
        tickets: Iterable[Ticket],
        members: Iterable[Member],
        criteria: FilterCriteria,
    ) -> list[Ticket]:
        """Filter tickets.

        Args:
            tickets: Tickets in display order.
            members: Project members, for assignee name resolution.
            criteria: Current filter criteria.

        Returns:
            Tickets matching every active facet, in input order.
        """
        active = self.active_facets(criteria)
        if not active:
            return list(tickets)

        names = {member.user_id: member.display_name for member in members}
        visible = [
            ticket
            for ticket in tickets
            if all(facet.matches(ticket, criteria, names) for facet in active)
        ]
        logger.debug(
            "Filtered to %d ticket(s) with facets: %s",
            len(visible),
            ", ".join(facet.name for facet in active),
        )
        return visible

    @staticmethod
    def ordered_labels(tickets: Iterable[Ticket]) -> list[str]:
        """All labels in first-seen order, without duplicates."""
        return list(dict.fromkeys(label for ticket in tickets for label in ticket.labels))

    def distinct_labels(self, tickets: Iterable[Ticket]) -> set[str]:
        """Union of every ticket's labels."""
        return set(self.ordered_labels(tickets))

    @staticmethod
    def has_unassigned(tickets: Iterable[Ticket]) -> bool:
        """Whether any ticket has no assignee."""
        return any(not ticket.is_assigned for ticket in tickets)

    def suggest_labels(
        self,
        tickets: Iterable[Ticket],
        criteria: FilterCriteria,
        limit: int = DEFAULT_SUGGESTION_LIMIT,
    ) -> list[str]:
        """Labels to offer while the user types into the label box.

        Args:
            tickets: Tickets whose labels are candidates.
            criteria: Supplies the typed term and current selection.
            limit: Maximum number of suggestions.

        Returns:
            Unselected labels containing the term case-insensitively, in
            first-seen order. Empty while the term is blank.
        """
        term = criteria.label_search_term.strip().lower()
        if not term:
            return []
        matches = [
            label
            for label in self.ordered_labels(tickets)
            if term in label.lower() and label not in criteria.selected_labels
        ]
        return matches[:limit]

    @staticmethod
    def assignee_options(members: Iterable[Member]) -> list[str]:
        """Distinct member display names in directory order."""
        return list(dict.fromkeys(member.display_name for member in members))

    @staticmethod
    def summarize(tickets: Sequence[Ticket], visible: Sequence[Ticket]) -> FilterSummary:
        """Shown-of-total counts for a filtered result."""
        return FilterSummary(shown=len(visible), total=len(tickets))
