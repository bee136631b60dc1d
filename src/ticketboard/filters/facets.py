"""Filter facets - one independent predicate per filter dimension.

A ticket is visible only if it satisfies every active facet. Each facet
knows when it is active and how to match a single ticket.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ticketboard.filters.models import ALL_STATUSES, UNASSIGNED, FilterCriteria

if TYPE_CHECKING:
    from ticketboard.tickets import Ticket

# user_id -> display name, built once per evaluation
AssigneeNames = Mapping[str, str]


@dataclass(frozen=True)
class Facet:
    """A named filter dimension."""

    name: str
    is_active: Callable[[FilterCriteria], bool]
    matches: Callable[[Ticket, FilterCriteria, AssigneeNames], bool]


def status_matches(ticket: Ticket, criteria: FilterCriteria, names: AssigneeNames) -> bool:
    return ticket.status == criteria.status_filter


def text_matches(ticket: Ticket, criteria: FilterCriteria, names: AssigneeNames) -> bool:
    term = criteria.search_term.lower()
    return term in ticket.title.lower() or term in ticket.description.lower()


def label_matches(ticket: Ticket, criteria: FilterCriteria, names: AssigneeNames) -> bool:
    return any(label in criteria.selected_labels for label in ticket.labels)


def priority_matches(ticket: Ticket, criteria: FilterCriteria, names: AssigneeNames) -> bool:
    return ticket.priority in criteria.selected_priorities


def assignee_matches(ticket: Ticket, criteria: FilterCriteria, names: AssigneeNames) -> bool:
    """Match the assignee facet.

    Unassigned tickets match only when "unassigned" is selected. Assigned
    tickets match when their resolved display name is selected; an assignee
    that resolves to no known member never matches. Selecting both
    "unassigned" and names yields the union of the two branches.
    """
    if not ticket.is_assigned:
        return UNASSIGNED in criteria.selected_assignees
    name = names.get(ticket.assignee_id)
    if name is None:
        return False
    return name in criteria.selected_assignees


STATUS = Facet(
    name="status",
    is_active=lambda c: c.status_filter != ALL_STATUSES,
    matches=status_matches,
)
TEXT = Facet(name="text", is_active=lambda c: bool(c.search_term), matches=text_matches)
LABEL = Facet(name="label", is_active=lambda c: bool(c.selected_labels), matches=label_matches)
PRIORITY = Facet(
    name="priority",
    is_active=lambda c: bool(c.selected_priorities),
    matches=priority_matches,
)
ASSIGNEE = Facet(
    name="assignee",
    is_active=lambda c: bool(c.selected_assignees),
    matches=assignee_matches,
)

DEFAULT_FACETS: tuple[Facet, ...] = (STATUS, TEXT, LABEL, PRIORITY, ASSIGNEE)
