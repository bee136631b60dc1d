"""Data models for the Filter Engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from ticketboard.tickets import Priority, TicketStatus

ALL_STATUSES = "all"
UNASSIGNED = "unassigned"

StatusFilter = TicketStatus | Literal["all"]


def _toggle(values: list, value: object) -> None:
    if value in values:
        values.remove(value)
    else:
        values.append(value)


@dataclass
class FilterCriteria:
    """Transient filter state for the board.

    Selections keep the order in which they were made so they can be shown
    back as chips; only membership matters for filtering.

    Attributes:
        status_filter: A single status, or "all".
        search_term: Matched case-insensitively against title and description.
        selected_labels: Labels of which a ticket needs at least one.
        selected_priorities: Priorities a ticket must be one of.
        selected_assignees: Member display names and/or "unassigned".
        label_search_term: Narrows label suggestions; does not filter tickets.
    """

    status_filter: StatusFilter = ALL_STATUSES
    search_term: str = ""
    selected_labels: list[str] = field(default_factory=list)
    selected_priorities: list[Priority] = field(default_factory=list)
    selected_assignees: list[str] = field(default_factory=list)
    label_search_term: str = ""

    def __post_init__(self) -> None:
        if self.status_filter != ALL_STATUSES:
            self.status_filter = TicketStatus(self.status_filter)
        self.selected_labels = list(dict.fromkeys(self.selected_labels))
        self.selected_priorities = list(dict.fromkeys(Priority(p) for p in self.selected_priorities))
        self.selected_assignees = list(dict.fromkeys(self.selected_assignees))

    @property
    def has_active_filters(self) -> bool:
        """Whether anything differs from the cleared state."""
        return bool(
            self.search_term
            or self.label_search_term
            or self.selected_labels
            or self.selected_priorities
            or self.selected_assignees
            or self.status_filter != ALL_STATUSES
        )

    def toggle_label(self, label: str) -> None:
        """Select the label, or deselect it if already selected."""
        _toggle(self.selected_labels, label)

    def add_label(self, label: str) -> bool:
        """Select a typed-in label.

        Args:
            label: Raw label text; surrounding whitespace is dropped.

        Returns:
            True if the label was added.
        """
        label = label.strip()
        if not label or label in self.selected_labels:
            return False
        self.selected_labels.append(label)
        self.label_search_term = ""
        return True

    def toggle_priority(self, priority: Priority | str) -> None:
        """Select the priority, or deselect it if already selected."""
        _toggle(self.selected_priorities, Priority(priority))

    def toggle_assignee(self, assignee: str) -> None:
        """Select a member display name or "unassigned", or deselect it."""
        _toggle(self.selected_assignees, assignee)

    def clear(self) -> None:
        """Reset every facet (clear-all)."""
        self.status_filter = ALL_STATUSES
        self.search_term = ""
        self.label_search_term = ""
        self.selected_labels.clear()
        self.selected_priorities.clear()
        self.selected_assignees.clear()


@dataclass
class FilterSummary:
    """How many tickets a filter shows out of the project total."""

    shown: int
    total: int
