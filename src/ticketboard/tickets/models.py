"""Data models for the Ticket Store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class TicketStatus(StrEnum):
    """Workflow status of a ticket. Also the identifier of its board column."""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"


class Priority(StrEnum):
    """Ticket priority."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class MemberRole(StrEnum):
    """Role of a member within a project."""

    MEMBER = "MEMBER"
    OWNER = "OWNER"


def _dedupe_labels(labels: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    result = []
    for label in labels:
        if label not in seen:
            seen.add(label)
            result.append(label)
    return tuple(result)


@dataclass(frozen=True)
class Ticket:
    """A ticket record as held by the store.

    Records are immutable; the store swaps whole records on every update so
    readers never observe a half-applied patch.
    """

    id: str
    title: str
    description: str = ""
    status: TicketStatus = TicketStatus.OPEN
    priority: Priority = Priority.MEDIUM
    assignee_id: str | None = None
    labels: tuple[str, ...] = field(default_factory=tuple)
    project_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        # Coerce plain strings coming from the API; unknown values raise ValueError
        object.__setattr__(self, "status", TicketStatus(self.status))
        object.__setattr__(self, "priority", Priority(self.priority))
        object.__setattr__(self, "labels", _dedupe_labels(self.labels))
        if self.assignee_id == "":
            object.__setattr__(self, "assignee_id", None)

    @property
    def is_assigned(self) -> bool:
        """Whether the ticket references an assignee."""
        return self.assignee_id is not None


@dataclass(frozen=True)
class Member:
    """A project member, used to resolve assignee display names."""

    user_id: str
    email: str
    name: str | None = None
    role: MemberRole = MemberRole.MEMBER

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", MemberRole(self.role))

    @property
    def display_name(self) -> str:
        """Member name, falling back to e-mail."""
        return self.name or self.email


@dataclass
class TicketStats:
    """Per-status ticket counts for a project.

    Attributes:
        total: Number of tickets held.
        open: Tickets in OPEN.
        in_progress: Tickets in IN_PROGRESS.
        resolved: Tickets in RESOLVED.
        closed: Tickets in CLOSED.
    """

    total: int = 0
    open: int = 0
    in_progress: int = 0
    resolved: int = 0
    closed: int = 0
