"""Event manager for board change notifications."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import uuid4


class EventType(str, Enum):
    """Types of events that can be emitted."""

    TICKETS_LOADED = "tickets_loaded"
    FILTERS_CHANGED = "filters_changed"
    TICKET_MOVED = "ticket_moved"
    TRANSITION_COMMITTED = "transition_committed"
    TRANSITION_FAILED = "transition_failed"
    TRANSITION_REVERTED = "transition_reverted"


@dataclass
class Event:
    """A board event."""

    event_type: EventType
    data: dict[str, Any]
    project_id: str | None = None


@dataclass
class Subscriber:
    """A subscriber to board events."""

    id: str
    queue: asyncio.Queue[Event]
    project_id: str | None = None  # None means every project

    @classmethod
    def create(cls, project_id: str | None = None) -> Subscriber:
        """Create a new subscriber."""
        return cls(id=str(uuid4()), queue=asyncio.Queue(), project_id=project_id)


@dataclass
class BoardEventManager:
    """Fan-out of board events to subscribers."""

    _subscribers: dict[str, Subscriber] = field(default_factory=dict)

    def subscribe(self, project_id: str | None = None) -> Subscriber:
        """Subscribe to events.

        Args:
            project_id: Optional project ID to filter events. None means all projects.

        Returns:
            Subscriber instance for receiving events.
        """
        subscriber = Subscriber.create(project_id)
        self._subscribers[subscriber.id] = subscriber
        return subscriber

    def unsubscribe(self, subscriber_id: str) -> None:
        """Remove a subscriber. Unknown ids are ignored."""
        self._subscribers.pop(subscriber_id, None)

    def _matching(self, event: Event) -> list[Subscriber]:
        return [
            subscriber
            for subscriber in self._subscribers.values()
            if subscriber.project_id is None or subscriber.project_id == event.project_id
        ]

    async def emit(self, event: Event) -> None:
        """Emit an event to all matching subscribers."""
        for subscriber in self._matching(event):
            await subscriber.queue.put(event)

    def emit_sync(self, event: Event) -> None:
        """Emit an event without awaiting (queues are unbounded)."""
        for subscriber in self._matching(event):
            subscriber.queue.put_nowait(event)

    @property
    def subscriber_count(self) -> int:
        """Get the number of active subscribers."""
        return len(self._subscribers)

    # Convenience emitters

    def emit_tickets_loaded(self, project_id: str | None, count: int) -> None:
        """Emit a tickets_loaded event."""
        self.emit_sync(
            Event(
                event_type=EventType.TICKETS_LOADED,
                project_id=project_id,
                data={"count": count},
            )
        )

    def emit_filters_changed(self, project_id: str | None, shown: int, total: int) -> None:
        """Emit a filters_changed event."""
        self.emit_sync(
            Event(
                event_type=EventType.FILTERS_CHANGED,
                project_id=project_id,
                data={"shown": shown, "total": total},
            )
        )

    def emit_ticket_moved(
        self,
        project_id: str | None,
        ticket_id: str,
        status: str,
        previous_status: str,
    ) -> None:
        """Emit a ticket_moved event (optimistic change applied)."""
        self.emit_sync(
            Event(
                event_type=EventType.TICKET_MOVED,
                project_id=project_id,
                data={
                    "ticket_id": ticket_id,
                    "status": status,
                    "previous_status": previous_status,
                },
            )
        )

    def emit_transition_committed(self, project_id: str | None, ticket_id: str, status: str) -> None:
        """Emit a transition_committed event."""
        self.emit_sync(
            Event(
                event_type=EventType.TRANSITION_COMMITTED,
                project_id=project_id,
                data={"ticket_id": ticket_id, "status": status},
            )
        )

    def emit_transition_failed(
        self,
        project_id: str | None,
        ticket_id: str,
        attempted_status: str,
        reason: str,
    ) -> None:
        """Emit a transition_failed event."""
        self.emit_sync(
            Event(
                event_type=EventType.TRANSITION_FAILED,
                project_id=project_id,
                data={
                    "ticket_id": ticket_id,
                    "attempted_status": attempted_status,
                    "reason": reason,
                },
            )
        )

    def emit_transition_reverted(self, project_id: str | None, ticket_id: str, status: str) -> None:
        """Emit a transition_reverted event."""
        self.emit_sync(
            Event(
                event_type=EventType.TRANSITION_REVERTED,
                project_id=project_id,
                data={"ticket_id": ticket_id, "status": status},
            )
        )
