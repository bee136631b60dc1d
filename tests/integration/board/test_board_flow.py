"""Integration tests: session, filters, engine and projector together."""

import asyncio
import dataclasses
from datetime import UTC, datetime

import pytest

from ticketboard.board import EventType, RemoteUpdateFailedError
from ticketboard.filters import UNASSIGNED
from ticketboard.session import BoardSession
from ticketboard.tickets import Member, Ticket, TicketStatus


class InMemoryTicketApi:
    """Remote ticket API double backed by a dict, with controllable latency."""

    def __init__(self, tickets: list[Ticket]) -> None:
        self.tickets = {t.id: t for t in tickets}
        self.calls: list[tuple[str, TicketStatus]] = []
        self.fail_ids: set[str] = set()
        self.release = asyncio.Event()
        self.release.set()

    async def list_tickets(self, project_id: str) -> list[Ticket]:
        return [t for t in self.tickets.values() if t.project_id == project_id]

    async def update_status(self, ticket_id: str, status: TicketStatus) -> Ticket:
        self.calls.append((ticket_id, status))
        await self.release.wait()
        if ticket_id in self.fail_ids:
            raise ConnectionError("Failed to update ticket.")
        updated = dataclasses.replace(
            self.tickets[ticket_id], status=status, updated_at=datetime.now(UTC)
        )
        self.tickets[ticket_id] = updated
        return updated


class InMemoryDirectory:
    """Member directory double."""

    def __init__(self, members: list[Member]) -> None:
        self.members = members

    async def list_members(self, project_id: str) -> list[Member]:
        return list(self.members)


@pytest.fixture
def api(make_ticket) -> InMemoryTicketApi:
    return InMemoryTicketApi(
        [
            make_ticket("1", status="OPEN", priority="HIGH"),
            make_ticket("2", status="IN_PROGRESS", priority="HIGH", assignee_id="u1"),
            make_ticket("3", status="OPEN", priority="LOW"),
        ]
    )


@pytest.fixture
def session(api: InMemoryTicketApi, members: list[Member]) -> BoardSession:
    return BoardSession(project_id="project-1", remote=api, directory=InMemoryDirectory(members))


def _column_ids(session: BoardSession) -> dict[str, list[str]]:
    return {c.id: [t.id for t in ts] for c, ts in session.visible_columns().items()}


@pytest.mark.integration
class TestBoardFlow:
    """End-to-end board behaviour."""

    @pytest.mark.asyncio
    async def test_drag_updates_columns_before_confirmation(
        self, session: BoardSession, api: InMemoryTicketApi
    ) -> None:
        """The card shows in its new column while the update is in flight."""
        await session.refresh()
        api.release.clear()

        task = asyncio.create_task(session.on_drop({"dragged_id": "1", "over_target_id": "IN_PROGRESS"}))
        for _ in range(5):
            await asyncio.sleep(0)

        assert _column_ids(session) == {
            "OPEN": ["3"],
            "IN_PROGRESS": ["1", "2"],
            "RESOLVED": [],
            "CLOSED": [],
        }
        assert session.is_pending("1")

        api.release.set()
        await task

        assert not session.is_pending("1")
        assert api.tickets["1"].status == TicketStatus.IN_PROGRESS
        assert session.store.get("1").updated_at == api.tickets["1"].updated_at

    @pytest.mark.asyncio
    async def test_filtered_board_and_failed_move(
        self, session: BoardSession, api: InMemoryTicketApi
    ) -> None:
        """Filters shape the columns; a failed move is reported and kept."""
        await session.refresh()
        subscriber = session.event_manager.subscribe(project_id="project-1")
        session.on_filter_change({"selected_priorities": ["HIGH"], "selected_assignees": [UNASSIGNED]})

        assert _column_ids(session)["OPEN"] == ["1"]
        assert _column_ids(session)["IN_PROGRESS"] == []

        api.fail_ids.add("1")
        with pytest.raises(RemoteUpdateFailedError) as exc_info:
            await session.on_drop({"dragged_id": "1", "over_target_id": "CLOSED"})

        assert exc_info.value.previous_status == TicketStatus.OPEN
        assert _column_ids(session)["CLOSED"] == ["1"]
        assert api.tickets["1"].status == TicketStatus.OPEN

        received = []
        while not subscriber.queue.empty():
            received.append(subscriber.queue.get_nowait().event_type)
        assert received == [
            EventType.FILTERS_CHANGED,
            EventType.TICKET_MOVED,
            EventType.TRANSITION_FAILED,
        ]

    @pytest.mark.asyncio
    async def test_repeated_drops_make_one_call(
        self, session: BoardSession, api: InMemoryTicketApi
    ) -> None:
        """Drops on a pending card are refused."""
        await session.refresh()
        api.release.clear()

        first = asyncio.create_task(session.on_drop({"dragged_id": "3", "over_target_id": "RESOLVED"}))
        for _ in range(5):
            await asyncio.sleep(0)
        second = await session.on_drop({"dragged_id": "3", "over_target_id": "CLOSED"})

        api.release.set()
        await first

        assert second is None
        assert api.calls == [("3", TicketStatus.RESOLVED)]
        assert session.store.get("3").status == TicketStatus.RESOLVED
