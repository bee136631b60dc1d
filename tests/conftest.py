"""Shared pytest fixtures and configuration."""

from unittest.mock import AsyncMock

import pytest

from ticketboard.tickets import Member, Priority, Ticket, TicketStatus


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


def _make_ticket(
    ticket_id: str,
    status: TicketStatus | str = TicketStatus.OPEN,
    priority: Priority | str = Priority.MEDIUM,
    assignee_id: str | None = None,
    labels: tuple[str, ...] = (),
    title: str | None = None,
    description: str = "",
) -> Ticket:
    """Build a ticket with sensible defaults."""
    return Ticket(
        id=ticket_id,
        title=title if title is not None else f"Ticket {ticket_id}",
        description=description,
        status=status,
        priority=priority,
        assignee_id=assignee_id,
        labels=labels,
        project_id="project-1",
    )


@pytest.fixture
def members() -> list[Member]:
    """Two named members and one known only by e-mail."""
    return [
        Member(user_id="u1", email="alice@example.com", name="Alice"),
        Member(user_id="u2", email="bob@example.com", name="Bob"),
        Member(user_id="u3", email="carol@example.com"),
    ]


@pytest.fixture
def mock_remote() -> AsyncMock:
    """Remote ticket API whose update_status echoes the requested status."""
    remote = AsyncMock()

    async def update_status(ticket_id: str, status: TicketStatus) -> Ticket:
        return _make_ticket(ticket_id, status=status)

    remote.update_status.side_effect = update_status
    return remote


@pytest.fixture
def make_ticket():
    """Factory for tickets with sensible defaults."""
    return _make_ticket
