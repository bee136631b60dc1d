"""Unit tests for TicketStore."""

from datetime import UTC, datetime

import pytest

from ticketboard.tickets import (
    Priority,
    TicketNotFoundError,
    TicketStats,
    TicketStatus,
    TicketStore,
)


@pytest.fixture
def store(make_ticket) -> TicketStore:
    """A store holding three tickets."""
    return TicketStore(
        [
            make_ticket("1", status=TicketStatus.OPEN, labels=("bug",)),
            make_ticket("2", status=TicketStatus.IN_PROGRESS),
            make_ticket("3", status=TicketStatus.CLOSED),
        ]
    )


@pytest.mark.unit
class TestGetAll:
    """Tests for get_all."""

    def test_get_all_keeps_server_order(self, store: TicketStore) -> None:
        """Tickets come back in load order."""
        assert [t.id for t in store.get_all()] == ["1", "2", "3"]

    def test_get_all_returns_copy(self, store: TicketStore) -> None:
        """Mutating the returned list leaves the store alone."""
        tickets = store.get_all()
        tickets.clear()

        assert len(store) == 3

    def test_empty_store(self) -> None:
        """A new store holds nothing."""
        store = TicketStore()

        assert store.get_all() == []
        assert len(store) == 0


@pytest.mark.unit
class TestFind:
    """Tests for find and get."""

    def test_find_existing(self, store: TicketStore) -> None:
        """Known id returns the ticket."""
        ticket = store.find("2")

        assert ticket is not None
        assert ticket.status == TicketStatus.IN_PROGRESS

    def test_find_missing_returns_none(self, store: TicketStore) -> None:
        """Unknown id returns None."""
        assert store.find("missing") is None

    def test_get_missing_raises(self, store: TicketStore) -> None:
        """get raises TicketNotFoundError for unknown ids."""
        with pytest.raises(TicketNotFoundError) as exc_info:
            store.get("missing")

        assert exc_info.value.ticket_id == "missing"

    def test_contains(self, store: TicketStore) -> None:
        """Membership test by id."""
        assert "1" in store
        assert "missing" not in store


@pytest.mark.unit
class TestReplace:
    """Tests for replace."""

    def test_replace_merges_patch(self, store: TicketStore) -> None:
        """Only patched fields change."""
        before = store.get("1")

        updated = store.replace("1", {"status": TicketStatus.RESOLVED})

        assert updated.status == TicketStatus.RESOLVED
        assert updated.title == before.title
        assert updated.labels == before.labels
        assert store.get("1") is updated

    def test_replace_coerces_strings(self, store: TicketStore) -> None:
        """String statuses and priorities become enum members."""
        updated = store.replace("1", {"status": "CLOSED", "priority": "HIGH"})

        assert updated.status is TicketStatus.CLOSED
        assert updated.priority is Priority.HIGH

    def test_replace_keeps_position(self, store: TicketStore) -> None:
        """Replacing does not reorder the snapshot."""
        store.replace("2", {"title": "Renamed"})

        assert [t.id for t in store.get_all()] == ["1", "2", "3"]

    def test_replace_missing_raises(self, store: TicketStore) -> None:
        """Unknown id raises TicketNotFoundError."""
        with pytest.raises(TicketNotFoundError):
            store.replace("missing", {"status": TicketStatus.CLOSED})

    def test_replace_cannot_change_id(self, store: TicketStore) -> None:
        """The id is immutable."""
        with pytest.raises(ValueError, match="immutable"):
            store.replace("1", {"id": "99"})

        assert "1" in store
        assert "99" not in store

    def test_replace_unknown_field_raises(self, store: TicketStore) -> None:
        """Patches may only name ticket fields."""
        with pytest.raises(ValueError, match="Unknown ticket field"):
            store.replace("1", {"colour": "red"})

    def test_invalid_status_leaves_record_untouched(self, store: TicketStore) -> None:
        """A failing patch is not partially applied."""
        before = store.get("1")

        with pytest.raises(ValueError):
            store.replace("1", {"title": "Changed", "status": "ARCHIVED"})

        assert store.get("1") is before

    def test_replace_timestamp(self, store: TicketStore) -> None:
        """Timestamps can be patched."""
        stamp = datetime(2026, 1, 2, tzinfo=UTC)

        updated = store.replace("3", {"updated_at": stamp})

        assert updated.updated_at == stamp


@pytest.mark.unit
class TestUpsertOne:
    """Tests for upsert_one."""

    def test_upsert_new_appends(self, store: TicketStore, make_ticket) -> None:
        """A new id goes to the end."""
        store.upsert_one(make_ticket("4"))

        assert [t.id for t in store.get_all()] == ["1", "2", "3", "4"]

    def test_upsert_existing_replaces_in_place(self, store: TicketStore, make_ticket) -> None:
        """A known id is replaced where it stands."""
        store.upsert_one(make_ticket("2", title="Fresh copy"))

        assert [t.id for t in store.get_all()] == ["1", "2", "3"]
        assert store.get("2").title == "Fresh copy"


@pytest.mark.unit
class TestLoadAndRemove:
    """Tests for load and remove."""

    def test_load_replaces_snapshot(self, store: TicketStore, make_ticket) -> None:
        """Load discards previously held tickets."""
        store.load([make_ticket("9")])

        assert [t.id for t in store.get_all()] == ["9"]
        assert store.find("1") is None

    def test_load_duplicate_ids_keep_first_position(self, make_ticket) -> None:
        """A repeated id keeps its first slot and its last record."""
        store = TicketStore(
            [make_ticket("a", title="old"), make_ticket("b"), make_ticket("a", title="new")]
        )

        assert [t.id for t in store.get_all()] == ["a", "b"]
        assert store.get("a").title == "new"

    def test_remove(self, store: TicketStore) -> None:
        """Removed tickets disappear and the rest stay addressable."""
        removed = store.remove("1")

        assert removed.id == "1"
        assert [t.id for t in store.get_all()] == ["2", "3"]
        assert store.get("3").id == "3"

    def test_remove_missing_raises(self, store: TicketStore) -> None:
        """Unknown id raises TicketNotFoundError."""
        with pytest.raises(TicketNotFoundError):
            store.remove("missing")


@pytest.mark.unit
class TestStats:
    """Tests for stats."""

    def test_stats_counts_per_status(self, store: TicketStore) -> None:
        """Each status is counted."""
        assert store.stats() == TicketStats(
            total=3, open=1, in_progress=1, resolved=0, closed=1
        )

    def test_stats_empty(self) -> None:
        """Empty store has zero counts."""
        assert TicketStore().stats() == TicketStats()
