"""Pydantic models for events delivered by the host UI."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ticketboard.tickets import Priority, TicketStatus


class DropEvent(BaseModel):
    """A finished drag: which card, dropped over which target.

    over_target_id is a column id, the id of a card the ticket was dropped
    on, or None when released outside any target.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    dragged_id: str = Field(..., min_length=1, alias="draggedId")
    over_target_id: str | None = Field(default=None, alias="overTargetId")


class FilterChangeEvent(BaseModel):
    """A partial change to the filter criteria.

    Omitted fields are left as they are. clear_all is applied first, then
    the replacement fields, then the single-value toggles.
    """

    model_config = ConfigDict(extra="forbid")

    clear_all: bool = False

    status_filter: TicketStatus | Literal["all"] | None = None
    search_term: str | None = None
    label_search_term: str | None = None
    selected_labels: list[str] | None = None
    selected_priorities: list[Priority] | None = None
    selected_assignees: list[str] | None = None

    toggle_label: str | None = None
    add_label: str | None = None
    toggle_priority: Priority | None = None
    toggle_assignee: str | None = None
