"""Filter Engine - Multi-facet ticket filtering for the board."""

from ticketboard.filters.engine import FilterEngine
from ticketboard.filters.facets import DEFAULT_FACETS, Facet
from ticketboard.filters.models import (
    ALL_STATUSES,
    UNASSIGNED,
    FilterCriteria,
    FilterSummary,
)

__all__ = [
    "ALL_STATUSES",
    "DEFAULT_FACETS",
    "UNASSIGNED",
    "Facet",
    "FilterCriteria",
    "FilterEngine",
    "FilterSummary",
]
