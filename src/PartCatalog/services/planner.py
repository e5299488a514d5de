"""Query planning: split a part-type config into store and client work."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from PartCatalog.core.match import casefold_contains, contains_any, normalize_text
from PartCatalog.core.models import DISPLAY_FIELD, Record
from PartCatalog.core.query import SearchConfig, ServerFilter

ClientPredicate = Callable[[Record], bool]


@dataclass(frozen=True, slots=True)
class ServerConstraints:
    """Filters and ordering submitted to the record store.

    Attributes:
        filters: Server filters, combined with AND.
        order_by: Field the store sorts by (ascending). Stores break ties
            on record id so the order is total.
    """

    filters: Sequence[ServerFilter]
    order_by: str = DISPLAY_FIELD

    @property
    def fields(self) -> tuple[str, ...]:
        """Distinct fields referenced by filters and ordering, in order."""
        seen: dict[str, None] = {}
        for server_filter in self.filters:
            seen.setdefault(server_filter.field, None)
        seen.setdefault(self.order_by, None)
        return tuple(seen)


def plan(config: SearchConfig, term: str) -> tuple[ServerConstraints, ClientPredicate]:
    """Plan a search for one part type and free-text term.

    Args:
        config: Part-type query shape.
        term: Free-text name filter; blank matches everything.

    Returns:
        Tuple of (store constraints, client-side predicate).
    """
    return build_server_constraints(config), build_client_predicate(config, term)


def build_server_constraints(config: SearchConfig) -> ServerConstraints:
    """Translate server filters and pick a pagination-safe sort field.

    A range-filtered field must also be the sort key, so the first range
    filter decides the order; otherwise records are ordered by name.
    """
    filters = tuple(config.server_filters)
    range_filter = next((f for f in filters if f.is_range), None)
    order_by = range_filter.field if range_filter else DISPLAY_FIELD
    return ServerConstraints(filters=filters, order_by=order_by)


def build_client_predicate(config: SearchConfig, term: str) -> ClientPredicate:
    """Build the record predicate the store cannot evaluate itself."""
    needle = normalize_text(term)
    keywords = tuple(normalize_text(value) for value in config.client_filter_values)
    keyword_field = config.client_filter_field if config.has_client_filter else None

    def _predicate(record: Record) -> bool:
        if needle and not casefold_contains(record.get(DISPLAY_FIELD), needle):
            return False
        if keyword_field is None:
            return True
        return contains_any(record.get(keyword_field), keywords)

    return _predicate
