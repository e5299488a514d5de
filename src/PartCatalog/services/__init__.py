"""Search service layer for PartCatalog.

Query planning, progressive fetching and the stateful search session,
plus the factory that wires them to a record store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PartCatalog.services.fetch import ProgressiveFetcher, RecordStore
from PartCatalog.services.planner import ServerConstraints, plan
from PartCatalog.services.session import SearchSession, validate_part_type

if TYPE_CHECKING:
    from PartCatalog.config import AppConfig


def create_search_session(config: AppConfig, store: RecordStore) -> SearchSession:
    """Create a search session over ``store`` using the search settings.

    Args:
        config: Application configuration containing search settings.
        store: Record store to page through.

    Returns:
        A fresh SearchSession.
    """
    fetcher = ProgressiveFetcher(
        store=store,
        chunk_size=config.search.chunk_size,
        max_chunks_per_call=config.search.max_chunks_per_call,
    )
    return SearchSession(fetcher, target_count=config.search.target_count)


__all__ = [
    "ProgressiveFetcher",
    "RecordStore",
    "SearchSession",
    "ServerConstraints",
    "create_search_session",
    "plan",
    "validate_part_type",
]
