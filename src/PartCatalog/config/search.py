"""Search domain configuration: batch sizing for progressive fetching."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from PartCatalog.config.common import Section


@dataclass(frozen=True, slots=True)
class SearchSettings:
    """Batch sizing of search and load-more calls.

    Attributes:
        target_count: Matching parts wanted per call.
        chunk_size: Raw parts requested from the store per round-trip.
        max_chunks_per_call: Cap on store round-trips per call.
    """

    target_count: int = 100
    chunk_size: int = 100
    max_chunks_per_call: int = 10


def load_search(raw: Mapping[str, Any]) -> SearchSettings:
    """Load search settings; every key is optional.

    Raises:
        TypeError: If a value is not an integer.
    """
    section = Section.of(raw, "search", required=False)
    defaults = SearchSettings()
    return SearchSettings(
        **{f.name: section.get_int(f.name, getattr(defaults, f.name)) for f in fields(SearchSettings)}
    )


def check_search(config: SearchSettings) -> None:
    """Raise ValueError for any non-positive setting."""
    for f in fields(config):
        if getattr(config, f.name) <= 0:
            raise ValueError(f"search.{f.name} must be positive")
