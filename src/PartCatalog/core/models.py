from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Mapping, Sequence

# Field carrying the human-readable part name on every record.
DISPLAY_FIELD = "Name"

Record = Mapping[str, Any]
"""One catalog entry: an open bag of field name to scalar value."""

Cursor = Hashable
"""Opaque store position. ``None`` means "before the first record"."""


@dataclass(frozen=True, slots=True)
class Chunk:
    """One store round-trip worth of raw, unfiltered records.

    Attributes:
        records: Records in store order.
        end_cursor: Position just after the last record, or None when the
            chunk is empty.
    """

    records: Sequence[Record]
    end_cursor: Cursor = None

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True, slots=True)
class FetchBatch:
    """Outcome of one progressive fetch call.

    Attributes:
        records: Records that passed the client predicate.
        cursor: Store position to resume from.
        store_exhausted: True once the store reported it has nothing more.
        chunks_fetched: Number of store round-trips performed.
    """

    records: Sequence[Record]
    cursor: Cursor
    store_exhausted: bool
    chunks_fetched: int
