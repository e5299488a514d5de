"""Progressive fetching of client-filtered records from a record store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from PartCatalog.core.models import Chunk, Cursor, FetchBatch, Record
from PartCatalog.utils.log import log

if TYPE_CHECKING:
    from PartCatalog.services.planner import ClientPredicate, ServerConstraints


class RecordStore(Protocol):
    """Protocol for a queryable, ordered catalog store."""

    def fetch_chunk(
        self,
        constraints: ServerConstraints,
        *,
        after: Cursor,
        limit: int,
    ) -> Chunk:
        """Return up to ``limit`` records strictly after ``after``, in order."""
        raise NotImplementedError


@dataclass(slots=True)
class ProgressiveFetcher:
    """Pull store chunks until enough records pass the client predicate.

    The client predicate cannot be pushed down, so the number of raw
    records needed for ``target_count`` matches is unknown up front.
    ``max_chunks_per_call`` bounds the store work of a single call; a call
    that hits it returns a partial batch with ``store_exhausted=False`` so
    the caller can continue from the returned cursor.
    """

    store: RecordStore
    chunk_size: int = 100
    max_chunks_per_call: int = 10

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if self.max_chunks_per_call <= 0:
            raise ValueError("max_chunks_per_call must be positive")

    def fetch_batch(
        self,
        constraints: ServerConstraints,
        predicate: ClientPredicate,
        *,
        cursor: Cursor = None,
        target_count: int = 100,
    ) -> FetchBatch:
        """Collect up to ``target_count`` matching records after ``cursor``.

        Chunks are requested strictly one after another: each request is
        built from the cursor left by the previous chunk.

        Args:
            constraints: Store-side filters and ordering.
            predicate: Client-side record filter.
            cursor: Store position to start after; None starts at the top.
            target_count: Desired number of post-filter matches.

        Returns:
            The matches, the advanced cursor, and whether the store ran dry.

        Raises:
            Exception: Propagates the first store failure; no partial batch
                is returned.
        """
        accumulated: list[Record] = []
        chunks_fetched = 0
        exhausted = False

        while (
            len(accumulated) < target_count
            and not exhausted
            and chunks_fetched < self.max_chunks_per_call
        ):
            chunk = self.store.fetch_chunk(constraints, after=cursor, limit=self.chunk_size)
            if not chunk.records:
                exhausted = True
                log.debug("Store returned an empty chunk after cursor=%r", cursor)
                break

            # The cursor follows store position, not filtered position.
            cursor = chunk.end_cursor
            if len(chunk) < self.chunk_size:
                exhausted = True

            matched = 0
            for record in chunk.records:
                if predicate(record):
                    accumulated.append(record)
                    matched += 1
                    if len(accumulated) >= target_count:
                        break

            chunks_fetched += 1
            log.debug(
                "Fetched chunk %d: size=%d matched=%d total=%d exhausted=%s",
                chunks_fetched,
                len(chunk),
                matched,
                len(accumulated),
                exhausted,
            )

        if not exhausted and len(accumulated) < target_count:
            log.debug(
                "Chunk cap reached: chunks=%d matches=%d/%d",
                chunks_fetched,
                len(accumulated),
                target_count,
            )

        return FetchBatch(
            records=tuple(accumulated),
            cursor=cursor,
            store_exhausted=exhausted,
            chunks_fetched=chunks_fetched,
        )
