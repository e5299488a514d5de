"""Stateful search session: fresh searches and "load more" continuations."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Mapping, Sequence

from PartCatalog.core.errors import IndexRequiredError
from PartCatalog.core.models import Cursor, Record
from PartCatalog.services.planner import ClientPredicate, ServerConstraints, plan
from PartCatalog.utils.log import log

if TYPE_CHECKING:
    from PartCatalog.core.query import SearchConfig
    from PartCatalog.services.fetch import ProgressiveFetcher

GENERIC_ERROR_MESSAGE = "Error occurred during search."
INDEX_ERROR_MESSAGE = (
    "A database index is required for this query. Run 'partcatalog index' to create it."
)
MISSING_PART_TYPE_MESSAGE = "Please select a part type."
UNKNOWN_PART_TYPE_MESSAGE = "No data available for this part type."


def validate_part_type(key: str | None, part_types: Mapping[str, SearchConfig]) -> str | None:
    """Check a part-type key before searching.

    Args:
        key: Selected part-type key.
        part_types: Configured part-type search configs.

    Returns:
        A user-facing validation message, or None when the key is usable.
    """
    if not key or not key.strip():
        return MISSING_PART_TYPE_MESSAGE
    if key not in part_types:
        return UNKNOWN_PART_TYPE_MESSAGE
    return None


class SearchSession:
    """Accumulated results of one search plus its continuation state.

    ``search`` starts over from the top of the store; ``load_more``
    continues after the last store position and appends. While a call is
    in flight every other call is ignored, so the cursor is only ever
    advanced by one fetch at a time.

    ``has_more`` reports whether the store may still hold unscanned
    records. It does not promise further matches: a ``load_more`` can
    return nothing while still advancing towards exhaustion. Callers that
    page automatically stop once ``store_exhausted`` is set and
    ``last_batch_size`` is zero.
    """

    def __init__(self, fetcher: ProgressiveFetcher, *, target_count: int = 100) -> None:
        self._fetcher = fetcher
        self._target_count = target_count
        self._guard = threading.Lock()

        self._results: list[Record] = []
        self._error: str | None = None
        self._store_exhausted = False
        self._last_batch_size = 0

        self._constraints: ServerConstraints | None = None
        self._predicate: ClientPredicate | None = None
        self._cursor: Cursor = None

    @property
    def results(self) -> Sequence[Record]:
        return tuple(self._results)

    @property
    def loading(self) -> bool:
        return self._guard.locked()

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def store_exhausted(self) -> bool:
        return self._store_exhausted

    @property
    def has_more(self) -> bool:
        return self._constraints is not None and not self._store_exhausted

    @property
    def last_batch_size(self) -> int:
        return self._last_batch_size

    @property
    def cursor(self) -> Cursor:
        return self._cursor

    def search(self, config: SearchConfig, term: str = "") -> bool:
        """Run a fresh search, replacing current results on success.

        Args:
            config: Query shape of the selected part type.
            term: Free-text name filter supplied by the caller.

        Returns:
            False when the call was ignored because another is in flight.
        """
        if not self._guard.acquire(blocking=False):
            log.debug("Search ignored: a fetch is already in progress")
            return False
        try:
            self._error = None
            constraints, predicate = plan(config, term)
            log.info(
                "Search: filters=%d order_by=%s term=%r",
                len(constraints.filters),
                constraints.order_by,
                term,
            )
            self._run(constraints, predicate, cursor=None, fresh=True)
        finally:
            self._guard.release()
        return True

    def load_more(self) -> bool:
        """Fetch the next batch after the current cursor and append it.

        Does nothing when no search has run yet or the store is exhausted.

        Returns:
            False when the call was ignored.
        """
        if not self._guard.acquire(blocking=False):
            log.debug("Load more ignored: a fetch is already in progress")
            return False
        try:
            if self._constraints is None:
                log.debug("Load more ignored: no search has been run")
                return False
            if self._store_exhausted:
                log.debug("Load more ignored: store exhausted")
                self._last_batch_size = 0
                return False
            self._error = None
            assert self._predicate is not None
            self._run(self._constraints, self._predicate, cursor=self._cursor, fresh=False)
        finally:
            self._guard.release()
        return True

    def _run(
        self,
        constraints: ServerConstraints,
        predicate: ClientPredicate,
        *,
        cursor: Cursor,
        fresh: bool,
    ) -> None:
        """Fetch one batch and commit it; on failure only the error changes."""
        try:
            batch = self._fetcher.fetch_batch(
                constraints,
                predicate,
                cursor=cursor,
                target_count=self._target_count,
            )
        except IndexRequiredError as error:
            log.error("Search needs an index: fields=%s", ", ".join(error.fields))
            self._error = INDEX_ERROR_MESSAGE
            return
        except Exception as error:  # noqa: BLE001 - store failures surface as session error
            log.error("Search failed: %s", error)
            self._error = GENERIC_ERROR_MESSAGE
            return

        self._constraints = constraints
        self._predicate = predicate
        self._cursor = batch.cursor
        self._store_exhausted = batch.store_exhausted
        self._last_batch_size = len(batch.records)
        if fresh:
            self._results = list(batch.records)
        else:
            self._results.extend(batch.records)
        log.info(
            "Fetched %d matching parts in %d chunk(s); total=%d exhausted=%s",
            len(batch.records),
            batch.chunks_fetched,
            len(self._results),
            batch.store_exhausted,
        )
