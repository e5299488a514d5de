"""Output writer interface shared by the console and JSON renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from PartCatalog.core.models import Record


class OutputWriter(ABC):
    """Receives search batches as they arrive and flushes once per command."""

    @abstractmethod
    def write_batch(
        self,
        records: Sequence[Record],
        *,
        part_type: str,
        term: str,
        start_index: int = 1,
    ) -> None:
        """Write one batch of search results.

        Args:
            records: Parts returned by a search or load-more call.
            part_type: Part-type key that was searched.
            term: Free-text term used for the search.
            start_index: Display number of the first record; greater than 1
                for load-more continuations.
        """

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Flush anything buffered at the end of CLI command ``action``."""


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Fan each call out to every configured writer, in order."""

    writers: Sequence[OutputWriter]

    def write_batch(
        self,
        records: Sequence[Record],
        *,
        part_type: str,
        term: str,
        start_index: int = 1,
    ) -> None:
        for writer in self.writers:
            writer.write_batch(records, part_type=part_type, term=term, start_index=start_index)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
