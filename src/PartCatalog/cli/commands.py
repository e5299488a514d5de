"""Command implementations for the PartCatalog CLI.

Encapsulates business logic for commands, separated from CLI parameter
handling and resource management.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

from PartCatalog.config import AppConfig
from PartCatalog.renderers import OutputWriter
from PartCatalog.services.importer import import_parts, load_export
from PartCatalog.services.session import SearchSession
from PartCatalog.storage.parts import SqlitePartStore
from PartCatalog.utils.log import log


@dataclass(slots=True)
class SearchCommand:
    """Run one part-type search and page through it.

    ``pages`` counts the initial search, so ``pages=3`` means one search
    plus up to two load-more calls. When ``confirm`` is given it is asked
    before every load-more and paging stops on a negative answer.
    """

    config: AppConfig
    session: SearchSession
    output_writer: OutputWriter
    part_type: str
    term: str
    pages: int = 1
    confirm: Callable[[], bool] | None = None

    def execute(self) -> int:
        """Execute the search.

        Returns:
            Number of parts shown.
        """
        search_config = self.config.part_types[self.part_type]
        log.info("part_type=%s term=%r", self.part_type, self.term)

        self.session.search(search_config, self.term)
        if self.session.error:
            log.error(self.session.error)
            return 0
        self.output_writer.write_batch(self.session.results, part_type=self.part_type, term=self.term)

        page = 1
        while self.session.has_more and (self.confirm is not None or page < self.pages):
            if self.confirm is not None and not self.confirm():
                break
            shown = len(self.session.results)
            self.session.load_more()
            page += 1
            if self.session.error:
                log.error(self.session.error)
                break
            batch = self.session.results[shown:]
            if batch:
                self.output_writer.write_batch(
                    batch,
                    part_type=self.part_type,
                    term=self.term,
                    start_index=shown + 1,
                )
            else:
                log.info("No further matches in the scanned parts.")
            if self.session.store_exhausted and self.session.last_batch_size == 0:
                break

        total = len(self.session.results)
        log.info("Showing %d part(s); more available: %s", total, self.session.has_more)
        return total


@dataclass(slots=True)
class ImportCommand:
    """Bulk import a JSON export into the parts store."""

    config: AppConfig
    store: SqlitePartStore
    path: Path

    def execute(self) -> int:
        parts = load_export(self.path)
        log.info("Read %d part(s) from %s", len(parts), self.path)
        count = import_parts(self.store, parts, self.config.importer)
        log.info("Catalog now holds %d part(s)", self.store.count())
        return count


@dataclass(slots=True)
class AddCommand:
    """Insert one part."""

    store: SqlitePartStore
    name: str
    part_type: str
    fields: Mapping[str, Any]

    def execute(self) -> int:
        if not self.name.strip():
            raise ValueError("Name is required")
        part_id = self.store.insert_part(self.name, self.part_type, self.fields)
        log.info("Added part id=%d name=%r type=%s", part_id, self.name, self.part_type)
        return part_id


@dataclass(slots=True)
class IndexCommand:
    """Create expression indexes for the fields configured part types query."""

    config: AppConfig
    store: SqlitePartStore
    part_types: tuple[str, ...] = ()

    def execute(self) -> int:
        keys = self.part_types or tuple(self.config.part_types)
        created = self.store.create_indexes(self.config.part_types[key] for key in keys)
        log.info("Created %d index(es) for %d part type(s)", created, len(keys))
        return created
