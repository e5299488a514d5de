"""Command runner for coordinating CLI execution.

Configures logging per action, opens the parts database for the duration
of a command, and turns any failure into ``click.Abort``.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping

import click

from PartCatalog.cli.commands import AddCommand, ImportCommand, IndexCommand, SearchCommand
from PartCatalog.config import AppConfig
from PartCatalog.renderers import create_output_writer
from PartCatalog.services import create_search_session
from PartCatalog.storage import SqlitePartStore, create_storage
from PartCatalog.utils.log import configure_logging, log


class CommandRunner:
    """Run catalog commands against the configured database."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @contextmanager
    def _store(self, action: str) -> Iterator[SqlitePartStore]:
        """Yield an open parts store; log and abort on any failure.

        Raises:
            click.Abort: When the command body or storage setup fails.
        """
        configure_logging(self.config.log, action=action)
        try:
            db_manager, store = create_storage(self.config)
            with db_manager:
                yield store
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action.capitalize(), e)
            raise click.Abort from e

    def run_search(
        self,
        action: str,
        *,
        part_type: str,
        term: str,
        pages: int = 1,
        confirm: Callable[[], bool] | None = None,
    ) -> None:
        with self._store(action) as store:
            output_writer = create_output_writer(self.config)
            SearchCommand(
                config=self.config,
                session=create_search_session(self.config, store),
                output_writer=output_writer,
                part_type=part_type,
                term=term,
                pages=pages,
                confirm=confirm,
            ).execute()
            output_writer.finalize(action)

    def run_import(self, action: str, *, path: Path) -> None:
        with self._store(action) as store:
            ImportCommand(config=self.config, store=store, path=path).execute()

    def run_add(self, action: str, *, name: str, part_type: str, fields: Mapping[str, Any]) -> None:
        with self._store(action) as store:
            AddCommand(store=store, name=name, part_type=part_type, fields=fields).execute()

    def run_index(self, action: str, *, part_types: tuple[str, ...]) -> None:
        with self._store(action) as store:
            IndexCommand(config=self.config, store=store, part_types=part_types).execute()
