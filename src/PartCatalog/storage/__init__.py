"""Storage layer for PartCatalog.

Provides database management and the SQLite parts store.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from PartCatalog.storage.db import DatabaseManager
from PartCatalog.storage.migration import run_migrations
from PartCatalog.storage.parts import SqlitePartStore
from PartCatalog.utils.log import log

if TYPE_CHECKING:
    from PartCatalog.config import AppConfig


def create_storage(config: AppConfig) -> tuple[DatabaseManager, SqlitePartStore]:
    """Open the configured database and build the parts store.

    Args:
        config: Application configuration containing store settings.

    Returns:
        Tuple of (db_manager, part_store).
    """
    db_path = Path(config.store.db_path)
    db_manager = DatabaseManager(db_path)
    log.info("Parts database: %s", db_path)
    store = SqlitePartStore(db_manager, require_indexes=config.store.require_indexes)
    return db_manager, store


__all__ = [
    "DatabaseManager",
    "SqlitePartStore",
    "run_migrations",
    "create_storage",
]
