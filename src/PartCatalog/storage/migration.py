"""Versioned schema migrations for the parts database.

The applied version lives in SQLite's ``PRAGMA user_version``. Opening a
``DatabaseManager`` applies every newer entry of ``MIGRATIONS`` in order,
each in its own transaction together with the version bump, so a failing
step leaves the database at the previous version.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Sequence

from PartCatalog.utils.log import log

# json_extract() and indexes on expressions.
MIN_SQLITE_VERSION = (3, 9, 0)


@dataclass(frozen=True)
class Migration:
    """One schema step.

    Attributes:
        version: Position in ``MIGRATIONS``, counting from 1.
        description: Short summary for the log.
        statements: SQL statements run in order.
    """

    version: int
    description: str
    statements: tuple[str, ...]


# Append-only. Released entries must never change.
MIGRATIONS: list[Migration] = [
    Migration(
        version=1,
        description="parts table with name and type indexes",
        statements=(
            """
            CREATE TABLE IF NOT EXISTS parts (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              name TEXT NOT NULL,
              type TEXT,
              data TEXT NOT NULL DEFAULT '{}',
              created_at INTEGER NOT NULL DEFAULT (CAST(strftime('%s','now') AS INTEGER))
            )
            """,
            "CREATE INDEX IF NOT EXISTS idx_parts_name ON parts(name, id)",
            "CREATE INDEX IF NOT EXISTS idx_parts_type ON parts(type)",
        ),
    ),
]


def schema_version(conn: sqlite3.Connection) -> int:
    return int(conn.execute("PRAGMA user_version").fetchone()[0])


def run_migrations(conn: sqlite3.Connection) -> int:
    """Bring the schema up to the newest migration.

    Returns:
        Number of migrations applied.

    Raises:
        RuntimeError: If the SQLite library lacks JSON support.
        ValueError: If ``MIGRATIONS`` is not numbered 1, 2, 3, ...
        sqlite3.Error: If a statement fails; that migration is rolled back.
    """
    if sqlite3.sqlite_version_info < MIN_SQLITE_VERSION:
        required = ".".join(map(str, MIN_SQLITE_VERSION))
        raise RuntimeError(f"SQLite >= {required} is required, found {sqlite3.sqlite_version}")
    _check_numbering(MIGRATIONS)

    current = schema_version(conn)
    pending = [m for m in MIGRATIONS if m.version > current]
    if not pending:
        log.debug("Schema at v%d, nothing to migrate", current)
        return 0
    for migration in pending:
        _apply(conn, migration)
        log.info("Applied migration v%d: %s", migration.version, migration.description)
    return len(pending)


def _check_numbering(migrations: Sequence[Migration]) -> None:
    for expected, migration in enumerate(migrations, start=1):
        if migration.version != expected:
            raise ValueError(
                f"MIGRATIONS must be numbered consecutively from 1: expected v{expected}, "
                f"found v{migration.version} ({migration.description!r})"
            )


def _apply(conn: sqlite3.Connection, migration: Migration) -> None:
    # executescript() would COMMIT on its own, so statements go one by one.
    conn.execute("BEGIN")
    try:
        for statement in migration.statements:
            conn.execute(statement)
        conn.execute(f"PRAGMA user_version = {int(migration.version)}")
        conn.execute("COMMIT")
    except Exception:
        conn.execute("ROLLBACK")
        raise
