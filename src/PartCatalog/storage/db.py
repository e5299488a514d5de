"""SQLite connection ownership for the parts database."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from PartCatalog.storage.migration import run_migrations


class DatabaseManager:
    """Own one connection to the parts database for a command's lifetime.

    Opening creates the parent directory and file if needed and migrates
    the schema. The connection runs in autocommit mode; code that needs a
    transaction issues ``BEGIN``/``COMMIT`` itself. Rows come back as
    ``sqlite3.Row``.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn: sqlite3.Connection | None = sqlite3.connect(str(self.db_path), isolation_level=None)
        self.conn.row_factory = sqlite3.Row
        try:
            run_migrations(self.conn)
        except Exception:
            self.close()
            raise

    def get_connection(self) -> sqlite3.Connection:
        """Return the open connection.

        Raises:
            RuntimeError: If the manager has been closed.
        """
        if self.conn is None:
            raise RuntimeError(f"Database already closed: {self.db_path}")
        return self.conn

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
