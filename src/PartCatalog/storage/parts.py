"""SQLite-backed parts catalog store."""

from __future__ import annotations

import hashlib
import json
import sqlite3
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Sequence

from PartCatalog.core.errors import IndexRequiredError, StoreError
from PartCatalog.core.models import DISPLAY_FIELD, Chunk, Cursor, Record
from PartCatalog.core.query import SUPPORTED_OPS, SearchConfig, validate_field_name
from PartCatalog.services.planner import ServerConstraints, build_server_constraints
from PartCatalog.utils.log import log

if TYPE_CHECKING:
    from PartCatalog.storage.db import DatabaseManager

# Fields promoted to real columns; everything else lives in the JSON blob.
_COLUMN_FIELDS = {DISPLAY_FIELD: "name"}
_FIELD_INDEX_PREFIX = "idx_parts_field_"


def field_expression(field: str) -> str:
    """Return the SQL expression that reads ``field`` from a parts row.

    The expression is emitted as a literal (not a bound parameter) so that
    expression indexes created for the same field can be used.
    """
    column = _COLUMN_FIELDS.get(field)
    if column is not None:
        return column
    validate_field_name(field)
    return f"json_extract(data, '$.\"{field}\"')"


def field_index_name(field: str) -> str:
    digest = hashlib.sha1(field.encode("utf-8")).hexdigest()[:12]
    return f"{_FIELD_INDEX_PREFIX}{digest}"


class SqlitePartStore:
    """Parts catalog stored in one SQLite table.

    Implements the ``RecordStore`` protocol with keyset pagination: the
    cursor is ``(sort_value, id)`` of the last row of the previous chunk,
    and rows are ordered by ``(sort_expr, id)`` so the order is total.
    """

    def __init__(self, db_manager: DatabaseManager, *, require_indexes: bool = False) -> None:
        """Initialize the store.

        Args:
            db_manager: Shared database manager instance.
            require_indexes: Refuse queries on JSON fields that have no
                expression index instead of scanning the table.
        """
        log.debug("Initializing SqlitePartStore require_indexes=%s", require_indexes)
        self.conn = db_manager.get_connection()
        self.require_indexes = require_indexes

    def fetch_chunk(
        self,
        constraints: ServerConstraints,
        *,
        after: Cursor = None,
        limit: int = 100,
    ) -> Chunk:
        """Return up to ``limit`` parts strictly after ``after``.

        Raises:
            IndexRequiredError: If indexes are required and one is missing.
            StoreError: If the query fails.
        """
        if self.require_indexes:
            missing = self.missing_indexes(constraints)
            if missing:
                raise IndexRequiredError(missing)

        sort_expr = field_expression(constraints.order_by)
        clauses: list[str] = []
        params: list[Any] = []
        for server_filter in constraints.filters:
            if server_filter.op not in SUPPORTED_OPS:
                raise ValueError(f"Unsupported filter operator: {server_filter.op}")
            clauses.append(f"{field_expression(server_filter.field)} {server_filter.op} ?")
            params.append(server_filter.value)

        if after is not None:
            sort_value, last_id = after
            clauses.append(f"({sort_expr} > ? OR ({sort_expr} = ? AND id > ?))")
            params.extend([sort_value, sort_value, last_id])

        where = " AND ".join(clauses) if clauses else "1=1"
        query = (
            f"SELECT id, name, data, {sort_expr} AS sort_value FROM parts "
            f"WHERE {where} ORDER BY {sort_expr} ASC, id ASC LIMIT ?"
        )
        params.append(int(limit))

        try:
            rows = self.conn.execute(query, params).fetchall()
        except sqlite3.Error as error:
            raise StoreError(f"Parts query failed: {error}") from error

        if not rows:
            return Chunk(records=())
        last = rows[-1]
        return Chunk(
            records=tuple(_row_to_record(row) for row in rows),
            end_cursor=(last["sort_value"], last["id"]),
        )

    def missing_indexes(self, constraints: ServerConstraints) -> list[str]:
        """List JSON fields referenced by ``constraints`` that lack an index."""
        existing = self._existing_index_names()
        return [
            field
            for field in constraints.fields
            if field not in _COLUMN_FIELDS and field_index_name(field) not in existing
        ]

    def ensure_field_index(self, field: str) -> bool:
        """Create an expression index for ``field`` if it does not exist.

        Returns:
            True when a new index was created.
        """
        if field in _COLUMN_FIELDS:
            return False
        name = field_index_name(field)
        if name in self._existing_index_names():
            return False
        self.conn.execute(
            f"CREATE INDEX IF NOT EXISTS {name} ON parts({field_expression(field)}, id)"
        )
        log.info("Created index %s for field %r", name, field)
        return True

    def create_indexes(self, configs: Iterable[SearchConfig]) -> int:
        """Create indexes for every field the given configs filter or sort on.

        Returns:
            Number of indexes created.
        """
        created = 0
        for config in configs:
            for field in build_server_constraints(config).fields:
                if self.ensure_field_index(field):
                    created += 1
        return created

    def insert_part(self, name: str, part_type: str, data: Mapping[str, Any]) -> int:
        """Insert a single part and return its id."""
        cursor = self.conn.execute(
            "INSERT INTO parts (name, type, data) VALUES (?, ?, ?)",
            (name, part_type, json.dumps(dict(data), ensure_ascii=False)),
        )
        return int(cursor.lastrowid)

    def import_parts(self, rows: Sequence[tuple[str, str, Mapping[str, Any]]]) -> int:
        """Insert many ``(name, type, data)`` rows in one transaction.

        Returns:
            Number of inserted rows.

        Raises:
            sqlite3.Error: If any insert fails; nothing is written.
        """
        if not rows:
            return 0
        self.conn.execute("BEGIN")
        try:
            self.conn.executemany(
                "INSERT INTO parts (name, type, data) VALUES (?, ?, ?)",
                [
                    (name, part_type, json.dumps(dict(data), ensure_ascii=False))
                    for name, part_type, data in rows
                ],
            )
            self.conn.execute("COMMIT")
        except Exception:
            self.conn.execute("ROLLBACK")
            raise
        log.debug("Imported %d parts", len(rows))
        return len(rows)

    def count(self) -> int:
        return int(self.conn.execute("SELECT COUNT(*) FROM parts").fetchone()[0])

    def _existing_index_names(self) -> set[str]:
        cursor = self.conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'index' AND tbl_name = 'parts'"
        )
        return {row[0] for row in cursor}


def _row_to_record(row: sqlite3.Row) -> Record:
    """Build a record from a parts row.

    Keys from the stored JSON take precedence over the name column, but the
    row id always wins.
    """
    try:
        data = json.loads(row["data"] or "{}")
    except json.JSONDecodeError:
        log.warning("Part %s has invalid JSON data; returning name only", row["id"])
        data = {}
    if not isinstance(data, dict):
        data = {}
    return {DISPLAY_FIELD: row["name"], **data, "id": row["id"]}
