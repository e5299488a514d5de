"""Bulk import of catalog JSON exports."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

from PartCatalog.utils.log import log

if TYPE_CHECKING:
    from PartCatalog.config import ImportConfig
    from PartCatalog.storage.parts import SqlitePartStore


def load_export(path: Path) -> list[dict[str, Any]]:
    """Read a JSON export: either an array of parts or a single part object.

    Raises:
        ValueError: If the file is not valid JSON or holds non-object parts.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise ValueError(f"Invalid JSON in {path}: {error}") from error

    items = payload if isinstance(payload, list) else [payload]
    parts: list[dict[str, Any]] = []
    for idx, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise ValueError(f"Expected an object for part at index {idx}")
        parts.append(dict(item))
    return parts


def map_part(raw: Mapping[str, Any], config: ImportConfig) -> tuple[str, str, Mapping[str, Any]]:
    """Pick the indexed name and type for one exported part.

    The first non-empty candidate field wins; the raw object is kept whole.

    Returns:
        Tuple of (name, type, data).
    """
    name = _first_present(raw, config.name_fields) or config.default_name
    part_type = _first_present(raw, config.type_fields) or config.default_type
    return name, part_type, raw


def import_parts(store: SqlitePartStore, parts: list[dict[str, Any]], config: ImportConfig) -> int:
    """Map and insert exported parts in a single transaction.

    Returns:
        Number of imported parts.
    """
    rows = [map_part(part, config) for part in parts]
    unnamed = sum(1 for name, _, _ in rows if name == config.default_name)
    if unnamed:
        log.warning("%d part(s) had no name field; stored as %r", unnamed, config.default_name)
    count = store.import_parts(rows)
    log.info("Imported %d parts", count)
    return count


def _first_present(raw: Mapping[str, Any], fields: tuple[str, ...]) -> str:
    for field in fields:
        value = raw.get(field)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return ""
