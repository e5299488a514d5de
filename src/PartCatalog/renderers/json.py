"""JSON file output for search batches."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Sequence

from PartCatalog.core.models import Record
from PartCatalog.renderers.base import OutputWriter
from PartCatalog.utils.log import log


def render_json(records: Iterable[Record]) -> list[dict[str, Any]]:
    """Convert parts into JSON-serializable dicts (keys kept as stored)."""
    return [dict(record) for record in records]


class JsonFileWriter(OutputWriter):
    """Collect batches and write them to one JSON file on finalize.

    Batches of the same part type and term are merged, so a search followed
    by several load-more calls ends up as one result entry.
    """

    def __init__(self, base_dir: str) -> None:
        self.json_dir = Path(base_dir) / "json"
        self.entries: list[dict[str, Any]] = []

    def write_batch(
        self,
        records: Sequence[Record],
        *,
        part_type: str,
        term: str,
        start_index: int = 1,
    ) -> None:
        last = self.entries[-1] if self.entries else None
        if start_index > 1 and last and (last["part_type"], last["term"]) == (part_type, term):
            last["parts"].extend(render_json(records))
            return
        self.entries.append({"part_type": part_type, "term": term, "parts": render_json(records)})

    def finalize(self, action: str) -> None:
        """Write ``<base_dir>/json/<action>_<YYYYmmdd_HHMMSS>.json``."""
        self.json_dir.mkdir(parents=True, exist_ok=True)
        path = self.json_dir / f"{action}_{datetime.now():%Y%m%d_%H%M%S}.json"
        path.write_text(json.dumps(self.entries, ensure_ascii=False, indent=2, default=str), encoding="utf-8")
        log.info("Wrote %d result set(s) to %s", len(self.entries), path)
