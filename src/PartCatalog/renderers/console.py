"""Console text output renderers.

Renders catalog parts into human-friendly text blocks and provides the
ConsoleOutputWriter implementation for command output.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from PartCatalog.core.models import DISPLAY_FIELD, Record
from PartCatalog.renderers.base import OutputWriter
from PartCatalog.utils.log import log

_MISSING = "N/A"

# (label, field) pairs shown under each part name.
_DETAIL_FIELDS: tuple[tuple[str, str], ...] = (
    ("Part No", "Part No"),
    ("Rev", "Rev"),
    ("Old Part No", "Old Part No"),
    ("Part Type", "Part Type"),
    ("Part Group", "Part Group"),
    ("Part Status", "Part Status"),
    ("Grade", "Grade"),
    ("Note", "Note"),
)


def _fmt_value(value: object) -> str:
    if value is None:
        return _MISSING
    text = str(value).strip()
    return text or _MISSING


def render_text(records: Iterable[Record], *, start_index: int = 1) -> str:
    """Render parts into a human-readable text block.

    Args:
        records: Parts to render.
        start_index: Number printed for the first part.

    Returns:
        A formatted string ready to be printed.
    """
    lines: list[str] = []
    for idx, record in enumerate(records, start=start_index):
        lines.append(f"{idx}. {_fmt_value(record.get(DISPLAY_FIELD))}")
        pairs = [f"{label}: {_fmt_value(record.get(field))}" for label, field in _DETAIL_FIELDS]
        # Two details per line keeps long catalogs scannable.
        for offset in range(0, len(pairs), 2):
            lines.append("   " + "  ".join(pairs[offset:offset + 2]))
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_batch(
        self,
        records: Sequence[Record],
        *,
        part_type: str,
        term: str,
        start_index: int = 1,
    ) -> None:
        if not records:
            log.info("No results found.")
            return
        for line in render_text(records, start_index=start_index).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
