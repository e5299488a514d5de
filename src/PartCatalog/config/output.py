"""Output domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from PartCatalog.config.common import Section

OUTPUT_FORMATS = ("console", "json")


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Where and how search batches are written."""

    base_dir: str
    formats: tuple[str, ...]


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load output config; formats are lower-cased and de-duplicated in order."""
    section = Section.of(raw, "output", required=False)
    names = (fmt.strip().lower() for fmt in section.get_str_tuple("formats", ["console"]))
    return OutputConfig(
        base_dir=section.get_str("base_dir", "output"),
        formats=tuple(dict.fromkeys(name for name in names if name)),
    )


def check_output(config: OutputConfig) -> None:
    if not config.formats:
        raise ValueError("output.formats must include at least one format")
    unknown = [fmt for fmt in config.formats if fmt not in OUTPUT_FORMATS]
    if unknown:
        raise ValueError(f"output.formats has unknown values {unknown}; allowed {list(OUTPUT_FORMATS)}")
    if "json" in config.formats and not config.base_dir.strip():
        raise ValueError("output.base_dir must not be empty when json output is enabled")
