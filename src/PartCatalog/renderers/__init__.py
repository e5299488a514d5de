"""Renderers for search batches: console text and JSON files."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PartCatalog.renderers.base import MultiOutputWriter, OutputWriter
from PartCatalog.renderers.console import ConsoleOutputWriter, render_text
from PartCatalog.renderers.json import JsonFileWriter, render_json

if TYPE_CHECKING:
    from PartCatalog.config import AppConfig


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Build one writer per entry of ``output.formats``, in configured order."""
    factories = {
        "console": ConsoleOutputWriter,
        "json": lambda: JsonFileWriter(config.output.base_dir),
    }
    return MultiOutputWriter([factories[fmt]() for fmt in config.output.formats])


__all__ = [
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "OutputWriter",
    "create_output_writer",
    "render_json",
    "render_text",
]
