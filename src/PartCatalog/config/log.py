"""Log domain configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from PartCatalog.config.common import Section


@dataclass(frozen=True, slots=True)
class LogConfig:
    """Logging settings.

    Attributes:
        level: Console level name, upper-cased (DEBUG, INFO, ...).
        to_file: Mirror every command's log to ``<dir>/<action>/``.
        dir: Base directory of per-action log files.
    """

    level: str
    to_file: bool
    dir: str


def load_log(raw: Mapping[str, Any]) -> LogConfig:
    section = Section.of(raw, "log", required=False)
    return LogConfig(
        level=section.get_str("level", "INFO").strip().upper(),
        to_file=section.get_bool("to_file", False),
        dir=section.get_str("dir", "log"),
    )


def check_log(config: LogConfig) -> None:
    """Validate log domain constraints.

    Raises:
        ValueError: If the level is not a standard level name or the log
            directory is blank while file logging is on.
    """
    if config.level == "NOTSET" or not isinstance(logging.getLevelName(config.level), int):
        raise ValueError(f"log.level must be a standard level name, got {config.level!r}")
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty when log.to_file is enabled")
