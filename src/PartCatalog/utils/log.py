"""Logging for PartCatalog.

Every module logs through the shared ``PartCatalog`` logger. Lines read
``10-17 14:03:22 [INFO] Fetched 12 matching parts in 3 chunk(s) ...``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PartCatalog.config import LogConfig

log = logging.getLogger("PartCatalog")

_SHORT_LEVELS = {
    "DEBUG": "DEBG",
    "WARNING": "WARN",
    "ERROR": "ERRO",
    "CRITICAL": "ERRO",
}


class _ShortLevelFormatter(logging.Formatter):
    """Four-letter level tags keep the message column aligned."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s [%(short_level)s] %(message)s", "%m-%d %H:%M:%S")

    def formatMessage(self, record: logging.LogRecord) -> str:
        record.short_level = _SHORT_LEVELS.get(record.levelname, record.levelname[:4])
        return super().formatMessage(record)


def configure_logging(config: LogConfig, *, action: str | None = None) -> Path | None:
    """Reset the package logger for one CLI command.

    The console shows ``config.level`` and above. With ``config.to_file``
    a DEBUG-level copy, including per-chunk fetch traces, goes to
    ``<dir>/<action>/<action>_<mmddHHMMSS>.log``.

    Returns:
        Path of the log file, or None when file logging is off.
    """
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(config.level)
    console.setFormatter(_ShortLevelFormatter())
    log.addHandler(console)

    log_path = None
    if config.to_file and action:
        log_path = _action_log_path(Path(config.dir), action)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_ShortLevelFormatter())
        log.addHandler(file_handler)

    log.setLevel(logging.DEBUG)
    log.propagate = False
    return log_path


def _action_log_path(log_dir: Path, action: str) -> Path:
    action_dir = log_dir / action
    action_dir.mkdir(parents=True, exist_ok=True)
    return action_dir / f"{action}_{datetime.now().strftime('%m%d%H%M%S')}.log"
