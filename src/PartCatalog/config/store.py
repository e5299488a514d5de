"""Store domain configuration for the parts database."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from PartCatalog.config.common import Section

DB_PATH_ENV = "PARTCATALOG_DB"


@dataclass(frozen=True, slots=True)
class StoreConfig:
    """Parts database settings.

    Attributes:
        db_path: SQLite file; ``PARTCATALOG_DB`` wins over the YAML value.
        require_indexes: Refuse queries on JSON fields without an
            expression index instead of scanning.
    """

    db_path: str
    require_indexes: bool


def load_store(raw: Mapping[str, Any]) -> StoreConfig:
    section = Section.of(raw, "store", required=True)
    configured = section.get_str("db_path")
    return StoreConfig(
        db_path=os.getenv(DB_PATH_ENV, "").strip() or configured,
        require_indexes=section.get_bool("require_indexes", False),
    )


def check_store(config: StoreConfig) -> None:
    if not config.db_path.strip():
        raise ValueError("store.db_path must not be empty")
