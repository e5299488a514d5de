"""Public configuration API for PartCatalog."""

from __future__ import annotations

from PartCatalog.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from PartCatalog.config.importer import ImportConfig
from PartCatalog.config.log import LogConfig
from PartCatalog.config.output import OutputConfig
from PartCatalog.config.part_types import PartTypes
from PartCatalog.config.search import SearchSettings
from PartCatalog.config.store import StoreConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AppConfig",
    "ImportConfig",
    "LogConfig",
    "OutputConfig",
    "PartTypes",
    "SearchSettings",
    "StoreConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
