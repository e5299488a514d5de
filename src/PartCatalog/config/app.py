"""Application config: YAML loading, default layering and domain assembly."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from PartCatalog.config.importer import ImportConfig, check_import, load_import
from PartCatalog.config.log import LogConfig, check_log, load_log
from PartCatalog.config.output import OutputConfig, check_output, load_output
from PartCatalog.config.part_types import PartTypes, check_part_types, load_part_types
from PartCatalog.config.search import SearchSettings, check_search, load_search
from PartCatalog.config.store import StoreConfig, check_store, load_store

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Validated configuration of every domain."""

    log: LogConfig
    store: StoreConfig
    search: SearchSettings
    part_types: PartTypes
    output: OutputConfig
    importer: ImportConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Load every domain from ``raw``, then validate each one.

    Raises:
        TypeError: If a value has the wrong type.
        ValueError: If a value is missing or violates a constraint.
    """
    config = AppConfig(
        log=load_log(raw),
        store=load_store(raw),
        search=load_search(raw),
        part_types=load_part_types(raw),
        output=load_output(raw),
        importer=load_import(raw),
    )
    check_log(config.log)
    check_store(config.store)
    check_search(config.search)
    check_part_types(config.part_types)
    check_output(config.output)
    check_import(config.importer)
    return config


def load_config(path: Path) -> AppConfig:
    """Load a single YAML file, without layering it onto the defaults."""
    return parse_config_dict(parse_yaml(path.read_text(encoding="utf-8")))


def load_config_with_defaults(
    config_path: Path,
    default_path: Path = DEFAULT_CONFIG_PATH,
    *,
    _defaults_text: str | None = None,
) -> AppConfig:
    """Layer ``config_path`` over the defaults and parse the result.

    Mappings merge key by key (so an override can add or replace a single
    part type); any other value, lists included, replaces the default.
    """
    if _defaults_text is None:
        if config_path.resolve() == default_path.resolve():
            return load_config(default_path)
        _defaults_text = default_path.read_text(encoding="utf-8")
    base = parse_yaml(_defaults_text)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            value = merge_config_dicts(current, value)
        merged[key] = value
    return merged
