"""Import domain configuration: how exported parts map to name and type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from PartCatalog.config.common import Section


@dataclass(frozen=True, slots=True)
class ImportConfig:
    """Import mapping configuration.

    Attributes:
        name_fields: Candidate fields for the part name, in priority order.
        type_fields: Candidate fields for the part type, in priority order.
        default_name: Name used when no candidate field is present.
        default_type: Type used when no candidate field is present.
    """

    name_fields: tuple[str, ...] = ("Name", "Part Name", "Part No")
    type_fields: tuple[str, ...] = ("Part Type", "Type")
    default_name: str = "Unknown Part"
    default_type: str = "misc"


def load_import(raw: Mapping[str, Any]) -> ImportConfig:
    section = Section.of(raw, "import", required=False)
    defaults = ImportConfig()
    return ImportConfig(
        name_fields=section.get_str_tuple("name_fields", defaults.name_fields),
        type_fields=section.get_str_tuple("type_fields", defaults.type_fields),
        default_name=section.get_str("default_name", defaults.default_name),
        default_type=section.get_str("default_type", defaults.default_type),
    )


def check_import(config: ImportConfig) -> None:
    if not config.name_fields:
        raise ValueError("import.name_fields must include at least one field")
    for key in ("default_name", "default_type"):
        if not getattr(config, key).strip():
            raise ValueError(f"import.{key} must not be empty")
