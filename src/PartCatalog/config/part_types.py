"""Part-type domain configuration: per-type catalog query shapes.

YAML shape::

    part_types:
      hdpe_sign:
        server_filters:
          - {field: Part Group, op: "=", value: Signs}
          - {field: Grade, op: "=", value: HDPE}
        client_filter:
          field: Part Type
          values: [Small Signs, Large Signs]
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from PartCatalog.config.common import Section
from PartCatalog.core.query import (
    SUPPORTED_OPS,
    SearchConfig,
    ServerFilter,
    normalize_op,
    validate_field_name,
)

PartTypes = Mapping[str, SearchConfig]


def load_part_types(raw: Mapping[str, Any]) -> PartTypes:
    """Load the part-type registry as a read-only mapping.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    registry = Section.of(raw, "part_types", required=True)
    return MappingProxyType(
        {str(key): parse_search_config(registry.section(key)) for key in registry}
    )


def parse_search_config(section: Section) -> SearchConfig:
    """Parse one part type's query shape."""
    filters = tuple(
        ServerFilter(
            field=item.get_str("field"),
            op=normalize_op(item.get_str("op").strip()),
            value=item.get_scalar("value"),
        )
        for item in section.sections("server_filters")
    )
    client = section.section("client_filter", required=False)
    if not client.data:
        return SearchConfig(server_filters=filters)
    return SearchConfig(
        server_filters=filters,
        client_filter_field=client.get_str("field"),
        client_filter_values=client.get_str_tuple("values"),
    )


def check_part_types(part_types: PartTypes) -> None:
    """Validate the registry.

    Raises:
        ValueError: On an empty registry, an unknown operator, an unusable
            field name or an empty client keyword list.
    """
    if not part_types:
        raise ValueError("part_types must include at least one part type")
    for key, config in part_types.items():
        for idx, server_filter in enumerate(config.server_filters):
            prefix = f"part_types.{key}.server_filters[{idx}]"
            if server_filter.op not in SUPPORTED_OPS:
                raise ValueError(f"{prefix}.op must be one of {sorted(SUPPORTED_OPS)}")
            _check_field(server_filter.field, f"{prefix}.field")
        if config.client_filter_field is None:
            continue
        prefix = f"part_types.{key}.client_filter"
        _check_field(config.client_filter_field, f"{prefix}.field")
        if not config.client_filter_values or not all(v.strip() for v in config.client_filter_values):
            raise ValueError(f"{prefix}.values must be a non-empty list of non-blank keywords")


def _check_field(field: str, config_key: str) -> None:
    try:
        validate_field_name(field)
    except ValueError as error:
        raise ValueError(f"{config_key}: {error}") from error
