from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

FilterValue = Union[str, int, float]

EQUALITY_OP = "="
RANGE_OPS = frozenset({">=", "<=", ">", "<"})
SUPPORTED_OPS = frozenset({EQUALITY_OP}) | RANGE_OPS
_OP_ALIASES = {"==": EQUALITY_OP}


def normalize_op(op: str) -> str:
    """Map operator aliases (``==``) onto their canonical form."""
    return _OP_ALIASES.get(op, op)


@dataclass(frozen=True, slots=True)
class ServerFilter:
    """One store-evaluable comparison.

    All server filters of a config are combined with AND by the store.

    Attributes:
        field: Catalog field name (e.g. "Part Group").
        op: One of ``=``, ``>=``, ``<=``, ``>``, ``<``.
        value: Scalar compared against the field.
    """

    field: str
    op: str
    value: FilterValue

    @property
    def is_range(self) -> bool:
        return self.op in RANGE_OPS


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Query shape for one part type.

    The server filters are pushed down to the record store. The client
    filter is a keyword predicate the store cannot evaluate: a record
    passes when its ``client_filter_field`` contains ANY of
    ``client_filter_values`` (case-insensitive). Without a field the
    client filter is vacuously true.

    Attributes:
        server_filters: Ordered store-side filters.
        client_filter_field: Field inspected after retrieval, if any.
        client_filter_values: Substrings accepted for that field.
    """

    server_filters: Sequence[ServerFilter] = ()
    client_filter_field: str | None = None
    client_filter_values: Sequence[str] = ()

    @property
    def has_client_filter(self) -> bool:
        return bool(self.client_filter_field) and bool(self.client_filter_values)


def validate_field_name(field: str) -> str:
    """Return ``field`` if it can be embedded in a store field path.

    Raises:
        ValueError: If the name is blank or contains quotes or backslashes.
    """
    if not field or not field.strip():
        raise ValueError("Field name must not be empty")
    if any(ch in field for ch in "\"'\\"):
        raise ValueError(f"Field name must not contain quotes or backslashes: {field!r}")
    return field
