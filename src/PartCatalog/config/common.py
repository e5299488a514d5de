"""Typed access to raw YAML config sections.

Every error names the full dotted key of the offending value, e.g.
``part_types.hdpe_sign.server_filters[1].op``. Wrong types raise
``TypeError``; missing keys and violated constraints raise ``ValueError``.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping

_REQUIRED = object()


class Section:
    """Read-only view of one config mapping at a dotted key path."""

    __slots__ = ("data", "path")

    def __init__(self, data: Mapping[str, Any], path: str = "") -> None:
        self.data = data
        self.path = path

    @classmethod
    def of(cls, raw: Mapping[str, Any], key: str, *, required: bool) -> Section:
        """Return the top-level section ``key``; optional sections default to empty.

        Raises:
            ValueError: If the section is required but missing.
            TypeError: If the section is not a mapping.
        """
        return cls(raw).section(key, required=required)

    def key(self, name: str) -> str:
        return f"{self.path}.{name}" if self.path else name

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def raw(self, name: str, default: Any = _REQUIRED) -> Any:
        if name in self.data and self.data[name] is not None:
            return self.data[name]
        if default is _REQUIRED:
            raise ValueError(f"Missing required config: {self.key(name)}")
        return default

    def section(self, name: str, *, required: bool = True) -> Section:
        value = self.data.get(name)
        if value is None:
            if required:
                raise ValueError(f"Missing required config: {self.key(name)}")
            return Section({}, self.key(name))
        return Section(_as_mapping(value, self.key(name)), self.key(name))

    def sections(self, name: str) -> list[Section]:
        """Return the list ``name`` (default empty) as one section per item."""
        items = self.raw(name, [])
        if not isinstance(items, list):
            raise TypeError(f"{self.key(name)} must be a list")
        path = self.key(name)
        return [
            Section(_as_mapping(item, f"{path}[{idx}]"), f"{path}[{idx}]")
            for idx, item in enumerate(items)
        ]

    def get_str(self, name: str, default: Any = _REQUIRED) -> str:
        value = self.raw(name, default)
        if not isinstance(value, str):
            raise TypeError(f"{self.key(name)} must be a string")
        return value

    def get_bool(self, name: str, default: Any = _REQUIRED) -> bool:
        value = self.raw(name, default)
        if not isinstance(value, bool):
            raise TypeError(f"{self.key(name)} must be a boolean")
        return value

    def get_int(self, name: str, default: Any = _REQUIRED) -> int:
        value = self.raw(name, default)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{self.key(name)} must be an integer")
        return value

    def get_scalar(self, name: str) -> str | int | float:
        """Return a filter comparison value: string or number, never bool."""
        value = self.raw(name)
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise TypeError(f"{self.key(name)} must be a string or number")
        return value

    def get_str_tuple(self, name: str, default: Any = _REQUIRED) -> tuple[str, ...]:
        value = self.raw(name, default)
        if not isinstance(value, (list, tuple)):
            raise TypeError(f"{self.key(name)} must be a list")
        for idx, item in enumerate(value):
            if not isinstance(item, str):
                raise TypeError(f"{self.key(name)}[{idx}] must be a string")
        return tuple(value)


def _as_mapping(value: Any, config_key: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")
    return value
