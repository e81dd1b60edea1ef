"""Read-only relational schema: tables, columns and indexes.

Instances are built once by the loader and then shared between every rule
and every worker. Mappings are exposed through ``MappingProxyType`` and
sequences as tuples, so there is no mutation path after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

_STRING_TYPE_MARKERS = ("CHAR", "TEXT")


def _casefold_lookup(mapping: Mapping[str, object], name: str) -> Optional[str]:
    """Return the key of ``mapping`` matching ``name`` exactly, else case-insensitively."""
    if name in mapping:
        return name
    folded = name.casefold()
    for key in mapping:
        if key.casefold() == folded:
            return key
    return None


@dataclass(frozen=True)
class Column:
    name: str
    type: str = ""  # upper-cased declared type, e.g. "VARCHAR(255)"

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", self.type.upper())

    @property
    def is_string(self) -> bool:
        return any(marker in self.type for marker in _STRING_TYPE_MARKERS)


@dataclass(frozen=True)
class Index:
    name: str
    columns: tuple[str, ...]  # leftmost-prefix order
    unique: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        if not self.columns:
            raise ValueError(f"index '{self.name}' has no columns")

    @property
    def leading_column(self) -> str:
        return self.columns[0]

    @property
    def signature(self) -> str:
        return f"{self.name}({', '.join(self.columns)})"


@dataclass(frozen=True)
class Table:
    """A table with its columns and ordered indexes.

    Every index column must be one of the table's declared columns.
    """

    name: str
    columns: Mapping[str, Column] = field(default_factory=dict)
    indexes: tuple[Index, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", MappingProxyType(dict(self.columns)))
        object.__setattr__(self, "indexes", tuple(self.indexes))

        for index in self.indexes:
            unknown = [c for c in index.columns if _casefold_lookup(self.columns, c) is None]
            if unknown:
                raise ValueError(
                    f"index '{index.name}' on table '{self.name}' references "
                    f"undeclared column(s): {', '.join(unknown)}"
                )

    @classmethod
    def build(cls, name: str, columns: Iterable[Column], indexes: Iterable[Index] = ()) -> Table:
        return cls(name=name, columns={c.name: c for c in columns}, indexes=tuple(indexes))

    def get_column(self, name: str) -> Optional[Column]:
        key = _casefold_lookup(self.columns, name)
        return self.columns[key] if key is not None else None


@dataclass(frozen=True)
class SchemaCtx:
    """Catalog of tables loaded from DDL."""

    tables: Mapping[str, Table] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tables", MappingProxyType(dict(self.tables)))

    @classmethod
    def empty(cls) -> SchemaCtx:
        return cls()

    @classmethod
    def from_tables(cls, tables: Iterable[Table]) -> SchemaCtx:
        return cls(tables={t.name: t for t in tables})

    def get_table(self, name: str) -> Optional[Table]:
        key = _casefold_lookup(self.tables, name)
        return self.tables[key] if key is not None else None

    def __len__(self) -> int:
        return len(self.tables)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get_table(name) is not None
