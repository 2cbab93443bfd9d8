"""Core schema model types for schemabind.

The schema model is the normalized, read-only description of a database
produced by a loader (or built directly in code). Nothing in the core mutates
it once constructed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum as _Enum
from typing import List, Optional, Tuple

from schemabind.errors import SchemaModelError


class TableKind(str, _Enum):
    """Kinds of relations that produce a type definition."""

    TABLE = "table"
    VIEW = "view"


class ProcKind(str, _Enum):
    """Stored routine kinds."""

    PROCEDURE = "procedure"
    FUNCTION = "function"


@dataclass(frozen=True)
class NativeType:
    """A column's SQL type as reported by the database."""

    name: str
    nullable: bool = False
    precision: int = 0
    scale: int = 0
    is_array: bool = False
    enum: Optional[str] = None


@dataclass(frozen=True)
class Column:
    """Definition of a single column."""

    name: str
    type: NativeType
    is_primary: bool = False
    is_sequence: bool = False
    comment: str = ""


@dataclass(frozen=True)
class Index:
    """Definition of a lookup index over columns of its table."""

    name: str
    fields: Tuple[str, ...]
    func: str = ""
    is_unique: bool = False
    is_primary: bool = False


@dataclass(frozen=True)
class ForeignKey:
    """Definition of a foreign key; fields and ref_fields are paired by position."""

    name: str
    fields: Tuple[str, ...]
    ref_table: str
    ref_fields: Tuple[str, ...]
    func: str = ""
    ref_func: str = ""

    def __post_init__(self) -> None:
        if len(self.fields) != len(self.ref_fields):
            raise SchemaModelError(
                f"foreign key {self.name!r} pairs {len(self.fields)} fields "
                f"with {len(self.ref_fields)} referenced fields"
            )


@dataclass(frozen=True)
class Table:
    """Complete definition of a table or view."""

    name: str
    columns: Tuple[Column, ...]
    kind: TableKind = TableKind.TABLE
    manual: bool = False
    indexes: Tuple[Index, ...] = ()
    foreign_keys: Tuple[ForeignKey, ...] = ()
    comment: str = ""

    def __post_init__(self) -> None:
        names = [c.name for c in self.columns]
        if len(set(names)) != len(names):
            raise SchemaModelError(f"table {self.name!r} has duplicate columns")
        known = set(names)
        for index in self.indexes:
            missing = [f for f in index.fields if f not in known]
            if missing:
                raise SchemaModelError(
                    f"index {index.name!r} references unknown columns {missing}"
                )
        for fk in self.foreign_keys:
            missing = [f for f in fk.fields if f not in known]
            if missing:
                raise SchemaModelError(
                    f"foreign key {fk.name!r} references unknown columns {missing}"
                )

    @property
    def primary_keys(self) -> Tuple[Column, ...]:
        return tuple(c for c in self.columns if c.is_primary)

    def column(self, name: str) -> Column:
        for c in self.columns:
            if c.name == name:
                return c
        raise SchemaModelError(f"table {self.name!r} has no column {name!r}")


@dataclass(frozen=True)
class EnumValue:
    name: str
    const_value: int


@dataclass(frozen=True)
class Enum:
    name: str
    values: Tuple[EnumValue, ...]
    comment: str = ""


@dataclass(frozen=True)
class ProcParam:
    """A routine parameter or return value."""

    name: str
    type: NativeType


@dataclass(frozen=True)
class Proc:
    name: str
    kind: ProcKind = ProcKind.PROCEDURE
    params: Tuple[ProcParam, ...] = ()
    returns: Tuple[ProcParam, ...] = ()
    void: bool = False
    comment: str = ""


@dataclass(frozen=True)
class QueryParam:
    """A parameter of a custom query."""

    name: str
    type: str
    interpolate: bool = False
    join: bool = False


@dataclass(frozen=True)
class QueryField:
    name: str
    type: NativeType


@dataclass(frozen=True)
class Query:
    """A user supplied query, generated in query mode."""

    type: str
    query: Tuple[str, ...]
    name: str = ""
    comments: Tuple[str, ...] = ()
    params: Tuple[QueryParam, ...] = ()
    fields: Tuple[QueryField, ...] = ()
    one: bool = False
    flat: bool = False
    exec: bool = False
    interpolate: bool = False
    manual_fields: bool = False
    comment: str = ""
    type_comment: str = ""

    def __post_init__(self) -> None:
        if self.comments and len(self.comments) != len(self.query):
            raise SchemaModelError(
                f"query {self.name or self.type!r} has {len(self.query)} lines "
                f"but {len(self.comments)} comments"
            )


@dataclass(frozen=True)
class Schema:
    """All objects of one database schema."""

    name: str = ""
    tables: Tuple[Table, ...] = ()
    views: Tuple[Table, ...] = ()
    enums: Tuple[Enum, ...] = ()
    procs: Tuple[Proc, ...] = ()


@dataclass(frozen=True)
class SchemaSet:
    """Everything one generation run consumes."""

    schemas: Tuple[Schema, ...] = ()
    queries: Tuple[Query, ...] = ()

    def enum_names(self) -> List[str]:
        return [e.name for s in self.schemas for e in s.enums]


__all__ = [
    "TableKind",
    "ProcKind",
    "NativeType",
    "Column",
    "Index",
    "ForeignKey",
    "Table",
    "EnumValue",
    "Enum",
    "ProcParam",
    "Proc",
    "QueryParam",
    "QueryField",
    "Query",
    "Schema",
    "SchemaSet",
]
