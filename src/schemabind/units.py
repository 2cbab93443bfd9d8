"""
Resolved generation units.

A unit is a schema object after identifier resolution and type mapping: SQL
names are kept next to their Python identifiers and every field carries its
mapped type and zero literal. Units are what the statement synthesizer and the
binding emitter consume; ``Unit`` is the closed union of all of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Field:
    """A column, routine parameter or query field with its resolved names."""

    name: str
    sql_name: str
    type: str
    zero: str
    nullable: bool = False
    is_primary: bool = False
    is_sequence: bool = False
    comment: str = ""


@dataclass(frozen=True)
class TableUnit:
    """A table, view or custom query result type."""

    name: str
    sql_name: str
    fields: Tuple[Field, ...]
    kind: str = "table"
    manual: bool = False
    comment: str = ""

    @property
    def primary_keys(self) -> Tuple[Field, ...]:
        return tuple(f for f in self.fields if f.is_primary)

    @property
    def sequence(self) -> Optional[Field]:
        """The database-generated field, if any."""
        return next((f for f in self.fields if f.is_sequence), None)


@dataclass(frozen=True)
class IndexUnit:
    sql_name: str
    func: str
    table: TableUnit
    fields: Tuple[Field, ...]
    is_unique: bool = False
    is_primary: bool = False


@dataclass(frozen=True)
class ForeignKeyUnit:
    name: str
    sql_name: str
    table: TableUnit
    fields: Tuple[Field, ...]
    ref_table: str
    ref_fields: Tuple[Field, ...]
    ref_func: str


@dataclass(frozen=True)
class ProcUnit:
    kind: str
    name: str
    sql_name: str
    signature: str
    params: Tuple[Field, ...] = ()
    returns: Tuple[Field, ...] = ()
    void: bool = False
    overloaded_name: str = ""
    overloaded: bool = False
    comment: str = ""

    @property
    def is_function(self) -> bool:
        return self.kind == "function"

    @property
    def func_name(self) -> str:
        return self.overloaded_name if self.overloaded else self.name


@dataclass(frozen=True)
class EnumValueUnit:
    name: str
    sql_name: str
    const_value: int


@dataclass(frozen=True)
class EnumUnit:
    name: str
    sql_name: str
    values: Tuple[EnumValueUnit, ...]
    comment: str = ""


@dataclass(frozen=True)
class QueryParamUnit:
    name: str
    type: str
    interpolate: bool = False
    join: bool = False


@dataclass(frozen=True)
class QueryUnit:
    name: str
    query: Tuple[str, ...]
    comments: Tuple[str, ...]
    params: Tuple[QueryParamUnit, ...]
    type: TableUnit
    one: bool = False
    flat: bool = False
    exec: bool = False
    interpolate: bool = False
    comment: str = ""


Unit = Union[TableUnit, IndexUnit, ForeignKeyUnit, ProcUnit, QueryUnit, EnumUnit]
