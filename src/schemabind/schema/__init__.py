"""Schema model and schema document loading."""

from .core import (
    Column,
    Enum,
    EnumValue,
    ForeignKey,
    Index,
    NativeType,
    Proc,
    ProcKind,
    ProcParam,
    Query,
    QueryField,
    QueryParam,
    Schema,
    SchemaSet,
    Table,
    TableKind,
)

__all__ = [
    "Column",
    "Enum",
    "EnumValue",
    "ForeignKey",
    "Index",
    "NativeType",
    "Proc",
    "ProcKind",
    "ProcParam",
    "Query",
    "QueryField",
    "QueryParam",
    "Schema",
    "SchemaSet",
    "Table",
    "TableKind",
]
