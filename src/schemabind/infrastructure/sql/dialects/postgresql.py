"""
PostgreSQL-specific SQL dialect implementation.

Provides PostgreSQL placeholders, RETURNING for generated keys,
INSERT ... ON CONFLICT upserts and CALL / SELECT routine invocation.
"""

from typing import Dict, Optional, Tuple

from schemabind.types.categories import TypeCategory
from schemabind.units import ProcUnit, TableUnit

from ..core.parameters import dollar
from .base import Bindings, Dialect, Fragments

_T = TypeCategory

NATIVE_TYPES: Dict[str, TypeCategory] = {
    "boolean": _T.BOOLEAN,
    "bool": _T.BOOLEAN,
    "text": _T.TEXT,
    "varchar": _T.TEXT,
    "character varying": _T.TEXT,
    "character": _T.TEXT,
    "char": _T.TEXT,
    "bpchar": _T.TEXT,
    "name": _T.TEXT,
    "citext": _T.TEXT,
    "json": _T.TEXT,
    "jsonb": _T.TEXT,
    "xml": _T.TEXT,
    "inet": _T.TEXT,
    "cidr": _T.TEXT,
    "macaddr": _T.TEXT,
    "smallint": _T.INTEGER,
    "integer": _T.INTEGER,
    "int": _T.INTEGER,
    "bigint": _T.INTEGER,
    "int2": _T.INTEGER,
    "int4": _T.INTEGER,
    "int8": _T.INTEGER,
    "smallserial": _T.INTEGER,
    "serial": _T.INTEGER,
    "bigserial": _T.INTEGER,
    "serial2": _T.INTEGER,
    "serial4": _T.INTEGER,
    "serial8": _T.INTEGER,
    "oid": _T.INTEGER,
    "real": _T.FLOAT,
    "float4": _T.FLOAT,
    "double precision": _T.FLOAT,
    "float8": _T.FLOAT,
    "numeric": _T.DECIMAL,
    "decimal": _T.DECIMAL,
    "money": _T.DECIMAL,
    "bytea": _T.BINARY,
    "bit": _T.TEXT,
    "bit varying": _T.TEXT,
    "varbit": _T.TEXT,
    "date": _T.DATE,
    "time": _T.TIME,
    "timetz": _T.TIME,
    "time with time zone": _T.TIME,
    "time without time zone": _T.TIME,
    "timestamp": _T.TIMESTAMP,
    "timestamptz": _T.TIMESTAMP,
    "timestamp with time zone": _T.TIMESTAMP,
    "timestamp without time zone": _T.TIMESTAMP,
    "interval": _T.INTERVAL,
    "uuid": _T.UUID,
}


class PostgreSQLDialect(Dialect):
    """PostgreSQL SQL dialect implementation."""

    name = "postgres"
    aliases = ("postgresql", "pg", "pgsql")
    native_types = NATIVE_TYPES

    def classify(self, base: str, args: Tuple[int, ...] = ()) -> Optional[TypeCategory]:
        # bit without a length is bit(1); wider bit strings stay text
        if base == "bit" and args[:1] in ((), (1,)):
            return TypeCategory.BOOLEAN
        return super().classify(base, args)

    def nth(self, i: int) -> str:
        return dollar(i)

    def returning(self, table: TableUnit, count: int) -> Tuple[str, Bindings]:
        return " RETURNING " + self.colname(table.sequence), []

    def upsert(self, table: TableUnit, insert: Fragments) -> Fragments:
        return insert + self.on_conflict(table)

    def call_procedure(self, proc: ProcUnit) -> Tuple[Fragments, Bindings]:
        return self.positional_call("CALL {name}({args})", self.qualify(proc.sql_name), proc.params)

    def call_function(self, proc: ProcUnit) -> Tuple[Fragments, Bindings]:
        return self.positional_call(
            "SELECT * FROM {name}({args})", self.qualify(proc.sql_name), proc.params
        )
