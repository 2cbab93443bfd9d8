"""SQL Server dialect: ``@pN`` placeholders, SCOPE_IDENTITY() and MERGE upserts."""

from typing import Dict, Tuple

from schemabind.types.categories import TypeCategory
from schemabind.units import ProcUnit, TableUnit

from ..core.parameters import at_p
from .base import Bindings, Dialect, Fragments

_T = TypeCategory

NATIVE_TYPES: Dict[str, TypeCategory] = {
    "bit": _T.BOOLEAN,
    "char": _T.TEXT,
    "varchar": _T.TEXT,
    "text": _T.TEXT,
    "nchar": _T.TEXT,
    "nvarchar": _T.TEXT,
    "ntext": _T.TEXT,
    "xml": _T.TEXT,
    "sysname": _T.TEXT,
    "tinyint": _T.INTEGER,
    "smallint": _T.INTEGER,
    "int": _T.INTEGER,
    "bigint": _T.INTEGER,
    "real": _T.FLOAT,
    "float": _T.FLOAT,
    "decimal": _T.DECIMAL,
    "numeric": _T.DECIMAL,
    "money": _T.DECIMAL,
    "smallmoney": _T.DECIMAL,
    "binary": _T.BINARY,
    "varbinary": _T.BINARY,
    "image": _T.BINARY,
    "rowversion": _T.BINARY,
    "timestamp": _T.BINARY,
    "date": _T.DATE,
    "time": _T.TIME,
    "datetime": _T.TIMESTAMP,
    "datetime2": _T.TIMESTAMP,
    "smalldatetime": _T.TIMESTAMP,
    "datetimeoffset": _T.TIMESTAMP,
    "uniqueidentifier": _T.UUID,
}

SCOPE_IDENTITY = "; SELECT ID = CONVERT(BIGINT, SCOPE_IDENTITY())"


class SQLServerDialect(Dialect):
    """Microsoft SQL Server dialect."""

    name = "sqlserver"
    aliases = ("mssql", "azuresql")
    native_types = NATIVE_TYPES

    def nth(self, i: int) -> str:
        return at_p(i)

    def returning(self, table: TableUnit, count: int) -> Tuple[str, Bindings]:
        return SCOPE_IDENTITY, []

    def upsert(self, table: TableUnit, insert: Fragments) -> Fragments:
        return self.merge(
            table,
            header=f"MERGE {self.qualify(table.sql_name)} AS t ",
            closing=") AS s ",
            predicate="ON {}",
            terminator=";",
        )

    def call_procedure(self, proc: ProcUnit) -> Tuple[Fragments, Bindings]:
        # bare procedure name, parameters bound positionally
        bindings = [self.bind(f, i) for i, f in enumerate(proc.params)]
        return [self.qualify(proc.sql_name)], bindings

    def call_function(self, proc: ProcUnit) -> Tuple[Fragments, Bindings]:
        return self.positional_call(
            "SELECT {name}({args}) AS OUT", self.qualify(proc.sql_name), proc.params
        )
