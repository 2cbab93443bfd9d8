"""MySQL dialect: ``?`` placeholders and ON DUPLICATE KEY UPDATE upserts."""

from typing import Dict, Optional, Tuple

from schemabind.types.categories import TypeCategory
from schemabind.units import ProcUnit, TableUnit

from ..core.parameters import question
from .base import Bindings, Dialect, Fragments

_T = TypeCategory

NATIVE_TYPES: Dict[str, TypeCategory] = {
    "bool": _T.BOOLEAN,
    "boolean": _T.BOOLEAN,
    "char": _T.TEXT,
    "varchar": _T.TEXT,
    "tinytext": _T.TEXT,
    "text": _T.TEXT,
    "mediumtext": _T.TEXT,
    "longtext": _T.TEXT,
    "json": _T.TEXT,
    "enum": _T.TEXT,
    "set": _T.TEXT,
    "tinyint": _T.INTEGER,
    "smallint": _T.INTEGER,
    "mediumint": _T.INTEGER,
    "int": _T.INTEGER,
    "integer": _T.INTEGER,
    "bigint": _T.INTEGER,
    "year": _T.INTEGER,
    "bit": _T.INTEGER,
    "float": _T.FLOAT,
    "double": _T.FLOAT,
    "double precision": _T.FLOAT,
    "real": _T.FLOAT,
    "decimal": _T.DECIMAL,
    "numeric": _T.DECIMAL,
    "dec": _T.DECIMAL,
    "fixed": _T.DECIMAL,
    "binary": _T.BINARY,
    "varbinary": _T.BINARY,
    "tinyblob": _T.BINARY,
    "blob": _T.BINARY,
    "mediumblob": _T.BINARY,
    "longblob": _T.BINARY,
    "date": _T.DATE,
    "time": _T.TIME,
    "datetime": _T.TIMESTAMP,
    "timestamp": _T.TIMESTAMP,
}


class MySQLDialect(Dialect):
    """MySQL dialect; generated keys come from the driver's last insert id."""

    name = "mysql"
    aliases = ("mariadb",)
    native_types = NATIVE_TYPES

    def nth(self, i: int) -> str:
        return question(i)

    def upsert(self, table: TableUnit, insert: Fragments) -> Fragments:
        updates = [f for f in table.fields if not f.is_sequence]
        if not updates:
            # only sequence columns: reassign the primary keys
            updates = list(table.primary_keys)
        return insert + [
            " ON DUPLICATE KEY UPDATE ",
            self.assignments(updates, lambda f: f"VALUES({self.colname(f)})"),
        ]

    def call_procedure(self, proc: ProcUnit) -> Tuple[Fragments, Bindings]:
        return self.positional_call("CALL {name}({args})", self.qualify(proc.sql_name), proc.params)

    def call_function(self, proc: ProcUnit) -> Tuple[Fragments, Bindings]:
        return self.positional_call("SELECT {name}({args})", self.qualify(proc.sql_name), proc.params)

    def classify(self, base: str, args: Tuple[int, ...] = ()) -> Optional[TypeCategory]:
        if base in ("tinyint", "bit") and args[:1] == (1,):
            return TypeCategory.BOOLEAN
        return super().classify(base, args)
