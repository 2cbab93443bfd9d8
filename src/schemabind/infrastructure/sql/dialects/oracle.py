"""
Oracle dialect.

Oracle retrieves generated keys through an ``INTO`` bound output parameter.
The form of that parameter depends on the driver variant:

- ``ora``: positional, continuing after the input placeholders
  (``RETURNING id INTO :3``)
- ``godror``: the named ``:pk`` variable, marked for the driver's last insert
  id support (``RETURNING id /*LASTINSERTID*/ INTO :pk``)
"""

from typing import Dict, Optional, Tuple

from schemabind.errors import UnsupportedOracleTypeError
from schemabind.types.categories import TypeCategory
from schemabind.units import ProcUnit, TableUnit

from ..core.identifier import EscapePolicy
from ..core.parameters import colon, named_placeholder
from .base import Bindings, Dialect, Fragments

_T = TypeCategory

ORACLE_TYPES = ("ora", "godror")

NATIVE_TYPES: Dict[str, TypeCategory] = {
    "char": _T.TEXT,
    "nchar": _T.TEXT,
    "varchar": _T.TEXT,
    "varchar2": _T.TEXT,
    "nvarchar2": _T.TEXT,
    "clob": _T.TEXT,
    "nclob": _T.TEXT,
    "long": _T.TEXT,
    "rowid": _T.TEXT,
    "urowid": _T.TEXT,
    "xmltype": _T.TEXT,
    "integer": _T.INTEGER,
    "int": _T.INTEGER,
    "smallint": _T.INTEGER,
    "pls_integer": _T.INTEGER,
    "binary_integer": _T.INTEGER,
    "float": _T.FLOAT,
    "real": _T.FLOAT,
    "binary_float": _T.FLOAT,
    "binary_double": _T.FLOAT,
    "number": _T.DECIMAL,
    "decimal": _T.DECIMAL,
    "numeric": _T.DECIMAL,
    "blob": _T.BINARY,
    "raw": _T.BINARY,
    "long raw": _T.BINARY,
    "bfile": _T.BINARY,
    "date": _T.TIMESTAMP,
    "timestamp": _T.TIMESTAMP,
    "timestamp with time zone": _T.TIMESTAMP,
    "timestamp with local time zone": _T.TIMESTAMP,
    "interval day to second": _T.INTERVAL,
    "interval year to month": _T.INTERVAL,
}


class OracleDialect(Dialect):
    """Oracle dialect with ``ora`` and ``godror`` driver variants."""

    name = "oracle"
    aliases = ("oci8",)
    native_types = NATIVE_TYPES

    def __init__(self, schema: str = "", escape: Optional[EscapePolicy] = None,
                 oracle_type: str = "ora"):
        if oracle_type not in ORACLE_TYPES:
            raise UnsupportedOracleTypeError(oracle_type)
        super().__init__(schema, escape)
        self.oracle_type = oracle_type

    def nth(self, i: int) -> str:
        return colon(i)

    def returning(self, table: TableUnit, count: int) -> Tuple[str, Bindings]:
        seq = table.sequence
        if self.oracle_type == "godror":
            out = self.bind(seq, count, placeholder=named_placeholder("pk"), direction="out")
            return f" RETURNING {self.colname(seq)} /*LASTINSERTID*/ INTO :pk", [out]
        out = self.bind(seq, count, direction="out")
        return f" RETURNING {self.colname(seq)} INTO {out.placeholder}", [out]

    def upsert(self, table: TableUnit, insert: Fragments) -> Fragments:
        return self.merge(
            table,
            header=f"MERGE INTO {self.qualify(table.sql_name)} t ",
            closing="FROM DUAL) s ",
            predicate="ON ({})",
            terminator="",
        )

    def call_procedure(self, proc: ProcUnit) -> Tuple[Fragments, Bindings]:
        """PL/SQL block with named binds: params first, then out-bound returns.

        Procedure names are never schema qualified.
        """
        bindings = [
            self.bind(f, i, placeholder=named_placeholder(f.sql_name))
            for i, f in enumerate(proc.params)
        ]
        start = len(bindings)
        bindings += [
            self.bind(f, start + i, placeholder=named_placeholder(f.sql_name), direction="out")
            for i, f in enumerate(proc.returns)
        ]
        args = ", ".join(b.placeholder for b in bindings)
        return [f"BEGIN {proc.sql_name}({args}); END;"], bindings

    def call_function(self, proc: ProcUnit) -> Tuple[Fragments, Bindings]:
        return self.positional_call(
            "SELECT {name}({args}) FROM dual", self.qualify(proc.sql_name), proc.params
        )

    def classify(self, base: str, args: Tuple[int, ...] = ()) -> Optional[TypeCategory]:
        # number(p) and number(p, 0) hold integers
        if base == "number" and args and (len(args) == 1 or args[1] == 0):
            return TypeCategory.INTEGER
        return super().classify(base, args)
