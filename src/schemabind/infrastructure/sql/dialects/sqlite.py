"""
SQLite dialect.

SQLite has no schemas and no stored routines. Native types that are not in
the exact-name table are classified with SQLite's column affinity rules.
"""

from typing import Dict, Optional, Tuple

from schemabind.types.categories import TypeCategory
from schemabind.units import TableUnit

from ..core.parameters import question
from .base import Dialect, Fragments

_T = TypeCategory

NATIVE_TYPES: Dict[str, TypeCategory] = {
    "bool": _T.BOOLEAN,
    "boolean": _T.BOOLEAN,
    "date": _T.DATE,
    "datetime": _T.TIMESTAMP,
    "timestamp": _T.TIMESTAMP,
    "time": _T.TIME,
    "numeric": _T.DECIMAL,
    "decimal": _T.DECIMAL,
    "uuid": _T.UUID,
}

# Affinity rules, applied in order to the declared type name.
AFFINITY = (
    (("int",), _T.INTEGER),
    (("char", "clob", "text"), _T.TEXT),
    (("blob",), _T.BINARY),
    (("real", "floa", "doub"), _T.FLOAT),
)


class SQLiteDialect(Dialect):
    """SQLite dialect; generated keys come from the cursor's lastrowid."""

    name = "sqlite"
    aliases = ("sqlite3", "file")
    native_types = NATIVE_TYPES

    def nth(self, i: int) -> str:
        return question(i)

    def upsert(self, table: TableUnit, insert: Fragments) -> Fragments:
        return insert + self.on_conflict(table)

    def classify(self, base: str, args: Tuple[int, ...] = ()) -> Optional[TypeCategory]:
        category = super().classify(base, args)
        if category is not None:
            return category
        if not base:
            return _T.BINARY
        for needles, affinity in AFFINITY:
            if any(n in base for n in needles):
                return affinity
        return None
