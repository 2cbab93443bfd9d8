"""
SQL dialect strategies.

One strategy per supported engine; ``get_dialect`` resolves a dialect name or
alias to a configured instance.
"""

from typing import Dict, Optional, Type

from schemabind.errors import UnsupportedDialectError

from ..core.identifier import EscapePolicy
from .base import Dialect
from .mysql import MySQLDialect
from .oracle import ORACLE_TYPES, OracleDialect
from .postgresql import PostgreSQLDialect
from .sqlite import SQLiteDialect
from .sqlserver import SQLServerDialect

_CLASSES = (PostgreSQLDialect, MySQLDialect, SQLiteDialect, SQLServerDialect, OracleDialect)

DIALECTS: Dict[str, Type[Dialect]] = {}
for _cls in _CLASSES:
    DIALECTS[_cls.name] = _cls
    for _alias in _cls.aliases:
        DIALECTS[_alias] = _cls

SUPPORTED_DIALECTS = tuple(cls.name for cls in _CLASSES)


def canonical_name(name: str) -> str:
    """
    Canonical dialect name for a name or alias.

    Raises:
        UnsupportedDialectError: If the name is not a known dialect
    """
    cls = DIALECTS.get(name.lower())
    if cls is None:
        raise UnsupportedDialectError(name)
    return cls.name


def get_dialect(
    name: str,
    schema: str = "",
    escape: Optional[EscapePolicy] = None,
    oracle_type: str = "ora",
) -> Dialect:
    """
    Build the dialect strategy for a generation run.

    Args:
        name: Dialect name or alias (postgres, postgresql, mssql, ...)
        schema: Schema used to qualify names
        escape: Escaping policy
        oracle_type: Oracle driver variant (ora or godror); ignored by other dialects

    Raises:
        UnsupportedDialectError: Unknown dialect name
        UnsupportedOracleTypeError: Unknown oracle driver variant
    """
    cls = DIALECTS[canonical_name(name)]
    if cls is OracleDialect:
        return OracleDialect(schema, escape, oracle_type=oracle_type)
    return cls(schema, escape)


__all__ = [
    "Dialect",
    "DIALECTS",
    "ORACLE_TYPES",
    "SUPPORTED_DIALECTS",
    "MySQLDialect",
    "OracleDialect",
    "PostgreSQLDialect",
    "SQLiteDialect",
    "SQLServerDialect",
    "canonical_name",
    "get_dialect",
]
