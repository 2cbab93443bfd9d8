"""
SQL module for dialect-aware statement synthesis.

This module provides identifier quoting, schema qualification, placeholder
numbering and the per-dialect statement builders.
"""

from .core.identifier import EscapePolicy, qualify_table, quote_identifier
from .core.statement import Operation, ParamBinding, Statement
from .dialects import (
    Dialect,
    MySQLDialect,
    OracleDialect,
    PostgreSQLDialect,
    SQLiteDialect,
    SQLServerDialect,
    get_dialect,
)
from .operations import (
    DeleteBuilder,
    InsertBuilder,
    ProcedureBuilder,
    SelectBuilder,
    UpdateBuilder,
    UpsertBuilder,
)
from .synthesizer import synthesize

__all__ = [
    "EscapePolicy",
    "quote_identifier",
    "qualify_table",
    "Operation",
    "ParamBinding",
    "Statement",
    "Dialect",
    "MySQLDialect",
    "OracleDialect",
    "PostgreSQLDialect",
    "SQLiteDialect",
    "SQLServerDialect",
    "get_dialect",
    "DeleteBuilder",
    "InsertBuilder",
    "ProcedureBuilder",
    "SelectBuilder",
    "UpdateBuilder",
    "UpsertBuilder",
    "synthesize",
]
