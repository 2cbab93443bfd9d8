"""
SQL upsert statement builder.

Every upsert starts from a full-field INSERT; the dialect then appends its
conflict clause (ON CONFLICT, ON DUPLICATE KEY) or replaces the insert with a
MERGE over the same positional parameters.
"""

from schemabind.units import TableUnit

from ..core.statement import Operation, Statement
from ..dialects.base import Dialect
from .insert import InsertBuilder


class UpsertBuilder:
    """High-level builder for insert-or-update statements."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def upsert(self, table: TableUnit) -> Statement:
        """
        Build an upsert for a table.

        Raises:
            UnsupportedOperationError: If the dialect has no upsert strategy
        """
        if not table.primary_keys:
            return Statement.failed(Operation.UPSERT, f"NO PRIMARY KEY: {table.sql_name}")
        fragments, bindings = InsertBuilder(self.dialect).base(table, all_fields=True)
        fragments = self.dialect.upsert(table, fragments)
        return Statement(Operation.UPSERT, tuple(fragments), tuple(bindings))
