"""
SQL INSERT statement builders.

Provides the column/value insert shared by insert, insert-all and upsert, and
the generated-key retrieval suffix delegated to the dialect.
"""

from typing import List, Tuple

from schemabind.units import TableUnit

from ..core.statement import Operation, ParamBinding, Statement
from ..dialects.base import Dialect


class InsertBuilder:
    """
    High-level builder for INSERT statements.

    Example:
        >>> from schemabind.infrastructure.sql import InsertBuilder, PostgreSQLDialect
        >>> builder = InsertBuilder(PostgreSQLDialect(schema="public"))
        >>> print(builder.insert(users).text)
        INSERT INTO public.users (name, email) VALUES ($1, $2) RETURNING id
    """

    def __init__(self, dialect: Dialect):
        """
        Initialize the InsertBuilder.

        Args:
            dialect: SQL dialect to use for statement generation
        """
        self.dialect = dialect

    def base(self, table: TableUnit, all_fields: bool = False) -> Tuple[List[str], List[ParamBinding]]:
        """
        Build the column list and positional placeholders of an INSERT.

        Args:
            table: Table to insert into
            all_fields: Include sequence fields

        Returns:
            Tuple of (fragments, bindings); placeholders start at index 0
        """
        fields = [f for f in table.fields if all_fields or not f.is_sequence]
        bindings = [self.dialect.bind(f, i) for i, f in enumerate(fields)]
        fragments = [
            "INSERT INTO " + self.dialect.qualify(table.sql_name) + " (",
            ", ".join(self.dialect.colname(f) for f in fields),
            ") VALUES (",
            ", ".join(b.placeholder for b in bindings),
            ")",
        ]
        return fragments, bindings

    def insert(self, table: TableUnit) -> Statement:
        """
        Build an INSERT that skips sequence fields.

        Manual tables insert every field. When the table has a sequence
        field the dialect's generated-key suffix is appended.
        """
        if table.manual:
            return self.insert_all(table, operation=Operation.INSERT)
        fragments, bindings = self.base(table)
        if not bindings:
            return Statement.failed(
                Operation.INSERT, f"NO INSERTABLE FIELDS: {table.sql_name}"
            )
        if table.sequence is not None:
            suffix, outputs = self.dialect.returning(table, len(bindings))
            fragments[-1] += suffix
            bindings += outputs
        return Statement(Operation.INSERT, tuple(fragments), tuple(bindings))

    def insert_all(self, table: TableUnit, operation: Operation = Operation.INSERT_ALL) -> Statement:
        """Build an INSERT over every field, without a returning suffix."""
        fragments, bindings = self.base(table, all_fields=True)
        if not bindings:
            return Statement.failed(operation, f"NO INSERTABLE FIELDS: {table.sql_name}")
        return Statement(operation, tuple(fragments), tuple(bindings))
