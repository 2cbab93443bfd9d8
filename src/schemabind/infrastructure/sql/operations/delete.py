"""SQL DELETE statement builder."""

from schemabind.units import TableUnit

from ..core.statement import Operation, Statement
from ..dialects.base import Dialect


class DeleteBuilder:
    """
    Builds ``DELETE FROM ... WHERE`` over a table's primary keys.

    Tables without a primary key yield a failed statement.
    """

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def delete(self, table: TableUnit) -> Statement:
        """DELETE with an AND-joined predicate over every primary key, from index 0."""
        if not table.primary_keys:
            return Statement.failed(Operation.DELETE, f"NO PRIMARY KEY: {table.sql_name}")
        bindings = [self.dialect.bind(f, i) for i, f in enumerate(table.primary_keys)]
        predicate = " AND ".join(
            f"{self.dialect.colname(f)} = {b.placeholder}"
            for f, b in zip(table.primary_keys, bindings)
        )
        return Statement(
            Operation.DELETE,
            ("DELETE FROM " + self.dialect.qualify(table.sql_name) + " ", "WHERE " + predicate),
            tuple(bindings),
        )
