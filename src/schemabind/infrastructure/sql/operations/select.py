"""SQL SELECT builder for index lookups."""

from schemabind.units import IndexUnit

from ..core.statement import Operation, Statement
from ..dialects.base import Dialect


class SelectBuilder:
    """High-level builder for index lookups."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def select_by_index(self, index: IndexUnit) -> Statement:
        """Select every column of the index's table, filtered on the index fields."""
        if not index.fields:
            return Statement.failed(
                Operation.SELECT_BY_INDEX, f"NO INDEX FIELDS: {index.sql_name}"
            )
        columns = ", ".join(self.dialect.colname(f) for f in index.table.fields)
        bindings = [self.dialect.bind(f, i) for i, f in enumerate(index.fields)]
        predicate = " AND ".join(
            f"{self.dialect.colname(f)} = {b.placeholder}"
            for f, b in zip(index.fields, bindings)
        )
        return Statement(
            Operation.SELECT_BY_INDEX,
            (
                "SELECT ",
                columns + " ",
                "FROM " + self.dialect.qualify(index.table.sql_name) + " ",
                "WHERE " + predicate,
            ),
            tuple(bindings),
        )
