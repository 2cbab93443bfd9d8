"""SQL UPDATE statement builder."""

from typing import List, Tuple

from schemabind.units import TableUnit

from ..core.statement import Operation, ParamBinding, Statement
from ..dialects.base import Dialect


class UpdateBuilder:
    """
    Builds ``UPDATE ... SET ... WHERE`` over a table's primary keys.

    SET placeholders are numbered from 0; WHERE placeholders continue from
    the SET count, so the key at position i of the primary key list binds at
    index ``len(set) + i``.
    """

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def set_clause(self, table: TableUnit) -> Tuple[List[str], List[ParamBinding]]:
        fields = [f for f in table.fields if not f.is_primary]
        bindings = [self.dialect.bind(f, i) for i, f in enumerate(fields)]
        assignments = ", ".join(
            f"{self.dialect.colname(f)} = {b.placeholder}"
            for f, b in zip(fields, bindings)
        )
        return [
            "UPDATE " + self.dialect.qualify(table.sql_name) + " SET ",
            assignments + " ",
        ], bindings

    def update(self, table: TableUnit) -> Statement:
        if not table.primary_keys:
            return Statement.failed(Operation.UPDATE, f"NO PRIMARY KEY: {table.sql_name}")
        fragments, bindings = self.set_clause(table)
        if not bindings:
            return Statement.failed(
                Operation.UPDATE, f"NO UPDATABLE FIELDS: {table.sql_name}"
            )
        n = len(bindings)
        where = [self.dialect.bind(f, n + i) for i, f in enumerate(table.primary_keys)]
        fragments.append(
            "WHERE "
            + " AND ".join(
                f"{self.dialect.colname(f)} = {b.placeholder}"
                for f, b in zip(table.primary_keys, where)
            )
        )
        return Statement(Operation.UPDATE, tuple(fragments), tuple(bindings + where))
