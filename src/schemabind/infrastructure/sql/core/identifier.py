"""
SQL identifier handling utilities.

Provides functions for quoting and qualifying SQL identifiers (schema, table
and column names) according to the run's escaping policy.
"""

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class EscapePolicy:
    """Which kinds of names are quoted in synthesized SQL."""

    schema: bool = False
    table: bool = False
    column: bool = False

    @classmethod
    def from_targets(cls, targets: Iterable[str]) -> "EscapePolicy":
        """
        Build a policy from escape targets (none, schema, table, column, all).

        Examples:
            >>> EscapePolicy.from_targets(["table", "column"])
            EscapePolicy(schema=False, table=True, column=True)
            >>> EscapePolicy.from_targets(["all"])
            EscapePolicy(schema=True, table=True, column=True)
        """
        targets = set(targets)
        if "none" in targets:
            return cls()
        if "all" in targets:
            return cls(schema=True, table=True, column=True)
        return cls(
            schema="schema" in targets,
            table="table" in targets,
            column="column" in targets,
        )


def quote_identifier(name: str, dialect: str = "postgres") -> str:
    """
    Quote a SQL identifier (schema, table or column name).

    Args:
        name: The identifier to quote
        dialect: Database dialect

    Returns:
        Properly quoted identifier

    Examples:
        >>> quote_identifier("user")
        '"user"'
        >>> quote_identifier("table", dialect="mysql")
        '`table`'
        >>> quote_identifier("order", dialect="sqlserver")
        '[order]'
    """
    if dialect == "mysql":
        # Escape backticks in MySQL
        escaped = name.replace("`", "``")
        return f"`{escaped}`"
    if dialect == "sqlserver":
        escaped = name.replace("]", "]]")
        return f"[{escaped}]"
    # Escape internal double quotes by doubling them
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def qualify_table(
    table: str,
    schema: Optional[str] = None,
    dialect: str = "postgres",
    escape: EscapePolicy = EscapePolicy(),
) -> str:
    """
    Create a qualified table (or routine) name with optional schema prefix.

    sqlite has no schemas, so its names are never prefixed.

    Examples:
        >>> qualify_table("users", schema="public")
        'public.users'
        >>> qualify_table("users", schema="public", escape=EscapePolicy(table=True))
        'public."users"'
        >>> qualify_table("users", schema="main", dialect="sqlite")
        'users'
    """
    name = quote_identifier(table, dialect) if escape.table else table
    if not schema or dialect == "sqlite":
        return name
    prefix = quote_identifier(schema, dialect) if escape.schema else schema
    return f"{prefix}.{name}"
