"""
SQL parameter placeholder utilities.

Each dialect numbers its placeholders with one of the factories below. All
factories take the 0-based parameter position.
"""


def dollar(i: int) -> str:
    """
    PostgreSQL positional placeholder.

    Examples:
        >>> dollar(0)
        '$1'
    """
    return f"${i + 1}"


def question(i: int) -> str:
    """Anonymous placeholder used by MySQL and SQLite."""
    return "?"


def at_p(i: int) -> str:
    """
    SQL Server placeholder.

    Examples:
        >>> at_p(2)
        '@p3'
    """
    return f"@p{i + 1}"


def colon(i: int) -> str:
    """
    Oracle positional placeholder.

    Examples:
        >>> colon(0)
        ':1'
    """
    return f":{i + 1}"


def named_placeholder(name: str) -> str:
    """Oracle named bind variable."""
    return f":{name}"

