"""Reserved identifier tables.

``PYTHON_RESERVED_NAMES`` maps every Python keyword and builtin type name to a
distinct substitute. ``TEMPLATE_RESERVED_NAMES`` holds the local names and
modules used inside generated accessors; a short name that collides with one
of them gets the configured conflict suffix.
"""

from typing import Dict, FrozenSet

PYTHON_RESERVED_NAMES: Dict[str, str] = {
    "False": "false",
    "None": "none",
    "True": "true",
    "and": "and_",
    "as": "as_",
    "assert": "assrt",
    "async": "asnc",
    "await": "awt",
    "break": "brk",
    "class": "cls",
    "continue": "cnt",
    "def": "def_",
    "del": "dl",
    "elif": "elf",
    "else": "els",
    "except": "expt",
    "finally": "fnl",
    "for": "for_",
    "from": "frm",
    "global": "glb",
    "if": "if_",
    "import": "impt",
    "in": "in_",
    "is": "is_",
    "lambda": "lbd",
    "nonlocal": "nlcl",
    "not": "not_",
    "or": "or_",
    "pass": "pss",
    "raise": "rse",
    "return": "rtn",
    "try": "try_",
    "while": "whl",
    "with": "wth",
    "yield": "yld",
    # builtin types
    "int": "i",
    "float": "f",
    "complex": "c",
    "list": "l",
    "tuple": "tpl",
    "range": "r",
    "str": "s",
    "bytes": "b",
    "bytearray": "ba",
    "memoryview": "m",
    "set": "st",
    "frozenset": "fs",
    "dict": "d",
    "type": "t",
    "bool": "bl",
    "object": "obj",
}

TEMPLATE_RESERVED_NAMES: FrozenSet[str] = frozenset(
    {
        # variables
        "ctx",
        "cursor",
        "db",
        "err",
        "log",
        "logf",
        "res",
        "rows",
        "self",
        "sqlstr",
        # modules
        "context",
        "csv",
        "datetime",
        "decimal",
        "driver",
        "enum",
        "errors",
        "json",
        "re",
        "sql",
        "time",
        "typing",
        "uuid",
    }
)
