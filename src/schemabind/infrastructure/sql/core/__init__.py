"""Core SQL utilities package."""

from .identifier import EscapePolicy, qualify_table, quote_identifier
from .parameters import at_p, colon, dollar, named_placeholder, question
from .statement import Operation, ParamBinding, Statement

__all__ = [
    "EscapePolicy",
    "quote_identifier",
    "qualify_table",
    "at_p",
    "colon",
    "dollar",
    "named_placeholder",
    "question",
    "Operation",
    "ParamBinding",
    "Statement",
]
