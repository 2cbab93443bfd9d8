"""
Synthesized statement representation.

A ``Statement`` keeps the SQL text as the ordered fragments it was built from
(the renderer joins them into a continuation literal) together with the
ordered parameter bindings needed to execute it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Literal, Optional, Tuple


class Operation(str, Enum):
    """Statement kinds the synthesizer can produce."""

    INSERT = "insert"
    INSERT_ALL = "insert_all"
    UPDATE = "update"
    UPSERT = "upsert"
    DELETE = "delete"
    SELECT_BY_INDEX = "select_by_index"
    CALL_PROCEDURE = "call_procedure"


@dataclass(frozen=True)
class ParamBinding:
    """One bound parameter: accessor name, mapped type and source column."""

    name: str
    type: str
    field: str
    placeholder: str
    position: int
    direction: Literal["in", "out"] = "in"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "field": self.field,
            "placeholder": self.placeholder,
            "position": self.position,
            "direction": self.direction,
        }


@dataclass(frozen=True)
class Statement:
    """
    SQL fragments plus parameter bindings for one operation.

    Example:
        >>> stmt = Statement(Operation.DELETE, ("DELETE FROM users ", "WHERE id = $1"))
        >>> stmt.text
        'DELETE FROM users WHERE id = $1'
    """

    operation: Operation
    fragments: Tuple[str, ...]
    parameters: Tuple[ParamBinding, ...] = field(default_factory=tuple)
    error: Optional[str] = None

    @classmethod
    def failed(cls, operation: Operation, message: str) -> "Statement":
        """Statement whose only fragment is an error marker."""
        return cls(operation, (f"[[ {message} ]]",), (), message)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        return "".join(self.fragments)

    @property
    def inputs(self) -> Tuple[ParamBinding, ...]:
        return tuple(p for p in self.parameters if p.direction == "in")

    @property
    def outputs(self) -> Tuple[ParamBinding, ...]:
        return tuple(p for p in self.parameters if p.direction == "out")

    def to_python(self, indent: str = "    ") -> str:
        """
        Render the fragments as a ``sqlstr`` assignment.

        Each fragment becomes one triple-quoted literal, continued with
        ``+ \\`` onto the next line at ``indent``.
        """
        delim = "''' + \\\n" + indent + "'''"
        return "sqlstr = \\\n" + indent + "'''" + delim.join(self.fragments) + "'''"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation.value,
            "fragments": list(self.fragments),
            "text": self.text,
            "parameters": [p.to_dict() for p in self.parameters],
            "error": self.error,
        }
