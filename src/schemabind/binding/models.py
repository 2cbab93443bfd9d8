"""
Binding objects handed to the template renderer.

Each binding records its destination file and sort key; ``to_dict`` gives a
JSON-serialisable form.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from schemabind.infrastructure.sql import Statement
from schemabind.units import EnumValueUnit, Field


def serialize(value: Any) -> Any:
    """Recursively convert bindings, units and statements to plain data."""
    if isinstance(value, Statement):
        return value.to_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: serialize(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    return value


@dataclass
class Binding:
    """Common destination and ordering data."""

    kind: ClassVar[str] = "binding"

    dest: str
    sort_key: Tuple[str, str]

    def to_dict(self) -> Dict[str, Any]:
        data = serialize(self)
        data["kind"] = self.kind
        return data


@dataclass
class TableBinding(Binding):
    """Type definition plus the CRUD statements of a table, view or query type."""

    kind: ClassVar[str] = "table"

    name: str = ""
    sql_name: str = ""
    short: str = ""
    table_kind: str = "table"
    fields: Tuple[Field, ...] = ()
    primary_keys: Tuple[Field, ...] = ()
    zero: str = ""
    manual: bool = False
    statements: Dict[str, Statement] = field(default_factory=dict)
    calls: Dict[str, str] = field(default_factory=dict)
    logs: Dict[str, str] = field(default_factory=dict)
    comment: str = ""


@dataclass
class IndexBinding(Binding):
    kind: ClassVar[str] = "index"

    name: str = ""
    sql_name: str = ""
    table: str = ""
    signature: str = ""
    statement: Optional[Statement] = None
    params: List[str] = field(default_factory=list)
    call: str = ""
    is_unique: bool = False


@dataclass
class ForeignKeyBinding(Binding):
    kind: ClassVar[str] = "foreignkey"

    name: str = ""
    sql_name: str = ""
    table: str = ""
    ref_table: str = ""
    signature: str = ""
    call: str = ""


@dataclass
class ProcBinding(Binding):
    kind: ClassVar[str] = "proc"

    name: str = ""
    sql_name: str = ""
    signature: str = ""
    type_signature: str = ""
    statement: Optional[Statement] = None
    call: str = ""
    overloaded: bool = False
    void: bool = False


@dataclass
class QueryBinding(Binding):
    kind: ClassVar[str] = "query"

    name: str = ""
    type: str = ""
    signature: str = ""
    sqlstr: str = ""
    params: List[str] = field(default_factory=list)
    call: str = ""
    one: bool = False
    flat: bool = False
    exec: bool = False
    interpolate: bool = False
    comment: str = ""


@dataclass
class EnumBinding(Binding):
    kind: ClassVar[str] = "enum"

    name: str = ""
    sql_name: str = ""
    values: Tuple[EnumValueUnit, ...] = ()
    comment: str = ""
