"""Native type categories and their Python targets."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet


class TypeCategory(str, Enum):
    """Closed set of native type categories every dialect maps into."""

    BOOLEAN = "boolean"
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    BINARY = "binary"
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"
    INTERVAL = "interval"
    UUID = "uuid"


@dataclass(frozen=True)
class TargetType:
    type: str
    zero: str


TARGETS: Dict[TypeCategory, TargetType] = {
    TypeCategory.BOOLEAN: TargetType("bool", "False"),
    TypeCategory.TEXT: TargetType("str", '""'),
    TypeCategory.INTEGER: TargetType("int", "0"),
    TypeCategory.FLOAT: TargetType("float", "0.0"),
    TypeCategory.DECIMAL: TargetType("decimal.Decimal", "decimal.Decimal(0)"),
    TypeCategory.BINARY: TargetType("bytes", 'b""'),
    TypeCategory.DATE: TargetType("datetime.date", "datetime.date.min"),
    TypeCategory.TIME: TargetType("datetime.time", "datetime.time.min"),
    TypeCategory.TIMESTAMP: TargetType("datetime.datetime", "datetime.datetime.min"),
    TypeCategory.INTERVAL: TargetType("datetime.timedelta", "datetime.timedelta(0)"),
    TypeCategory.UUID: TargetType("uuid.UUID", "uuid.UUID(int=0)"),
}

# Builtin target types; these are never qualified with the custom package.
BUILTIN_TYPES: FrozenSet[str] = frozenset({"bool", "str", "bytes", "int", "float"})

OPTIONAL_ZERO = "None"
