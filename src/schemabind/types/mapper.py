"""
Native SQL type to Python type mapping.

The mapper normalises a column's native type text, asks the run's dialect for
its category and derives the Python annotation and zero literal:

    >>> mapper = TypeMapper(PostgreSQLDialect())
    >>> mapper.map_type("varchar(255)")
    MappedType(type='str', zero='""', base='str', category=<TypeCategory.TEXT: 'text'>, optional=False, is_list=False)
    >>> mapper.map_type("int4", nullable=True).type
    'Optional[int]'
    >>> mapper.map_type("_int4").type
    'list[int]'
"""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, Optional, Tuple

from schemabind.errors import UnknownNativeTypeError
from schemabind.naming.case import to_pascal
from schemabind.schema.core import NativeType
from schemabind.utils.logging import get_logger

from .categories import BUILTIN_TYPES, OPTIONAL_ZERO, TARGETS, TypeCategory

if TYPE_CHECKING:
    from schemabind.infrastructure.sql.dialects.base import Dialect

logger = get_logger(__name__)

_PAREN_RE = re.compile(r"\s*\(([^)]*)\)")
_MODIFIER_RE = re.compile(r"\b(unsigned|signed|zerofill)\b")
_SPACE_RE = re.compile(r"\s+")

OPTIONAL_PREFIX = "Optional["
LIST_PREFIX = "list["


@dataclass(frozen=True)
class MappedType:
    """Result of mapping one native type."""

    type: str
    zero: str
    base: str
    category: Optional[TypeCategory] = None
    optional: bool = False
    is_list: bool = False


def normalize(native: str) -> Tuple[str, Tuple[int, ...], bool]:
    """
    Split a native type into (base name, integer arguments, is_array).

    Examples:
        >>> normalize("NUMERIC(10, 2)")
        ('numeric', (10, 2), False)
        >>> normalize("int(10) unsigned")
        ('int', (10,), False)
        >>> normalize("timestamp(6) with time zone")
        ('timestamp with time zone', (6,), False)
        >>> normalize("varchar(20)[]")
        ('varchar', (20,), True)
    """
    text = native.strip().lower()
    is_array = False
    if text.endswith("[]"):
        is_array = True
        while text.endswith("[]"):
            text = text[:-2].rstrip()
    elif text.endswith(" array"):
        is_array = True
        text = text[: -len(" array")]
    args: Tuple[int, ...] = ()
    match = _PAREN_RE.search(text)
    if match:
        args = tuple(
            int(part) for part in (p.strip() for p in match.group(1).split(",")) if part.isdigit()
        )
    text = _PAREN_RE.sub("", text)
    text = _MODIFIER_RE.sub("", text)
    return _SPACE_RE.sub(" ", text).strip(), args, is_array


def unwrap(typ: str) -> str:
    """
    Remove one ``Optional[...]`` layer.

    Examples:
        >>> unwrap("Optional[int]")
        'int'
        >>> unwrap("list[int]")
        'list[int]'
    """
    if typ.startswith(OPTIONAL_PREFIX) and typ.endswith("]"):
        return typ[len(OPTIONAL_PREFIX):-1]
    return typ


def wrap_optional(typ: str) -> str:
    return f"{OPTIONAL_PREFIX}{typ}]"


class TypeMapper:
    """
    Map native SQL types to Python annotations and zero literals.

    Args:
        dialect: Dialect strategy owning the native type table
        custom_package: Package qualifier for custom (enum) types
        enums: Names of schema enums; enum-typed columns map to these
    """

    def __init__(self, dialect: "Dialect", custom_package: str = "", enums: Iterable[str] = ()):
        self.dialect = dialect
        self.custom_package = custom_package
        self.enums = frozenset(enums)
        self._cache: Dict[Tuple, MappedType] = {}

    def map_native(self, native: NativeType) -> MappedType:
        return self.map_type(
            native.name,
            nullable=native.nullable,
            precision=native.precision,
            scale=native.scale,
            is_array=native.is_array,
            enum=native.enum,
        )

    def map_type(
        self,
        native: str,
        nullable: bool = False,
        precision: int = 0,
        scale: int = 0,
        is_array: bool = False,
        enum: Optional[str] = None,
    ) -> MappedType:
        """
        Map a native type.

        Raises:
            UnknownNativeTypeError: The dialect has no category for the type
        """
        key = (native, nullable, precision, scale, is_array, enum)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        mapped = self._map(native, nullable, precision, scale, is_array, enum)
        self._cache[key] = mapped
        return mapped

    def _map(self, native, nullable, precision, scale, is_array, enum) -> MappedType:
        if enum is not None:
            if self.enums and enum not in self.enums:
                raise UnknownNativeTypeError(enum, self.dialect.name)
            base = self.qualify(to_pascal(enum))
            name, _, array = normalize(native)
            is_list = array or is_array or name == f"_{enum.lower()}"
            typ, zero = base, OPTIONAL_ZERO
            if is_list:
                typ, zero = f"{LIST_PREFIX}{base}]", "[]"
            if nullable:
                typ, zero = wrap_optional(typ), OPTIONAL_ZERO
            return MappedType(
                type=typ,
                zero=zero,
                base=base,
                optional=nullable,
                is_list=is_list,
            )
        base, args, array = normalize(native)
        if base.startswith("_") and self.dialect.name == "postgres":
            # postgres element type names for arrays, e.g. _int4
            base, array = base[1:], True
        if not args and precision:
            args = (precision, scale)
        category = self.dialect.classify(base, args)
        if category is None:
            logger.error("types.unknown_native", native=native, dialect=self.dialect.name)
            raise UnknownNativeTypeError(native, self.dialect.name)
        target = TARGETS[category]
        typ, zero = target.type, target.zero
        is_list = array or is_array
        if is_list:
            typ, zero = f"{LIST_PREFIX}{typ}]", "[]"
        if nullable:
            typ, zero = wrap_optional(typ), OPTIONAL_ZERO
        return MappedType(
            type=typ,
            zero=zero,
            base=target.type,
            category=category,
            optional=nullable,
            is_list=is_list,
        )

    def qualify(self, typ: str, known: Iterable[str] = ()) -> str:
        """
        Prefix the custom package to a custom type name.

        ``list[...]`` and ``Optional[...]`` wrappers are preserved; builtin,
        dotted and ``known`` names are returned unchanged.

        Examples:
            >>> TypeMapper(dialect, custom_package="models").qualify("Optional[Status]")
            'Optional[models.Status]'
            >>> TypeMapper(dialect, custom_package="models").qualify("list[int]")
            'list[int]'
        """
        if "." in typ:
            return typ
        prefix = suffix = ""
        while typ.startswith(LIST_PREFIX) or typ.startswith(OPTIONAL_PREFIX):
            head, typ = typ.split("[", 1)
            typ = typ[:-1]
            prefix += head + "["
            suffix += "]"
        if not self.custom_package or typ in BUILTIN_TYPES or typ in known:
            return prefix + typ + suffix
        return f"{prefix}{self.custom_package}.{typ}{suffix}"
