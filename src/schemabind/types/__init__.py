"""Native type categories and the type mapper."""

from .categories import BUILTIN_TYPES, OPTIONAL_ZERO, TARGETS, TargetType, TypeCategory
from .mapper import MappedType, TypeMapper, normalize, unwrap, wrap_optional

__all__ = [
    "BUILTIN_TYPES",
    "OPTIONAL_ZERO",
    "TARGETS",
    "MappedType",
    "TargetType",
    "TypeCategory",
    "TypeMapper",
    "normalize",
    "unwrap",
    "wrap_optional",
]
