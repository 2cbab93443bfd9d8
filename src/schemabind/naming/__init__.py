"""Identifier resolution: case conversion, inflection, reserved words and short names."""

from .case import DEFAULT_INITIALISMS, split_words, to_camel, to_pascal, to_snake
from .inflection import pluralize, singularize
from .registry import NamingRegistry
from .reserved import PYTHON_RESERVED_NAMES, TEMPLATE_RESERVED_NAMES
from .resolver import IdentifierResolver

__all__ = [
    "DEFAULT_INITIALISMS",
    "IdentifierResolver",
    "NamingRegistry",
    "PYTHON_RESERVED_NAMES",
    "TEMPLATE_RESERVED_NAMES",
    "pluralize",
    "singularize",
    "split_words",
    "to_camel",
    "to_pascal",
    "to_snake",
]
