"""Binding emitter: converts schema units into renderer-ready binding objects."""

from .converter import UnitConverter, overloaded_name, query_name
from .emitter import BindingEmitter, file_name, proc_prefix
from .models import (
    Binding,
    EnumBinding,
    ForeignKeyBinding,
    IndexBinding,
    ProcBinding,
    QueryBinding,
    TableBinding,
)
from .signatures import SignatureBuilder

__all__ = [
    "Binding",
    "BindingEmitter",
    "EnumBinding",
    "ForeignKeyBinding",
    "IndexBinding",
    "ProcBinding",
    "QueryBinding",
    "SignatureBuilder",
    "TableBinding",
    "UnitConverter",
    "file_name",
    "overloaded_name",
    "proc_prefix",
    "query_name",
]
