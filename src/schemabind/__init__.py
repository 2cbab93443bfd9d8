"""
schemabind - dialect-aware data-access binding synthesis.

Turns relational schema metadata (tables, views, indexes, foreign keys,
enums, stored routines and user supplied queries) into binding data for a
Python data-access layer: resolved identifiers, mapped types and the SQL
text of every CRUD, lookup and routine call in the target dialect.
"""

from schemabind.config import GenerationOptions
from schemabind.generator import GenerationReport, Generator
from schemabind.schema.loader import build_schema_set, load_schema_file

__version__ = "0.1.0"

__all__ = [
    "GenerationOptions",
    "GenerationReport",
    "Generator",
    "build_schema_set",
    "load_schema_file",
]
