"""Statement builders, one per operation family."""

from .delete import DeleteBuilder
from .insert import InsertBuilder
from .procedure import ProcedureBuilder
from .select import SelectBuilder
from .update import UpdateBuilder
from .upsert import UpsertBuilder

__all__ = [
    "DeleteBuilder",
    "InsertBuilder",
    "ProcedureBuilder",
    "SelectBuilder",
    "UpdateBuilder",
    "UpsertBuilder",
]
