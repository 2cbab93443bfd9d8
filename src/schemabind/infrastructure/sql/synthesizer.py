"""
Statement synthesis entry point.

``synthesize`` dispatches an (operation, unit) pair to its builder. Each
operation accepts exactly one unit type; any other combination raises
``UnsupportedOperationError``. Builders never raise for empty input shapes:
they return a ``Statement`` carrying an error marker, which is logged here.
"""

from typing import Callable, Dict, Tuple, Type, Union

from schemabind.errors import UnsupportedOperationError
from schemabind.units import IndexUnit, ProcUnit, TableUnit
from schemabind.utils.logging import get_logger

from .core.statement import Operation, Statement
from .dialects.base import Dialect
from .operations import (
    DeleteBuilder,
    InsertBuilder,
    ProcedureBuilder,
    SelectBuilder,
    UpdateBuilder,
    UpsertBuilder,
)

logger = get_logger(__name__)

SynthesisUnit = Union[TableUnit, IndexUnit, ProcUnit]

_Rule = Tuple[Type, Callable[[Dialect, SynthesisUnit], Statement]]

RULES: Dict[Operation, _Rule] = {
    Operation.INSERT: (TableUnit, lambda d, u: InsertBuilder(d).insert(u)),
    Operation.INSERT_ALL: (TableUnit, lambda d, u: InsertBuilder(d).insert_all(u)),
    Operation.UPDATE: (TableUnit, lambda d, u: UpdateBuilder(d).update(u)),
    Operation.UPSERT: (TableUnit, lambda d, u: UpsertBuilder(d).upsert(u)),
    Operation.DELETE: (TableUnit, lambda d, u: DeleteBuilder(d).delete(u)),
    Operation.SELECT_BY_INDEX: (IndexUnit, lambda d, u: SelectBuilder(d).select_by_index(u)),
    Operation.CALL_PROCEDURE: (ProcUnit, lambda d, u: ProcedureBuilder(d).call(u)),
}

_UNIT_NAMES = {TableUnit: "table", IndexUnit: "index", ProcUnit: "procedure"}


def synthesize(operation: Union[Operation, str], unit: SynthesisUnit, dialect: Dialect) -> Statement:
    """
    Synthesize the statement for an operation on a unit.

    Args:
        operation: Operation kind (or its value, e.g. "upsert")
        unit: Table, index or procedure unit
        dialect: Dialect strategy of the run

    Returns:
        The synthesized statement; ``statement.error`` is set for empty shapes

    Raises:
        UnsupportedOperationError: Operation not defined for this unit type or dialect
    """
    operation = Operation(operation)
    unit_type, build = RULES[operation]
    if not isinstance(unit, unit_type):
        raise UnsupportedOperationError(
            operation.value, _UNIT_NAMES.get(type(unit), type(unit).__name__), dialect.name
        )
    statement = build(dialect, unit)
    if statement.error:
        logger.warning(
            "synthesis.error_marker",
            operation=operation.value,
            dialect=dialect.name,
            error=statement.error,
        )
    return statement
