"""Stored procedure and function invocation builder."""

from schemabind.units import ProcUnit

from ..core.statement import Operation, Statement
from ..dialects.base import Dialect


class ProcedureBuilder:
    """
    Builds the statement that invokes a stored routine.

    Functions are selected as an expression, procedures are called; both
    formats come from the dialect.
    """

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def call(self, proc: ProcUnit) -> Statement:
        """
        Raises:
            UnsupportedOperationError: If the dialect has no stored routines
        """
        if proc.is_function:
            fragments, bindings = self.dialect.call_function(proc)
        else:
            fragments, bindings = self.dialect.call_procedure(proc)
        return Statement(Operation.CALL_PROCEDURE, tuple(fragments), tuple(bindings))
