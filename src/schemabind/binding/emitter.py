"""
Binding emitter.

Aggregates resolved units, synthesized statements and signatures into the
binding objects of ``binding.models``. Nothing is re-derived here: names and
types come from the units, statements from the synthesizer.
"""

from typing import List, Optional, Sequence

from schemabind.infrastructure.sql import Dialect, Operation, synthesize
from schemabind.naming import IdentifierResolver
from schemabind.units import EnumUnit, ForeignKeyUnit, IndexUnit, ProcUnit, QueryUnit, TableUnit

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

EXT = ".py"

# Statements generated for tables with a primary key, in template order.
TABLE_OPERATIONS = (Operation.INSERT, Operation.UPDATE, Operation.UPSERT, Operation.DELETE)


def file_name(name: str, prefix: str = "") -> str:
    """Output file of a unit: lower-cased name plus extension."""
    return (prefix + name).lower() + EXT


def proc_prefix(kind: str) -> str:
    return "sf_" if kind == "function" else "sp_"


class BindingEmitter:
    """
    Build binding objects for one generation run.

    Args:
        dialect: Dialect strategy of the run
        resolver: Identifier resolver of the run
        signatures: Signature builder sharing the run's resolver and mapper
        single: When set, every binding is written to this one file
    """

    def __init__(
        self,
        dialect: Dialect,
        resolver: IdentifierResolver,
        signatures: SignatureBuilder,
        single: Optional[str] = None,
    ):
        self.dialect = dialect
        self.resolver = resolver
        self.signatures = signatures
        self.single = single

    def dest(self, name: str, prefix: str = "") -> str:
        return self.single or file_name(name, prefix)

    def emit_enum(self, enum: EnumUnit) -> EnumBinding:
        return EnumBinding(
            dest=self.dest(enum.name),
            sort_key=("enum", enum.name),
            name=enum.name,
            sql_name=enum.sql_name,
            values=enum.values,
            comment=enum.comment,
        )

    def emit_table(self, table: TableUnit) -> TableBinding:
        """
        Type definition of a table, view or query result type.

        CRUD statements, calls and log expressions are only produced for
        tables that have a primary key.
        """
        short = self.resolver.short_name(table.name)
        binding = TableBinding(
            dest=self.dest(table.name),
            sort_key=(table.kind, table.name),
            name=table.name,
            sql_name=table.sql_name,
            short=short,
            table_kind=table.kind,
            fields=table.fields,
            primary_keys=table.primary_keys,
            zero=self.signatures.zero(table.fields),
            manual=table.manual,
            comment=table.comment,
        )
        if table.kind != "table" or not table.primary_keys:
            return binding
        for operation in TABLE_OPERATIONS:
            statement = synthesize(operation, table, self.dialect)
            binding.statements[operation.value] = statement
            if statement.ok:
                binding.calls[operation.value] = self.signatures.execute_call(statement, prefix="self.")
                binding.logs[operation.value] = self.signatures.logf(table, statement)
        return binding

    def emit_index(self, index: IndexUnit) -> IndexBinding:
        statement = synthesize(Operation.SELECT_BY_INDEX, index, self.dialect)
        return IndexBinding(
            dest=self.dest(index.table.name),
            sort_key=(index.table.kind, index.sql_name),
            name=index.func,
            sql_name=index.sql_name,
            table=index.table.name,
            signature=self.signatures.index_def(index),
            statement=statement,
            params=self.signatures.params(index.fields),
            call=self.signatures.execute_call(statement) if statement.ok else "",
            is_unique=index.is_unique,
        )

    def emit_foreign_key(self, fk: ForeignKeyUnit) -> ForeignKeyBinding:
        return ForeignKeyBinding(
            dest=self.dest(fk.table.name),
            sort_key=(fk.table.kind, fk.sql_name),
            name=fk.name,
            sql_name=fk.sql_name,
            table=fk.table.name,
            ref_table=fk.ref_table,
            signature=self.signatures.foreign_key_def(fk),
            call=self.signatures.foreign_key_call(fk),
        )

    def emit_procs(self, name: str, procs: Sequence[ProcUnit]) -> List[ProcBinding]:
        """
        Bindings for one group of same-named routines.

        Raises:
            UnsupportedOperationError: The dialect has no stored routines
        """
        prefix = proc_prefix(procs[0].kind)
        bindings = []
        for proc in procs:
            statement = synthesize(Operation.CALL_PROCEDURE, proc, self.dialect)
            named = self.dialect.name == "oracle" and not proc.is_function
            bindings.append(
                ProcBinding(
                    dest=self.dest(name, prefix),
                    sort_key=("proc", prefix + name),
                    name=proc.func_name,
                    sql_name=proc.sql_name,
                    signature=self.signatures.proc_def(proc),
                    type_signature=proc.signature,
                    statement=statement,
                    call=self.signatures.execute_call(statement, named=named),
                    overloaded=proc.overloaded,
                    void=proc.void,
                )
            )
        return bindings

    def emit_query(self, query: QueryUnit) -> List[Binding]:
        """
        Bindings of a custom query: its result type (unless the query is
        exec or flat) and the query itself.
        """
        bindings: List[Binding] = []
        typ = query.type
        params = [p.name for p in query.params if not p.interpolate]
        if not query.exec and not query.flat:
            bindings.append(self.emit_table(typ))
        bindings.append(
            QueryBinding(
                dest=self.dest(typ.name),
                sort_key=(typ.name, query.name),
                name=query.name,
                type=typ.name,
                signature=self.signatures.query_def(query),
                sqlstr=self.signatures.querystr(query),
                params=params,
                call=f"cursor.execute(sqlstr, [{', '.join(params)}])",
                one=query.one,
                flat=query.flat,
                exec=query.exec,
                interpolate=query.interpolate,
                comment=query.comment,
            )
        )
        return bindings
