"""
Accessor signatures and call expressions.

Builds the Python text fragments a renderer splices into generated accessors:
``def`` lines, ``cursor.execute`` calls, ``logf`` calls, foreign key lookups
and the ``sqlstr`` literal of custom queries.
"""

from typing import List, Sequence

from schemabind.infrastructure.sql import Statement
from schemabind.naming import IdentifierResolver
from schemabind.types import TypeMapper, unwrap
from schemabind.units import Field, ForeignKeyUnit, IndexUnit, ProcUnit, QueryUnit, TableUnit


class SignatureBuilder:
    """Python signatures and call expressions for resolved units."""

    def __init__(self, resolver: IdentifierResolver, mapper: TypeMapper):
        self.resolver = resolver
        self.mapper = mapper

    def param(self, field: Field, add_type: bool = False) -> str:
        name = self.resolver.param_name(field.name)
        if add_type:
            return f"{name}: {self.mapper.qualify(field.type)}"
        return name

    def params(self, fields: Sequence[Field], add_type: bool = False) -> List[str]:
        return [self.param(f, add_type) for f in fields]

    @staticmethod
    def _def(name: str, params: Sequence[str], returns: Sequence[str]) -> str:
        result = ", ".join(returns) if returns else "None"
        if len(returns) > 1:
            result = f"tuple[{result}]"
        return f"def {name}({', '.join(params)}) -> {result}"

    def index_def(self, index: IndexUnit) -> str:
        """
        ``def user_by_email(cursor: Cursor, email: str) -> Optional[User]``

        Non-unique indexes return ``list[T]``.
        """
        typ = index.table.name
        returns = f"Optional[{typ}]" if index.is_unique else f"list[{typ}]"
        return self._def(index.func, ["cursor: Cursor"] + self.params(index.fields, True), [returns])

    def proc_def(self, proc: ProcUnit) -> str:
        returns = [] if proc.void else [self.mapper.qualify(r.type) for r in proc.returns]
        return self._def(proc.func_name, ["cursor: Cursor"] + self.params(proc.params, True), returns)

    def query_def(self, query: QueryUnit) -> str:
        params = ["cursor: Cursor"] + [f"{p.name}: {p.type}" for p in query.params]
        if query.exec:
            returns: List[str] = []
        elif query.flat:
            returns = [self.mapper.qualify(f.type) for f in query.type.fields]
        elif query.one:
            returns = [f"Optional[{query.type.name}]"]
        else:
            returns = [f"list[{query.type.name}]"]
        return self._def(query.name, params, returns)

    def foreign_key_def(self, fk: ForeignKeyUnit) -> str:
        """``def user(self, cursor: Cursor) -> User``"""
        return f"def {fk.name}(self, cursor: Cursor) -> {fk.ref_table}"

    def convert_types(self, fk: ForeignKeyUnit) -> str:
        """
        Arguments passed to the referenced table's lookup.

        Each field is read from the owning instance; when its (unwrapped)
        type differs from the referenced field's type it is converted with
        the referenced type's constructor.
        """
        short = self.resolver.short_name(fk.table.name)
        exprs = []
        for field, ref in zip(fk.fields, fk.ref_fields):
            expr = f"{short}.{field.name}"
            if unwrap(field.type) != unwrap(ref.type):
                expr = f"{unwrap(ref.type)}({expr})"
            exprs.append(expr)
        return ", ".join(exprs)

    def foreign_key_call(self, fk: ForeignKeyUnit) -> str:
        return f"{fk.ref_func}(cursor, {self.convert_types(fk)})"

    def _arg(self, name: str, prefix: str) -> str:
        return prefix + name if prefix else self.resolver.param_name(name)

    def execute_call(self, statement: Statement, prefix: str = "", named: bool = False,
                     method: str = "execute") -> str:
        """
        ``cursor.execute(sqlstr, [...])`` over the statement's input parameters.

        With named, arguments are passed as a dict keyed by bind variable,
        output variables included (oracle stored procedures).
        """
        if named:
            args = ", ".join(
                f'"{p.field}": {self._arg(p.name, prefix)}'
                for p in statement.parameters
            )
            return f"cursor.{method}(sqlstr, {{{args}}})"
        args = ", ".join(self._arg(p.name, prefix) for p in statement.inputs)
        return f"cursor.{method}(sqlstr, [{args}])"

    def logf(self, table: TableUnit, statement: Statement) -> str:
        short = self.resolver.short_name(table.name)
        return "logf(" + ", ".join(["sqlstr"] + [f"{short}.{p.name}" for p in statement.inputs]) + ")"

    def zero(self, fields: Sequence[Field]) -> str:
        return ", ".join(f.zero for f in fields)

    @staticmethod
    def querystr(query: QueryUnit) -> str:
        """
        ``sqlstr`` literal of a custom query.

        Lines are joined by implicit concatenation inside parentheses so each
        one can carry its trailing comment. Empty lines are dropped.

        Example:
            sqlstr = (
                '''SELECT id, name '''  # user columns
                '''FROM users'''
            )
        """
        lines = ["sqlstr = ("]
        for i, line in enumerate(query.query):
            comment = query.comments[i].strip() if i < len(query.comments) else ""
            if not line and not comment:
                continue
            text = "    '''" + line + "'''"
            if comment:
                text += "  # " + comment
            lines.append(text)
        lines.append(")")
        return "\n".join(lines)
