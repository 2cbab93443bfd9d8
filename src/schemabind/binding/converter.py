"""
Schema model to unit conversion.

Every identifier is resolved and every native type mapped exactly once, here;
the emitter and the statement synthesizer only read the resulting units.
"""

from collections import OrderedDict
from dataclasses import replace
from typing import Dict, List, Mapping, Sequence, Tuple

from schemabind.errors import SchemaModelError
from schemabind.naming import IdentifierResolver, pluralize, singularize, to_snake
from schemabind.schema import core
from schemabind.types import TypeMapper
from schemabind.units import (
    EnumUnit,
    EnumValueUnit,
    Field,
    ForeignKeyUnit,
    IndexUnit,
    ProcUnit,
    QueryParamUnit,
    QueryUnit,
    TableUnit,
)

# Routine parameters without a name are reported as p0, p1, ...
_UNNAMED_PARAM = "p{}"


class UnitConverter:
    """
    Convert schema model objects into resolved units.

    Args:
        resolver: Identifier resolver of the run
        mapper: Type mapper of the run
    """

    def __init__(self, resolver: IdentifierResolver, mapper: TypeMapper):
        self.resolver = resolver
        self.mapper = mapper

    def field(self, name: str, native: core.NativeType, is_primary: bool = False,
              is_sequence: bool = False, comment: str = "") -> Field:
        mapped = self.mapper.map_native(native)
        return Field(
            name=self.resolver.resolve(name, "snake"),
            sql_name=name,
            type=mapped.type,
            zero=mapped.zero,
            nullable=native.nullable,
            is_primary=is_primary,
            is_sequence=is_sequence,
            comment=comment,
        )

    def type_name(self, sql_name: str) -> str:
        """Python class name of a table: singular, Pascal cased."""
        return self.resolver.resolve(singularize(sql_name), "pascal")

    def table(self, table: core.Table) -> TableUnit:
        fields = tuple(
            self.field(c.name, c.type, c.is_primary, c.is_sequence, c.comment)
            for c in table.columns
        )
        return TableUnit(
            name=self.type_name(table.name),
            sql_name=table.name,
            fields=fields,
            kind=table.kind.value,
            manual=table.manual,
            comment=table.comment,
        )

    def _fields_of(self, unit: TableUnit, names: Sequence[str], owner: str) -> Tuple[Field, ...]:
        by_name = {f.sql_name: f for f in unit.fields}
        missing = [n for n in names if n not in by_name]
        if missing:
            raise SchemaModelError(f"{owner} references unknown columns {missing} of {unit.sql_name!r}")
        return tuple(by_name[n] for n in names)

    def index(self, unit: TableUnit, index: core.Index) -> IndexUnit:
        fields = self._fields_of(unit, index.fields, f"index {index.name!r}")
        if index.func:
            func = to_snake(index.func)
        else:
            func = f"{to_snake(unit.name)}_by_{'_'.join(f.name for f in fields)}"
        return IndexUnit(
            sql_name=index.name,
            func=self.resolver.check_reserved(func),
            table=unit,
            fields=fields,
            is_unique=index.is_unique,
            is_primary=index.is_primary,
        )

    def foreign_key(self, unit: TableUnit, fk: core.ForeignKey, ref: TableUnit) -> ForeignKeyUnit:
        fields = self._fields_of(unit, fk.fields, f"foreign key {fk.name!r}")
        ref_fields = self._fields_of(ref, fk.ref_fields, f"foreign key {fk.name!r}")
        name = to_snake(fk.func) if fk.func else to_snake(ref.name)
        if fk.ref_func:
            ref_func = to_snake(fk.ref_func)
        else:
            ref_func = f"{to_snake(ref.name)}_by_{'_'.join(f.name for f in ref_fields)}"
        return ForeignKeyUnit(
            name=self.resolver.check_reserved(name),
            sql_name=fk.name,
            table=unit,
            fields=fields,
            ref_table=ref.name,
            ref_fields=ref_fields,
            ref_func=ref_func,
        )

    def enum(self, enum: core.Enum) -> EnumUnit:
        """
        Convert an enum; value names are snake cased with the enum's own
        name stripped as a suffix (``active_status`` in ``status`` becomes
        ``active``).
        """
        suffix = "_" + to_snake(enum.name)
        values = []
        for v in enum.values:
            name = to_snake(v.name.lower())
            if name.endswith(suffix) and name != suffix:
                name = name[: -len(suffix)]
            values.append(
                EnumValueUnit(
                    name=self.resolver.check_reserved(name),
                    sql_name=v.name,
                    const_value=v.const_value,
                )
            )
        return EnumUnit(
            name=self.resolver.resolve(enum.name, "pascal"),
            sql_name=enum.name,
            values=tuple(values),
            comment=enum.comment,
        )

    def procs(self, procs: Sequence[core.Proc]) -> "OrderedDict[str, List[ProcUnit]]":
        """
        Convert routines, grouped by Python name in order of first appearance.

        Routines sharing a name are marked overloaded; each one then uses its
        ``<name>_by_<params>`` name.
        """
        groups: "OrderedDict[str, List[ProcUnit]]" = OrderedDict()
        for p in procs:
            unit = self.proc(p)
            groups.setdefault(unit.name, []).append(unit)
        for name, units in groups.items():
            if len(units) > 1:
                groups[name] = [_with_overloaded(u) for u in units]
        return groups

    def proc(self, proc: core.Proc) -> ProcUnit:
        params = tuple(self.field(p.name, p.type) for p in proc.params)
        returns = tuple(self.field(r.name, r.type) for r in proc.returns)
        name = self.resolver.resolve(proc.name, "snake")
        if proc.void or not returns:
            result = "None"
        elif len(returns) == 1:
            result = self.mapper.qualify(returns[0].type)
        else:
            result = "tuple[" + ", ".join(self.mapper.qualify(r.type) for r in returns) + "]"
        args = ", ".join(self.mapper.qualify(p.type) for p in params)
        return ProcUnit(
            kind=proc.kind.value,
            name=name,
            sql_name=proc.name,
            signature=f"Callable[[{args}], {result}]",
            params=params,
            returns=returns,
            void=proc.void or not returns,
            overloaded_name=overloaded_name(name, proc.params, params),
            comment=proc.comment,
        )

    def query_type(self, query: core.Query) -> TableUnit:
        """Result type of a custom query."""
        fields = []
        for z in query.fields:
            if query.manual_fields:
                # types are supplied verbatim by the user
                fields.append(Field(name=z.name, sql_name=to_snake(z.name), type=z.type.name, zero="None"))
            else:
                fields.append(self.field(z.name, z.type))
        return TableUnit(
            name=query.type,
            sql_name=to_snake(query.type),
            fields=tuple(fields),
            kind="query",
            comment=query.type_comment,
        )

    def query(self, query: core.Query) -> QueryUnit:
        return QueryUnit(
            name=query_name(query),
            query=query.query,
            comments=query.comments or tuple("" for _ in query.query),
            params=tuple(
                QueryParamUnit(p.name, p.type, p.interpolate, p.join) for p in query.params
            ),
            type=self.query_type(query),
            one=query.exec or query.flat or query.one,
            flat=query.flat,
            exec=query.exec,
            interpolate=query.interpolate,
            comment=query.comment,
        )


def _with_overloaded(unit: ProcUnit) -> ProcUnit:
    return replace(unit, overloaded=True)


def overloaded_name(name: str, params: Sequence[core.ProcParam], fields: Sequence[Field]) -> str:
    """
    Disambiguated name for an overloaded routine.

    Unnamed parameters contribute their SQL type instead of their name.

    Examples:
        name_by_user_id                  one parameter
        name_by_user_id_kind_and_limit   several parameters
    """
    if not params:
        return name
    names = []
    for i, (param, field) in enumerate(zip(params, fields)):
        if param.name == _UNNAMED_PARAM.format(i):
            names.append(to_snake(param.type.name.replace(" ", "_")))
        else:
            names.append(field.name)
    if len(names) == 1:
        return f"{name}_by_{names[0]}"
    return f"{name}_by_{'_'.join(names[:-1])}_and_{names[-1]}"


def query_name(query: core.Query) -> str:
    """
    Accessor name of a custom query.

    An explicit name wins. Otherwise the type name (pluralized unless the
    query returns one row) is followed by ``_by_`` and the parameter names;
    a query without parameters is named ``get``.
    """
    if query.name:
        return query.name
    if not query.params:
        return "get"
    base = to_snake(query.type)
    if not query.one:
        base = pluralize(base)
    return base + "_by_" + "_".join(to_snake(p.name) for p in query.params)


def table_index(tables: Sequence[TableUnit]) -> Mapping[str, TableUnit]:
    """Units keyed by SQL name, for resolving foreign key targets."""
    index: Dict[str, TableUnit] = {}
    for unit in tables:
        index.setdefault(unit.sql_name, unit)
    return index
