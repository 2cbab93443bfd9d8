"""
Dialect strategy base class.

A dialect owns everything that differs between SQL engines: placeholder
numbering, identifier quoting and qualification, the generated-key retrieval
suffix of an INSERT, the upsert clause, procedure call formats and the table
of native type names.
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from schemabind.errors import UnsupportedOperationError
from schemabind.types.categories import TypeCategory
from schemabind.units import Field, ProcUnit, TableUnit

from ..core.identifier import EscapePolicy, qualify_table, quote_identifier
from ..core.statement import ParamBinding

Fragments = List[str]
Bindings = List[ParamBinding]


class Dialect(ABC):
    """Base class for SQL dialect strategies."""

    name: str = ""
    aliases: Tuple[str, ...] = ()
    native_types: Mapping[str, TypeCategory] = {}

    def __init__(self, schema: str = "", escape: Optional[EscapePolicy] = None):
        """
        Initialize the dialect.

        Args:
            schema: Schema used to qualify table and routine names
            escape: Escaping policy for schema, table and column names
        """
        self.schema = schema
        self.escape = escape or EscapePolicy()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(schema={self.schema!r}, escape={self.escape!r})"

    @abstractmethod
    def nth(self, i: int) -> str:
        """Placeholder for the 0-based parameter position i."""

    def quote(self, identifier: str) -> str:
        return quote_identifier(identifier, dialect=self.name)

    def qualify(self, name: str) -> str:
        """Qualify a table or routine name with the configured schema."""
        return qualify_table(name, self.schema, dialect=self.name, escape=self.escape)

    def colname(self, field: Field) -> str:
        if self.escape.column:
            return self.quote(field.sql_name)
        return field.sql_name

    def bind(self, field: Field, position: int, placeholder: Optional[str] = None,
             direction: str = "in") -> ParamBinding:
        return ParamBinding(
            name=field.name,
            type=field.type,
            field=field.sql_name,
            placeholder=self.nth(position) if placeholder is None else placeholder,
            position=position,
            direction=direction,
        )

    def assignments(self, fields: Iterable[Field], value: Callable[[Field], str],
                    target: str = "") -> str:
        """Comma separated ``col = value`` list."""
        return ", ".join(
            f"{target}{self.colname(f)} = {value(f)}" for f in fields
        )

    # Generated key retrieval

    def returning(self, table: TableUnit, count: int) -> Tuple[str, Bindings]:
        """
        Suffix appended to an INSERT of a table with a sequence field.

        Args:
            table: The table being inserted into
            count: Number of input placeholders already used

        Returns:
            The suffix text and any output bindings it introduces
        """
        return "", []

    # Upsert

    def upsert(self, table: TableUnit, insert: Fragments) -> Fragments:
        """Fragments of an upsert built on top of a full-field insert."""
        raise UnsupportedOperationError("upsert", "table", self.name)

    def on_conflict(self, table: TableUnit) -> Fragments:
        """``ON CONFLICT (pks) DO UPDATE SET ...`` clause."""
        conflicts = ", ".join(self.colname(f) for f in table.primary_keys)
        updates = [f for f in table.fields if not f.is_primary]
        if not updates:
            return [f" ON CONFLICT ({conflicts}) DO NOTHING"]
        return [
            f" ON CONFLICT ({conflicts}) DO ",
            "UPDATE SET ",
            self.assignments(updates, lambda f: "EXCLUDED." + self.colname(f)),
        ]

    def merge(self, table: TableUnit, header: str, closing: str, predicate: str,
              terminator: str) -> Fragments:
        """
        ``MERGE`` statement over a ``USING (SELECT ...)`` source.

        Sequence fields are excluded from both the update and the insert
        branch; the update branch is omitted when nothing is left to update.
        """
        source = ", ".join(
            f"{self.nth(i)} {self.colname(f)}" for i, f in enumerate(table.fields)
        )
        on = " AND ".join(
            f"s.{self.colname(f)} = t.{self.colname(f)}" for f in table.primary_keys
        )
        inserts = [f for f in table.fields if not f.is_sequence]
        updates = [f for f in inserts if not f.is_primary]
        lines = [
            header,
            "USING (",
            f"SELECT {source} ",
            closing,
            predicate.format(on) + " ",
        ]
        if updates:
            lines += [
                "WHEN MATCHED THEN ",
                "UPDATE SET ",
                self.assignments(updates, lambda f: "s." + self.colname(f), target="t.") + " ",
            ]
        lines += [
            "WHEN NOT MATCHED THEN ",
            "INSERT (",
            ", ".join(self.colname(f) for f in inserts),
            ") VALUES (",
            ", ".join("s." + self.colname(f) for f in inserts),
            ")" + terminator,
        ]
        return lines

    # Procedures

    def call_procedure(self, proc: ProcUnit) -> Tuple[Fragments, Bindings]:
        raise UnsupportedOperationError("call_procedure", "procedure", self.name)

    def call_function(self, proc: ProcUnit) -> Tuple[Fragments, Bindings]:
        raise UnsupportedOperationError("call_procedure", "function", self.name)

    def positional_call(self, template: str, name: str,
                        params: Sequence[Field]) -> Tuple[Fragments, Bindings]:
        bindings = [self.bind(f, i) for i, f in enumerate(params)]
        args = ", ".join(b.placeholder for b in bindings)
        return [template.format(name=name, args=args)], bindings

    # Native types

    def classify(self, base: str, args: Tuple[int, ...] = ()) -> Optional[TypeCategory]:
        """
        Category of a normalised native type name, or None when unknown.

        Args:
            base: Lower-cased type name with parenthesised arguments removed
            args: Integer arguments of the type (precision, scale, length)
        """
        return self.native_types.get(base)
