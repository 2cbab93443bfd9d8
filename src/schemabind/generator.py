"""
Generation driver.

One ``generate`` call is one run: a fresh naming registry, resolver, type
mapper and emitter over a fixed dialect. Every unit is emitted inside its own
failure boundary so that one bad table does not block unrelated ones; the
failures are collected in the ``GenerationReport``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Literal, Optional, TypeVar

from schemabind.binding import (
    Binding,
    BindingEmitter,
    SignatureBuilder,
    TableBinding,
    UnitConverter,
)
from schemabind.binding.converter import table_index
from schemabind.config import GenerationOptions
from schemabind.errors import (
    ConfigurationError,
    GenerationFailure,
    MissingOutputTargetError,
    SchemaBindError,
    SchemaModelError,
)
from schemabind.infrastructure.sql import EscapePolicy, Statement, get_dialect
from schemabind.naming import IdentifierResolver, NamingRegistry
from schemabind.schema.core import Schema, SchemaSet
from schemabind.types import TypeMapper
from schemabind.units import TableUnit
from schemabind.utils.logging import bind_context, get_logger

logger = get_logger(__name__)

Mode = Literal["schema", "query"]
T = TypeVar("T")


@dataclass
class GenerationReport:
    """Everything one run produced."""

    units: List[Binding] = field(default_factory=list)
    failures: List[GenerationFailure] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    shorts: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> Dict[str, Any]:
        return {
            "units": [u.to_dict() for u in self.units],
            "failures": [f.to_dict() for f in self.failures],
            "warnings": list(self.warnings),
            "files": list(self.files),
            "shorts": dict(self.shorts),
        }


class Generator:
    """
    Drive a generation run.

    Args:
        options: Generation options of the run

    Raises:
        UnsupportedDialectError: Unknown dialect
        UnsupportedOracleTypeError: Unknown oracle driver variant

    Example:
        >>> report = Generator(GenerationOptions(dialect="postgres")).generate(schema_set)
        >>> [u.name for u in report.units]
        ['User', 'user_by_email']
    """

    def __init__(self, options: GenerationOptions):
        self.options = options
        self.dialect = get_dialect(
            options.dialect,
            schema=options.schema_name,
            escape=EscapePolicy.from_targets(options.escape),
            oracle_type=options.oracle_type,
        )
        self.registry = NamingRegistry()

    def generate(self, schema_set: SchemaSet, mode: Mode = "schema") -> GenerationReport:
        """
        Emit bindings for every unit of the schema set.

        Raises:
            MissingOutputTargetError: Query mode with an exec query and no single file
            ConfigurationError: Unknown mode
        """
        check_output_target(schema_set, mode, self.options.single)
        self.registry = NamingRegistry()
        resolver = IdentifierResolver(
            self.registry,
            conflict_suffix=self.options.conflict_suffix,
            reserved_words=self.options.reserved_words,
            initialisms=self.options.initialisms,
        )
        mapper = TypeMapper(self.dialect, self.options.custom_package, schema_set.enum_names())
        self.converter = UnitConverter(resolver, mapper)
        self.emitter = BindingEmitter(
            self.dialect, resolver, SignatureBuilder(resolver, mapper), self.options.single
        )
        report = GenerationReport()
        log = bind_context(dialect=self.dialect.name, mode=mode)
        log.info(
            "generation.started",
            schemas=len(schema_set.schemas),
            queries=len(schema_set.queries),
        )
        if mode == "schema":
            for schema in schema_set.schemas:
                self._emit_schema(schema, report)
        else:
            seen_types = set()
            for query in schema_set.queries:
                unit = self._guard(report, query.name or query.type, "query",
                                   lambda q=query: self.converter.query(q))
                if unit is None:
                    continue
                bindings = self._guard(report, unit.name, "query",
                                       lambda u=unit: self.emitter.emit_query(u)) or []
                for binding in bindings:
                    # one type definition per query result type
                    if isinstance(binding, TableBinding):
                        if binding.name in seen_types:
                            continue
                        seen_types.add(binding.name)
                    self._add(report, binding)
        report.files = sorted({b.dest for b in report.units})
        report.shorts = self.registry.snapshot()
        log.info(
            "generation.completed",
            units=len(report.units),
            failures=len(report.failures),
            warnings=len(report.warnings),
            files=len(report.files),
        )
        return report

    def _emit_schema(self, schema: Schema, report: GenerationReport) -> None:
        for enum in schema.enums:
            unit = self._guard(report, enum.name, "enum", lambda e=enum: self.converter.enum(e))
            if unit is not None:
                self._add(report, self.emitter.emit_enum(unit))

        groups = self._guard(report, schema.name or "procs", "proc",
                             lambda: self.converter.procs(schema.procs)) or {}
        for name, procs in groups.items():
            for binding in self._guard(report, name, "proc",
                                       lambda n=name, p=procs: self.emitter.emit_procs(n, p)) or []:
                self._add(report, binding)

        tables = list(schema.tables) + list(schema.views)
        units: Dict[str, TableUnit] = {}
        for table in tables:
            unit = self._guard(report, table.name, table.kind.value,
                               lambda t=table: self.converter.table(t))
            if unit is not None:
                units[table.name] = unit
        refs = table_index(list(units.values()))
        for table in tables:
            unit = units.get(table.name)
            if unit is None:
                continue
            binding = self._guard(report, table.name, table.kind.value,
                                  lambda u=unit: self.emitter.emit_table(u))
            if binding is not None:
                self._add(report, binding)
            for index in table.indexes:
                binding = self._guard(
                    report, index.name, "index",
                    lambda u=unit, i=index: self.emitter.emit_index(self.converter.index(u, i)),
                )
                if binding is not None:
                    self._add(report, binding)
            for fk in table.foreign_keys:
                binding = self._guard(
                    report, fk.name, "foreignkey",
                    lambda u=unit, k=fk: self.emitter.emit_foreign_key(
                        self.converter.foreign_key(u, k, _ref(refs, k.ref_table, k.name))
                    ),
                )
                if binding is not None:
                    self._add(report, binding)

    def _guard(self, report: GenerationReport, unit: str, kind: str,
               fn: Callable[[], T]) -> Optional[T]:
        try:
            return fn()
        except SchemaBindError as exc:
            failure = GenerationFailure(unit, exc, kind)
            report.failures.append(failure)
            logger.warning("generation.unit_failed", **failure.to_dict())
            return None

    def _add(self, report: GenerationReport, binding: Binding) -> None:
        report.units.append(binding)
        for statement in _statements(binding):
            if statement.error:
                report.warnings.append(f"{binding.dest}: {statement.error}")


def _ref(refs: Dict[str, TableUnit], ref_table: str, fk_name: str) -> TableUnit:
    try:
        return refs[ref_table]
    except KeyError:
        raise SchemaModelError(
            f"foreign key {fk_name!r} references unknown table {ref_table!r}"
        ) from None


def _statements(binding: Binding) -> List[Statement]:
    statements = list(getattr(binding, "statements", {}).values())
    single = getattr(binding, "statement", None)
    if single is not None:
        statements.append(single)
    return statements


def check_output_target(schema_set: SchemaSet, mode: str, single: Optional[str]) -> None:
    """
    Validate the mode and output target before anything is emitted.

    Raises:
        MissingOutputTargetError: An exec query has no single output file
        ConfigurationError: Unknown mode
    """
    if mode not in ("schema", "query"):
        raise ConfigurationError(f"unknown mode {mode!r}")
    if mode == "query" and not single and any(q.exec for q in schema_set.queries):
        raise MissingOutputTargetError()
