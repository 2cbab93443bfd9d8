"""
CLI for binding generation.

Usage:
    python -m schemabind.cli generate schema.yml --dialect postgres
    python -m schemabind.cli generate schema.yml --dialect oracle --oracle-type godror \
        --schema APP --escape table column --output bindings.json
    python -m schemabind.cli generate queries.yml --mode query --single queries.py

The report is written as JSON to stdout (or --output); a summary table is
printed to stderr.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from schemabind.config import GenerationOptions, get_settings
from schemabind.errors import ConfigurationError, SchemaBindError
from schemabind.generator import GenerationReport, Generator
from schemabind.infrastructure.sql.dialects import SUPPORTED_DIALECTS
from schemabind.schema.loader import load_schema_file
from schemabind.utils.logging import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schemabind generate",
        description="Generate binding data from a schema document",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("schema_file", help="YAML or JSON schema document")
    parser.add_argument(
        "--dialect",
        help=f"Target SQL dialect, one of {', '.join(SUPPORTED_DIALECTS)} (defaults to SCHEMABIND_DIALECT)",
    )
    parser.add_argument("--schema", dest="schema_name", help="Schema used to qualify names")
    parser.add_argument(
        "--mode",
        choices=["schema", "query"],
        default="schema",
        help="Generate schema objects or custom queries",
    )
    parser.add_argument("--single", help="Write every binding to this one file")
    parser.add_argument(
        "--escape",
        nargs="+",
        choices=["none", "schema", "table", "column", "all"],
        help="Names to quote",
    )
    parser.add_argument("--conflict", dest="conflict_suffix", help="Suffix for conflicting names")
    parser.add_argument("--custom", dest="custom_package", help="Package of custom types")
    parser.add_argument("--reserved", dest="reserved_words", nargs="+", help="Additional reserved words")
    parser.add_argument("--initialism", dest="initialisms", nargs="+", help="Additional initialisms")
    parser.add_argument("--oracle-type", choices=["ora", "godror"], help="Oracle driver variant")
    parser.add_argument("--output", help="Write the JSON report here instead of stdout")
    parser.add_argument("--quiet", action="store_true", help="Do not print the summary table")
    return parser


def options_from_args(args: argparse.Namespace) -> GenerationOptions:
    return GenerationOptions.from_settings(
        get_settings(),
        dialect=args.dialect,
        schema_name=args.schema_name,
        oracle_type=args.oracle_type,
        conflict_suffix=args.conflict_suffix,
        escape=args.escape,
        custom_package=args.custom_package,
        reserved_words=args.reserved_words,
        initialisms=args.initialisms,
        single=args.single,
    )


def print_summary(report: GenerationReport, console: Console) -> None:
    """Units and failures of a run as rich tables."""
    units = Table(title="Generated units")
    units.add_column("Kind")
    units.add_column("Name")
    units.add_column("File")
    for binding in sorted(report.units, key=lambda b: (b.dest, b.sort_key)):
        units.add_row(binding.kind, getattr(binding, "name", ""), binding.dest)
    console.print(units)

    if report.failures:
        failures = Table(title="Failures", style="red")
        failures.add_column("Kind")
        failures.add_column("Unit")
        failures.add_column("Error")
        for failure in report.failures:
            failures.add_row(failure.kind or "", failure.unit, str(failure.error))
        console.print(failures)

    for warning in report.warnings:
        console.print(f"[yellow]warning:[/yellow] {warning}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run a generation.

    Returns:
        0 on success, 1 when a unit failed or the document is invalid,
        2 on configuration errors
    """
    args = build_parser().parse_args(argv)
    console = Console(stderr=True)

    try:
        options = options_from_args(args)
        generator = Generator(options)
        schema_set = load_schema_file(args.schema_file)
        report = generator.generate(schema_set, mode=args.mode)
    except (ConfigurationError, ValidationError) as e:
        logger.error("cli.configuration_error", error=str(e))
        console.print(f"[red]configuration error:[/red] {e}")
        return EXIT_CONFIG
    except SchemaBindError as e:
        logger.error("cli.generation_error", error=str(e))
        console.print(f"[red]error:[/red] {e}")
        return EXIT_FAILED

    payload = json.dumps(report.to_dict(), indent=2)
    if args.output:
        Path(args.output).write_text(payload + "\n", encoding="utf-8")
        logger.info("cli.report_written", path=args.output, files=len(report.files))
    else:
        print(payload)

    if not args.quiet:
        print_summary(report, console)
    return EXIT_OK if report.ok else EXIT_FAILED
