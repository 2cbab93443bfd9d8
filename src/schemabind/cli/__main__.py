"""
Unified CLI entry point for schemabind.

Usage:
    python -m schemabind.cli <command> [options]

Available commands:
    generate     - Generate binding data from a schema document

Examples:
    # Postgres bindings for every table, view, enum and routine
    python -m schemabind.cli generate schema.yml --dialect postgres

    # Custom queries into one file
    python -m schemabind.cli generate queries.yml --mode query --single queries.py
"""

import argparse
import sys
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        prog="schemabind",
        description="schemabind - dialect-aware data-access binding generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
        help="Command to execute",
    )

    subparsers.add_parser(
        "generate",
        help="Generate binding data from a schema document",
        description="Generate binding data from a schema document",
        add_help=False,  # Let the delegated module handle help
    )

    args, remaining_args = parser.parse_known_args(argv)

    if args.command == "generate":
        from schemabind.cli.generate import main as generate_main

        return generate_main(remaining_args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
