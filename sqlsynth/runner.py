"""
SQLSynth Runner

Purpose:
- Provide a simple CLI to print synthesized statements for fuzzing a
  MySQL-compatible engine

Usage examples:
  # List supported column types
  python -m sqlsynth.runner types

  # One CREATE TABLE for the given column types
  python -m sqlsynth.runner table --types int varchar text

  # A reproducible mixed workload of 200 statements
  python -m sqlsynth.runner workload --count 200 --seed 42 --output fuzz.sql

Notes:
- SQLSYNTH_SEED, SQLSYNTH_DIALECT and SQLSYNTH_ROW_STRATEGY provide defaults;
  CLI flags override them.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

from sqlsynth.api import SynthConfig, Synthesizer
from sqlsynth.core.errors import SynthesisError
from sqlsynth.core.types import SUPPORTED_TYPES, data_type_len, type_code
from sqlsynth.strategies import RowStrategy


def _config_from_args(args: argparse.Namespace) -> SynthConfig:
    config = SynthConfig.from_env()
    if args.seed is not None:
        config.seed = args.seed
    if args.dialect:
        config.dialect = args.dialect
    if args.row_strategy:
        config.row_strategy = RowStrategy(args.row_strategy)
    return config


def _emit(statements: Iterable[str], output: Optional[str]) -> int:
    if output:
        # Generate everything first so a failure never leaves a partial file
        statements = list(statements)
        with open(output, 'w', encoding='utf-8') as f:
            for stmt in statements:
                f.write(stmt.rstrip(";\n") + ";\n")
        print(f"Saved {len(statements)} statements to {output}")
        return 0
    for stmt in statements:
        print(stmt.rstrip(";\n") + ";")
    return 0


def action_types(_args: argparse.Namespace) -> int:
    print("Supported column types (name: type code, length):")
    for name in SUPPORTED_TYPES:
        print(f"- {name}: {type_code(name).name}, {data_type_len(name)}")
    return 0


def action_table(args: argparse.Namespace) -> int:
    synth = Synthesizer(_config_from_args(args))
    sql, _name = synth.create_table(args.types)
    return _emit([sql], args.output)


def action_workload(args: argparse.Namespace) -> int:
    synth = Synthesizer(_config_from_args(args))
    return _emit(synth.generate_workload(args.count), args.output)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sqlsynth.runner", description="SQLSynth Runner")

    # Parent parser for shared arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument("--seed", type=int, default=None, help="Seed for deterministic generation (env SQLSYNTH_SEED)")
    parent_parser.add_argument("--dialect", default=None, help="sqlglot dialect used to print statements (default mysql)")
    parent_parser.add_argument("--row-strategy", choices=[s.value for s in RowStrategy], default=None,
                               help="How INSERT rows are generated")
    parent_parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = p.add_subparsers(dest="mode", required=True)

    # types
    subparsers.add_parser("types", help="List supported column types", parents=[parent_parser])

    # table
    parser_table = subparsers.add_parser("table", help="Print one CREATE TABLE statement", parents=[parent_parser])
    parser_table.add_argument("--types", nargs="+", required=True, help="Column types, in order")
    parser_table.add_argument("--output", default=None, help="Write SQL to file instead of printing")

    # workload
    parser_workload = subparsers.add_parser("workload", help="Print a mixed DDL/DML workload", parents=[parent_parser])
    parser_workload.add_argument("--count", type=int, default=100, help="Number of statements to generate")
    parser_workload.add_argument("--output", default=None, help="Write SQL to file instead of printing")

    return p


def main(argv: Optional[List[str]] = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.mode == "types":
            return action_types(args)
        elif args.mode == "table":
            return action_table(args)
        elif args.mode == "workload":
            return action_workload(args)
        else:  # pragma: no cover
            logger.error("Unknown mode: %s", args.mode)
            return 2
    except SynthesisError as e:
        logger.error("Synthesis failed: %s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
