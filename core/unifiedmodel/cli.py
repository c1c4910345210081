"""
unifiedmodel - Dialect-neutral schema model and DDL generation
Copyright © 2025 Ilona Tag

This file is part of unifiedmodel.

unifiedmodel is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as
published by the Free Software Foundation, either version 3 of
the License, or (at your option) any later version.

unifiedmodel is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with unifiedmodel. If not, see <https://www.gnu.org/licenses/>.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, List, Optional, TextIO

import yaml

from .config.env import ENV_LOG_LEVEL, env_str
from .loader import load_model
from .rendering.ddl_service import render_drop_sql, render_schema_sql
from .rendering.dialects import get_active_dialect, get_available_dialect_names
from .rendering.dialects.base import DdlGenerationError
from .rendering.dialects.diagnostics import collect_dialect_diagnostics

logger = logging.getLogger(__name__)

HELP = (
  "Generate DDL scripts from a unified model document.\n\n"
  "Examples:\n"
  "  python -m unifiedmodel generate model.yaml\n"
  "  python -m unifiedmodel generate model.yaml --dialect postgres --drop\n"
  "  python -m unifiedmodel dialects\n"
  "  python -m unifiedmodel check --dialect cockroachdb\n"
)


def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
    prog="unifiedmodel",
    description=HELP,
    formatter_class=argparse.RawDescriptionHelpFormatter,
  )
  parser.add_argument(
    "--log-level",
    dest="log_level",
    default=None,
    help="Logging level (DEBUG, INFO, WARNING, ...). Defaults to UNIFIEDMODEL_LOG_LEVEL or WARNING.",
  )

  sub = parser.add_subparsers(dest="command", required=True)

  gen = sub.add_parser("generate", help="Render the create (or teardown) script for a model.")
  gen.add_argument("model_path", help="Path to a YAML or JSON model document.")
  gen.add_argument(
    "--dialect",
    dest="dialect_name",
    default=None,
    help="Dialect name, e.g. 'cockroachdb' or 'postgres'. Defaults to env / profile.",
  )
  gen.add_argument(
    "--drop",
    action="store_true",
    help="Render DROP statements instead of CREATE statements.",
  )
  gen.add_argument(
    "--output",
    dest="output_path",
    default=None,
    help="Write the script to this file instead of stdout.",
  )

  sub.add_parser("dialects", help="List registered dialects.")

  check = sub.add_parser("check", help="Print diagnostics for registered dialects.")
  check.add_argument(
    "--dialect",
    dest="dialect_name",
    default=None,
    help="Optional dialect name to restrict diagnostics.",
  )

  return parser


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def _handle_generate(options: argparse.Namespace, stdout: TextIO) -> int:
  model = load_model(options.model_path)
  dialect = get_active_dialect(options.dialect_name)

  if options.drop:
    script = render_drop_sql(model, dialect)
  else:
    script = render_schema_sql(model, dialect)

  if options.output_path:
    with open(options.output_path, "w", encoding="utf-8") as f:
      f.write(script.sql)
    logger.info("Wrote %d chars to %s", len(script.sql), options.output_path)
  else:
    stdout.write(script.sql)

  return 0


def _handle_dialects(options: argparse.Namespace, stdout: TextIO) -> int:
  for name in get_available_dialect_names():
    stdout.write(f"{name}\n")
  return 0


def _print_rows(stdout: TextIO, rows: Iterable[tuple[str, str]]) -> None:
  for label, value in rows:
    first, *rest = value.splitlines() or [""]
    stdout.write(f"  {label:<24} {first}\n")
    for line in rest:
      stdout.write(f"  {'':<24} {line}\n")


def _handle_check(options: argparse.Namespace, stdout: TextIO) -> int:
  if options.dialect_name:
    names = [options.dialect_name]
  else:
    names = get_available_dialect_names()

  title = "Dialect diagnostics"
  stdout.write(f"{title}\n{'-' * len(title)}\n")

  for name in names:
    diag = collect_dialect_diagnostics(get_active_dialect(name))
    stdout.write(f"\nDialect: {diag.name} ({diag.class_name})\n")
    _print_rows(stdout, [
      ("header", diag.header_comment),
      ("create table", diag.sample_create_table),
      ("create index", diag.sample_create_index),
      ("create sequence", diag.sample_create_sequence),
      ("drop table", diag.sample_drop_table),
      ("warnings", str(diag.warning_count)),
    ])

  return 0


_HANDLERS = {
  "generate": _handle_generate,
  "dialects": _handle_dialects,
  "check": _handle_check,
}


def main(argv: Optional[List[str]] = None, stdout: Optional[TextIO] = None) -> int:
  parser = build_parser()
  options = parser.parse_args(argv)
  stdout = stdout or sys.stdout

  level = (options.log_level or env_str(ENV_LOG_LEVEL, "WARNING")).upper()

  try:
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    return _HANDLERS[options.command](options, stdout)
  except (DdlGenerationError, ValueError, yaml.YAMLError, OSError) as exc:
    logger.error("%s failed: %s", options.command, exc)
    sys.stderr.write(f"error: {exc}\n")
    return 1
