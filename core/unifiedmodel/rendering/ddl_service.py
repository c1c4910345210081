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

import logging
import time
from typing import List

from ..models import UnifiedModel
from .dialects import get_active_dialect
from .dialects.base import DdlDialect, SchemaScript

logger = logging.getLogger(__name__)


def _resolve(dialect: DdlDialect | str | None) -> DdlDialect:
  if isinstance(dialect, DdlDialect):
    return dialect
  return get_active_dialect(dialect)


def _log_script(kind: str, dialect: DdlDialect, script: SchemaScript, started: float) -> None:
  render_ms = (time.perf_counter() - started) * 1000.0
  logger.debug(
    "Rendered %s script for dialect %s: %d chars in %.2f ms",
    kind,
    dialect.DIALECT_NAME,
    len(script.sql),
    render_ms,
  )
  for warning in script.warnings:
    logger.warning("[%s] %s", dialect.DIALECT_NAME, warning)


def render_schema_sql(
  model: UnifiedModel,
  dialect: DdlDialect | str | None = None,
) -> SchemaScript:
  """
  Render the create script for the whole model.

  `dialect` may be a dialect instance, a registered name, or None to use
  the active dialect (env / profile / fallback).
  """
  d = _resolve(dialect)
  started = time.perf_counter()
  script = d.generate_schema(model)
  _log_script("create", d, script, started)
  return script


def render_drop_sql(
  model: UnifiedModel,
  dialect: DdlDialect | str | None = None,
) -> SchemaScript:
  """Render the teardown script for the whole model."""
  d = _resolve(dialect)
  started = time.perf_counter()
  script = d.generate_drop_schema(model)
  _log_script("drop", d, script, started)
  return script


def render_create_statements(
  model: UnifiedModel,
  dialect: DdlDialect | str | None = None,
) -> List[str]:
  """Render one create statement per object, without header or separators."""
  d = _resolve(dialect)
  statements = d.generate_create_statements(model)
  logger.debug(
    "Rendered %d create statements for dialect %s",
    len(statements),
    d.DIALECT_NAME,
  )
  return statements
