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

from dataclasses import dataclass, asdict
from typing import Any, Dict

from . import get_active_dialect, get_available_dialect_names
from .base import DdlDialect
from ...models import (
  Column,
  DataType,
  Index,
  IndexColumn,
  Schema,
  Sequence,
  Table,
  UnifiedModel,
)


@dataclass
class DialectDiagnostics:
  """Simple snapshot of a dialect's behaviour on a tiny sample model."""

  name: str
  class_name: str
  header_comment: str

  # Sample statements
  sample_create_table: str
  sample_create_index: str
  sample_create_sequence: str
  sample_drop_table: str

  # Full-model samples
  empty_schema_script: str
  warning_count: int

  def to_dict(self) -> Dict[str, Any]:
    """Return a JSON-serializable representation."""
    return asdict(self)


def _sample_table() -> Table:
  index = Index(
    schema="diag",
    table="sample",
    name="sample_code_idx",
    is_unique=True,
    columns=[IndexColumn(column_name="code", order=1, null_position=-1)],
  )
  return Table(
    schema="diag",
    name="sample",
    columns=[
      Column(name="id", data_type=DataType("INT8"), is_nullable=False, is_primary_key=True),
      Column(name="code", data_type=DataType("STRING"), default_value="n/a"),
    ],
    indexes=[index],
  )


def collect_dialect_diagnostics(dialect: DdlDialect) -> DialectDiagnostics:
  """Collect a minimal set of diagnostics for a single dialect instance."""
  table = _sample_table()
  sequence = Sequence(schema="diag", name="sample_seq", start=1, increment=1)
  # Character set exercises dialects that cannot express it
  sample_model = UnifiedModel(
    schemas=[Schema(name="diag", character_set="UTF8")],
    tables=[table],
  )

  return DialectDiagnostics(
    name=getattr(dialect, "DIALECT_NAME", "") or dialect.__class__.__name__.lower(),
    class_name=dialect.__class__.__name__,
    header_comment=dialect.header_comment,
    sample_create_table=dialect.render_create_table(table),
    sample_create_index=dialect.render_create_index(table.indexes[0]),
    sample_create_sequence=dialect.render_create_sequence(sequence),
    sample_drop_table=dialect.render_drop_table(table),
    empty_schema_script=dialect.generate_schema(UnifiedModel()).sql,
    warning_count=len(dialect.collect_warnings(sample_model)),
  )


def snapshot_all_dialects() -> Dict[str, DialectDiagnostics]:
  """
  Build diagnostics for all registered dialects.

  The keys of the result dict are dialect names as returned by
  get_available_dialect_names().
  """
  result: Dict[str, DialectDiagnostics] = {}

  for name in get_available_dialect_names():
    dialect = get_active_dialect(name)
    result[name] = collect_dialect_diagnostics(dialect)

  return result
