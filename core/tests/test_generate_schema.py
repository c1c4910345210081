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


import pytest

from unifiedmodel.models import Schema, Sequence, Table, UnifiedModel
from unifiedmodel.rendering.dialects.base import DdlGenerationError, SchemaScript
from unifiedmodel.rendering.dialects.cockroachdb import CockroachDBDialect

HEADER = "-- CockroachDB Schema Generated from UnifiedModel\n\n"


def test_empty_model_renders_header_only(crdb):
  script = crdb.generate_schema(UnifiedModel())

  assert isinstance(script, SchemaScript)
  assert script.sql == HEADER
  assert script.warnings == []


def test_statements_are_separated_by_blank_lines(crdb):
  model = UnifiedModel(schemas=[Schema(name="a"), Schema(name="b")])
  assert crdb.generate_schema(model).sql == (
    HEADER
    + "CREATE SCHEMA IF NOT EXISTS a;\n\n"
    + "CREATE SCHEMA IF NOT EXISTS b;\n\n"
  )


def test_fixed_kind_order(crdb, full_model):
  sql = crdb.generate_schema(full_model).sql

  markers = [
    "CREATE SCHEMA",
    "CREATE TABLE",
    "CREATE TYPE",
    "CREATE OR REPLACE FUNCTION",
    "CREATE TRIGGER",
    "CREATE SEQUENCE",
    "CREATE EXTENSION",
  ]
  positions = [sql.index(m) for m in markers]
  assert positions == sorted(positions)


def test_kind_order_ignores_dependencies(crdb):
  # A sequence used as a column default is still emitted after the table
  model = UnifiedModel(
    tables=[Table(schema="app", name="t")],
    sequences=[Sequence(schema="app", name="t_seq", start=1)],
  )
  sql = crdb.generate_schema(model).sql
  assert sql.index("CREATE TABLE") < sql.index("CREATE SEQUENCE")


def test_full_model_contains_every_statement(crdb, full_model):
  sql = crdb.generate_schema(full_model).sql
  for statement in crdb.generate_create_statements(full_model):
    assert statement + "\n\n" in sql


def test_generate_create_statements_in_kind_order(crdb, full_model):
  statements = crdb.generate_create_statements(full_model)

  assert len(statements) == 7
  assert statements[0] == "CREATE SCHEMA IF NOT EXISTS app;"
  assert statements[-1] == "CREATE EXTENSION IF NOT EXISTS pgcrypto SCHEMA app;"


def test_generate_schema_is_deterministic(crdb, full_model):
  assert crdb.generate_schema(full_model) == crdb.generate_schema(full_model)


def test_drop_script_uses_reverse_kind_order(crdb, full_model):
  sql = crdb.generate_drop_schema(full_model).sql

  assert sql.startswith("-- CockroachDB Schema Teardown Generated from UnifiedModel\n\n")
  markers = [
    "DROP EXTENSION",
    "DROP SEQUENCE",
    "DROP TRIGGER",
    "DROP FUNCTION",
    "DROP TYPE",
    "DROP TABLE",
    "DROP SCHEMA",
  ]
  positions = [sql.index(m) for m in markers]
  assert positions == sorted(positions)


class StrictSequenceDialect(CockroachDBDialect):
  """Dialect that refuses cycling sequences, to exercise the failure path."""

  DIALECT_NAME = "strict"

  def validate_sequence(self, sequence):
    if sequence.cycle:
      raise DdlGenerationError(f"Sequence {sequence.name} cannot cycle.")


def test_validation_failure_propagates_from_entry_point():
  d = StrictSequenceDialect()
  with pytest.raises(DdlGenerationError):
    d.generate_create_sequence_sql(Sequence(schema="s", name="q", cycle=True))


def test_validation_failure_aborts_full_script():
  d = StrictSequenceDialect()
  model = UnifiedModel(sequences=[Sequence(schema="s", name="q", cycle=True)])
  with pytest.raises(DdlGenerationError, match="cannot cycle"):
    d.generate_schema(model)


def test_cockroachdb_entry_points_never_fail(crdb, full_model):
  assert crdb.generate_create_function_sql(full_model.functions[0])
  assert crdb.generate_create_trigger_sql(full_model.triggers[0])
  assert crdb.generate_create_sequence_sql(Sequence(schema="s", name="q", cycle=True))
