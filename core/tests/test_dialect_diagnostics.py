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


"""
Dialect diagnostics smoke tests.

These tests validate that the diagnostics module can build a consistent
snapshot for all registered dialects.
"""

import pytest

from unifiedmodel.rendering import dialects as dialects_mod
from unifiedmodel.rendering.dialects import (
  get_active_dialect,
  get_available_dialect_names,
  register_dialect,
)
from unifiedmodel.rendering.dialects.base import DdlDialect
from unifiedmodel.rendering.dialects.diagnostics import (
  collect_dialect_diagnostics,
  snapshot_all_dialects,
)


def test_collect_dialect_diagnostics_for_each_registered_dialect():
  for name in get_available_dialect_names():
    dialect = get_active_dialect(name)
    diag = collect_dialect_diagnostics(dialect)

    assert diag.name == name
    assert diag.class_name.endswith("Dialect")
    assert diag.header_comment.startswith("-- ")

    assert diag.sample_create_table.startswith("CREATE TABLE IF NOT EXISTS diag.sample (")
    assert "PRIMARY KEY (id)" in diag.sample_create_table
    assert diag.sample_create_index in diag.sample_create_table
    assert diag.sample_create_sequence.endswith("NO CYCLE;")
    assert diag.sample_drop_table == "DROP TABLE IF EXISTS diag.sample CASCADE;"
    assert diag.empty_schema_script == diag.header_comment + "\n\n"


def test_warning_count_reflects_dialect_caveats():
  assert collect_dialect_diagnostics(get_active_dialect("cockroachdb")).warning_count == 0
  # PostgreSQL cannot express the sample schema's character set
  assert collect_dialect_diagnostics(get_active_dialect("postgres")).warning_count == 1


def test_cockroachdb_sample_index():
  diag = collect_dialect_diagnostics(get_active_dialect("cockroachdb"))
  assert diag.sample_create_index == (
    "CREATE UNIQUE INDEX sample_code_idx ON diag.sample (code ASC NULLS LAST);"
  )


def test_snapshot_all_dialects_returns_all_registered_names():
  snapshot = snapshot_all_dialects()

  assert set(snapshot) == set(get_available_dialect_names())

  for name, diag in snapshot.items():
    as_dict = diag.to_dict()
    assert as_dict["name"] == name
    for key in [
      "class_name",
      "header_comment",
      "sample_create_table",
      "sample_drop_table",
      "warning_count",
    ]:
      assert key in as_dict


class MiniDialect(DdlDialect):
  """Smallest complete DdlDialect: every statement is a fixed marker."""

  DIALECT_NAME = "mini"
  DISPLAY_NAME = "Mini"

  def render_create_schema(self, schema):
    return f"-- schema {schema.name};"

  def render_create_table(self, table):
    return f"-- table {table.name};"

  def render_column_definition(self, column):
    return f"  {column.name}"

  def render_constraint_definition(self, constraint):
    return ""

  def render_create_index(self, index):
    return f"-- index {index.name};"

  def render_create_enum(self, enum):
    return "-- enum;"

  def render_create_function(self, function):
    return "-- function;"

  def render_create_trigger(self, trigger):
    return "-- trigger;"

  def render_create_sequence(self, sequence):
    return f"-- sequence {sequence.name};"

  def render_create_extension(self, extension):
    return "-- extension;"

  def render_drop_schema(self, schema):
    return "-- drop schema;"

  def render_drop_table(self, table):
    return f"-- drop table {table.name};"

  def render_drop_enum(self, enum):
    return "-- drop enum;"

  def render_drop_function(self, function):
    return "-- drop function;"

  def render_drop_trigger(self, trigger):
    return "-- drop trigger;"

  def render_drop_sequence(self, sequence):
    return "-- drop sequence;"

  def render_drop_extension(self, extension):
    return "-- drop extension;"


def test_registered_custom_dialect_is_diagnosable(monkeypatch):
  monkeypatch.setattr(dialects_mod, "_DIALECT_REGISTRY", dict(dialects_mod._DIALECT_REGISTRY))
  register_dialect("mini", MiniDialect)

  snapshot = snapshot_all_dialects()

  assert snapshot["mini"].sample_create_index == "-- index sample_code_idx;"
  assert snapshot["mini"].warning_count == 0


@pytest.mark.parametrize(
  "method",
  ["render_create_index", "render_column_definition", "render_constraint_definition"],
)
def test_object_renderers_are_part_of_the_dialect_interface(method):
  assert method in DdlDialect.__abstractmethods__

  namespace = {
    k: v for k, v in vars(MiniDialect).items()
    if k.startswith("render_") and k != method
  }
  incomplete = type("IncompleteDialect", (DdlDialect,), namespace)

  assert incomplete.__abstractmethods__ == frozenset({method})
  with pytest.raises(TypeError):
    incomplete()
