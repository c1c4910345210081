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

from .base import DdlDialect
from ...models import (
  CHECK,
  FOREIGN_KEY,
  PRIMARY_KEY,
  UNIQUE,
  Column,
  Constraint,
  Enum,
  Extension,
  Function,
  Index,
  IndexColumn,
  Schema,
  Sequence,
  Table,
  Trigger,
)


class CockroachDBDialect(DdlDialect):
  """
  DDL dialect for CockroachDB.

  Identifiers, types, expressions and bodies are emitted verbatim.
  Enum values are single-quoted without escaping embedded quotes.
  """

  DIALECT_NAME = "cockroachdb"
  DISPLAY_NAME = "CockroachDB"

  # ---------------------------------------------------------------------------
  # Schema
  # ---------------------------------------------------------------------------
  def render_create_schema(self, schema: Schema) -> str:
    sql = f"CREATE SCHEMA IF NOT EXISTS {self.render_identifier(schema.name)}"
    if schema.character_set:
      sql += f" CHARACTER SET {schema.character_set}"
    if schema.collation:
      sql += f" COLLATE {schema.collation}"
    return sql + ";"

  # ---------------------------------------------------------------------------
  # Table
  # ---------------------------------------------------------------------------
  def render_create_table(self, table: Table) -> str:
    """
    Column definitions come first, then the primary key synthesized from
    the columns flagged is_primary_key, then the remaining constraints in
    input order. Explicit PRIMARY KEY constraints are skipped so the key
    is never emitted twice. Index statements follow the table, one per line.
    """
    qtbl = self.render_table_identifier

    defs = [self.render_column_definition(c) for c in table.columns]

    pk_columns = table.primary_key_columns
    if pk_columns:
      defs.append(f"PRIMARY KEY ({self.render_name_list(pk_columns)})")

    for constraint in table.constraints:
      if constraint.type == PRIMARY_KEY:
        continue
      constraint_sql = self.render_constraint_definition(constraint)
      if constraint_sql:
        defs.append(constraint_sql)

    sql = f"CREATE TABLE IF NOT EXISTS {qtbl(table.schema, table.name)} (\n"
    sql += ",\n".join(defs)
    sql += "\n);"

    for index in table.indexes:
      sql += "\n" + self.render_create_index(index)

    return sql

  def render_column_definition(self, column: Column) -> str:
    sql = f"  {self.render_identifier(column.name)} {column.data_type.name}"

    if not column.is_nullable:
      sql += " NOT NULL"

    if column.default_value is not None:
      if column.default_is_function:
        sql += f" DEFAULT {column.default_value}"
      else:
        sql += f" DEFAULT '{column.default_value}'"

    if column.collation:
      sql += f" COLLATE {column.collation}"

    return sql

  def render_constraint_definition(self, constraint: Constraint) -> str:
    """
    Render a table-level constraint. Kinds other than UNIQUE, CHECK and
    FOREIGN KEY render as an empty string.
    """
    q = self.render_name_list

    if constraint.type == UNIQUE:
      sql = f"UNIQUE ({q(constraint.columns)})"
    elif constraint.type == CHECK:
      sql = f"CHECK ({constraint.check_expression})"
    elif constraint.type == FOREIGN_KEY:
      sql = (
        f"FOREIGN KEY ({q(constraint.columns)}) "
        f"REFERENCES {constraint.referenced_table} ({q(constraint.referenced_columns)})"
      )
      if constraint.on_delete:
        sql += f" ON DELETE {constraint.on_delete}"
      if constraint.on_update:
        sql += f" ON UPDATE {constraint.on_update}"
    else:
      return ""

    if constraint.name:
      sql += f" CONSTRAINT {self.render_identifier(constraint.name)}"

    return sql

  # ---------------------------------------------------------------------------
  # Index
  # ---------------------------------------------------------------------------
  def render_index_column(self, column: IndexColumn) -> str:
    sql = self.render_identifier(column.column_name)

    if column.order > 0:
      sql += " ASC"
    elif column.order < 0:
      sql += " DESC"

    if column.null_position > 0:
      sql += " NULLS FIRST"
    elif column.null_position < 0:
      sql += " NULLS LAST"

    return sql

  def render_create_index(self, index: Index) -> str:
    qtbl = self.render_table_identifier

    sql = "CREATE UNIQUE INDEX" if index.is_unique else "CREATE INDEX"
    if index.name:
      sql += f" {self.render_identifier(index.name)}"

    col_list = ", ".join(self.render_index_column(c) for c in index.columns)
    sql += f" ON {qtbl(index.schema, index.table)} ({col_list})"

    if index.include_columns:
      sql += f" INCLUDE ({self.render_name_list(index.include_columns)})"

    if index.where_clause:
      sql += f" WHERE {index.where_clause}"

    return sql + ";"

  # ---------------------------------------------------------------------------
  # Types, routines, sequences, extensions
  # ---------------------------------------------------------------------------
  def render_create_enum(self, enum: Enum) -> str:
    values = ", ".join(f"'{v}'" for v in enum.values)
    return f"CREATE TYPE {self.render_table_identifier(enum.schema, enum.name)} AS ENUM ({values});"

  def render_create_function(self, function: Function) -> str:
    args = ", ".join(
      f"{self.render_identifier(a.name)} {a.data_type}" for a in function.arguments
    )
    qualified = self.render_table_identifier(function.schema, function.name)
    return (
      f"CREATE OR REPLACE FUNCTION {qualified}({args}) "
      f"RETURNS {function.return_type} AS {function.definition};"
    )

  def render_create_trigger(self, trigger: Trigger) -> str:
    qtbl = self.render_table_identifier
    return (
      f"CREATE TRIGGER {self.render_identifier(trigger.name)}\n"
      f"  {trigger.timing} {trigger.event}\n"
      f"  ON {qtbl(trigger.schema, trigger.table)}\n"
      f"  FOR EACH ROW\n"
      f"{trigger.definition};"
    )

  def render_create_sequence(self, sequence: Sequence) -> str:
    qualified = self.render_table_identifier(sequence.schema, sequence.name)
    sql = f"CREATE SEQUENCE IF NOT EXISTS {qualified}"

    if sequence.data_type:
      sql += f" AS {sequence.data_type}"

    # None means "not set"; 0 is a real value and is emitted
    for keyword, value in (
      ("START WITH", sequence.start),
      ("INCREMENT BY", sequence.increment),
      ("MINVALUE", sequence.min_value),
      ("MAXVALUE", sequence.max_value),
      ("CACHE", sequence.cache_size),
    ):
      if value is not None:
        sql += f" {keyword} {int(value)}"

    sql += " CYCLE" if sequence.cycle else " NO CYCLE"
    return sql + ";"

  def render_create_extension(self, extension: Extension) -> str:
    sql = f"CREATE EXTENSION IF NOT EXISTS {self.render_identifier(extension.name)}"
    if extension.schema:
      sql += f" SCHEMA {self.render_identifier(extension.schema)}"
    return sql + ";"

  # ---------------------------------------------------------------------------
  # Drop statements
  # ---------------------------------------------------------------------------
  def render_drop_schema(self, schema: Schema) -> str:
    return f"DROP SCHEMA IF EXISTS {self.render_identifier(schema.name)} CASCADE;"

  def render_drop_table(self, table: Table) -> str:
    qtbl = self.render_table_identifier
    return f"DROP TABLE IF EXISTS {qtbl(table.schema, table.name)} CASCADE;"

  def render_drop_enum(self, enum: Enum) -> str:
    qtbl = self.render_table_identifier
    return f"DROP TYPE IF EXISTS {qtbl(enum.schema, enum.name)} CASCADE;"

  def render_drop_function(self, function: Function) -> str:
    qtbl = self.render_table_identifier
    return f"DROP FUNCTION IF EXISTS {qtbl(function.schema, function.name)} CASCADE;"

  def render_drop_trigger(self, trigger: Trigger) -> str:
    qtbl = self.render_table_identifier
    return (
      f"DROP TRIGGER IF EXISTS {self.render_identifier(trigger.name)} "
      f"ON {qtbl(trigger.schema, trigger.table)} CASCADE;"
    )

  def render_drop_sequence(self, sequence: Sequence) -> str:
    qtbl = self.render_table_identifier
    return f"DROP SEQUENCE IF EXISTS {qtbl(sequence.schema, sequence.name)} CASCADE;"

  def render_drop_extension(self, extension: Extension) -> str:
    # Extensions are database-wide, addressed by name only
    return f"DROP EXTENSION IF EXISTS {self.render_identifier(extension.name)} CASCADE;"
