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

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator, List

from ...models import (
  Column,
  Constraint,
  Enum,
  Extension,
  Function,
  Index,
  Schema,
  Sequence,
  Table,
  Trigger,
  UnifiedModel,
)


class DdlGenerationError(ValueError):
  """
  Raised by a dialect that cannot render part of a model.
  """


@dataclass(frozen=True)
class SchemaScript:
  """
  Result of a full-model render: the script text plus dialect caveats
  (e.g. "feature X not supported, omitted").
  """
  sql: str
  warnings: List[str] = field(default_factory=list)


class DdlDialect(ABC):
  """
  Base interface for DDL dialects.
  Implementations translate unified model objects into CREATE / DROP
  statements for one target database.

  Object renderers are pure: no I/O, no logging, and incomplete input
  degrades to omitted clauses instead of errors. The generate_*_sql entry
  points are the fallible part of the contract and may raise
  DdlGenerationError.
  """

  DIALECT_NAME = ""
  # Human readable name used in script headers
  DISPLAY_NAME = ""

  # ---------------------------------------------------------------------------
  # Identifiers
  # ---------------------------------------------------------------------------
  def render_identifier(self, name: str) -> str:
    """
    Render a single identifier. Names are emitted as given; dialects that
    need quoting override this.
    """
    return name

  def render_table_identifier(self, schema: str | None, name: str) -> str:
    """
    Render a schema-qualified name:

      render_table_identifier("app", "users") -> app.users
      render_table_identifier(None, "users")  -> users
    """
    name_sql = self.render_identifier(name)
    if schema:
      return f"{self.render_identifier(schema)}.{name_sql}"
    return name_sql

  def render_name_list(self, names: List[str]) -> str:
    return ", ".join(self.render_identifier(n) for n in names)

  # ---------------------------------------------------------------------------
  # Create statements
  # ---------------------------------------------------------------------------
  @abstractmethod
  def render_create_schema(self, schema: Schema) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_create_table(self, table: Table) -> str:
    """
    Render CREATE TABLE including the table's index statements.
    """
    raise NotImplementedError

  @abstractmethod
  def render_column_definition(self, column: Column) -> str:
    """
    Render one column line of a CREATE TABLE body.
    """
    raise NotImplementedError

  @abstractmethod
  def render_constraint_definition(self, constraint: Constraint) -> str:
    """
    Render one table-level constraint line. Unsupported kinds render as
    an empty string.
    """
    raise NotImplementedError

  @abstractmethod
  def render_create_index(self, index: Index) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_create_enum(self, enum: Enum) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_create_function(self, function: Function) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_create_trigger(self, trigger: Trigger) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_create_sequence(self, sequence: Sequence) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_create_extension(self, extension: Extension) -> str:
    raise NotImplementedError

  # ---------------------------------------------------------------------------
  # Drop statements
  # ---------------------------------------------------------------------------
  @abstractmethod
  def render_drop_schema(self, schema: Schema) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_drop_table(self, table: Table) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_drop_enum(self, enum: Enum) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_drop_function(self, function: Function) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_drop_trigger(self, trigger: Trigger) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_drop_sequence(self, sequence: Sequence) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_drop_extension(self, extension: Extension) -> str:
    raise NotImplementedError

  # ---------------------------------------------------------------------------
  # Validation hooks (can be overridden by concrete dialects)
  # ---------------------------------------------------------------------------
  def validate_table(self, table: Table) -> None:
    """Raise DdlGenerationError if the table cannot be rendered."""

  def validate_function(self, function: Function) -> None:
    """Raise DdlGenerationError if the function cannot be rendered."""

  def validate_trigger(self, trigger: Trigger) -> None:
    """Raise DdlGenerationError if the trigger cannot be rendered."""

  def validate_sequence(self, sequence: Sequence) -> None:
    """Raise DdlGenerationError if the sequence cannot be rendered."""

  def collect_warnings(self, model: UnifiedModel) -> List[str]:
    """
    Return dialect caveats for the given model, e.g. features that are
    approximated or omitted. Empty by default.
    """
    return []

  # ---------------------------------------------------------------------------
  # Fallible entry points
  # ---------------------------------------------------------------------------
  def generate_create_table_sql(self, table: Table) -> str:
    self.validate_table(table)
    return self.render_create_table(table)

  def generate_create_function_sql(self, function: Function) -> str:
    self.validate_function(function)
    return self.render_create_function(function)

  def generate_create_trigger_sql(self, trigger: Trigger) -> str:
    self.validate_trigger(trigger)
    return self.render_create_trigger(trigger)

  def generate_create_sequence_sql(self, sequence: Sequence) -> str:
    self.validate_sequence(sequence)
    return self.render_create_sequence(sequence)

  # ---------------------------------------------------------------------------
  # Full-model orchestration
  # ---------------------------------------------------------------------------
  @property
  def header_comment(self) -> str:
    return f"-- {self.DISPLAY_NAME} Schema Generated from UnifiedModel"

  @property
  def drop_header_comment(self) -> str:
    return f"-- {self.DISPLAY_NAME} Schema Teardown Generated from UnifiedModel"

  def iter_create_statements(self, model: UnifiedModel) -> Iterator[str]:
    """
    Yield one create statement per object in fixed kind order:
    schemas, tables, enums, functions, triggers, sequences, extensions.

    Objects are not sorted by dependency; ordering within a kind is the
    caller's order.
    """
    for schema in model.schemas:
      yield self.render_create_schema(schema)
    for table in model.tables:
      yield self.generate_create_table_sql(table)
    for enum in model.enums:
      yield self.render_create_enum(enum)
    for function in model.functions:
      yield self.generate_create_function_sql(function)
    for trigger in model.triggers:
      yield self.generate_create_trigger_sql(trigger)
    for sequence in model.sequences:
      yield self.generate_create_sequence_sql(sequence)
    for extension in model.extensions:
      yield self.render_create_extension(extension)

  def iter_drop_statements(self, model: UnifiedModel) -> Iterator[str]:
    """
    Yield drop statements in reverse kind order:
    extensions, sequences, triggers, functions, enums, tables, schemas.
    """
    for extension in model.extensions:
      yield self.render_drop_extension(extension)
    for sequence in model.sequences:
      yield self.render_drop_sequence(sequence)
    for trigger in model.triggers:
      yield self.render_drop_trigger(trigger)
    for function in model.functions:
      yield self.render_drop_function(function)
    for enum in model.enums:
      yield self.render_drop_enum(enum)
    for table in model.tables:
      yield self.render_drop_table(table)
    for schema in model.schemas:
      yield self.render_drop_schema(schema)

  def generate_create_statements(self, model: UnifiedModel) -> List[str]:
    """List form of iter_create_statements()."""
    return list(self.iter_create_statements(model))

  def generate_schema(self, model: UnifiedModel) -> SchemaScript:
    """
    Render the whole model as one script: a header comment, then every
    create statement followed by a blank line.
    """
    parts = [self.header_comment, "\n\n"]
    for statement in self.iter_create_statements(model):
      parts.append(statement)
      parts.append("\n\n")

    return SchemaScript(sql="".join(parts), warnings=self.collect_warnings(model))

  def generate_drop_schema(self, model: UnifiedModel) -> SchemaScript:
    """
    Render a teardown script for the whole model, same layout as
    generate_schema().
    """
    parts = [self.drop_header_comment, "\n\n"]
    for statement in self.iter_drop_statements(model):
      parts.append(statement)
      parts.append("\n\n")

    return SchemaScript(sql="".join(parts), warnings=[])
