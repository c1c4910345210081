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

from dataclasses import dataclass, field
from typing import List, Optional

"""
Dialect-neutral description of a database schema (the "unified model").

All objects are plain value objects supplied by the caller. Dialect
generators read them and never mutate them. Empty strings mean "not set"
for optional text fields, None means "not set" for optional numbers.
"""

# Constraint kinds understood by the generators
PRIMARY_KEY = "PRIMARY KEY"
UNIQUE = "UNIQUE"
CHECK = "CHECK"
FOREIGN_KEY = "FOREIGN KEY"

CONSTRAINT_TYPES = (PRIMARY_KEY, UNIQUE, CHECK, FOREIGN_KEY)


@dataclass(frozen=True)
class Schema:
  name: str
  character_set: str = ""
  collation: str = ""


@dataclass(frozen=True)
class DataType:
  """
  Column type descriptor. Generators emit `name` verbatim, so parameterized
  types are expected to carry their parameters in the name, e.g.
  DataType("VARCHAR(255)").
  """
  name: str
  length: Optional[int] = None
  precision: Optional[int] = None
  scale: Optional[int] = None


@dataclass(frozen=True)
class Column:
  name: str
  data_type: DataType
  is_nullable: bool = True
  # None = no DEFAULT clause
  default_value: Optional[str] = None
  # True: default is an expression/function call and is emitted unquoted
  default_is_function: bool = False
  collation: str = ""
  is_primary_key: bool = False


@dataclass(frozen=True)
class Constraint:
  type: str
  name: str = ""
  columns: List[str] = field(default_factory=list)
  check_expression: str = ""
  referenced_table: str = ""
  referenced_columns: List[str] = field(default_factory=list)
  on_delete: str = ""
  on_update: str = ""


@dataclass(frozen=True)
class IndexColumn:
  """
  One indexed column.

  order:         >0 ascending, <0 descending, 0 unspecified
  null_position: >0 nulls first, <0 nulls last, 0 unspecified
  """
  column_name: str
  order: int = 0
  null_position: int = 0


@dataclass(frozen=True)
class Index:
  schema: str
  table: str
  name: str = ""
  is_unique: bool = False
  columns: List[IndexColumn] = field(default_factory=list)
  include_columns: List[str] = field(default_factory=list)
  # Partial index filter, emitted as WHERE <where_clause>
  where_clause: str = ""


@dataclass(frozen=True)
class Table:
  schema: str
  name: str
  columns: List[Column] = field(default_factory=list)
  constraints: List[Constraint] = field(default_factory=list)
  indexes: List[Index] = field(default_factory=list)

  @property
  def primary_key_columns(self) -> List[str]:
    """Names of the columns flagged as primary key, in column order."""
    return [c.name for c in self.columns if c.is_primary_key]


@dataclass(frozen=True)
class Enum:
  schema: str
  name: str
  # Order is the ordinal order of the enum type
  values: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class FunctionArgument:
  name: str
  data_type: str


@dataclass(frozen=True)
class Function:
  schema: str
  name: str
  arguments: List[FunctionArgument] = field(default_factory=list)
  return_type: str = ""
  # Opaque body, already valid in the target dialect
  definition: str = ""


@dataclass(frozen=True)
class Trigger:
  name: str
  timing: str
  event: str
  schema: str
  table: str
  definition: str = ""


@dataclass(frozen=True)
class Sequence:
  """
  Sequence settings. Every numeric setting is optional: None omits the
  clause, any integer (including 0) is emitted.
  """
  schema: str
  name: str
  data_type: str = ""
  start: Optional[int] = None
  increment: Optional[int] = None
  min_value: Optional[int] = None
  max_value: Optional[int] = None
  cache_size: Optional[int] = None
  cycle: bool = False


@dataclass(frozen=True)
class Extension:
  name: str
  schema: str = ""


@dataclass
class UnifiedModel:
  """
  Top-level container. Collections are kept in caller order; duplicates
  are not detected.
  """
  schemas: List[Schema] = field(default_factory=list)
  tables: List[Table] = field(default_factory=list)
  enums: List[Enum] = field(default_factory=list)
  functions: List[Function] = field(default_factory=list)
  triggers: List[Trigger] = field(default_factory=list)
  sequences: List[Sequence] = field(default_factory=list)
  extensions: List[Extension] = field(default_factory=list)

  def is_empty(self) -> bool:
    return not any((
      self.schemas,
      self.tables,
      self.enums,
      self.functions,
      self.triggers,
      self.sequences,
      self.extensions,
    ))
