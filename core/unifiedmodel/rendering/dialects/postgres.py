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

from typing import List

from .cockroachdb import CockroachDBDialect
from ...models import Schema, UnifiedModel


class PostgresDialect(CockroachDBDialect):
  """
  DDL dialect for PostgreSQL.

  CockroachDB speaks the PostgreSQL DDL grammar for everything the unified
  model describes, so this mirrors CockroachDB except for schemas:
  PostgreSQL has no schema-level character set or collation.
  """

  DIALECT_NAME = "postgres"
  DISPLAY_NAME = "PostgreSQL"

  def render_create_schema(self, schema: Schema) -> str:
    return f"CREATE SCHEMA IF NOT EXISTS {self.render_identifier(schema.name)};"

  def collect_warnings(self, model: UnifiedModel) -> List[str]:
    warnings = []
    for schema in model.schemas:
      if schema.character_set:
        warnings.append(
          f"Schema '{schema.name}': CHARACTER SET {schema.character_set} "
          f"is not supported by PostgreSQL and was omitted."
        )
      if schema.collation:
        warnings.append(
          f"Schema '{schema.name}': COLLATE {schema.collation} "
          f"is not supported by PostgreSQL and was omitted."
        )
    return warnings
