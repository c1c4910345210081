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
from typing import List, Optional, Type

import yaml

from ...config import profiles
from ...config.env import ENV_DIALECT, ENV_SQL_DIALECT, env_str
from .base import DdlDialect, DdlGenerationError, SchemaScript
from .cockroachdb import CockroachDBDialect
from .postgres import PostgresDialect

"""
DDL dialect adapters.

Each dialect implements DdlDialect and knows how to render unified model
objects into concrete CREATE / DROP statements.
"""

logger = logging.getLogger(__name__)

# Registry of known dialects.
_DIALECT_REGISTRY: dict[str, Type[DdlDialect]] = {
  "cockroachdb": CockroachDBDialect,
  "postgres": PostgresDialect,
}

# Alternative spellings accepted on lookup
_DIALECT_ALIASES: dict[str, str] = {
  "cockroach": "cockroachdb",
  "crdb": "cockroachdb",
  "postgresql": "postgres",
  "pg": "postgres",
}


def register_dialect(name: str, dialect_cls: Type[DdlDialect]) -> None:
  """
  Register (or replace) a dialect class under the given name.
  """
  if not (isinstance(dialect_cls, type) and issubclass(dialect_cls, DdlDialect)):
    raise TypeError(f"{dialect_cls!r} is not a DdlDialect subclass.")
  _DIALECT_REGISTRY[name.lower()] = dialect_cls


def get_available_dialect_names() -> List[str]:
  return sorted(_DIALECT_REGISTRY)


def _resolve_dialect_name(explicit: Optional[str] = None) -> str:
  """
  Resolve a dialect name from (in order):

  1. explicit argument
  2. environment variables (UNIFIEDMODEL_SQL_DIALECT, UNIFIEDMODEL_DIALECT)
  3. active profile.default_dialect
  4. hard fallback 'cockroachdb'
  """
  # 1) Explicit argument (e.g. CLI flag)
  if explicit:
    return explicit.lower()

  # 2) Env overrides
  env_name = env_str(ENV_SQL_DIALECT) or env_str(ENV_DIALECT)
  if env_name:
    return env_name.lower()

  # 3) Profile.default_dialect
  try:
    profile = profiles.load_profile()
    if profile.default_dialect:
      return profile.default_dialect.lower()
  except (FileNotFoundError, KeyError, ValueError, yaml.YAMLError) as exc:
    logger.debug("No usable profile for dialect resolution: %s", exc)

  # 4) Hard fallback
  return profiles.DEFAULT_DIALECT


def get_active_dialect(name: Optional[str] = None) -> DdlDialect:
  """
  Return a new instance of the active DdlDialect.

  Resolution order:
    - `name` argument (if provided)
    - UNIFIEDMODEL_SQL_DIALECT / UNIFIEDMODEL_DIALECT env vars
    - active profile's `default_dialect`
    - hard fallback 'cockroachdb'

  Raises:
      ValueError: if the resolved name is not registered.
  """
  dialect_name = _resolve_dialect_name(name)
  dialect_name = _DIALECT_ALIASES.get(dialect_name, dialect_name)

  try:
    dialect_cls = _DIALECT_REGISTRY[dialect_name]
  except KeyError as exc:
    available = ", ".join(get_available_dialect_names())
    raise ValueError(
      f"Unknown SQL dialect: {dialect_name!r}. "
      f"Available dialects: {available}."
    ) from exc

  logger.debug("Using DDL dialect %s (%s)", dialect_name, dialect_cls.__name__)
  return dialect_cls()


__all__ = [
  "CockroachDBDialect",
  "DdlDialect",
  "DdlGenerationError",
  "PostgresDialect",
  "SchemaScript",
  "get_active_dialect",
  "get_available_dialect_names",
  "register_dialect",
]
