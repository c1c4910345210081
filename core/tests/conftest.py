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

from unifiedmodel.models import (
  CHECK,
  FOREIGN_KEY,
  UNIQUE,
  Column,
  Constraint,
  DataType,
  Enum,
  Extension,
  Function,
  FunctionArgument,
  Index,
  IndexColumn,
  Schema,
  Sequence,
  Table,
  Trigger,
  UnifiedModel,
)
from unifiedmodel.rendering.dialects.cockroachdb import CockroachDBDialect


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
  """
  Keep dialect / profile resolution independent of the developer machine:
  no UNIFIEDMODEL_* env vars and a CWD without config/.
  """
  for var in (
    "UNIFIEDMODEL_SQL_DIALECT",
    "UNIFIEDMODEL_DIALECT",
    "UNIFIEDMODEL_PROFILE",
    "UNIFIEDMODEL_PROFILES_PATH",
    "UNIFIEDMODEL_LOG_LEVEL",
  ):
    monkeypatch.delenv(var, raising=False)
  monkeypatch.chdir(tmp_path)
  yield


@pytest.fixture
def crdb():
  """Provide a CockroachDBDialect instance."""
  return CockroachDBDialect()


# -------------------------------------------------------------------
# Sample model objects
# -------------------------------------------------------------------
@pytest.fixture
def users_table():
  """
  app.users with a composite primary key, one constraint of each kind
  and a partial unique index.
  """
  return Table(
    schema="app",
    name="users",
    columns=[
      Column(name="tenant_id", data_type=DataType("INT8"), is_nullable=False, is_primary_key=True),
      Column(name="id", data_type=DataType("UUID"), is_nullable=False,
             default_value="gen_random_uuid()", default_is_function=True, is_primary_key=True),
      Column(name="email", data_type=DataType("STRING"), is_nullable=False, collation="en_US"),
      Column(name="status", data_type=DataType("STRING"), default_value="active"),
    ],
    constraints=[
      Constraint(type=UNIQUE, name="users_email_key", columns=["email"]),
      Constraint(type=CHECK, check_expression="status <> ''"),
      Constraint(
        type=FOREIGN_KEY,
        name="users_tenant_fk",
        columns=["tenant_id"],
        referenced_table="app.tenants",
        referenced_columns=["id"],
        on_delete="CASCADE",
      ),
    ],
    indexes=[
      Index(
        schema="app",
        table="users",
        name="users_status_idx",
        columns=[IndexColumn(column_name="status", order=-1, null_position=1)],
        include_columns=["email"],
        where_clause="status <> 'deleted'",
      ),
    ],
  )


@pytest.fixture
def full_model(users_table):
  """A model with one object of every kind."""
  return UnifiedModel(
    schemas=[Schema(name="app")],
    tables=[users_table],
    enums=[Enum(schema="app", name="user_status", values=["active", "blocked"])],
    functions=[
      Function(
        schema="app",
        name="touch",
        arguments=[FunctionArgument(name="ts", data_type="TIMESTAMPTZ")],
        return_type="TIMESTAMPTZ",
        definition="$$ SELECT ts $$ LANGUAGE SQL",
      ),
    ],
    triggers=[
      Trigger(
        name="users_touch",
        timing="BEFORE",
        event="UPDATE",
        schema="app",
        table="users",
        definition="EXECUTE FUNCTION app.touch()",
      ),
    ],
    sequences=[Sequence(schema="app", name="user_seq", start=1, increment=1)],
    extensions=[Extension(name="pgcrypto", schema="app")],
  )
