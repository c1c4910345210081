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

import json
from pathlib import Path
from typing import Any, Callable, Dict, List

import yaml

from .models import (
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

"""
Build a UnifiedModel from a plain document.

The document is a mapping with one list per object kind, keys in
snake_case matching the model fields:

  schemas:
    - name: app
  tables:
    - schema: app
      name: users
      columns:
        - {name: id, data_type: INT8, is_nullable: false, is_primary_key: true}
      indexes:
        - {name: users_email_idx, columns: [{column_name: email, order: 1}]}

YAML files (.yaml / .yml) are read with yaml.safe_load, everything else
as JSON.
"""

YAML_SUFFIXES = (".yaml", ".yml")


def _require_mapping(value: Any, where: str) -> Dict[str, Any]:
  if not isinstance(value, dict):
    raise ValueError(f"{where}: expected a mapping, got {type(value).__name__}.")
  return value


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
  value = data.get(key)
  if value in (None, ""):
    raise ValueError(f"{where}: missing required key '{key}'.")
  return value


def _list_of(data: Dict[str, Any], key: str, where: str) -> List[Any]:
  value = data.get(key) or []
  if not isinstance(value, list):
    raise ValueError(f"{where}: '{key}' must be a list.")
  return value


def _optional_int(data: Dict[str, Any], key: str, where: str) -> int | None:
  value = data.get(key)
  if value is None:
    return None
  # bool is an int subclass; floats would be truncated silently
  if isinstance(value, (bool, float)):
    raise ValueError(f"{where}: '{key}' must be an integer, got {value!r}.")
  try:
    return int(value)
  except (TypeError, ValueError) as exc:
    raise ValueError(f"{where}: '{key}' must be an integer, got {value!r}.") from exc


def _data_type(value: Any, where: str) -> DataType:
  # "INT8" or {name: "NUMERIC(10,2)", precision: 10, scale: 2}
  if isinstance(value, str) and value:
    return DataType(name=value)
  if isinstance(value, dict):
    return DataType(
      name=_require(value, "name", where),
      length=_optional_int(value, "length", where),
      precision=_optional_int(value, "precision", where),
      scale=_optional_int(value, "scale", where),
    )
  raise ValueError(f"{where}: missing or invalid 'data_type'.")


def _column(data: Dict[str, Any], where: str) -> Column:
  default = data.get("default_value")
  return Column(
    name=_require(data, "name", where),
    data_type=_data_type(data.get("data_type"), where),
    is_nullable=bool(data.get("is_nullable", True)),
    default_value=None if default is None else str(default),
    default_is_function=bool(data.get("default_is_function", False)),
    collation=data.get("collation") or "",
    is_primary_key=bool(data.get("is_primary_key", False)),
  )


def _constraint(data: Dict[str, Any], where: str) -> Constraint:
  return Constraint(
    type=str(_require(data, "type", where)).upper(),
    name=data.get("name") or "",
    columns=list(_list_of(data, "columns", where)),
    check_expression=data.get("check_expression") or "",
    referenced_table=data.get("referenced_table") or "",
    referenced_columns=list(_list_of(data, "referenced_columns", where)),
    on_delete=data.get("on_delete") or "",
    on_update=data.get("on_update") or "",
  )


def _index_column(value: Any, where: str) -> IndexColumn:
  if isinstance(value, str) and value:
    return IndexColumn(column_name=value)
  data = _require_mapping(value, where)
  return IndexColumn(
    column_name=_require(data, "column_name", where),
    order=_optional_int(data, "order", where) or 0,
    null_position=_optional_int(data, "null_position", where) or 0,
  )


def _index(data: Dict[str, Any], where: str, schema: str, table: str) -> Index:
  columns = [
    _index_column(c, f"{where}.columns[{i}]")
    for i, c in enumerate(_list_of(data, "columns", where))
  ]
  return Index(
    schema=data.get("schema") or schema,
    table=data.get("table") or table,
    name=data.get("name") or "",
    is_unique=bool(data.get("is_unique", False)),
    columns=columns,
    include_columns=list(_list_of(data, "include_columns", where)),
    where_clause=data.get("where_clause") or "",
  )


def _schema(data: Dict[str, Any], where: str) -> Schema:
  return Schema(
    name=_require(data, "name", where),
    character_set=data.get("character_set") or "",
    collation=data.get("collation") or "",
  )


def _table(data: Dict[str, Any], where: str) -> Table:
  schema = data.get("schema") or ""
  name = _require(data, "name", where)

  def _each(key: str, build: Callable[..., Any], *extra: Any) -> list:
    return [
      build(_require_mapping(item, f"{where}.{key}[{i}]"), f"{where}.{key}[{i}]", *extra)
      for i, item in enumerate(_list_of(data, key, where))
    ]

  return Table(
    schema=schema,
    name=name,
    columns=_each("columns", _column),
    constraints=_each("constraints", _constraint),
    indexes=_each("indexes", _index, schema, name),
  )


def _enum(data: Dict[str, Any], where: str) -> Enum:
  return Enum(
    schema=data.get("schema") or "",
    name=_require(data, "name", where),
    values=[str(v) for v in _list_of(data, "values", where)],
  )


def _function(data: Dict[str, Any], where: str) -> Function:
  arguments = []
  for i, arg in enumerate(_list_of(data, "arguments", where)):
    arg_where = f"{where}.arguments[{i}]"
    arg = _require_mapping(arg, arg_where)
    arguments.append(FunctionArgument(
      name=_require(arg, "name", arg_where),
      data_type=_require(arg, "data_type", arg_where),
    ))

  return Function(
    schema=data.get("schema") or "",
    name=_require(data, "name", where),
    arguments=arguments,
    return_type=data.get("return_type") or "",
    definition=data.get("definition") or "",
  )


def _trigger(data: Dict[str, Any], where: str) -> Trigger:
  return Trigger(
    name=_require(data, "name", where),
    timing=data.get("timing") or "",
    event=data.get("event") or "",
    schema=data.get("schema") or "",
    table=_require(data, "table", where),
    definition=data.get("definition") or "",
  )


def _sequence(data: Dict[str, Any], where: str) -> Sequence:
  return Sequence(
    schema=data.get("schema") or "",
    name=_require(data, "name", where),
    data_type=data.get("data_type") or "",
    start=_optional_int(data, "start", where),
    increment=_optional_int(data, "increment", where),
    min_value=_optional_int(data, "min_value", where),
    max_value=_optional_int(data, "max_value", where),
    cache_size=_optional_int(data, "cache_size", where),
    cycle=bool(data.get("cycle", False)),
  )


def _extension(data: Dict[str, Any], where: str) -> Extension:
  return Extension(
    name=_require(data, "name", where),
    schema=data.get("schema") or "",
  )


_SECTIONS: Dict[str, Callable[[Dict[str, Any], str], Any]] = {
  "schemas": _schema,
  "tables": _table,
  "enums": _enum,
  "functions": _function,
  "triggers": _trigger,
  "sequences": _sequence,
  "extensions": _extension,
}


def model_from_dict(data: Dict[str, Any] | None) -> UnifiedModel:
  """
  Build a UnifiedModel from a plain mapping.

  Unknown top-level keys are rejected so typos do not silently drop
  objects.

  Raises:
      ValueError: if the document is malformed; the message names the
      offending section and key.
  """
  data = _require_mapping(data or {}, "model")

  unknown = sorted(set(data) - set(_SECTIONS))
  if unknown:
    raise ValueError(
      f"model: unknown section(s) {', '.join(unknown)}. "
      f"Expected any of: {', '.join(_SECTIONS)}."
    )

  sections = {}
  for key, build in _SECTIONS.items():
    sections[key] = [
      build(_require_mapping(item, f"{key}[{i}]"), f"{key}[{i}]")
      for i, item in enumerate(_list_of(data, key, "model"))
    ]

  return UnifiedModel(**sections)


def load_model(path: str | Path) -> UnifiedModel:
  """
  Read a model document from disk (YAML or JSON, chosen by file suffix).
  """
  path = Path(path)
  with open(path, "r", encoding="utf-8") as f:
    if path.suffix.lower() in YAML_SUFFIXES:
      data = yaml.safe_load(f)
    else:
      data = json.load(f)

  return model_from_dict(data)
