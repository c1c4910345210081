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

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .env import ENV_PROFILE, ENV_PROFILES_PATH, env_str

"""
Profile loading for unifiedmodel.

Profiles define environment-specific configuration. Today this is only the
default SQL dialect used when no dialect is requested explicitly; rendering
itself has no options.
"""

PROFILES_FILENAME = "unifiedmodel_profiles.yaml"
DEFAULT_DIALECT = "cockroachdb"


@dataclass
class Profile:
  name: str

  # Dialect used for DDL generation (unless env override)
  default_dialect: str


def _find_profiles_path(explicit_path: str | None = None) -> Path:
  """
  Locate unifiedmodel_profiles.yaml in several common locations:

  1. explicit_path argument (if provided and exists)
  2. UNIFIEDMODEL_PROFILES_PATH env var (if set and exists)
  3. common fallback locations relative to the CWD and /etc

  Raises:
      FileNotFoundError: if no suitable file can be found.
  """
  candidates: list[Path] = []

  # 1) explicit argument
  if explicit_path:
    candidates.append(Path(explicit_path))

  # 2) env var
  env_path = env_str(ENV_PROFILES_PATH)
  if env_path:
    candidates.append(Path(env_path))

  # 3) fallbacks
  candidates += [
    Path.cwd() / "config" / PROFILES_FILENAME,
    Path("/etc/unifiedmodel") / PROFILES_FILENAME,
  ]

  for c in candidates:
    if c and c.exists():
      return c

  raise FileNotFoundError(
    f"{PROFILES_FILENAME} not found in expected locations. "
    f"Provide an explicit path or configure {ENV_PROFILES_PATH}."
  )


def load_profile(profiles_path: Optional[str] = None) -> Profile:
  """
  Load and return the current active profile.

  Resolution order:
    - UNIFIEDMODEL_PROFILE env var
    - `active_profile` key in unifiedmodel_profiles.yaml
    - default 'dev'

  Raises:
      FileNotFoundError: if no profiles file can be found.
      KeyError: if the active profile is not defined.
      ValueError: if the file, `profiles` or the active profile entry
      is not a mapping.
  """
  path = _find_profiles_path(profiles_path)

  with open(path, "r") as f:
    data = yaml.safe_load(f) or {}

  if not isinstance(data, dict):
    raise ValueError(
      f"{PROFILES_FILENAME} at {path} must contain a mapping, "
      f"got {type(data).__name__}."
    )

  active = str(env_str(ENV_PROFILE, data.get("active_profile") or "dev"))
  profiles = data.get("profiles") or {}

  if not isinstance(profiles, dict):
    raise ValueError(
      f"'profiles' in {PROFILES_FILENAME} at {path} must be a mapping "
      f"of profile names, got {type(profiles).__name__}."
    )

  if active not in profiles:
    available = ", ".join(sorted(profiles)) if profiles else "(none)"
    raise KeyError(
      f"Active profile '{active}' not found in {PROFILES_FILENAME} "
      f"at {path}. Available profiles: {available}."
    )

  p = profiles[active] or {}
  if not isinstance(p, dict):
    raise ValueError(
      f"Profile '{active}' in {PROFILES_FILENAME} at {path} must be a mapping, "
      f"got {type(p).__name__}."
    )

  return Profile(
    name=active,
    default_dialect=str(p.get("default_dialect") or DEFAULT_DIALECT),
  )
