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

import os
from typing import Optional

# Environment variable names
ENV_PROFILES_PATH = "UNIFIEDMODEL_PROFILES_PATH"
ENV_PROFILE = "UNIFIEDMODEL_PROFILE"
ENV_SQL_DIALECT = "UNIFIEDMODEL_SQL_DIALECT"
ENV_DIALECT = "UNIFIEDMODEL_DIALECT"
ENV_LOG_LEVEL = "UNIFIEDMODEL_LOG_LEVEL"

def env_str(key: str, default: Optional[str] = None) -> Optional[str]:
  """Get env var as string with default."""
  val = os.getenv(key)
  return val if val not in (None, "") else default

