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

import sys
from pathlib import Path

import pytest


def main():
  """Run pytest against core/tests."""
  root = Path(__file__).resolve().parent

  # Ensure 'core' is on sys.path so 'unifiedmodel' can be imported uninstalled
  core = root / "core"
  if str(core) not in sys.path:
    sys.path.insert(0, str(core))

  return pytest.main([str(root / "core" / "tests")])


if __name__ == "__main__":
  raise SystemExit(main())
