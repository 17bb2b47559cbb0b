"""Integration test fixtures.

The CLI runs as a subprocess with an isolated environment: no inherited
OMNIBOX__ variables and a cache database under the test's tmp_path.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    env = {key: value for key, value in os.environ.items() if not key.startswith("OMNIBOX__")}
    env["OMNIBOX__STORE__DB_PATH"] = str(tmp_path / "cache.db")
    env["PYTHONIOENCODING"] = "utf-8"
    return env
