"""
Test configuration for the finance metrics engine.

The engine modules live at the project root (``metrics``, ``transforms``, ...),
so the root is put on sys.path whether pytest runs from the root or tests/.
"""
import sys
from pathlib import Path

import pytest

_tests_dir = Path(__file__).parent
_project_root = _tests_dir.parent

for _path in (_project_root, _tests_dir):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from demo_snapshots import TODAY, three_month_history  # noqa: E402


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def history():
    return three_month_history()
