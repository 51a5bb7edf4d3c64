"""
Pytest configuration for reattach tests.
"""
import sys
from pathlib import Path

import pytest

PYTHON_SRC = Path(__file__).resolve().parents[1]
if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))


@pytest.fixture
def store_path(tmp_path):
    """Location for a JsonFileStore that does not exist yet."""
    return tmp_path / "state" / "history.json"
