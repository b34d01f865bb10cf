"""Shared fixtures for rename-files tests."""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def make_tree(tmp_path):
    """Creates empty files (and their parent dirs) under tmp_path."""
    def _make(*relpaths):
        for rel in relpaths:
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        return tmp_path
    return _make


@pytest.fixture
def listing():
    """Lists all paths under a root, relative, as posix strings."""
    def _list(root):
        return sorted(p.relative_to(root).as_posix() for p in Path(root).rglob("*"))
    return _list
