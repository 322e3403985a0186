"""Pytest configuration.

The repository uses a flat `src/` layout. This conftest ensures tests can import from the `src.*`
namespace when running `pytest` without installing the package, and exposes the bundled template
library as a fixture.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `import src...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

LIBRARY_DIR = REPO_ROOT / "library"


@pytest.fixture
def library_dir() -> Path:
    return LIBRARY_DIR


@pytest.fixture
def library() -> tuple[str, ...]:
    """The bundled template library, in load order."""

    from src.sql.library import load_library

    return load_library(LIBRARY_DIR)
