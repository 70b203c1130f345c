"""
Pytest configuration and fixtures.
"""

import os
import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Set test environment
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("ON_DEMAND_CONVERSION", "none")

from tabular import CompositeConverter, TabularCache  # noqa: E402


@pytest.fixture
def numbers_cache():
    """Three rows, one integer column holding 3, 1, 2."""
    return TabularCache([("n", "INTEGER")], [(3,), (1,), (2,)])


@pytest.fixture
def people_cache():
    """Small mixed-type table with the standard on-demand converter."""
    return TabularCache(
        [("id", "INTEGER"), ("name", "VARCHAR"), ("age", "VARCHAR"), ("score", "NUMERIC")],
        [
            (1, "ada", "36", 9.5),
            (2, "grace", "45", None),
            (3, "alan", "41", 7.25),
        ],
        converter=CompositeConverter.standard(),
    )


@pytest.fixture
def empty_cache():
    return TabularCache(["id", "name"], [])
