"""
Pytest configuration and shared fixtures for zksmt tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

FIXED_RANDOMNESS = _common.FIXED_RANDOMNESS
make_elements = _common.make_elements
make_random_elements = _common.make_random_elements
make_tree = _common.make_tree

from zksmt.config.runtime import set_default_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def reset_default_config():
    """Rebuild the process default config for every test."""
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def empty_tree():
    """Provide an empty depth-64 tree."""
    return make_tree()


@pytest.fixture
def small_tree():
    """Provide a depth-64 tree holding the elements 0..9."""
    return make_tree(make_elements(range(10)))


@pytest.fixture
def randomness():
    """Provide fixed proof blinding."""
    return FIXED_RANDOMNESS


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
