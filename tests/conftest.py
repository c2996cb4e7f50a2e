"""
Pytest configuration and shared fixtures for Merkle generator tests.

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

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")
_airdrop = importlib.import_module("fixtures.airdrop_fixtures")

make_named_leaves = _common.make_named_leaves
make_entries = _airdrop.make_entries
write_entries_csv = _airdrop.write_entries_csv


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def four_leaves():
    """alice, bob, charlie, dave leaves."""
    return make_named_leaves(4)


@pytest.fixture
def three_leaves():
    """alice, bob, charlie leaves (odd count, exercises promotion)."""
    return make_named_leaves(3)


@pytest.fixture
def airdrop_entries():
    """Provide a default list of airdrop entries."""
    return make_entries(4)


@pytest.fixture
def airdrop_csv(tmp_path, airdrop_entries):
    """Provide an airdrop CSV file written from airdrop_entries."""
    return write_entries_csv(tmp_path / "airdrop.csv", airdrop_entries)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory with no MERKLE_* variables set."""
    import os

    for key in list(os.environ):
        if key.startswith("MERKLE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path


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
