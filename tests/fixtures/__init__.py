"""
Test fixtures package for Merkle generator tests.

This package provides factory functions for creating test objects.
Organized into layers:
- common.py: Leaf digests and reference helpers shared by all modules
- airdrop_fixtures.py: Airdrop entries, pinned vector and CSV writers

Usage:
    from fixtures import make_named_leaves, make_entries

    def test_something():
        leaves = make_named_leaves(4)
        entries = make_entries(3)
"""

from .common import (
    NAMES,
    make_named_leaves,
    make_leaves,
    duplicate_last_root,
    flip_byte,
)

from .airdrop_fixtures import (
    PINNED_ACCOUNT,
    PINNED_AMOUNT,
    PINNED_LEAF,
    make_address,
    make_entries,
    write_csv,
    write_entries_csv,
)

__all__ = [
    # Common
    "NAMES",
    "make_named_leaves",
    "make_leaves",
    "duplicate_last_root",
    "flip_byte",
    # Airdrop
    "PINNED_ACCOUNT",
    "PINNED_AMOUNT",
    "PINNED_LEAF",
    "make_address",
    "make_entries",
    "write_csv",
    "write_entries_csv",
]
