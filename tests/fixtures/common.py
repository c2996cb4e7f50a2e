"""
Common test fixtures shared by all modules.

Provides factory functions for leaf digests:
- Named data leaves (alice, bob, ...)
- Numbered leaves of any count
- A reference "duplicate last leaf" root for comparison with promotion
"""

from typing import Sequence

from core.crypto.hashing import hash_data
from core.merkle.merkle_tree import merkle_parent


NAMES = ["alice", "bob", "charlie", "dave", "eve", "frank", "grace", "heidi"]


# =============================================================================
# Leaf Factories
# =============================================================================

def make_named_leaves(count: int = 4) -> list[bytes]:
    """
    Create leaves hashed from well-known names.

    Args:
        count: Number of leaves, at most len(NAMES).

    Returns:
        [hash_data(b"alice"), hash_data(b"bob"), ...]
    """
    return [hash_data(name.encode()) for name in NAMES[:count]]


def make_leaves(count: int, prefix: str = "leaf") -> list[bytes]:
    """Create count distinct leaves hashed from "<prefix><i>"."""
    return [hash_data(f"{prefix}{i}".encode()) for i in range(count)]


# =============================================================================
# Reference Implementations
# =============================================================================

def duplicate_last_root(leaves: Sequence[bytes]) -> bytes:
    """
    Root under the common alternative convention that duplicates the last
    node of an odd level. Used only to show promotion differs from it.
    """
    level = list(leaves)
    while len(level) > 1:
        if len(level) % 2 == 1:
            level.append(level[-1])
        level = [merkle_parent(level[i], level[i + 1]) for i in range(0, len(level), 2)]
    return level[0]


def flip_byte(digest: bytes, position: int = 0) -> bytes:
    """Return digest with one byte inverted."""
    data = bytearray(digest)
    data[position] ^= 0xFF
    return bytes(data)
