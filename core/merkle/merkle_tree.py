"""
Module 03 - Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification.

Owner: Protocol/Crypto Engineer
Module ID: M03

This module provides:
- Deterministic Merkle root computation
- Merkle proof generation for a target leaf
- Merkle proof verification without position information
- Promotion rule for odd number of nodes

Canonical Commitment Rules (Hard Contracts, shared with the on-chain verifier):
1. Leaves are 32-byte digests supplied by the caller
   - hash_data() for opaque data, hash_account_amount() for claims
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
   - min/max compare the raw bytes (unsigned, big-endian)
   - merkle_parent(a, b) == merkle_parent(b, a)
3. Odd rule: an unpaired last node is promoted unchanged to the next level.
   It is NOT duplicated and NOT hashed.
4. Empty leaves: rejected with EmptyInputError
5. Single leaf: root = leaf, proof = []

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves - it trusts input order
- Duplicate leaves are distinct by position; lookups return the first match
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from core.crypto.hashing import DIGEST_SIZE, keccak256, to_hex
from core.schemas.errors import (
    EmptyInputError,
    InvalidEncodingError,
    LeafNotFoundError,
)


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf digest being proven
        index: The 0-based position of the leaf in the original leaf list
        siblings: Sibling digests from bottom to top of the tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")

    def verify(self) -> bool:
        """Check this proof against its own root."""
        return verify_proof(self.siblings, self.root, self.leaf)

    def to_dict(self) -> dict:
        """Hex form, as consumed by the on-chain claimer."""
        return {
            "leaf": to_hex(self.leaf),
            "index": self.index,
            "proof": [to_hex(s) for s in self.siblings],
            "root": to_hex(self.root),
        }


def merkle_parent(a: bytes, b: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    The smaller digest always goes first, so the result does not depend
    on which side each child sits on. This is what lets a verifier fold
    a proof without left/right flags.

    Args:
        a: One child digest
        b: The other child digest

    Returns:
        Parent digest (32 bytes)
    """
    if a <= b:
        return keccak256(a + b)
    return keccak256(b + a)


def _normalize_leaves(leaves: Sequence[bytes]) -> tuple[bytes, ...]:
    if len(leaves) == 0:
        raise EmptyInputError("Cannot build a Merkle tree from an empty leaf list")

    normalized = []
    for position, leaf in enumerate(leaves):
        if not isinstance(leaf, (bytes, bytearray)) or len(leaf) != DIGEST_SIZE:
            raise InvalidEncodingError(
                f"Leaf at position {position} is not a {DIGEST_SIZE}-byte digest"
            )
        normalized.append(bytes(leaf))
    return tuple(normalized)


def build_next_level(level: Sequence[bytes]) -> tuple[bytes, ...]:
    """
    Pair consecutive nodes of a level into the level above it.

    Example: [a, b, c] -> [parent(a, b), c]
    """
    next_level: list[bytes] = []
    for i in range(0, len(level), 2):
        if i + 1 < len(level):
            next_level.append(merkle_parent(level[i], level[i + 1]))
        else:
            # Odd node out: promote unchanged
            next_level.append(level[i])
    return tuple(next_level)


def build_levels(leaves: Sequence[bytes]) -> list[tuple[bytes, ...]]:
    """
    Build every level of the tree, leaves first and root level last.

    Raises:
        EmptyInputError: If leaves is empty
        InvalidEncodingError: If a leaf is not a 32-byte digest
    """
    current_level = _normalize_leaves(leaves)
    levels = [current_level]
    while len(current_level) > 1:
        current_level = build_next_level(current_level)
        levels.append(current_level)
    return levels


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a sequence of leaf digests.

    Algorithm:
    1. If empty: raise EmptyInputError
    2. If single leaf: return the leaf itself
    3. Otherwise, iteratively build levels:
       - Pair adjacent nodes and compute parent hashes
       - Promote an unpaired last node unchanged
       - Repeat until single root remains

    Example: [a, b, c] -> [parent(a,b), c] -> [parent(parent(a,b), c)]

    Args:
        leaves: Sequence of 32-byte leaf digests. Order matters and is preserved.

    Returns:
        32-byte Merkle root
    """
    current_level = _normalize_leaves(leaves)

    if len(current_level) == 1:
        return current_level[0]

    while len(current_level) > 1:
        current_level = build_next_level(current_level)

    return current_level[0]


def _collect_siblings(levels: Sequence[Sequence[bytes]], index: int) -> list[bytes]:
    siblings: list[bytes] = []
    current_index = index

    for level in levels[:-1]:
        # XOR with 1 flips to the pairing partner; absent for a promoted node
        sibling_index = current_index ^ 1
        if sibling_index < len(level):
            siblings.append(level[sibling_index])
        current_index = current_index // 2

    return siblings


def build_merkle_proof(leaves: Sequence[bytes], target: bytes) -> MerkleProof:
    """
    Generate a Merkle proof for a target leaf digest.

    The target is located by value; with duplicate leaves the first
    position wins.

    Algorithm:
    1. Start at the target's index in the leaf level
    2. At each level below the root:
       - If the node has a partner (index XOR 1 exists), record it
       - A promoted node contributes nothing at that level
       - Move up: index = index // 2 (in both cases)
    3. Stop at the root level

    Args:
        leaves: Sequence of leaf digests
        target: The leaf digest to prove

    Returns:
        MerkleProof with leaf, index, siblings (bottom-up), and root

    Raises:
        EmptyInputError: If leaves is empty
        LeafNotFoundError: If target is not one of the leaves
    """
    return MerkleTree(leaves).proof(target)


def verify_proof(
    proof: Iterable[bytes] | None,
    root: bytes,
    target: bytes,
) -> bool:
    """
    Verify that target is included under root.

    Folds the proof into the target with merkle_parent(); no position
    information is needed since the parent hash is order-independent.
    Never raises: malformed digests simply fail verification.

    Args:
        proof: Sibling digests, leaf level first (empty for a single-leaf tree)
        root: The claimed Merkle root
        target: The leaf digest being proven

    Returns:
        True if the folded proof reproduces root, False otherwise
    """
    if not _is_digest(root) or not _is_digest(target):
        return False

    computed_hash = bytes(target)
    for element in proof or ():
        if not _is_digest(element):
            return False
        computed_hash = merkle_parent(computed_hash, bytes(element))

    return computed_hash == root


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """Verify a MerkleProof against its claimed root."""
    return verify_proof(proof.siblings, proof.root, proof.leaf)


def _is_digest(value: object) -> bool:
    return isinstance(value, (bytes, bytearray)) and len(value) == DIGEST_SIZE


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc.
    Promotion never adds nodes, so each level holds ceil(n / 2) nodes.

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


@dataclass(frozen=True)
class MerkleTree:
    """
    Immutable Merkle tree over an ordered list of leaf digests.

    All levels are computed once at construction; root and proofs are
    read from them. Instances never change, so they can be shared
    between threads freely.

    Example:
        >>> tree = MerkleTree([hash_data(b"alice"), hash_data(b"bob")])
        >>> proof = tree.proof(hash_data(b"alice"))
        >>> verify_proof(proof.siblings, tree.root, proof.leaf)
        True
    """
    leaves: tuple[bytes, ...]
    levels: tuple[tuple[bytes, ...], ...] = field(init=False, repr=False, compare=False)

    def __init__(self, leaves: Sequence[bytes]) -> None:
        levels = build_levels(leaves)
        object.__setattr__(self, "leaves", levels[0])
        object.__setattr__(self, "levels", tuple(levels))

    def __len__(self) -> int:
        return len(self.leaves)

    @property
    def root(self) -> bytes:
        """The root digest (the single node of the last level)."""
        return self.levels[-1][0]

    @property
    def depth(self) -> int:
        return len(self.levels)

    def index_of(self, target: bytes) -> int:
        """Position of the first leaf equal to target."""
        for i, leaf in enumerate(self.leaves):
            if leaf == target:
                return i
        raise LeafNotFoundError(target)

    def proof(self, target: bytes) -> MerkleProof:
        """
        Generate the inclusion proof for a target leaf digest.

        Raises:
            LeafNotFoundError: If target is not one of the leaves
        """
        return self.proof_at(self.index_of(target))

    def proof_at(self, index: int) -> MerkleProof:
        """
        Generate the inclusion proof for the leaf at a given position.

        Raises:
            IndexError: If index is out of range
        """
        if index < 0 or index >= len(self.leaves):
            raise IndexError(
                f"Leaf index {index} out of range for {len(self.leaves)} leaves"
            )
        return MerkleProof(
            leaf=self.leaves[index],
            index=index,
            siblings=_collect_siblings(self.levels, index),
            root=self.root,
        )


def build_merkle_tree(leaves: Sequence[bytes]) -> MerkleTree:
    """
    Construct a MerkleTree from leaf digests.

    Raises:
        EmptyInputError: If leaves is empty
        InvalidEncodingError: If a leaf is not a 32-byte digest
    """
    return MerkleTree(leaves)


__all__ = [
    "MerkleProof",
    "MerkleTree",
    "merkle_parent",
    "build_next_level",
    "build_levels",
    "build_merkle_tree",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
