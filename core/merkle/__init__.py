"""
Module 03 - Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification,
compatible with the on-chain claimer.

Owner: Protocol/Crypto Engineer
Module ID: M03

This module provides:
- MerkleTree: Immutable tree over ordered leaf digests
- MerkleProof: Dataclass representing a Merkle inclusion proof
- build_merkle_root: Compute root from leaf digests
- build_merkle_proof: Generate proof for a target leaf
- verify_proof: Verify a proof against a claimed root

Canonical Commitment Rules:
1. Leaf hashing: keccak256(data) or keccak256(account ++ uint256(amount))
2. Parent hashing: keccak256(min(a, b) + max(a, b))
3. Odd node: promoted unchanged to the next level
4. Empty tree: rejected (EmptyInputError)
5. Single leaf: root = leaf

Usage:
    from core.merkle import MerkleTree, verify_proof
    from core.crypto import hash_account_amount

    leaves = [hash_account_amount(account, amount) for account, amount in claims]
    tree = MerkleTree(leaves)

    proof = tree.proof(leaves[2])
    assert verify_proof(proof.siblings, tree.root, leaves[2])
"""
from .merkle_tree import (
    MerkleProof,
    MerkleTree,
    merkle_parent,
    build_next_level,
    build_levels,
    build_merkle_tree,
    build_merkle_root,
    build_merkle_proof,
    verify_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleProof",
    "MerkleTree",
    # Core functions
    "merkle_parent",
    "build_next_level",
    "build_levels",
    "build_merkle_tree",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
