"""
Module 03 - Merkle Proofs Convenience Wrappers
Thin wrappers around core Merkle tree functions for cleaner API.

Owner: Protocol/Crypto Engineer
Module ID: M03

This module provides class-based interfaces:
- MerkleProver: Generate roots and proofs from digests, raw data or claims
- MerkleVerifier: Verify proofs from digests, raw data or claims

These are convenience wrappers around the functions in merkle_tree.py.
"""
from __future__ import annotations

from typing import Sequence

from core.crypto.hashing import hash_account_amount, hash_data
from core.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    build_merkle_root,
    verify_merkle_proof,
    verify_proof,
)


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Provides static methods for proof generation from:
    - Pre-hashed leaves (bytes)
    - Raw data items (hashed with hash_data)
    - (account, amount) claims (hashed with hash_account_amount)

    Example:
        >>> leaves = [hash_data(b"a"), hash_data(b"b"), hash_data(b"c")]
        >>> proof = MerkleProver.prove(leaves, leaves[1])
        >>> proof.index
        1
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], target: bytes) -> MerkleProof:
        """
        Generate a Merkle proof for a target leaf digest.

        Raises:
            EmptyInputError: If leaves is empty
            LeafNotFoundError: If target is not among the leaves
        """
        return MerkleTree(leaves).proof(target)

    @staticmethod
    def prove_data(items: Sequence[bytes], item: bytes) -> MerkleProof:
        """Generate a proof for a raw data item; every item is hashed first."""
        leaves = [hash_data(i) for i in items]
        return MerkleTree(leaves).proof(hash_data(item))

    @staticmethod
    def prove_claim(
        claims: Sequence[tuple[bytes | str, int]],
        account: bytes | str,
        amount: int,
    ) -> MerkleProof:
        """
        Generate a proof for an (account, amount) claim.

        Args:
            claims: Sequence of (account, amount) pairs making up the tree
            account: Account of the claim to prove
            amount: Amount of the claim to prove
        """
        leaves = [hash_account_amount(a, n) for a, n in claims]
        return MerkleTree(leaves).proof(hash_account_amount(account, amount))

    @staticmethod
    def compute_root(leaves: Sequence[bytes]) -> bytes:
        """Compute the Merkle root for a sequence of leaf digests."""
        return build_merkle_root(leaves)

    @staticmethod
    def compute_root_from_claims(claims: Sequence[tuple[bytes | str, int]]) -> bytes:
        """Compute the Merkle root for a sequence of (account, amount) claims."""
        return build_merkle_root([hash_account_amount(a, n) for a, n in claims])


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove(leaves, leaves[1])
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        """Verify a MerkleProof against its claimed root."""
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_leaf_in_root(leaf: bytes, siblings: Sequence[bytes], root: bytes) -> bool:
        """Verify a leaf digest is included in a Merkle root."""
        return verify_proof(siblings, root, leaf)

    @staticmethod
    def verify_claim_in_root(
        account: bytes | str,
        amount: int,
        siblings: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """
        Verify an (account, amount) claim is included in a Merkle root.

        This mirrors what the on-chain claimer does: rebuild the leaf from
        the claim, then fold the proof into it.
        """
        leaf = hash_account_amount(account, amount)
        return verify_proof(siblings, root, leaf)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
