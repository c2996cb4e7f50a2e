"""
Module 04 - Airdrop Tree Generation

Builds the claim tree for a list of airdrop entries and produces
per-entry proofs in the form the on-chain claimer expects.

Leaves are always hash_account_amount(account, amount); entry order is
the CSV order and is never re-sorted.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import to_hex
from core.merkle.merkle_tree import MerkleTree, verify_proof
from core.schemas.airdrop import AirdropEntry, EntryProof
from core.schemas.errors import EmptyInputError


@dataclass(frozen=True)
class AirdropTree:
    """Airdrop entries together with the Merkle tree over their leaves."""
    entries: tuple[AirdropEntry, ...]
    tree: MerkleTree

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self.tree.leaves

    @property
    def root(self) -> bytes:
        return self.tree.root

    def proof_for(self, index: int) -> EntryProof:
        """
        Build and self-verify the proof for the entry at index.

        Raises:
            IndexError: If index is out of range
        """
        entry = self.entries[index]
        proof = self.tree.proof_at(index)
        return EntryProof(
            index=index,
            account=entry.account,
            amount=entry.amount,
            leaf=to_hex(proof.leaf),
            root=to_hex(proof.root),
            proof=[to_hex(s) for s in proof.siblings],
            valid=verify_proof(proof.siblings, self.root, proof.leaf),
        )


def build_airdrop(entries: Sequence[AirdropEntry]) -> AirdropTree:
    """
    Build the claim tree for the given entries.

    Raises:
        EmptyInputError: If there are no entries
    """
    if not entries:
        raise EmptyInputError("No airdrop entries to build a tree from")

    leaves = [entry.leaf for entry in entries]
    return AirdropTree(entries=tuple(entries), tree=MerkleTree(leaves))


def format_proof_list(proof: Sequence[str], separator: str = ", ") -> str:
    return "[" + separator.join(proof) + "]"


def solidity_call(entry_proof: EntryProof, function: str = "verifyAddress") -> str:
    """
    Render the claimer contract call for an entry proof.

    Example:
        verifyAddress([0xab.., 0xcd..], 0xroot.., 0xAccount.., 1000)
    """
    return (
        f"{function}({format_proof_list(entry_proof.proof)}, "
        f"{entry_proof.root}, {entry_proof.account}, {entry_proof.amount})"
    )


__all__ = [
    "AirdropTree",
    "build_airdrop",
    "format_proof_list",
    "solidity_call",
]
