"""
Module 01 - Schemas
File: airdrop.py

Purpose: Schemas for airdrop claims and the proof reports handed to
claimers and to the on-chain claimer contract.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from eth_utils import to_checksum_address

from core.crypto.hashing import (
    UINT256_MAX,
    account_from_hex,
    hash_account_amount,
    to_hex,
)


ZERO_ADDRESS = "0x" + "00" * 20


class AirdropEntry(BaseModel):
    """
    A single (account, amount) claim.

    The account is stored in EIP-55 checksum form; the leaf digest is
    derived from the raw 20 bytes, so casing never changes the leaf.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    account: str = Field(..., description="0x-prefixed 20-byte account address")
    amount: int = Field(..., description="Claimable amount in base units (uint256)")

    @field_validator("account")
    @classmethod
    def validate_account(cls, v: str) -> str:
        """Require 0x + 40 hex digits and normalize to checksum form."""
        return to_checksum_address(account_from_hex(v.strip()))

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: int) -> int:
        """Ensure the amount fits in a uint256."""
        if v < 0 or v > UINT256_MAX:
            raise ValueError(f"amount must be within uint256 range, got {v}")
        return v

    @property
    def is_zero_address(self) -> bool:
        return self.account.lower() == ZERO_ADDRESS

    @property
    def leaf(self) -> bytes:
        """keccak256(account ++ uint256(amount)), as checked on-chain."""
        return hash_account_amount(self.account, self.amount)


class ProofReport(BaseModel):
    """JSON report of a single inclusion proof, all digests as 0x hex."""

    model_config = ConfigDict(extra="forbid")

    target: str
    root: str
    proof: list[str] = Field(default_factory=list)

    @classmethod
    def from_digests(cls, target: bytes, root: bytes, proof: list[bytes]) -> "ProofReport":
        return cls(
            target=to_hex(target),
            root=to_hex(root),
            proof=[to_hex(p) for p in proof],
        )


class EntryProof(BaseModel):
    """Proof for one airdrop entry, with its verification result."""

    model_config = ConfigDict(extra="forbid")

    index: int = Field(..., ge=0)
    account: str
    amount: int
    leaf: str
    root: str
    proof: list[str] = Field(default_factory=list)
    valid: bool = False


__all__ = [
    "ZERO_ADDRESS",
    "AirdropEntry",
    "ProofReport",
    "EntryProof",
]
