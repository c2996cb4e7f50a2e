"""
Module 02 - Hashing Utilities
Keccak-256 hashing, leaf encodings and hex helpers for Merkle commitments.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- Keccak-256 hashing for raw bytes (Ethereum keccak256, not NIST SHA3-256)
- Structured "account + amount" leaf hashing, identical to Solidity's
  keccak256(abi.encodePacked(address, uint256))
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as received
- Amounts are never truncated: out-of-range values raise AmountOverflowError
- All operations are deterministic
"""
from __future__ import annotations

import re

from eth_utils import keccak

from core.schemas.errors import AmountOverflowError, InvalidEncodingError


DIGEST_SIZE = 32
ACCOUNT_SIZE = 20
UINT256_MAX = 2**256 - 1

_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]*$")


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=bytes(data))


def hash_data(data: bytes) -> bytes:
    """
    Hash arbitrary-length byte content into a leaf digest.

    Used when leaves are derived from opaque data rather than
    structured fields.
    """
    return keccak256(data)


def encode_uint256(amount: int) -> bytes:
    """
    Encode an unsigned integer as a 32-byte big-endian word.

    Raises:
        InvalidEncodingError: If amount is not an int (bool included)
        AmountOverflowError: If amount is negative or exceeds 2**256 - 1
    """
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise InvalidEncodingError(
            f"Amount must be an integer, got {type(amount).__name__}: {amount!r}"
        )
    if amount < 0 or amount > UINT256_MAX:
        raise AmountOverflowError(amount)
    return amount.to_bytes(DIGEST_SIZE, "big")


def hash_account_amount(account: bytes | str, amount: int) -> bytes:
    """
    Hash an account identifier and amount into a leaf digest.

    Rule: leaf = keccak256(account[20] ++ uint256_be(amount)[32])

    This is the canonical leaf encoding checked by the on-chain claimer
    (Solidity keccak256(abi.encodePacked(address, uint256))). Airdrop trees
    must use it for address+amount pairs, not hash_data().

    Args:
        account: 20 account bytes, or a 0x-prefixed 40 hex digit string
        amount: Unsigned amount, at most 2**256 - 1

    Returns:
        32-byte leaf digest

    Raises:
        InvalidEncodingError: If the account is not 20 bytes or amount is not an int
        AmountOverflowError: If the amount does not fit in 32 bytes
    """
    if isinstance(account, str):
        account = account_from_hex(account)
    if len(account) != ACCOUNT_SIZE:
        raise InvalidEncodingError(
            f"Account must be {ACCOUNT_SIZE} bytes, got {len(account)}"
        )
    return keccak256(bytes(account) + encode_uint256(amount))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to lowercase hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + bytes(data).hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        InvalidEncodingError: If string doesn't start with 0x, has odd length,
                              or contains invalid hex characters
    """
    if not isinstance(hex_string, str) or not hex_string.startswith("0x"):
        raise InvalidEncodingError(
            f"Hex string must start with '0x' prefix, got: {str(hex_string)[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise InvalidEncodingError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    # bytes.fromhex tolerates whitespace, so check digits explicitly
    if not _HEX_DIGITS.match(hex_content):
        raise InvalidEncodingError(f"Invalid hex characters in string: {hex_string}")

    return bytes.fromhex(hex_content)


def _fixed_from_hex(hex_string: str, size: int, kind: str) -> bytes:
    data = from_hex(hex_string)
    if len(data) != size:
        raise InvalidEncodingError(
            f"{kind} must be 0x followed by {size * 2} hex digits, got: {hex_string}"
        )
    return data


def digest_from_hex(hex_string: str) -> bytes:
    """Parse a 0x-prefixed 64 hex digit string into a 32-byte digest."""
    return _fixed_from_hex(hex_string, DIGEST_SIZE, "Digest")


def account_from_hex(hex_string: str) -> bytes:
    """Parse a 0x-prefixed 40 hex digit string into 20 account bytes."""
    return _fixed_from_hex(hex_string, ACCOUNT_SIZE, "Account")


__all__ = [
    "DIGEST_SIZE",
    "ACCOUNT_SIZE",
    "UINT256_MAX",
    "keccak256",
    "hash_data",
    "encode_uint256",
    "hash_account_amount",
    "to_hex",
    "from_hex",
    "digest_from_hex",
    "account_from_hex",
]
