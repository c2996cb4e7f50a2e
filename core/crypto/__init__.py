"""
Core cryptographic utilities.

Module 02 provides Keccak-256 hashing and leaf encodings.
"""
from .hashing import (
    DIGEST_SIZE,
    ACCOUNT_SIZE,
    UINT256_MAX,
    keccak256,
    hash_data,
    encode_uint256,
    hash_account_amount,
    to_hex,
    from_hex,
    digest_from_hex,
    account_from_hex,
)

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
