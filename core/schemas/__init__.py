"""
Module 01 - Schemas
File: __init__.py

Purpose: Export the error taxonomy shared by every module.

Airdrop schemas live in core.schemas.airdrop and are imported from there
directly; they depend on core.crypto, which itself depends on these errors.
"""

from .errors import (
    AmountOverflowError,
    ConfigError,
    CSVFormatError,
    EmptyInputError,
    ErrorCodes,
    InvalidEncodingError,
    LeafNotFoundError,
    MerkleError,
    MerkleException,
)

__all__ = [
    "AmountOverflowError",
    "ConfigError",
    "CSVFormatError",
    "EmptyInputError",
    "ErrorCodes",
    "InvalidEncodingError",
    "LeafNotFoundError",
    "MerkleError",
    "MerkleException",
]
