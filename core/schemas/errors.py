"""
Module 01 - Schemas
File: errors.py

Purpose: Standard error taxonomy for the Merkle generator.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree construction & proofs
    EMPTY_INPUT = "EMPTY_INPUT"
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"
    PROOF_INVALID = "PROOF_INVALID"

    # Leaf encoding
    AMOUNT_OVERFLOW = "AMOUNT_OVERFLOW"
    INVALID_ENCODING = "INVALID_ENCODING"

    # Collaborator I/O
    CSV_FORMAT_ERROR = "CSV_FORMAT_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Error model for structured error reporting.

    Used by the CLI when a command is asked for JSON output, so failures
    serialize the same way successes do.
    """

    model_config = ConfigDict(extra="forbid")

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LEAF_NOT_FOUND],
    )
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "MerkleException":
        """Convert this error model to a raisable exception."""
        return MerkleException(
            message=self.message,
            code=self.code,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all Merkle generator errors.

    Carries structured error information and can be converted
    to a MerkleError model.
    """

    default_code = "MERKLE_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputError(MerkleException, ValueError):
    """Raised when a tree is constructed from zero leaves."""

    default_code = ErrorCodes.EMPTY_INPUT


class LeafNotFoundError(MerkleException, LookupError):
    """Raised when a proof is requested for a digest absent from the leaves."""

    default_code = ErrorCodes.LEAF_NOT_FOUND

    def __init__(self, target: bytes, message: str | None = None) -> None:
        hex_target = "0x" + bytes(target).hex()
        super().__init__(
            message or f"Target leaf not found: {hex_target}",
            details={"target": hex_target},
        )
        self.target = target


class AmountOverflowError(MerkleException, ValueError):
    """Raised when an amount does not fit in an unsigned 256-bit word."""

    default_code = ErrorCodes.AMOUNT_OVERFLOW

    def __init__(self, amount: int, message: str | None = None) -> None:
        super().__init__(
            message or f"Amount out of uint256 range: {amount}",
            details={"amount": str(amount)},
        )
        self.amount = amount


class InvalidEncodingError(MerkleException, ValueError):
    """Raised when hex/text handed to a conversion helper is malformed."""

    default_code = ErrorCodes.INVALID_ENCODING


class CSVFormatError(MerkleException):
    """Raised when an airdrop CSV file cannot be used."""

    default_code = ErrorCodes.CSV_FORMAT_ERROR


class ConfigError(MerkleException):
    """Raised when configuration is missing or invalid."""

    default_code = ErrorCodes.CONFIG_ERROR
