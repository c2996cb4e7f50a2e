"""
CLI Tree Commands

Root, proof and verify over leaves given on the command line.

Leaves are 0x-prefixed 32-byte hex digests; any other argument is
treated as raw text and hashed with hash_data().

Usage:
    merkle-generator root alice bob charlie
    merkle-generator proof alice alice bob charlie
    merkle-generator verify <root> <target> [<proof>...]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from typing import Sequence

from core.crypto.hashing import digest_from_hex, hash_data, to_hex
from core.merkle.merkle_tree import MerkleTree, verify_proof
from core.schemas.airdrop import ProofReport
from core.schemas.errors import InvalidEncodingError, MerkleException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def parse_leaf(text: str) -> bytes:
    """
    Parse one leaf argument.

    Raises:
        InvalidEncodingError: If a 0x-prefixed argument is not a 32-byte digest
    """
    text = text.strip()
    if not text.startswith("0x"):
        return hash_data(text.encode("utf-8"))
    return digest_from_hex(text)


def parse_leaves(args: Sequence[str]) -> list[bytes]:
    """Parse leaf arguments, reporting the failing position."""
    leaves = []
    for i, arg in enumerate(args):
        try:
            leaves.append(parse_leaf(arg))
        except InvalidEncodingError as e:
            raise InvalidEncodingError(
                f"invalid hex at position {i}: {e.message}",
                details={"position": i, "value": arg},
            ) from e
    return leaves


def wants_json(args: Namespace) -> bool:
    if getattr(args, "json", False):
        return True
    config = getattr(args, "cli_config", None)
    return bool(config and config.json_output)


def report_error(args: Namespace, prefix: str, error: MerkleException) -> int:
    """Print a command failure and return the runtime error exit code."""
    if wants_json(args):
        print(error.to_error_model().model_dump_json(indent=2))
    else:
        print(f"{prefix}: {error.message}", file=sys.stderr)
    return EXIT_RUNTIME_ERROR


def root_cmd(args: Namespace) -> int:
    """Execute the root command."""
    try:
        leaves = parse_leaves(args.leaves)
    except MerkleException as e:
        return report_error(args, "Error parsing leaves", e)

    try:
        tree = MerkleTree(leaves)
    except MerkleException as e:
        return report_error(args, "Error creating Merkle tree", e)

    logger.debug("Built tree with %d leaves, depth %d", len(tree), tree.depth)

    if wants_json(args):
        print(json.dumps({
            "root": to_hex(tree.root),
            "leaves": len(tree),
            "depth": tree.depth,
        }, indent=2))
    else:
        print(f"Merkle Root: {to_hex(tree.root)}")
    return EXIT_SUCCESS


def proof_cmd(args: Namespace) -> int:
    """Execute the proof command. Output is always JSON."""
    try:
        target = parse_leaf(args.target)
    except MerkleException as e:
        return report_error(args, "Error parsing target", e)

    try:
        leaves = parse_leaves(args.leaves)
    except MerkleException as e:
        return report_error(args, "Error parsing leaves", e)

    try:
        tree = MerkleTree(leaves)
        proof = tree.proof(target)
    except MerkleException as e:
        return report_error(args, "Error generating proof", e)

    report = ProofReport.from_digests(target, tree.root, proof.siblings)
    print(report.model_dump_json(indent=2))
    return EXIT_SUCCESS


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        EXIT_SUCCESS if the proof is valid, EXIT_VERIFICATION_FAILED otherwise
    """
    try:
        root = parse_leaf(args.root)
    except MerkleException as e:
        return report_error(args, "Error parsing root", e)

    try:
        target = parse_leaf(args.target)
    except MerkleException as e:
        return report_error(args, "Error parsing target", e)

    try:
        proof = parse_leaves(args.proof)
    except MerkleException as e:
        return report_error(args, "Error parsing proof", e)

    is_valid = verify_proof(proof, root, target)

    if wants_json(args):
        print(json.dumps({
            "root": to_hex(root),
            "target": to_hex(target),
            "proof": [to_hex(p) for p in proof],
            "valid": is_valid,
        }, indent=2))
    else:
        print(f"Proof is valid: {str(is_valid).lower()}")

    if is_valid:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
