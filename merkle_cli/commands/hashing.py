"""
CLI Hash Commands

Usage:
    merkle-generator hash <data>
    merkle-generator hash-account-amount <address> <amount>
"""

from __future__ import annotations

import json
from argparse import Namespace

from eth_utils import to_checksum_address

from core.crypto.hashing import account_from_hex, hash_account_amount, hash_data, to_hex
from core.schemas.airdrop import ZERO_ADDRESS
from core.schemas.errors import InvalidEncodingError, MerkleException
from merkle_cli.commands.tree import EXIT_SUCCESS, report_error, wants_json


def hash_cmd(args: Namespace) -> int:
    """Hash arbitrary string data to a 32-byte digest."""
    digest = hash_data(args.data.encode("utf-8"))
    if wants_json(args):
        print(json.dumps({"data": args.data, "hash": to_hex(digest)}, indent=2))
    else:
        print(f"Hash: {to_hex(digest)}")
    return EXIT_SUCCESS


def hash_account_amount_cmd(args: Namespace) -> int:
    """Hash address + amount the way the claimer contract does."""
    try:
        account = account_from_hex(args.address.strip())
        if to_hex(account) == ZERO_ADDRESS:
            raise InvalidEncodingError("zero address is not a valid claimer")
    except MerkleException as e:
        return report_error(args, f"Error parsing address {args.address}", e)

    try:
        amount = int(args.amount, 10)
    except ValueError:
        return report_error(
            args,
            "Error parsing amount",
            InvalidEncodingError(f"not a decimal integer: {args.amount}"),
        )

    try:
        digest = hash_account_amount(account, amount)
    except MerkleException as e:
        return report_error(args, "Error hashing amount", e)

    address = to_checksum_address(account)
    if wants_json(args):
        print(json.dumps({
            "address": address,
            "amount": str(amount),
            "hash": to_hex(digest),
        }, indent=2))
    else:
        print(f"Address: {address}")
        print(f"Amount: {amount}")
        print(f"Hash: {to_hex(digest)}")
    return EXIT_SUCCESS
