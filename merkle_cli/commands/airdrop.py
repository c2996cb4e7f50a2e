"""
CLI Airdrop Command

Build the claim tree for an airdrop CSV:
- Read address,amount rows (invalid rows are skipped with a warning)
- Compute leaves and the Merkle root
- Generate and verify the proof for the first entry
- Write .root/.leaves/.proof files next to the CSV
- Spot-check one more entry for large sets

Usage:
    merkle-generator airdrop data/airdrop.csv [--verbose] [--no-files] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from core.airdrop.csv_io import read_airdrop_csv, save_results
from core.airdrop.generator import AirdropTree, build_airdrop, format_proof_list, solidity_call
from core.config.runtime import RuntimeConfig
from core.crypto.hashing import to_hex
from core.schemas.airdrop import EntryProof
from core.schemas.errors import MerkleException
from merkle_cli.commands.tree import (
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    report_error,
    wants_json,
)


logger = logging.getLogger(__name__)


@dataclass
class AirdropSummary:
    """Summary of an airdrop run for CLI output."""
    csv_path: str = ""
    entries: int = 0
    root: str = ""
    first_entry: dict[str, Any] = field(default_factory=dict)
    solidity_call: str = ""
    files: list[str] = field(default_factory=list)
    spot_check: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.spot_check is None:
            del d["spot_check"]
        return d

    @property
    def all_ok(self) -> bool:
        """Check if every generated proof verified."""
        if not self.first_entry.get("valid", False):
            return False
        if self.spot_check is not None and not self.spot_check.get("valid", False):
            return False
        return True


def load_runtime_config(args: Namespace) -> RuntimeConfig:
    """Runtime config from the CLI config's YAML path (if any), then env, then args."""
    cli_config = getattr(args, "cli_config", None)
    if cli_config is not None and cli_config.runtime_config:
        config = RuntimeConfig.from_yaml(cli_config.runtime_config)
    else:
        config = RuntimeConfig()
    config = config.with_env_overrides()

    if args.csv:
        config.csv.file_path = args.csv
    if args.no_files:
        config.output.write_files = False

    config.validate()
    return config


def build_summary(
    airdrop: AirdropTree,
    csv_path: str,
    files: list[Path],
    spot_check_index: int,
) -> AirdropSummary:
    """Build an AirdropSummary, verifying the first entry and the spot check."""
    first = airdrop.proof_for(0)
    summary = AirdropSummary(
        csv_path=csv_path,
        entries=len(airdrop),
        root=to_hex(airdrop.root),
        first_entry=first.model_dump(),
        solidity_call=solidity_call(first),
        files=[str(p) for p in files],
    )

    if len(airdrop) > spot_check_index:
        summary.spot_check = airdrop.proof_for(spot_check_index).model_dump()

    return summary


def print_entries_human(airdrop: AirdropTree, preview_count: int, verbose: bool) -> None:
    """Print entry -> leaf lines, eliding the middle unless verbose."""
    last = len(airdrop) - 1
    for i, (entry, leaf) in enumerate(zip(airdrop.entries, airdrop.leaves)):
        if verbose or i < preview_count or i == last:
            print(f"Entry {i + 1}: {entry.account} (amount: {entry.amount}) -> Leaf: {to_hex(leaf)}")
        elif i == preview_count:
            print(
                f"... (showing first {preview_count} and last entry, "
                "use --verbose for all entries)"
            )


def print_summary_human(summary: AirdropSummary) -> None:
    """Print summary in human-readable format."""
    first = EntryProof(**summary.first_entry)

    print("\n=== Merkle Root ===")
    print(f"Root: {summary.root}\n")

    print("=== Proof for First Entry ===")
    print(f"Address: {first.account}")
    print(f"Amount: {first.amount}")
    print(f"Leaf: {first.leaf}")
    print(f"Proof: {format_proof_list(first.proof)}")
    print(f"Proof verification: {str(first.valid).lower()}\n")

    print("=== Solidity Contract Call ===")
    print(summary.solidity_call)

    if summary.files:
        print("\nfiles:")
        for path in summary.files:
            print(f"  {path}")

    if summary.spot_check is not None:
        spot = EntryProof(**summary.spot_check)
        print("\n=== Verification Test ===")
        print(f"Verifying entry {spot.index + 1}: {spot.account} (amount: {spot.amount})")
        print(f"Verification result: {str(spot.valid).lower()}")


def airdrop_cmd(args: Namespace) -> int:
    """
    Execute the airdrop command.

    Returns:
        Exit code
    """
    output_json = wants_json(args)

    try:
        config = load_runtime_config(args)
        csv_path = config.csv.file_path
        entries = read_airdrop_csv(csv_path, has_header=config.csv.has_header)
        airdrop = build_airdrop(entries)
    except MerkleException as e:
        return report_error(args, "Error reading airdrop", e)

    if not output_json:
        print(f"=== Processing CSV: {csv_path} ===")
        print(f"Total entries: {len(airdrop)}\n")
        print_entries_human(airdrop, config.output.preview_count, args.verbose)

    files: list[Path] = []
    if config.output.write_files:
        files = save_results(airdrop, csv_path, config.output.leaves_file_limit)

    summary = build_summary(airdrop, csv_path, files, config.output.spot_check_index)

    if output_json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.all_ok:
        logger.info("All generated proofs verified")
        return EXIT_SUCCESS
    logger.warning("Generated proof failed verification")
    return EXIT_VERIFICATION_FAILED
