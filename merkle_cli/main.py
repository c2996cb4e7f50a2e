"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkle_cli root <leaf>... [--json]
    python -m merkle_cli proof <target> <leaf>...
    python -m merkle_cli verify <root> <target> [<proof>...] [--json]
    python -m merkle_cli hash <data>
    python -m merkle_cli hash-account-amount <address> <amount>
    python -m merkle_cli airdrop [<csv>] [--verbose] [--no-files] [--json]
    python -m merkle_cli config --init

Environment Variables:
    MERKLE_LOG_LEVEL            Log level (default: WARNING)
    MERKLE_LOG_FILE             Also log to this file
    MERKLE_OUTPUT_FORMAT        human or json
    MERKLE_RUNTIME_CONFIG       YAML runtime config path
    MERKLE_CSV_FILE             Airdrop CSV path
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from merkle_cli import __version__
from merkle_cli.commands import tree, hashing, airdrop
from merkle_cli.config import (
    load_config,
    get_default_config_template,
    get_default_runtime_template,
)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle-generator",
        description="Generate Merkle roots and proofs compatible with the on-chain claimer.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./merkle.json or ~/.config/merkle/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks for unexpected errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Generate Merkle root from leaves",
        description="Generate Merkle root from 0x-prefixed bytes32 leaves (other values are hashed).",
    )
    root_parser.add_argument("leaves", nargs="+", help="Leaf digests or raw data")
    _add_json_flag(root_parser)
    root_parser.set_defaults(func=tree.root_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Generate Merkle proof for a target leaf",
        description="Generate Merkle proof for a target leaf given the list of all leaves.",
    )
    proof_parser.add_argument("target", help="Target leaf digest or raw data")
    proof_parser.add_argument("leaves", nargs="+", help="All leaf digests or raw data, in order")
    _add_json_flag(proof_parser)
    proof_parser.set_defaults(func=tree.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a Merkle proof",
        description="Verify a target leaf is in the tree with the given root using the proof.",
    )
    verify_parser.add_argument("root", help="Merkle root")
    verify_parser.add_argument("target", help="Target leaf digest or raw data")
    verify_parser.add_argument("proof", nargs="*", help="Proof elements, leaf level first")
    _add_json_flag(verify_parser)
    verify_parser.set_defaults(func=tree.verify_cmd)

    # --- hash command ---
    hash_parser = subparsers.add_parser(
        "hash",
        help="Hash arbitrary data to bytes32",
        description="Hash arbitrary string data to bytes32 using Keccak-256.",
    )
    hash_parser.add_argument("data", help="Data to hash (UTF-8)")
    _add_json_flag(hash_parser)
    hash_parser.set_defaults(func=hashing.hash_cmd)

    # --- hash-account-amount command ---
    haa_parser = subparsers.add_parser(
        "hash-account-amount",
        aliases=["hash-address-amount"],
        help="Hash address + amount to bytes32 (like the claimer contract)",
        description="keccak256(abi.encodePacked(address, uint256 amount)).",
    )
    haa_parser.add_argument("address", help="0x-prefixed 20-byte address")
    haa_parser.add_argument("amount", help="Decimal amount in base units")
    _add_json_flag(haa_parser)
    haa_parser.set_defaults(func=hashing.hash_account_amount_cmd)

    # --- airdrop command ---
    airdrop_parser = subparsers.add_parser(
        "airdrop",
        help="Build the claim tree for an address,amount CSV",
        description="Compute leaves, root and proofs for an airdrop CSV and write result files.",
    )
    airdrop_parser.add_argument(
        "csv",
        nargs="?",
        default=None,
        help="CSV file (default: csv.file_path from runtime config)",
    )
    airdrop_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=False,
        help="Show every entry instead of a preview",
    )
    airdrop_parser.add_argument(
        "--no-files",
        action="store_true",
        default=False,
        help="Do not write .root/.leaves/.proof files",
    )
    _add_json_flag(airdrop_parser)
    airdrop_parser.set_defaults(func=airdrop.airdrop_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create template configuration files",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merkle.json",
        help="Path for config file (default: merkle.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        runtime_path = config_path.with_name("merkle.yaml")
        for path in (config_path, runtime_path):
            if path.exists():
                print(f"Error: Config file already exists: {path}", file=sys.stderr)
                return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        runtime_path.write_text(get_default_runtime_template())
        print(f"Created configuration file: {config_path}")
        print(f"Created runtime configuration file: {runtime_path}")
        print("\nEdit these files to configure your settings.")
        print("You can also use environment variables (MERKLE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        config_dict = {
            "log_level": config.log_level,
            "log_file": config.log_file,
            "default_output_format": config.default_output_format,
            "runtime_config": config.runtime_config,
        }
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    print("Usage: merkle-generator config [--init|--show]")
    print("  --init  Create template configuration files")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
