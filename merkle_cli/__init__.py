"""
Merkle Generator CLI

Command-line interface for building claim trees and proofs.

Usage:
    python -m merkle_cli root alice bob charlie
    python -m merkle_cli proof alice alice bob charlie
    python -m merkle_cli verify <root> <target> <proof>...
    python -m merkle_cli hash-account-amount <address> <amount>
    python -m merkle_cli airdrop data/airdrop.csv
"""

__version__ = "0.1.0"
