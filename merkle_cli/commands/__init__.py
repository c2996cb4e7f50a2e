"""
CLI command modules.
"""

from merkle_cli.commands import tree, hashing, airdrop

__all__ = ["tree", "hashing", "airdrop"]
