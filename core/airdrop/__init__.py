"""
Airdrop tooling: CSV claims in, claim tree and proof files out.
"""
from .generator import AirdropTree, build_airdrop, format_proof_list, solidity_call
from .csv_io import read_airdrop_csv, save_results

__all__ = [
    "AirdropTree",
    "build_airdrop",
    "format_proof_list",
    "solidity_call",
    "read_airdrop_csv",
    "save_results",
]
