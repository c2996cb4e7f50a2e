"""
Module 04 - Airdrop CSV IO

Reads (address, amount) rows from CSV and writes the generated
root, leaves and first-entry proof next to the source file.

File layout:
    <csv>          address,amount header + one row per claim
    <csv>.root     root digest as 0x hex
    <csv>.leaves   address,amount,leaf rows (skipped for large sets)
    <csv>.proof    address,amount,leaf,"[proof...]" for the first entry
"""
from __future__ import annotations

import csv
import logging
from pathlib import Path

from pydantic import ValidationError

from core.airdrop.generator import AirdropTree
from core.schemas.airdrop import AirdropEntry
from core.schemas.errors import CSVFormatError


logger = logging.getLogger(__name__)


ROOT_SUFFIX = ".root"
LEAVES_SUFFIX = ".leaves"
PROOF_SUFFIX = ".proof"

DEFAULT_LEAVES_FILE_LIMIT = 1000


def _parse_row(row: list[str], line_no: int) -> AirdropEntry | None:
    if len(row) < 2:
        logger.warning("Skipping row %d (insufficient columns)", line_no)
        return None

    address, amount_text = row[0].strip(), row[1].strip()

    try:
        amount = int(amount_text, 10)
    except ValueError:
        logger.warning("Skipping row %d (invalid amount: %s)", line_no, amount_text)
        return None

    try:
        entry = AirdropEntry(account=address, amount=amount)
    except ValidationError as e:
        field = e.errors()[0]["loc"][0] if e.errors() else "row"
        value = address if field == "account" else amount_text
        logger.warning("Skipping row %d (invalid %s: %s)", line_no, field, value)
        return None

    if entry.is_zero_address:
        logger.warning("Skipping row %d (invalid address: %s)", line_no, address)
        return None

    return entry


def read_airdrop_csv(path: str | Path, has_header: bool = True) -> list[AirdropEntry]:
    """
    Read airdrop entries from a CSV file.

    Invalid rows are skipped with a warning; the remaining rows keep
    their file order.

    Args:
        path: CSV file with address,amount columns
        has_header: Whether the first row is a header to skip

    Returns:
        Valid entries in file order

    Raises:
        CSVFormatError: If the file is missing, too short, or has no valid rows
    """
    path = Path(path)
    if not path.exists():
        raise CSVFormatError(f"CSV file not found: {path}", details={"path": str(path)})

    try:
        with open(path, "r", newline="", encoding="utf-8") as f:
            # (line number, row) pairs; blank lines are ignored
            records = [
                (line_no, row)
                for line_no, row in enumerate(csv.reader(f), start=1)
                if any(cell.strip() for cell in row)
            ]
    except UnicodeDecodeError as e:
        raise CSVFormatError(
            f"CSV file is not valid UTF-8: {e.reason} at byte {e.start}",
            details={"path": str(path)},
        ) from e

    minimum = 2 if has_header else 1
    if len(records) < minimum:
        raise CSVFormatError(
            "CSV file must have at least a header and one data row"
            if has_header
            else "CSV file has no data rows",
            details={"path": str(path)},
        )

    if has_header:
        records = records[1:]

    entries: list[AirdropEntry] = []
    for line_no, row in records:
        entry = _parse_row(row, line_no)
        if entry is not None:
            entries.append(entry)

    if not entries:
        raise CSVFormatError("No valid entries found in CSV file", details={"path": str(path)})

    logger.info("Processed %d valid entries out of %d total rows", len(entries), len(records))
    return entries


def _write_report(path: Path, content: str, label: str) -> bool:
    """Write one report file; failures are logged and reported as False."""
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.warning("Could not save %s file %s: %s", label, path, e)
        return False
    logger.info("%s saved to: %s", label.capitalize(), path)
    return True


def save_results(
    airdrop: AirdropTree,
    csv_path: str | Path,
    leaves_file_limit: int = DEFAULT_LEAVES_FILE_LIMIT,
) -> list[Path]:
    """
    Write root, leaves and first-entry proof files next to the CSV.

    The leaves file is skipped when the set has more than
    leaves_file_limit entries. A file that cannot be written is logged
    and left out of the result; the remaining files are still written.

    Returns:
        Paths of the files written
    """
    base = str(csv_path)
    written: list[Path] = []

    root_file = Path(base + ROOT_SUFFIX)
    if _write_report(root_file, "0x" + airdrop.root.hex(), "merkle root"):
        written.append(root_file)

    if len(airdrop) > leaves_file_limit:
        logger.info(
            "Skipping leaves file generation for large dataset (%d entries)", len(airdrop)
        )
    else:
        leaves_file = Path(base + LEAVES_SUFFIX)
        lines = ["address,amount,leaf"]
        for entry, leaf in zip(airdrop.entries, airdrop.leaves):
            lines.append(f"{entry.account},{entry.amount},0x{leaf.hex()}")
        if _write_report(leaves_file, "\n".join(lines) + "\n", "leaves"):
            written.append(leaves_file)

    first = airdrop.proof_for(0)
    proof_file = Path(base + PROOF_SUFFIX)
    content = (
        "address,amount,leaf,proof\n"
        f"{first.account},{first.amount},{first.leaf},\"[{','.join(first.proof)}]\"\n"
    )
    if _write_report(proof_file, content, "first entry proof"):
        written.append(proof_file)

    return written


__all__ = [
    "ROOT_SUFFIX",
    "LEAVES_SUFFIX",
    "PROOF_SUFFIX",
    "DEFAULT_LEAVES_FILE_LIMIT",
    "read_airdrop_csv",
    "save_results",
]
