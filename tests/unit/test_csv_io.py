"""
Module 04 - Airdrop CSV IO Unit Tests
Tests for core/airdrop/csv_io.py
"""
import logging

import pytest

from core.airdrop.csv_io import (
    LEAVES_SUFFIX,
    PROOF_SUFFIX,
    ROOT_SUFFIX,
    read_airdrop_csv,
    save_results,
)
from core.airdrop.generator import build_airdrop
from core.schemas.airdrop import ZERO_ADDRESS
from core.schemas.errors import CSVFormatError, ErrorCodes
from fixtures.airdrop_fixtures import (
    PINNED_ACCOUNT,
    PINNED_AMOUNT,
    PINNED_LEAF,
    make_address,
    make_entries,
    write_csv,
)


class TestReadAirdropCSV:
    """Tests for read_airdrop_csv()."""

    def test_reads_entries_in_order(self, airdrop_csv, airdrop_entries):
        entries = read_airdrop_csv(airdrop_csv)

        assert entries == airdrop_entries

    def test_missing_file(self, tmp_path):
        with pytest.raises(CSVFormatError, match="not found") as exc_info:
            read_airdrop_csv(tmp_path / "missing.csv")

        assert exc_info.value.code == ErrorCodes.CSV_FORMAT_ERROR

    def test_header_only(self, tmp_path):
        path = write_csv(tmp_path / "a.csv", [])

        with pytest.raises(CSVFormatError, match="at least a header and one data row"):
            read_airdrop_csv(path)

    def test_no_header_mode(self, tmp_path):
        path = write_csv(tmp_path / "a.csv", [(PINNED_ACCOUNT, PINNED_AMOUNT)], header=None)

        entries = read_airdrop_csv(path, has_header=False)

        assert len(entries) == 1
        assert "0x" + entries[0].leaf.hex() == PINNED_LEAF

    def test_header_row_is_not_data(self, tmp_path):
        path = write_csv(tmp_path / "a.csv", [(PINNED_ACCOUNT, PINNED_AMOUNT)], header=None)

        # Without has_header=False the only row is consumed as a header
        with pytest.raises(CSVFormatError):
            read_airdrop_csv(path)

    def test_whitespace_trimmed(self, tmp_path):
        path = write_csv(tmp_path / "a.csv", [(f" {PINNED_ACCOUNT} ", f" {PINNED_AMOUNT} ")])

        entries = read_airdrop_csv(path)

        assert entries[0].amount == PINNED_AMOUNT
        assert entries[0].account.lower() == PINNED_ACCOUNT.lower()

    def test_blank_lines_ignored(self, tmp_path):
        path = tmp_path / "a.csv"
        path.write_text(
            "address,amount\n\n"
            f"{make_address(0)},1\n\n"
            f"{make_address(1)},2\n"
        )

        assert [e.amount for e in read_airdrop_csv(path)] == [1, 2]

    def test_extra_columns_ignored(self, tmp_path):
        path = write_csv(tmp_path / "a.csv", [(make_address(0), "5", "memo")])

        assert read_airdrop_csv(path)[0].amount == 5

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "a.csv"
        path.write_bytes(b"address,amount\n" + make_address(0).encode() + b",\xff\xfe1\n")

        with pytest.raises(CSVFormatError, match="not valid UTF-8"):
            read_airdrop_csv(path)

    def test_non_ascii_utf8_header(self, tmp_path):
        path = tmp_path / "a.csv"
        path.write_bytes(
            "adresse,montant é\n".encode("utf-8") + f"{make_address(0)},5\n".encode("utf-8")
        )

        assert read_airdrop_csv(path)[0].amount == 5


class TestInvalidRowsSkipped:
    """Invalid rows are logged and skipped, the rest are kept."""

    def _read(self, tmp_path, rows):
        path = write_csv(tmp_path / "a.csv", [(make_address(9), "1")] + rows)
        return read_airdrop_csv(path)

    def test_bad_amount(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="core.airdrop.csv_io"):
            entries = self._read(tmp_path, [(make_address(0), "12abc")])

        assert len(entries) == 1
        assert "Skipping row 3 (invalid amount: 12abc)" in caplog.text

    def test_negative_amount(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="core.airdrop.csv_io"):
            entries = self._read(tmp_path, [(make_address(0), "-1")])

        assert len(entries) == 1
        assert "Skipping row 3" in caplog.text

    def test_amount_overflow(self, tmp_path):
        entries = self._read(tmp_path, [(make_address(0), str(2**256))])

        assert len(entries) == 1

    def test_bad_address(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="core.airdrop.csv_io"):
            entries = self._read(tmp_path, [("0x1234", "10")])

        assert len(entries) == 1
        assert "invalid account: 0x1234" in caplog.text

    def test_zero_address(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="core.airdrop.csv_io"):
            entries = self._read(tmp_path, [(ZERO_ADDRESS, "10")])

        assert len(entries) == 1
        assert "invalid address" in caplog.text

    def test_single_column(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="core.airdrop.csv_io"):
            entries = self._read(tmp_path, [(make_address(0),)])

        assert len(entries) == 1
        assert "insufficient columns" in caplog.text

    def test_no_valid_rows(self, tmp_path):
        path = write_csv(tmp_path / "a.csv", [("0x1234", "1"), (ZERO_ADDRESS, "2")])

        with pytest.raises(CSVFormatError, match="No valid entries"):
            read_airdrop_csv(path)

    def test_summary_logged(self, tmp_path, caplog):
        with caplog.at_level(logging.INFO, logger="core.airdrop.csv_io"):
            self._read(tmp_path, [("0x1234", "1"), (make_address(0), "2")])

        assert "Processed 2 valid entries out of 3 total rows" in caplog.text


class TestSaveResults:
    """Tests for save_results()."""

    def test_writes_three_files(self, airdrop_csv, airdrop_entries):
        airdrop = build_airdrop(airdrop_entries)

        written = save_results(airdrop, airdrop_csv)

        assert [p.name for p in written] == [
            airdrop_csv.name + ROOT_SUFFIX,
            airdrop_csv.name + LEAVES_SUFFIX,
            airdrop_csv.name + PROOF_SUFFIX,
        ]

    def test_root_file(self, airdrop_csv, airdrop_entries):
        airdrop = build_airdrop(airdrop_entries)
        save_results(airdrop, airdrop_csv)

        root_text = (airdrop_csv.parent / (airdrop_csv.name + ROOT_SUFFIX)).read_text()

        assert root_text == "0x" + airdrop.root.hex()

    def test_leaves_file(self, airdrop_csv, airdrop_entries):
        airdrop = build_airdrop(airdrop_entries)
        save_results(airdrop, airdrop_csv)

        lines = (airdrop_csv.parent / (airdrop_csv.name + LEAVES_SUFFIX)).read_text().splitlines()

        assert lines[0] == "address,amount,leaf"
        assert len(lines) == len(airdrop_entries) + 1
        entry = airdrop_entries[1]
        assert lines[2] == f"{entry.account},{entry.amount},0x{entry.leaf.hex()}"

    def test_leaves_file_skipped_above_limit(self, tmp_path, caplog):
        entries = make_entries(5)
        airdrop = build_airdrop(entries)
        csv_path = tmp_path / "big.csv"

        with caplog.at_level(logging.INFO, logger="core.airdrop.csv_io"):
            written = save_results(airdrop, csv_path, leaves_file_limit=4)

        assert len(written) == 2
        assert not (tmp_path / ("big.csv" + LEAVES_SUFFIX)).exists()
        assert "Skipping leaves file generation" in caplog.text

    def test_leaves_file_written_at_limit(self, tmp_path):
        airdrop = build_airdrop(make_entries(4))

        written = save_results(airdrop, tmp_path / "a.csv", leaves_file_limit=4)

        assert len(written) == 3

    def test_proof_file(self, airdrop_csv, airdrop_entries):
        airdrop = build_airdrop(airdrop_entries)
        save_results(airdrop, airdrop_csv)
        first = airdrop.proof_for(0)

        lines = (airdrop_csv.parent / (airdrop_csv.name + PROOF_SUFFIX)).read_text().splitlines()

        assert lines[0] == "address,amount,leaf,proof"
        assert lines[1] == (
            f"{first.account},{first.amount},{first.leaf},\"[{','.join(first.proof)}]\""
        )

    def test_unwritable_file_skipped(self, airdrop_csv, airdrop_entries, caplog):
        """A report path that cannot be written is logged; the rest are still written."""
        airdrop = build_airdrop(airdrop_entries)
        (airdrop_csv.parent / (airdrop_csv.name + ROOT_SUFFIX)).mkdir()

        with caplog.at_level(logging.WARNING, logger="core.airdrop.csv_io"):
            written = save_results(airdrop, airdrop_csv)

        assert [p.name for p in written] == [
            airdrop_csv.name + LEAVES_SUFFIX,
            airdrop_csv.name + PROOF_SUFFIX,
        ]
        assert "Could not save merkle root file" in caplog.text
