#!/usr/bin/env python3
"""
Test suite for atomic table writes
"""

import logging
from pathlib import Path

import pandas as pd
import pytest

from league_stats.io import safe_write
from league_stats.io.safe_write import (
    compute_file_checksum, safe_write_csv, safe_write_tables, verify_file_integrity
)


@pytest.fixture
def form_table():
    return pd.DataFrame({
        'rank': [1, 2],
        'team': ["Arsenal", "Chelsea"],
        'form': ["WWD", "LD"],
        'latest_ppg': [2.3333, 0.5],
        'games_considered': [3, 2],
    })


class TestSafeWriteCSV:
    """Test cases for single table writes"""

    def test_headers_and_float_text(self, temp_data_dir, form_table):
        path = temp_data_dir / "out" / "form.csv"
        safe_write_csv(form_table, path)

        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines == [
            "Rank,Team,Form,LatestPPG,NumGamesConsidered",
            "1,Arsenal,WWD,2.3333,3",
            "2,Chelsea,LD,0.5,2",
        ]

    def test_whole_floats_written_without_decimals(self, temp_data_dir):
        df = pd.DataFrame({'rank': [1], 'team': ["A"], 'ppg': [3.0], 'gdpg': [-1.0]})
        path = temp_data_dir / "t.csv"
        safe_write_csv(df, path)
        assert path.read_text(encoding="utf-8").splitlines()[1] == "1,A,3,-1"

    def test_no_temp_file_left(self, temp_data_dir, form_table):
        path = temp_data_dir / "form.csv"
        safe_write_csv(form_table, path)
        assert not (temp_data_dir / "form.csv.tmp").exists()

    def test_checksum_returned_and_verified(self, temp_data_dir, form_table):
        path = temp_data_dir / "form.csv"
        info = safe_write_csv(form_table, path)

        assert info['path'] == path
        assert info['format'] == "csv"
        assert info['size_bytes'] == path.stat().st_size
        assert info['checksum'] == compute_file_checksum(path)
        assert verify_file_integrity(path, info['checksum'])
        assert not verify_file_integrity(path, "0" * 32)
        assert not verify_file_integrity(temp_data_dir / "missing.csv", info['checksum'])

    def test_logs_checksum(self, temp_data_dir, form_table, caplog):
        logger = logging.getLogger("test_safe_write")
        with caplog.at_level(logging.INFO, logger="test_safe_write"):
            safe_write_csv(form_table, temp_data_dir / "form.csv", logger)
        assert any("Successfully wrote CSV" in r.getMessage() and "MD5" in r.getMessage()
                   for r in caplog.records)


class TestSafeWriteTables:
    """Test cases for all-or-nothing group writes"""

    def test_all_tables_written(self, temp_data_dir, form_table):
        paths = [temp_data_dir / "a.csv", temp_data_dir / "b.csv"]
        written = safe_write_tables({p: form_table for p in paths})

        assert [info['path'] for info in written] == paths
        assert all(p.exists() for p in paths)

    def test_failure_leaves_no_table(self, temp_data_dir, form_table):
        """Test that when one table cannot be staged, none are written"""
        first = temp_data_dir / "a.csv"
        first.write_text("old\n", encoding="utf-8")
        blocker = temp_data_dir / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        tables = {first: form_table, blocker / "b.csv": form_table}
        with pytest.raises(OSError):
            safe_write_tables(tables)

        assert first.read_text(encoding="utf-8") == "old\n"
        assert not (temp_data_dir / "a.csv.tmp").exists()
        assert sorted(p.name for p in temp_data_dir.iterdir()) == ["a.csv", "blocker"]

    def test_overwrites_previous_results(self, temp_data_dir, form_table):
        path = temp_data_dir / "a.csv"
        path.write_text("old\n", encoding="utf-8")
        safe_write_tables({path: form_table})
        assert path.read_text(encoding="utf-8").startswith("Rank,Team")

    def test_failed_rename_removes_remaining_temp_files(self, temp_data_dir, form_table, monkeypatch):
        """Test that a rename failing midway leaves no temporary file behind"""
        original_replace = Path.replace
        calls = []

        def flaky_replace(self, target):
            calls.append(self)
            if len(calls) == 2:
                raise OSError("disk full")
            return original_replace(self, target)

        monkeypatch.setattr(Path, "replace", flaky_replace)
        paths = [temp_data_dir / name for name in ("a.csv", "b.csv", "c.csv")]

        with pytest.raises(OSError, match="disk full"):
            safe_write_tables({p: form_table for p in paths})

        assert sorted(p.name for p in temp_data_dir.iterdir()) == ["a.csv"]

    def test_checksum_checked_after_rename(self, temp_data_dir, form_table, monkeypatch):
        monkeypatch.setattr(safe_write, "verify_file_integrity", lambda path, checksum: False)
        paths = [temp_data_dir / "a.csv", temp_data_dir / "b.csv"]

        with pytest.raises(OSError, match="Checksum mismatch"):
            safe_write_tables({p: form_table for p in paths})

        assert not any(p.name.endswith(".tmp") for p in temp_data_dir.iterdir())
