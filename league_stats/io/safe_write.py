#!/usr/bin/env python3
"""
Safe Write Operations with Atomic Writes and Checksums

Result tables are written to temporary files first, checksummed, and then
renamed to their final destination. ``safe_write_tables`` extends this to a
group of tables: either every table of the group lands, or none does.
"""

import hashlib
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd

from league_stats.schema.match_schema import OUTPUT_HEADERS

# Minimal decimal text: 2.0 -> "2", 0.6667 -> "0.6667", 33.33 -> "33.33"
FLOAT_FORMAT = "%.15g"


def compute_file_checksum(file_path: Path, algorithm: str = 'md5') -> str:
    """
    Compute checksum for a file.

    Args:
        file_path: Path to the file
        algorithm: Hash algorithm ('md5', 'sha1', 'sha256')

    Returns:
        Hexadecimal checksum string
    """
    hash_obj = hashlib.new(algorithm)

    with open(file_path, 'rb') as f:
        for chunk in iter(lambda: f.read(4096), b""):
            hash_obj.update(chunk)

    return hash_obj.hexdigest()


def format_table(df: pd.DataFrame) -> pd.DataFrame:
    """Rename columns to their output header names, keeping column order."""
    return df.rename(columns=OUTPUT_HEADERS)


def _temp_path(path: Path) -> Path:
    return path.with_name(path.name + '.tmp')


def _write_temp(df: pd.DataFrame, path: Path) -> Tuple[Path, str, int]:
    temp_path = _temp_path(path)
    format_table(df).to_csv(temp_path, index=False, float_format=FLOAT_FORMAT, encoding='utf-8')
    return temp_path, compute_file_checksum(temp_path), temp_path.stat().st_size


def safe_write_csv(df: pd.DataFrame, path: Union[str, Path],
                   logger: Optional[logging.Logger] = None) -> Dict[str, Union[str, int, Path]]:
    """
    Safely write a result table to CSV with atomic operation and checksum.

    Args:
        df: Result table to write
        path: Destination file path
        logger: Optional logger instance

    Returns:
        Dictionary with path, checksum, and size information

    Raises:
        OSError: If the write or rename fails (temporary file removed)
    """
    return safe_write_tables({Path(path): df}, logger)[0]


def safe_write_tables(tables: Dict[Path, pd.DataFrame],
                      logger: Optional[logging.Logger] = None) -> List[Dict[str, Union[str, int, Path]]]:
    """
    Write several result tables so that either all of them or none appear.

    Every table is first written to ``<name>.tmp`` next to its destination;
    only when all temporary files exist are they renamed into place, and
    each renamed file is checked against the checksum of its temporary file.

    Args:
        tables: Mapping of destination path -> table
        logger: Optional logger instance

    Returns:
        One dictionary per table with path, checksum, and size information

    Raises:
        OSError: If any write fails, no destination file is touched. If a
            rename or checksum check fails, every remaining temporary file
            is removed.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    staged = []
    try:
        for path, df in tables.items():
            path = Path(path)
            path.parent.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Writing CSV to temporary file: {_temp_path(path)}")
            temp_path, checksum, size_bytes = _write_temp(df, path)
            staged.append((temp_path, path, checksum, size_bytes))
    except Exception as e:
        # Clean up temporary files on error, including a partially written one
        for path in tables:
            temp_path = _temp_path(Path(path))
            if temp_path.exists():
                temp_path.unlink()
        logger.error(f"Failed to write {len(tables)} table(s): {e}")
        raise

    results = []
    try:
        for temp_path, path, checksum, size_bytes in staged:
            temp_path.replace(path)
            if not verify_file_integrity(path, checksum):
                raise OSError(f"Checksum mismatch after moving {temp_path.name} to {path}")
            logger.info(f"Successfully wrote CSV: {path} ({size_bytes:,} bytes, MD5: {checksum})")
            results.append({
                "path": path,
                "checksum": checksum,
                "size_bytes": size_bytes,
                "format": "csv"
            })
    except OSError as e:
        # Tables already moved stay; the ones not reached lose their temp file
        for temp_path, _, _, _ in staged:
            if temp_path.exists():
                temp_path.unlink()
        logger.error(f"Failed to move {len(staged) - len(results)} table(s) into place: {e}")
        raise
    return results


def verify_file_integrity(path: Union[str, Path], expected_checksum: str,
                          algorithm: str = 'md5') -> bool:
    """True when ``path`` is a file whose digest equals ``expected_checksum``."""
    path = Path(path)
    return path.is_file() and compute_file_checksum(path, algorithm) == expected_checksum
