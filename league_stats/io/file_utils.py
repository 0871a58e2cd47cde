"""
file_utils.py
-------------
Helpers for locating match files and naming result tables.
"""

from pathlib import Path
from typing import List, Union

from league_stats.errors import MatchSourceError

TEAMS_SCOPE = "Teams"
INDIVIDUALS_SCOPE = "Individuals"

ABSOLUTE_TABLE = "Absolute Stats"
NORMALIZED_TABLE = "Normalized Stats"
FORM_TABLE = "Latest Form"


def list_data_files(dir_path: Union[str, Path], glob_pat: str = "*") -> List[Path]:
    """
    List the match files of a data directory, sorted by name.

    Sub-directories and hidden files are ignored.

    Args:
        dir_path: Directory holding the match files
        glob_pat: Glob pattern for file matching (default: every file)

    Returns:
        List of file paths sorted by file name

    Raises:
        MatchSourceError: If the directory is missing or cannot be read
    """
    dir_path = Path(dir_path)
    if not dir_path.is_dir():
        raise MatchSourceError(f"Data directory not found: {dir_path}")

    try:
        files = [p for p in dir_path.glob(glob_pat) if p.is_file() and not p.name.startswith(".")]
    except OSError as e:
        raise MatchSourceError(f"Cannot read directory {dir_path}: {e}") from e

    return sorted(files, key=lambda p: p.name)


def remove_extension(filename: str) -> str:
    """Base name without its last extension: ``"League 2v2.csv"`` -> ``"League 2v2"``."""
    name = Path(filename).name
    suffix = Path(name).suffix
    return name[: -len(suffix)] if suffix else name


def is_individual_mode(filename: str, token: str = "2v2") -> bool:
    """True when the file name contains ``token``, ignoring case."""
    return token.lower() in Path(filename).name.lower()


def result_path(results_dir: Union[str, Path], base: str, scope: str, table: str) -> Path:
    """Path of one result table, e.g. ``results/F - Teams - Latest Form.csv``."""
    return Path(results_dir) / f"{base} - {scope} - {table}.csv"
