#!/usr/bin/env python3
"""
Match CSV reader.

Input files hold four positional columns, ``HomeTeam, HomeGoals, AwayGoals,
AwayTeam``, one match per row in ascending time order. The first row is a
header and is discarded whatever it contains. Any malformed content fails
the whole file with ``MatchSourceError``.
"""

import logging
from pathlib import Path
from typing import Union

import pandas as pd
import pandera as pa

from league_stats.errors import MatchSourceError
from league_stats.schema.match_schema import MATCH_COLUMNS, MatchSchema

logger = logging.getLogger(__name__)

# Unpadded decimal digits with an optional plus sign
GOAL_PATTERN = r"\+?[0-9]+"


def empty_matches() -> pd.DataFrame:
    """Match frame with no rows and the canonical dtypes."""
    return pd.DataFrame({
        'home_team': pd.Series(dtype=object),
        'home_goals': pd.Series(dtype='int64'),
        'away_goals': pd.Series(dtype='int64'),
        'away_team': pd.Series(dtype=object),
    })


def read_matches(path: Union[str, Path]) -> pd.DataFrame:
    """
    Read and validate a match CSV file.

    Args:
        path: CSV file path

    Returns:
        DataFrame with ``MATCH_COLUMNS``; goals as int64, 0-based index equal
        to the record index (header excluded)

    Raises:
        MatchSourceError: If the file cannot be read, a row does not have
            exactly four fields, or a goal cell is not a non-negative integer
    """
    path = Path(path)
    try:
        # The python engine leaves missing trailing fields as NaN, even with
        # keep_default_na=False, while a present empty cell stays ""
        raw = pd.read_csv(path, header=None, dtype=str, keep_default_na=False,
                          skip_blank_lines=True, encoding='utf-8', engine='python')
    except pd.errors.EmptyDataError:
        logger.warning(f"{path.name} is empty")
        return empty_matches()
    except pd.errors.ParserError as e:
        raise MatchSourceError(f"Malformed CSV {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise MatchSourceError(f"Couldn't open the CSV file {path}: {e}") from e

    if raw.shape[1] != len(MATCH_COLUMNS):
        raise MatchSourceError(
            f"{path}: expected {len(MATCH_COLUMNS)} columns "
            f"(HomeTeam, HomeGoals, AwayGoals, AwayTeam), found {raw.shape[1]}"
        )

    matches = raw.iloc[1:].reset_index(drop=True)
    matches.columns = MATCH_COLUMNS

    short_rows = matches.index[matches.isna().any(axis=1)].tolist()
    if short_rows:
        raise MatchSourceError(f"{path}: records {short_rows} have fewer than {len(MATCH_COLUMNS)} fields")

    well_formed = (matches['home_goals'].str.fullmatch(GOAL_PATTERN).astype(bool)
                   & matches['away_goals'].str.fullmatch(GOAL_PATTERN).astype(bool))
    bad_goals = matches.index[~well_formed].tolist()
    if bad_goals:
        raise MatchSourceError(
            f"{path}: goal columns must be non-negative integers; offending records {bad_goals}"
        )

    try:
        validated = MatchSchema.validate(matches, lazy=True)
    except pa.errors.SchemaErrors as e:
        cases = e.failure_cases
        bad = sorted({int(i) for i in cases['index'].dropna()}) if 'index' in cases else []
        raise MatchSourceError(
            f"{path}: goal columns must be non-negative integers; offending records {bad}"
        ) from e

    logger.debug(f"Read {len(validated)} matches from {path}")
    return validated
