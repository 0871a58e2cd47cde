#!/usr/bin/env python3
"""
Absolute (counting) statistics per team.

Every statistic is a pure predicate over one match and one team, so the
per-statistic scans are fused into a single pass: each match is expanded
into one row per side, flags are computed column-wise and summed per team.
"""

import logging

import numpy as np
import pandas as pd

from league_stats.analytics.directory import unique_teams
from league_stats.analytics.utils_stats import expand_perspectives
from league_stats.schema.match_schema import ABSOLUTE_COLUMNS, COUNT_COLUMNS

logger = logging.getLogger(__name__)

DEFAULT_BIG_RESULT_MARGIN = 3


def empty_absolute_table() -> pd.DataFrame:
    """Absolute stats frame with no rows and the canonical columns."""
    df = pd.DataFrame({col: pd.Series(dtype='int64') for col in ABSOLUTE_COLUMNS})
    df['team'] = df['team'].astype(object)
    return df


def compute_absolute_stats(matches: pd.DataFrame,
                           big_result_margin: int = DEFAULT_BIG_RESULT_MARGIN) -> pd.DataFrame:
    """
    Compute absolute stats for every team in the match history.

    Args:
        matches: Validated match frame (see ``MatchSchema``)
        big_result_margin: Minimum goal margin for a win/loss to count as big

    Returns:
        DataFrame with ``ABSOLUTE_COLUMNS``, one row per team in alphabetical
        order, rank 0
    """
    teams = unique_teams(matches)
    if not teams:
        return empty_absolute_table()

    sides = expand_perspectives(matches)
    gf = sides['gf']
    ga = sides['ga']
    margin = (gf - ga).abs()

    flags = pd.DataFrame({
        'team': sides['team'],
        'games_played': 1,
        'wins': (gf > ga).astype('int64'),
        'losses': (gf < ga).astype('int64'),
        'draws': (gf == ga).astype('int64'),
        'goals_scored': gf,
        'goals_allowed': ga,
        'clean_sheets': (ga == 0).astype('int64'),
        'clean_sheets_against': (gf == 0).astype('int64'),
        'big_wins': ((gf > ga) & (margin >= big_result_margin)).astype('int64'),
        'big_losses': ((gf < ga) & (margin >= big_result_margin)).astype('int64'),
    })

    totals = flags.groupby('team', sort=False).sum().reindex(teams)
    totals['points'] = 3 * totals['wins'] + totals['draws']
    totals['goal_difference'] = totals['goals_scored'] - totals['goals_allowed']

    totals.index.name = 'team'
    result = totals.reset_index()
    result['rank'] = 0
    result = result[ABSOLUTE_COLUMNS].copy()
    result[COUNT_COLUMNS] = result[COUNT_COLUMNS].astype(np.int64)

    logger.debug(f"Computed absolute stats for {len(result)} teams from {len(matches)} matches")
    return result


def absolute_ppg(table: pd.DataFrame) -> pd.Series:
    """
    Points per game recomputed from raw integer counts (no rounding).

    This is the ranking metric for absolute stats tables.
    """
    points = 3 * table['wins'] + table['draws']
    return points / table['games_played']
