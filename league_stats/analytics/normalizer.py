#!/usr/bin/env python3
"""
Per-game rate normalization of absolute stats.

Every rate is derived from a single absolute stats row and rounded half
away from zero: points per game to 4 decimals, goal rates to 3, and
percentages (count * 100 / games) to 2.
"""

import logging

import numpy as np
import pandas as pd

from league_stats.analytics.utils_stats import round_half_away
from league_stats.schema.match_schema import NORMALIZED_COLUMNS

logger = logging.getLogger(__name__)

# rate column -> (source count column, decimals, scale factor)
RATE_RULES = {
    'ppg': ('points', 4, 1),
    'gdpg': ('goal_difference', 3, 1),
    'win_pct': ('wins', 2, 100),
    'loss_pct': ('losses', 2, 100),
    'draw_pct': ('draws', 2, 100),
    'gspg': ('goals_scored', 3, 1),
    'gapg': ('goals_allowed', 3, 1),
    'cs_pct': ('clean_sheets', 2, 100),
    'csa_pct': ('clean_sheets_against', 2, 100),
    'big_win_pct': ('big_wins', 2, 100),
    'big_loss_pct': ('big_losses', 2, 100),
}


def compute_normalized_stats(absolute: pd.DataFrame) -> pd.DataFrame:
    """
    Derive per-game rates from an absolute stats table.

    Args:
        absolute: Table with ``ABSOLUTE_COLUMNS`` (teams or individuals)

    Returns:
        DataFrame with ``NORMALIZED_COLUMNS`` in the same row order, rank 0

    Raises:
        ValueError: If any row has zero games played
    """
    games = absolute['games_played'].to_numpy(dtype=np.int64)
    if (games <= 0).any():
        empty = absolute.loc[games <= 0, 'team'].tolist()
        raise ValueError(f"Cannot normalize entities without games: {empty}")

    games = games.astype(float)
    result = pd.DataFrame({
        'rank': np.zeros(len(absolute), dtype=np.int64),
        'team': absolute['team'].to_numpy(dtype=object),
        'games_played': absolute['games_played'].to_numpy(dtype=np.int64),
    })

    for rate, (source, decimals, factor) in RATE_RULES.items():
        counts = absolute[source].to_numpy(dtype=float)
        # Percentages multiply before dividing
        result[rate] = round_half_away(counts * factor / games, decimals)

    return result[NORMALIZED_COLUMNS]
