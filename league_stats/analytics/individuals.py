#!/usr/bin/env python3
"""
Attribution of team results to the individuals composing each team.

An individual's absolute stats are the plain sum of the stats of every team
identifier containing their name. Nothing is deduplicated: a player who
appears in two team identities, or on both sides of the same match, accrues
the totals of each of them.
"""

import logging

import numpy as np
import pandas as pd

from league_stats.analytics.aggregator import empty_absolute_table
from league_stats.analytics.directory import belongs_to, unique_individuals
from league_stats.schema.match_schema import ABSOLUTE_COLUMNS, COUNT_COLUMNS

logger = logging.getLogger(__name__)


def compute_individual_stats(matches: pd.DataFrame, team_absolute: pd.DataFrame) -> pd.DataFrame:
    """
    Re-aggregate team absolute stats onto individuals.

    Args:
        matches: Match frame the team table was computed from
        team_absolute: Team absolute stats (any row order)

    Returns:
        DataFrame with ``ABSOLUTE_COLUMNS``, one row per individual in
        alphabetical order, rank 0
    """
    individuals = unique_individuals(matches)
    if not individuals:
        return empty_absolute_table()

    teams = team_absolute['team'].tolist()
    counts = team_absolute[COUNT_COLUMNS].to_numpy(dtype=np.int64)

    rows = []
    for individual in individuals:
        mask = np.array([belongs_to(individual, team) for team in teams], dtype=bool)
        totals = counts[mask].sum(axis=0)
        rows.append([0, individual] + totals.tolist())
        logger.debug(f"{individual}: {int(mask.sum())} team(s)")

    result = pd.DataFrame(rows, columns=ABSOLUTE_COLUMNS)
    result[['rank'] + COUNT_COLUMNS] = result[['rank'] + COUNT_COLUMNS].astype(np.int64)
    return result
