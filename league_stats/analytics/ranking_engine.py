#!/usr/bin/env python3
"""
Ranking of standings tables.

All tables are ranked by points per game, descending, with a stable sort so
ties keep their prior (alphabetical) order. Absolute stats tables recompute
the ratio from raw integer counts; normalized and form tables use their
stored, already rounded value. Two entities that tie on the rounded value
can therefore be ordered differently in the absolute table.
"""

import logging
from typing import Callable, Union

import numpy as np
import pandas as pd

from league_stats.analytics.aggregator import absolute_ppg

logger = logging.getLogger(__name__)

Metric = Union[str, Callable[[pd.DataFrame], pd.Series]]


def rank_table(table: pd.DataFrame, metric: Metric, descending: bool = True) -> pd.DataFrame:
    """
    Stable-sort a table by a metric and assign 1-based ranks.

    Args:
        table: Any standings table with a ``rank`` column
        metric: Column name, or callable returning one value per row
        descending: Highest metric first when True

    Returns:
        New DataFrame sorted by the metric with ``rank`` = 1..n and a fresh index
    """
    values = table[metric] if isinstance(metric, str) else metric(table)
    values = np.asarray(values, dtype=float)
    if len(values) != len(table):
        raise ValueError(f"Metric produced {len(values)} values for {len(table)} rows")

    # Negating keeps ties in their original order under a stable ascending sort
    order = np.argsort(-values if descending else values, kind='stable')

    ranked = table.iloc[order].reset_index(drop=True)
    ranked['rank'] = np.arange(1, len(ranked) + 1, dtype=np.int64)
    return ranked


def rank_absolute(table: pd.DataFrame) -> pd.DataFrame:
    """Rank absolute stats by points per game recomputed from counts."""
    return rank_table(table, absolute_ppg)


def rank_normalized(table: pd.DataFrame) -> pd.DataFrame:
    """Rank normalized stats by the stored, rounded ppg."""
    return rank_table(table, 'ppg')


def rank_form(table: pd.DataFrame) -> pd.DataFrame:
    """Rank latest form by the stored, rounded latest_ppg."""
    return rank_table(table, 'latest_ppg')
