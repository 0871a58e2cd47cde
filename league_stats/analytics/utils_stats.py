#!/usr/bin/env python3
"""
Statistical utilities for the standings engine.

Provides the rounding rule shared by every per-game rate and the
"perspective" expansion that turns one match row into one row per side.
"""

from typing import Union

import numpy as np
import pandas as pd

ArrayLike = Union[float, np.ndarray, pd.Series]


def round_half_away(x: ArrayLike, precision: int) -> ArrayLike:
    """
    Round half away from zero at the given number of decimals.

    ``round(x, p) = trunc(x * 10^p + sign(x) * 0.5) / 10^p``. Unlike Python's
    ``round`` (and numpy's ``around``) ties never go to the even neighbour, and
    negative ties move away from zero: 0.125 -> 0.13, -0.125 -> -0.13.

    Args:
        x: Scalar, numpy array or Series
        precision: Number of decimal places

    Returns:
        Rounded value(s) of the same shape; Series keep their index
    """
    scale = 10.0 ** precision
    scaled = np.asarray(x, dtype=float) * scale
    # + 0.0 turns a negative zero (e.g. -0.0004 at 3 decimals) into 0.0
    rounded = np.trunc(scaled + np.copysign(0.5, scaled)) / scale + 0.0

    if isinstance(x, pd.Series):
        return pd.Series(rounded, index=x.index, name=x.name)
    if np.ndim(rounded) == 0:
        return float(rounded)
    return rounded


def expand_perspectives(matches: pd.DataFrame) -> pd.DataFrame:
    """
    Expand matches into one row per participating side.

    Args:
        matches: Match frame with home_team, home_goals, away_goals, away_team

    Returns:
        DataFrame with columns [record_index, team, opponent, gf, ga, side],
        home rows first, then away rows, each block in match order
    """
    home = pd.DataFrame({
        'record_index': np.arange(len(matches)),
        'team': matches['home_team'].to_numpy(),
        'opponent': matches['away_team'].to_numpy(),
        'gf': matches['home_goals'].to_numpy(dtype='int64'),
        'ga': matches['away_goals'].to_numpy(dtype='int64'),
        'side': 'H'
    })
    away = pd.DataFrame({
        'record_index': np.arange(len(matches)),
        'team': matches['away_team'].to_numpy(),
        'opponent': matches['home_team'].to_numpy(),
        'gf': matches['away_goals'].to_numpy(dtype='int64'),
        'ga': matches['home_goals'].to_numpy(dtype='int64'),
        'side': 'A'
    })
    return pd.concat([home, away], ignore_index=True)


def result_code(gf: int, ga: int) -> str:
    """Single-letter outcome from one side's perspective: W, L or D."""
    if gf > ga:
        return "W"
    if gf < ga:
        return "L"
    return "D"
