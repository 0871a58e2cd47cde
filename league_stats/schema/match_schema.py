#!/usr/bin/env python3
"""
Match and Standings Schema Definitions

Defines the canonical column layout of the match history and of the three
result tables (absolute stats, normalized stats, latest form) using Pandera
for validation. Column order here is the order tables are built and written
in.
"""

import logging
from typing import Type

import pandas as pd
import pandera as pa
from pandera.typing import DataFrame, Series

logger = logging.getLogger(__name__)


# Column definitions for easy reference
MATCH_COLUMNS = ["home_team", "home_goals", "away_goals", "away_team"]

# Counting fields of an absolute stats row, i.e. everything an individual
# inherits from the teams it belongs to
COUNT_COLUMNS = [
    "games_played", "points", "goal_difference", "wins", "losses", "draws",
    "goals_scored", "goals_allowed", "clean_sheets", "clean_sheets_against",
    "big_wins", "big_losses"
]

ABSOLUTE_COLUMNS = ["rank", "team"] + COUNT_COLUMNS

RATE_COLUMNS = [
    "ppg", "gdpg", "win_pct", "loss_pct", "draw_pct", "gspg", "gapg",
    "cs_pct", "csa_pct", "big_win_pct", "big_loss_pct"
]

NORMALIZED_COLUMNS = ["rank", "team", "games_played"] + RATE_COLUMNS

FORM_COLUMNS = ["rank", "team", "form", "latest_ppg", "games_considered"]

# Header names used in the written CSV files
OUTPUT_HEADERS = {
    "rank": "Rank",
    "team": "Team",
    "games_played": "GamesPlayed",
    "points": "Points",
    "goal_difference": "GoalDifference",
    "wins": "Wins",
    "losses": "Losses",
    "draws": "Draws",
    "goals_scored": "GoalsScored",
    "goals_allowed": "GoalsAllowed",
    "clean_sheets": "CleanSheets",
    "clean_sheets_against": "CleanSheetsAgainst",
    "big_wins": "BigWins",
    "big_losses": "BigLosses",
    "ppg": "PPG",
    "gdpg": "GDPG",
    "win_pct": "WinPct",
    "loss_pct": "LossPct",
    "draw_pct": "DrawPct",
    "gspg": "GSPG",
    "gapg": "GAPG",
    "cs_pct": "CsPct",
    "csa_pct": "CsaPct",
    "big_win_pct": "BigWinPct",
    "big_loss_pct": "BigLossPct",
    "form": "Form",
    "latest_ppg": "LatestPPG",
    "games_considered": "NumGamesConsidered",
}


class MatchSchema(pa.DataFrameModel):
    """
    Pandera schema for the match history.

    Goal columns arrive as text from the CSV reader and are coerced to
    integers; anything that is not a non-negative integer fails the file.
    """

    home_team: Series[str] = pa.Field(description="Home team identifier")
    home_goals: Series[int] = pa.Field(ge=0, description="Goals scored by the home team")
    away_goals: Series[int] = pa.Field(ge=0, description="Goals scored by the away team")
    away_team: Series[str] = pa.Field(description="Away team identifier")

    class Config:
        """Pandera configuration."""
        coerce = True
        strict = True
        ordered = True


class AbsoluteStatsSchema(pa.DataFrameModel):
    """Pandera schema for absolute (counting) stats of teams or individuals."""

    rank: Series[int] = pa.Field(ge=0)
    team: Series[str]
    games_played: Series[int] = pa.Field(ge=0)
    points: Series[int] = pa.Field(ge=0)
    goal_difference: Series[int]
    wins: Series[int] = pa.Field(ge=0)
    losses: Series[int] = pa.Field(ge=0)
    draws: Series[int] = pa.Field(ge=0)
    goals_scored: Series[int] = pa.Field(ge=0)
    goals_allowed: Series[int] = pa.Field(ge=0)
    clean_sheets: Series[int] = pa.Field(ge=0)
    clean_sheets_against: Series[int] = pa.Field(ge=0)
    big_wins: Series[int] = pa.Field(ge=0)
    big_losses: Series[int] = pa.Field(ge=0)

    class Config:
        coerce = True
        strict = True
        ordered = True

    @pa.dataframe_check
    def games_add_up(cls, df: DataFrame) -> Series[bool]:
        """games_played = wins + losses + draws"""
        return df["games_played"] == df["wins"] + df["losses"] + df["draws"]

    @pa.dataframe_check
    def points_add_up(cls, df: DataFrame) -> Series[bool]:
        """points = 3 * wins + draws"""
        return df["points"] == 3 * df["wins"] + df["draws"]

    @pa.dataframe_check
    def goal_difference_adds_up(cls, df: DataFrame) -> Series[bool]:
        """goal_difference = goals_scored - goals_allowed"""
        return df["goal_difference"] == df["goals_scored"] - df["goals_allowed"]


class NormalizedStatsSchema(pa.DataFrameModel):
    """Pandera schema for per-game rates."""

    rank: Series[int] = pa.Field(ge=0)
    team: Series[str]
    games_played: Series[int] = pa.Field(gt=0)
    ppg: Series[float] = pa.Field(ge=0, le=3)
    gdpg: Series[float]
    win_pct: Series[float] = pa.Field(ge=0, le=100)
    loss_pct: Series[float] = pa.Field(ge=0, le=100)
    draw_pct: Series[float] = pa.Field(ge=0, le=100)
    gspg: Series[float] = pa.Field(ge=0)
    gapg: Series[float] = pa.Field(ge=0)
    cs_pct: Series[float] = pa.Field(ge=0, le=100)
    csa_pct: Series[float] = pa.Field(ge=0, le=100)
    big_win_pct: Series[float] = pa.Field(ge=0, le=100)
    big_loss_pct: Series[float] = pa.Field(ge=0, le=100)

    class Config:
        coerce = True
        strict = True
        ordered = True


class FormSchema(pa.DataFrameModel):
    """Pandera schema for the latest form table."""

    rank: Series[int] = pa.Field(ge=0)
    team: Series[str]
    form: Series[str] = pa.Field(str_matches=r"^[WLD]+$")
    latest_ppg: Series[float] = pa.Field(ge=0, le=3)
    games_considered: Series[int] = pa.Field(gt=0)

    class Config:
        coerce = True
        strict = True
        ordered = True

    @pa.dataframe_check
    def form_length_matches(cls, df: DataFrame) -> Series[bool]:
        """One result letter per game considered."""
        return df["form"].str.len() == df["games_considered"]


def validate_table(df: pd.DataFrame, schema: Type[pa.DataFrameModel]) -> pd.DataFrame:
    """
    Validate a result table against one of the schemas above.

    Args:
        df: Table to validate
        schema: Pandera schema class

    Returns:
        Validated DataFrame

    Raises:
        pa.errors.SchemaErrors: If validation fails (all failures collected)
    """
    try:
        return schema.validate(df, lazy=True)
    except pa.errors.SchemaErrors as e:
        logger.error(f"{schema.__name__} validation failed for {len(df)} rows")
        logger.debug(f"Failure cases:\n{e.failure_cases}")
        raise
