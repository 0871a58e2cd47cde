#!/usr/bin/env python3
"""
Latest form analysis.

Looks back over the most recent N matches of each entity (newest first)
and summarizes them as a W/L/D string plus points per game over that
window. The match history is expected in ascending time order and is never
modified; it is walked backwards by position.
"""

import logging
from typing import Callable, Iterable, Optional

import pandas as pd

from league_stats.analytics.directory import belongs_to, unique_individuals, unique_teams
from league_stats.analytics.utils_stats import result_code, round_half_away
from league_stats.schema.match_schema import FORM_COLUMNS

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 10

MembershipFn = Callable[[str, str], bool]


def _same_entity(entity: str, team: str) -> bool:
    return entity == team


def summarize_form(matches: pd.DataFrame, entity: str, window_size: int = DEFAULT_WINDOW_SIZE,
                   member: Optional[MembershipFn] = None) -> dict:
    """
    Form of a single entity over its last ``window_size`` matches.

    Args:
        matches: Match frame in ascending time order
        entity: Team or individual name
        window_size: Maximum number of matches to look back over
        member: Predicate ``(entity, team) -> bool``; identifier equality by default

    Returns:
        Dict with keys team, form, latest_ppg, games_considered

    Raises:
        ValueError: If window_size < 1 or the entity played no match
    """
    if window_size < 1:
        raise ValueError(f"window_size must be at least 1, got {window_size}")
    member = member or _same_entity

    home_teams = matches['home_team'].to_numpy()
    away_teams = matches['away_team'].to_numpy()
    home_goals = matches['home_goals'].to_numpy()
    away_goals = matches['away_goals'].to_numpy()

    letters = []
    for i in range(len(matches) - 1, -1, -1):
        if member(entity, home_teams[i]):
            letters.append(result_code(home_goals[i], away_goals[i]))
        elif member(entity, away_teams[i]):
            letters.append(result_code(away_goals[i], home_goals[i]))
        else:
            continue
        if len(letters) == window_size:
            break

    if not letters:
        raise ValueError(f"No matches found for {entity!r}; latest form is undefined")

    form = "".join(letters)
    points = 3 * form.count("W") + form.count("D")
    return {
        'team': entity,
        'form': form,
        'latest_ppg': round_half_away(points / len(letters), 4),
        'games_considered': len(letters),
    }


def compute_latest_form(matches: pd.DataFrame, entities: Iterable[str],
                        window_size: int = DEFAULT_WINDOW_SIZE,
                        member: Optional[MembershipFn] = None) -> pd.DataFrame:
    """
    Latest form table for the given entities, in the order given, rank 0.
    """
    rows = [summarize_form(matches, entity, window_size, member) for entity in entities]
    result = pd.DataFrame(rows, columns=FORM_COLUMNS[1:])
    result.insert(0, 'rank', 0)
    result['games_considered'] = result['games_considered'].astype('int64')
    result['latest_ppg'] = result['latest_ppg'].astype(float)
    return result[FORM_COLUMNS]


def compute_team_form(matches: pd.DataFrame, window_size: int = DEFAULT_WINDOW_SIZE) -> pd.DataFrame:
    """Latest form of every team, alphabetical."""
    return compute_latest_form(matches, unique_teams(matches), window_size)


def compute_individual_form(matches: pd.DataFrame, window_size: int = DEFAULT_WINDOW_SIZE) -> pd.DataFrame:
    """Latest form of every individual, matched by team name segments."""
    return compute_latest_form(matches, unique_individuals(matches), window_size, member=belongs_to)
