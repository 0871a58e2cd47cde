#!/usr/bin/env python3
"""
Directory of entities appearing in a match history.

Teams are the raw home/away identifiers. Individuals are obtained by
splitting team identifiers made of concatenated capitalized names, e.g.
``"AliceBob"`` -> ``["Alice", "Bob"]``.
"""

from typing import List

import pandas as pd


def split_segments(team: str) -> List[str]:
    """
    Split a team identifier into its capitalized name segments.

    A segment starts at an uppercase ASCII letter (A-Z) and runs through
    the following characters up to the next one. Characters before the
    first uppercase letter belong to no segment.

    Examples:
        >>> split_segments("AliceBob")
        ['Alice', 'Bob']
        >>> split_segments("McDonaldSmith")
        ['Mc', 'Donald', 'Smith']
        >>> split_segments("smith")
        []
    """
    segments: List[str] = []
    current = None
    for ch in team:
        if "A" <= ch <= "Z":
            if current is not None:
                segments.append(current)
            current = ch
        elif current is not None:
            current += ch
    if current is not None:
        segments.append(current)
    return segments


def unique_teams(matches: pd.DataFrame) -> List[str]:
    """Sorted list of every distinct home or away identifier."""
    teams = set(matches['home_team']) | set(matches['away_team'])
    return sorted(teams)


def unique_individuals(matches: pd.DataFrame) -> List[str]:
    """Sorted union of the name segments of every team in ``matches``."""
    individuals = set()
    for team in unique_teams(matches):
        individuals.update(split_segments(team))
    return sorted(individuals)


def belongs_to(individual: str, team: str) -> bool:
    """True iff ``individual`` is exactly one of ``team``'s segments."""
    return individual in split_segments(team)
