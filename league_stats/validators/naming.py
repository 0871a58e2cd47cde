#!/usr/bin/env python3
"""
naming.py
---------
Team naming checks run before any result table of a file is produced.

1. Self-play: a record with the same identifier on both sides makes the
   whole file unusable.
2. Two-participant naming: in individual mode every identifier must split
   into exactly ``expected_segments`` capitalized names (``AliceBob``),
   otherwise the individual tables of the file are skipped.

Violations are reported as dicts with the keys ``record_index`` (0-based
position after the header row), ``line`` (1-based line in the CSV file),
``home_team``, ``away_team`` and ``reason``.
"""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from league_stats.analytics.directory import split_segments
from league_stats.errors import SelfPlayError

logger = logging.getLogger(__name__)

Violation = Dict[str, Any]


def _violation(record_index: int, home_team: str, away_team: str, reason: str) -> Violation:
    return {
        "record_index": record_index,
        # +1 for 1-based counting, +1 for the header row
        "line": record_index + 2,
        "home_team": home_team,
        "away_team": away_team,
        "reason": reason,
    }


def find_self_play(matches: pd.DataFrame) -> List[Violation]:
    """Every record where a team plays itself."""
    violations = []
    pairs = zip(matches['home_team'].tolist(), matches['away_team'].tolist())
    for idx, (home, away) in enumerate(pairs):
        if home == away:
            violations.append(_violation(idx, home, away, "team plays itself"))
    return violations


def check_self_play(matches: pd.DataFrame) -> None:
    """
    Raise if any record has the same team on both sides.

    Raises:
        SelfPlayError: Carrying every offending record
    """
    violations = find_self_play(matches)
    if violations:
        raise SelfPlayError(violations)


def find_segment_violations(matches: pd.DataFrame, expected_segments: int = 2) -> List[Violation]:
    """
    Every record where a team identifier does not split into exactly
    ``expected_segments`` name segments.

    Args:
        matches: Match frame
        expected_segments: Required number of capitalized names per team

    Returns:
        List of violation dicts, one per offending record
    """
    segment_counts: Dict[str, int] = {}

    def count(team: str) -> int:
        if team not in segment_counts:
            segment_counts[team] = len(split_segments(team))
        return segment_counts[team]

    violations = []
    pairs = zip(matches['home_team'].tolist(), matches['away_team'].tolist())
    for idx, (home, away) in enumerate(pairs):
        bad = [team for team in (home, away) if count(team) != expected_segments]
        if bad:
            details = ", ".join(f"{team!r} has {count(team)} segment(s)" for team in bad)
            violations.append(_violation(
                idx, home, away, f"expected {expected_segments} name segments per team: {details}"
            ))
    return violations


def log_violations(violations: List[Violation], source: str,
                   logger: Optional[logging.Logger] = None) -> None:
    """Log one warning line per violation, identifying file and record."""
    logger = logger or logging.getLogger(__name__)
    for v in violations:
        logger.warning(
            f"{source}: record {v['record_index']} (line {v['line']}) "
            f"{v['home_team']!r} vs {v['away_team']!r}: {v['reason']}"
        )
