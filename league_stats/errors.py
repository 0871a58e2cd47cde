#!/usr/bin/env python3
"""
Exception hierarchy for the league stats pipeline.

Fatal source problems abort the whole run; validation problems only abort
the file (or the individual scope) they were found in.
"""

from typing import Any, Dict, List


class LeagueStatsError(Exception):
    """Base exception for league stats errors."""
    pass


class MatchSourceError(LeagueStatsError):
    """Malformed or unreadable match source (directory, file or goal column)."""
    pass


class ValidationError(LeagueStatsError):
    """Custom exception for team naming validation failures."""
    pass


class SelfPlayError(ValidationError):
    """One or more records have the same team on both sides."""

    def __init__(self, violations: List[Dict[str, Any]]):
        self.violations = violations
        indices = ", ".join(str(v["record_index"]) for v in violations)
        super().__init__(f"{len(violations)} self-play record(s) at index {indices}")
