"""
Analytics module for the league standings engine.

This module provides entity discovery, absolute stats aggregation, per-game
normalization, latest form, individual attribution and ranking.
"""

from .aggregator import compute_absolute_stats, absolute_ppg
from .directory import belongs_to, split_segments, unique_individuals, unique_teams
from .form import compute_individual_form, compute_latest_form, compute_team_form
from .individuals import compute_individual_stats
from .normalizer import compute_normalized_stats
from .ranking_engine import rank_absolute, rank_form, rank_normalized, rank_table
from .utils_stats import round_half_away

__all__ = [
    'compute_absolute_stats',
    'absolute_ppg',
    'belongs_to',
    'split_segments',
    'unique_individuals',
    'unique_teams',
    'compute_individual_form',
    'compute_latest_form',
    'compute_team_form',
    'compute_individual_stats',
    'compute_normalized_stats',
    'rank_absolute',
    'rank_form',
    'rank_normalized',
    'rank_table',
    'round_half_away'
]
