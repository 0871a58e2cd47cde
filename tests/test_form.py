#!/usr/bin/env python3
"""
Test suite for latest form analysis
"""

import pytest

from conftest import make_matches
from league_stats.analytics.directory import belongs_to
from league_stats.analytics.form import (
    compute_individual_form, compute_latest_form, compute_team_form, summarize_form
)
from league_stats.schema.match_schema import FORM_COLUMNS, FormSchema


class TestSummarizeForm:
    """Test cases for the form of a single entity"""

    def test_newest_first(self, league_matches):
        """Test that letters run from the most recent match backwards"""
        summary = summarize_form(league_matches, "Arsenal")
        assert summary['form'] == "WWDW"
        assert summary['latest_ppg'] == 2.5
        assert summary['games_considered'] == 4

    def test_away_perspective(self, league_matches):
        summary = summarize_form(league_matches, "Chelsea")
        assert summary['form'] == "LLD"
        assert summary['latest_ppg'] == 0.3333
        assert summary['games_considered'] == 3

    def test_window_bounds_games(self, league_matches):
        """Test that only the latest window_size matches count"""
        assert summarize_form(league_matches, "Arsenal", window_size=2)['form'] == "WW"
        assert summarize_form(league_matches, "Arsenal", window_size=2)['latest_ppg'] == 3.0
        assert summarize_form(league_matches, "Burnley", window_size=2)['latest_ppg'] == 1.5
        assert summarize_form(league_matches, "Chelsea", window_size=2)['latest_ppg'] == 0.0

    def test_window_larger_than_history(self, league_matches):
        summary = summarize_form(league_matches, "Burnley", window_size=50)
        assert summary['form'] == "LWL"
        assert summary['games_considered'] == 3

    def test_five_of_six(self):
        """Test that the oldest match falls out of a window of five"""
        rows = [("A", 0, 1, "B")] + [("A", 1, 0, "B")] * 5
        summary = summarize_form(make_matches(rows), "A", window_size=5)
        assert summary['form'] == "WWWWW"
        assert summary['latest_ppg'] == 3.0

    def test_unknown_entity_rejected(self, league_matches):
        with pytest.raises(ValueError, match="Everton"):
            summarize_form(league_matches, "Everton")

    def test_window_must_be_positive(self, league_matches):
        with pytest.raises(ValueError):
            summarize_form(league_matches, "Arsenal", window_size=0)

    def test_input_untouched(self, league_matches):
        before = league_matches.copy()
        summarize_form(league_matches, "Arsenal")
        assert league_matches.equals(before)

    def test_membership_predicate(self, doubles_matches):
        summary = summarize_form(doubles_matches, "Bob", member=belongs_to)
        assert summary['form'] == "DWW"
        assert summary['latest_ppg'] == 2.3333


class TestFormTables:
    """Test cases for team and individual form tables"""

    def test_team_form_table(self, league_matches):
        table = compute_team_form(league_matches)
        assert list(table.columns) == FORM_COLUMNS
        assert table['team'].tolist() == ["Arsenal", "Burnley", "Chelsea"]
        assert table['form'].tolist() == ["WWDW", "LWL", "LLD"]
        assert table['latest_ppg'].tolist() == [2.5, 1.0, 0.3333]
        assert table['games_considered'].tolist() == [4, 3, 3]
        assert (table['rank'] == 0).all()
        FormSchema.validate(table)

    def test_individual_form_table(self, doubles_matches):
        table = compute_individual_form(doubles_matches)
        assert table['team'].tolist() == ["Alice", "Bob", "Carol", "Dave"]
        assert table['form'].tolist() == ["DLW", "DWW", "DLL", "DWL"]
        assert table['latest_ppg'].tolist() == [1.3333, 2.3333, 0.3333, 1.3333]

    def test_shared_player_counts_once_per_match(self):
        """Test that a player on both sides still gets one letter per match"""
        matches = make_matches([("AliceBob", 1, 1, "AliceCharlie")])
        table = compute_individual_form(matches).set_index('team')
        assert table.loc["Alice", 'form'] == "D"
        assert table.loc["Alice", 'games_considered'] == 1

    def test_entities_kept_in_given_order(self, league_matches):
        table = compute_latest_form(league_matches, ["Chelsea", "Arsenal"], window_size=1)
        assert table['team'].tolist() == ["Chelsea", "Arsenal"]
        assert table['form'].tolist() == ["L", "W"]

    def test_empty_history(self):
        table = compute_team_form(make_matches([]))
        assert table.empty
        assert list(table.columns) == FORM_COLUMNS
