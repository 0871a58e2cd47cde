#!/usr/bin/env python3
"""
Pytest configuration and fixtures
"""

import pytest
import pandas as pd
import tempfile
import shutil
from pathlib import Path
import sys

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from league_stats.config import load_config


def make_matches(rows):
    """Build a match frame from (home_team, home_goals, away_goals, away_team) tuples."""
    df = pd.DataFrame(rows, columns=['home_team', 'home_goals', 'away_goals', 'away_team'])
    df['home_goals'] = df['home_goals'].astype('int64')
    df['away_goals'] = df['away_goals'].astype('int64')
    return df


def write_match_csv(path, rows, header=("HomeTeam", "HomeGoals", "AwayGoals", "AwayTeam")):
    """Write a match CSV file (header + rows) the way users export them."""
    lines = [",".join(header)] + [",".join(str(c) for c in row) for row in rows]
    Path(path).write_text("\n".join(lines) + "\n", encoding="utf-8")
    return Path(path)


@pytest.fixture
def league_rows():
    """Five matches between three teams, oldest first"""
    return [
        ("Arsenal", 2, 0, "Burnley"),
        ("Chelsea", 1, 1, "Arsenal"),
        ("Burnley", 4, 0, "Chelsea"),
        ("Arsenal", 3, 1, "Chelsea"),
        ("Burnley", 0, 5, "Arsenal"),
    ]


@pytest.fixture
def league_matches(league_rows):
    """Sample league match frame"""
    return make_matches(league_rows)


@pytest.fixture
def doubles_rows():
    """Three 2v2 matches between four players in changing partnerships"""
    return [
        ("AliceBob", 3, 0, "CarolDave"),
        ("AliceCarol", 1, 2, "BobDave"),
        ("BobCarol", 2, 2, "AliceDave"),
    ]


@pytest.fixture
def doubles_matches(doubles_rows):
    """Sample 2v2 match frame"""
    return make_matches(doubles_rows)


@pytest.fixture
def temp_data_dir():
    """Temporary directory for test data"""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture
def pipeline_config(temp_data_dir):
    """Configuration pointing at temporary data and results directories"""
    data_dir = temp_data_dir / "data"
    results_dir = temp_data_dir / "results"
    data_dir.mkdir()
    return load_config(overrides={
        'DATA_DIR': str(data_dir),
        'RESULTS_DIR': str(results_dir),
    })
