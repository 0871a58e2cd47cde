#!/usr/bin/env python3
"""
League Stats Pipeline

For every match file in the data directory:
1. Read and validate the match history
2. Reject files where a team plays itself
3. Team tables: absolute stats, normalized stats, latest form (each ranked)
4. Individual tables, for "2v2" files whose team names all split into two
   capitalized names
5. Write all tables of the file atomically to the results directory

Malformed sources stop the whole run; naming problems only skip the file
(self-play) or its individual tables (two-participant naming).
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from league_stats.analytics.aggregator import compute_absolute_stats
from league_stats.analytics.form import compute_individual_form, compute_team_form
from league_stats.analytics.individuals import compute_individual_stats
from league_stats.analytics.normalizer import compute_normalized_stats
from league_stats.analytics.ranking_engine import rank_absolute, rank_form, rank_normalized
from league_stats.config import load_config
from league_stats.errors import MatchSourceError, SelfPlayError
from league_stats.io.file_utils import (
    ABSOLUTE_TABLE, FORM_TABLE, INDIVIDUALS_SCOPE, NORMALIZED_TABLE, TEAMS_SCOPE,
    is_individual_mode, list_data_files, remove_extension, result_path
)
from league_stats.io.match_reader import read_matches
from league_stats.io.safe_write import safe_write_tables
from league_stats.schema.match_schema import (
    AbsoluteStatsSchema, FormSchema, NormalizedStatsSchema, validate_table
)
from league_stats.utils.logger import get_logger
from league_stats.validators.naming import (
    check_self_play, find_segment_violations, log_violations
)

logger = logging.getLogger(__name__)


def build_scope_tables(absolute: pd.DataFrame, form: pd.DataFrame) -> Dict[str, pd.DataFrame]:
    """
    Rank and validate the three tables of one scope (teams or individuals).

    Args:
        absolute: Unranked absolute stats, alphabetical
        form: Unranked latest form, alphabetical

    Returns:
        Mapping of table name -> ranked table
    """
    normalized = compute_normalized_stats(absolute)
    return {
        ABSOLUTE_TABLE: validate_table(rank_absolute(absolute), AbsoluteStatsSchema),
        NORMALIZED_TABLE: validate_table(rank_normalized(normalized), NormalizedStatsSchema),
        FORM_TABLE: validate_table(rank_form(form), FormSchema),
    }


def process_file(path: Path, config: Dict[str, Any], dry_run: bool = False) -> Dict[str, Any]:
    """
    Execute the stats pipeline for one match file.

    Args:
        path: Match CSV file
        config: Configuration dictionary (see ``load_config``)
        dry_run: If True, compute everything but write nothing

    Returns:
        Summary dict with file, status ("ok" or "skipped"), individuals
        (whether individual tables were produced), tables (written paths)
        and violations

    Raises:
        MatchSourceError: If the file is malformed (fatal for the run)
    """
    path = Path(path)
    base = remove_extension(path.name)
    window_size = config['WINDOW_SIZE']
    summary: Dict[str, Any] = {
        'file': path.name,
        'status': 'ok',
        'individuals': False,
        'tables': [],
        'violations': [],
    }

    matches = read_matches(path)

    try:
        check_self_play(matches)
    except SelfPlayError as e:
        log_violations(e.violations, path.name, logger)
        logger.error(f"Skipping {path.name}: {e}")
        summary['status'] = 'skipped'
        summary['violations'] = e.violations
        return summary

    team_absolute = compute_absolute_stats(matches, config['BIG_RESULT_MARGIN'])
    team_form = compute_team_form(matches, window_size)
    scopes = {TEAMS_SCOPE: build_scope_tables(team_absolute, team_form)}

    if is_individual_mode(path.name, config['INDIVIDUAL_MODE_TOKEN']):
        violations = find_segment_violations(matches, config['EXPECTED_SEGMENTS'])
        if violations:
            log_violations(violations, path.name, logger)
            logger.warning(f"Skipping individual stats for {path.name}: "
                           f"{len(violations)} record(s) with invalid team names")
            summary['violations'] = violations
        else:
            individual_absolute = compute_individual_stats(matches, team_absolute)
            individual_form = compute_individual_form(matches, window_size)
            scopes[INDIVIDUALS_SCOPE] = build_scope_tables(individual_absolute, individual_form)
            summary['individuals'] = True

    tables = {
        result_path(config['RESULTS_DIR'], base, scope, name): table
        for scope, scope_tables in scopes.items()
        for name, table in scope_tables.items()
    }

    if dry_run:
        for table_path, table in tables.items():
            logger.info(f"[DRY RUN] Would write {table_path} ({len(table)} rows)")
    else:
        written = safe_write_tables(tables, logger)
        summary['tables'] = [info['path'] for info in written]

    logger.info(f"Computed stats for {path.name}")
    return summary


def run(config: Dict[str, Any], dry_run: bool = False) -> List[Dict[str, Any]]:
    """
    Process every match file of ``config['DATA_DIR']`` in name order.

    Raises:
        MatchSourceError: On the first malformed source; later files are not attempted
    """
    files = list_data_files(config['DATA_DIR'], config.get('DATA_GLOB', '*'))
    logger.info(f"Found {len(files)} data file(s) in {config['DATA_DIR']}")

    results = []
    for path in files:
        results.append(process_file(path, config, dry_run))

    skipped = [r['file'] for r in results if r['status'] == 'skipped']
    if skipped:
        logger.warning(f"Skipped {len(skipped)} file(s): {', '.join(skipped)}")
    return results


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the league stats pipeline."""
    parser = argparse.ArgumentParser(description="Compute league standings from match results")
    parser.add_argument("--data-dir", type=str, default=None,
                        help="Directory with match CSV files (default from config)")
    parser.add_argument("--results-dir", type=str, default=None,
                        help="Output directory for result tables (default from config)")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML configuration file overriding the packaged defaults")
    parser.add_argument("--window-size", type=int, default=None,
                        help="Number of latest games considered for form")
    parser.add_argument("--big-margin", type=int, default=None,
                        help="Goal margin from which a win or loss counts as big")
    parser.add_argument("--log-file", type=str, default=None,
                        help="Also write the log to this file")
    parser.add_argument("--dry-run", action="store_true",
                        help="Compute stats but do not write result tables")
    parser.add_argument("--verbose", action="store_true",
                        help="Debug level logging")

    args = parser.parse_args(argv)

    overrides = {
        'DATA_DIR': args.data_dir,
        'RESULTS_DIR': args.results_dir,
        'WINDOW_SIZE': args.window_size,
        'BIG_RESULT_MARGIN': args.big_margin,
        'LOG_FILE': args.log_file,
    }

    try:
        config = load_config(args.config, overrides)
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    run_logger = get_logger("league_stats", config.get('LOG_FILE'),
                            logging.DEBUG if args.verbose else logging.INFO)

    try:
        run(config, dry_run=args.dry_run)
    except MatchSourceError as e:
        run_logger.error(f"Aborting run: {e}")
        return 1

    run_logger.info("Done!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
