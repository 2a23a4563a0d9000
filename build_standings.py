#!/usr/bin/env python3
"""
Box standings CLI

Builds box cross-tables and the Golden Ranking from a club snapshot file
(players, matches, boxes and seasons as returned by the club API).

Usage:
    python build_standings.py --snapshot data/snapshot.json
    python build_standings.py --snapshot data/snapshot.json --year 2025 --output web/standings.json
    python build_standings.py --snapshot data/snapshot.json --excel out/boxes.xlsx --quiet
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from boxrank import (
    build_box_snapshots,
    compute_golden_ranking,
    default_season,
    validate_snapshot,
)
from boxrank.excel_export import export_workbook
from boxrank.json_export import save_box_tables, save_golden_ranking
from boxrank.logging_config import get_logger, setup_logging
from boxrank.schemas import SnapshotFile
from boxrank.utils import load_json

logger = get_logger("boxrank.cli")


def print_table(name: str, table) -> None:
    """Print a cross-table with one line per ranked player."""
    print(f"\n{name}")
    print("-" * 60)
    for i, row in enumerate(table.rows):
        cells = " | ".join(cell.text.replace("\n", " ") for cell in table.row_cells(i))
        print(f"  {i + 1}. {row.player.display_name:<24} {row.points:>4} pts  [{cells}]")


def main():
    parser = argparse.ArgumentParser(description="Build box tables and the Golden Ranking")
    parser.add_argument(
        "--snapshot", "-s",
        required=True,
        help="Path to snapshot JSON (players, matches, boxes, seasons)",
    )
    parser.add_argument(
        "--season-id",
        default=None,
        help="Season to build box tables for (defaults to the running season)",
    )
    parser.add_argument(
        "--year", "-y",
        type=int,
        default=None,
        help="Year for the Golden Ranking (defaults to the current year)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output path for box tables JSON",
    )
    parser.add_argument(
        "--ranking-output",
        default=None,
        help="Output path for Golden Ranking JSON",
    )
    parser.add_argument(
        "--excel",
        default=None,
        help="Output path for an Excel workbook with all tables",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress detailed output",
    )

    args = parser.parse_args()
    setup_logging(level=logging.WARNING if args.quiet else logging.INFO)

    snapshot_path = Path(args.snapshot)
    if not snapshot_path.exists():
        logger.error(f"Snapshot file not found: {snapshot_path}")
        sys.exit(1)

    snapshot = load_json(snapshot_path, schema=SnapshotFile)
    players = snapshot.player_models()
    matches = snapshot.match_models()

    errors, warnings = validate_snapshot(players, matches)
    if not args.quiet:
        for message in errors:
            print(f"ERROR: {message}")
        for message in warnings:
            print(f"WARNING: {message}")

    # Box tables for one season
    season_id = args.season_id
    if season_id is None:
        season = default_season(snapshot.seasons)
        season_id = season.id if season else None

    season_matches = [m for m in matches if season_id is None or m.season_id == season_id]
    boxes = build_box_snapshots(season_matches, players, snapshot.boxes)
    tables = [(box.box, box.cross_table()) for box in boxes]

    if not args.quiet:
        for box, table in tables:
            print_table(box.name or box.id, table)

    # Golden Ranking for one year
    year = args.year or datetime.now().year
    ranking = compute_golden_ranking(matches, players, year=year)

    if not args.quiet:
        print("\n" + "=" * 60)
        print(f"GOLDEN RANKING {year}")
        print("=" * 60)
        for rank, row in enumerate(ranking, 1):
            print(f"  {rank}. {row.player.display_name}: {row.points} pts ({row.wins}W - {row.losses}L)")

    if args.output:
        save_box_tables(args.output, [(box.model_dump(), table) for box, table in tables])
        logger.info(f"Saved {len(tables)} box tables to {args.output}")
    if args.ranking_output:
        save_golden_ranking(args.ranking_output, ranking, year)
        logger.info(f"Saved Golden Ranking ({len(ranking)} players) to {args.ranking_output}")
    if args.excel:
        export_workbook(args.excel, [(box.name or box.id, table) for box, table in tables], ranking)
        logger.info(f"Saved workbook to {args.excel}")


if __name__ == "__main__":
    main()
