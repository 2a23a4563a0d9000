"""JSON output of box tables and the Golden Ranking."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .models import CrossTable, CrossTableCell, Player, SeasonRow, StandingRow
from .outcomes import next_box_status_color
from .utils import save_json

logger = logging.getLogger('boxrank.json_export')


def player_to_dict(player: Player) -> dict[str, Any]:
    return {
        'id': player.player_id,
        'first_name': player.first_name,
        'last_name': player.last_name,
        'initials': player.initials,
        'picture': player.picture_url,
        'next_box_status': player.next_box_status,
    }


def row_to_dict(row: StandingRow | SeasonRow, rank: int) -> dict[str, Any]:
    return {
        'rank': rank,
        'player': player_to_dict(row.player),
        'points': row.points,
        'matches_played': row.matches_played,
        'wins': row.wins,
        'losses': row.losses,
    }


def cell_to_dict(cell: CrossTableCell) -> dict[str, Any]:
    return {
        'text': cell.text,
        'label': cell.label,
        'background': cell.background,
        'foreground': cell.foreground,
        'outcome': cell.outcome.value if cell.outcome else None,
        'match_id': cell.match_id,
    }


def cross_table_to_dict(table: CrossTable, box: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """
    Serialize a cross-table row by row in ranked order.

    Each row carries its player, the cells against every ranked opponent,
    the total, and the accent colour for the player's next-box status.
    """
    rows = []
    for i, standing in enumerate(table.rows):
        rows.append(
            {
                **row_to_dict(standing, i + 1),
                'status_color': next_box_status_color(standing.player.next_box_status),
                'cells': [cell_to_dict(cell) for cell in table.row_cells(i)],
                'total': table.totals[i],
            }
        )

    data: dict[str, Any] = {
        'players': [player_to_dict(p) for p in table.players],
        'rows': rows,
    }
    if box:
        data['box'] = box
    return data


def save_box_tables(output_path: str | Path, tables: list[tuple[dict[str, Any], CrossTable]]) -> None:
    """
    Save box cross-tables to JSON.

    Args:
        output_path: Path to output JSON file
        tables: List of (box info dict, CrossTable), in display order
    """
    data = {
        'updated_at': datetime.now(timezone.utc).isoformat(),
        'boxes': [cross_table_to_dict(table, box) for box, table in tables],
    }
    save_json(output_path, data)
    logger.info('Saved %d box tables to %s', len(tables), output_path)


def save_golden_ranking(
    output_path: str | Path,
    rows: list[SeasonRow],
    year: Optional[int] = None,
) -> None:
    """Save the Golden Ranking to JSON."""
    data = {
        'updated_at': datetime.now(timezone.utc).isoformat(),
        'year': year,
        'ranking': [row_to_dict(row, rank) for rank, row in enumerate(rows, 1)],
    }
    save_json(output_path, data)
    logger.info('Saved Golden Ranking (%d players) to %s', len(rows), output_path)
