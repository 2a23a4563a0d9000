"""Excel export of box cross-tables and the Golden Ranking."""

import logging
import re
from pathlib import Path

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill

from .models import CrossTable, SeasonRow

logger = logging.getLogger('boxrank.excel_export')

# Excel sheet titles: max 31 chars, none of []:*?/\
INVALID_TITLE_CHARS = re.compile(r'[\[\]:*?/\\]')
MAX_TITLE_LENGTH = 31

CENTERED = Alignment(horizontal='center', vertical='center', wrap_text=True)


def sheet_title(name: str, taken: set[str]) -> str:
    """Make a valid, unique sheet title from a box name."""
    base = INVALID_TITLE_CHARS.sub('_', name).strip() or 'Box'
    base = base[:MAX_TITLE_LENGTH]
    title = base
    suffix = 2
    while title in taken:
        tail = f' ({suffix})'
        title = base[: MAX_TITLE_LENGTH - len(tail)] + tail
        suffix += 1
    taken.add(title)
    return title


def _fill(hex_color: str) -> PatternFill:
    color = hex_color.lstrip('#').upper()
    return PatternFill(start_color=color, end_color=color, fill_type='solid')


def write_cross_table(ws, table: CrossTable) -> None:
    """
    Write a cross-table to a worksheet.

    Layout:
        Row 1: blank, ranked player names, 'Total'
        Row 2..N+1: player name, one cell per opponent, total
    """
    size = table.size
    ws.cell(row=1, column=1, value='')
    for j, player in enumerate(table.players):
        header = ws.cell(row=1, column=j + 2, value=player.display_name)
        header.font = Font(bold=True)
        header.alignment = CENTERED
    total_header = ws.cell(row=1, column=size + 2, value='Total')
    total_header.font = Font(bold=True)

    for i, player in enumerate(table.players):
        name_cell = ws.cell(row=i + 2, column=1, value=player.display_name)
        name_cell.font = Font(bold=True)
        for j in range(size):
            cell = table.cell(i, j)
            ws_cell = ws.cell(row=i + 2, column=j + 2, value=cell.text)
            ws_cell.fill = _fill(cell.background)
            ws_cell.font = Font(color=cell.foreground.lstrip('#').upper())
            ws_cell.alignment = CENTERED
        ws.cell(row=i + 2, column=size + 2, value=table.totals[i]).alignment = CENTERED


def write_golden_ranking(ws, rows: list[SeasonRow]) -> None:
    """Write the Golden Ranking: rank, player, points, W, L, played."""
    headers = ['Rank', 'Player', 'Points', 'Wins', 'Losses', 'Played']
    for col, header in enumerate(headers, 1):
        ws.cell(row=1, column=col, value=header).font = Font(bold=True)

    for rank, row in enumerate(rows, 1):
        values = [rank, row.player.display_name, row.points, row.wins, row.losses, row.matches_played]
        for col, value in enumerate(values, 1):
            ws.cell(row=rank + 1, column=col, value=value)


def export_workbook(
    output_path: str | Path,
    tables: list[tuple[str, CrossTable]],
    ranking: list[SeasonRow] | None = None,
) -> None:
    """
    Save box tables (one sheet per box) and an optional ranking sheet.

    Args:
        output_path: Path of the .xlsx file to write
        tables: List of (box name, CrossTable), in display order
        ranking: Golden Ranking rows, written to a 'Golden Ranking' sheet
    """
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    taken: set[str] = set()

    for name, table in tables:
        ws = wb.create_sheet(title=sheet_title(name, taken))
        write_cross_table(ws, table)

    if ranking is not None:
        ws = wb.create_sheet(title=sheet_title('Golden Ranking', taken))
        write_golden_ranking(ws, ranking)

    if not wb.sheetnames:
        wb.create_sheet(title='Empty')

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)
    wb.close()
    logger.info('Saved workbook with %d sheets to %s', len(wb.sheetnames), output_path)
