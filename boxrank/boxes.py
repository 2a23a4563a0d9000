"""Assemble per-box snapshots from a flat list of season matches."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Optional

from .cross_table import MatchGrid, build_cross_table
from .models import CrossTable, Match, Player
from .schemas import Box, StandingsConfig

logger = logging.getLogger('boxrank.boxes')


@dataclass
class BoxSnapshot:
    """Players and matches of one box, ready for a cross-table build."""
    box: Box
    players: list[Player]
    grid: MatchGrid

    def cross_table(self, config: Optional[StandingsConfig] = None) -> CrossTable:
        return build_cross_table(self.players, self.grid, config)


def group_matches_by_box(matches: list[Match]) -> dict[str, list[Match]]:
    """Group matches by box id, keeping first-seen box order. Matches without a box are dropped."""
    grouped: dict[str, list[Match]] = defaultdict(list)
    for match in matches:
        if not match.box_id:
            logger.debug('Match %s has no box', match.match_id)
            continue
        grouped[match.box_id].append(match)
    return dict(grouped)


def build_box_snapshots(
    matches: list[Match],
    players: list[Player],
    boxes: list[Box],
) -> list[BoxSnapshot]:
    """
    Build one BoxSnapshot per box that has matches.

    Box players are the roster players appearing in the box's matches, in
    roster order. Boxes unknown to the box list are skipped. The result is
    sorted by box level.

    Args:
        matches: Matches of the season
        players: Player roster
        boxes: Boxes of the season

    Returns:
        List of BoxSnapshot sorted by level
    """
    box_by_id = {box.id: box for box in boxes}
    snapshots = []

    for box_id, box_matches in group_matches_by_box(matches).items():
        box = box_by_id.get(box_id)
        if box is None:
            logger.warning('Skipping %d matches for unknown box %s', len(box_matches), box_id)
            continue

        player_ids = set()
        for match in box_matches:
            player_ids.update(match.participants)

        box_players = [p for p in players if p.player_id in player_ids]
        missing = player_ids - {p.player_id for p in box_players}
        if missing:
            logger.warning('Box %s references unknown players: %s', box.name or box_id, sorted(missing))

        grid = MatchGrid.from_matches(box_players, box_matches)
        snapshots.append(BoxSnapshot(box=box, players=box_players, grid=grid))

    snapshots.sort(key=lambda s: s.box.level)
    return snapshots
