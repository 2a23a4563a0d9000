"""
Round-robin cross-table for one box.

The upstream layer hands matches over keyed by an ordered pair of player
positions, and a pair may have been recorded in either direction. MatchGrid
stores each match once under a canonical unordered PairKey together with the
orientation it was recorded in, so lookups work for both (i, j) and (j, i).

Building a table ranks the players, then relabels the grid through the
ranking permutation. Relabeling only moves a match to new coordinates; it
never changes which two players the match connects.
"""

import logging
from collections.abc import Iterator, Mapping
from typing import NamedTuple, Optional, Union

from .config import get_config
from .constants import DIAGONAL_TEXT
from .models import CrossTable, CrossTableCell, Match, Player, ResolvedOutcome
from .outcomes import resolve_outcome, unplayed_outcome
from .schemas import StandingsConfig
from .standings import TieBreak, compute_box_standings, rank_order

logger = logging.getLogger('boxrank.cross_table')


class PairKey(NamedTuple):
    """Unordered pair of player positions, stored as (low, high)."""

    low: int
    high: int

    @classmethod
    def of(cls, i: int, j: int) -> tuple['PairKey', bool]:
        """
        Canonical key for positions i and j.

        Returns:
            (key, flipped) where flipped is True when (i, j) is (high, low)

        Raises:
            ValueError: If i == j
        """
        if i == j:
            raise ValueError(f'A player cannot face themselves (position {i})')
        if i < j:
            return cls(i, j), False
        return cls(j, i), True


class MatchGrid:
    """Matches of a box keyed by unordered position pairs."""

    def __init__(self, size: int):
        self.size = size
        self._entries: dict[PairKey, tuple[Match, bool]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[int, int, Match]]:
        """Yield (i, j, match) in the orientation each match was recorded."""
        for key, (match, flipped) in self._entries.items():
            if flipped:
                yield key.high, key.low, match
            else:
                yield key.low, key.high, match

    def add(self, i: int, j: int, match: Match) -> bool:
        """
        Record match at positions (i, j).

        Diagonal and out-of-range positions are skipped and logged.

        Returns:
            True if the match was recorded
        """
        if not (0 <= i < self.size and 0 <= j < self.size):
            logger.warning(
                'Skipping match %s at (%d, %d): outside a box of %d players',
                match.match_id, i, j, self.size,
            )
            return False
        if i == j:
            logger.warning('Skipping match %s at (%d, %d): self pair', match.match_id, i, j)
            return False

        key, flipped = PairKey.of(i, j)
        if key in self._entries:
            logger.warning(
                'Match %s replaces %s for pair %s',
                match.match_id, self._entries[key][0].match_id, tuple(key),
            )
        self._entries[key] = (match, flipped)
        return True

    def lookup(self, i: int, j: int) -> Optional[tuple[Match, bool]]:
        """
        Find the match between positions i and j in either orientation.

        Returns:
            (match, reversed) where reversed is True if it was recorded as
            (j, i), or None if there is no match for the pair
        """
        if i == j:
            return None
        key, flipped = PairKey.of(i, j)
        entry = self._entries.get(key)
        if entry is None:
            return None
        match, stored_flipped = entry
        return match, stored_flipped != flipped

    def get(self, i: int, j: int) -> Optional[Match]:
        entry = self.lookup(i, j)
        return entry[0] if entry else None

    def matches(self) -> list[Match]:
        return [match for match, _ in self._entries.values()]

    def relabel(self, permutation: list[int]) -> 'MatchGrid':
        """
        Move every match to new positions.

        Args:
            permutation: permutation[old_position] = new_position

        Returns:
            New MatchGrid; the original is left untouched
        """
        if sorted(permutation) != list(range(self.size)):
            raise ValueError(f'Not a permutation of {self.size} positions: {permutation}')

        relabeled = MatchGrid(self.size)
        for i, j, match in self:
            relabeled.add(permutation[i], permutation[j], match)
        return relabeled

    def placed(self, players: list[Player]) -> 'MatchGrid':
        """
        Copy of the grid keeping only matches stored at their own players' positions.

        A match whose participants are not the two players at its positions is
        logged and dropped, so it reaches neither the cells nor the totals.
        """
        if len(players) != self.size:
            raise ValueError(f'Grid is sized for {self.size} players but the box has {len(players)}')

        kept = MatchGrid(self.size)
        for i, j, match in self:
            at_positions = {players[i].player_id, players[j].player_id}
            if set(match.participants) != at_positions:
                logger.warning(
                    'Skipping match %s at (%d, %d): it is not between %s',
                    match.match_id, i, j, ' and '.join(sorted(at_positions)),
                )
                continue
            kept.add(i, j, match)
        return kept

    @classmethod
    def from_positions(cls, size: int, matches: Mapping[tuple[int, int], Match]) -> 'MatchGrid':
        """Build from the upstream {(position_a, position_b): match} convention."""
        grid = cls(size)
        for (i, j), match in matches.items():
            grid.add(i, j, match)
        return grid

    @classmethod
    def from_matches(cls, players: list[Player], matches: list[Match]) -> 'MatchGrid':
        """Build from a flat match list, locating players by id."""
        positions = {p.player_id: index for index, p in enumerate(players)}
        grid = cls(len(players))
        for match in matches:
            i = positions.get(match.player_a_id)
            j = positions.get(match.player_b_id)
            if i is None or j is None:
                logger.warning(
                    'Skipping match %s: participant not in box (%s vs %s)',
                    match.match_id, match.player_a_id, match.player_b_id,
                )
                continue
            grid.add(i, j, match)
        return grid


MatchSource = Union[MatchGrid, Mapping[tuple[int, int], Match], list[Match]]


def _as_grid(players: list[Player], matches: MatchSource) -> MatchGrid:
    if isinstance(matches, MatchGrid):
        grid = matches
    elif isinstance(matches, Mapping):
        grid = MatchGrid.from_positions(len(players), matches)
    else:
        grid = MatchGrid.from_matches(players, list(matches))
    return grid.placed(players)


def _cell(resolved: ResolvedOutcome, match: Optional[Match] = None) -> CrossTableCell:
    return CrossTableCell(
        text=resolved.text,
        background=resolved.background,
        foreground=resolved.foreground,
        outcome=resolved.outcome,
        match_id=match.match_id if match else None,
        label=resolved.label,
    )


def build_cross_table(
    players: list[Player],
    matches: MatchSource,
    config: Optional[StandingsConfig] = None,
    tie_break: Optional[TieBreak] = None,
) -> CrossTable:
    """
    Build the ranked N x N result grid for a box.

    Steps:
        1. Standings per player in input order
        2. Stable sort by points, giving the permutation input -> ranked
        3. Relabel the match grid into ranked positions
        4. Resolve every off-diagonal cell from the row player's perspective
        5. Fill the diagonal with the self placeholder

    Matches that cannot be placed (unknown player, self pair, or positions
    whose players are not the ones in the match) are logged and dropped
    before ranking, so they count in no total and their cells show as unplayed.

    Args:
        players: Box players in input order
        matches: MatchGrid, {(position_a, position_b): match} mapping, or match list
        config: Scoring and display settings (default: get_config())
        tie_break: Optional key refining order for equal points

    Returns:
        CrossTable in ranked coordinates with per-row totals
    """
    config = config or get_config()
    grid = _as_grid(players, matches)

    rows = compute_box_standings(players, grid.matches(), config)
    ranked = rank_order(rows, tie_break)
    original_to_ranked = [0] * len(players)
    for new_index, old_index in enumerate(ranked):
        original_to_ranked[old_index] = new_index

    ranked_grid = grid.relabel(original_to_ranked)
    ranked_players = [players[i] for i in ranked]

    diagonal = CrossTableCell(
        text=DIAGONAL_TEXT,
        background=config.diagonal.background,
        foreground=config.diagonal.foreground,
    )
    placeholder = _cell(unplayed_outcome(config))

    cells: dict[tuple[int, int], CrossTableCell] = {}
    for i, row_player in enumerate(ranked_players):
        for j in range(len(ranked_players)):
            if i == j:
                cells[(i, j)] = diagonal
                continue
            match = ranked_grid.get(i, j)
            if match is None:
                cells[(i, j)] = placeholder
                continue
            cells[(i, j)] = _cell(resolve_outcome(match, row_player.player_id, config), match)

    logger.debug('Built %dx%d cross-table from %d matches', len(players), len(players), len(grid))

    return CrossTable(
        players=ranked_players,
        rows=[rows[i] for i in ranked],
        original_to_ranked=original_to_ranked,
        cells=cells,
    )
