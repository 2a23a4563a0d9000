"""Per-player totals and ranking for a single box."""

import logging
from typing import Any, Callable, Iterable, Optional

from .config import get_config
from .models import Match, Outcome, Player, StandingRow
from .outcomes import resolve_outcome
from .schemas import StandingsConfig
from .scoring import match_points_for

logger = logging.getLogger('boxrank.standings')

TieBreak = Callable[[StandingRow], Any]


def compute_box_standings(
    players: list[Player],
    matches: Iterable[Match],
    config: Optional[StandingsConfig] = None,
) -> list[StandingRow]:
    """
    Fold box matches into one StandingRow per player, in input order.

    Points come from the set score seen from each player's side. Special-case
    matches earn no points but still count as played; wins and losses only
    come from normally completed matches. When a pair has several matches
    only the last one counts, the same rule MatchGrid applies.

    Args:
        players: Players of the box, in input order
        matches: Matches among those players
        config: Scoring settings (default: get_config())

    Returns:
        List of StandingRow aligned with players
    """
    config = config or get_config()
    rows = [StandingRow(player=p) for p in players]
    row_by_id = {row.player.player_id: row for row in rows}

    # One match per pair; a later record replaces an earlier one
    by_pair: dict[frozenset[str], Match] = {}
    for match in matches:
        if match.player_a_id not in row_by_id or match.player_b_id not in row_by_id:
            logger.warning(
                'Skipping match %s: participant not in box (%s vs %s)',
                match.match_id, match.player_a_id, match.player_b_id,
            )
            continue
        if match.player_a_id == match.player_b_id:
            logger.warning('Skipping match %s: player faces themselves', match.match_id)
            continue
        pair = frozenset(match.participants)
        if pair in by_pair:
            logger.warning(
                'Match %s replaces %s for %s vs %s',
                match.match_id, by_pair[pair].match_id, match.player_a_id, match.player_b_id,
            )
        by_pair[pair] = match

    for match in by_pair.values():
        for player_id in match.participants:
            row = row_by_id[player_id]
            outcome = resolve_outcome(match, player_id, config).outcome
            row.points += match_points_for(match, player_id, config.points_per_set)
            if outcome == Outcome.NORMAL_WIN:
                row.matches_played += 1
                row.wins += 1
            elif outcome == Outcome.NORMAL_LOSS:
                row.matches_played += 1
                row.losses += 1
            elif outcome.is_special:
                row.matches_played += 1

    return rows


def rank_order(rows: list[StandingRow], tie_break: Optional[TieBreak] = None) -> list[int]:
    """
    Input indices of rows in ranked order.

    Points descending. Equal points keep their input order unless a
    tie_break key is given, in which case larger keys rank first.
    """
    if tie_break is None:
        return sorted(range(len(rows)), key=lambda i: -rows[i].points)
    # Two passes keep the sort stable for rows equal on both keys
    by_tie_break = sorted(range(len(rows)), key=lambda i: tie_break(rows[i]), reverse=True)
    return sorted(by_tie_break, key=lambda i: -rows[i].points)


def rank_box_rows(rows: list[StandingRow], tie_break: Optional[TieBreak] = None) -> list[StandingRow]:
    """Sort rows by points descending, stable for equal points."""
    return [rows[i] for i in rank_order(rows, tie_break)]


def rank_box_standings(
    players: list[Player],
    matches: Iterable[Match],
    config: Optional[StandingsConfig] = None,
    tie_break: Optional[TieBreak] = None,
) -> list[StandingRow]:
    """Compute and rank box standings in one call."""
    return rank_box_rows(compute_box_standings(players, matches, config), tie_break)
