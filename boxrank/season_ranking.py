"""Golden Ranking: season-wide points ranking across all boxes."""

import logging
from typing import Iterable, Optional

from .models import Match, Outcome, Player, SeasonRow
from .outcomes import resolve_outcome

logger = logging.getLogger('boxrank.season_ranking')


def _in_period(match: Match, year: Optional[int], season_id: Optional[str]) -> bool:
    if season_id is not None and match.season_id != season_id:
        return False
    if year is not None:
        when = match.event_time
        if when is None or when.year != year:
            return False
    return True


def _counts_for_ranking(match: Match) -> bool:
    """A match counts once it has a set score or finalized points."""
    return match.has_score or match.has_points


def _is_win(match: Match, player_id: str) -> bool:
    outcome = resolve_outcome(match, player_id).outcome
    if outcome.is_normal:
        return outcome == Outcome.NORMAL_WIN
    # Special-case or unscored matches are decided on upstream points
    mine, theirs = match.points_for(player_id)
    return mine > theirs


def season_sort_key(row: SeasonRow) -> tuple[float, int, int]:
    """Points, then wins, then matches played, all descending."""
    return (-row.points, -row.wins, -row.matches_played)


def compute_golden_ranking(
    matches: Iterable[Match],
    roster: list[Player],
    year: Optional[int] = None,
    season_id: Optional[str] = None,
) -> list[SeasonRow]:
    """
    Rank active players over every match of a period, whatever their box.

    Points are taken from the precomputed points_a / points_b fields, never
    re-derived from set scores. A match where either player is not on the
    active roster is skipped entirely. Players without a counted match are
    left out of the result.

    Sort order (descending):
        1. Total points
        2. Wins
        3. Matches played
        4. Roster order

    Args:
        matches: All fetched matches
        roster: Players; inactive ones are ignored
        year: Only count matches played (or scheduled) in this year
        season_id: Only count matches of this season

    Returns:
        Ranked list of SeasonRow
    """
    stats: dict[str, SeasonRow] = {}
    for player in roster:
        if player.active and player.player_id not in stats:
            stats[player.player_id] = SeasonRow(player=player)

    skipped = 0
    for match in matches:
        if not _in_period(match, year, season_id):
            continue
        row_a = stats.get(match.player_a_id)
        row_b = stats.get(match.player_b_id)
        if row_a is None or row_b is None or row_a is row_b:
            skipped += 1
            continue
        if not _counts_for_ranking(match):
            continue

        for row in (row_a, row_b):
            player_id = row.player.player_id
            mine, _ = match.points_for(player_id)
            row.points += mine
            row.matches_played += 1
            if _is_win(match, player_id):
                row.wins += 1
            else:
                row.losses += 1

    if skipped:
        logger.info('Skipped %d matches outside the active roster or against oneself', skipped)

    ranked = [row for row in stats.values() if row.matches_played > 0]
    return sorted(ranked, key=season_sort_key)


def available_years(current_year: int, span: int = 5) -> list[int]:
    """Years offered for the ranking, newest first (current - span .. current + 1)."""
    return list(range(current_year + 1, current_year - span - 1, -1))
