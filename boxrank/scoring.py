"""Ranking points for box matches."""

from typing import Optional

from .constants import POINTS_PER_SET
from .models import Match


def calculate_points(sets_won: int, sets_lost: int = 0, points_per_set: int = POINTS_PER_SET) -> int:
    """
    Convert a set score into ranking points for the player who won sets_won.

    Scoring:
        - Sets won: points_per_set each (2 by default)
        - Sets lost: nothing

    A 3-1 result gives the winner 6 points and nothing for the lost set;
    the loser still earns 2 for the one set they took.

    Args:
        sets_won: Sets won by the player being scored
        sets_lost: Sets won by the opponent (unused, kept for symmetry)
        points_per_set: Points per set won
    """
    return sets_won * points_per_set


def match_points_for(match: Match, player_id: str, points_per_set: Optional[int] = None) -> int:
    """
    Points earned by player_id in a box match.

    Special-case matches and matches without a usable score earn nothing,
    even when a stale score is still attached.
    """
    if match.is_special_case or not match.has_score:
        return 0
    if points_per_set is None:
        points_per_set = POINTS_PER_SET
    mine, theirs = match.sets_for(player_id)
    return calculate_points(mine, theirs, points_per_set)
