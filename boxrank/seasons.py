"""Season selection helpers."""

from typing import Optional

from .constants import SEASON_STATUS_RUNNING
from .models import Player
from .schemas import Season


def active_seasons(seasons: list[Season]) -> list[Season]:
    """Seasons with status 'running'."""
    return [s for s in seasons if s.status == SEASON_STATUS_RUNNING]


def default_season(seasons: list[Season]) -> Optional[Season]:
    """First running season, else the first season, else None."""
    running = active_seasons(seasons)
    if running:
        return running[0]
    return seasons[0] if seasons else None


def season_for_player(player: Optional[Player], seasons: list[Season]) -> Optional[Season]:
    """Season of the box the player currently belongs to, if any."""
    if player is None or not player.season_id:
        return None
    for season in seasons:
        if season.id == player.season_id:
            return season
    return None
