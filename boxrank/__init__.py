from .models import (
    CrossTable,
    CrossTableCell,
    Match,
    Outcome,
    Player,
    ResolvedOutcome,
    SeasonRow,
    StandingRow,
)
from .scoring import calculate_points, match_points_for
from .outcomes import (
    format_match_score,
    format_scheduled,
    is_special_case,
    next_box_status_color,
    resolve_outcome,
)
from .standings import compute_box_standings, rank_box_rows, rank_box_standings
from .cross_table import MatchGrid, PairKey, build_cross_table
from .season_ranking import available_years, compute_golden_ranking
from .boxes import BoxSnapshot, build_box_snapshots, group_matches_by_box
from .seasons import active_seasons, default_season, season_for_player
from .validators import validate_match, validate_snapshot

__all__ = [
    # Models
    'CrossTable',
    'CrossTableCell',
    'Match',
    'Outcome',
    'Player',
    'ResolvedOutcome',
    'SeasonRow',
    'StandingRow',
    # Points
    'calculate_points',
    'match_points_for',
    # Outcomes
    'format_match_score',
    'format_scheduled',
    'is_special_case',
    'next_box_status_color',
    'resolve_outcome',
    # Box standings
    'compute_box_standings',
    'rank_box_rows',
    'rank_box_standings',
    'MatchGrid',
    'PairKey',
    'build_cross_table',
    'BoxSnapshot',
    'build_box_snapshots',
    'group_matches_by_box',
    # Golden Ranking
    'available_years',
    'compute_golden_ranking',
    # Seasons
    'active_seasons',
    'default_season',
    'season_for_player',
    # Validation
    'validate_match',
    'validate_snapshot',
]
