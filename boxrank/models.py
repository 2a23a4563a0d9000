"""Data models for box standings and season rankings."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .constants import MARKER_PRIORITY


@dataclass(frozen=True)
class Player:
    """A club player as seen by one aggregation pass."""
    player_id: str
    first_name: str = ''
    last_name: str = ''
    picture_url: Optional[str] = None
    next_box_status: Optional[str] = None  # 'continue', 'stop' or other
    active: bool = True
    box_id: Optional[str] = None
    season_id: Optional[str] = None
    membership_rank: Optional[int] = None

    @property
    def display_name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip() or self.player_id

    @property
    def initials(self) -> str:
        return f'{self.first_name[:1]}{self.last_name[:1]}'.upper()


@dataclass(frozen=True)
class Match:
    """
    A match between two players.

    Player A / player B order is positional bookkeeping only. At most one of
    the three markers is expected to be set; each names the player who
    triggered the special case.
    """
    match_id: str
    player_a_id: str
    player_b_id: str
    score_a: Optional[int] = None
    score_b: Optional[int] = None
    points_a: Optional[float] = None
    points_b: Optional[float] = None
    scheduled_at: Optional[datetime] = None
    played_at: Optional[datetime] = None
    box_id: Optional[str] = None
    season_id: Optional[str] = None
    week_number: Optional[int] = None
    no_show_player_id: Optional[str] = None
    retired_player_id: Optional[str] = None
    delayed_player_id: Optional[str] = None

    @property
    def participants(self) -> Tuple[str, str]:
        return (self.player_a_id, self.player_b_id)

    def involves(self, player_id: str) -> bool:
        return player_id in self.participants

    def opponent_of(self, player_id: str) -> str:
        if player_id == self.player_a_id:
            return self.player_b_id
        if player_id == self.player_b_id:
            return self.player_a_id
        raise ValueError(f'Player {player_id} does not play in match {self.match_id}')

    @property
    def has_score(self) -> bool:
        """True for a usable set score. 0-0 means the match was not played yet."""
        if self.score_a is None or self.score_b is None:
            return False
        if self.score_a < 0 or self.score_b < 0:
            return False
        return not (self.score_a == 0 and self.score_b == 0)

    @property
    def has_points(self) -> bool:
        return self.points_a is not None or self.points_b is not None

    @property
    def markers(self) -> Dict[str, str]:
        """All set markers as kind -> player_id."""
        values = {
            'no_show': self.no_show_player_id,
            'retired': self.retired_player_id,
            'delayed': self.delayed_player_id,
        }
        return {kind: pid for kind, pid in values.items() if pid}

    @property
    def special_marker(self) -> Optional[Tuple[str, str]]:
        """The authoritative marker as (kind, player_id), or None."""
        markers = self.markers
        for kind in MARKER_PRIORITY:
            if kind in markers:
                return kind, markers[kind]
        return None

    @property
    def is_special_case(self) -> bool:
        return self.special_marker is not None

    def sets_for(self, player_id: str) -> Tuple[int, int]:
        """Return (my_sets, opponent_sets) from player_id's side."""
        score_a = self.score_a or 0
        score_b = self.score_b or 0
        if player_id == self.player_a_id:
            return score_a, score_b
        if player_id == self.player_b_id:
            return score_b, score_a
        raise ValueError(f'Player {player_id} does not play in match {self.match_id}')

    def points_for(self, player_id: str) -> Tuple[float, float]:
        """Return (my_points, opponent_points) from the precomputed fields."""
        points_a = self.points_a or 0
        points_b = self.points_b or 0
        if player_id == self.player_a_id:
            return points_a, points_b
        if player_id == self.player_b_id:
            return points_b, points_a
        raise ValueError(f'Player {player_id} does not play in match {self.match_id}')

    @property
    def event_time(self) -> Optional[datetime]:
        return self.played_at or self.scheduled_at


class Outcome(Enum):
    """Result of a match seen from one participant."""

    NORMAL_WIN = 'normal-win'
    NORMAL_LOSS = 'normal-loss'
    NO_SHOW_SELF = 'no-show-self'
    NO_SHOW_OPPONENT = 'no-show-opponent'
    RETIRED_SELF = 'retired-self'
    RETIRED_OPPONENT = 'retired-opponent'
    POSTPONED_SELF = 'postponed-self'
    POSTPONED_OPPONENT = 'postponed-opponent'
    SCHEDULED_PENDING = 'scheduled-pending'
    UNPLAYED = 'unplayed'

    @property
    def is_normal(self) -> bool:
        return self in (Outcome.NORMAL_WIN, Outcome.NORMAL_LOSS)

    @property
    def is_special(self) -> bool:
        return self in SPECIAL_OUTCOMES.values()

    @classmethod
    def special(cls, kind: str, is_self: bool) -> 'Outcome':
        return SPECIAL_OUTCOMES[(kind, is_self)]


SPECIAL_OUTCOMES = {
    ('no_show', True): Outcome.NO_SHOW_SELF,
    ('no_show', False): Outcome.NO_SHOW_OPPONENT,
    ('retired', True): Outcome.RETIRED_SELF,
    ('retired', False): Outcome.RETIRED_OPPONENT,
    ('delayed', True): Outcome.POSTPONED_SELF,
    ('delayed', False): Outcome.POSTPONED_OPPONENT,
}


@dataclass(frozen=True)
class ResolvedOutcome:
    """Outcome plus what to display for it."""
    outcome: Outcome
    text: str
    background: str
    foreground: str
    label: Optional[str] = None


@dataclass
class StandingRow:
    """Per-player totals for one aggregation pass."""
    player: Player
    points: float = 0
    matches_played: int = 0
    wins: int = 0
    losses: int = 0


@dataclass
class SeasonRow:
    """Golden Ranking entry for one player."""
    player: Player
    points: float = 0
    matches_played: int = 0
    wins: int = 0
    losses: int = 0


@dataclass(frozen=True)
class CrossTableCell:
    """One rendered cell of a box cross-table."""
    text: str
    background: str
    foreground: str
    outcome: Optional[Outcome] = None  # None on the diagonal
    match_id: Optional[str] = None
    label: Optional[str] = None

    @property
    def is_diagonal(self) -> bool:
        return self.outcome is None


@dataclass
class CrossTable:
    """
    Round-robin grid for one box in ranked order.

    All coordinates are positions in the ranked order, never input order.
    """
    players: List[Player]
    rows: List[StandingRow]
    original_to_ranked: List[int]
    cells: Dict[Tuple[int, int], CrossTableCell] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return len(self.players)

    @property
    def totals(self) -> List[float]:
        return [row.points for row in self.rows]

    def cell(self, row: int, column: int) -> CrossTableCell:
        return self.cells[(row, column)]

    def row_cells(self, row: int) -> List[CrossTableCell]:
        return [self.cells[(row, column)] for column in range(self.size)]

    def ranked_index_of(self, player_id: str) -> int:
        for index, player in enumerate(self.players):
            if player.player_id == player_id:
                return index
        raise KeyError(player_id)
