"""Unit tests for box assembly and season helpers."""

from boxrank.boxes import build_box_snapshots, group_matches_by_box
from boxrank.models import Match, Player
from boxrank.schemas import Box, Season
from boxrank.seasons import active_seasons, default_season, season_for_player

ROSTER = [
    Player('alice', 'Alice', 'Martin'),
    Player('bob', 'Bob', 'Durand'),
    Player('carol', 'Carol', 'Petit'),
    Player('dave', 'Dave', 'Moreau'),
]


class TestBoxAssembly:
    """Tests for splitting a season into box snapshots."""

    def test_group_by_box(self):
        """Test matches are grouped by box and box-less matches dropped."""
        matches = [
            Match('m1', 'alice', 'bob', box_id='b1'),
            Match('m2', 'carol', 'dave', box_id='b2'),
            Match('m3', 'alice', 'carol'),
            Match('m4', 'bob', 'alice', box_id='b1'),
        ]

        grouped = group_matches_by_box(matches)

        assert list(grouped) == ['b1', 'b2']
        assert [m.match_id for m in grouped['b1']] == ['m1', 'm4']

    def test_snapshots_sorted_by_level(self):
        """Test boxes come out by level with players in roster order."""
        boxes = [Box(id='b1', level=2, name='Box 2'), Box(id='b2', level=1, name='Box 1')]
        matches = [
            Match('m1', 'bob', 'alice', score_a=3, score_b=1, box_id='b1'),
            Match('m2', 'dave', 'carol', box_id='b2'),
        ]

        snapshots = build_box_snapshots(matches, ROSTER, boxes)

        assert [s.box.id for s in snapshots] == ['b2', 'b1']
        assert [p.player_id for p in snapshots[1].players] == ['alice', 'bob']
        assert snapshots[1].grid.get(0, 1).match_id == 'm1'

    def test_unknown_box_skipped(self):
        """Test matches for a box missing from the box list are dropped."""
        matches = [Match('m1', 'alice', 'bob', box_id='ghost')]
        assert build_box_snapshots(matches, ROSTER, []) == []

    def test_unknown_player_left_out(self):
        """Test a player missing from the roster does not enter the box."""
        boxes = [Box(id='b1', level=1)]
        matches = [
            Match('m1', 'alice', 'bob', score_a=3, score_b=0, box_id='b1'),
            Match('m2', 'alice', 'zed', score_a=3, score_b=0, box_id='b1'),
        ]

        snapshot = build_box_snapshots(matches, ROSTER, boxes)[0]

        assert [p.player_id for p in snapshot.players] == ['alice', 'bob']
        assert len(snapshot.grid) == 1

    def test_snapshot_cross_table(self):
        """Test a snapshot builds its own ranked table."""
        boxes = [Box(id='b1', level=1)]
        matches = [Match('m1', 'alice', 'bob', score_a=0, score_b=3, box_id='b1')]

        table = build_box_snapshots(matches, ROSTER, boxes)[0].cross_table()

        assert [p.player_id for p in table.players] == ['bob', 'alice']
        assert table.cell(0, 1).text == '3-0'


class TestSeasons:
    """Tests for season selection."""

    SEASONS = [
        Season(id='s1', name='Autumn', status='finished'),
        Season(id='s2', name='Winter', status='running'),
        Season(id='s3', name='Spring', status='running'),
    ]

    def test_active_seasons(self):
        """Test only running seasons are active."""
        assert [s.id for s in active_seasons(self.SEASONS)] == ['s2', 's3']

    def test_default_season(self):
        """Test the first running season wins, else the first season."""
        assert default_season(self.SEASONS).id == 's2'
        assert default_season(self.SEASONS[:1]).id == 's1'
        assert default_season([]) is None

    def test_season_for_player(self):
        """Test the player's box season is looked up."""
        player = Player('alice', season_id='s3')
        assert season_for_player(player, self.SEASONS).id == 's3'
        assert season_for_player(Player('bob'), self.SEASONS) is None
        assert season_for_player(None, self.SEASONS) is None
