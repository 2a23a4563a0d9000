"""Integration tests for end-to-end workflows."""

import json
import sys

import openpyxl
import pytest

from boxrank import build_box_snapshots, compute_golden_ranking, validate_snapshot
from boxrank.excel_export import export_workbook, sheet_title
from boxrank.json_export import save_box_tables, save_golden_ranking
from boxrank.models import Outcome
from boxrank.schemas import SnapshotFile
from boxrank.utils import load_json, load_json_safe


def player(pid, first, last, **extra):
    return {'id': pid, 'first_name': first, 'last_name': last, 'active': True, **extra}


def match(mid, a, b, box='b1', **extra):
    return {
        'id': mid,
        'season_id': 's1',
        'box_id': box,
        'week_number': 1,
        'player_a_id': a,
        'player_b_id': b,
        'status': 'played',
        'running': False,
        **extra,
    }


@pytest.fixture
def snapshot_path(tmp_path):
    """Write a small two-box season snapshot in the club API format."""
    data = {
        'players': [
            player('alice', 'Alice', 'Martin', next_box_status='continue'),
            player('bob', 'Bob', 'Durand'),
            player('carol', 'Carol', 'Petit',
                   current_box={'box_id': 'b1', 'season_id': 's1', 'next_box_status': 'stop'}),
            player('dave', 'Dave', 'Moreau'),
            player('erin', 'Erin', 'Roux'),
            player('frank', 'Frank', 'Blanc'),
            {**player('ghost', 'Gus', 'Host'), 'active': False},
        ],
        'matches': [
            match('m1', 'alice', 'bob', score_a=3, score_b=0, points_a=6, points_b=0,
                  played_at='2025-03-01T19:00:00'),
            match('m2', 'carol', 'alice', score_a=3, score_b=1, points_a=6, points_b=2,
                  played_at='2025-03-08T19:00:00'),
            match('m3', 'bob', 'carol', score_a=3, score_b=0, no_show_player_id='bob',
                  points_a=0, points_b=6, played_at='2025-03-15T19:00:00'),
            match('m4', 'dave', 'erin', box='b2', score_a=2, score_b=3, points_a=4, points_b=6,
                  played_at='2025-03-02T19:00:00'),
            match('m5', 'erin', 'frank', box='b2', scheduled_at='2025-04-02T19:15:00'),
            match('m6', 'frank', 'ghost', box='b2', score_a=3, score_b=0, points_a=6, points_b=0,
                  played_at='2025-03-03T19:00:00'),
        ],
        'boxes': [
            {'id': 'b2', 'season_id': 's1', 'level': 2, 'name': 'Box 2', 'players_count': 3},
            {'id': 'b1', 'season_id': 's1', 'level': 1, 'name': 'Box 1', 'players_count': 3},
        ],
        'seasons': [{'id': 's1', 'name': 'Spring 2025', 'status': 'running'}],
    }
    path = tmp_path / 'snapshot.json'
    with open(path, 'w') as f:
        json.dump(data, f, indent=2)
    return path


@pytest.fixture
def snapshot(snapshot_path):
    return load_json(snapshot_path, schema=SnapshotFile)


class TestSnapshotToTables:
    """Test the flow from an API snapshot to ranked tables."""

    def test_snapshot_models(self, snapshot):
        """Test API records convert to models."""
        players = {p.player_id: p for p in snapshot.player_models()}
        matches = {m.match_id: m for m in snapshot.match_models()}

        assert players['carol'].next_box_status == 'stop'
        assert players['carol'].season_id == 's1'
        assert players['ghost'].active is False
        assert matches['m3'].special_marker == ('no_show', 'bob')
        assert matches['m5'].scheduled_at.hour == 19

    def test_box_tables(self, snapshot):
        """Test both boxes are built in level order with ranked players."""
        boxes = build_box_snapshots(
            snapshot.match_models(), snapshot.player_models(), snapshot.boxes
        )
        assert [b.box.name for b in boxes] == ['Box 1', 'Box 2']

        table = boxes[0].cross_table()
        # alice 6 + 2, carol 6 (m3 is a no-show), bob 0
        assert [p.player_id for p in table.players] == ['alice', 'carol', 'bob']
        assert table.totals == [8, 6, 0]
        assert table.cell(1, 2).outcome == Outcome.NO_SHOW_OPPONENT

    def test_golden_ranking(self, snapshot):
        """Test the season ranking over both boxes."""
        ranking = compute_golden_ranking(
            snapshot.match_models(), snapshot.player_models(), year=2025
        )

        ids = [r.player.player_id for r in ranking]
        # m6 involves an inactive player and is ignored; m5 is unplayed
        assert 'frank' not in ids
        assert 'ghost' not in ids
        assert ids[:3] == ['carol', 'alice', 'erin']

    def test_snapshot_validation(self, snapshot):
        """Test the sample snapshot is consistent."""
        errors, warnings = validate_snapshot(snapshot.player_models(), snapshot.match_models())
        assert errors == []
        assert warnings == []

    def test_invalid_snapshot(self, tmp_path):
        """Test a snapshot with missing required fields is rejected."""
        path = tmp_path / 'bad.json'
        path.write_text(json.dumps({'matches': [{'id': 'm1'}]}))

        with pytest.raises(ValueError):
            load_json(path, schema=SnapshotFile)
        assert load_json_safe(path, default='fallback', schema=SnapshotFile) == 'fallback'


class TestExports:
    """Test JSON and Excel output."""

    def test_json_export(self, snapshot, tmp_path):
        """Test box tables and ranking are written as JSON."""
        boxes = build_box_snapshots(
            snapshot.match_models(), snapshot.player_models(), snapshot.boxes
        )
        tables = [(b.box.model_dump(), b.cross_table()) for b in boxes]
        ranking = compute_golden_ranking(snapshot.match_models(), snapshot.player_models())

        boxes_path = tmp_path / 'out' / 'boxes.json'
        ranking_path = tmp_path / 'out' / 'ranking.json'
        save_box_tables(boxes_path, tables)
        save_golden_ranking(ranking_path, ranking, year=2025)

        data = load_json(boxes_path)
        first = data['boxes'][0]
        assert first['box']['name'] == 'Box 1'
        assert first['rows'][0]['player']['id'] == 'alice'
        assert first['rows'][0]['status_color'] == '#10b981'
        assert first['rows'][0]['cells'][0]['outcome'] is None
        assert first['rows'][0]['cells'][1]['text'] == '1-3'
        assert first['rows'][0]['total'] == 8

        ranked = load_json(ranking_path)
        assert ranked['year'] == 2025
        assert ranked['ranking'][0]['rank'] == 1

    def test_excel_export(self, snapshot, tmp_path):
        """Test the workbook has one sheet per box plus the ranking."""
        boxes = build_box_snapshots(
            snapshot.match_models(), snapshot.player_models(), snapshot.boxes
        )
        tables = [(b.box.name, b.cross_table()) for b in boxes]
        ranking = compute_golden_ranking(snapshot.match_models(), snapshot.player_models())

        path = tmp_path / 'boxes.xlsx'
        export_workbook(path, tables, ranking)

        wb = openpyxl.load_workbook(path)
        assert wb.sheetnames == ['Box 1', 'Box 2', 'Golden Ranking']
        ws = wb['Box 1']
        assert ws.cell(row=1, column=2).value == 'Alice Martin'
        assert ws.cell(row=2, column=3).value == '1-3'
        assert ws.cell(row=2, column=5).value == 8
        assert ws.cell(row=2, column=3).fill.start_color.rgb.endswith('F8D7DA')
        assert wb['Golden Ranking'].cell(row=2, column=2).value == 'Carol Petit'
        wb.close()

    def test_sheet_titles(self):
        """Test sheet titles are cleaned and made unique."""
        taken = set()
        assert sheet_title('Box 1/A', taken) == 'Box 1_A'
        assert sheet_title('Box 1/A', taken) == 'Box 1_A (2)'
        assert len(sheet_title('x' * 40, taken)) == 31


class TestCommandLine:
    """Test the build_standings script."""

    def test_main_writes_outputs(self, snapshot_path, tmp_path, monkeypatch, capsys):
        """Test the CLI builds every output from a snapshot."""
        import build_standings

        out = tmp_path / 'boxes.json'
        ranking_out = tmp_path / 'ranking.json'
        excel_out = tmp_path / 'boxes.xlsx'
        monkeypatch.setattr(sys, 'argv', [
            'build_standings.py',
            '--snapshot', str(snapshot_path),
            '--year', '2025',
            '--output', str(out),
            '--ranking-output', str(ranking_out),
            '--excel', str(excel_out),
        ])

        build_standings.main()

        printed = capsys.readouterr().out
        assert 'GOLDEN RANKING 2025' in printed
        assert 'Alice Martin' in printed
        assert out.exists() and ranking_out.exists() and excel_out.exists()

    def test_main_missing_snapshot(self, tmp_path, monkeypatch, caplog):
        """Test a missing snapshot is logged and exits with an error."""
        import build_standings

        monkeypatch.setattr(sys, 'argv', ['build_standings.py', '--snapshot', str(tmp_path / 'x.json')])
        with pytest.raises(SystemExit) as exc:
            build_standings.main()
        assert exc.value.code == 1
        assert any(
            r.name == 'boxrank.cli' and 'Snapshot file not found' in r.getMessage()
            for r in caplog.records
        )
