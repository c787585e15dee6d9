"""Tests for the Excel season backup."""

import openpyxl
import pytest

from golfleague.context import LeagueContext
from golfleague.excel_export import (
    SCORES_HEADER,
    STANDINGS_HEADER,
    export_scores_workbook,
    score_rows,
)


@pytest.fixture
def season(league_doc, match_doc, full_scores):
    """One committed match and one still pending."""
    committed = {
        **match_doc,
        'status': 'committed',
        'scores': full_scores,
        'result': {'team1Id': 't1', 'team2Id': 't2', 'pts1': 15.0, 'pts2': 5.0},
    }
    pending = {
        **match_doc,
        'team1Id': 't3',
        'team2Id': 't4',
        'status': 'pending',
        'scores': {'p5': [5] * 9},
    }
    return LeagueContext.from_documents(league_doc, {'w1_m0': committed, 'w1_m1': pending})


class TestScoreRows:
    """Tests for score_rows."""

    def test_committed_only(self, season):
        rows = score_rows(season)
        assert len(rows) == 4
        assert rows[0] == [1, '2026-05-05', 'Alice', 'Birdie Brigade', 36, 'front']

    def test_unrostered_player(self, season):
        season.matches['w1_m0'].scores['p99'] = [6] * 9
        row = score_rows(season)[-1]
        assert row[2:5] == ['p99', '', 54]


class TestExportWorkbook:
    """Tests for export_scores_workbook."""

    def test_sheets(self, season, tmp_path):
        path = export_scores_workbook(season, tmp_path / 'backup' / 'season.xlsx')
        assert path.exists()

        wb = openpyxl.load_workbook(path)
        assert wb.sheetnames == ['Scores', 'Standings']

        scores = wb['Scores']
        assert [c.value for c in scores[1]] == SCORES_HEADER
        assert scores['A1'].font.bold
        assert scores.freeze_panes == 'A2'
        assert scores.max_row == 5

        standings = wb['Standings']
        assert [c.value for c in standings[1]] == STANDINGS_HEADER
        assert [c.value for c in standings[2]] == [1, 'Birdie Brigade', 15, 1, 0, 0, 1]
        assert standings.max_row == 5
        wb.close()
