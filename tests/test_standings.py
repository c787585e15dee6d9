"""Tests for standings, player stats and leaderboards."""

import pytest

from conftest import make_round
from golfleague.schemas import Match, Team
from golfleague.standings import calc_player_stats, calc_standings, stat_leaderboard


def committed(key, week, team1, team2, pts1, pts2, status='committed', scores=None):
    return Match.model_validate({
        'key': key,
        'week': week,
        'team1Id': team1,
        'team2Id': team2,
        'status': status,
        'scores': scores or {},
        'result': {'team1Id': team1, 'team2Id': team2, 'pts1': pts1, 'pts2': pts2},
    })


@pytest.fixture
def teams():
    return [Team(id='t1', name='A'), Team(id='t2', name='B'), Team(id='t3', name='C')]


class TestCalcStandings:
    """Tests for calc_standings."""

    def test_single_result(self, teams):
        standings = calc_standings([committed('w1_m0', 1, 't1', 't2', 5.5, 3.5)], teams)
        by_id = {s.team_id: s for s in standings}
        assert (by_id['t1'].pts, by_id['t1'].wins, by_id['t1'].played) == (5.5, 1, 1)
        assert (by_id['t2'].pts, by_id['t2'].losses, by_id['t2'].played) == (3.5, 1, 1)
        assert [s.team_id for s in standings] == ['t1', 't2', 't3']

    def test_ties_counted(self, teams):
        standings = calc_standings([committed('w1_m0', 1, 't1', 't2', 10, 10)], teams)
        assert all(s.ties == 1 for s in standings[:2])

    @pytest.mark.parametrize('status', ['draft', 'pending', 'disputed', 'escalated'])
    def test_uncommitted_ignored(self, teams, status):
        standings = calc_standings([committed('w1_m0', 1, 't1', 't2', 10, 0, status=status)], teams)
        assert all(s.played == 0 and s.pts == 0 for s in standings)

    def test_sort_by_points_then_wins(self, teams):
        matches = {
            'w1_m0': committed('w1_m0', 1, 't1', 't2', 10, 10),
            'w2_m0': committed('w2_m0', 2, 't3', 't1', 12, 8),
            'w3_m0': committed('w3_m0', 3, 't2', 't3', 11, 9),
        }
        # t1 18 (0 wins), t2 21 (1 win), t3 21 (1 win)
        standings = calc_standings(matches, teams)
        assert [s.team_id for s in standings] == ['t2', 't3', 't1']

    def test_full_tie_keeps_team_order(self, teams):
        standings = calc_standings([], teams)
        assert [s.team_id for s in standings] == ['t1', 't2', 't3']

    def test_unknown_team_ignored(self, teams):
        standings = calc_standings([committed('w1_m0', 1, 't1', 'tx', 12, 8)], teams)
        assert standings[0].pts == 12
        assert len(standings) == 3


class TestPlayerStats:
    """Tests for calc_player_stats."""

    def test_scoring_history(self, config):
        rounds = {'p1': [make_round('p1', '2026-05-05', 40), make_round('p1', '2026-05-12', 44)]}
        stats = {s.player_id: s for s in calc_player_stats(config, {}, rounds)}
        assert stats['p1'].rounds_played == 2
        assert stats['p1'].scoring_avg == 42
        assert stats['p1'].low_round == 40
        assert stats['p2'].rounds_played == 0

    def test_hole_buckets(self, config):
        """Par 4 holes: 2 eagle, 3 birdie, 4 par, 5 bogey, 6+ double, 0 unplayed."""
        scores = {'p1': [2, 3, 4, 5, 6, 7, 4, 0, 4]}
        match = committed('w1_m0', 1, 't1', 't2', 12, 8, scores=scores)
        p1 = calc_player_stats(config, [match], {})[0]
        assert (p1.eagles, p1.birdies, p1.pars, p1.bogeys, p1.doubles) == (1, 1, 3, 1, 2)
        assert p1.holes_played == 8

    def test_team_record(self, config):
        matches = [
            committed('w1_m0', 1, 't1', 't2', 12, 8),
            committed('w2_m0', 2, 't3', 't1', 11, 9),
            committed('w3_m0', 3, 't1', 't4', 14, 6, status='pending'),
        ]
        stats = {s.player_id: s for s in calc_player_stats(config, matches, {})}
        p2 = stats['p2']
        assert (p2.match_wins, p2.match_losses, p2.match_ties) == (1, 1, 0)
        assert p2.match_pts == 21
        assert p2.win_pct == 0.5
        assert stats['p7'].win_pct == 0.0


class TestLeaderboard:
    """Tests for stat_leaderboard."""

    @pytest.fixture
    def stats(self, config):
        rounds = {
            'p1': [make_round('p1', '2026-05-05', 40), make_round('p1', '2026-05-12', 42)],
            'p2': [make_round('p2', '2026-05-05', 38)],
            'p3': [make_round('p3', '2026-05-05', 45), make_round('p3', '2026-05-12', 47)],
        }
        return calc_player_stats(config, {}, rounds)

    def test_scoring_avg_ascending(self, stats):
        board = stat_leaderboard(stats, 'scoring_avg')
        assert [s.player_id for s in board] == ['p2', 'p1', 'p3']

    def test_players_without_rounds_excluded(self, stats):
        assert len(stat_leaderboard(stats, 'rounds_played')) == 3

    def test_min_rounds_and_limit(self, stats):
        board = stat_leaderboard(stats, 'scoring_avg', min_rounds=2, limit=1)
        assert [s.player_id for s in board] == ['p1']

    def test_callable_key(self, stats):
        board = stat_leaderboard(stats, lambda s: s.low_round, descending=True)
        assert board[0].player_id == 'p3'
