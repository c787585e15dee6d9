"""Unit tests for the handicap engine."""

import pytest

from conftest import make_holes, make_round
from golfleague.handicap import (
    assign_hilo,
    calc_hcp,
    calc_hcp_adj,
    calc_seed_hcp,
    drop_outliers,
    most_recent,
    split_hilo,
)
from golfleague.schemas import LeagueConfig, Player, Team


def league(**overrides):
    """Config on a par-36 front nine with the given top-level overrides."""
    doc = {'teams': [{'id': 't1', 'name': 'T1', 'players': [
        {'id': 'p1', 'name': 'Alice', 'seedHcp': 7.34},
        {'id': 'p2', 'name': 'Bob'},
    ]}]}
    doc.update(overrides)
    return LeagueConfig.model_validate(doc)


def rounds_of(*grosses, player_id='p1'):
    return [
        make_round(player_id, f'2026-05-{i + 1:02d}', gross, week=i + 1)
        for i, gross in enumerate(grosses)
    ]


class TestLeagueFormula:
    """Tests for the (avg - par) * factor path."""

    def test_no_rounds_is_zero(self):
        assert calc_hcp([], league()) == 0.0

    def test_basic_average(self):
        """Average 42 on par 36 with factor 0.9 -> 5.4."""
        assert calc_hcp(rounds_of(40, 42, 44), league()) == 5.4

    def test_uses_most_recent_rounds(self):
        """Only the newest roundsUsed rounds count."""
        config = league(handicap={'roundsUsed': 2, 'factor': 1.0})
        # newest two are 40 and 42 -> avg 41 -> 5.0
        assert calc_hcp(rounds_of(60, 60, 40, 42), config) == 5.0

    def test_non_positive_gross_excluded(self):
        config = league(handicap={'factor': 1.0})
        assert calc_hcp(rounds_of(0, -5, 40), config) == 4.0

    def test_excluded_weeks(self):
        """Rounds from hcpExcludedWeeks are ignored."""
        config = league(handicap={'factor': 1.0}, hcpExcludedWeeks=[1])
        assert calc_hcp(rounds_of(60, 40), config) == 4.0

    def test_drop_both_with_three_rounds(self):
        """[80, 90, 100] drop both -> 90 alone; factor 1.0, par 35 -> 55.0."""
        config = league(
            handicap={'drop': 'both', 'factor': 1.0, 'max': 60},
            course={'scorecard': {'front': [h.model_dump(by_alias=True) for h in
                                             make_holes(pars=[4, 4, 3, 4, 4, 4, 4, 4, 4])]}},
        )
        assert config.reference_par == 35
        assert calc_hcp(rounds_of(80, 90, 100), config) == 55.0

    def test_drop_skipped_with_two_rounds(self):
        config = league(handicap={'drop': 'both', 'factor': 1.0})
        assert calc_hcp(rounds_of(40, 44), config) == 6.0

    @pytest.mark.parametrize('grosses', [(120, 130), (30, 31), (36,), (500,)])
    def test_clamped_to_range(self, grosses):
        hcp = calc_hcp(rounds_of(*grosses), league())
        assert 0.0 <= hcp <= 18.0

    def test_legacy_policy_keys(self):
        """'type' and 'rounds' are read as system and roundsUsed."""
        config = league(handicap={'type': 'custom_rolling', 'rounds': 1, 'factor': 1.0})
        assert config.handicap.system == 'custom'
        assert calc_hcp(rounds_of(50, 40), config) == 4.0


class TestWHSFormula:
    """Tests for slope/rating differentials."""

    def test_differential(self):
        """Slope 113, rating 72: gross 40 on nine -> differential 4.0."""
        config = league(course={'slope': 113, 'rating': 72}, handicap={'factor': 1.0})
        assert calc_hcp(rounds_of(40), config) == 4.0

    def test_slope_scales_differential(self):
        config = league(course={'slope': 226, 'rating': 72}, handicap={'factor': 1.0})
        assert calc_hcp(rounds_of(40), config) == 2.0

    def test_rating_without_slope_uses_league_formula(self):
        config = league(course={'rating': 72}, handicap={'factor': 1.0})
        assert calc_hcp(rounds_of(40), config) == 4.0


class TestOtherSystems:
    """Tests for scratch and manual handicap systems."""

    def test_scratch(self):
        assert calc_hcp(rounds_of(50, 50), league(handicap={'system': 'scratch'})) == 0.0

    def test_manual_uses_seed(self):
        config = league(handicap={'system': 'manual'})
        assert calc_hcp(rounds_of(50), config, config.find_player('p1')) == 7.3

    def test_manual_without_seed(self):
        config = league(handicap={'system': 'manual'})
        assert calc_hcp([], config, config.find_player('p2')) == 0.0


class TestManualAdjustment:
    """Tests for calc_hcp_adj."""

    def test_adds_adjustment(self):
        config = league(manualAdj={'p1': 2.0})
        assert calc_hcp_adj(rounds_of(40, 42, 44), config, 'p1') == pytest.approx(7.4)

    def test_reclamps(self):
        config = league(manualAdj={'p1': -10})
        assert calc_hcp_adj(rounds_of(40, 42, 44), config, 'p1') == 0.0


class TestHelpers:
    """Tests for round selection and outlier dropping."""

    def test_most_recent_tie_keeps_original_order(self):
        rounds = [
            make_round('p1', '2026-05-01', 40),
            make_round('p1', '2026-05-02', 41),
            make_round('p1', '2026-05-02', 42),
        ]
        assert [r.gross_score for r in most_recent(rounds, 2)] == [41, 42]

    @pytest.mark.parametrize('drop,expected', [
        ('none', [80, 100, 90]),
        ('low', [90, 100]),
        ('high', [80, 90]),
        ('both', [90]),
    ])
    def test_drop_outliers(self, drop, expected):
        assert drop_outliers([80, 100, 90], drop) == expected

    def test_seed_hcp_best_five(self):
        """Best five of six scores average 42; par 35, factor 0.9 -> 6.3."""
        assert calc_seed_hcp([40, 41, 42, 43, 44, 60], factor=0.9, par=35) == 6.3

    def test_seed_hcp_no_scores(self):
        assert calc_seed_hcp([]) is None


class TestHiLo:
    """Tests for HI/LO assignment."""

    def test_explicit_labels(self):
        team = Team(id='t1', players=[Player(id='a', hilo='LO'), Player(id='b', hilo='HI')])
        hi, lo = split_hilo(team, lambda p: 0.0)
        assert (hi.id, lo.id) == ('b', 'a')

    def test_ranked_by_handicap_without_labels(self):
        hcps = {'a': 4.0, 'b': 9.0}
        team = Team(id='t1', players=[Player(id='a'), Player(id='b')])
        hi, lo = split_hilo(team, lambda p: hcps[p.id])
        assert (hi.id, lo.id) == ('b', 'a')

    def test_single_player_plays_both(self):
        team = Team(id='t1', players=[Player(id='a')])
        hi, lo = split_hilo(team, lambda p: 0.0)
        assert hi.id == lo.id == 'a'

    def test_empty_team(self):
        assert split_hilo(Team(id='t1'), lambda p: 0.0) == (None, None)

    def test_assign_hilo_relabels(self):
        hcps = {'a': 12.0, 'b': 3.0}
        team = Team(id='t1', players=[Player(id='a', hilo='LO'), Player(id='b', hilo='HI')])
        relabeled = assign_hilo(team, lambda p: hcps[p.id])
        assert [p.hilo for p in relabeled.players] == ['HI', 'LO']
        # original untouched
        assert [p.hilo for p in team.players] == ['LO', 'HI']

    def test_handicaps_override_stale_labels(self):
        """Alice is still labelled HI but Bob's 50 now gives him the higher handicap."""
        config = league()
        history = {'p1': rounds_of(36), 'p2': rounds_of(50, player_id='p2')}
        team = Team(id='t1', players=[Player(id='p1', hilo='HI'), Player(id='p2', hilo='LO')])

        hi, lo = split_hilo(team, lambda p: calc_hcp(history[p.id], config))
        assert (hi.id, lo.id) == ('p2', 'p1')

    def test_tie_keeps_labels(self):
        team = Team(id='t1', players=[Player(id='a', hilo='LO'), Player(id='b', hilo='HI')])
        assert assign_hilo(team, lambda p: 5.0) is team

    def test_tie_without_labels_uses_roster_order(self):
        team = Team(id='t1', players=[Player(id='a'), Player(id='b'), Player(id='c')])
        relabeled = assign_hilo(team, lambda p: 5.0)
        assert [p.hilo for p in relabeled.players] == ['HI', 'LO', None]
