"""Tests for league configuration normalization and loading."""

import json

import pytest

from golfleague.config import load_league_config, normalize_config
from golfleague.schemas import LeagueConfig


class TestNormalizeConfig:
    """Tests for normalize_config."""

    def test_defaults(self):
        config = normalize_config({})
        pv = config.point_values
        assert (pv.hole, pv.low_net, pv.team_net, pv.birdie, pv.eagle) == (1, 1, 0, 0, 0)
        assert config.absence.rule == 'blind_avg'
        assert config.handicap.system == 'custom'
        assert config.reference_par == 36

    def test_legacy_format_block(self):
        config = normalize_config({
            'format': {
                'pointValues': {'hole': 2, 'lowNet': 3},
                'absentRule': 'worst_score',
                'absentWorstLookback': 3,
                'skinsNet': True,
            }
        })
        assert config.point_values.hole == 2
        assert config.point_values.low_net == 3
        assert config.absence.rule == 'worst_score'
        assert config.absence.worst_lookback == 3
        assert config.skins_net is True

    def test_top_level_wins(self):
        config = normalize_config({
            'absentRule': 'vs_par',
            'pointValues': {'hole': 1.5},
            'format': {'absentRule': 'forfeit', 'pointValues': {'hole': 3}},
        })
        assert config.absence.rule == 'vs_par'
        assert config.point_values.hole == 1.5

    def test_blank_point_values_use_defaults(self):
        config = normalize_config({'pointValues': {'hole': None, 'lowNet': '', 'birdie': 1}})
        assert (config.point_values.hole, config.point_values.low_net) == (1, 1)
        assert config.point_values.birdie == 1

    def test_unknown_values_fall_back(self):
        config = normalize_config({'absentRule': 'coin_flip', 'handicap': {'system': 'custom_rolling', 'drop': 'middle'}})
        assert config.absence.rule == 'blind_avg'
        assert config.handicap.system == 'custom'
        assert config.handicap.drop == 'none'

    def test_hdcp_key_on_holes(self):
        front = [{'hole': i + 1, 'par': 4, 'hdcp': 9 - i} for i in range(9)]
        config = normalize_config({'course': {'scorecard': {'front': front}}})
        assert [h.stroke_index for h in config.holes_for('front')] == list(range(9, 0, -1))

    def test_back_nine_defaults(self):
        holes = normalize_config({}).holes_for('back')
        assert [h.hole for h in holes] == list(range(10, 19))

    def test_passes_through_config(self, config):
        assert normalize_config(config) is config

    def test_short_scorecard_rejected(self):
        with pytest.raises(ValueError):
            normalize_config({'course': {'scorecard': {'front': [{'hole': 1, 'strokeIndex': 1}]}}})


class TestLoadLeagueConfig:
    """Tests for load_league_config."""

    def test_load(self, tmp_path, league_doc):
        path = tmp_path / 'league.json'
        path.write_text(json.dumps(league_doc))
        config = load_league_config(path)
        assert isinstance(config, LeagueConfig)
        assert config.find_player('p3').name == 'Carol'
        assert config.team_of_player('p4').id == 't2'

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_league_config(tmp_path / 'nope.json')

    def test_invalid_document(self, tmp_path):
        path = tmp_path / 'league.json'
        path.write_text(json.dumps({'teams': [{'id': ''}]}))
        with pytest.raises(ValueError, match='Schema validation failed'):
            load_league_config(path)
