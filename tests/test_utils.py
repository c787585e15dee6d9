"""Tests for JSON helpers and rounding."""

import json
import math

import pytest

from golfleague.schemas import Round
from golfleague.utils import load_json, load_json_safe, round_tenth, sanitize_document, save_json


class TestRoundTenth:
    @pytest.mark.parametrize('value,expected', [(4.25, 4.3), (4.24, 4.2), (0.05, 0.1), (7.0, 7.0)])
    def test_half_up(self, value, expected):
        assert round_tenth(value) == expected


class TestSanitizeDocument:
    """Tests for sanitize_document."""

    def test_strips_none_and_nan(self):
        doc = {'a': None, 'b': math.nan, 'c': [1, None, 2], 'd': {'e': None, 'f': 0}}
        assert sanitize_document(doc) == {'c': [1, 2], 'd': {'f': 0}}

    def test_dumps_models_by_alias(self):
        doc = sanitize_document({'round': Round(player_id='p1', gross_score=40)})
        assert doc['round']['playerId'] == 'p1'
        assert 'matchKey' not in doc['round']


class TestJsonFiles:
    """Tests for save_json / load_json."""

    def test_round_trip_with_schema(self, tmp_path):
        path = tmp_path / 'nested' / 'round.json'
        save_json(path, Round(player_id='p1', gross_score=40))
        assert load_json(path, schema=Round).gross_score == 40
        assert not path.with_suffix('.json.tmp').exists()

    def test_malformed(self, tmp_path):
        path = tmp_path / 'bad.json'
        path.write_text('{not json')
        with pytest.raises(json.JSONDecodeError):
            load_json(path)
        assert load_json_safe(path, default={}) == {}

    def test_unserializable(self, tmp_path):
        with pytest.raises(TypeError):
            save_json(tmp_path / 'x.json', {'a': object()})
