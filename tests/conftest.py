"""Shared fixtures: a four-team league on a par-36 front nine."""

import pytest

from golfleague.context import LeagueContext
from golfleague.schemas import HoleDef, LeagueConfig, Round
from golfleague.store import MemoryDocumentStore


def make_holes(pars=None, stroke_indexes=None, start=1):
    """Nine holes; par 4 and stroke index 1-9 in order unless given."""
    pars = pars or [4] * 9
    stroke_indexes = stroke_indexes or list(range(1, 10))
    return [
        HoleDef(hole=start + i, par=par, stroke_index=si)
        for i, (par, si) in enumerate(zip(pars, stroke_indexes))
    ]


def make_round(player_id, date, gross, week=None):
    return Round(player_id=player_id, date=date, gross_score=gross, week=week)


@pytest.fixture
def league_doc():
    """League document in the store's camelCase shape."""
    return {
        'name': 'Tuesday Night Nine',
        'teams': [
            {'id': 't1', 'name': 'Birdie Brigade', 'players': [
                {'id': 'p1', 'name': 'Alice', 'hilo': 'HI'},
                {'id': 'p2', 'name': 'Bob', 'hilo': 'LO'},
            ]},
            {'id': 't2', 'name': 'Sand Savers', 'players': [
                {'id': 'p3', 'name': 'Carol', 'hilo': 'HI'},
                {'id': 'p4', 'name': 'Dan', 'hilo': 'LO'},
            ]},
            {'id': 't3', 'name': 'Fairway Finders', 'players': [
                {'id': 'p5', 'name': 'Erin', 'hilo': 'HI'},
                {'id': 'p6', 'name': 'Frank', 'hilo': 'LO'},
            ]},
            {'id': 't4', 'name': 'Pin Seekers', 'players': [
                {'id': 'p7', 'name': 'Gina', 'hilo': 'HI'},
                {'id': 'p8', 'name': 'Hank', 'hilo': 'LO'},
            ]},
        ],
        'schedule': [
            {'week': 1, 'date': '2026-05-05', 'nine': 'front', 'matchups': [['t1', 't2'], ['t3', 't4']]},
        ],
    }


@pytest.fixture
def config(league_doc):
    return LeagueConfig.model_validate(league_doc)


@pytest.fixture
def holes():
    return make_holes()


@pytest.fixture
def match_doc():
    """Draft week 1 match between t1 and t2."""
    return {
        'week': 1,
        'date': '2026-05-05',
        'nine': 'front',
        'team1Id': 't1',
        'team2Id': 't2',
        'status': 'draft',
        'scores': {},
    }


@pytest.fixture
def full_scores():
    """Alice shoots par; everyone else shoots 45."""
    return {
        'p1': [4] * 9,
        'p2': [5] * 9,
        'p3': [5] * 9,
        'p4': [5] * 9,
    }


@pytest.fixture
def context(league_doc):
    return LeagueContext.from_documents(league_doc)


@pytest.fixture
def store(league_doc, match_doc):
    return MemoryDocumentStore({
        'config': {'league': league_doc},
        'matches': {'w1_m0': match_doc},
    })
