"""Weekly and season skins.

Every player with scores on a committed match in the week competes on the
same nine. A hole's skin goes to a unique low score; a tie carries the skin
(and any skins already carried) to the next hole. Skins still carried after
the last hole are not awarded.
"""

import logging
from typing import Iterable, Mapping, Optional, Sequence

from .constants import SKINS_MISSING_SCORE
from .handicap import calc_hcp
from .models import SkinsHole, WeeklySkins
from .schemas import LeagueConfig, Match, Round
from .strokes import allocate_strokes

logger = logging.getLogger('golfleague.skins')


def _week_matches(week: int, matches: Mapping[str, Match] | Iterable[Match]) -> list[Match]:
    items = matches.values() if isinstance(matches, Mapping) else matches
    return [m for m in items if m.week == week and m.is_committed and m.scores]


def _player_name(config: LeagueConfig, player_id: str) -> str:
    player = config.find_player(player_id)
    return player.name if player and player.name else player_id


def _week_scores(week_matches: Sequence[Match]) -> dict[str, list[int]]:
    # A player listed on more than one match keeps their first card
    cards: dict[str, list[int]] = {}
    for m in week_matches:
        for player_id, scores in m.scores.items():
            cards.setdefault(player_id, list(scores))
    return cards


def calc_weekly_skins(
    week: int,
    matches: Mapping[str, Match] | Iterable[Match],
    config: LeagueConfig,
    rounds: Optional[Mapping[str, Sequence[Round]]] = None,
) -> WeeklySkins:
    """
    Skins for one week.

    A hole with no score entered counts as 99. With ``skinsNet`` set, each
    player's strokes (full handicap from ``calc_hcp``, allocated by stroke
    index) come off their hole score.

    Args:
        week: Week number
        matches: All match documents
        config: League configuration
        rounds: Round history per player; needed for net skins

    Returns:
        WeeklySkins; empty when the week has no committed match with scores
    """
    week_matches = _week_matches(week, matches)
    if not week_matches:
        return WeeklySkins(week=week)

    holes = config.holes_for(week_matches[0].nine)
    cards = _week_scores(week_matches)
    rounds = rounds or {}

    strokes: dict[str, list[int]] = {}
    if config.skins_net:
        for player_id in cards:
            hcp = calc_hcp(rounds.get(player_id, []), config, config.find_player(player_id))
            strokes[player_id] = allocate_strokes(hcp, holes)

    results = []
    player_skins: dict[str, int] = {}
    carry = 0

    for i, hole in enumerate(holes):
        field = []
        for player_id, scores in cards.items():
            gross = scores[i] if i < len(scores) and scores[i] > 0 else SKINS_MISSING_SCORE
            if player_id in strokes:
                gross -= strokes[player_id][i]
            field.append((player_id, gross))

        low = min(score for _, score in field)
        winners = [pid for pid, score in field if score == low]

        if len(winners) == 1:
            pot = 1 + carry
            carry = 0
            winner = winners[0]
            player_skins[winner] = player_skins.get(winner, 0) + pot
            results.append(
                SkinsHole(
                    hole=hole.hole,
                    par=hole.par,
                    winner=winner,
                    winner_name=_player_name(config, winner),
                    score=low,
                    pot=pot,
                )
            )
        else:
            carry += 1
            results.append(SkinsHole(hole=hole.hole, par=hole.par, carryover=True))

    if carry:
        logger.debug(f'Week {week}: {carry} skins carried past the last hole unawarded')

    return WeeklySkins(
        week=week,
        holes=results,
        total_skins=sum(player_skins.values()),
        players=player_skins,
        pot=config.skins_buy_in * len(cards),
    )


def calc_season_skins(
    matches: Mapping[str, Match] | Iterable[Match],
    config: LeagueConfig,
    rounds: Optional[Mapping[str, Sequence[Round]]] = None,
) -> list[dict]:
    """
    Season skins leaderboard across every week with a committed match.

    Returns:
        List of {'player_id', 'name', 'count'} sorted by count desc
    """
    match_list = list(matches.values()) if isinstance(matches, Mapping) else list(matches)
    weeks = sorted({m.week for m in match_list if m.is_committed})

    totals: dict[str, int] = {}
    for week in weeks:
        for player_id, count in calc_weekly_skins(week, match_list, config, rounds).players.items():
            totals[player_id] = totals.get(player_id, 0) + count

    leaderboard = [
        {'player_id': pid, 'name': _player_name(config, pid), 'count': count}
        for pid, count in totals.items()
    ]
    return sorted(leaderboard, key=lambda row: row['count'], reverse=True)
