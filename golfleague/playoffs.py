"""Playoff bracket calculation.

Seeds come from the regular standings. With eight or more teams the top
eight play quarterfinals (1v8, 4v5, 2v7, 3v6), then semifinals and a
championship; with four to seven teams the top four play semifinals
(1v4, 2v3) and a championship. Round N of the bracket is played in the
first playoff week plus N.
"""

import logging
from typing import Iterable, Mapping, Optional

from .constants import BRACKET_PAIRINGS, BRACKET_ROUND_LABELS, TBD
from .models import BracketMatch, BracketRound, Standing
from .schedule import playoff_start_week, regular_season_weeks
from .schemas import LeagueConfig, Match
from .standings import calc_standings

logger = logging.getLogger('golfleague.playoffs')


def find_playoff_result(
    matches: Iterable[Match],
    team1_id: Optional[str],
    team2_id: Optional[str],
    week: int,
) -> Optional[tuple[float, float]]:
    """
    Points for a committed match between two teams in a given week.

    The pair is oriented to the caller's ``team1_id``, whichever side that
    team was on in the match document.

    Returns:
        (team1 points, team2 points), or None if no committed result exists
    """
    if not team1_id or not team2_id:
        return None
    for m in matches:
        if m.week != week or not m.is_committed:
            continue
        if (m.team1_id, m.team2_id) == (team1_id, team2_id):
            return m.result.pts1, m.result.pts2
        if (m.team1_id, m.team2_id) == (team2_id, team1_id):
            return m.result.pts2, m.result.pts1
    return None


def _seeded_match(seeds: list[Standing], s1: int, s2: int, week: int) -> BracketMatch:
    a = seeds[s1 - 1] if s1 <= len(seeds) else None
    b = seeds[s2 - 1] if s2 <= len(seeds) else None
    return BracketMatch(
        week=week,
        seed1=s1,
        seed2=s2,
        team1=a.team_name if a else TBD,
        team2=b.team_name if b else TBD,
        team1_id=a.team_id if a else None,
        team2_id=b.team_id if b else None,
    )


def bracket_winner(m: BracketMatch) -> Optional[tuple[Optional[int], str, Optional[str]]]:
    """
    (seed, name, team id) of the side that advances, or None if undecided.

    A tied match advances the higher (lower-numbered) seed.
    """
    if not m.decided:
        return None
    if m.pts1 > m.pts2:
        first = True
    elif m.pts2 > m.pts1:
        first = False
    else:
        first = (m.seed1 or 99) <= (m.seed2 or 99)
    if first:
        return m.seed1, m.team1, m.team1_id
    return m.seed2, m.team2, m.team2_id


def advance(m1: BracketMatch, m2: BracketMatch, week: int) -> BracketMatch:
    """Next-round match between the winners of ``m1`` and ``m2``; TBD where undecided."""
    w1 = bracket_winner(m1)
    w2 = bracket_winner(m2)
    nxt = BracketMatch(week=week)
    if w1:
        nxt.seed1, nxt.team1, nxt.team1_id = w1
    if w2:
        nxt.seed2, nxt.team2, nxt.team2_id = w2
    return nxt


def _attach_result(m: BracketMatch, matches: list[Match]) -> None:
    result = find_playoff_result(matches, m.team1_id, m.team2_id, m.week)
    if result:
        m.pts1, m.pts2 = result


def build_playoff_bracket(
    config: LeagueConfig,
    matches: Mapping[str, Match] | Iterable[Match],
) -> list[BracketRound]:
    """
    Build the playoff bracket from current standings and committed results.

    Args:
        config: League configuration (teams, schedule, playoff weeks)
        matches: All match documents

    Returns:
        Bracket rounds in play order, or an empty list when the league has
        fewer than four teams or no playoff weeks
    """
    match_list = list(matches.values()) if isinstance(matches, Mapping) else list(matches)
    start = playoff_start_week(config)
    if len(config.teams) < 4 or start is None:
        return []

    # Seed from regular-season weeks only; cancelled weeks never count
    regular_weeks = {w.week for w in regular_season_weeks(config)}
    regular = [m for m in match_list if m.week in regular_weeks]
    seeds = calc_standings(regular, config.teams)

    size = 8 if len(seeds) >= 8 else 4
    labels = BRACKET_ROUND_LABELS[size]

    current = [_seeded_match(seeds, s1, s2, start) for s1, s2 in BRACKET_PAIRINGS[size]]
    for m in current:
        _attach_result(m, match_list)
    rounds = [BracketRound(label=labels[0], matches=current)]

    for offset, label in enumerate(labels[1:], start=1):
        week = start + offset
        current = [advance(current[i], current[i + 1], week) for i in range(0, len(current), 2)]
        for m in current:
            _attach_result(m, match_list)
        rounds.append(BracketRound(label=label, matches=current))

    logger.debug(f'Built {size}-team bracket starting week {start}')
    return rounds


def champion(bracket: list[BracketRound]) -> Optional[str]:
    """Team id of the champion once the final is decided."""
    if not bracket:
        return None
    final = bracket[-1].matches[0]
    winner = bracket_winner(final)
    return winner[2] if winner else None
