"""Absent-player score synthesis.

When a player posts no round for a match (or the commissioner marks them
absent for the week), the league's absence rule decides what gross score
stands in for them. Totals are spread across nine holes: ``base = total // 9``
on every hole, with the remainder added one stroke at a time from hole 1.
"""

import logging
from typing import Iterable, Mapping, Optional

from .constants import (
    HOLES_PER_NINE,
    NO_HISTORY_OVER_PAR,
    NO_HISTORY_WORST_OVER_PAR,
)
from .schemas import LeagueConfig, Match, Round
from .strokes import round_half_up

logger = logging.getLogger('golfleague.absence')

# Rules where the absent player's sub-match is not scored from a synthetic round
UNSCORED_RULES = ('forfeit', 'half_pts')


def spread_score(gross: int, holes: int = HOLES_PER_NINE) -> list[int]:
    """Spread a nine-hole total evenly, remainder going to the first holes."""
    if not gross or gross <= 0:
        return [0] * holes
    base, rem = divmod(int(gross), holes)
    return [base + (1 if i < rem else 0) for i in range(holes)]


def absence_key(week: int, player_id: str) -> str:
    return f'w{week}_{player_id}'


def is_absent(match: Match, player_id: Optional[str], config: LeagueConfig) -> bool:
    """True when the player has no positive hole score or is marked absent for the week."""
    if not player_id:
        return True
    if config.absent_overrides.get(absence_key(match.week, player_id)):
        return True
    return not any(s > 0 for s in match.scores.get(player_id, []))


def _player_history(rounds: Iterable[Round], reference_date: Optional[str]) -> list[Round]:
    usable = [r for r in rounds if r.gross_score > 0]
    if reference_date:
        usable = [r for r in usable if not r.date or r.date <= reference_date]
    # newest first, equal dates in list order
    indexed = sorted(enumerate(usable), key=lambda pair: (pair[1].date, -pair[0]), reverse=True)
    return [r for _, r in indexed]


def _league_scores(rounds_by_player: Mapping[str, Iterable[Round]]) -> list[int]:
    return [
        r.gross_score
        for player_rounds in rounds_by_player.values()
        for r in player_rounds
        if r.gross_score > 0
    ]


def blind_average(rounds_by_player: Mapping[str, Iterable[Round]], par: int) -> int:
    """League-wide average gross (rounded), or par + 5 with no rounds on record."""
    scores = _league_scores(rounds_by_player)
    if not scores:
        return par + NO_HISTORY_OVER_PAR
    return round_half_up(sum(scores) / len(scores))


def get_absent_score(
    player_id: str,
    config: LeagueConfig,
    rounds_by_player: Mapping[str, Iterable[Round]],
    reference_date: Optional[str] = None,
    rule: Optional[str] = None,
) -> list[int]:
    """
    Build a substitute nine-hole gross score array for an absent player.

    Args:
        player_id: The absent player
        config: League configuration (absence rule, fixed score, lookback)
        rounds_by_player: Every player's round history
        reference_date: Match date; later rounds are ignored for the player's own history
        rule: Override the configured rule (used for double-absence fallbacks)

    Returns:
        Nine gross hole scores; all zeros for 'forfeit' and 'half_pts', which
        the caller scores specially
    """
    policy = config.absence
    rule = rule or policy.rule
    par = config.reference_par
    history = _player_history(rounds_by_player.get(player_id, []), reference_date)

    if rule in ('duplicate_prev', 'last_score'):
        if history:
            return spread_score(history[0].gross_score)
        if rule == 'last_score':
            return spread_score(par + NO_HISTORY_OVER_PAR)
        logger.debug(f'{player_id} has no history, duplicate_prev falls back to blind_avg')
        return spread_score(blind_average(rounds_by_player, par))

    if rule == 'worst_score':
        recent = history[:policy.worst_lookback]
        if recent:
            return spread_score(max(r.gross_score for r in recent))
        league = _league_scores(rounds_by_player)
        return spread_score(max(league) if league else par + NO_HISTORY_WORST_OVER_PAR)

    if rule == 'fixed_score':
        return spread_score(policy.fixed_score or par + NO_HISTORY_OVER_PAR)

    if rule == 'vs_par':
        return spread_score(par)

    # forfeit, half_pts and plays_both are handled by the team match scorer
    if rule in UNSCORED_RULES or rule == 'plays_both':
        return [0] * HOLES_PER_NINE

    return spread_score(blind_average(rounds_by_player, par))
