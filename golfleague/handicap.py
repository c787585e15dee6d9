"""Handicap engine: rolling averages of recent rounds into a handicap index."""

import logging
from typing import Callable, Iterable, Optional, Sequence

from .constants import DEFAULT_HCP_FACTOR, DEFAULT_MAX_HCP, DEFAULT_PAR, STANDARD_SLOPE
from .schemas import LeagueConfig, Player, Round, Team
from .utils import round_tenth

logger = logging.getLogger('golfleague.handicap')


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def eligible_rounds(rounds: Iterable[Round], excluded_weeks: Iterable[int] = ()) -> list[Round]:
    """Rounds that count toward a handicap: positive gross, not in an excluded week."""
    excluded = set(excluded_weeks)
    return [
        r for r in rounds
        if r.gross_score > 0 and (r.week is None or r.week not in excluded)
    ]


def most_recent(rounds: Sequence[Round], count: int) -> list[Round]:
    """The ``count`` newest rounds by date; equal dates keep their original order."""
    indexed = sorted(enumerate(rounds), key=lambda pair: (pair[1].date, -pair[0]), reverse=True)
    return [r for _, r in indexed[:count]]


def drop_outliers(values: list[float], drop: str) -> list[float]:
    """
    Drop the lowest and/or highest value before averaging.

    Only applies when more than two values are available.
    """
    if drop == 'none' or len(values) <= 2:
        return list(values)

    filtered = sorted(values)
    if drop in ('low', 'both'):
        filtered = filtered[1:]
    if drop in ('high', 'both'):
        filtered = filtered[:-1]
    return filtered


def calc_hcp(rounds: Sequence[Round], config: LeagueConfig, player: Optional[Player] = None) -> float:
    """
    Compute a player's handicap from their round history.

    League formula: ``round((avg - par) * factor, 1)`` where par is the front
    nine total. WHS formula (course slope and rating both set):
    ``round(avg_differential * factor, 1)`` with per-round differential
    ``(113 / slope) * (gross - rating / 2)``.

    Steps:
        1. Drop rounds with no positive gross (and rounds in excluded weeks)
        2. Keep the ``roundsUsed`` most recent
        3. Convert to differentials (WHS) or keep gross (league)
        4. Drop low/high/both outliers when more than two remain
        5. Average, apply formula, clamp to [0, max]

    Args:
        rounds: The player's rounds, any order
        config: League configuration
        player: Needed for the 'manual' system, which reads ``seedHcp``

    Returns:
        Handicap rounded to one decimal, 0 when there are no eligible rounds
    """
    policy = config.handicap

    if policy.system == 'scratch':
        return 0.0
    if policy.system == 'manual':
        seed = player.seed_hcp if player and player.seed_hcp is not None else 0.0
        return clamp(round_tenth(seed), 0.0, policy.max)

    usable = eligible_rounds(rounds, config.hcp_excluded_weeks)
    if not usable:
        return 0.0

    recent = most_recent(usable, policy.rounds_used)

    course = config.course
    if course.uses_whs:
        rating9 = course.rating / 2
        values = [(STANDARD_SLOPE / course.slope) * (r.gross_score - rating9) for r in recent]
    else:
        values = [float(r.gross_score) for r in recent]

    filtered = drop_outliers(values, policy.drop)
    avg = sum(filtered) / len(filtered)

    if course.uses_whs:
        hcp = round_tenth(avg * policy.factor)
    else:
        hcp = round_tenth((avg - config.reference_par) * policy.factor)

    return clamp(hcp, 0.0, policy.max)


def calc_hcp_adj(rounds: Sequence[Round], config: LeagueConfig, player_id: str) -> float:
    """Handicap with the commissioner's manual adjustment added, re-clamped."""
    player = config.find_player(player_id)
    base = calc_hcp(rounds, config, player)
    adj = config.manual_adj.get(player_id, 0.0)
    if adj:
        logger.debug(f'Applying manual adjustment {adj:+.1f} to {player_id}')
    return clamp(base + adj, 0.0, config.handicap.max)


def calc_seed_hcp(
    gross_scores: Iterable[int],
    factor: float = DEFAULT_HCP_FACTOR,
    par: int = DEFAULT_PAR,
    max_hcp: float = DEFAULT_MAX_HCP,
) -> Optional[float]:
    """
    Estimate a starting handicap from imported gross scores.

    Uses the average of the best five scores with the league formula.
    Returns None when there are no scores to work from.
    """
    scores = sorted(s for s in gross_scores if s and s > 0)[:5]
    if not scores:
        return None
    avg_best = sum(scores) / len(scores)
    return clamp(round_tenth((avg_best - par) * factor), 0.0, max_hcp)


def split_hilo(team: Team, hcp_fn: Callable[[Player], float]) -> tuple[Optional[Player], Optional[Player]]:
    """
    Return ``(hi, lo)`` for a team.

    The higher handicap plays HI whatever the stored labels say; labels only
    settle an exact tie. A one-player team plays both slots.
    """
    players = team.players
    if not players:
        return None, None
    if len(players) == 1:
        return players[0], players[0]

    ranked = assign_hilo(team, hcp_fn).players
    hi = next(p for p in ranked if p.hilo == 'HI')
    lo = next(p for p in ranked if p.hilo == 'LO')
    return hi, lo


def _labelled_pair(team: Team, pair: set[str]) -> bool:
    hi = [p.id for p in team.players if p.hilo == 'HI']
    lo = [p.id for p in team.players if p.hilo == 'LO']
    return len(hi) == 1 and len(lo) == 1 and {hi[0], lo[0]} == pair


def assign_hilo(team: Team, hcp_fn: Callable[[Player], float]) -> Team:
    """
    Relabel a team so the higher handicap is HI and the next is LO.

    Existing labels stand when the top two handicaps tie. Returns a new Team;
    players beyond the first two keep no label.
    """
    if len(team.players) < 2:
        return team

    ranked = sorted(team.players, key=hcp_fn, reverse=True)
    if hcp_fn(ranked[0]) == hcp_fn(ranked[1]) and _labelled_pair(team, {ranked[0].id, ranked[1].id}):
        return team

    labels = {ranked[0].id: 'HI', ranked[1].id: 'LO'}
    players = [p.model_copy(update={'hilo': labels.get(p.id)}) for p in team.players]

    changed = [p.id for p, new in zip(team.players, players) if p.hilo != new.hilo]
    if changed:
        logger.debug(f'Reassigned HI/LO for team {team.id}: {labels}')

    return team.model_copy(update={'players': players})
