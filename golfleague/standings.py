"""Season standings, player statistics, and leaderboards."""

import logging
from typing import Callable, Iterable, Mapping, Optional, Sequence

from .constants import STATUS_COMMITTED
from .models import PlayerStats, Standing
from .schemas import LeagueConfig, Match, Round, Team

logger = logging.getLogger('golfleague.standings')


def _match_list(matches: Mapping[str, Match] | Iterable[Match]) -> list[Match]:
    if isinstance(matches, Mapping):
        return list(matches.values())
    return list(matches)


def _record(standing: Standing, mine: float, theirs: float) -> None:
    standing.pts += mine
    standing.played += 1
    if mine > theirs:
        standing.wins += 1
    elif mine < theirs:
        standing.losses += 1
    else:
        standing.ties += 1


def calc_standings(matches: Mapping[str, Match] | Iterable[Match], teams: Sequence[Team]) -> list[Standing]:
    """
    Fold committed match results into team standings.

    Only matches with status 'committed' and a stored result count. Results
    naming a team that is not in ``teams`` are ignored for that side.

    Args:
        matches: Match documents (dict keyed by match key, or any iterable)
        teams: League teams, in the order used to break full ties

    Returns:
        Standings sorted by points desc, then wins desc; otherwise team order
    """
    table = {t.id: Standing(team_id=t.id, team_name=t.name) for t in teams}

    for m in _match_list(matches):
        if not m.is_committed:
            continue
        r = m.result
        if r.team1_id in table:
            _record(table[r.team1_id], r.pts1, r.pts2)
        if r.team2_id in table:
            _record(table[r.team2_id], r.pts2, r.pts1)

    # sorted() is stable, so equal records keep team order
    return sorted(table.values(), key=lambda s: (-s.pts, -s.wins))


def _hole_buckets(stats: PlayerStats, scores: Sequence[int], pars: Sequence[int]) -> None:
    for s, par in zip(scores, pars):
        if not s or s <= 0:
            continue
        stats.holes_played += 1
        diff = s - par
        if diff <= -2:
            stats.eagles += 1
        elif diff == -1:
            stats.birdies += 1
        elif diff == 0:
            stats.pars += 1
        elif diff == 1:
            stats.bogeys += 1
        else:
            stats.doubles += 1


def calc_player_stats(
    config: LeagueConfig,
    matches: Mapping[str, Match] | Iterable[Match],
    rounds: Mapping[str, Sequence[Round]],
) -> list[PlayerStats]:
    """
    Season statistics for every rostered player.

    Scoring average and low round come from the player's full round history;
    hole-by-hole buckets come from the scores stored on committed matches,
    compared against that match's nine. The match record is the player's
    team record.

    Returns:
        One PlayerStats per player, in roster order
    """
    committed = [m for m in _match_list(matches) if m.status == STATUS_COMMITTED]
    results = [m for m in committed if m.result is not None]
    out = []

    for team in config.teams:
        for player in team.players:
            stats = PlayerStats(
                player_id=player.id,
                name=player.name,
                team_id=team.id,
                team_name=team.name,
            )

            gross = [r.gross_score for r in rounds.get(player.id, []) if r.gross_score > 0]
            if gross:
                stats.rounds_played = len(gross)
                stats.scoring_avg = sum(gross) / len(gross)
                stats.low_round = min(gross)

            for m in committed:
                scores = m.scores.get(player.id)
                if scores:
                    pars = [h.par for h in config.holes_for(m.nine)]
                    _hole_buckets(stats, scores, pars)

            for m in results:
                r = m.result
                if r.team1_id == team.id:
                    mine, theirs = r.pts1, r.pts2
                elif r.team2_id == team.id:
                    mine, theirs = r.pts2, r.pts1
                else:
                    continue
                stats.match_pts += mine
                if mine > theirs:
                    stats.match_wins += 1
                elif mine < theirs:
                    stats.match_losses += 1
                else:
                    stats.match_ties += 1

            total = stats.match_wins + stats.match_losses + stats.match_ties
            stats.win_pct = stats.match_wins / total if total else 0.0
            out.append(stats)

    logger.debug(f'Computed stats for {len(out)} players')
    return out


# Stats where lower is better
ASCENDING_STATS = ('scoring_avg', 'low_round')


def stat_leaderboard(
    stats: Iterable[PlayerStats],
    key: str | Callable[[PlayerStats], float],
    descending: Optional[bool] = None,
    min_rounds: int = 0,
    min_matches: int = 0,
    limit: Optional[int] = None,
) -> list[PlayerStats]:
    """
    Rank players by one statistic.

    Players without a round are always left off. Sorting is stable, so ties
    keep roster order.

    Args:
        stats: Output of calc_player_stats
        key: Attribute name or a function of PlayerStats
        descending: Highest first; defaults to False for scoring average
            and low round, True otherwise
        min_rounds: Minimum rounds played to qualify
        min_matches: Minimum team matches to qualify (e.g. 2 for win %)
        limit: Keep only the top N

    Example:
        stat_leaderboard(stats, 'scoring_avg', limit=5)
    """
    if descending is None:
        descending = key not in ASCENDING_STATS
    value = key if callable(key) else (lambda s: getattr(s, key))
    eligible = [
        s for s in stats
        if s.rounds_played > 0
        and s.rounds_played >= min_rounds
        and (s.match_wins + s.match_losses + s.match_ties) >= min_matches
    ]
    ranked = sorted(eligible, key=value, reverse=descending)
    return ranked[:limit] if limit else ranked
