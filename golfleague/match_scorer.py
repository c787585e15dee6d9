"""Match scoring: two-player sub-matches and HI/LO team matchups."""

import logging
from typing import Optional, Sequence

from .absence import UNSCORED_RULES, get_absent_score, is_absent
from .context import LeagueContext
from .handicap import split_hilo
from .models import HoleResult, SubMatchResult, TeamMatchResult
from .schemas import HoleDef, Match, Player, PointValues, Team, coerce_score_array
from .strokes import allocate_strokes
from .utils import round_tenth

logger = logging.getLogger('golfleague.match_scorer')


def _score_array(scores: Optional[Sequence[int]], holes: int) -> list[int]:
    arr = coerce_score_array(scores)
    if len(arr) > holes:
        raise ValueError(f'Score array has {len(arr)} entries for a {holes}-hole match')
    return arr + [0] * (holes - len(arr))


def bonus_points(gross: int, par: int, pv: PointValues) -> float:
    """
    Birdie/eagle bonus for one hole, based on gross score.

    Eagle or better pays the eagle value, or the birdie value when no eagle
    value is set. Nothing is paid for a hole with no score entered.
    """
    if gross <= 0:
        return 0.0
    if gross <= par - 2:
        return pv.eagle or pv.birdie
    if gross == par - 1:
        return pv.birdie
    return 0.0


def split_points(value1: float, value2: float, points: float) -> tuple[float, float]:
    """Award ``points`` to the lower value, half each on a tie."""
    if value1 < value2:
        return points, 0.0
    if value2 < value1:
        return 0.0, points
    return points / 2, points / 2


def max_points(pv: PointValues, holes: int = 9) -> float:
    """Ceiling for one sub-match, excluding open-ended birdie/eagle bonuses."""
    return holes * pv.hole + pv.low_net


def calc_match(
    scores1: Sequence[int],
    scores2: Sequence[int],
    hcp1: float,
    hcp2: float,
    holes: Sequence[HoleDef],
    pv: Optional[PointValues] = None,
) -> SubMatchResult:
    """
    Score one two-player match over nine holes.

    Only the higher handicap receives strokes, ``hcp_high - hcp_low`` of them,
    allocated by stroke index. Each hole pays ``pv.hole`` to the lower net
    (split on a tie), plus gross birdie/eagle bonuses. The lower nine-hole net
    total earns ``pv.low_net`` (split on a tie).

    Args:
        scores1: Player 1 gross per hole (0 = not entered)
        scores2: Player 2 gross per hole
        hcp1: Player 1 handicap
        hcp2: Player 2 handicap
        holes: Scorecard for the nine being played
        pv: Point values (defaults 1/1/0/0/0)

    Returns:
        SubMatchResult with points rounded to one decimal

    Raises:
        ValueError: If a score array is longer than the scorecard
    """
    pv = pv or PointValues()
    n = len(holes)
    gross1 = _score_array(scores1, n)
    gross2 = _score_array(scores2, n)

    strokes1 = allocate_strokes(max(0.0, hcp1 - hcp2), holes)
    strokes2 = allocate_strokes(max(0.0, hcp2 - hcp1), holes)

    pts1 = pts2 = 0.0
    hole_results = []
    for i, hole in enumerate(holes):
        net1 = gross1[i] - strokes1[i]
        net2 = gross2[i] - strokes2[i]
        hp1, hp2 = split_points(net1, net2, pv.hole)
        bb1 = bonus_points(gross1[i], hole.par, pv)
        bb2 = bonus_points(gross2[i], hole.par, pv)

        pts1 += hp1 + bb1
        pts2 += hp2 + bb2
        hole_results.append(
            HoleResult(
                hole=hole.hole,
                net1=net1,
                net2=net2,
                strokes1=strokes1[i],
                strokes2=strokes2[i],
                pts1=hp1,
                pts2=hp2,
                birdie1=bb1,
                birdie2=bb2,
            )
        )

    total_net1 = sum(gross1) - sum(strokes1)
    total_net2 = sum(gross2) - sum(strokes2)
    bonus1, bonus2 = (0.0, 0.0)
    if pv.low_net > 0:
        bonus1, bonus2 = split_points(total_net1, total_net2, pv.low_net)

    return SubMatchResult(
        pts1=round_tenth(pts1 + bonus1),
        pts2=round_tenth(pts2 + bonus2),
        hole_results=hole_results,
        bonus1=bonus1,
        bonus2=bonus2,
        total_net1=total_net1,
        total_net2=total_net2,
        max_pts=max_points(pv, n),
    )


def unplayed_match(pv: PointValues, pts1: float, pts2: float, holes: int = 9) -> SubMatchResult:
    """Result for a sub-match settled by forfeit or half points rather than play."""
    return SubMatchResult(
        pts1=pts1,
        pts2=pts2,
        hole_results=[],
        bonus1=0.0,
        bonus2=0.0,
        total_net1=0,
        total_net2=0,
        max_pts=max_points(pv, holes),
        played=False,
    )


class _Slot:
    """One side of a sub-match: who plays, with what scores and handicap."""

    def __init__(self, player: Optional[Player], scores: list[int], hcp: float, absent: bool):
        self.player = player
        self.scores = scores
        self.hcp = hcp
        self.absent = absent
        self.unscored = False


def _settle_unscored(a: _Slot, b: _Slot, rule: str, pv: PointValues, holes: int) -> SubMatchResult:
    if a.unscored and b.unscored:
        return unplayed_match(pv, 0.0, 0.0, holes)
    full = max_points(pv, holes)
    if rule == 'half_pts':
        return unplayed_match(pv, full / 2, full / 2, holes)
    if a.unscored:
        return unplayed_match(pv, 0.0, full, holes)
    return unplayed_match(pv, full, 0.0, holes)


def _team_or_placeholder(context: LeagueContext, team_id: str) -> Team:
    return context.config.find_team(team_id) or Team(id=team_id, name=team_id)


def build_slots(match: Match, context: LeagueContext) -> dict[str, _Slot]:
    """
    Resolve who plays in each of the four HI/LO slots and with which scores.

    Absent players are filled in according to the league's absence rule.
    """
    context = context.history_before(match)
    config = context.config
    holes = len(context.holes_for(match.nine))
    rule = config.absence.rule

    t1 = _team_or_placeholder(context, match.team1_id)
    t2 = _team_or_placeholder(context, match.team2_id)
    hi1, lo1 = split_hilo(t1, context.hcp)
    hi2, lo2 = split_hilo(t2, context.hcp)

    slots = {}
    for name, player in (('hi1', hi1), ('lo1', lo1), ('hi2', hi2), ('lo2', lo2)):
        pid = player.id if player else None
        slots[name] = _Slot(
            player=player,
            scores=_score_array(match.scores.get(pid) if pid else None, holes),
            hcp=context.hcp(player),
            absent=is_absent(match, pid, config),
        )

    absent_ids = {s.player.id for s in slots.values() if s.absent and s.player}
    teammates = {'hi1': 'lo1', 'lo1': 'hi1', 'hi2': 'lo2', 'lo2': 'hi2'}

    def fill(slot: _Slot, fill_rule: Optional[str] = None):
        if slot.player is None:
            slot.unscored = True
            return
        slot.scores = _score_array(
            get_absent_score(slot.player.id, config, context.rounds, match.date, rule=fill_rule),
            holes,
        )

    if rule == 'plays_both':
        if len(absent_ids) == 1:
            for name, slot in slots.items():
                mate = slots[teammates[name]]
                if slot.absent and not mate.absent:
                    logger.info(
                        f'{match.key}: {mate.player.id} plays both matches for absent {slot.player.id}'
                    )
                    slot.scores, slot.hcp = list(mate.scores), mate.hcp
                elif slot.absent:
                    fill(slot, 'blind_avg')
        else:
            if absent_ids:
                logger.info(f'{match.key}: multiple absences under plays_both, using blind_avg')
            for slot in slots.values():
                if slot.absent:
                    fill(slot, 'blind_avg')
    elif rule in UNSCORED_RULES:
        for slot in slots.values():
            slot.unscored = slot.absent
    else:
        for slot in slots.values():
            if slot.absent:
                fill(slot)

    return slots


def score_team_match(match: Match, context: LeagueContext) -> TeamMatchResult:
    """
    Score a full team matchup: HI vs HI, LO vs LO, then the team net bonus.

    The team net bonus goes to the team with the lower combined net
    (HI net + LO net), split on a tie, and is only awarded when both
    sub-matches were actually played.

    Args:
        match: The match document with entered scores
        context: League snapshot; only rounds that predate the match count
            toward handicaps and absence fills

    Returns:
        TeamMatchResult ready to store on the match
    """
    config = context.config
    pv = config.point_values
    holes = context.holes_for(match.nine)
    rule = config.absence.rule
    slots = build_slots(match, context)

    def play(a: _Slot, b: _Slot) -> SubMatchResult:
        if a.unscored or b.unscored:
            return _settle_unscored(a, b, rule, pv, len(holes))
        return calc_match(a.scores, b.scores, a.hcp, b.hcp, holes, pv)

    hi = play(slots['hi1'], slots['hi2'])
    lo = play(slots['lo1'], slots['lo2'])

    team_bonus1 = team_bonus2 = 0.0
    if pv.team_net > 0 and hi.played and lo.played:
        team_bonus1, team_bonus2 = split_points(
            hi.total_net1 + lo.total_net1,
            hi.total_net2 + lo.total_net2,
            pv.team_net,
        )

    absent = sorted({s.player.id for s in slots.values() if s.absent and s.player})

    return TeamMatchResult(
        team1_id=match.team1_id,
        team2_id=match.team2_id,
        pts1=round_tenth(hi.pts1 + lo.pts1 + team_bonus1),
        pts2=round_tenth(hi.pts2 + lo.pts2 + team_bonus2),
        hi_pts1=hi.pts1,
        hi_pts2=hi.pts2,
        lo_pts1=lo.pts1,
        lo_pts2=lo.pts2,
        team_bonus1=team_bonus1,
        team_bonus2=team_bonus2,
        absent=absent,
    )
