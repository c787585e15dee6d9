"""Validation functions for scorecards, teams, submissions, and match results."""

from typing import Sequence

from .constants import HOLES_PER_NINE, MIN_SUBMITTED_HOLES
from .models import SubMatchResult
from .schemas import HoleDef, LeagueConfig, Match, PointValues, Team


def validate_scorecard_side(holes: Sequence[HoleDef], nine: str = 'front') -> list[str]:
    """
    Validate one nine of a scorecard.

    Checks:
    - Exactly nine holes
    - Stroke indexes are 1-9 with no repeats
    - Pars between 3 and 6

    Args:
        holes: The nine's hole definitions
        nine: 'front' or 'back', used in messages

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if len(holes) != HOLES_PER_NINE:
        errors.append(f'{nine} nine has {len(holes)} holes (expected {HOLES_PER_NINE})')

    indexes = sorted(h.stroke_index for h in holes)
    if indexes != list(range(1, len(holes) + 1)):
        errors.append(f'{nine} nine stroke indexes are not 1-{len(holes)}: {indexes}')

    for h in holes:
        if not 3 <= h.par <= 6:
            errors.append(f'{nine} nine hole {h.hole} has par {h.par}')

    return errors


def validate_team(team: Team) -> list[str]:
    """
    Validate a team's roster.

    Checks:
    - Two players
    - At most one HI and one LO label
    - No duplicate player ids

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if len(team.players) != 2:
        errors.append(f'{team.id} has {len(team.players)} players (expected 2)')

    for label in ('HI', 'LO'):
        count = sum(1 for p in team.players if p.hilo == label)
        if count > 1:
            errors.append(f'{team.id} has {count} {label} players')

    ids = [p.id for p in team.players]
    if len(set(ids)) != len(ids):
        errors.append(f'{team.id} lists the same player twice')

    return errors


def validate_league(config: LeagueConfig) -> tuple[list[str], list[str]]:
    """
    Validate a whole league configuration.

    Returns:
        Tuple of (errors, warnings)
        - errors: Problems that will produce wrong scores
        - warnings: Things to review that scoring tolerates
    """
    errors: list[str] = []
    warnings: list[str] = []

    card = config.course.scorecard
    errors.extend(validate_scorecard_side(card.front, 'front'))
    errors.extend(validate_scorecard_side(card.back, 'back'))

    seen: dict[str, str] = {}
    for team in config.teams:
        warnings.extend(validate_team(team))
        for p in team.players:
            if p.id in seen and seen[p.id] != team.id:
                errors.append(f'Player {p.id} is on both {seen[p.id]} and {team.id}')
            seen[p.id] = team.id

    team_ids = {t.id for t in config.teams}
    for week in config.schedule:
        playing = []
        for t1, t2 in week.matchups:
            for team_id in (t1, t2):
                if team_id not in team_ids:
                    errors.append(f'Week {week.week} references unknown team {team_id}')
            playing.extend([t1, t2])
        doubled = sorted({t for t in playing if playing.count(t) > 1})
        if doubled:
            warnings.append(f'Week {week.week} has teams playing twice: {", ".join(doubled)}')

    if config.course.slope and not config.course.rating:
        warnings.append('Course slope is set without a rating; handicaps use the league formula')

    return errors, warnings


def validate_submission(scores: dict[str, list[int]], match: Match, config: LeagueConfig) -> list[str]:
    """
    Check submitted scores before a match moves to pending.

    Checks:
    - At least nine hole scores entered across all players
    - No array longer than nine holes
    - Every player is on one of the two teams

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    entered = sum(1 for arr in scores.values() for s in arr if s > 0)
    if entered < MIN_SUBMITTED_HOLES:
        errors.append(f'Only {entered} hole scores entered (need at least {MIN_SUBMITTED_HOLES})')

    t1 = config.find_team(match.team1_id)
    t2 = config.find_team(match.team2_id)
    for player_id, arr in scores.items():
        if len(arr) > HOLES_PER_NINE:
            errors.append(f'{player_id} has {len(arr)} hole scores (max {HOLES_PER_NINE})')
        on_team = (t1 and t1.has_player(player_id)) or (t2 and t2.has_player(player_id))
        if config.teams and not on_team:
            errors.append(f'{player_id} is not on {match.team1_id} or {match.team2_id}')

    return errors


def validate_sub_match(result: SubMatchResult, pv: PointValues) -> list[str]:
    """
    Check that a played sub-match distributed exactly the points on offer.

    Sanity checks:
    - Hole points sum to ``holes * pv.hole``
    - Low net bonus sums to ``pv.low_net``
    - No negative points

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []
    if not result.played:
        return warnings

    hole_total = sum(h.pts1 + h.pts2 for h in result.hole_results)
    expected = len(result.hole_results) * pv.hole
    if abs(hole_total - expected) > 1e-9:
        warnings.append(f'Hole points total {hole_total} != {expected}')

    bonus_total = result.bonus1 + result.bonus2
    if pv.low_net > 0 and abs(bonus_total - pv.low_net) > 1e-9:
        warnings.append(f'Low net bonus total {bonus_total} != {pv.low_net}')

    if result.pts1 < 0 or result.pts2 < 0:
        warnings.append(f'Negative points: {result.pts1} / {result.pts2}')

    return warnings
