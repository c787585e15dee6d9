"""Season schedule generation, match documents, and playoff week detection.

Regular-season weeks come from a round robin over the league's teams
(circle method, one fixed team, the rest rotating). With an odd number of
teams a phantom team is added and whoever draws it has a bye that week.
Playoff weeks are either flagged explicitly in ``playoffWeekMap`` or, for
schedules of ten weeks or more, are the last ``playoffWeeks`` weeks.
"""

import logging
from datetime import date, timedelta
from typing import Optional, Sequence

from .constants import DAY_NAMES, MIN_WEEKS_FOR_AUTO_PLAYOFFS, STATUS_DRAFT
from .schemas import LeagueConfig, ScheduleWeek

logger = logging.getLogger('golfleague.schedule')


def round_robin(team_ids: Sequence[str]) -> list[list[tuple[str, str]]]:
    """
    Every round of a single round robin.

    Returns:
        ``n - 1`` rounds for ``n`` teams (rounded up to even), each a list
        of (team1, team2) pairings with byes left out
    """
    count = len(team_ids)
    if count < 2:
        return []
    n = count if count % 2 == 0 else count + 1
    order = list(range(n))
    rounds = []

    for _ in range(n - 1):
        pairings = []
        for i in range(n // 2):
            a, b = order[i], order[n - 1 - i]
            if a < count and b < count:
                pairings.append((team_ids[a], team_ids[b]))
        rounds.append(pairings)
        # keep the first slot fixed, rotate the rest by one
        order.insert(1, order.pop())

    return rounds


def first_game_day(start: date, day_of_week: Optional[str]) -> date:
    """Advance ``start`` to the next ``day_of_week`` (unchanged if it already is one)."""
    if not day_of_week or day_of_week not in DAY_NAMES:
        return start
    target = DAY_NAMES.index(day_of_week)
    return start + timedelta(days=(target - start.weekday()) % 7)


def generate_schedule(
    team_ids: Sequence[str],
    weeks: int,
    start_date: str | date,
    day_of_week: Optional[str] = None,
) -> list[ScheduleWeek]:
    """
    Build a round-robin schedule, one week every seven days.

    The schedule stops after a full round robin even if ``weeks`` asks for
    more; later weeks are added by hand as custom weeks.

    Args:
        team_ids: Team ids in seeding order
        weeks: Number of weeks requested
        start_date: ISO date (or date) of the first possible game day
        day_of_week: League night, e.g. 'Tuesday'

    Returns:
        ScheduleWeek entries numbered from 1
    """
    if isinstance(start_date, str):
        start = date.fromisoformat(start_date) if start_date else date.today()
    else:
        start = start_date
    day = first_game_day(start, day_of_week)

    rounds = round_robin(list(team_ids))
    if weeks > len(rounds):
        logger.info(f'{weeks} weeks requested, round robin only fills {len(rounds)}')

    schedule = []
    for w, pairings in enumerate(rounds[:weeks]):
        schedule.append(
            ScheduleWeek(
                week=w + 1,
                date=(day + timedelta(days=7 * w)).isoformat(),
                matchups=pairings,
            )
        )
    return schedule


def match_key(week: int, index: int) -> str:
    """Document key for the ``index``-th matchup of ``week``: ``w{week}_m{index}``."""
    return f'w{week}_m{index}'


def create_match_documents(week: ScheduleWeek) -> dict[str, dict]:
    """
    Fresh draft match documents for one schedule week.

    Returns:
        Dict of match key -> match document (camelCase, ready for the store)
    """
    docs = {}
    for i, (team1, team2) in enumerate(week.matchups):
        key = match_key(week.week, i)
        docs[key] = {
            'week': week.week,
            'date': week.date,
            'nine': week.nine,
            'team1Id': team1,
            'team2Id': team2,
            'status': STATUS_DRAFT,
            'scores': {},
        }
    return docs


def is_playoff_week(config: LeagueConfig, week: int) -> bool:
    """
    Whether ``week`` is a playoff week.

    An entry in ``playoffWeekMap`` always wins. Otherwise, for schedules of
    at least ten weeks, the last ``playoffWeeks`` weeks are playoffs.
    """
    if week in config.playoff_week_map:
        return bool(config.playoff_week_map[week])

    total = len(config.schedule)
    if total < MIN_WEEKS_FOR_AUTO_PLAYOFFS or config.playoff_weeks <= 0:
        return False
    return week >= total - config.playoff_weeks + 1


def playoff_start_week(config: LeagueConfig) -> Optional[int]:
    """First playoff week in the schedule, or None."""
    weeks = [w.week for w in config.schedule if is_playoff_week(config, w.week)]
    return min(weeks) if weeks else None


def is_cancelled_week(config: LeagueConfig, week: int) -> bool:
    return bool(config.cancelled_weeks.get(week))


def regular_season_weeks(config: LeagueConfig) -> list[ScheduleWeek]:
    """Scheduled weeks that are neither playoffs nor cancelled."""
    return [
        w for w in config.schedule
        if not is_playoff_week(config, w.week) and not is_cancelled_week(config, w.week)
    ]
