"""Excel workbook export of committed scores and standings."""

import logging
from pathlib import Path

import openpyxl
from openpyxl.styles import Font

from .context import LeagueContext
from .standings import calc_standings

logger = logging.getLogger('golfleague.excel_export')

SCORES_HEADER = ['Week', 'Date', 'Player', 'Team', 'Gross Score', 'Nine']
STANDINGS_HEADER = ['Rank', 'Team', 'Points', 'Wins', 'Losses', 'Ties', 'Played']


def score_rows(context: LeagueContext) -> list[list]:
    """
    One row per player per committed match, ordered by week.

    Gross is the sum of the stored hole scores. Players no longer on a
    roster are listed by id with a blank team.
    """
    config = context.config
    rows = []
    committed = sorted(context.committed_matches(), key=lambda m: (m.week, m.key))
    for m in committed:
        for player_id, scores in m.scores.items():
            player = config.find_player(player_id)
            team = config.team_of_player(player_id)
            rows.append([
                m.week,
                m.date,
                player.name if player and player.name else player_id,
                team.name if team else '',
                sum(s for s in scores if s > 0),
                m.nine,
            ])
    return rows


def _write_sheet(ws, header: list[str], rows: list[list]) -> None:
    ws.append(header)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in rows:
        ws.append(row)
    ws.freeze_panes = 'A2'


def export_scores_workbook(context: LeagueContext, path: Path | str) -> Path:
    """
    Write a season backup workbook.

    Sheets:
        Scores: week, date, player, team, gross score, nine
        Standings: rank, team, points, wins, losses, ties, played

    Args:
        context: League snapshot
        path: Output .xlsx path; parent directories are created

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    wb = openpyxl.Workbook()
    scores_ws = wb.active
    scores_ws.title = 'Scores'
    rows = score_rows(context)
    _write_sheet(scores_ws, SCORES_HEADER, rows)

    standings = calc_standings(context.matches, context.config.teams)
    standings_ws = wb.create_sheet('Standings')
    _write_sheet(
        standings_ws,
        STANDINGS_HEADER,
        [
            [rank, s.team_name or s.team_id, s.pts, s.wins, s.losses, s.ties, s.played]
            for rank, s in enumerate(standings, start=1)
        ],
    )

    wb.save(path)
    wb.close()
    logger.info(f'Exported {len(rows)} scores and {len(standings)} teams to {path}')
    return path
