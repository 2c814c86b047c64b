"""
Export formatters
Render a BoxScore as the full CSV game report or as a MaxPreps upload file.
"""

import csv
import io
import re
import uuid

from laxstats.constants import FULL_REPORT_HEADER, MAXPREPS_HEADER
from laxstats.models import BoxScore, PlayerStatsRow


def _safe_name(name: str) -> str:
    return re.sub(r'\s+', '_', name or 'Opponent')


def _report_row(row: PlayerStatsRow) -> list:
    s = row.stats
    return [
        row.number if row.number is not None else '',
        row.name,
        '/'.join(row.position),
        s.goals, s.assists, s.points, s.shots, s.shots_on_goal,
        s.ground_balls, s.turnovers, s.caused_turnovers,
        s.faceoffs_won, s.faceoffs_lost,
        s.saves, s.goals_allowed, s.penalties, s.penalty_minutes,
    ]


def format_full_game_report(box_score: BoxScore) -> str:
    """
    CSV game report: a short header block, then one table per side
    listing every player with recorded activity
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')

    opponent_name = box_score.opponent.team_name
    writer.writerow([f"Game Report - {box_score.game_date or ''}"])
    writer.writerow([f"Opponent: {opponent_name}"])
    writer.writerow([f"Final Score: {box_score.our_score} - {box_score.opponent_score}"])
    writer.writerow([])

    writer.writerow(['YOUR TEAM'])
    writer.writerow(FULL_REPORT_HEADER)
    for row in box_score.home.players:
        writer.writerow(_report_row(row))

    writer.writerow([])
    writer.writerow([f"OPPONENT - {opponent_name}"])
    writer.writerow(FULL_REPORT_HEADER)
    for row in box_score.opponent.players:
        writer.writerow(_report_row(row))

    return buffer.getvalue()


def format_maxpreps_report(box_score: BoxScore) -> str:
    """
    MaxPreps upload text: a fresh UUID line, the header, then one
    pipe-delimited line per home player with recorded activity
    """
    lines = [str(uuid.uuid4()), '|'.join(MAXPREPS_HEADER)]
    for row in box_score.home.players:
        s = row.stats
        values = [
            row.number or 0,
            s.goals, s.assists, s.shots, s.shots_on_goal, s.ground_balls,
            s.turnovers, s.caused_turnovers, s.unforced_errors,
            s.faceoffs_won, s.faceoff_attempts, s.saves, s.goals_allowed,
            s.penalties, s.penalty_minutes,
        ]
        lines.append('|'.join(str(value) for value in values))
    return '\n'.join(lines)


def full_report_filename(box_score: BoxScore) -> str:
    return f"Game_Report_{_safe_name(box_score.opponent.team_name)}_{box_score.game_date}.csv"


def maxpreps_filename(box_score: BoxScore) -> str:
    return f"MaxPreps_{_safe_name(box_score.opponent.team_name)}_{box_score.game_date}.txt"
