"""
Core services for main business entities
"""

from .game_service import GameService
from .goalie_service import GoalieService, GoalieSelection
from .turnover_service import TurnoverService, TurnoverRecord
from .event_service import EventService
from .stats_service import StatsService
from .player_service import PlayerService
from .program_service import ProgramService

__all__ = [
    'EventService',
    'GameService',
    'GoalieSelection',
    'GoalieService',
    'PlayerService',
    'ProgramService',
    'StatsService',
    'TurnoverRecord',
    'TurnoverService'
]
