"""
Service Layer for the lacrosse stat tracker
Provides business logic and orchestration
"""

from .base.base_service import BaseService
from .core import (
    EventService, GameService, GoalieService, PlayerService, ProgramService, StatsService,
    TurnoverService
)

__all__ = [
    'BaseService',
    'EventService',
    'GameService',
    'GoalieService',
    'PlayerService',
    'ProgramService',
    'StatsService',
    'TurnoverService'
]
