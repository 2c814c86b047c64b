"""
Repository Layer for the lacrosse stat tracker
Provides data access abstraction for the service layer
"""

from .base.base_repository import BaseRepository
from .core import (
    EventRepository, GameRepository, PlayerRepository, ProgramRepository, TeamRepository
)

__all__ = [
    'BaseRepository',
    'EventRepository',
    'GameRepository',
    'PlayerRepository',
    'ProgramRepository',
    'TeamRepository'
]
