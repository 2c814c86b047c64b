"""
Core repositories for main entities
"""

from .event_repository import EventRepository
from .game_repository import GameRepository
from .player_repository import PlayerRepository
from .program_repository import ProgramRepository, TeamRepository

__all__ = ['EventRepository', 'GameRepository', 'PlayerRepository', 'ProgramRepository', 'TeamRepository']
