"""
Game Service with Repository Pattern
Handles game setup, the game context and the cached score
"""

from typing import List, Optional
from laxstats.models import Game, GameContext
from laxstats.services.base import BaseService
from laxstats.repositories.core import (
    EventRepository, GameRepository, PlayerRepository, ProgramRepository, TeamRepository
)
from laxstats.exceptions import (
    DatabaseError, NotFoundError, ScoreRecomputeError, ServiceError, ValidationError
)
from laxstats.constants import MAX_PERIODS, QUARTERS
from laxstats.utils.stats_aggregation import compute_score
import logging

logger = logging.getLogger(__name__)


class GameService(BaseService[Game]):
    """
    Service for game-related business logic using repository pattern
    """

    def __init__(self, repository: Optional[GameRepository] = None,
                 event_repository: Optional[EventRepository] = None,
                 program_repository: Optional[ProgramRepository] = None,
                 team_repository: Optional[TeamRepository] = None,
                 player_repository: Optional[PlayerRepository] = None):
        if repository is None:
            repository = GameRepository()
        super().__init__(repository)
        self.event_repository = event_repository or EventRepository()
        self.program_repository = program_repository or ProgramRepository()
        self.team_repository = team_repository or TeamRepository()
        self.player_repository = player_repository or PlayerRepository()

    def create_game(self, program_id: int, opponent_name: str, game_date: Optional[str] = None,
                    period_format: str = QUARTERS) -> Game:
        """
        Set up a new game for a program

        The home side plays as the team named after the program; the opponent
        team is looked up by name and created on first use.

        Args:
            program_id: Home program
            opponent_name: Name of the opponent
            game_date: ISO date of the game
            period_format: 'quarters' or 'halves'

        Returns:
            Created game

        Raises:
            NotFoundError: If the program does not exist
            ValidationError: If input data is invalid
            ServiceError: If creation fails
        """
        program = self.program_repository.get_by_id(program_id)
        if not program:
            raise NotFoundError("Program", program_id)

        try:
            opponent_name = (opponent_name or '').strip()
            if not opponent_name:
                raise ValidationError("Opponent name is required", "opponent_name")
            if period_format not in MAX_PERIODS:
                raise ValidationError(f"Invalid period format: {period_format}", "period_format")
            if opponent_name == program.name:
                raise ValidationError("A program cannot play against itself", "opponent_name")

            team = self.team_repository.get_or_create(program.name)
            opponent_team = self.team_repository.get_or_create(opponent_name)

            game = self.repository.create(
                program_id=program_id,
                team_id=team.id,
                opponent_team_id=opponent_team.id,
                opponent_name=opponent_name,
                game_date=game_date,
                period_format=period_format,
            )
            self.commit()

            logger.info(f"Created game {game.id}: {program.name} vs {opponent_name} ({game_date})")
            return game

        except ValidationError:
            raise
        except ServiceError:
            self.rollback()
            raise
        except Exception as e:
            self.rollback()
            logger.error(f"Error creating game for program {program_id}: {str(e)}")
            raise ServiceError(f"Failed to create game: {str(e)}")

    def get_games_for_program(self, program_id: int) -> List[Game]:
        return self.repository.get_games_by_program(program_id)

    def delete_game(self, game_id: int) -> None:
        """
        Delete a game together with its event log and its opponent roster

        The home program's roster and the teams are kept. Everything is
        removed in one transaction.

        Raises:
            NotFoundError: If the game does not exist
            DatabaseError: If the delete failed; nothing is removed
        """
        game = self.repository.get_or_404(game_id)

        try:
            events = self.event_repository.delete_by_game(game_id)
            players = self.player_repository.delete_opponent_roster(game_id)
            self.db.session.delete(game)
            self.commit()

            logger.info(f"Deleted game {game_id} with {events} events and {players} opponent players")

        except Exception as e:
            self.rollback()
            logger.error(f"Error deleting game {game_id}: {str(e)}")
            raise DatabaseError(f"Failed to delete game {game_id}: {str(e)}", "delete") from e

    def get_context(self, game_id: int, current_period: int = 1) -> GameContext:
        """
        Build the context operations on this game run with

        Raises:
            NotFoundError: If the game does not exist
            ValidationError: If the period is not a positive integer
        """
        game = self.repository.get_or_404(game_id)
        # periods past the format's regulation count are overtime and allowed
        if isinstance(current_period, bool) or not isinstance(current_period, int) or current_period < 1:
            raise ValidationError("Period must be an integer of at least 1", "period")
        return GameContext.from_game(game, current_period)

    def recompute_score(self, game_id: int) -> Game:
        """
        Re-derive our_score / opponent_score from the goal events of the game

        Raises:
            ScoreRecomputeError: If the score could not be stored; the previous score is kept
        """
        try:
            events = self.event_repository.list_by_game(game_id)
            our_score, opponent_score = compute_score(events)
            return self.repository.update_game_score(game_id, our_score, opponent_score)
        except NotFoundError:
            raise
        except Exception as e:
            self.rollback()
            logger.error(f"Error recomputing score for game {game_id}: {str(e)}")
            raise ScoreRecomputeError(game_id, str(e)) from e
