"""
Game Repository for the lacrosse stat tracker
Handles game rows, the cached score and the current goalie pointers
"""

from typing import List, Optional
from laxstats.models import Game
from laxstats.repositories.base import BaseRepository
from laxstats.constants import HOME, OPPONENT, SIDES
from laxstats.exceptions import NotFoundError, ValidationError
import logging

logger = logging.getLogger(__name__)

GOALIE_COLUMNS = {
    HOME: 'current_home_goalie_id',
    OPPONENT: 'current_opponent_goalie_id',
}


class GameRepository(BaseRepository[Game]):
    """
    Repository for game-specific queries and data access
    """

    def __init__(self):
        super().__init__(Game)

    def get_or_404(self, game_id: int) -> Game:
        game = self.get_by_id(game_id)
        if not game:
            self.logger.warning(f"Game with ID {game_id} not found")
            raise NotFoundError("Game", game_id)
        return game

    def get_games_by_program(self, program_id: int) -> List[Game]:
        """
        Get all games of a program, most recent first
        """
        return self.find_by({'program_id': program_id}, order_by=['-game_date', '-id'])

    def update_game_score(self, game_id: int, our_score: int, opponent_score: int) -> Game:
        """
        Store the derived score on the game row

        Args:
            game_id: The game to update
            our_score: Goals of the home side
            opponent_score: Goals of the opponent

        Returns:
            Updated game
        """
        game = self.get_or_404(game_id)
        game.our_score = our_score
        game.opponent_score = opponent_score
        self.commit()
        logger.info(f"Game {game_id} score is now {our_score}-{opponent_score}")
        return game

    def get_current_goalie(self, game_id: int, side: str) -> Optional[int]:
        game = self.get_or_404(game_id)
        return getattr(game, self._goalie_column(side))

    def set_current_goalie(self, game_id: int, side: str, player_id: int) -> Game:
        """
        Point the side's current goalie at a player
        """
        game = self.get_or_404(game_id)
        setattr(game, self._goalie_column(side), player_id)
        self.commit()
        logger.info(f"Game {game_id}: {side} goalie set to player {player_id}")
        return game

    def clear_goalie_pointers(self, player_id: int) -> int:
        """
        Unset every current goalie pointer that names the player, without committing

        Returns:
            Number of pointers cleared
        """
        cleared = 0
        for column in GOALIE_COLUMNS.values():
            for game in self.find_by({column: player_id}):
                setattr(game, column, None)
                cleared += 1
        if cleared:
            self.db.session.flush()
            logger.info(f"Cleared {cleared} goalie pointers to player {player_id}")
        return cleared

    @staticmethod
    def _goalie_column(side: str) -> str:
        if side not in SIDES:
            raise ValidationError(f"Unknown side: {side}", "side")
        return GOALIE_COLUMNS[side]
