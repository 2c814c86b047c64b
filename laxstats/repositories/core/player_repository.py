"""
Player Repository for the lacrosse stat tracker
Rosters: the program roster for the home side, a per-game roster for the opponent
"""

from typing import List, Optional
from laxstats.models import Game, Player
from laxstats.repositories.base import BaseRepository
from laxstats.constants import OPPONENT
from laxstats.exceptions import NotFoundError
import logging

logger = logging.getLogger(__name__)


class PlayerRepository(BaseRepository[Player]):
    """
    Repository for player-specific queries and data access
    """

    def __init__(self):
        super().__init__(Player)

    def get_program_roster(self, program_id: int) -> List[Player]:
        """
        Home players of a program, ordered by jersey number
        """
        return self.get_query().filter(
            Player.program_id == program_id,
            Player.is_opponent.is_(False)
        ).order_by(Player.number, Player.id).all()

    def get_opponent_roster(self, game_id: int) -> List[Player]:
        """
        Opponent players entered for one game, ordered by jersey number
        """
        return self.get_query().filter(
            Player.game_id == game_id,
            Player.is_opponent.is_(True)
        ).order_by(Player.number, Player.id).all()

    def get_side_roster(self, game_id: int, side: str) -> List[Player]:
        """
        Roster of one side of a game

        Args:
            game_id: The game
            side: 'home' or 'opponent'

        Returns:
            List of players on that side
        """
        if side == OPPONENT:
            return self.get_opponent_roster(game_id)

        game = self.db.session.get(Game, game_id)
        if not game:
            raise NotFoundError("Game", game_id)
        return self.get_program_roster(game.program_id)

    def find_on_side(self, game_id: int, side: str, player_id: int) -> Optional[Player]:
        """The player if they play for the given side of the game, None otherwise"""
        for player in self.get_side_roster(game_id, side):
            if player.id == player_id:
                return player
        return None

    def delete_opponent_roster(self, game_id: int) -> int:
        """
        Remove the opponent players entered for a game without committing

        Returns:
            Number of deleted players
        """
        players = self.get_opponent_roster(game_id)
        for player in players:
            self.db.session.delete(player)
        self.db.session.flush()
        logger.info(f"Deleted {len(players)} opponent players of game {game_id}")
        return len(players)

    def find_by_name(self, name: str, program_id: Optional[int] = None,
                     game_id: Optional[int] = None) -> Optional[Player]:
        query = self.get_query().filter(Player.name == name)
        if program_id is not None:
            query = query.filter(Player.program_id == program_id)
        if game_id is not None:
            query = query.filter(Player.game_id == game_id)
        return query.first()
