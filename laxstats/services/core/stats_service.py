"""
Stats Service
Loads a game, its rosters and its event log and hands them to the
aggregation functions. Exports are rendered from the resulting box score.
"""

from typing import Optional, Tuple
from laxstats.models import BoxScore
from laxstats.repositories.core import (
    EventRepository, GameRepository, PlayerRepository, ProgramRepository
)
from laxstats.utils.stats_aggregation import build_box_score
from laxstats.utils.export_formatters import (
    format_full_game_report, format_maxpreps_report, full_report_filename, maxpreps_filename
)
import logging

logger = logging.getLogger(__name__)


class StatsService:
    """
    Service for box scores and their exports
    """

    def __init__(self, game_repository: Optional[GameRepository] = None,
                 event_repository: Optional[EventRepository] = None,
                 player_repository: Optional[PlayerRepository] = None,
                 program_repository: Optional[ProgramRepository] = None):
        self.game_repository = game_repository or GameRepository()
        self.event_repository = event_repository or EventRepository()
        self.player_repository = player_repository or PlayerRepository()
        self.program_repository = program_repository or ProgramRepository()

    def get_box_score(self, game_id: int) -> BoxScore:
        """
        Full box score of a game

        Args:
            game_id: The game

        Returns:
            BoxScore with both team summaries

        Raises:
            NotFoundError: If the game does not exist
        """
        game = self.game_repository.get_or_404(game_id)
        program = self.program_repository.get_by_id(game.program_id)
        home_name = program.name if program else 'Home'

        events = self.event_repository.list_by_game(game_id)
        home_players = self.player_repository.get_program_roster(game.program_id)
        opponent_players = self.player_repository.get_opponent_roster(game_id)

        box_score = build_box_score(game, events, home_players, opponent_players, home_name)
        logger.debug(f"Built box score for game {game_id} from {len(events)} events")
        return box_score

    def export_full_report(self, game_id: int) -> Tuple[str, str]:
        """(filename, CSV content) of the full game report"""
        box_score = self.get_box_score(game_id)
        return full_report_filename(box_score), format_full_game_report(box_score)

    def export_maxpreps(self, game_id: int) -> Tuple[str, str]:
        """(filename, text content) of the MaxPreps upload file"""
        box_score = self.get_box_score(game_id)
        return maxpreps_filename(box_score), format_maxpreps_report(box_score)
