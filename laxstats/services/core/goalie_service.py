"""
Goalie Service
Decides which goalie a save or goal-allowed is credited to and holds back
gated actions until the operator has picked one.
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, List, Optional
from laxstats.models import GameContext, Player
from laxstats.repositories.core import GameRepository, PlayerRepository
from laxstats.services.utils.pending_goalie import PendingGoalieRegistry
from laxstats.constants import HOME, SIDES
from laxstats.exceptions import (
    InvalidReferenceError, NoEligibleGoaliesError, PendingGoalieSelection, ValidationError
)
import logging

logger = logging.getLogger(__name__)

GOALIE_SELECTED = 'selected'
GOALIE_PENDING = 'pending_selection'
GOALIE_NO_ELIGIBLE = 'no_eligible_players'


@dataclass
class GoalieSelection:
    """Result of a goalie selection: the refreshed context and the output of the resumed action"""
    context: GameContext
    resumed_result: Any = None


class GoalieService:
    """
    Service for goalie pointers and the goalie gate
    """

    def __init__(self, game_repository: Optional[GameRepository] = None,
                 player_repository: Optional[PlayerRepository] = None,
                 registry: Optional[PendingGoalieRegistry] = None):
        self.game_repository = game_repository or GameRepository()
        self.player_repository = player_repository or PlayerRepository()
        self.registry = registry if registry is not None else PendingGoalieRegistry()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def eligible_goalies(self, context: GameContext, side: str) -> List[Player]:
        """
        Players who may be selected as goalie for a side

        Home: roster players tagged with the Goalie position.
        Opponent: every opponent player, since opponent positions are often unknown.
        """
        self._check_side(side)
        roster = self.player_repository.get_side_roster(context.game_id, side)
        if side == HOME:
            return [player for player in roster if player.is_goalie]
        return roster

    def goalie_state(self, context: GameContext, side: str) -> str:
        self._check_side(side)
        if context.goalie_for(side) is not None:
            return GOALIE_SELECTED
        if not self.eligible_goalies(context, side):
            return GOALIE_NO_ELIGIBLE
        return GOALIE_PENDING

    def require_goalie(self, context: GameContext, side: str,
                       action: Optional[Callable[[GameContext], Any]] = None) -> int:
        """
        Current goalie of a side, or park the action until one is selected

        Args:
            context: Game context carrying the goalie pointers
            side: Side whose goalie is needed
            action: Called with the refreshed context once a goalie is selected

        Returns:
            The goalie's player id

        Raises:
            PendingGoalieSelection: No goalie selected yet; the action is parked
            NoEligibleGoaliesError: Nobody on the side can be selected
        """
        self._check_side(side)
        goalie_id = context.goalie_for(side)
        if goalie_id is not None:
            return goalie_id

        candidates = self.eligible_goalies(context, side)
        if not candidates:
            self.logger.warning(f"Game {context.game_id}: no eligible {side} goalies")
            raise NoEligibleGoaliesError(side)

        if action is not None:
            self.registry.park(context.game_id, side, action)

        self.logger.warning(f"Game {context.game_id}: {side} goalie selection required")
        raise PendingGoalieSelection(side, [player.id for player in candidates])

    def select_goalie(self, context: GameContext, side: str, player_id: int) -> GoalieSelection:
        """
        Make a player the current goalie of a side and resume the parked action

        Args:
            context: Game context before the selection
            side: Side to set
            player_id: Selected player

        Returns:
            GoalieSelection with the new context and the result of the resumed action (or None)

        Raises:
            InvalidReferenceError: If the player is not an eligible goalie for the side
        """
        eligible_ids = [player.id for player in self.eligible_goalies(context, side)]
        if player_id not in eligible_ids:
            raise InvalidReferenceError(
                f"Player {player_id} is not an eligible {side} goalie", "player_id"
            )

        self.game_repository.set_current_goalie(context.game_id, side, player_id)
        if side == HOME:
            refreshed = replace(context, current_home_goalie_id=player_id)
        else:
            refreshed = replace(context, current_opponent_goalie_id=player_id)

        action = self.registry.take(context.game_id, side)
        resumed_result = None
        if action is not None:
            self.logger.info(f"Game {context.game_id}: resuming action held for {side} goalie")
            resumed_result = action(refreshed)

        return GoalieSelection(context=refreshed, resumed_result=resumed_result)

    @staticmethod
    def _check_side(side: str) -> None:
        if side not in SIDES:
            raise ValidationError(f"Unknown side: {side}", "side")
