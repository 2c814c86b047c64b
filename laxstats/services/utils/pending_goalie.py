"""
Parked actions waiting for a goalie selection
One slot per game: a new request replaces whatever was parked before.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class PendingAction:
    side: str
    action: Callable[[Any], Any]


class PendingGoalieRegistry:
    """
    Holds the continuation that resumes once the operator picks a goalie
    """

    def __init__(self):
        self._pending: Dict[int, PendingAction] = {}

    def park(self, game_id: int, side: str, action: Callable[[Any], Any]) -> None:
        if game_id in self._pending:
            logger.info(f"Game {game_id}: replacing pending {self._pending[game_id].side} goalie action")
        self._pending[game_id] = PendingAction(side=side, action=action)

    def peek(self, game_id: int) -> Optional[PendingAction]:
        return self._pending.get(game_id)

    def take(self, game_id: int, side: str) -> Optional[Callable[[Any], Any]]:
        """
        Remove and return the parked action if it waits on this side's goalie
        """
        pending = self._pending.get(game_id)
        if pending is None or pending.side != side:
            return None
        del self._pending[game_id]
        return pending.action

    def discard(self, game_id: int) -> None:
        self._pending.pop(game_id, None)

    def __len__(self):
        return len(self._pending)
