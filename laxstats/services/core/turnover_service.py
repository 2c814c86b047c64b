"""
Turnover Service
A turnover forced by a defender is stored as two rows: the turnover of the
side that lost the ball and a caused_turnover of the other side pointing at
it through linked_event_id. This service keeps the pair consistent.
Writes are committed one at a time; if the second write of a pair fails the
caller gets a PartialWriteError naming what is already stored.
"""

from dataclasses import dataclass
from typing import List, Optional
from laxstats.models import GameContext, GameEvent
from laxstats.repositories.core import EventRepository, PlayerRepository
from laxstats.constants import CAUSED_TURNOVER, OPPONENT, SIDES, TURNOVER
from laxstats.exceptions import (
    InvalidReferenceError, NotFoundError, PartialWriteError, ServiceError, ValidationError
)
import logging

logger = logging.getLogger(__name__)


@dataclass
class TurnoverRecord:
    turnover: GameEvent
    caused_turnover: Optional[GameEvent] = None


class TurnoverService:
    """
    Service for turnover / caused_turnover pairs
    """

    def __init__(self, event_repository: Optional[EventRepository] = None,
                 player_repository: Optional[PlayerRepository] = None):
        self.event_repository = event_repository or EventRepository()
        self.player_repository = player_repository or PlayerRepository()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def record_turnover(self, context: GameContext, side: str, turnover_player_id: Optional[int],
                        causer_player_id: Optional[int] = None,
                        period: Optional[int] = None) -> TurnoverRecord:
        """
        Record a turnover, plus the caused_turnover when a causer is named

        Args:
            context: Game context
            side: Side that lost the ball
            turnover_player_id: Player who lost it (None when unknown)
            causer_player_id: Opposing player who forced it
            period: Period, defaults to the context's current period

        Returns:
            TurnoverRecord with the stored event(s)

        Raises:
            InvalidReferenceError: If a player is not on the expected side
            PartialWriteError: If the turnover was stored but the caused_turnover was not
        """
        self._check_side(side)
        causer_side = GameContext.opposing(side)
        self._check_player(context, side, turnover_player_id, 'turnover_player_id')
        self._check_player(context, causer_side, causer_player_id, 'caused_by_player_id')

        period = period if period is not None else context.current_period
        turnover = self._insert_turnover(context, side, turnover_player_id, period)

        caused = None
        if causer_player_id is not None:
            try:
                caused = self._insert_caused(context, causer_side, causer_player_id, turnover.id, period)
            except ServiceError as e:
                self._raise_partial(e, [turnover.id], 'insert caused_turnover')

        return TurnoverRecord(turnover=turnover, caused_turnover=caused)

    def record_caused_turnover(self, context: GameContext, side: str, causer_player_id: int,
                               period: Optional[int] = None) -> TurnoverRecord:
        """
        Record a takeaway by a player of `side`

        An anonymous turnover is stored for the other side first so the
        caused_turnover always has something to point at.
        """
        self._check_side(side)
        if causer_player_id is None:
            raise ValidationError("A caused turnover needs the player who caused it", "caused_by_player_id")
        self._check_player(context, side, causer_player_id, 'caused_by_player_id')

        period = period if period is not None else context.current_period
        turnover = self._insert_turnover(context, GameContext.opposing(side), None, period)
        try:
            caused = self._insert_caused(context, side, causer_player_id, turnover.id, period)
        except ServiceError as e:
            self._raise_partial(e, [turnover.id], 'insert caused_turnover')

        return TurnoverRecord(turnover=turnover, caused_turnover=caused)

    def edit_turnover(self, context: GameContext, turnover_id: int,
                      turnover_player_id: Optional[int],
                      causer_player_id: Optional[int],
                      period: Optional[int] = None) -> TurnoverRecord:
        """
        Change who committed a turnover and who (if anyone) caused it

        The linked caused_turnover is updated, deleted or created to match
        the new causer. A new period applies to both halves of the pair.
        """
        turnover = self._get_event(turnover_id, TURNOVER)
        side = GameContext.side_of(turnover.is_opponent)
        causer_side = GameContext.opposing(side)
        self._check_player(context, side, turnover_player_id, 'turnover_player_id')
        self._check_player(context, causer_side, causer_player_id, 'caused_by_player_id')

        linked = self.event_repository.find_caused_turnover_for(turnover_id)

        partial = {'turnover_player_id': turnover_player_id}
        if period is not None:
            partial['period'] = period
        turnover = self.event_repository.update_event(turnover_id, partial, context)

        caused = None
        try:
            if linked is not None and causer_player_id is not None:
                caused = self.event_repository.update_event(
                    linked.id, {'caused_by_player_id': causer_player_id, 'period': turnover.period}, context
                )
            elif linked is not None:
                self.event_repository.delete_event(linked.id)
                self.logger.info(f"Turnover {turnover_id} is now unforced; removed caused_turnover {linked.id}")
            elif causer_player_id is not None:
                caused = self._insert_caused(
                    context, causer_side, causer_player_id, turnover_id, turnover.period
                )
        except ServiceError as e:
            self._raise_partial(e, [turnover_id], 'reconcile caused_turnover')

        return TurnoverRecord(turnover=turnover, caused_turnover=caused)

    def edit_caused_turnover(self, context: GameContext, caused_turnover_id: int,
                             causer_player_id: int, period: Optional[int] = None) -> GameEvent:
        caused = self._get_event(caused_turnover_id, CAUSED_TURNOVER)
        if causer_player_id is None:
            raise ValidationError("A caused turnover needs the player who caused it", "caused_by_player_id")
        self._check_player(context, GameContext.side_of(caused.is_opponent), causer_player_id,
                           'caused_by_player_id')

        partial = {'caused_by_player_id': causer_player_id}
        if period is not None:
            partial['period'] = period
        caused = self.event_repository.update_event(caused_turnover_id, partial, context)

        if period is not None and caused.linked_event_id is not None:
            try:
                self.event_repository.update_event(caused.linked_event_id, {'period': period}, context)
            except ServiceError as e:
                self._raise_partial(e, [caused_turnover_id], 'move turnover to new period')
        return caused

    def delete_turnover(self, turnover_id: int) -> List[int]:
        """
        Delete a turnover together with its caused_turnover

        Returns:
            Ids of the deleted events
        """
        turnover = self._get_event(turnover_id, TURNOVER)
        return self.delete_with_counterpart(turnover)

    def counterpart_of(self, event: GameEvent) -> Optional[GameEvent]:
        """The other half of a turnover pair, if the event has one"""
        if event.event_type == TURNOVER:
            return self.event_repository.find_caused_turnover_for(event.id)
        if event.event_type == CAUSED_TURNOVER and event.linked_event_id is not None:
            return self.event_repository.get_by_id(event.linked_event_id)
        return None

    def delete_with_counterpart(self, event: GameEvent) -> List[int]:
        """
        Delete an event and, for turnover pairs, the other half

        Returns:
            Ids of the deleted events, the given event first

        Raises:
            PartialWriteError: If the event was deleted but its counterpart was not
        """
        counterpart = self.counterpart_of(event)
        event_id = event.id
        self.event_repository.delete_event(event_id)
        deleted = [event_id]

        if counterpart is not None:
            counterpart_id = counterpart.id
            try:
                self.event_repository.delete_event(counterpart_id)
            except ServiceError as e:
                self._raise_partial(e, deleted, f'delete {counterpart.event_type}')
            deleted.append(counterpart_id)

        self.logger.info(f"Deleted events {deleted}")
        return deleted

    def _insert_turnover(self, context: GameContext, side: str, player_id: Optional[int],
                         period: int) -> GameEvent:
        return self.event_repository.insert(TURNOVER, {
            'game_id': context.game_id,
            'team_id': context.team_id_for(side),
            'is_opponent': side == OPPONENT,
            'period': period,
            'turnover_player_id': player_id,
        }, context)

    def _insert_caused(self, context: GameContext, side: str, causer_player_id: int,
                       turnover_id: int, period: Optional[int]) -> GameEvent:
        return self.event_repository.insert(CAUSED_TURNOVER, {
            'game_id': context.game_id,
            'team_id': context.team_id_for(side),
            'is_opponent': side == OPPONENT,
            'period': period,
            'caused_by_player_id': causer_player_id,
            'linked_event_id': turnover_id,
        }, context)

    def _get_event(self, event_id: int, event_type: str) -> GameEvent:
        event = self.event_repository.get_by_id(event_id)
        if event is None or event.event_type != event_type:
            raise NotFoundError(event_type.replace('_', ' ').capitalize(), event_id)
        return event

    def _check_player(self, context: GameContext, side: str, player_id: Optional[int],
                      field: str) -> None:
        if player_id is None:
            return
        if self.player_repository.find_on_side(context.game_id, side, player_id) is None:
            raise InvalidReferenceError(f"Player {player_id} is not on the {side} roster", field)

    def _raise_partial(self, error: ServiceError, committed_ids: List[int], operation: str):
        self.logger.error(f"Partial write, {operation} failed after {committed_ids} were committed: {error.message}")
        raise PartialWriteError(
            f"{operation} failed after events {committed_ids} were committed: {error.message}",
            committed_ids, operation
        ) from error

    @staticmethod
    def _check_side(side: str) -> None:
        if side not in SIDES:
            raise ValidationError(f"Unknown side: {side}", "side")
