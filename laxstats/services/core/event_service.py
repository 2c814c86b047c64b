"""
Event Service
Records, edits, deletes and undoes game events. Turnover pairs go through
the TurnoverService, goalie-gated actions through the GoalieService, and
every successful mutation refreshes the cached game score.
"""

from typing import Any, Dict, List, Optional
from laxstats.models import GameContext, GameEvent
from laxstats.repositories.core import EventRepository, PlayerRepository
from laxstats.services.core.game_service import GameService
from laxstats.services.core.goalie_service import GoalieService
from laxstats.services.core.turnover_service import TurnoverRecord, TurnoverService
from laxstats.constants import (
    CAUSED_TURNOVER, CLEAR, DEFAULT_PENALTY_DURATION, DEFAULT_PENALTY_TYPE, FACEOFF, GOAL,
    GOALIE_OUTCOMES, GROUND_BALL, HOME, OPPONENT, PENALTY, SHOT, SHOT_OUTCOMES, SIDES, TURNOVER
)
from laxstats.exceptions import (
    BusinessRuleError, InvalidReferenceError, MissingFieldError, NotFoundError, ValidationError
)
from laxstats.utils.event_validation import validate_event
import logging

logger = logging.getLogger(__name__)

# Fields an operator may change on an existing event, per kind
EDITABLE_FIELDS = {
    SHOT: {'shot_outcome', 'scorer_player_id', 'assist_player_id', 'period'},
    GROUND_BALL: {'ground_ball_player_id', 'period'},
    TURNOVER: {'turnover_player_id', 'caused_by_player_id', 'period'},
    CAUSED_TURNOVER: {'caused_by_player_id', 'period'},
    PENALTY: {'penalty_type', 'penalty_duration', 'penalty_player_id', 'period'},
    FACEOFF: {'faceoff_player1_id', 'faceoff_player2_id', 'faceoff_winner_team_id', 'period'},
    CLEAR: {'clear_success', 'period'},
}


class EventService:
    """
    Service for the event log of a game
    """

    def __init__(self, event_repository: Optional[EventRepository] = None,
                 player_repository: Optional[PlayerRepository] = None,
                 turnover_service: Optional[TurnoverService] = None,
                 goalie_service: Optional[GoalieService] = None,
                 game_service: Optional[GameService] = None):
        self.event_repository = event_repository or EventRepository()
        self.player_repository = player_repository or PlayerRepository()
        self.turnover_service = turnover_service or TurnoverService(
            self.event_repository, self.player_repository
        )
        self.goalie_service = goalie_service or GoalieService(player_repository=self.player_repository)
        self.game_service = game_service or GameService(event_repository=self.event_repository)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def list_events(self, game_id: int) -> List[GameEvent]:
        return self.event_repository.list_by_game(game_id)

    # --- Recording ---

    def record_shot(self, context: GameContext, side: str, scorer_player_id: int, outcome: str,
                    assist_player_id: Optional[int] = None,
                    period: Optional[int] = None) -> GameEvent:
        """
        Record a shot by a player of `side`

        Saved shots and goals are credited to the opposing side's current
        goalie. Without one the shot is parked and PendingGoalieSelection is
        raised; selecting the goalie records it.

        Args:
            context: Game context
            side: Shooting side
            scorer_player_id: Shooter
            outcome: goal, saved, missed or blocked
            assist_player_id: Assisting player, goals only
            period: Period, defaults to the context's current period

        Returns:
            The stored shot event
        """
        self._check_side(side)
        if outcome not in SHOT_OUTCOMES:
            raise ValidationError(f"Invalid shot outcome: {outcome}", "shot_outcome")
        if scorer_player_id is None:
            raise MissingFieldError(SHOT, 'scorer_player_id')
        self._check_player(context, side, scorer_player_id, 'scorer_player_id')
        self._check_player(context, side, assist_player_id, 'assist_player_id')

        fields = {
            **self._common(context, side, period),
            'shot_outcome': outcome,
            'scorer_player_id': scorer_player_id,
            'assist_player_id': assist_player_id,
            'goalie_player_id': None,
        }
        # Malformed shots must fail before anything is parked
        validate_event(SHOT, fields, context)

        if outcome in GOALIE_OUTCOMES:
            fields['goalie_player_id'] = self.goalie_service.require_goalie(
                context, GameContext.opposing(side),
                action=lambda ctx: self.record_shot(
                    ctx, side, scorer_player_id, outcome, assist_player_id, fields['period']
                )
            )

        event = self.event_repository.insert(SHOT, fields, context)
        self._after_mutation(context)
        return event

    def record_ground_ball(self, context: GameContext, side: str, player_id: int,
                           period: Optional[int] = None) -> GameEvent:
        self._check_side(side)
        self._check_player(context, side, player_id, 'ground_ball_player_id')
        event = self.event_repository.insert(GROUND_BALL, {
            **self._common(context, side, period),
            'ground_ball_player_id': player_id,
        }, context)
        self._after_mutation(context)
        return event

    def record_penalty(self, context: GameContext, side: str, player_id: Optional[int] = None,
                       penalty_type: str = DEFAULT_PENALTY_TYPE,
                       penalty_duration: int = DEFAULT_PENALTY_DURATION,
                       period: Optional[int] = None) -> GameEvent:
        """
        Record a penalty against `side`; the player may be unknown
        """
        self._check_side(side)
        self._check_player(context, side, player_id, 'penalty_player_id')
        event = self.event_repository.insert(PENALTY, {
            **self._common(context, side, period),
            'penalty_type': penalty_type,
            'penalty_duration': penalty_duration,
            'penalty_player_id': player_id,
        }, context)
        self._after_mutation(context)
        return event

    def record_faceoff(self, context: GameContext, home_player_id: int, opponent_player_id: int,
                       winner_team_id: int, period: Optional[int] = None) -> GameEvent:
        """
        Record a faceoff between a home and an opponent player

        The event is stored on the home side; the winner is a team id.
        """
        self._check_player(context, HOME, home_player_id, 'faceoff_player1_id')
        self._check_player(context, OPPONENT, opponent_player_id, 'faceoff_player2_id')
        event = self.event_repository.insert(FACEOFF, {
            **self._common(context, HOME, period),
            'faceoff_player1_id': home_player_id,
            'faceoff_player2_id': opponent_player_id,
            'faceoff_winner_team_id': winner_team_id,
        }, context)
        self._after_mutation(context)
        return event

    def record_clear(self, context: GameContext, side: str, success: bool,
                     period: Optional[int] = None) -> GameEvent:
        """
        Record a clear attempt by `side`

        Clears are only recorded once the clearing side has a goalie selected.
        """
        self._check_side(side)
        fields = {
            **self._common(context, side, period),
            'clear_success': success,
        }
        validate_event(CLEAR, fields, context)
        self.goalie_service.require_goalie(
            context, side,
            action=lambda ctx: self.record_clear(ctx, side, success, fields['period'])
        )
        event = self.event_repository.insert(CLEAR, fields, context)
        self._after_mutation(context)
        return event

    def record_turnover(self, context: GameContext, side: str, turnover_player_id: Optional[int],
                        causer_player_id: Optional[int] = None,
                        period: Optional[int] = None) -> TurnoverRecord:
        record = self.turnover_service.record_turnover(
            context, side, turnover_player_id, causer_player_id, period
        )
        self._after_mutation(context)
        return record

    def record_caused_turnover(self, context: GameContext, side: str, causer_player_id: int,
                               period: Optional[int] = None) -> TurnoverRecord:
        record = self.turnover_service.record_caused_turnover(context, side, causer_player_id, period)
        self._after_mutation(context)
        return record

    # --- Editing ---

    def edit_event(self, context: GameContext, event_id: int, **fields) -> GameEvent:
        """
        Change an existing event in place

        Args:
            context: Game context
            event_id: Event to edit
            **fields: New values; only the kind's editable fields are accepted

        Returns:
            The updated event (the turnover itself for turnover edits)

        Raises:
            NotFoundError: If the event is not part of the game
            ValidationError: If a field cannot be edited on this kind
            PendingGoalieSelection: If a goalie is needed first; the edit is parked
        """
        event = self._get_game_event(context, event_id)
        kind = event.event_type

        not_editable = set(fields) - EDITABLE_FIELDS[kind]
        if not_editable:
            field = sorted(not_editable)[0]
            raise ValidationError(f"Field '{field}' cannot be edited on a {kind} event", field)

        side = GameContext.side_of(event.is_opponent)

        if kind == TURNOVER:
            updated = self._edit_turnover(context, event, fields)
        elif kind == CAUSED_TURNOVER:
            updated = self.turnover_service.edit_caused_turnover(
                context, event_id, fields.get('caused_by_player_id', event.caused_by_player_id),
                fields.get('period')
            )
        elif kind == SHOT:
            updated = self._edit_shot(context, event, side, fields)
        elif kind == CLEAR:
            self.event_repository.check_update(event, fields, context)
            self.goalie_service.require_goalie(
                context, side,
                action=lambda ctx: self.edit_event(ctx, event_id, **fields)
            )
            updated = self.event_repository.update_event(event_id, fields, context)
        else:
            self._check_edited_players(context, kind, side, fields)
            updated = self.event_repository.update_event(event_id, fields, context)

        self._after_mutation(context)
        return updated

    def _edit_turnover(self, context: GameContext, turnover: GameEvent,
                       fields: Dict[str, Any]) -> GameEvent:
        if 'caused_by_player_id' in fields:
            causer_player_id = fields['caused_by_player_id']
        else:
            linked = self.event_repository.find_caused_turnover_for(turnover.id)
            causer_player_id = linked.caused_by_player_id if linked else None

        record = self.turnover_service.edit_turnover(
            context, turnover.id,
            fields.get('turnover_player_id', turnover.turnover_player_id),
            causer_player_id, fields.get('period')
        )
        return record.turnover

    def _edit_shot(self, context: GameContext, shot: GameEvent, side: str,
                   fields: Dict[str, Any]) -> GameEvent:
        outcome = fields.get('shot_outcome', shot.shot_outcome)
        if outcome not in SHOT_OUTCOMES:
            raise ValidationError(f"Invalid shot outcome: {outcome}", "shot_outcome")

        partial = dict(fields)
        if 'assist_player_id' not in partial and outcome != GOAL:
            partial['assist_player_id'] = None
        if partial.get('scorer_player_id', shot.scorer_player_id) is None:
            raise MissingFieldError(SHOT, 'scorer_player_id')
        self._check_player(context, side, partial.get('scorer_player_id'), 'scorer_player_id')
        self._check_player(context, side, partial.get('assist_player_id'), 'assist_player_id')

        partial['goalie_player_id'] = None
        self.event_repository.check_update(shot, partial, context)

        if outcome in GOALIE_OUTCOMES:
            partial['goalie_player_id'] = self.goalie_service.require_goalie(
                context, GameContext.opposing(side),
                action=lambda ctx: self.edit_event(ctx, shot.id, **fields)
            )

        return self.event_repository.update_event(shot.id, partial, context)

    def _check_edited_players(self, context: GameContext, kind: str, side: str,
                              fields: Dict[str, Any]) -> None:
        if kind == GROUND_BALL:
            self._check_player(context, side, fields.get('ground_ball_player_id'), 'ground_ball_player_id')
        elif kind == PENALTY:
            self._check_player(context, side, fields.get('penalty_player_id'), 'penalty_player_id')
        elif kind == FACEOFF:
            self._check_player(context, HOME, fields.get('faceoff_player1_id'), 'faceoff_player1_id')
            self._check_player(context, OPPONENT, fields.get('faceoff_player2_id'), 'faceoff_player2_id')

    # --- Removal ---

    def delete_event(self, context: GameContext, event_id: int) -> List[int]:
        """
        Delete an event; turnover pairs are deleted together

        Returns:
            Ids of the deleted events
        """
        event = self._get_game_event(context, event_id)
        removed = self.turnover_service.delete_with_counterpart(event)
        self._after_mutation(context)
        return removed

    def undo_last(self, context: GameContext) -> List[int]:
        """
        Remove the most recently recorded event of the game

        Returns:
            Ids of the removed events (two when the newest event is half of a turnover pair)

        Raises:
            BusinessRuleError: If the game has no events
        """
        latest = self.event_repository.get_latest(context.game_id)
        if latest is None:
            raise BusinessRuleError(f"Game {context.game_id} has no events to undo", "empty_event_log")

        removed = self.turnover_service.delete_with_counterpart(latest)
        logger.info(f"Undo in game {context.game_id} removed events {removed}")
        self._after_mutation(context)
        return removed

    # --- Helpers ---

    def _after_mutation(self, context: GameContext) -> None:
        self.game_service.recompute_score(context.game_id)

    def _get_game_event(self, context: GameContext, event_id: int) -> GameEvent:
        event = self.event_repository.get_by_id(event_id)
        if event is None or event.game_id != context.game_id:
            raise NotFoundError("GameEvent", event_id)
        return event

    @staticmethod
    def _common(context: GameContext, side: str, period: Optional[int]) -> Dict[str, Any]:
        return {
            'game_id': context.game_id,
            'team_id': context.team_id_for(side),
            'is_opponent': side == OPPONENT,
            'period': period if period is not None else context.current_period,
        }

    def _check_player(self, context: GameContext, side: str, player_id: Optional[int],
                      field: str) -> None:
        if player_id is None:
            return
        if self.player_repository.find_on_side(context.game_id, side, player_id) is None:
            raise InvalidReferenceError(f"Player {player_id} is not on the {side} roster", field)

    @staticmethod
    def _check_side(side: str) -> None:
        if side not in SIDES:
            raise ValidationError(f"Unknown side: {side}", "side")
