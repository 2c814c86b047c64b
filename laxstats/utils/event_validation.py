"""
Validation of game events against the per-kind field schema
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from laxstats.constants import (
    CAUSED_TURNOVER, CLEAR, COMMON_EVENT_FIELDS, EVENT_FIELD_SCHEMA, EVENT_TYPES, FACEOFF, GOAL,
    GOALIE_OUTCOMES, PENALTY, SHOT, SHOT_OUTCOMES, TURNOVER, VARIANT_EVENT_FIELDS
)
from laxstats.exceptions import InvalidReferenceError, MissingFieldError, ValidationError
from laxstats.models import GameContext


@dataclass(frozen=True)
class ValidatedEvent:
    """An event that passed validation; fields holds every column, irrelevant variants as None"""
    event_type: str
    fields: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, name):
        return self.fields[name]


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_event(event_type: str, fields: Dict[str, Any],
                   context: Optional[GameContext] = None,
                   resolve_event: Optional[Callable[[int], Any]] = None) -> ValidatedEvent:
    """
    Validate an event of the given kind.

    Args:
        event_type: One of EVENT_TYPES
        fields: Column values for the event (common and variant columns)
        context: Game context, enables the faceoff winner check
        resolve_event: Lookup for event ids, enables the linked turnover check

    Returns:
        ValidatedEvent with the normalized column values

    Raises:
        ValidationError: unknown kind, bad values or contradictory fields
        MissingFieldError: a field required for the kind is absent
        InvalidReferenceError: linked event or faceoff winner does not resolve
    """
    if event_type not in EVENT_TYPES:
        raise ValidationError(f"Unknown event type: {event_type}", "event_type")

    unknown = set(fields) - set(COMMON_EVENT_FIELDS) - set(VARIANT_EVENT_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown event fields: {', '.join(sorted(unknown))}", sorted(unknown)[0])

    for name in ('game_id', 'team_id'):
        if fields.get(name) is None:
            raise MissingFieldError(event_type, name)

    is_opponent = fields.get('is_opponent', False)
    if not isinstance(is_opponent, bool):
        raise ValidationError("is_opponent must be a boolean", "is_opponent")

    period = fields.get('period')
    if period is not None and (not isinstance(period, int) or isinstance(period, bool) or period < 1):
        raise ValidationError("Period must be an integer of at least 1", "period")

    required, optional = EVENT_FIELD_SCHEMA[event_type]
    for name in required:
        if _is_missing(fields.get(name)):
            raise MissingFieldError(event_type, name)

    allowed = set(required) | set(optional)
    for name in VARIANT_EVENT_FIELDS:
        if name not in allowed and fields.get(name) is not None:
            raise ValidationError(f"Field '{name}' does not apply to '{event_type}' events", name)

    normalized = {name: fields.get(name) for name in COMMON_EVENT_FIELDS + VARIANT_EVENT_FIELDS}
    normalized['is_opponent'] = is_opponent

    if event_type == SHOT:
        _validate_shot(normalized)
    elif event_type == PENALTY:
        _validate_penalty(normalized)
    elif event_type == FACEOFF:
        _validate_faceoff(normalized, context)
    elif event_type == CAUSED_TURNOVER:
        _validate_caused_turnover(normalized, resolve_event)
    elif event_type == CLEAR and not isinstance(normalized['clear_success'], bool):
        raise ValidationError("clear_success must be a boolean", "clear_success")

    return ValidatedEvent(event_type=event_type, fields=normalized)


def _validate_shot(fields: Dict[str, Any]) -> None:
    outcome = fields['shot_outcome']
    if outcome not in SHOT_OUTCOMES:
        raise ValidationError(f"Invalid shot outcome: {outcome}", "shot_outcome")

    if fields['assist_player_id'] is not None:
        if outcome != GOAL:
            raise ValidationError("Only goals can carry an assist", "assist_player_id")
        if fields['assist_player_id'] == fields['scorer_player_id']:
            raise ValidationError("A player cannot assist on their own goal", "assist_player_id")

    if fields['goalie_player_id'] is not None and outcome not in GOALIE_OUTCOMES:
        raise ValidationError(f"A {outcome} shot is not credited to a goalie", "goalie_player_id")


def _validate_penalty(fields: Dict[str, Any]) -> None:
    duration = fields['penalty_duration']
    if not isinstance(duration, int) or isinstance(duration, bool) or duration < 0:
        raise ValidationError("Penalty duration must be a whole number of seconds, 0 or more",
                              "penalty_duration")


def _validate_faceoff(fields: Dict[str, Any], context: Optional[GameContext]) -> None:
    if fields['faceoff_player1_id'] == fields['faceoff_player2_id']:
        raise ValidationError("A faceoff needs two different players", "faceoff_player2_id")

    if context is not None:
        winner = fields['faceoff_winner_team_id']
        if winner not in (context.home_team_id, context.opponent_team_id):
            raise InvalidReferenceError(
                f"Faceoff winner team {winner} is not playing in game {context.game_id}",
                "faceoff_winner_team_id"
            )


def _validate_caused_turnover(fields: Dict[str, Any],
                              resolve_event: Optional[Callable[[int], Any]]) -> None:
    if resolve_event is None:
        return

    linked_id = fields['linked_event_id']
    linked = resolve_event(linked_id)
    if linked is None:
        raise InvalidReferenceError(f"Linked event {linked_id} does not exist", "linked_event_id")
    if linked.event_type != TURNOVER:
        raise InvalidReferenceError(
            f"Linked event {linked_id} is a {linked.event_type}, not a turnover", "linked_event_id"
        )
    if linked.game_id != fields['game_id']:
        raise InvalidReferenceError(
            f"Linked turnover {linked_id} belongs to another game", "linked_event_id"
        )
    if linked.is_opponent == fields['is_opponent']:
        raise InvalidReferenceError(
            f"Linked turnover {linked_id} must belong to the opposing side", "linked_event_id"
        )
