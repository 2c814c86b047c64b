"""
Event Repository for the lacrosse stat tracker
Durable event log of a game. Every insert and update is validated and
committed on its own.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy import or_
from laxstats.models import GameContext, GameEvent
from laxstats.repositories.base import BaseRepository
from laxstats.constants import (
    CAUSED_TURNOVER, COMMON_EVENT_FIELDS, PLAYER_EVENT_FIELDS, VARIANT_EVENT_FIELDS
)
from laxstats.exceptions import DatabaseError, NotFoundError, ValidationError
from laxstats.utils.event_validation import validate_event
import logging

logger = logging.getLogger(__name__)


class EventRepository(BaseRepository[GameEvent]):
    """
    Repository for game events
    """

    def __init__(self):
        super().__init__(GameEvent)

    def insert(self, event_type: str, fields: Dict[str, Any],
               context: Optional[GameContext] = None) -> GameEvent:
        """
        Validate and store a new event

        Args:
            event_type: Kind of the event
            fields: Column values
            context: Game context used for reference checks

        Returns:
            The stored event with its assigned id

        Raises:
            ValidationError: If the event is malformed
            InvalidReferenceError: If a linked event or team does not resolve
            DatabaseError: If the store rejected the write
        """
        validated = validate_event(event_type, fields, context, resolve_event=self.get_by_id)
        values = dict(validated.fields)
        if values.get('timestamp') is None:
            values.pop('timestamp', None)

        try:
            event = self.create(commit=True, event_type=event_type, **values)
        except DatabaseError as e:
            logger.error(f"Failed to insert {event_type} event for game {values['game_id']}: {e.message}")
            raise DatabaseError(f"Failed to insert {event_type} event: {e.message}", "insert") from e

        logger.info(f"Recorded {event_type} event {event.id} in game {event.game_id}")
        return event

    def check_update(self, event: GameEvent, partial: Dict[str, Any],
                     context: Optional[GameContext] = None) -> Dict[str, Any]:
        """
        Validate an event merged with a partial update without writing it

        Returns:
            The validated column values of the merged event

        Raises:
            ValidationError: If the merged event is malformed or changes kind
        """
        if 'event_type' in partial and partial['event_type'] != event.event_type:
            raise ValidationError("The kind of an event cannot be changed", "event_type")

        merged = {name: getattr(event, name) for name in COMMON_EVENT_FIELDS + VARIANT_EVENT_FIELDS}
        merged.update({key: value for key, value in partial.items() if key != 'event_type'})
        return validate_event(event.event_type, merged, context, resolve_event=self.get_by_id).fields

    def update_event(self, event_id: int, partial: Dict[str, Any],
                     context: Optional[GameContext] = None) -> GameEvent:
        """
        Apply a partial update to an event after validating the merged result

        Args:
            event_id: Event to update
            partial: Columns to change
            context: Game context used for reference checks

        Returns:
            The updated event
        """
        event = self.get_by_id(event_id)
        if not event:
            self.logger.warning(f"GameEvent with ID {event_id} not found for update")
            raise NotFoundError("GameEvent", event_id)

        for name, value in self.check_update(event, partial, context).items():
            if name == 'timestamp' and value is None:
                continue
            setattr(event, name, value)

        try:
            self.commit()
        except DatabaseError as e:
            raise DatabaseError(f"Failed to update event {event_id}: {e.message}", "update") from e

        logger.info(f"Updated {event.event_type} event {event_id}")
        return event

    def delete_event(self, event_id: int) -> None:
        """
        Remove an event from the log

        Raises:
            NotFoundError: If the event does not exist
            DatabaseError: If the store rejected the delete
        """
        try:
            deleted = self.delete(event_id, commit=True)
        except DatabaseError as e:
            raise DatabaseError(f"Failed to delete event {event_id}: {e.message}", "delete") from e

        if not deleted:
            raise NotFoundError("GameEvent", event_id)

    def delete_by_game(self, game_id: int) -> int:
        """
        Remove every event of a game without committing

        Returns:
            Number of deleted events
        """
        events = self.get_query().filter(GameEvent.game_id == game_id).all()
        for event in events:
            self.db.session.delete(event)
        self.db.session.flush()
        logger.info(f"Deleted {len(events)} events of game {game_id}")
        return len(events)

    def list_by_game(self, game_id: int) -> List[GameEvent]:
        """
        All events of a game, newest first (creation order, ties broken by id)
        """
        return self.get_query().filter(
            GameEvent.game_id == game_id
        ).order_by(
            GameEvent.created_at.desc(),
            GameEvent.id.desc()
        ).all()

    def get_latest(self, game_id: int) -> Optional[GameEvent]:
        return self.get_query().filter(
            GameEvent.game_id == game_id
        ).order_by(
            GameEvent.created_at.desc(),
            GameEvent.id.desc()
        ).first()

    def count_for_player(self, player_id: int) -> int:
        """Number of events that name the player in any role"""
        return self.get_query().filter(
            or_(*[getattr(GameEvent, name) == player_id for name in PLAYER_EVENT_FIELDS])
        ).count()

    def find_caused_turnover_for(self, turnover_id: int) -> Optional[GameEvent]:
        """The caused_turnover linked to a turnover, if any"""
        return self.find_one(event_type=CAUSED_TURNOVER, linked_event_id=turnover_id)
