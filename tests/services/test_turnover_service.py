"""
Tests for TurnoverService
"""

import pytest
from types import SimpleNamespace
from unittest.mock import Mock

from laxstats.constants import CAUSED_TURNOVER, HOME, OPPONENT, TURNOVER
from laxstats.exceptions import (
    DatabaseError, InvalidReferenceError, NotFoundError, PartialWriteError
)
from laxstats.models import GameContext, GameEvent
from laxstats.repositories.core import EventRepository, PlayerRepository
from laxstats.services.core import TurnoverService


def kinds(events):
    return sorted(event.event_type for event in events)


class TestTurnoverService:
    """Test cases for TurnoverService against the database"""

    @pytest.fixture(autouse=True)
    def setup(self, services, lacrosse_game, context):
        self.service = services.get_service('turnover')
        self.events = EventRepository()
        self.game = lacrosse_game
        self.context = context

    def game_events(self):
        return self.events.list_by_game(self.game.game.id)

    def test_record_turnover_with_causer(self):
        # Act
        record = self.service.record_turnover(
            self.context, OPPONENT, self.game.opponent.attack.id,
            causer_player_id=self.game.home.defense.id
        )

        # Assert
        assert record.turnover.event_type == TURNOVER
        assert record.turnover.is_opponent is True
        assert record.turnover.team_id == self.game.away_team.id
        assert record.caused_turnover.event_type == CAUSED_TURNOVER
        assert record.caused_turnover.is_opponent is False
        assert record.caused_turnover.linked_event_id == record.turnover.id
        assert kinds(self.game_events()) == [CAUSED_TURNOVER, TURNOVER]

    def test_record_turnover_without_causer(self):
        record = self.service.record_turnover(self.context, HOME, self.game.home.middie.id)

        assert record.caused_turnover is None
        assert kinds(self.game_events()) == [TURNOVER]

    def test_record_turnover_uses_context_period(self):
        context = GameContext.from_game(self.game.game, current_period=3)

        record = self.service.record_turnover(context, HOME, None)

        assert record.turnover.period == 3

    def test_causer_must_be_on_the_other_side(self):
        # Act & Assert
        with pytest.raises(InvalidReferenceError) as exc_info:
            self.service.record_turnover(
                self.context, HOME, self.game.home.middie.id,
                causer_player_id=self.game.home.defense.id
            )

        assert exc_info.value.reference == 'caused_by_player_id'
        assert self.game_events() == []

    def test_record_caused_turnover_synthesizes_anonymous_turnover(self):
        # Act
        record = self.service.record_caused_turnover(self.context, HOME, self.game.home.defense.id)

        # Assert
        assert record.turnover.turnover_player_id is None
        assert record.turnover.is_opponent is True
        assert record.caused_turnover.caused_by_player_id == self.game.home.defense.id
        assert record.caused_turnover.linked_event_id == record.turnover.id

    def test_edit_adds_causer(self):
        # Arrange
        record = self.service.record_turnover(self.context, OPPONENT, self.game.opponent.attack.id)

        # Act
        result = self.service.edit_turnover(
            self.context, record.turnover.id, self.game.opponent.attack.id, self.game.home.middie.id
        )

        # Assert
        caused = [e for e in self.game_events() if e.event_type == CAUSED_TURNOVER]
        assert len(caused) == 1
        assert caused[0].linked_event_id == record.turnover.id
        assert result.caused_turnover.id == caused[0].id

    def test_edit_removes_causer(self):
        # Arrange
        record = self.service.record_turnover(
            self.context, OPPONENT, self.game.opponent.attack.id, self.game.home.middie.id
        )

        # Act
        result = self.service.edit_turnover(
            self.context, record.turnover.id, self.game.opponent.attack.id, None
        )

        # Assert
        assert result.caused_turnover is None
        assert kinds(self.game_events()) == [TURNOVER]

    def test_edit_changes_causer_in_place(self):
        # Arrange
        record = self.service.record_turnover(
            self.context, OPPONENT, self.game.opponent.attack.id, self.game.home.middie.id
        )
        caused_id = record.caused_turnover.id

        # Act
        result = self.service.edit_turnover(
            self.context, record.turnover.id, self.game.opponent.middie.id, self.game.home.defense.id
        )

        # Assert
        events = self.game_events()
        assert len(events) == 2
        assert result.caused_turnover.id == caused_id
        assert result.caused_turnover.caused_by_player_id == self.game.home.defense.id
        assert result.turnover.turnover_player_id == self.game.opponent.middie.id

    def test_edit_unknown_turnover(self):
        with pytest.raises(NotFoundError):
            self.service.edit_turnover(self.context, 9999, None, None)

    def test_delete_turnover_deletes_pair(self):
        # Arrange
        record = self.service.record_turnover(
            self.context, OPPONENT, self.game.opponent.attack.id, self.game.home.middie.id
        )
        expected = [record.turnover.id, record.caused_turnover.id]

        # Act
        deleted = self.service.delete_turnover(record.turnover.id)

        # Assert
        assert deleted == expected
        assert self.game_events() == []

    def test_deleting_caused_turnover_deletes_pair(self):
        record = self.service.record_caused_turnover(self.context, OPPONENT, self.game.opponent.middie.id)
        expected = [record.caused_turnover.id, record.turnover.id]

        deleted = self.service.delete_with_counterpart(record.caused_turnover)

        assert deleted == expected
        assert self.game_events() == []

    def test_edit_caused_turnover(self):
        record = self.service.record_caused_turnover(self.context, HOME, self.game.home.defense.id)

        updated = self.service.edit_caused_turnover(
            self.context, record.caused_turnover.id, self.game.home.middie.id
        )

        assert updated.caused_by_player_id == self.game.home.middie.id


class TestTurnoverServicePartialWrites:
    """Failure of the second write of a pair is reported, never silent"""

    def setup_method(self):
        self.mock_events = Mock(spec=EventRepository)
        self.mock_players = Mock(spec=PlayerRepository)
        self.mock_players.find_on_side.return_value = SimpleNamespace(id=1)
        self.service = TurnoverService(self.mock_events, self.mock_players)
        self.context = GameContext(game_id=1, home_team_id=10, opponent_team_id=20)

    def test_caused_turnover_insert_fails(self):
        # Arrange
        turnover = GameEvent(id=11, game_id=1, event_type=TURNOVER, is_opponent=True)
        self.mock_events.insert.side_effect = [turnover, DatabaseError("disk full", "insert")]

        # Act
        with pytest.raises(PartialWriteError) as exc_info:
            self.service.record_turnover(self.context, OPPONENT, 5, causer_player_id=6)

        # Assert
        assert exc_info.value.committed_ids == [11]
        assert exc_info.value.failed_operation == 'insert caused_turnover'
        assert exc_info.value.code == 'PARTIAL_WRITE'

    def test_edit_delete_of_caused_turnover_fails(self):
        # Arrange
        turnover = GameEvent(id=11, game_id=1, event_type=TURNOVER, is_opponent=True)
        linked = GameEvent(id=12, game_id=1, event_type=CAUSED_TURNOVER, is_opponent=False,
                           linked_event_id=11, caused_by_player_id=6)
        self.mock_events.get_by_id.return_value = turnover
        self.mock_events.find_caused_turnover_for.return_value = linked
        self.mock_events.update_event.return_value = turnover
        self.mock_events.delete_event.side_effect = DatabaseError("locked", "delete")

        # Act
        with pytest.raises(PartialWriteError) as exc_info:
            self.service.edit_turnover(self.context, 11, 5, None)

        # Assert
        assert exc_info.value.committed_ids == [11]
        self.mock_events.update_event.assert_called_once_with(11, {'turnover_player_id': 5}, self.context)

    def test_pair_delete_fails_on_second_event(self):
        turnover = GameEvent(id=11, game_id=1, event_type=TURNOVER, is_opponent=True)
        linked = GameEvent(id=12, game_id=1, event_type=CAUSED_TURNOVER, linked_event_id=11)
        self.mock_events.find_caused_turnover_for.return_value = linked
        self.mock_events.delete_event.side_effect = [None, DatabaseError("locked", "delete")]

        with pytest.raises(PartialWriteError) as exc_info:
            self.service.delete_with_counterpart(turnover)

        assert exc_info.value.committed_ids == [11]
        assert exc_info.value.failed_operation == 'delete caused_turnover'
