"""
Tests for event validation
"""

import pytest

from laxstats.constants import (
    CAUSED_TURNOVER, CLEAR, FACEOFF, GROUND_BALL, PENALTY, SHOT, TURNOVER, VARIANT_EVENT_FIELDS
)
from laxstats.exceptions import InvalidReferenceError, MissingFieldError, ValidationError
from laxstats.models import GameContext
from laxstats.utils.event_validation import validate_event
from tests.helpers import make_event


CONTEXT = GameContext(game_id=1, home_team_id=10, opponent_team_id=20)


def base(**fields):
    values = {'game_id': 1, 'team_id': 10, 'is_opponent': False, 'period': 1}
    values.update(fields)
    return values


class TestValidateEvent:
    """Test cases for validate_event"""

    def test_valid_shot_fills_every_other_column_with_none(self):
        # Act
        result = validate_event(SHOT, base(shot_outcome='goal', scorer_player_id=5, assist_player_id=6))

        # Assert
        assert result.event_type == SHOT
        assert result['scorer_player_id'] == 5
        assert result['assist_player_id'] == 6
        for name in VARIANT_EVENT_FIELDS:
            if name not in ('shot_outcome', 'scorer_player_id', 'assist_player_id'):
                assert result[name] is None

    def test_unknown_event_type(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_event('timeout', base())

        assert exc_info.value.field == 'event_type'

    def test_missing_mandatory_field(self):
        with pytest.raises(MissingFieldError) as exc_info:
            validate_event(SHOT, base(shot_outcome='saved'))

        assert exc_info.value.field == 'scorer_player_id'
        assert exc_info.value.kind == SHOT
        assert exc_info.value.code == 'MISSING_FIELD'

    def test_missing_game_id(self):
        with pytest.raises(MissingFieldError) as exc_info:
            validate_event(GROUND_BALL, {'team_id': 10, 'ground_ball_player_id': 3})

        assert exc_info.value.field == 'game_id'

    def test_blank_penalty_type_counts_as_missing(self):
        with pytest.raises(MissingFieldError) as exc_info:
            validate_event(PENALTY, base(penalty_type='  ', penalty_duration=60))

        assert exc_info.value.field == 'penalty_type'

    def test_field_of_another_kind_is_a_contradiction(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_event(GROUND_BALL, base(ground_ball_player_id=3, shot_outcome='goal'))

        assert exc_info.value.field == 'shot_outcome'

    def test_unknown_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_event(GROUND_BALL, base(ground_ball_player_id=3, hustle=True))

        assert 'hustle' in str(exc_info.value)

    def test_turnover_player_is_optional(self):
        result = validate_event(TURNOVER, base())

        assert result['turnover_player_id'] is None

    def test_invalid_shot_outcome(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_event(SHOT, base(shot_outcome='post', scorer_player_id=5))

        assert exc_info.value.field == 'shot_outcome'

    def test_assist_only_on_goals(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_event(SHOT, base(shot_outcome='saved', scorer_player_id=5, assist_player_id=6))

        assert exc_info.value.field == 'assist_player_id'

    def test_player_cannot_assist_own_goal(self):
        with pytest.raises(ValidationError):
            validate_event(SHOT, base(shot_outcome='goal', scorer_player_id=5, assist_player_id=5))

    def test_missed_shot_carries_no_goalie(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_event(SHOT, base(shot_outcome='missed', scorer_player_id=5, goalie_player_id=9))

        assert exc_info.value.field == 'goalie_player_id'

    def test_negative_penalty_duration(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_event(PENALTY, base(penalty_type='Slash', penalty_duration=-60))

        assert exc_info.value.field == 'penalty_duration'

    @pytest.mark.parametrize('period', [0, -1, 'second', True])
    def test_invalid_period(self, period):
        with pytest.raises(ValidationError) as exc_info:
            validate_event(GROUND_BALL, base(ground_ball_player_id=3, period=period))

        assert exc_info.value.field == 'period'

    def test_is_opponent_must_be_boolean(self):
        with pytest.raises(ValidationError):
            validate_event(GROUND_BALL, base(ground_ball_player_id=3, is_opponent='yes'))

    def test_clear_success_must_be_boolean(self):
        with pytest.raises(ValidationError):
            validate_event(CLEAR, base(clear_success='yes'))

    def test_faceoff_needs_two_players(self):
        with pytest.raises(ValidationError):
            validate_event(FACEOFF, base(faceoff_player1_id=3, faceoff_player2_id=3,
                                         faceoff_winner_team_id=10), CONTEXT)

    def test_faceoff_winner_must_play_in_the_game(self):
        with pytest.raises(InvalidReferenceError) as exc_info:
            validate_event(FACEOFF, base(faceoff_player1_id=3, faceoff_player2_id=4,
                                         faceoff_winner_team_id=99), CONTEXT)

        assert exc_info.value.reference == 'faceoff_winner_team_id'

    def test_faceoff_winner_not_checked_without_context(self):
        result = validate_event(FACEOFF, base(faceoff_player1_id=3, faceoff_player2_id=4,
                                              faceoff_winner_team_id=99))

        assert result['faceoff_winner_team_id'] == 99


class TestCausedTurnoverLink:
    """Test cases for linked_event_id resolution"""

    def setup_method(self):
        self.turnover = make_event(TURNOVER, game_id=1, is_opponent=True)
        self.ground_ball = make_event(GROUND_BALL, game_id=1, is_opponent=True)
        self.events = {e.id: e for e in (self.turnover, self.ground_ball)}

    def caused(self, linked_event_id, is_opponent=False, game_id=1):
        return base(game_id=game_id, is_opponent=is_opponent,
                    caused_by_player_id=4, linked_event_id=linked_event_id)

    def test_links_to_opposing_turnover(self):
        result = validate_event(CAUSED_TURNOVER, self.caused(self.turnover.id),
                                resolve_event=self.events.get)

        assert result['linked_event_id'] == self.turnover.id

    def test_missing_linked_event(self):
        with pytest.raises(InvalidReferenceError):
            validate_event(CAUSED_TURNOVER, self.caused(424242), resolve_event=self.events.get)

    def test_linked_event_must_be_a_turnover(self):
        with pytest.raises(InvalidReferenceError) as exc_info:
            validate_event(CAUSED_TURNOVER, self.caused(self.ground_ball.id),
                           resolve_event=self.events.get)

        assert 'not a turnover' in str(exc_info.value)

    def test_linked_turnover_must_be_other_side(self):
        with pytest.raises(InvalidReferenceError):
            validate_event(CAUSED_TURNOVER, self.caused(self.turnover.id, is_opponent=True),
                           resolve_event=self.events.get)

    def test_linked_turnover_must_be_same_game(self):
        with pytest.raises(InvalidReferenceError):
            validate_event(CAUSED_TURNOVER, self.caused(self.turnover.id, game_id=2),
                           resolve_event=self.events.get)

    def test_missing_link(self):
        with pytest.raises(MissingFieldError) as exc_info:
            validate_event(CAUSED_TURNOVER, base(caused_by_player_id=4))

        assert exc_info.value.field == 'linked_event_id'
