from flask import jsonify

from laxstats.routes.blueprints import api_bp
from laxstats.routes.api.common import game_context, request_data, serialize
from laxstats.services.utils.service_container import get_service
from laxstats.constants import (
    CAUSED_TURNOVER, CLEAR, DEFAULT_PENALTY_DURATION, DEFAULT_PENALTY_TYPE, FACEOFF,
    GROUND_BALL, PENALTY, SHOT, TURNOVER
)
from laxstats.exceptions import ValidationError


def _record(kind, context, data):
    events = get_service('event')
    side = data.get('side')
    period = data.get('period')

    if kind == SHOT:
        return events.record_shot(
            context, side, data.get('scorer_player_id'), data.get('shot_outcome'),
            assist_player_id=data.get('assist_player_id'), period=period
        )
    if kind == GROUND_BALL:
        return events.record_ground_ball(context, side, data.get('ground_ball_player_id'), period=period)
    if kind == TURNOVER:
        return events.record_turnover(
            context, side, data.get('turnover_player_id'),
            causer_player_id=data.get('caused_by_player_id'), period=period
        )
    if kind == CAUSED_TURNOVER:
        return events.record_caused_turnover(context, side, data.get('caused_by_player_id'), period=period)
    if kind == PENALTY:
        return events.record_penalty(
            context, side,
            player_id=data.get('penalty_player_id'),
            penalty_type=data.get('penalty_type') or DEFAULT_PENALTY_TYPE,
            penalty_duration=data.get('penalty_duration', DEFAULT_PENALTY_DURATION),
            period=period
        )
    if kind == FACEOFF:
        return events.record_faceoff(
            context, data.get('faceoff_player1_id'), data.get('faceoff_player2_id'),
            data.get('faceoff_winner_team_id'), period=period
        )
    if kind == CLEAR:
        return events.record_clear(context, side, data.get('clear_success'), period=period)
    raise ValidationError(f"Unknown event type: {kind}", "event_type")


@api_bp.route('/games/<int:game_id>/events', methods=['GET'])
def list_events(game_id):
    get_service('game').get_or_404(game_id)
    return jsonify(serialize(get_service('event').list_events(game_id)))


@api_bp.route('/games/<int:game_id>/events/<kind>', methods=['POST'])
def record_event(game_id, kind):
    data = request_data()
    context = game_context(game_id, data)
    result = _record(kind, context, data)
    return jsonify(serialize(result)), 201


@api_bp.route('/games/<int:game_id>/events/<int:event_id>', methods=['PATCH'])
def edit_event(game_id, event_id):
    data = request_data()
    context = game_context(game_id, data)
    fields = data.get('fields')
    if not isinstance(fields, dict) or not fields:
        raise ValidationError("Send the changed values in 'fields'", "fields")
    updated = get_service('event').edit_event(context, event_id, **fields)
    return jsonify(serialize(updated))


@api_bp.route('/games/<int:game_id>/events/<int:event_id>', methods=['DELETE'])
def delete_event(game_id, event_id):
    context = game_context(game_id)
    removed = get_service('event').delete_event(context, event_id)
    return jsonify({'removed': removed})


@api_bp.route('/games/<int:game_id>/undo', methods=['POST'])
def undo_last_event(game_id):
    context = game_context(game_id)
    removed = get_service('event').undo_last(context)
    return jsonify({'removed': removed})
