from flask import jsonify

from laxstats.routes.blueprints import api_bp
from laxstats.routes.api.common import game_context, request_data, serialize
from laxstats.services.utils.service_container import get_service, get_container
from laxstats.exceptions import MissingFieldError


@api_bp.route('/games/<int:game_id>/goalies/<side>', methods=['GET'])
def goalie_status(game_id, side):
    context = game_context(game_id)
    goalies = get_service('goalie')
    pending = get_container().pending_goalies.peek(game_id)
    return jsonify({
        'side': side,
        'state': goalies.goalie_state(context, side),
        'current_goalie_id': context.goalie_for(side),
        'eligible': serialize(goalies.eligible_goalies(context, side)),
        'pending_action': pending is not None and pending.side == side,
    })


@api_bp.route('/games/<int:game_id>/goalies/<side>', methods=['PUT'])
def select_goalie(game_id, side):
    data = request_data()
    if data.get('player_id') is None:
        raise MissingFieldError('goalie_selection', 'player_id')
    context = game_context(game_id, data)
    selection = get_service('goalie').select_goalie(context, side, data['player_id'])
    return jsonify({
        'side': side,
        'current_goalie_id': selection.context.goalie_for(side),
        'resumed': serialize(selection.resumed_result),
    })
