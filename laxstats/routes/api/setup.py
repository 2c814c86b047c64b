from flask import jsonify, current_app

from laxstats.routes.blueprints import api_bp
from laxstats.routes.api.common import request_data, serialize
from laxstats.services.utils.service_container import get_container, get_service
from laxstats.constants import DEFAULT_PENALTY_TYPE, PENALTY_TYPES, POSITIONS


@api_bp.route('/programs', methods=['POST'])
def create_program():
    data = request_data()
    program = get_service('program').create_program(data.get('name'))
    return jsonify({'id': program.id, 'name': program.name}), 201


@api_bp.route('/programs/<int:program_id>/players', methods=['GET'])
def list_program_players(program_id):
    get_service('program').get_or_404(program_id)
    players = get_service('player').get_program_roster(program_id)
    return jsonify(serialize(players))


@api_bp.route('/programs/<int:program_id>/players', methods=['POST'])
def add_program_player(program_id):
    get_service('program').get_or_404(program_id)
    data = request_data()
    player = get_service('player').create_player(
        data.get('name'),
        number=data.get('number'),
        position=data.get('position'),
        program_id=program_id
    )
    return jsonify(player.to_dict()), 201


@api_bp.route('/programs/<int:program_id>/games', methods=['GET'])
def list_games(program_id):
    get_service('program').get_or_404(program_id)
    return jsonify(serialize(get_service('game').get_games_for_program(program_id)))


@api_bp.route('/programs/<int:program_id>/games', methods=['POST'])
def create_game(program_id):
    data = request_data()
    game = get_service('game').create_game(
        program_id,
        data.get('opponent_name'),
        game_date=data.get('game_date'),
        period_format=data.get('period_format') or current_app.config['PERIOD_FORMAT']
    )
    return jsonify(game.to_dict()), 201


@api_bp.route('/games/<int:game_id>', methods=['GET'])
def get_game(game_id):
    game = get_service('game').get_or_404(game_id)
    return jsonify(game.to_dict())


@api_bp.route('/games/<int:game_id>/opponents', methods=['GET'])
def list_opponent_players(game_id):
    get_service('game').get_or_404(game_id)
    return jsonify(serialize(get_service('player').get_opponent_roster(game_id)))


@api_bp.route('/games/<int:game_id>/opponents', methods=['POST'])
def add_opponent_player(game_id):
    data = request_data()
    player = get_service('player').create_player(
        data.get('name'),
        number=data.get('number'),
        position=data.get('position'),
        game_id=game_id
    )
    return jsonify(player.to_dict()), 201


@api_bp.route('/choices', methods=['GET'])
def list_choices():
    """Values the scoring screen offers in its pickers"""
    return jsonify({
        'positions': POSITIONS,
        'penalty_types': PENALTY_TYPES,
        'default_penalty_type': DEFAULT_PENALTY_TYPE,
    })


def _bulk_import(program_id=None, game_id=None):
    data = request_data()
    players = get_service('player')
    if 'text' in data:
        return players.import_roster_text(data['text'], program_id=program_id, game_id=game_id)
    if game_id is not None and 'start' in data:
        return players.generate_opponent_numbers(game_id, data.get('start'), data.get('end'))
    return players.bulk_create(data.get('players') or [], program_id=program_id, game_id=game_id)


@api_bp.route('/programs/<int:program_id>/players/bulk', methods=['POST'])
def import_program_players(program_id):
    get_service('program').get_or_404(program_id)
    return jsonify(serialize(_bulk_import(program_id=program_id))), 201


@api_bp.route('/games/<int:game_id>/opponents/bulk', methods=['POST'])
def import_opponent_players(game_id):
    get_service('game').get_or_404(game_id)
    return jsonify(serialize(_bulk_import(game_id=game_id))), 201


@api_bp.route('/players/<int:player_id>', methods=['PATCH'])
def update_player(player_id):
    player = get_service('player').update_player(player_id, **request_data())
    return jsonify(player.to_dict())


@api_bp.route('/players/<int:player_id>', methods=['DELETE'])
def delete_player(player_id):
    get_service('player').delete_player(player_id)
    return jsonify({'deleted': player_id})


@api_bp.route('/games/<int:game_id>', methods=['DELETE'])
def delete_game(game_id):
    get_service('game').delete_game(game_id)
    get_container().pending_goalies.discard(game_id)
    return jsonify({'deleted': game_id})
