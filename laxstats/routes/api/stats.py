from flask import jsonify, Response

from laxstats.routes.blueprints import api_bp
from laxstats.services.utils.service_container import get_service


@api_bp.route('/games/<int:game_id>/box-score', methods=['GET'])
def box_score(game_id):
    return jsonify(get_service('stats').get_box_score(game_id).to_dict())


def _download(filename, content, mimetype):
    return Response(
        content,
        mimetype=mimetype,
        headers={'Content-Disposition': f'attachment; filename="{filename}"'}
    )


@api_bp.route('/games/<int:game_id>/export/report.csv', methods=['GET'])
def export_full_report(game_id):
    filename, content = get_service('stats').export_full_report(game_id)
    return _download(filename, content, 'text/csv')


@api_bp.route('/games/<int:game_id>/export/maxpreps.txt', methods=['GET'])
def export_maxpreps(game_id):
    filename, content = get_service('stats').export_maxpreps(game_id)
    return _download(filename, content, 'text/plain')
