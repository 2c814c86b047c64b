"""Helpers shared by the API views"""
from flask import request

from laxstats.models import GameContext
from laxstats.services.core.turnover_service import TurnoverRecord
from laxstats.services.utils.service_container import get_service


def request_data() -> dict:
    return request.get_json(silent=True) or {}


def game_context(game_id: int, data: dict = None) -> GameContext:
    """Context for the request; the client sends the period it is scoring"""
    data = data if data is not None else request_data()
    period = data.get('period')
    if period is None:
        period = request.args.get('period', 1, type=int)
    return get_service('game').get_context(game_id, period)


def serialize(result):
    """JSON-ready form of whatever a service operation returned"""
    if result is None:
        return None
    if isinstance(result, TurnoverRecord):
        return {
            'turnover': result.turnover.to_dict(),
            'caused_turnover': result.caused_turnover.to_dict() if result.caused_turnover else None,
        }
    if isinstance(result, (list, tuple)):
        return [serialize(item) for item in result]
    if hasattr(result, 'to_dict'):
        return result.to_dict()
    return result
