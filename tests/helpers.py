"""
Helpers for building plain event and player objects
"""

import itertools
from types import SimpleNamespace

from laxstats.constants import VARIANT_EVENT_FIELDS

_event_ids = itertools.count(1000)


def make_event(event_type, **fields):
    """Event object for the aggregation functions; unset columns are None."""
    values = {name: None for name in VARIANT_EVENT_FIELDS}
    values.update(id=next(_event_ids), game_id=1, team_id=1, is_opponent=False, period=1, timestamp=None)
    values.update(fields)
    return SimpleNamespace(event_type=event_type, **values)


def make_player(id, name, number=None, position=None, is_opponent=False):
    return SimpleNamespace(id=id, name=name, number=number, position=position or [],
                           is_opponent=is_opponent)
