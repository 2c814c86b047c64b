# Event validation, box score aggregation and export rendering

from .event_validation import ValidatedEvent, validate_event
from .stats_aggregation import (
    aggregate_player_stats,
    build_box_score,
    build_player_rows,
    build_team_summary,
    compute_score,
    format_percentage,
    score_by_period,
    tally_clears
)
from .export_formatters import format_full_game_report, format_maxpreps_report
