"""
Box score aggregation
Folds the event log of a game into player tallies and team summaries.
Every function here is pure: events in, dataclasses out.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from laxstats.constants import (
    CAUSED_TURNOVER, CLEAR, EMPTY_STAT_PLACEHOLDER, FACEOFF, GOAL, GROUND_BALL, HOME,
    ON_GOAL_OUTCOMES, OPPONENT, PENALTY, SAVED, SHOT, TURNOVER
)
from laxstats.models import (
    BoxScore, ClearStats, PeriodScore, PlayerStats, PlayerStatsRow, TeamSummary
)


def format_percentage(numerator: int, denominator: int) -> str:
    """
    Whole-number percentage, rounded half up.
    Returns the placeholder instead of dividing by zero.
    """
    if not denominator:
        return EMPTY_STAT_PLACEHOLDER
    # integer arithmetic keeps x.5 from being rounded to even
    return f"{(200 * numerator + denominator) // (2 * denominator)}%"


def caused_turnover_links(events: Iterable) -> set:
    """Ids of turnovers that have a caused_turnover pointing at them"""
    return {
        event.linked_event_id
        for event in events
        if event.event_type == CAUSED_TURNOVER and event.linked_event_id is not None
    }


def aggregate_player_stats(events: Sequence, player_id: int, team_id: Optional[int],
                           forced_turnover_ids: Optional[set] = None) -> PlayerStats:
    """
    Tally one player's statistics from the full event list of a game.

    Args:
        events: All events of the game, in any order
        player_id: Player to tally
        team_id: Team the player plays for, decides faceoff wins
        forced_turnover_ids: Precomputed caused_turnover_links(events)

    Returns:
        PlayerStats for the player
    """
    if forced_turnover_ids is None:
        forced_turnover_ids = caused_turnover_links(events)

    stats = PlayerStats()
    for event in events:
        kind = event.event_type
        if kind == SHOT:
            if event.scorer_player_id == player_id:
                stats.shots += 1
                if event.shot_outcome in ON_GOAL_OUTCOMES:
                    stats.shots_on_goal += 1
                if event.shot_outcome == GOAL:
                    stats.goals += 1
            if event.assist_player_id == player_id:
                stats.assists += 1
            if event.goalie_player_id == player_id:
                if event.shot_outcome == SAVED:
                    stats.saves += 1
                elif event.shot_outcome == GOAL:
                    stats.goals_allowed += 1
        elif kind == GROUND_BALL:
            if event.ground_ball_player_id == player_id:
                stats.ground_balls += 1
        elif kind == TURNOVER:
            if event.turnover_player_id == player_id:
                stats.turnovers += 1
                if event.id not in forced_turnover_ids:
                    stats.unforced_errors += 1
        elif kind == CAUSED_TURNOVER:
            if event.caused_by_player_id == player_id:
                stats.caused_turnovers += 1
        elif kind == FACEOFF:
            if player_id in (event.faceoff_player1_id, event.faceoff_player2_id):
                if event.faceoff_winner_team_id == team_id:
                    stats.faceoffs_won += 1
                else:
                    stats.faceoffs_lost += 1
        elif kind == PENALTY:
            if event.penalty_player_id == player_id:
                stats.penalties += 1
                stats.penalty_minutes += (event.penalty_duration or 0) // 60

    return stats


def build_player_rows(events: Sequence, players: Iterable, team_id: Optional[int]) -> List[PlayerStatsRow]:
    """
    Box score rows for a roster, leaving out players without any recorded activity
    """
    forced_turnover_ids = caused_turnover_links(events)
    rows = []
    for player in players:
        stats = aggregate_player_stats(events, player.id, team_id, forced_turnover_ids)
        if not stats.has_activity():
            continue
        rows.append(PlayerStatsRow(
            player_id=player.id,
            name=player.name,
            number=player.number,
            position=list(player.position or []),
            is_opponent=bool(player.is_opponent),
            stats=stats,
            shooting_pct=format_percentage(stats.goals, stats.shots_on_goal),
            save_pct=format_percentage(stats.saves, stats.shots_faced),
            faceoff_pct=format_percentage(stats.faceoffs_won, stats.faceoff_attempts),
        ))
    return rows


def tally_clears(events: Iterable, is_opponent: bool) -> ClearStats:
    clears = ClearStats()
    for event in events:
        if event.event_type == CLEAR and bool(event.is_opponent) == is_opponent:
            clears.attempts += 1
            if event.clear_success:
                clears.successes += 1
    return clears


def is_goal(event) -> bool:
    return event.event_type == SHOT and event.shot_outcome == GOAL


def compute_score(events: Iterable) -> Tuple[int, int]:
    """(our score, opponent score) from goal events, credited by the event's own side"""
    ours = theirs = 0
    for event in events:
        if is_goal(event):
            if event.is_opponent:
                theirs += 1
            else:
                ours += 1
    return ours, theirs


def score_by_period(events: Iterable) -> List[PeriodScore]:
    """Goals per period, ascending; events recorded without a period count toward period 1"""
    buckets = {}
    for event in events:
        if not is_goal(event):
            continue
        period = event.period or 1
        bucket = buckets.setdefault(period, PeriodScore(period=period))
        if event.is_opponent:
            bucket.opponent_goals += 1
        else:
            bucket.home_goals += 1
    return [buckets[period] for period in sorted(buckets)]


def build_team_summary(side: str, team_id: Optional[int], team_name: str,
                       events: Sequence, players: Iterable) -> TeamSummary:
    rows = build_player_rows(events, players, team_id)

    totals = PlayerStats()
    for row in rows:
        totals = totals + row.stats

    clears = tally_clears(events, is_opponent=(side == OPPONENT))

    return TeamSummary(
        side=side,
        team_id=team_id,
        team_name=team_name,
        players=rows,
        totals=totals,
        clears=clears,
        shooting_pct=format_percentage(totals.goals, totals.shots_on_goal),
        save_pct=format_percentage(totals.saves, totals.shots_faced),
        faceoff_pct=format_percentage(totals.faceoffs_won, totals.faceoff_attempts),
        clear_pct=format_percentage(clears.successes, clears.attempts),
    )


def build_box_score(game, events: Sequence, home_players: Iterable, opponent_players: Iterable,
                    home_name: str) -> BoxScore:
    """
    Assemble the full box score of a game.

    Args:
        game: Game row (ids, opponent name, date)
        events: Every event of the game
        home_players: Program roster
        opponent_players: Opponent roster for this game
        home_name: Display name of the home program

    Returns:
        BoxScore with both team summaries, score by period and differentials
    """
    home = build_team_summary(HOME, game.team_id, home_name, events, home_players)
    opponent = build_team_summary(OPPONENT, game.opponent_team_id, game.opponent_name,
                                  events, opponent_players)
    our_score, opponent_score = compute_score(events)

    return BoxScore(
        game_id=game.id,
        game_date=game.game_date,
        home=home,
        opponent=opponent,
        our_score=our_score,
        opponent_score=opponent_score,
        score_by_period=score_by_period(events),
        faceoff_differential=home.totals.faceoffs_won - opponent.totals.faceoffs_won,
        ground_ball_differential=home.totals.ground_balls - opponent.totals.ground_balls,
        turnover_differential=opponent.totals.turnovers - home.totals.turnovers,
    )
