from datetime import datetime
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from flask_sqlalchemy import SQLAlchemy

from laxstats.constants import (
    COMMON_EVENT_FIELDS, GOALIE, HOME, OPPONENT, QUARTERS, VARIANT_EVENT_FIELDS
)

db = SQLAlchemy()


# --- Dataclasses for derived statistics ---
@dataclass
class PlayerStats:
    goals: int = 0
    assists: int = 0
    shots: int = 0
    shots_on_goal: int = 0
    ground_balls: int = 0
    turnovers: int = 0
    caused_turnovers: int = 0
    unforced_errors: int = 0  # turnovers with no caused_turnover linked to them
    saves: int = 0
    goals_allowed: int = 0
    faceoffs_won: int = 0
    faceoffs_lost: int = 0
    penalties: int = 0
    penalty_minutes: int = 0

    @property
    def points(self) -> int:
        return self.goals + self.assists

    @property
    def faceoff_attempts(self) -> int:
        return self.faceoffs_won + self.faceoffs_lost

    @property
    def shots_faced(self) -> int:
        return self.saves + self.goals_allowed

    def has_activity(self) -> bool:
        return any(value for value in asdict(self).values())

    def __add__(self, other: 'PlayerStats') -> 'PlayerStats':
        mine, theirs = asdict(self), asdict(other)
        return PlayerStats(**{name: mine[name] + theirs[name] for name in mine})

    def to_dict(self):
        result = asdict(self)
        result['points'] = self.points
        result['faceoff_attempts'] = self.faceoff_attempts
        return result


@dataclass
class PlayerStatsRow:
    player_id: int
    name: str
    number: Optional[int]
    position: List[str]
    is_opponent: bool
    stats: PlayerStats
    shooting_pct: str = '-'
    save_pct: str = '-'
    faceoff_pct: str = '-'

    def to_dict(self):
        return {
            'player_id': self.player_id,
            'name': self.name,
            'number': self.number,
            'position': list(self.position),
            'is_opponent': self.is_opponent,
            'stats': self.stats.to_dict(),
            'shooting_pct': self.shooting_pct,
            'save_pct': self.save_pct,
            'faceoff_pct': self.faceoff_pct,
        }


@dataclass
class ClearStats:
    attempts: int = 0
    successes: int = 0


@dataclass
class PeriodScore:
    period: int
    home_goals: int = 0
    opponent_goals: int = 0


@dataclass
class TeamSummary:
    side: str
    team_id: Optional[int]
    team_name: str
    players: List[PlayerStatsRow] = field(default_factory=list)
    totals: PlayerStats = field(default_factory=PlayerStats)
    clears: ClearStats = field(default_factory=ClearStats)
    shooting_pct: str = '-'
    save_pct: str = '-'
    faceoff_pct: str = '-'
    clear_pct: str = '-'

    def to_dict(self):
        return {
            'side': self.side,
            'team_id': self.team_id,
            'team_name': self.team_name,
            'players': [row.to_dict() for row in self.players],
            'totals': self.totals.to_dict(),
            'clears': asdict(self.clears),
            'shooting_pct': self.shooting_pct,
            'save_pct': self.save_pct,
            'faceoff_pct': self.faceoff_pct,
            'clear_pct': self.clear_pct,
        }


@dataclass
class BoxScore:
    game_id: int
    game_date: Optional[str]
    home: TeamSummary
    opponent: TeamSummary
    our_score: int = 0
    opponent_score: int = 0
    score_by_period: List[PeriodScore] = field(default_factory=list)
    faceoff_differential: int = 0
    ground_ball_differential: int = 0
    turnover_differential: int = 0  # positive when the opponent gave the ball away more often

    def to_dict(self):
        return {
            'game_id': self.game_id,
            'game_date': self.game_date,
            'our_score': self.our_score,
            'opponent_score': self.opponent_score,
            'home': self.home.to_dict(),
            'opponent': self.opponent.to_dict(),
            'score_by_period': [asdict(p) for p in self.score_by_period],
            'faceoff_differential': self.faceoff_differential,
            'ground_ball_differential': self.ground_ball_differential,
            'turnover_differential': self.turnover_differential,
        }


@dataclass(frozen=True)
class GameContext:
    """Snapshot of the game state an operation needs: side identities and goalie pointers"""
    game_id: int
    home_team_id: int
    opponent_team_id: int
    current_home_goalie_id: Optional[int] = None
    current_opponent_goalie_id: Optional[int] = None
    current_period: int = 1

    @classmethod
    def from_game(cls, game: 'Game', current_period: int = 1) -> 'GameContext':
        return cls(
            game_id=game.id,
            home_team_id=game.team_id,
            opponent_team_id=game.opponent_team_id,
            current_home_goalie_id=game.current_home_goalie_id,
            current_opponent_goalie_id=game.current_opponent_goalie_id,
            current_period=current_period,
        )

    def team_id_for(self, side: str) -> int:
        return self.home_team_id if side == HOME else self.opponent_team_id

    def goalie_for(self, side: str) -> Optional[int]:
        return self.current_home_goalie_id if side == HOME else self.current_opponent_goalie_id

    @staticmethod
    def side_of(is_opponent: bool) -> str:
        return OPPONENT if is_opponent else HOME

    @staticmethod
    def opposing(side: str) -> str:
        return HOME if side == OPPONENT else OPPONENT


# --- Models ---
class Program(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False, unique=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    players = db.relationship('Player', backref='program', lazy=True)
    def __repr__(self): return f'<Program {self.name}>'


class Team(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False, unique=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    def __repr__(self): return f'<Team {self.name}>'


class Player(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    program_id = db.Column(db.Integer, db.ForeignKey('program.id'), nullable=True, index=True)
    team_id = db.Column(db.Integer, db.ForeignKey('team.id'), nullable=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=True, index=True)  # opponent rosters are per game
    name = db.Column(db.String(150), nullable=False)
    number = db.Column(db.Integer, nullable=True)
    position = db.Column(db.JSON, nullable=False, default=list)
    is_opponent = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def is_goalie(self) -> bool:
        return GOALIE in (self.position or [])

    def __repr__(self): return f'<Player {self.name} (#{self.number})>'

    def to_dict(self):
        return {
            'id': self.id,
            'program_id': self.program_id,
            'team_id': self.team_id,
            'game_id': self.game_id,
            'name': self.name,
            'number': self.number,
            'position': list(self.position or []),
            'is_opponent': self.is_opponent,
        }


class Game(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    program_id = db.Column(db.Integer, db.ForeignKey('program.id'), nullable=False)
    team_id = db.Column(db.Integer, db.ForeignKey('team.id'), nullable=False)
    opponent_team_id = db.Column(db.Integer, db.ForeignKey('team.id'), nullable=False)
    opponent_name = db.Column(db.String(150), nullable=False)
    game_date = db.Column(db.String(20))
    period_format = db.Column(db.String(10), nullable=False, default=QUARTERS)
    our_score = db.Column(db.Integer, nullable=False, default=0)
    opponent_score = db.Column(db.Integer, nullable=False, default=0)
    # Goalie pointers are set only by explicit selection
    current_home_goalie_id = db.Column(db.Integer, nullable=True)
    current_opponent_goalie_id = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    program = db.relationship('Program', foreign_keys=[program_id])
    team = db.relationship('Team', foreign_keys=[team_id])
    opponent_team = db.relationship('Team', foreign_keys=[opponent_team_id])
    def __repr__(self): return f'<Game {self.id}: vs {self.opponent_name} ({self.game_date})>'

    def to_dict(self):
        return {
            'id': self.id,
            'program_id': self.program_id,
            'team_id': self.team_id,
            'opponent_team_id': self.opponent_team_id,
            'opponent_name': self.opponent_name,
            'game_date': self.game_date,
            'period_format': self.period_format,
            'our_score': self.our_score,
            'opponent_score': self.opponent_score,
            'current_home_goalie_id': self.current_home_goalie_id,
            'current_opponent_goalie_id': self.current_opponent_goalie_id,
        }


class GameEvent(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False, index=True)
    team_id = db.Column(db.Integer, db.ForeignKey('team.id'), nullable=False)
    event_type = db.Column(db.String(20), nullable=False)
    is_opponent = db.Column(db.Boolean, nullable=False, default=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)
    period = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    # shot
    shot_outcome = db.Column(db.String(10), nullable=True)
    scorer_player_id = db.Column(db.Integer, nullable=True)
    assist_player_id = db.Column(db.Integer, nullable=True)
    goalie_player_id = db.Column(db.Integer, nullable=True)
    # ground_ball
    ground_ball_player_id = db.Column(db.Integer, nullable=True)
    # turnover / caused_turnover
    turnover_player_id = db.Column(db.Integer, nullable=True)
    caused_by_player_id = db.Column(db.Integer, nullable=True)
    linked_event_id = db.Column(db.Integer, nullable=True, index=True)
    # penalty
    penalty_type = db.Column(db.String(50), nullable=True)
    penalty_duration = db.Column(db.Integer, nullable=True)  # seconds
    penalty_player_id = db.Column(db.Integer, nullable=True)
    # faceoff
    faceoff_player1_id = db.Column(db.Integer, nullable=True)
    faceoff_player2_id = db.Column(db.Integer, nullable=True)
    faceoff_winner_team_id = db.Column(db.Integer, nullable=True)
    # clear
    clear_success = db.Column(db.Boolean, nullable=True)

    def __repr__(self): return f'<GameEvent {self.id} {self.event_type} in Game {self.game_id}>'

    def to_dict(self):
        result = {'id': self.id, 'event_type': self.event_type}
        for name in COMMON_EVENT_FIELDS + VARIANT_EVENT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, datetime):
                value = value.isoformat()
            result[name] = value
        return result
