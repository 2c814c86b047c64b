# Sides of a game
HOME = 'home'
OPPONENT = 'opponent'
SIDES = [HOME, OPPONENT]

# Player positions
ATTACK = 'Attack'
MIDFIELD = 'Midfield'
DEFENSE = 'Defense'
GOALIE = 'Goalie'
POSITIONS = [ATTACK, MIDFIELD, DEFENSE, GOALIE]

# Event kinds
SHOT = 'shot'
GROUND_BALL = 'ground_ball'
TURNOVER = 'turnover'
CAUSED_TURNOVER = 'caused_turnover'
PENALTY = 'penalty'
FACEOFF = 'faceoff'
CLEAR = 'clear'
EVENT_TYPES = [SHOT, GROUND_BALL, TURNOVER, CAUSED_TURNOVER, PENALTY, FACEOFF, CLEAR]

# Shot outcomes
GOAL = 'goal'
SAVED = 'saved'
MISSED = 'missed'
BLOCKED = 'blocked'
SHOT_OUTCOMES = [GOAL, SAVED, MISSED, BLOCKED]
ON_GOAL_OUTCOMES = [GOAL, SAVED]
GOALIE_OUTCOMES = [GOAL, SAVED]  # outcomes that credit the opposing goalie

# Columns shared by every event kind
COMMON_EVENT_FIELDS = ['game_id', 'team_id', 'is_opponent', 'timestamp', 'period']

# Variant columns per event kind: (required, optional)
EVENT_FIELD_SCHEMA = {
    SHOT: (['shot_outcome', 'scorer_player_id'], ['assist_player_id', 'goalie_player_id']),
    GROUND_BALL: (['ground_ball_player_id'], []),
    TURNOVER: ([], ['turnover_player_id']),
    CAUSED_TURNOVER: (['caused_by_player_id', 'linked_event_id'], []),
    PENALTY: (['penalty_type', 'penalty_duration'], ['penalty_player_id']),
    FACEOFF: (['faceoff_player1_id', 'faceoff_player2_id', 'faceoff_winner_team_id'], []),
    CLEAR: (['clear_success'], []),
}

VARIANT_EVENT_FIELDS = sorted({
    name
    for required, optional in EVENT_FIELD_SCHEMA.values()
    for name in required + optional
})

# Penalty choices offered by the scoring screen
PENALTY_TYPES = [
    'Slash', 'Hold', 'Push', 'Offsides', 'Illegal Body Check',
    'Cross Check', 'Interference', 'Unsportsmanlike', 'Illegal Equipment',
    'Too Many Players', 'Technical Foul', 'Other'
]
DEFAULT_PENALTY_TYPE = 'Other'
DEFAULT_PENALTY_DURATION = 60  # seconds

# Period formats
QUARTERS = 'quarters'
HALVES = 'halves'
MAX_PERIODS = {QUARTERS: 4, HALVES: 2}

# Placeholder shown when a percentage has a zero denominator
EMPTY_STAT_PLACEHOLDER = '-'

FULL_REPORT_HEADER = [
    'Player Number', 'Player Name', 'Position', 'Goals', 'Assists', 'Points', 'Shots', 'SOG',
    'GB', 'TO', 'CT', 'FO Won', 'FO Lost', 'Saves', 'GA', 'PEN', 'PIM'
]
MAXPREPS_HEADER = [
    'Jersey', 'Goals', 'Assists', 'TotalShots', 'ShotsOnGoal', 'GroundBalls', 'Turnovers',
    'Takeaways', 'UnforcedErrors', 'FaceoffWon', 'FaceoffAttempts', 'Saves', 'GoalsAgainst',
    'Penalties', 'PenaltyMinutes'
]

# Event columns that reference a player
PLAYER_EVENT_FIELDS = [
    'scorer_player_id', 'assist_player_id', 'goalie_player_id', 'ground_ball_player_id',
    'turnover_player_id', 'caused_by_player_id', 'penalty_player_id',
    'faceoff_player1_id', 'faceoff_player2_id',
]

DEFAULT_POSITION = MIDFIELD  # bulk imports without a known position
