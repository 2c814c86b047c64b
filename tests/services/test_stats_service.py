"""
Tests for StatsService
"""

import csv
import io

import pytest

from laxstats.constants import HOME, OPPONENT
from laxstats.exceptions import NotFoundError


@pytest.fixture
def played_game(services, lacrosse_game, goalie_context):
    """The seeded game with a short first quarter recorded"""
    events = services.get_service('event')
    home, opponent = lacrosse_game.home, lacrosse_game.opponent

    events.record_faceoff(goalie_context, home.middie.id, opponent.middie.id, lacrosse_game.home_team.id)
    events.record_ground_ball(goalie_context, HOME, home.middie.id)
    events.record_shot(goalie_context, HOME, home.attack.id, 'goal', assist_player_id=home.middie.id)
    events.record_shot(goalie_context, HOME, home.attack.id, 'saved')
    events.record_shot(goalie_context, OPPONENT, opponent.attack.id, 'saved')
    events.record_turnover(goalie_context, OPPONENT, opponent.middie.id, home.defense.id)
    events.record_clear(goalie_context, HOME, True)
    events.record_clear(goalie_context, HOME, False)
    events.record_penalty(goalie_context, OPPONENT, opponent.attack.id, 'Slash', 60)
    return lacrosse_game


class TestStatsService:
    """Test cases for StatsService"""

    @pytest.fixture(autouse=True)
    def setup(self, services, played_game):
        self.service = services.get_service('stats')
        self.game = played_game

    def players_by_name(self, summary):
        return {row.name: row for row in summary.players}

    def test_box_score_home_side(self):
        # Act
        box = self.service.get_box_score(self.game.game.id)

        # Assert
        assert box.home.team_name == 'Lakeside Lacrosse'
        assert box.home.totals.goals == 1
        assert box.home.totals.shots == 2
        assert box.home.shooting_pct == '50%'
        assert box.home.clear_pct == '50%'
        assert box.home.faceoff_pct == '100%'
        assert box.home.save_pct == '100%'

        rows = self.players_by_name(box.home)
        assert rows['Alex Attack'].stats.goals == 1
        assert rows['Morgan Middie'].stats.assists == 1
        assert rows['Morgan Middie'].stats.ground_balls == 1
        assert rows['Dana Defense'].stats.caused_turnovers == 1
        assert rows['Gale Goalie'].stats.saves == 1

    def test_box_score_opponent_side(self):
        box = self.service.get_box_score(self.game.game.id)

        rows = self.players_by_name(box.opponent)
        assert box.opponent.team_name == 'Riverton'
        assert rows['Pat Keeper'].stats.saves == 1
        assert rows['Pat Keeper'].stats.goals_allowed == 1
        assert rows['Sam Runner'].stats.turnovers == 1
        assert rows['Sam Runner'].stats.faceoffs_lost == 1
        assert rows['Riley Shooter'].stats.penalty_minutes == 1
        assert box.opponent.save_pct == '50%'

    def test_box_score_score_and_differentials(self):
        box = self.service.get_box_score(self.game.game.id)

        assert (box.our_score, box.opponent_score) == (1, 0)
        assert box.faceoff_differential == 1
        assert box.ground_ball_differential == 1
        assert box.turnover_differential == 1

    def test_unknown_game(self):
        with pytest.raises(NotFoundError):
            self.service.get_box_score(4242)

    def test_full_report_export(self):
        # Act
        filename, content = self.service.export_full_report(self.game.game.id)

        # Assert
        rows = list(csv.reader(io.StringIO(content)))
        assert filename == 'Game_Report_Riverton_2024-04-12.csv'
        assert rows[0] == ['Game Report - 2024-04-12']
        assert rows[2] == ['Final Score: 1 - 0']
        assert ['OPPONENT - Riverton'] in rows

    def test_maxpreps_export(self):
        filename, content = self.service.export_maxpreps(self.game.game.id)

        lines = content.split('\n')
        assert filename == 'MaxPreps_Riverton_2024-04-12.txt'
        # four home players took part; the opponent is not exported
        assert len(lines) == 2 + 4
        assert any(line.startswith('1|') for line in lines[2:])
