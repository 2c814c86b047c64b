"""
Shared test fixtures and configuration
"""

from types import SimpleNamespace

import pytest

from laxstats import create_app
from laxstats.constants import ATTACK, DEFENSE, GOALIE, MIDFIELD
from laxstats.models import db, Game, GameContext, Player, Program, Team
from laxstats.services.utils.service_container import get_container


@pytest.fixture
def app():
    """Create and configure a test Flask application."""
    app = create_app('testing', SECRET_KEY='test-secret-key')

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create a test client for the Flask application."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Create a test runner for the Flask application."""
    return app.test_cli_runner()


@pytest.fixture
def services(app):
    """The application's service container."""
    return get_container()


def _player(name, number, position, **kwargs):
    player = Player(name=name, number=number, position=position, **kwargs)
    db.session.add(player)
    return player


@pytest.fixture
def lacrosse_game(app):
    """
    A program with a home roster (including one goalie), an opponent roster and a game.
    No goalie is selected yet.
    """
    program = Program(name='Lakeside Lacrosse')
    home_team = Team(name='Lakeside Lacrosse')
    away_team = Team(name='Riverton')
    db.session.add_all([program, home_team, away_team])
    db.session.flush()

    game = Game(
        program_id=program.id,
        team_id=home_team.id,
        opponent_team_id=away_team.id,
        opponent_name='Riverton',
        game_date='2024-04-12',
    )
    db.session.add(game)
    db.session.flush()

    home = SimpleNamespace(
        attack=_player('Alex Attack', 1, [ATTACK], program_id=program.id, team_id=home_team.id),
        middie=_player('Morgan Middie', 12, [MIDFIELD], program_id=program.id, team_id=home_team.id),
        defense=_player('Dana Defense', 24, [DEFENSE], program_id=program.id, team_id=home_team.id),
        goalie=_player('Gale Goalie', 30, [GOALIE], program_id=program.id, team_id=home_team.id),
    )
    opponent = SimpleNamespace(
        attack=_player('Riley Shooter', 7, [], game_id=game.id, team_id=away_team.id, is_opponent=True),
        middie=_player('Sam Runner', 15, [], game_id=game.id, team_id=away_team.id, is_opponent=True),
        goalie=_player('Pat Keeper', 1, [], game_id=game.id, team_id=away_team.id, is_opponent=True),
    )
    db.session.commit()

    return SimpleNamespace(
        program=program,
        game=game,
        home_team=home_team,
        away_team=away_team,
        home=home,
        opponent=opponent,
    )


@pytest.fixture
def context(lacrosse_game):
    """Context of the seeded game before any goalie selection."""
    return GameContext.from_game(lacrosse_game.game)


@pytest.fixture
def goalie_context(lacrosse_game):
    """Context of the seeded game with both goalies selected."""
    game = lacrosse_game.game
    game.current_home_goalie_id = lacrosse_game.home.goalie.id
    game.current_opponent_goalie_id = lacrosse_game.opponent.goalie.id
    db.session.commit()
    return GameContext.from_game(game)
