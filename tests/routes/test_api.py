"""
Tests for the JSON API
"""

import pytest


class TestSetupRoutes:

    def test_program_roster_and_game(self, client):
        # Act
        response = client.post('/api/programs', json={'name': 'Lakeside Lacrosse'})
        program_id = response.get_json()['id']
        player = client.post(f'/api/programs/{program_id}/players',
                             json={'name': 'Gale Goalie', 'number': 30, 'position': ['Goalie']})
        game = client.post(f'/api/programs/{program_id}/games',
                           json={'opponent_name': 'Riverton', 'game_date': '2024-04-12'})
        game_id = game.get_json()['id']
        opponent = client.post(f'/api/games/{game_id}/opponents', json={'name': 'Pat Keeper', 'number': 1})

        # Assert
        assert response.status_code == 201
        assert player.status_code == 201
        assert game.status_code == 201
        assert game.get_json()['period_format'] == 'quarters'
        assert opponent.get_json()['is_opponent'] is True
        roster = client.get(f'/api/programs/{program_id}/players').get_json()
        assert [p['name'] for p in roster] == ['Gale Goalie']
        assert len(client.get(f'/api/games/{game_id}/opponents').get_json()) == 1

    def test_duplicate_program(self, client):
        client.post('/api/programs', json={'name': 'Lakeside Lacrosse'})

        response = client.post('/api/programs', json={'name': 'Lakeside Lacrosse'})

        assert response.status_code == 409
        assert response.get_json()['error'] == 'DUPLICATE_ERROR'

    def test_choices(self, client):
        body = client.get('/api/choices').get_json()

        assert 'Goalie' in body['positions']
        assert body['default_penalty_type'] in body['penalty_types']

    def test_unknown_game(self, client):
        response = client.get('/api/games/4242')

        assert response.status_code == 404
        assert response.get_json()['error'] == 'NOT_FOUND'


class TestRosterRoutes:

    @pytest.fixture(autouse=True)
    def setup(self, client, lacrosse_game):
        self.client = client
        self.game = lacrosse_game

    def test_bulk_import_program_players(self):
        response = self.client.post(f'/api/programs/{self.game.program.id}/players/bulk', json={
            'text': '2, Jo Wing, Attack\n40, Kim Pole, Defense'
        })

        assert response.status_code == 201
        assert [p['name'] for p in response.get_json()] == ['Jo Wing', 'Kim Pole']

    def test_bulk_import_opponent_numbers(self):
        response = self.client.post(f'/api/games/{self.game.game.id}/opponents/bulk',
                                    json={'start': 20, 'end': 21})

        assert response.status_code == 201
        assert [p['number'] for p in response.get_json()] == [20, 21]
        assert len(self.client.get(f'/api/games/{self.game.game.id}/opponents').get_json()) == 5

    def test_bulk_import_duplicate(self):
        response = self.client.post(f'/api/games/{self.game.game.id}/opponents/bulk', json={
            'players': [{'name': 'Riley Shooter', 'number': 7}]
        })

        assert response.status_code == 409

    def test_update_and_delete_player(self):
        player_id = self.game.home.middie.id

        updated = self.client.patch(f'/api/players/{player_id}', json={'number': 11})
        deleted = self.client.delete(f'/api/players/{player_id}')

        assert updated.get_json()['number'] == 11
        assert deleted.get_json() == {'deleted': player_id}
        assert self.client.patch(f'/api/players/{player_id}', json={'number': 2}).status_code == 404

    def test_delete_game(self):
        game_id = self.game.game.id
        self.client.post(f'/api/games/{game_id}/events/ground_ball', json={
            'side': 'home', 'ground_ball_player_id': self.game.home.middie.id
        })

        response = self.client.delete(f'/api/games/{game_id}')

        assert response.get_json() == {'deleted': game_id}
        assert self.client.get(f'/api/games/{game_id}').status_code == 404
        assert self.client.get(f'/api/games/{game_id}/events').status_code == 404


class TestEventRoutes:

    @pytest.fixture(autouse=True)
    def setup(self, client, lacrosse_game):
        self.client = client
        self.game = lacrosse_game
        self.base = f'/api/games/{lacrosse_game.game.id}'

    def test_saved_shot_waits_for_goalie_then_resumes(self):
        # Act
        held = self.client.post(f'{self.base}/events/shot', json={
            'side': 'home', 'scorer_player_id': self.game.home.attack.id, 'shot_outcome': 'saved'
        })
        status = self.client.get(f'{self.base}/goalies/opponent')
        selected = self.client.put(f'{self.base}/goalies/opponent',
                                   json={'player_id': self.game.opponent.goalie.id})

        # Assert
        assert held.status_code == 409
        assert held.get_json()['error'] == 'GOALIE_SELECTION_REQUIRED'
        assert held.get_json()['side'] == 'opponent'
        assert len(held.get_json()['candidates']) == 3

        assert status.get_json()['state'] == 'pending_selection'
        assert status.get_json()['pending_action'] is True

        body = selected.get_json()
        assert selected.status_code == 200
        assert body['current_goalie_id'] == self.game.opponent.goalie.id
        assert body['resumed']['event_type'] == 'shot'
        assert body['resumed']['goalie_player_id'] == self.game.opponent.goalie.id

        events = self.client.get(f'{self.base}/events').get_json()
        assert len(events) == 1

    def test_goalie_selection_needs_player(self):
        response = self.client.put(f'{self.base}/goalies/home', json={})

        assert response.status_code == 400
        assert response.get_json()['field'] == 'player_id'

    def test_turnover_with_causer(self):
        response = self.client.post(f'{self.base}/events/turnover', json={
            'side': 'opponent',
            'turnover_player_id': self.game.opponent.middie.id,
            'caused_by_player_id': self.game.home.defense.id,
            'period': 2,
        })

        body = response.get_json()
        assert response.status_code == 201
        assert body['turnover']['period'] == 2
        assert body['caused_turnover']['linked_event_id'] == body['turnover']['id']

    def test_period_zero_is_rejected(self):
        response = self.client.post(f'{self.base}/events/ground_ball', json={
            'side': 'home', 'ground_ball_player_id': self.game.home.middie.id, 'period': 0
        })

        assert response.status_code == 400
        assert response.get_json()['field'] == 'period'
        assert self.client.get(f'{self.base}/events').get_json() == []

    def test_edit_and_delete(self):
        # Arrange
        created = self.client.post(f'{self.base}/events/ground_ball', json={
            'side': 'home', 'ground_ball_player_id': self.game.home.middie.id
        }).get_json()

        # Act
        edited = self.client.patch(f"{self.base}/events/{created['id']}",
                                   json={'fields': {'ground_ball_player_id': self.game.home.defense.id}})
        deleted = self.client.delete(f"{self.base}/events/{created['id']}")

        # Assert
        assert edited.get_json()['ground_ball_player_id'] == self.game.home.defense.id
        assert deleted.get_json() == {'removed': [created['id']]}

    def test_edit_needs_fields(self):
        created = self.client.post(f'{self.base}/events/ground_ball', json={
            'side': 'home', 'ground_ball_player_id': self.game.home.middie.id
        }).get_json()

        response = self.client.patch(f"{self.base}/events/{created['id']}", json={'period': 2})

        assert response.status_code == 400

    def test_undo(self):
        self.client.post(f'{self.base}/events/caused_turnover', json={
            'side': 'home', 'caused_by_player_id': self.game.home.defense.id
        })

        response = self.client.post(f'{self.base}/undo')
        empty = self.client.post(f'{self.base}/undo')

        assert len(response.get_json()['removed']) == 2
        assert empty.status_code == 409
        assert empty.get_json()['rule'] == 'empty_event_log'

    def test_invalid_outcome(self):
        response = self.client.post(f'{self.base}/events/shot', json={
            'side': 'home', 'scorer_player_id': self.game.home.attack.id, 'shot_outcome': 'pipe'
        })

        assert response.status_code == 400
        assert response.get_json()['field'] == 'shot_outcome'

    def test_unknown_event_kind(self):
        response = self.client.post(f'{self.base}/events/timeout', json={'side': 'home'})

        assert response.status_code == 400

    def test_player_from_wrong_side(self):
        response = self.client.post(f'{self.base}/events/ground_ball', json={
            'side': 'home', 'ground_ball_player_id': self.game.opponent.middie.id
        })

        assert response.status_code == 422
        assert response.get_json()['reference'] == 'ground_ball_player_id'

    def test_events_for_unknown_game(self):
        response = self.client.post('/api/games/4242/events/ground_ball', json={'side': 'home'})

        assert response.status_code == 404


class TestStatsRoutes:

    @pytest.fixture(autouse=True)
    def setup(self, client, lacrosse_game, goalie_context):
        self.client = client
        self.game = lacrosse_game
        self.base = f'/api/games/{lacrosse_game.game.id}'
        self.client.post(f'{self.base}/events/shot', json={
            'side': 'home', 'scorer_player_id': self.game.home.attack.id, 'shot_outcome': 'goal'
        })

    def test_box_score(self):
        body = self.client.get(f'{self.base}/box-score').get_json()

        assert body['our_score'] == 1
        assert body['home']['team_name'] == 'Lakeside Lacrosse'
        assert body['home']['players'][0]['stats']['goals'] == 1
        assert body['opponent']['save_pct'] == '0%'
        assert body['score_by_period'] == [{'period': 1, 'home_goals': 1, 'opponent_goals': 0}]

    def test_report_download(self):
        response = self.client.get(f'{self.base}/export/report.csv')

        assert response.status_code == 200
        assert response.mimetype == 'text/csv'
        assert response.headers['Content-Disposition'] == \
            'attachment; filename="Game_Report_Riverton_2024-04-12.csv"'
        assert response.get_data(as_text=True).startswith('Game Report - 2024-04-12')

    def test_maxpreps_download(self):
        response = self.client.get(f'{self.base}/export/maxpreps.txt')

        assert response.mimetype == 'text/plain'
        assert 'MaxPreps_Riverton_2024-04-12.txt' in response.headers['Content-Disposition']
        assert response.get_data(as_text=True).split('\n')[2].startswith('1|1|')
