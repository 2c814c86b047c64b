"""
Player Service with Repository Pattern
Roster management for the program and for per-game opponent rosters
"""

from typing import Any, Dict, List, Optional
from laxstats.models import Game, Player
from laxstats.services.base import BaseService
from laxstats.repositories.core import EventRepository, GameRepository, PlayerRepository
from laxstats.constants import POSITIONS
from laxstats.exceptions import (
    BusinessRuleError, DuplicateError, NotFoundError, ServiceError, ValidationError
)
from laxstats.utils.roster_import import numbered_entries, parse_roster_text
import logging

logger = logging.getLogger(__name__)

EDITABLE_PLAYER_FIELDS = {'name', 'number', 'position'}


class PlayerService(BaseService[Player]):
    """
    Service for player-related business logic using repository pattern
    """

    def __init__(self, repository: Optional[PlayerRepository] = None,
                 event_repository: Optional[EventRepository] = None,
                 game_repository: Optional[GameRepository] = None):
        if repository is None:
            repository = PlayerRepository()
        super().__init__(repository)
        self.event_repository = event_repository or EventRepository()
        self.game_repository = game_repository or GameRepository()

    def create_player(self, name: str, number: Optional[int] = None,
                      position: Optional[List[str]] = None,
                      program_id: Optional[int] = None,
                      game_id: Optional[int] = None) -> Player:
        """
        Add a player to a roster

        A player with program_id joins the program roster; a player with
        game_id joins the opponent roster of that game.

        Args:
            name: Player name, unique within the roster
            number: Jersey number
            position: Roles from POSITIONS
            program_id: Home program
            game_id: Game whose opponent roster the player joins

        Returns:
            Created player

        Raises:
            ValidationError: If input data is invalid
            DuplicateError: If the roster already has a player with this name
            ServiceError: If creation fails
        """
        try:
            values = self._prepare_player(name, number, position, program_id, game_id)
            player = self.repository.create(**values)
            self.commit()

            logger.info(f"Created player {values['name']} (#{number}) with ID {player.id}")
            return player

        except (ValidationError, NotFoundError, DuplicateError):
            raise
        except ServiceError:
            self.rollback()
            raise
        except Exception as e:
            self.rollback()
            logger.error(f"Error creating player {name}: {str(e)}")
            raise ServiceError(f"Failed to create player: {str(e)}")

    def bulk_create(self, entries: List[Dict[str, Any]], program_id: Optional[int] = None,
                    game_id: Optional[int] = None) -> List[Player]:
        """
        Add several players to one roster at once

        Every entry is validated before anything is stored; a single bad
        entry or duplicate name rejects the whole batch.

        Args:
            entries: Dicts with name and optionally number and position
            program_id: Home program
            game_id: Game whose opponent roster the players join

        Returns:
            Created players in entry order

        Raises:
            ValidationError: If the batch is empty or an entry is invalid
            DuplicateError: If a name repeats in the batch or already is on the roster
        """
        if not entries:
            raise ValidationError("No players to import", "players")

        try:
            prepared = []
            seen = set()
            for entry in entries:
                values = self._prepare_player(
                    entry.get('name'), entry.get('number'), entry.get('position'), program_id, game_id
                )
                if values['name'] in seen:
                    raise DuplicateError("Player", "name", values['name'])
                seen.add(values['name'])
                prepared.append(values)

            players = [self.repository.create(**values) for values in prepared]
            self.commit()

            logger.info(f"Imported {len(players)} players (program={program_id}, game={game_id})")
            return players

        except (ValidationError, NotFoundError, DuplicateError):
            self.rollback()
            raise
        except ServiceError:
            self.rollback()
            raise
        except Exception as e:
            self.rollback()
            logger.error(f"Error importing players: {str(e)}")
            raise ServiceError(f"Failed to import players: {str(e)}")

    def import_roster_text(self, text: str, program_id: Optional[int] = None,
                           game_id: Optional[int] = None) -> List[Player]:
        """
        Bulk import from pasted "Number, Name, Position" lines

        Malformed lines are skipped; see bulk_create for the rest.
        """
        entries = parse_roster_text(text)
        if not entries:
            raise ValidationError("No valid players found. Format: Number, Name, Position", "text")
        return self.bulk_create(entries, program_id=program_id, game_id=game_id)

    def generate_opponent_numbers(self, game_id: int, start: int, end: int) -> List[Player]:
        """
        Fill an opponent roster with players named after their jersey numbers
        """
        for field, value in (('start', start), ('end', end)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValidationError("Jersey numbers must be non-negative integers", field)
        if start > end:
            raise ValidationError("The first number must not be greater than the last", "start")
        return self.bulk_create(numbered_entries(start, end), game_id=game_id)

    def update_player(self, player_id: int, **fields) -> Player:
        """
        Change the name, number or positions of a player

        Raises:
            NotFoundError: If the player does not exist
            ValidationError: If a field is unknown or invalid
            DuplicateError: If the new name is taken on the player's roster
        """
        player = self.get_or_404(player_id, "Player")

        unknown = set(fields) - EDITABLE_PLAYER_FIELDS
        if unknown:
            field = sorted(unknown)[0]
            raise ValidationError(f"Field '{field}' cannot be edited on a player", field)

        try:
            values = self._prepare_player(
                fields.get('name', player.name),
                fields.get('number', player.number),
                fields.get('position', player.position),
                player.program_id, player.game_id,
                player_id=player.id,
            )
            for name in EDITABLE_PLAYER_FIELDS:
                setattr(player, name, values[name])
            self.commit()

            logger.info(f"Updated player {player_id}: {sorted(fields)}")
            return player

        except (ValidationError, NotFoundError, DuplicateError):
            self.rollback()
            raise
        except Exception as e:
            self.rollback()
            logger.error(f"Error updating player {player_id}: {str(e)}")
            raise ServiceError(f"Failed to update player: {str(e)}")

    def delete_player(self, player_id: int) -> None:
        """
        Remove a player from their roster

        A player who appears in recorded events cannot be removed; their
        stats would lose their owner. Goalie pointers to the player are unset.

        Raises:
            NotFoundError: If the player does not exist
            BusinessRuleError: If events reference the player
        """
        self.get_or_404(player_id, "Player")

        references = self.event_repository.count_for_player(player_id)
        if references:
            raise BusinessRuleError(
                f"Player {player_id} appears in {references} recorded events", "player_has_events"
            )

        try:
            self.game_repository.clear_goalie_pointers(player_id)
            self.repository.delete(player_id)
            self.commit()
            logger.info(f"Deleted player {player_id}")
        except Exception as e:
            self.rollback()
            logger.error(f"Error deleting player {player_id}: {str(e)}")
            raise ServiceError(f"Failed to delete player: {str(e)}")

    def get_program_roster(self, program_id: int) -> List[Player]:
        return self.repository.get_program_roster(program_id)

    def get_opponent_roster(self, game_id: int) -> List[Player]:
        return self.repository.get_opponent_roster(game_id)

    def _prepare_player(self, name: str, number: Optional[int], position: Optional[List[str]],
                        program_id: Optional[int], game_id: Optional[int],
                        player_id: Optional[int] = None) -> Dict[str, Any]:
        """Validated column values for a player; player_id is the one being edited"""
        name = (name or '').strip()
        if not name:
            raise ValidationError("Player name is required", "name")
        if (program_id is None) == (game_id is None):
            raise ValidationError("A player belongs to either a program or an opponent roster",
                                  "program_id")
        if number is not None and (not isinstance(number, int) or isinstance(number, bool) or number < 0):
            raise ValidationError("Jersey number must be a non-negative integer", "number")

        position = list(position or [])
        unknown = [p for p in position if p not in POSITIONS]
        if unknown:
            raise ValidationError(f"Unknown position: {unknown[0]}", "position")

        team_id = None
        if game_id is not None:
            game = self.db.session.get(Game, game_id)
            if not game:
                raise NotFoundError("Game", game_id)
            team_id = game.opponent_team_id

        existing = self.repository.find_by_name(name, program_id=program_id, game_id=game_id)
        if existing and existing.id != player_id:
            raise DuplicateError("Player", "name", name)

        return {
            'name': name,
            'number': number,
            'position': position,
            'program_id': program_id,
            'game_id': game_id,
            'team_id': team_id,
            'is_opponent': game_id is not None,
        }
