"""
Service Container for Dependency Injection
Manages the repository and service instances of one Flask application
"""

from typing import Dict, Any, List
from flask import current_app
from laxstats.repositories.core import (
    EventRepository, GameRepository, PlayerRepository, ProgramRepository, TeamRepository
)
from laxstats.services.core import (
    EventService, GameService, GoalieService, PlayerService, ProgramService, StatsService,
    TurnoverService
)
from laxstats.services.utils.pending_goalie import PendingGoalieRegistry
import logging

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'laxstats'


class ServiceContainer:
    """
    Simple dependency injection container for services and repositories
    One container lives in app.extensions, so the pending goalie registry
    is scoped to the application.
    """

    def __init__(self):
        self._repositories: Dict[str, Any] = {}
        self._services: Dict[str, Any] = {}
        self.pending_goalies = PendingGoalieRegistry()
        self._initialized = False

    def initialize(self) -> None:
        """
        Initialize all repositories and services
        Called once during application startup
        """
        if self._initialized:
            logger.warning("Service container already initialized")
            return

        self._initialize_repositories()
        self._initialize_services()

        self._initialized = True
        logger.info("Service container initialized successfully")

    def _initialize_repositories(self) -> None:
        self._repositories['event'] = EventRepository()
        self._repositories['game'] = GameRepository()
        self._repositories['player'] = PlayerRepository()
        self._repositories['program'] = ProgramRepository()
        self._repositories['team'] = TeamRepository()

        logger.info(f"Initialized {len(self._repositories)} repositories")

    def _initialize_services(self) -> None:
        repos = self._repositories

        self._services['game'] = GameService(
            repos['game'], repos['event'], repos['program'], repos['team'], repos['player']
        )
        self._services['goalie'] = GoalieService(
            repos['game'], repos['player'], self.pending_goalies
        )
        self._services['turnover'] = TurnoverService(repos['event'], repos['player'])
        self._services['event'] = EventService(
            repos['event'],
            repos['player'],
            self._services['turnover'],
            self._services['goalie'],
            self._services['game']
        )
        self._services['stats'] = StatsService(
            repos['game'], repos['event'], repos['player'], repos['program']
        )
        self._services['player'] = PlayerService(repos['player'], repos['event'], repos['game'])
        self._services['program'] = ProgramService(repos['program'])

        logger.info(f"Initialized {len(self._services)} services")

    def get_service(self, name: str) -> Any:
        """
        Get service by name

        Raises:
            RuntimeError: If the container is not initialized
            ValueError: If no service has this name
        """
        if not self._initialized:
            raise RuntimeError("Service container not initialized. Call initialize() first.")

        service = self._services.get(name)
        if service is None:
            logger.warning(f"Service '{name}' not found in container")
            raise ValueError(f"Service '{name}' not found")
        return service

    def list_services(self) -> List[str]:
        return list(self._services.keys())


def get_container() -> ServiceContainer:
    """
    The container of the current application, created on first use
    """
    container = current_app.extensions.get(EXTENSION_KEY)
    if container is None:
        container = ServiceContainer()
        container.initialize()
        current_app.extensions[EXTENSION_KEY] = container
    return container


def get_service(name: str) -> Any:
    return get_container().get_service(name)
