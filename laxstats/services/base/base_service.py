"""
Base Service Class with Repository Pattern
Provides common business logic patterns for all services
"""

from typing import TypeVar, Generic, Optional, Dict, Any
from laxstats.repositories.base import BaseRepository
from laxstats.exceptions import NotFoundError
from laxstats.models import db
import logging

T = TypeVar('T')
logger = logging.getLogger(__name__)


class BaseService(Generic[T]):
    """
    Base service class providing common business operations
    All services should inherit from this class
    """

    def __init__(self, repository: BaseRepository[T]):
        """
        Initialize the service with a repository

        Args:
            repository: The repository instance for data access
        """
        self.repository = repository
        self.db = db
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def get_by_id(self, id: int) -> Optional[T]:
        return self.repository.get_by_id(id)

    def get_or_404(self, id: int, resource: str = None) -> T:
        """
        Get entity by ID or raise

        Raises:
            NotFoundError: If no entity has this ID
        """
        entity = self.get_by_id(id)
        if not entity:
            raise NotFoundError(resource or self.repository.model_class.__name__, id)
        return entity

    def create(self, **kwargs) -> T:
        """
        Create new entity with validation

        Args:
            **kwargs: Entity attributes

        Returns:
            The created entity
        """
        # Validate before creation
        self._validate_create(kwargs)

        entity = self.repository.create(**kwargs)

        # Post-creation hook
        self._after_create(entity)

        self.commit()

        self.logger.info(f"Created entity with ID: {getattr(entity, 'id', 'N/A')}")
        return entity

    def commit(self) -> None:
        """
        Commit current transaction
        """
        try:
            self.db.session.commit()
            self.logger.debug("Transaction committed successfully")
        except Exception as e:
            self.logger.error(f"Error committing transaction: {str(e)}")
            self.rollback()
            raise

    def rollback(self) -> None:
        self.db.session.rollback()
        self.logger.info("Transaction rolled back")

    # Validation hooks (to be overridden in subclasses)

    def _validate_create(self, data: Dict[str, Any]) -> None:
        """
        Validate data before creating entity
        Override in subclasses for specific validation
        """
        pass

    def _after_create(self, entity: T) -> None:
        """
        Hook called after entity creation
        """
        pass
