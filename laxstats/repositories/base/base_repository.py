"""
Base Repository Class for the lacrosse stat tracker
Provides data access patterns and query abstractions
"""

from typing import TypeVar, Generic, Optional, List, Dict, Any, Union
from sqlalchemy.orm import Session, Query
from sqlalchemy import desc, asc
from sqlalchemy.exc import SQLAlchemyError
from laxstats.models import db
from laxstats.exceptions import DatabaseError
import logging

T = TypeVar('T')
logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Base repository providing data access patterns
    All repositories should inherit from this class
    """

    def __init__(self, model_class: type[T]):
        """
        Initialize the repository with a model class

        Args:
            model_class: The SQLAlchemy model class this repository manages
        """
        self.model_class = model_class
        self.db = db
        self.logger = logging.getLogger(f"{__name__}.{model_class.__name__}Repository")

    def get_by_id(self, id: int, session: Optional[Session] = None) -> Optional[T]:
        """
        Get entity by ID

        Args:
            id: The primary key ID
            session: Optional database session

        Returns:
            The entity if found, None otherwise
        """
        if id is None:
            return None
        session = session or self.db.session
        return session.get(self.model_class, id)

    def find_one(self, session: Optional[Session] = None, **filters) -> Optional[T]:
        session = session or self.db.session
        return session.query(self.model_class).filter_by(**filters).first()

    def find_by(self, criteria: Dict[str, Any],
                order_by: Optional[Union[str, List[str]]] = None,
                limit: Optional[int] = None,
                session: Optional[Session] = None) -> List[T]:
        """
        Find entities with filtering and ordering

        Args:
            criteria: Dictionary of filter criteria
            order_by: Column(s) to order by, '-' prefix for descending
            limit: Maximum number of results
            session: Optional database session

        Returns:
            List of matching entities
        """
        session = session or self.db.session
        query = session.query(self.model_class)

        for key, value in criteria.items():
            if hasattr(self.model_class, key):
                query = query.filter(getattr(self.model_class, key) == value)

        if order_by:
            if isinstance(order_by, str):
                order_by = [order_by]

            for order in order_by:
                if order.startswith('-'):
                    column = order[1:]
                    if hasattr(self.model_class, column):
                        query = query.order_by(desc(getattr(self.model_class, column)))
                else:
                    if hasattr(self.model_class, order):
                        query = query.order_by(asc(getattr(self.model_class, order)))

        if limit:
            query = query.limit(limit)

        return query.all()

    def create(self, commit: bool = False, **kwargs) -> T:
        """
        Create new entity

        Args:
            commit: Whether to commit immediately
            **kwargs: Entity attributes

        Returns:
            The created entity
        """
        entity = self.model_class(**kwargs)
        self.db.session.add(entity)

        if commit:
            self.commit()
        else:
            self.db.session.flush()

        self.logger.info(f"Created {self.model_class.__name__} with ID: {getattr(entity, 'id', 'N/A')}")
        return entity

    def delete(self, id: int, commit: bool = False) -> bool:
        """
        Delete entity by ID

        Args:
            id: The entity ID to delete
            commit: Whether to commit immediately

        Returns:
            True if deleted, False if not found
        """
        entity = self.get_by_id(id)
        if entity:
            self.db.session.delete(entity)

            if commit:
                self.commit()
            else:
                self.db.session.flush()

            self.logger.info(f"Deleted {self.model_class.__name__} with ID: {id}")
            return True

        self.logger.warning(f"{self.model_class.__name__} with ID {id} not found for deletion")
        return False

    def count(self, **filters) -> int:
        query = self.db.session.query(self.model_class)
        if filters:
            query = query.filter_by(**filters)
        return query.count()

    def get_query(self, session: Optional[Session] = None) -> Query:
        """
        Get base query for advanced operations
        """
        session = session or self.db.session
        return session.query(self.model_class)

    def commit(self) -> None:
        """
        Commit current transaction

        Raises:
            DatabaseError: If the store rejected the commit (session is rolled back)
        """
        try:
            self.db.session.commit()
            self.logger.debug("Transaction committed successfully")
        except SQLAlchemyError as e:
            self.logger.error(f"Error committing transaction: {str(e)}")
            self.rollback()
            raise DatabaseError(f"Commit failed: {str(e)}", "commit") from e

    def rollback(self) -> None:
        """
        Rollback current transaction
        """
        self.db.session.rollback()
        self.logger.info("Transaction rolled back")
