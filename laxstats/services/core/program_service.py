"""
Program Service
"""

from typing import Dict, Any, Optional
from laxstats.models import Program
from laxstats.services.base import BaseService
from laxstats.repositories.core import ProgramRepository
from laxstats.exceptions import DuplicateError, ValidationError
import logging

logger = logging.getLogger(__name__)


class ProgramService(BaseService[Program]):
    """
    Service for programs (the home clubs that own rosters and games)
    """

    def __init__(self, repository: Optional[ProgramRepository] = None):
        if repository is None:
            repository = ProgramRepository()
        super().__init__(repository)

    def _validate_create(self, data: Dict[str, Any]) -> None:
        name = (data.get('name') or '').strip()
        if not name:
            raise ValidationError("Program name is required", "name")
        if self.repository.find_by_name(name):
            raise DuplicateError("Program", "name", name)
        data['name'] = name

    def create_program(self, name: str) -> Program:
        return self.create(name=name)
