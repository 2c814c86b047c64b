"""
Program and Team repositories
"""

from typing import Optional
from laxstats.models import Program, Team
from laxstats.repositories.base import BaseRepository


class ProgramRepository(BaseRepository[Program]):

    def __init__(self):
        super().__init__(Program)

    def find_by_name(self, name: str) -> Optional[Program]:
        return self.find_one(name=name)


class TeamRepository(BaseRepository[Team]):

    def __init__(self):
        super().__init__(Team)

    def find_by_name(self, name: str) -> Optional[Team]:
        return self.find_one(name=name)

    def get_or_create(self, name: str) -> Team:
        """
        Team with the given name, created on first use
        """
        team = self.find_by_name(name)
        if team:
            return team
        return self.create(commit=True, name=name)
