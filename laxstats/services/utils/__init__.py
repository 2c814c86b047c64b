"""
Service utilities
service_container depends on the core services and is imported from its module directly
"""

from .pending_goalie import PendingGoalieRegistry

__all__ = ['PendingGoalieRegistry']
