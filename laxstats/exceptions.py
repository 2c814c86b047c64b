"""
Exception classes for the stat tracker
Every service and repository error derives from ServiceError
"""

from typing import List, Optional


class ServiceError(Exception):
    """
    Base exception for all service-related errors
    """
    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code or "SERVICE_ERROR"

    def to_dict(self):
        """Convert exception to dictionary for JSON responses"""
        return {
            'error': self.code,
            'message': self.message
        }


class ValidationError(ServiceError):
    """
    Raised when an event or input is malformed (missing or contradictory fields)
    """
    def __init__(self, message: str, field: str = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field

    def to_dict(self):
        result = super().to_dict()
        if self.field:
            result['field'] = self.field
        return result


class MissingFieldError(ValidationError):
    """
    Raised when a field mandatory for an event kind is absent
    """
    def __init__(self, kind: str, field: str):
        super().__init__(f"Event '{kind}' requires field '{field}'", field)
        self.code = "MISSING_FIELD"
        self.kind = kind

    def to_dict(self):
        result = super().to_dict()
        result['kind'] = self.kind
        return result


class InvalidReferenceError(ServiceError):
    """
    Raised when a linked event or player pointer refers to a missing or wrong-side entity
    """
    def __init__(self, message: str, reference: str = None):
        super().__init__(message, "INVALID_REFERENCE")
        self.reference = reference

    def to_dict(self):
        result = super().to_dict()
        if self.reference:
            result['reference'] = self.reference
        return result


class NotFoundError(ServiceError):
    """
    Raised when requested resource is not found
    """
    def __init__(self, resource: str, id: int = None):
        message = f"{resource} not found"
        if id:
            message = f"{resource} with ID {id} not found"
        super().__init__(message, "NOT_FOUND")
        self.resource = resource
        self.id = id


class DuplicateError(ServiceError):
    """
    Raised when attempting to create a duplicate resource
    """
    def __init__(self, resource: str, field: str = None, value: str = None):
        message = f"Duplicate {resource}"
        if field and value:
            message = f"{resource} with {field}='{value}' already exists"
        super().__init__(message, "DUPLICATE_ERROR")
        self.resource = resource
        self.field = field
        self.value = value


class BusinessRuleError(ServiceError):
    """
    Raised when business rule validation fails
    """
    def __init__(self, message: str, rule: str = None):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")
        self.rule = rule

    def to_dict(self):
        result = super().to_dict()
        if self.rule:
            result['rule'] = self.rule
        return result


class PendingGoalieSelection(ServiceError):
    """
    Raised when an action needs a goalie that has not been selected yet.
    The action is parked until the operator picks one of the candidates.
    """
    def __init__(self, side: str, candidates: Optional[List[int]] = None):
        super().__init__(f"A goalie must be selected for the {side} side first",
                         "GOALIE_SELECTION_REQUIRED")
        self.side = side
        self.candidates = candidates or []

    def to_dict(self):
        result = super().to_dict()
        result['side'] = self.side
        result['candidates'] = self.candidates
        return result


class NoEligibleGoaliesError(ServiceError):
    """
    Raised when a goalie is required but the roster has nobody who can be selected
    """
    def __init__(self, side: str):
        if side == 'home':
            message = "No goalies in roster. Add a player with the Goalie position first"
        else:
            message = "No opponent players in roster. Add opponent players first"
        super().__init__(message, "NO_ELIGIBLE_GOALIES")
        self.side = side

    def to_dict(self):
        result = super().to_dict()
        result['side'] = self.side
        return result


class DatabaseError(ServiceError):
    """
    Raised when database operations fail
    """
    def __init__(self, message: str, operation: str = None):
        super().__init__(message, "DATABASE_ERROR")
        self.operation = operation

    def to_dict(self):
        result = super().to_dict()
        if self.operation:
            result['operation'] = self.operation
        return result


class PartialWriteError(DatabaseError):
    """
    Raised when a multi-step write failed after earlier steps were committed.
    committed_ids lists the events that are now in the store.
    """
    def __init__(self, message: str, committed_ids: List[int], failed_operation: str):
        super().__init__(message, failed_operation)
        self.code = "PARTIAL_WRITE"
        self.committed_ids = list(committed_ids)
        self.failed_operation = failed_operation

    def to_dict(self):
        result = super().to_dict()
        result['committed_ids'] = self.committed_ids
        return result


class ScoreRecomputeError(DatabaseError):
    """
    Raised when the cached game score could not be refreshed after a mutation
    """
    def __init__(self, game_id: int, message: str):
        super().__init__(f"Score for game {game_id} was not updated: {message}", "recompute_score")
        self.code = "SCORE_RECOMPUTE_FAILED"
        self.game_id = game_id


class ConfigurationError(ServiceError):
    """
    Raised when service configuration is invalid
    """
    def __init__(self, message: str, config_key: str = None):
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_key = config_key
