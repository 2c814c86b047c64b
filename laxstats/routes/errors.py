from flask import jsonify, current_app

from laxstats.exceptions import (
    BusinessRuleError, DatabaseError, DuplicateError, InvalidReferenceError,
    NoEligibleGoaliesError, NotFoundError, PendingGoalieSelection, ServiceError, ValidationError
)

# Most specific classes first
STATUS_CODES = [
    (ValidationError, 400),
    (NotFoundError, 404),
    (PendingGoalieSelection, 409),
    (NoEligibleGoaliesError, 409),
    (BusinessRuleError, 409),
    (DuplicateError, 409),
    (InvalidReferenceError, 422),
    (DatabaseError, 500),
]


def status_for(error: ServiceError) -> int:
    for error_class, status in STATUS_CODES:
        if isinstance(error, error_class):
            return status
    return 500


def register_error_handlers(app):

    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        status = status_for(error)
        if status >= 500:
            current_app.logger.error(f"{error.code}: {error.message}")
        else:
            current_app.logger.info(f"{error.code}: {error.message}")
        return jsonify(error.to_dict()), status
