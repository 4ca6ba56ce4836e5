from flask import jsonify, current_app

from pagebuilder.domain.exceptions import (
    InvariantViolation,
    MalformedData,
    NotFound,
    PageBuilderError,
    PersistenceFailure,
    ValidationFailure,
)


def _error_response(error, status_code):
    body = {
        "error": type(error).__name__,
        "message": str(error),
    }
    field = getattr(error, "field", None)
    if field:
        body["field"] = field

    response = jsonify(body)
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(NotFound)
    def handle_not_found(error):
        return _error_response(error, 404)

    @app.errorhandler(ValidationFailure)
    def handle_validation_failure(error):
        return _error_response(error, 400)

    @app.errorhandler(MalformedData)
    def handle_malformed_data(error):
        return _error_response(error, 400)

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        return _error_response(error, 400)

    @app.errorhandler(PersistenceFailure)
    def handle_persistence_failure(error):
        current_app.logger.error("Persistence failure: %s", error)
        return _error_response(error, 500)

    @app.errorhandler(PageBuilderError)
    def handle_page_builder_error(error):
        current_app.logger.exception("Unhandled page builder error")
        return _error_response(error, 500)
