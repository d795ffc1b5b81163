from flask import jsonify
from pagebuilder.domain.exceptions import ConfigurationError, NotFoundError, PersistenceError
from pagebuilder.domain.invariants.exceptions import InvariantViolation


def _error_response(error, status_code):
    response = jsonify({
        "error": type(error).__name__,
        "message": str(error)
    })
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        return _error_response(error, 400)

    @app.errorhandler(ConfigurationError)
    def handle_configuration_error(error):
        return _error_response(error, 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(error):
        return _error_response(error, 404)

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(error):
        app.logger.error("Persistence failure: %s", error)
        return _error_response(error, 500)
