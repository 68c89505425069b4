"""Error handlers for the application.

Every failure, including routing errors and unhandled exceptions, is
answered with the error envelope from ``responses``.
"""
from flask import Flask
from werkzeug.exceptions import HTTPException

from identity_api.core.exceptions import IdentityError
from .responses import respond_error


def register_error_handlers(app: Flask):
    """Register error handlers with the Flask app."""

    @app.errorhandler(IdentityError)
    def handle_identity_error(error: IdentityError):
        if error.status_code >= 500:
            app.logger.warning(f"{error.kind}: {error.message}")
        return respond_error(error.message, error.status_code, error.to_details())

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        """Routing and protocol errors (404, 405, 415...)."""
        status = error.code or 500
        return respond_error(error.description or error.name, status, {"error": error.name})

    @app.errorhandler(Exception)
    def handle_exception(error: Exception):
        """Handle uncaught exceptions."""
        app.logger.error(f"Unhandled exception: {error}", exc_info=True)
        return respond_error("An unexpected error occurred", 500, {"error": "InternalError"})
