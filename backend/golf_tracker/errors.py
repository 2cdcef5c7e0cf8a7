"""Error taxonomy for the REST service.

Every failure leaves the service as ``{"error": <message>}`` with a non-2xx
status. Domain errors carry their own status; anything unexpected is logged
with its traceback and reported as a generic 500.
"""
from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(ApiError):
    status_code = 400
    message = 'Invalid request'


class Unauthorized(ApiError):
    status_code = 401
    message = 'Not authenticated'


class NotFound(ApiError):
    status_code = 404
    message = 'Not found'


def _rollback():
    from golf_tracker import db
    db.session.rollback()


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(exc):
        return jsonify({'error': exc.message}), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({'error': exc.description or exc.name}), exc.code

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(exc):
        _rollback()
        app.logger.exception(f"[db_error] {exc.__class__.__name__}")
        return jsonify({'error': 'Internal server error'}), 500

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        _rollback()
        app.logger.exception(f"[unhandled] {exc.__class__.__name__}")
        return jsonify({'error': 'Internal server error'}), 500
