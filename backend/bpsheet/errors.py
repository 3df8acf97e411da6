"""
Application errors and their JSON rendering.
"""
import logging
from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class BPSheetError(Exception):
    """Base class for errors that map to an HTTP response."""
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(BPSheetError):
    status_code = 400
    message = 'Invalid request'

    def __init__(self, errors, status_code=None):
        if isinstance(errors, (list, tuple)):
            self.errors = list(errors)
            message = '; '.join(self.errors)
        else:
            self.errors = [errors]
            message = errors
        super().__init__(message, status_code)


class AuthError(BPSheetError):
    """Bad credentials or a missing token (401); invalid or expired token (403)."""
    status_code = 401
    message = 'Authentication required'


class NotFound(BPSheetError):
    status_code = 404
    message = 'Record not found'


class ImmutableEntity(BPSheetError):
    status_code = 400
    message = 'The default category cannot be modified'


class StoreUnavailable(BPSheetError):
    """Any failure talking to the spreadsheet service."""
    status_code = 500
    message = 'Spreadsheet service unavailable'


def register_error_handlers(app):
    """Render every failure as {'message': ...} with the matching status."""

    @app.errorhandler(BPSheetError)
    def handle_app_error(error):
        if error.status_code >= 500:
            logger.error('%s: %s', type(error).__name__, error.message,
                         exc_info=error.__cause__ or error)
        else:
            logger.warning('%s: %s', type(error).__name__, error.message)
        return jsonify({'message': error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception('Unhandled error')
        return jsonify({'message': 'Internal server error'}), 500
