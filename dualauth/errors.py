"""Error kinds raised by the account lifecycle and how they render over HTTP.

Every error carries a client-safe message and an HTTP status. Anything that
is not an ``AccountError`` is treated as a server error: it is logged with
its traceback and the client only sees a generic message.
"""

from flask import jsonify
from werkzeug.exceptions import HTTPException


class AccountError(Exception):
    """Base class for failures surfaced to API clients."""

    status_code = 400
    default_message = 'Bad request'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {'message': self.message}


class ValidationError(AccountError):
    default_message = 'Invalid request'


class ConflictError(AccountError):
    default_message = 'Account already exists'


class NotFoundError(AccountError):
    status_code = 404
    default_message = 'User not found'


class AlreadyVerifiedError(AccountError):
    default_message = 'Already verified'


class InvalidCredentialError(AccountError):
    default_message = 'Invalid code'


class ExpiredError(AccountError):
    default_message = 'Code expired'


class BadRequestError(AccountError):
    pass


class UnauthorizedError(AccountError):
    status_code = 401
    default_message = 'Unauthorized'


def register_error_handlers(app):
    """Render errors as JSON ``{"message": ...}`` bodies."""
    from dualauth import db

    @app.errorhandler(AccountError)
    def handle_account_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        app.logger.exception(f"Unhandled error: {error}")
        return jsonify({'message': 'Server error'}), 500
