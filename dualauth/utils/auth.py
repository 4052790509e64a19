"""Shared authentication utilities.

This module provides the bearer-token decorator used by protected routes.
"""

from functools import wraps
from flask import request, jsonify, current_app, g

from dualauth.security.tokens import SESSION, ExpiredTokenError, InvalidTokenError


def get_account_service():
    """Return the ``AccountService`` wired by the app factory."""
    return current_app.extensions['account_service']


def token_required(f):
    """
    Decorator to require a valid session token.

    Extracts the account id from the token, stores it on
    ``g.current_user_id`` and passes it as the first argument to the
    decorated function.

    Usage:
        @bp.route('/protected')
        @token_required
        def protected_route(current_user_id):
            return jsonify({'userId': current_user_id})
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        auth_header = request.headers.get('Authorization')

        if not auth_header:
            return jsonify({'message': 'Token is missing'}), 401

        # Only "Bearer <token>"
        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != 'bearer':
            return jsonify({'message': 'Token is invalid'}), 401
        token = parts[1]

        try:
            payload = get_account_service().tokens.verify(token, SESSION)
        except ExpiredTokenError:
            return jsonify({'message': 'Token has expired'}), 401
        except InvalidTokenError:
            return jsonify({'message': 'Token is invalid'}), 401

        g.current_user_id = payload['sub']
        return f(g.current_user_id, *args, **kwargs)
    return decorated
