"""Core authentication routes: login."""

from flask import request, jsonify

from dualauth.routes.auth import auth_bp
from dualauth.schemas import LoginRequest
from dualauth.utils import get_account_service


@auth_bp.route('/login', methods=['POST'])
def login():
    """Authenticate by phone + password and return a session token."""
    req = LoginRequest.from_json(request.get_json(silent=True))

    token, account = get_account_service().login(req)

    return jsonify({
        'message': 'Login successful',
        'token': token,
        'user': account.to_summary()
    }), 200
