"""Password routes: forgot-password, reset-password and change-password."""

from flask import request, jsonify, current_app

from dualauth.routes.auth import auth_bp
from dualauth.schemas import (
    ForgotPasswordRequest, ResetPasswordRequest, ChangePasswordRequest
)
from dualauth.utils import token_required, get_account_service


@auth_bp.route('/forgot-password', methods=['POST'])
def forgot_password():
    """Send a password reset OTP to the account's verified phone."""
    req = ForgotPasswordRequest.from_json(request.get_json(silent=True))

    account_id = get_account_service().forgot_password(req)
    current_app.logger.debug(f"Reset OTP issued for user_id: {account_id}")

    return jsonify({
        'message': 'OTP sent to your phone number',
        'userId': account_id
    }), 200


@auth_bp.route('/reset-password', methods=['POST'])
def reset_password():
    """Reset password using the OTP from forgot-password."""
    req = ResetPasswordRequest.from_json(request.get_json(silent=True))

    get_account_service().reset_password(req)

    return jsonify({'message': 'Password reset successfully'}), 200


@auth_bp.route('/change-password', methods=['POST'])
@token_required
def change_password(current_user_id):
    """Change password for the logged-in user."""
    req = ChangePasswordRequest.from_json(request.get_json(silent=True))

    get_account_service().change_password(current_user_id, req)

    return jsonify({'message': 'Password changed successfully'}), 200
