"""Registration and verification routes: phone OTP, email link, resends."""

from flask import request, jsonify, current_app

from dualauth.routes.auth import auth_bp
from dualauth.schemas import (
    RegisterRequest, VerifyPhoneRequest, ResendRequest, parse_verify_email_token
)
from dualauth.utils import get_account_service


@auth_bp.route('/register', methods=['POST'])
def register():
    """Register an account and send phone OTP + email verification link."""
    req = RegisterRequest.from_json(request.get_json(silent=True))

    account_id = get_account_service().register(req)

    return jsonify({
        'message': 'User registered successfully. Please verify your phone and email.',
        'userId': account_id
    }), 201


@auth_bp.route('/verify-phone', methods=['POST'])
def verify_phone():
    """Verify the phone number with the OTP sent by SMS."""
    req = VerifyPhoneRequest.from_json(request.get_json(silent=True))

    get_account_service().verify_phone(req)

    return jsonify({'message': 'Phone verified successfully'}), 200


@auth_bp.route('/verify-email', methods=['GET'])
def verify_email():
    """Verify the email address with the token from the emailed link."""
    token = parse_verify_email_token(request.args)

    get_account_service().verify_email(token)

    return jsonify({'message': 'Email verified successfully'}), 200


@auth_bp.route('/resend-phone-otp', methods=['POST'])
def resend_phone_otp():
    req = ResendRequest.from_json(request.get_json(silent=True))

    get_account_service().resend_phone_otp(req)
    current_app.logger.debug(f"Phone OTP reissued for user_id: {req.user_id}")

    return jsonify({'message': 'OTP sent successfully'}), 200


@auth_bp.route('/resend-email-verification', methods=['POST'])
def resend_email_verification():
    req = ResendRequest.from_json(request.get_json(silent=True))

    get_account_service().resend_email_verification(req)
    current_app.logger.debug(f"Verification email reissued for user_id: {req.user_id}")

    return jsonify({'message': 'Verification email sent successfully'}), 200
