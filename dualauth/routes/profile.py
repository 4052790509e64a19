"""Profile route for the logged-in user."""

from flask import Blueprint, jsonify

from dualauth.utils import token_required, get_account_service

profile_bp = Blueprint('profile', __name__)


@profile_bp.route('/profile', methods=['GET'])
@token_required
def get_profile(current_user_id):
    """Get current user profile."""
    account = get_account_service().get_profile(current_user_id)

    return jsonify({'user': account.to_dict()}), 200
