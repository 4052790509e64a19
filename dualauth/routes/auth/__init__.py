"""Auth routes package.

This package organizes authentication-related routes into logical submodules:
- core: Login
- verification: Registration, phone OTP and email link verification, resends
- password: Forgot/reset password (OTP) and change password (authenticated)
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

# Import all route modules (registers routes on auth_bp)
from dualauth.routes.auth import core  # noqa: E402,F401
from dualauth.routes.auth import verification  # noqa: E402,F401
from dualauth.routes.auth import password  # noqa: E402,F401
