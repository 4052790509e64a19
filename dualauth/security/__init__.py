"""Credential primitives: password hashing, one-time codes, signed tokens."""

from dualauth.security.otp import generate_otp
from dualauth.security.passwords import PasswordHasher
from dualauth.security.tokens import (
    TokenService,
    InvalidTokenError,
    ExpiredTokenError,
    SESSION,
    VERIFY_EMAIL,
)

__all__ = [
    'generate_otp',
    'PasswordHasher',
    'TokenService',
    'InvalidTokenError',
    'ExpiredTokenError',
    'SESSION',
    'VERIFY_EMAIL',
]
