"""Numeric one-time codes for phone verification and password reset."""

import secrets

DEFAULT_OTP_LENGTH = 6


def generate_otp(length: int = DEFAULT_OTP_LENGTH) -> str:
    """Generate a numeric OTP code from the OS CSPRNG."""
    if length < 1:
        raise ValueError("OTP length must be positive")
    return ''.join([str(secrets.randbelow(10)) for _ in range(length)])
