"""Signed, expiring tokens for sessions and email verification.

Both kinds are HS256 JWTs signed with the same process-wide secret. A
``purpose`` claim keeps them apart so an email-verification link can never
be replayed as a bearer credential (and vice versa).
"""

from datetime import datetime, timedelta, timezone
import secrets

import jwt

SESSION = 'session'
VERIFY_EMAIL = 'verify_email'


class InvalidTokenError(Exception):
    """Token is malformed, tampered with, or issued for another purpose."""


class ExpiredTokenError(InvalidTokenError):
    """Token signature is fine but its ``exp`` has passed."""


class TokenService:
    """Issue and verify signed tokens carrying an account id."""

    def __init__(self, secret, algorithm='HS256'):
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self.algorithm = algorithm

    def issue(self, account_id, purpose, expires_in=None, **claims):
        """
        Sign a token for ``account_id``.

        Args:
            account_id: Stored as the ``sub`` claim
            purpose: ``SESSION`` or ``VERIFY_EMAIL``
            expires_in: ``timedelta`` or seconds; ``None`` means no ``exp``
            **claims: Extra claims to embed (e.g. ``email``)

        Returns:
            str: The encoded token
        """
        now = datetime.now(timezone.utc)
        payload = dict(claims)
        payload.update({
            'sub': str(account_id),
            'purpose': purpose,
            'iat': now,
            # Unique per issue so a reissued token never equals an older one
            'jti': secrets.token_urlsafe(16),
        })
        if expires_in is not None:
            if not isinstance(expires_in, timedelta):
                expires_in = timedelta(seconds=expires_in)
            payload['exp'] = now + expires_in
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token, purpose):
        """
        Verify signature, expiry and purpose of ``token``.

        Returns:
            dict: The decoded payload

        Raises:
            ExpiredTokenError: ``exp`` has passed
            InvalidTokenError: anything else wrong with the token
        """
        if not token or not isinstance(token, str):
            raise InvalidTokenError("Token is missing")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={'require': ['sub', 'purpose', 'iat']},
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Token is invalid") from e

        if payload.get('purpose') != purpose:
            raise InvalidTokenError("Token is invalid")

        return payload
