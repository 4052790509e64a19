"""
Tests for password hashing, OTP generation and signed tokens.
"""

from datetime import timedelta

import jwt
import pytest

from dualauth.security import (
    PasswordHasher, TokenService, InvalidTokenError, ExpiredTokenError,
    SESSION, VERIFY_EMAIL, generate_otp,
)

SECRET = 'unit-test-secret-with-enough-length-for-hs256'


class TestPasswordHasher:

    def test_hash_is_not_plaintext_and_verifies(self):
        hasher = PasswordHasher(method='pbkdf2:sha256:1000')
        stored = hasher.hash('Abcd1234!@#$')

        assert stored != 'Abcd1234!@#$'
        assert hasher.verify('Abcd1234!@#$', stored)
        assert not hasher.verify('Abcd1234!@#%', stored)

    def test_hash_is_salted(self):
        hasher = PasswordHasher(method='pbkdf2:sha256:1000')

        assert hasher.hash('same-password') != hasher.hash('same-password')

    def test_default_method_is_scrypt(self):
        assert PasswordHasher().hash('Abcd1234!@#$').startswith('scrypt:')

    def test_verify_empty_inputs(self):
        hasher = PasswordHasher(method='pbkdf2:sha256:1000')

        assert not hasher.verify('', hasher.hash('x'))
        assert not hasher.verify('x', None)


class TestGenerateOtp:

    def test_six_digits_by_default(self):
        for _ in range(50):
            code = generate_otp()
            assert len(code) == 6
            assert code.isdigit()

    def test_custom_length(self):
        assert len(generate_otp(8)) == 8

    def test_not_constant(self):
        assert len({generate_otp() for _ in range(20)}) > 1

    def test_invalid_length(self):
        with pytest.raises(ValueError):
            generate_otp(0)


class TestTokenService:

    def test_round_trip_carries_claims(self):
        tokens = TokenService(SECRET)
        token = tokens.issue('abc123', VERIFY_EMAIL, expires_in=60, email='a@x.com')

        payload = tokens.verify(token, VERIFY_EMAIL)

        assert payload['sub'] == 'abc123'
        assert payload['email'] == 'a@x.com'
        assert payload['purpose'] == VERIFY_EMAIL

    def test_no_expiry_when_not_requested(self):
        tokens = TokenService(SECRET)

        payload = tokens.verify(tokens.issue('abc123', SESSION), SESSION)

        assert 'exp' not in payload

    def test_reissued_tokens_differ(self):
        tokens = TokenService(SECRET)

        assert tokens.issue('abc123', SESSION) != tokens.issue('abc123', SESSION)

    def test_expired(self):
        tokens = TokenService(SECRET)
        token = tokens.issue('abc123', SESSION, expires_in=timedelta(seconds=-5))

        with pytest.raises(ExpiredTokenError):
            tokens.verify(token, SESSION)

    def test_wrong_purpose(self):
        tokens = TokenService(SECRET)
        token = tokens.issue('abc123', SESSION)

        with pytest.raises(InvalidTokenError):
            tokens.verify(token, VERIFY_EMAIL)

    def test_wrong_secret(self):
        token = TokenService('another-secret-with-enough-length-for-hs256').issue('abc123', SESSION)

        with pytest.raises(InvalidTokenError):
            TokenService(SECRET).verify(token, SESSION)

    def test_none_algorithm_rejected(self):
        token = jwt.encode({'sub': 'abc123', 'purpose': SESSION, 'iat': 0}, '', algorithm='none')

        with pytest.raises(InvalidTokenError):
            TokenService(SECRET).verify(token, SESSION)

    def test_missing_subject(self):
        token = jwt.encode({'purpose': SESSION, 'iat': 0}, SECRET, algorithm='HS256')

        with pytest.raises(InvalidTokenError):
            TokenService(SECRET).verify(token, SESSION)

    @pytest.mark.parametrize('token', [None, '', 'garbage', 123])
    def test_malformed(self, token):
        with pytest.raises(InvalidTokenError):
            TokenService(SECRET).verify(token, SESSION)

    def test_secret_required(self):
        with pytest.raises(ValueError):
            TokenService('')
