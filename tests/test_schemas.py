"""
Tests for request parsing and validation.
"""

import pytest

from dualauth.errors import ValidationError
from dualauth.schemas import (
    RegisterRequest, LoginRequest, ResetPasswordRequest, ChangePasswordRequest,
    VerifyPhoneRequest, ResendRequest, parse_verify_email_token, validate_password,
)

VALID = {
    'fullName': '  Alice Example ',
    'phone': '15551234567',
    'email': 'Alice@Example.com',
    'password': 'Abcd1234!@#$',
}


def test_register_request_normalises():
    req = RegisterRequest.from_json(VALID)

    assert req.full_name == 'Alice Example'
    assert req.email == 'alice@example.com'
    assert req.phone == '15551234567'


@pytest.mark.parametrize('field, value', [
    ('fullName', 'A'),
    ('fullName', 'x' * 51),
    ('phone', '123456789'),
    ('phone', '1234567890123456'),
    ('phone', '+15551234567'),
    ('email', 'alice@'),
    ('email', 'a' * 250 + '@x.com'),
    ('password', 12345678901234),
])
def test_register_request_rejects(field, value):
    data = dict(VALID, **{field: value})

    with pytest.raises(ValidationError):
        RegisterRequest.from_json(data)


@pytest.mark.parametrize('body', [None, [], 'string'])
def test_body_must_be_object(body):
    with pytest.raises(ValidationError):
        LoginRequest.from_json(body)


@pytest.mark.parametrize('password', [
    'Abcd1234!@#',        # 11 chars
    'abcd1234!@#$',       # no uppercase
    'ABCD1234!@#$',       # no lowercase
    'Abcdefgh!@#$',       # no digit
    'Abcd12345678',       # no symbol
])
def test_password_policy_rejects(password):
    with pytest.raises(ValidationError):
        validate_password(password)


def test_password_policy_accepts():
    assert validate_password('Abcd1234!@#$') == 'Abcd1234!@#$'


def test_password_policy_has_no_upper_bound():
    password = 'Abcd1234!@#$' * 11

    assert validate_password(password) == password


def test_login_does_not_apply_password_policy():
    req = LoginRequest.from_json({'phone': '15551234567', 'password': 'x'})

    assert req.password == 'x'


def test_reset_and_change_enforce_policy_on_new_password():
    with pytest.raises(ValidationError) as exc:
        ResetPasswordRequest.from_json({'userId': 'u', 'otp': '123456', 'newPassword': 'weak'})
    assert 'newPassword' in exc.value.message

    with pytest.raises(ValidationError):
        ChangePasswordRequest.from_json({'currentPassword': 'old', 'newPassword': 'weak'})


def test_verify_phone_requires_both_fields():
    with pytest.raises(ValidationError):
        VerifyPhoneRequest.from_json({'userId': 'abc'})

    req = VerifyPhoneRequest.from_json({'userId': ' abc ', 'otp': ' 123456 '})
    assert req.user_id == 'abc'
    assert req.otp == '123456'


def test_resend_rejects_blank_user_id():
    with pytest.raises(ValidationError):
        ResendRequest.from_json({'userId': '   '})


def test_verify_email_token_required():
    with pytest.raises(ValidationError):
        parse_verify_email_token({})

    assert parse_verify_email_token({'token': 'abc'}) == 'abc'
