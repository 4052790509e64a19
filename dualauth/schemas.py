"""Request contracts for the auth endpoints.

Each request class parses a JSON body into a typed object via
``from_json``. Shape problems raise ``ValidationError`` before anything
reaches the account service.
"""

from dataclasses import dataclass
import re

from dualauth.errors import ValidationError

# Email validation regex
EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')

# Phone: digits only, 10-15 of them
PHONE_REGEX = re.compile(r'^[0-9]{10,15}$')

PASSWORD_MIN_LENGTH = 12
PASSWORD_SYMBOLS = '!@#$%^&*'

FULL_NAME_MIN_LENGTH = 2
FULL_NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 254


def _require_body(data):
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def _require_string(data, field):
    value = data.get(field)
    if value is None:
        raise ValidationError(f'{field} is required')
    if not isinstance(value, str):
        raise ValidationError(f'{field} must be a string')
    if not value.strip():
        raise ValidationError(f'{field} is required')
    return value


def validate_phone(phone, field='phone'):
    if not PHONE_REGEX.match(phone):
        raise ValidationError(f'{field} must be 10-15 digits')
    return phone


def validate_email(email):
    email = email.strip().lower()
    if len(email) > EMAIL_MAX_LENGTH:
        raise ValidationError('Email is too long')
    if not EMAIL_REGEX.match(email):
        raise ValidationError('Invalid email format')
    return email


def validate_password(password, field='password'):
    """Enforce the password policy. Returns the password unchanged."""
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f'{field} must be at least {PASSWORD_MIN_LENGTH} characters')
    if not (re.search(r'[a-z]', password)
            and re.search(r'[A-Z]', password)
            and re.search(r'[0-9]', password)
            and any(c in PASSWORD_SYMBOLS for c in password)):
        raise ValidationError(
            f'{field} must contain at least one lowercase letter, one uppercase letter, '
            f'one number, and one special character ({PASSWORD_SYMBOLS})'
        )
    return password


@dataclass(frozen=True)
class RegisterRequest:
    full_name: str
    phone: str
    email: str
    password: str

    @classmethod
    def from_json(cls, data):
        data = _require_body(data)
        full_name = _require_string(data, 'fullName').strip()
        if not FULL_NAME_MIN_LENGTH <= len(full_name) <= FULL_NAME_MAX_LENGTH:
            raise ValidationError(
                f'fullName must be {FULL_NAME_MIN_LENGTH}-{FULL_NAME_MAX_LENGTH} characters'
            )
        return cls(
            full_name=full_name,
            phone=validate_phone(_require_string(data, 'phone')),
            email=validate_email(_require_string(data, 'email')),
            password=validate_password(_require_string(data, 'password')),
        )


@dataclass(frozen=True)
class VerifyPhoneRequest:
    user_id: str
    otp: str

    @classmethod
    def from_json(cls, data):
        data = _require_body(data)
        return cls(
            user_id=_require_string(data, 'userId').strip(),
            otp=_require_string(data, 'otp').strip(),
        )


@dataclass(frozen=True)
class LoginRequest:
    phone: str
    password: str

    @classmethod
    def from_json(cls, data):
        data = _require_body(data)
        return cls(
            phone=validate_phone(_require_string(data, 'phone')),
            password=_require_string(data, 'password'),
        )


@dataclass(frozen=True)
class ForgotPasswordRequest:
    phone: str

    @classmethod
    def from_json(cls, data):
        data = _require_body(data)
        return cls(phone=validate_phone(_require_string(data, 'phone')))


@dataclass(frozen=True)
class ResetPasswordRequest:
    user_id: str
    otp: str
    new_password: str

    @classmethod
    def from_json(cls, data):
        data = _require_body(data)
        return cls(
            user_id=_require_string(data, 'userId').strip(),
            otp=_require_string(data, 'otp').strip(),
            new_password=validate_password(
                _require_string(data, 'newPassword'), field='newPassword'
            ),
        )


@dataclass(frozen=True)
class ChangePasswordRequest:
    current_password: str
    new_password: str

    @classmethod
    def from_json(cls, data):
        data = _require_body(data)
        return cls(
            current_password=_require_string(data, 'currentPassword'),
            new_password=validate_password(
                _require_string(data, 'newPassword'), field='newPassword'
            ),
        )


@dataclass(frozen=True)
class ResendRequest:
    user_id: str

    @classmethod
    def from_json(cls, data):
        data = _require_body(data)
        return cls(user_id=_require_string(data, 'userId').strip())


def parse_verify_email_token(args):
    """Pull the ``token`` query parameter out of request args."""
    token = args.get('token')
    if not token or not token.strip():
        raise ValidationError('token is required')
    return token.strip()
