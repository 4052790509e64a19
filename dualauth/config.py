"""Application configuration.

Values come from the environment (a local ``.env`` is loaded by the app
factory). ``create_app`` picks one of the classes below by name.
"""

import os


def _int_or_none(value):
    if value is None or str(value).strip() == '':
        return None
    return int(value)


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///dualauth.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Signing secret shared by session and email-verification tokens
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    # Session tokens do not expire unless this is set (seconds)
    SESSION_TOKEN_EXPIRES = _int_or_none(os.getenv('SESSION_TOKEN_EXPIRES'))

    OTP_LENGTH = int(os.getenv('OTP_LENGTH', 6))
    OTP_EXPIRY_SECONDS = int(os.getenv('OTP_EXPIRY_SECONDS', 300))
    EMAIL_TOKEN_EXPIRY_SECONDS = int(os.getenv('EMAIL_TOKEN_EXPIRY_SECONDS', 86400))
    PASSWORD_HASH_METHOD = os.getenv('PASSWORD_HASH_METHOD', 'scrypt')

    BASE_URL = os.getenv('BASE_URL', 'http://localhost:5000')

    # Vonage SMS
    VONAGE_API_KEY = os.getenv('VONAGE_API_KEY')
    VONAGE_API_SECRET = os.getenv('VONAGE_API_SECRET')
    SMS_FROM = os.getenv('SMS_FROM', 'DualAuth')

    # SMTP
    SMTP_HOST = os.getenv('SMTP_HOST', 'smtp.gmail.com')
    SMTP_PORT = int(os.getenv('SMTP_PORT', '587'))
    SMTP_USER = os.getenv('SMTP_USER', '')
    SMTP_PASSWORD = os.getenv('SMTP_PASSWORD', '')
    FROM_EMAIL = os.getenv('FROM_EMAIL', SMTP_USER)
    FROM_NAME = os.getenv('FROM_NAME', 'DualAuth')
    SMTP_TIMEOUT = int(os.getenv('SMTP_TIMEOUT', '10'))

    NOTIFICATION_WORKERS = int(os.getenv('NOTIFICATION_WORKERS', 4))
    # Run notification sends on the request thread instead of the pool
    NOTIFY_INLINE = False

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG').upper()


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    JWT_SECRET_KEY = 'test-secret-key-for-testing-only-0123456789'
    SESSION_TOKEN_EXPIRES = None
    # Fast hashing keeps the suite quick; still salted
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'
    VONAGE_API_KEY = None
    VONAGE_API_SECRET = None
    SMTP_USER = ''
    SMTP_PASSWORD = ''
    NOTIFY_INLINE = True


class ProductionConfig(Config):
    DEBUG = False


_CONFIGS = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}


def get_config(name):
    """Return the config class for ``name`` (defaults to development)."""
    return _CONFIGS.get(name or 'development', DevelopmentConfig)
