"""
Pytest configuration and fixtures for testing the auth API.
"""

from datetime import timedelta
import os
import re
import sys
from urllib.parse import urlparse, parse_qs

import pytest
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from dualauth import create_app, db
from dualauth.utils.clock import utcnow

fake = Faker()

STRONG_PASSWORD = 'Abcd1234!@#$'
OTHER_PASSWORD = 'Zyxw9876$%^&'


class RecordingSms:
    """SMS sender that keeps messages instead of sending them."""

    def __init__(self):
        self.messages = []

    def send(self, phone, text):
        self.messages.append((phone, text))
        return True

    def last_code(self, phone=None):
        for to, text in reversed(self.messages):
            if phone is None or to == phone:
                return re.search(r'is: (\d+)', text).group(1)
        raise AssertionError(f"No SMS recorded for {phone}")


class RecordingEmail:
    """Email sender that keeps verification links instead of sending them."""

    def __init__(self):
        self.messages = []

    def send_verification_email(self, to_email, full_name, verification_url, expires_hours):
        self.messages.append((to_email, verification_url))
        return True

    def last_token(self, to_email=None):
        for to, url in reversed(self.messages):
            if to_email is None or to == to_email:
                return parse_qs(urlparse(url).query)['token'][0]
        raise AssertionError(f"No email recorded for {to_email}")


class FakeClock:
    """Controllable replacement for ``utcnow``."""

    def __init__(self):
        self.now = utcnow()

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app(
        'testing',
        SMS_SENDER=RecordingSms(),
        EMAIL_SENDER=RecordingEmail(),
    )

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture
def service(app):
    return app.extensions['account_service']


@pytest.fixture
def sms(app):
    recorder = app.extensions['account_service'].notifier.sms
    recorder.messages.clear()
    return recorder


@pytest.fixture
def mailbox(app):
    recorder = app.extensions['account_service'].notifier.email
    recorder.messages.clear()
    return recorder


@pytest.fixture
def clock(service):
    """Swap the service clock for a controllable one."""
    original = service.clock
    fake_clock = FakeClock()
    service.clock = fake_clock
    yield fake_clock
    service.clock = original


def make_registration(**overrides):
    data = {
        'fullName': fake.name()[:50],
        'phone': fake.unique.numerify('1555#######'),
        'email': fake.unique.email(),
        'password': STRONG_PASSWORD,
    }
    data.update(overrides)
    return data


@pytest.fixture
def registered(client, db_session, sms, mailbox):
    """Register an account; nothing verified yet."""
    data = make_registration()
    resp = client.post('/api/auth/register', json=data)
    assert resp.status_code == 201, resp.get_json()
    data['userId'] = resp.get_json()['userId']
    return data


@pytest.fixture
def verified(client, registered, sms):
    """Register an account and verify its phone."""
    resp = client.post('/api/auth/verify-phone', json={
        'userId': registered['userId'],
        'otp': sms.last_code(registered['phone']),
    })
    assert resp.status_code == 200, resp.get_json()
    return registered


def login(client, phone, password):
    return client.post('/api/auth/login', json={'phone': phone, 'password': password})


@pytest.fixture
def auth_headers(client, verified):
    """Get authentication headers for a phone-verified account."""
    resp = login(client, verified['phone'], verified['password'])
    assert resp.status_code == 200, resp.get_json()
    return {'Authorization': f"Bearer {resp.get_json()['token']}"}
