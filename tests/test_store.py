"""
Tests for account lookups used by registration and login.
"""

from datetime import timedelta

import pytest

from dualauth.models import Account, new_account_id
from dualauth.store import AccountStore
from dualauth.utils.clock import utcnow


@pytest.fixture
def store(db_session):
    return AccountStore(db_session)


def _account(store, phone='15550000001', email='a@x.com', phone_verified=False,
             email_verified=False, updated_at=None):
    account = Account(
        id=new_account_id(),
        full_name='Test User',
        phone=phone,
        email=email,
        password_hash='not-a-real-hash',
        phone_verified=phone_verified,
        email_verified=email_verified,
    )
    if updated_at:
        account.updated_at = updated_at
    return store.save(account)


def test_get_missing(store):
    assert store.get('nope') is None
    assert store.get(None) is None


def test_find_verified_ignores_unverified(store):
    _account(store, phone='15550000001', email='a@x.com')

    assert store.find_verified_by_phone('15550000001') is None
    assert store.find_verified_by_email('a@x.com') is None


def test_find_pending_matches_phone_or_email(store):
    pending = _account(store, phone='15550000001', email='a@x.com')

    assert store.find_pending('15550000001', 'other@x.com').id == pending.id
    assert store.find_pending('15559999999', 'a@x.com').id == pending.id
    assert store.find_pending('15559999999', 'other@x.com') is None


def test_find_pending_skips_fully_verified(store):
    _account(store, phone='15550000001', email='a@x.com', phone_verified=True, email_verified=True)

    assert store.find_pending('15550000001', 'a@x.com') is None


def test_find_pending_includes_partially_verified(store):
    partial = _account(store, phone='15550000001', email='a@x.com', email_verified=True)

    assert store.find_pending('15550000001', 'b@x.com').id == partial.id


def test_find_by_phone_prefers_verified_record(store):
    now = utcnow()
    verified = _account(store, email='first@x.com', phone_verified=True,
                        updated_at=now - timedelta(days=1))
    _account(store, email='second@x.com', updated_at=now)

    assert store.find_by_phone('15550000001').id == verified.id


def test_unverified_duplicates_can_coexist(store, db_session):
    _account(store, email='first@x.com')
    _account(store, email='second@x.com')

    assert db_session.query(Account).filter_by(phone='15550000001').count() == 2
