"""Account persistence.

Thin query layer over the SQLAlchemy session so the lifecycle code never
builds queries itself. Each lifecycle operation does one read-modify-write
and commits through ``save``; there is no locking, the last commit wins.
"""

from sqlalchemy import or_

from dualauth.models import Account


class AccountStore:
    """Lookup and save ``Account`` records."""

    def __init__(self, session):
        self.session = session

    def get(self, account_id):
        """Fetch by id, or None."""
        if not account_id:
            return None
        return self.session.get(Account, str(account_id))

    def find_verified_by_phone(self, phone):
        return self.session.query(Account).filter_by(
            phone=phone, phone_verified=True
        ).first()

    def find_verified_by_email(self, email):
        return self.session.query(Account).filter_by(
            email=email, email_verified=True
        ).first()

    def find_by_phone(self, phone):
        """Fetch the account a phone number logs into.

        Several records can share an unverified phone; the verified one wins,
        then the most recently updated.
        """
        return self.session.query(Account)\
            .filter_by(phone=phone)\
            .order_by(Account.phone_verified.desc(), Account.updated_at.desc())\
            .first()

    def find_pending(self, phone, email):
        """Fetch a not fully verified account matching phone OR email."""
        return self.session.query(Account).filter(
            or_(Account.phone == phone, Account.email == email),
            or_(Account.phone_verified == False, Account.email_verified == False),  # noqa: E712
        ).order_by(Account.updated_at.desc()).first()

    def save(self, account):
        """Persist pending changes to ``account``."""
        try:
            self.session.add(account)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return account
