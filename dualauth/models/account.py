"""Account model for registration, verification and login."""

import uuid

from dualauth import db
from dualauth.utils.clock import utcnow


def new_account_id():
    return uuid.uuid4().hex


class Account(db.Model):
    """A user account with phone/email verification state.

    Phone and email are not unique at the database level: several
    unverified records may share them. Only verified values are kept
    unique, by the registration flow.
    """

    __tablename__ = 'accounts'

    id = db.Column(db.String(32), primary_key=True, default=new_account_id)
    full_name = db.Column(db.String(50), nullable=False)
    phone = db.Column(db.String(15), nullable=False, index=True)
    email = db.Column(db.String(254), nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    phone_verified = db.Column(db.Boolean, default=False, nullable=False)
    email_verified = db.Column(db.Boolean, default=False, nullable=False)

    # Outstanding phone verification OTP
    phone_otp_code = db.Column(db.String(12), nullable=True)
    phone_otp_expires_at = db.Column(db.DateTime, nullable=True)

    # Outstanding email verification token
    email_token = db.Column(db.Text, nullable=True)
    email_token_expires_at = db.Column(db.DateTime, nullable=True)

    # Outstanding password reset OTP
    reset_otp_code = db.Column(db.String(12), nullable=True)
    reset_otp_expires_at = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def set_phone_otp(self, code, expires_at):
        self.phone_otp_code = code
        self.phone_otp_expires_at = expires_at

    def clear_phone_otp(self):
        self.phone_otp_code = None
        self.phone_otp_expires_at = None

    def set_email_token(self, token, expires_at):
        self.email_token = token
        self.email_token_expires_at = expires_at

    def clear_email_token(self):
        self.email_token = None
        self.email_token_expires_at = None

    def set_reset_otp(self, code, expires_at):
        self.reset_otp_code = code
        self.reset_otp_expires_at = expires_at

    def clear_reset_otp(self):
        self.reset_otp_code = None
        self.reset_otp_expires_at = None

    def to_summary(self):
        """Public fields returned on login."""
        return {
            'id': self.id,
            'fullName': self.full_name,
            'phone': self.phone,
            'email': self.email,
            'phoneVerified': self.phone_verified,
            'emailVerified': self.email_verified,
        }

    def to_dict(self):
        """Profile view: summary plus timestamps."""
        data = self.to_summary()
        data['createdAt'] = self.created_at.isoformat() if self.created_at else None
        data['updatedAt'] = self.updated_at.isoformat() if self.updated_at else None
        return data

    def __repr__(self):
        return f'<Account {self.id}>'
