"""Account lifecycle: registration, verification, login and password flows.

``AccountService`` owns the state machine of an account (phone/email
unverified -> verified) and the credentials attached to it. It is built
once by the app factory with its collaborators injected and is shared by
all requests; it holds no per-request state of its own.
"""

from datetime import timedelta
import hmac
import logging

from dualauth.errors import (
    AlreadyVerifiedError,
    BadRequestError,
    ConflictError,
    ExpiredError,
    InvalidCredentialError,
    NotFoundError,
    UnauthorizedError,
)
from dualauth.models import Account, new_account_id
from dualauth.security.otp import DEFAULT_OTP_LENGTH, generate_otp
from dualauth.security.tokens import SESSION, VERIFY_EMAIL, InvalidTokenError
from dualauth.utils.clock import utcnow

logger = logging.getLogger(__name__)

LOGIN_FAILED = 'Invalid phone number or password'


def _codes_match(stored, submitted):
    return hmac.compare_digest(stored.encode('utf-8'), submitted.encode('utf-8'))


def _as_timedelta(value):
    if value is None or isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


class AccountService:
    """Orchestrates every account operation exposed over HTTP.

    Args:
        store: ``AccountStore``
        hasher: ``PasswordHasher``
        tokens: ``TokenService``
        notifier: ``Notifier``
        verify_email_url: link target for email verification; the token is
            appended as ``?token=...``
        clock: callable returning the current naive UTC datetime
        otp_ttl: lifetime of phone and reset OTPs (seconds or timedelta)
        email_token_ttl: lifetime of email verification tokens
        session_ttl: lifetime of session tokens, ``None`` for no expiry
        otp_length: digits per OTP
    """

    def __init__(self, store, hasher, tokens, notifier, verify_email_url,
                 clock=utcnow, otp_ttl=300, email_token_ttl=86400,
                 session_ttl=None, otp_length=DEFAULT_OTP_LENGTH):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self.notifier = notifier
        self.verify_email_url = verify_email_url
        self.clock = clock
        self.otp_ttl = _as_timedelta(otp_ttl)
        self.email_token_ttl = _as_timedelta(email_token_ttl)
        self.session_ttl = _as_timedelta(session_ttl)
        self.otp_length = otp_length

    # ------------------------------------------------------------------
    # Registration and verification
    # ------------------------------------------------------------------

    def register(self, req):
        """Create (or refresh a pending) account and send both verifications.

        Returns:
            str: The account id
        """
        if self.store.find_verified_by_phone(req.phone):
            raise ConflictError('Phone number already registered and verified')

        if self.store.find_verified_by_email(req.email):
            raise ConflictError('Email already registered and verified')

        account = self.store.find_pending(req.phone, req.email)
        if account:
            # Re-registration over an unfinished sign-up: name and password
            # only. Phone, email and verified flags stay as they are.
            account.full_name = req.full_name
            logger.info(f"Re-registration over pending account {account.id}")
        else:
            account = Account(
                id=new_account_id(),
                full_name=req.full_name,
                phone=req.phone,
                email=req.email,
                phone_verified=False,
                email_verified=False,
            )
        account.password_hash = self.hasher.hash(req.password)

        otp = self._issue_phone_otp(account)
        email_token = self._issue_email_token(account)
        self.store.save(account)

        logger.info(f"Account registered: {account.id}")

        self._send_phone_otp(account.phone, otp)
        self._send_verification_email(account, email_token)

        return account.id

    def verify_phone(self, req):
        account = self._get_or_404(req.user_id)

        if account.phone_verified:
            raise AlreadyVerifiedError('Phone already verified')

        self._check_code(account.phone_otp_code, account.phone_otp_expires_at, req.otp)

        account.phone_verified = True
        account.clear_phone_otp()
        self.store.save(account)

        logger.info(f"Phone verified for account {account.id}")

    def verify_email(self, token):
        try:
            payload = self.tokens.verify(token, VERIFY_EMAIL)
        except InvalidTokenError:
            raise InvalidCredentialError('Invalid or expired token')

        account = self._get_or_404(payload['sub'])

        if account.email_verified:
            raise AlreadyVerifiedError('Email already verified')

        # A newer link supersedes older ones
        if not account.email_token or not _codes_match(account.email_token, token):
            raise InvalidCredentialError('Invalid token')

        if self._expired(account.email_token_expires_at):
            raise ExpiredError('Token expired')

        account.email_verified = True
        account.clear_email_token()
        self.store.save(account)

        logger.info(f"Email verified for account {account.id}")

    def resend_phone_otp(self, req):
        account = self._get_or_404(req.user_id)

        if account.phone_verified:
            raise AlreadyVerifiedError('Phone already verified')

        otp = self._issue_phone_otp(account)
        self.store.save(account)
        self._send_phone_otp(account.phone, otp)

    def resend_email_verification(self, req):
        account = self._get_or_404(req.user_id)

        if account.email_verified:
            raise AlreadyVerifiedError('Email already verified')

        email_token = self._issue_email_token(account)
        self.store.save(account)
        self._send_verification_email(account, email_token)

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def login(self, req):
        """Check phone + password and issue a session token.

        Unknown phone and wrong password fail with the same message.

        Returns:
            tuple: (session token, Account)
        """
        account = self.store.find_by_phone(req.phone)

        if not account or not self.hasher.verify(req.password, account.password_hash):
            raise UnauthorizedError(LOGIN_FAILED)

        if not account.phone_verified:
            raise UnauthorizedError('Phone number not verified')

        token = self.tokens.issue(account.id, SESSION, expires_in=self.session_ttl)
        return token, account

    def get_profile(self, account_id):
        account = self.store.get(account_id)
        if not account:
            raise UnauthorizedError('User not found')
        return account

    # ------------------------------------------------------------------
    # Passwords
    # ------------------------------------------------------------------

    def forgot_password(self, req):
        """Send a reset OTP to a verified phone.

        Returns:
            str: The account id to pass back with the OTP
        """
        account = self.store.find_by_phone(req.phone)

        if not account:
            raise NotFoundError('User not found with this phone number')

        if not account.phone_verified:
            raise BadRequestError('Phone number not verified')

        otp = generate_otp(self.otp_length)
        account.set_reset_otp(otp, self.clock() + self.otp_ttl)
        self.store.save(account)

        self.notifier.send_sms(
            account.phone,
            f"Your password reset OTP is: {otp}. It expires in {self._otp_minutes} minutes."
        )
        return account.id

    def reset_password(self, req):
        account = self._get_or_404(req.user_id)

        self._check_code(account.reset_otp_code, account.reset_otp_expires_at, req.otp)

        account.password_hash = self.hasher.hash(req.new_password)
        account.clear_reset_otp()
        self.store.save(account)

        logger.info(f"Password reset for account {account.id}")

    def change_password(self, account_id, req):
        account = self.store.get(account_id)

        if not account:
            raise UnauthorizedError('User not found')

        if not self.hasher.verify(req.current_password, account.password_hash):
            raise UnauthorizedError('Current password is incorrect')

        account.password_hash = self.hasher.hash(req.new_password)
        self.store.save(account)

        logger.info(f"Password changed for account {account.id}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def _otp_minutes(self):
        return max(1, int(self.otp_ttl.total_seconds() // 60))

    def _get_or_404(self, account_id):
        account = self.store.get(account_id)
        if not account:
            raise NotFoundError('User not found')
        return account

    def _expired(self, expires_at):
        return expires_at is None or self.clock() >= expires_at

    def _check_code(self, stored_code, expires_at, submitted):
        if not stored_code:
            raise InvalidCredentialError('No OTP found')

        if self._expired(expires_at):
            raise ExpiredError('OTP expired')

        if not _codes_match(stored_code, submitted):
            raise InvalidCredentialError('Invalid OTP')

    def _issue_phone_otp(self, account):
        otp = generate_otp(self.otp_length)
        account.set_phone_otp(otp, self.clock() + self.otp_ttl)
        return otp

    def _issue_email_token(self, account):
        token = self.tokens.issue(
            account.id, VERIFY_EMAIL,
            expires_in=self.email_token_ttl,
            email=account.email,
        )
        account.set_email_token(token, self.clock() + self.email_token_ttl)
        return token

    def _send_phone_otp(self, phone, otp):
        self.notifier.send_sms(
            phone,
            f"Your verification code is: {otp}. It expires in {self._otp_minutes} minutes."
        )

    def _send_verification_email(self, account, token):
        self.notifier.send_verification_email(
            account.email,
            account.full_name,
            f"{self.verify_email_url}?token={token}",
            max(1, int(self.email_token_ttl.total_seconds() // 3600)),
        )
