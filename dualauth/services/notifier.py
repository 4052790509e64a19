"""Fire-and-forget delivery of SMS and email notifications.

Sends are handed to a thread pool so the request that triggered them
returns without waiting on Vonage or SMTP. A failed send is logged and
otherwise ignored; it never fails the request.
"""

import logging

logger = logging.getLogger(__name__)


class Notifier:
    """Dispatch notifications through the configured senders.

    Args:
        sms: object with ``send(phone, text) -> bool``
        email: object with ``send_verification_email(to_email, full_name,
            verification_url, expires_hours) -> bool``
        executor: ``concurrent.futures.Executor``; ``None`` runs sends inline
    """

    def __init__(self, sms, email, executor=None):
        self.sms = sms
        self.email = email
        self.executor = executor

    def send_sms(self, phone, text):
        self._dispatch(f"SMS to {phone}", self.sms.send, phone, text)

    def send_verification_email(self, to_email, full_name, verification_url, expires_hours):
        self._dispatch(
            f"verification email to {to_email}",
            self.email.send_verification_email,
            to_email, full_name, verification_url, expires_hours,
        )

    def shutdown(self, wait=True):
        """Stop the pool; with ``wait`` queued sends finish first."""
        if self.executor is not None:
            self.executor.shutdown(wait=wait)

    def _dispatch(self, description, send, *args):
        if self.executor is None:
            self._run(description, send, *args)
        else:
            self.executor.submit(self._run, description, send, *args)

    @staticmethod
    def _run(description, send, *args):
        try:
            sent = send(*args)
        except Exception:
            logger.exception(f"Failed to deliver {description}")
            return False
        if sent is False:
            logger.warning(f"Delivery of {description} was not accepted")
        return bool(sent)
