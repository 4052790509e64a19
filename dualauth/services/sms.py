"""Vonage SMS sender.

Sends plain text messages through the Vonage SMS REST API. When no API
credentials are configured the sender runs in dev mode: the message is
logged instead of sent and the call reports success so local flows keep
working.
"""

import logging

import requests

logger = logging.getLogger(__name__)

VONAGE_SMS_URL = 'https://rest.nexmo.com/sms/json'


class SmsSender:
    """Send SMS messages via Vonage."""

    def __init__(self, api_key=None, api_secret=None, sender_id='DualAuth', timeout=10):
        self.api_key = api_key
        self.api_secret = api_secret
        self.sender_id = sender_id
        self.timeout = timeout

    @property
    def configured(self):
        return bool(self.api_key and self.api_secret)

    def send(self, phone: str, text: str) -> bool:
        """Send ``text`` to ``phone`` (digits only, with country code).

        Returns:
            bool: True if Vonage accepted the message
        """
        if not self.configured:
            logger.info(f"[SMS] Vonage not configured - DEV MODE. To: {phone} | {text}")
            return True

        response = requests.post(
            VONAGE_SMS_URL,
            data={
                'api_key': self.api_key,
                'api_secret': self.api_secret,
                'from': self.sender_id,
                'to': phone.lstrip('+'),
                'text': text,
            },
            timeout=self.timeout,
        )
        result = response.json()

        messages = result.get('messages') or [{}]
        if messages[0].get('status') == '0':
            logger.info(f"SMS sent to {phone} via Vonage")
            return True

        error_text = messages[0].get('error-text', 'Unknown error')
        logger.error(f"Vonage error sending SMS to {phone}: {error_text}")
        return False
