"""Email sender for transactional messages."""

import logging
import smtplib
from html import escape
import socket
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

logger = logging.getLogger(__name__)


class EmailSender:
    """
    SMTP email sender (Gmail, Outlook, custom SMTP servers).

    Without SMTP credentials the sender is in dev mode: messages are logged
    and reported as sent.
    """

    def __init__(self, host='smtp.gmail.com', port=587, user='', password='',
                 from_email=None, from_name='DualAuth', timeout=10):
        self.smtp_host = host
        self.smtp_port = port
        self.smtp_user = user
        self.smtp_password = password
        self.from_email = from_email or user
        self.from_name = from_name
        self.smtp_timeout = timeout

    def _create_connection(self):
        """Create SMTP connection with timeout."""
        server = smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.smtp_timeout)
        server.starttls()
        if self.smtp_user and self.smtp_password:
            server.login(self.smtp_user, self.smtp_password)
        return server

    def send(self, to_email, subject, text_content, html_content=None):
        """
        Send an email.

        Args:
            to_email: Recipient email address
            subject: Email subject
            text_content: Plain text body
            html_content: HTML alternative (optional)

        Returns:
            bool: True if sent successfully, False otherwise
        """
        if not self.smtp_user or not self.smtp_password:
            logger.info(
                f"[EMAIL] SMTP not configured - DEV MODE. To: {to_email} | "
                f"Subject: {subject}\n{text_content}"
            )
            return True

        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = f"{self.from_name} <{self.from_email}>"
        msg['To'] = to_email
        msg.attach(MIMEText(text_content, 'plain'))
        if html_content:
            msg.attach(MIMEText(html_content, 'html'))

        try:
            server = self._create_connection()
            try:
                server.sendmail(self.from_email, to_email, msg.as_string())
            finally:
                server.quit()
        except socket.timeout:
            logger.error(f"[EMAIL] SMTP connection timed out after {self.smtp_timeout}s")
            return False
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"[EMAIL] SMTP Authentication failed: {e}")
            return False
        except smtplib.SMTPException as e:
            logger.error(f"[EMAIL] SMTP error: {e}")
            return False

        logger.info(f"[EMAIL] Sent '{subject}' to {to_email}")
        return True

    def send_verification_email(self, to_email, full_name, verification_url, expires_hours=24):
        """Send the email-address verification link."""
        subject = "Verify your email address"

        text_content = (
            f"Hi {full_name},\n\n"
            f"Please verify your email by clicking on this link:\n"
            f"{verification_url}\n\n"
            f"This link will expire in {expires_hours} hours.\n"
        )

        html_content = f"""
        <!DOCTYPE html>
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
            <p>Hi <strong>{escape(full_name)}</strong>,</p>
            <p>Please verify your email address by clicking the button below:</p>
            <p style="text-align: center; margin: 30px 0;">
                <a href="{verification_url}" style="background: #3B82F6; color: white; padding: 14px 30px; text-decoration: none; border-radius: 8px;">Verify Email</a>
            </p>
            <p style="font-size: 14px; color: #6b7280;">This link will expire in <strong>{expires_hours} hours</strong>.</p>
            <p style="font-size: 12px; color: #9ca3af; word-break: break-all;">{verification_url}</p>
        </body>
        </html>
        """

        return self.send(to_email, subject, text_content, html_content)
