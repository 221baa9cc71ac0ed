"""
Notifier — sends the staff emails over SMTP.

Transport failures are logged and swallowed: a request that was saved
should not be reported as failed because an email bounced.
"""
import logging
import smtplib
from email.message import EmailMessage

from .formatter_service import (
    format_request_alert, format_options_alert,
    request_alert_subject, options_alert_subject,
)

logger = logging.getLogger(__name__)


class Notifier:
    def __init__(self, host, port, sender, username=None, password=None,
                 use_tls=True, enabled=True, timeout=30):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.enabled = enabled
        self.timeout = timeout

    def send(self, to, subject, body):
        """Send a plain-text email. Returns True when the server accepted it."""
        if not self.enabled:
            logger.info(f"Email disabled — would have sent '{subject}' to {to}")
            return False

        try:
            # Header values containing CR/LF raise ValueError
            message = EmailMessage()
            message['From'] = self.sender
            message['To'] = to
            message['Subject'] = subject
            message.set_content(body)

            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.error(f"Email error sending '{subject}' to {to}: {e}")
            return False

        logger.info(f"Email sent to {to}")
        return True

    def send_request_alert(self, to, customer, sku, url='N/A'):
        return self.send(to, request_alert_subject(customer), format_request_alert(customer, sku, url))

    def send_options_alert(self, request, reply, options):
        return self.send(
            request.assigned_user_email,
            options_alert_subject(request),
            format_options_alert(request, reply, options),
        )
