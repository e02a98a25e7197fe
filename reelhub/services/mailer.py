"""
Outbound email for one-time codes.

Uses SMTP when SMTP_HOST is configured. Without it (local development) the
send is logged as skipped; the code itself is never written to the log.
"""

import asyncio
import smtplib
from email.message import EmailMessage

from reelhub.config import settings
from reelhub.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class MailDeliveryError(Exception):
    """Raised when the SMTP server rejects or cannot take a message."""


class Mailer:
    def __init__(self, config=None):
        self.config = config or settings

    def _build(self, to: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.config.MAIL_FROM
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)
        return message

    def _send_sync(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.config.SMTP_HOST, self.config.SMTP_PORT, timeout=10) as smtp:
            if self.config.SMTP_USE_TLS:
                smtp.starttls()
            if self.config.SMTP_USERNAME:
                smtp.login(self.config.SMTP_USERNAME, self.config.SMTP_PASSWORD or "")
            smtp.send_message(message)

    async def send(self, to: str, subject: str, body: str) -> None:
        if not self.config.smtp_configured():
            logger.info("SMTP not configured, email skipped", to=to, subject=subject)
            return

        try:
            await asyncio.to_thread(self._send_sync, self._build(to, subject, body))
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Email delivery failed", to=to, subject=subject, error=str(e))
            raise MailDeliveryError(str(e)) from e

        logger.info("Email sent", to=to, subject=subject)


mailer = Mailer()
