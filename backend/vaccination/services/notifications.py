"""
Confirmation email delivery.

The booking service only needs something with ``send(recipient, subject, body)``;
EmailNotifier is the SMTP implementation used by the API.
"""

import logging
import smtplib
from email.message import EmailMessage
from typing import Optional, Protocol

from ..config import Settings

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def send(self, recipient: str, subject: str, body: str) -> None:
        """Deliver a plain-text message. Failures are raised to the caller."""


class EmailNotifier:
    """Send plain-text mail through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = False,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailNotifier":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.mail_from,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout,
        )

    def build_message(self, recipient: str, subject: str, body: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = recipient
        msg["Subject"] = subject
        msg.set_content(body)
        return msg

    def send(self, recipient: str, subject: str, body: str) -> None:
        msg = self.build_message(recipient, subject, body)

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password or "")
            smtp.send_message(msg)

        logger.info(f"Email sent to {recipient}: {subject}")
