"""
SMTP delivery for reminder e-mails
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr

from app.core.config import settings
from app.core.errors import TransportError

logger = logging.getLogger(__name__)


class EmailService:
    """Sends HTML e-mail through the configured SMTP account"""

    def __init__(
        self,
        host: str = None,
        port: int = None,
        user: str = None,
        password: str = None,
        from_name: str = None,
        timeout: int = None,
    ):
        self.host = host or settings.SMTP_HOST
        self.port = port or settings.SMTP_PORT
        self.user = user or settings.EMAIL_USER
        self.password = password or settings.EMAIL_PASS
        self.from_name = from_name or settings.EMAIL_FROM_NAME
        self.timeout = timeout or settings.SMTP_TIMEOUT

    def ensure_configured(self) -> None:
        if not self.user or not self.password:
            raise TransportError("Email credentials not provided. Set EMAIL_USER and EMAIL_PASS")

    def build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = formataddr((self.from_name, self.user))
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content("This reminder is best viewed in an HTML-capable mail client.")
        msg.add_alternative(html, subtype="html")
        return msg

    def _connect(self) -> smtplib.SMTP:
        if self.port == 465:
            context = ssl.create_default_context()
            return smtplib.SMTP_SSL(self.host, self.port, context=context, timeout=self.timeout)
        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        server.starttls(context=ssl.create_default_context())
        return server

    def send(self, to: str, subject: str, html: str) -> None:
        """Send one message; SMTP and socket errors propagate to the caller"""
        self.ensure_configured()
        msg = self.build_message(to, subject, html)
        with self._connect() as server:
            server.login(self.user, self.password)
            server.send_message(msg)
        logger.info(f"Email sent to {to}: {subject}")
