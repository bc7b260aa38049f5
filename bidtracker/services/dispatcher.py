"""Notification dispatcher: one message per call over the tenant's SMTP server."""

import asyncio
import logging
import smtplib
import ssl
from collections.abc import Callable
from email.message import EmailMessage
from email.utils import formataddr, make_msgid
from typing import Protocol

from bidtracker.config import settings

from .exceptions import ConfigError, TransportError
from .tenant_config import MailSettings

logger = logging.getLogger(__name__)


class MailTransport(Protocol):
    """Something that can deliver a fully built message."""

    def send(self, message: EmailMessage) -> None: ...


class SMTPTransport:
    """
    Short-lived SMTP connection.

    Port 465 uses implicit TLS, any other port upgrades with STARTTLS.
    """

    def __init__(self, mail: MailSettings, timeout: int | None = None):
        self.mail = mail
        self.timeout = timeout or settings.smtp_timeout_seconds

    def send(self, message: EmailMessage) -> None:
        context = ssl.create_default_context()
        if self.mail.port == 465:
            server = smtplib.SMTP_SSL(
                self.mail.host, self.mail.port, timeout=self.timeout, context=context
            )
        else:
            server = smtplib.SMTP(self.mail.host, self.mail.port, timeout=self.timeout)

        with server:
            server.ehlo()
            if self.mail.port != 465:
                server.starttls(context=context)
                server.ehlo()
            server.login(self.mail.username, self.mail.password)
            server.send_message(message)


TransportFactory = Callable[[MailSettings], MailTransport]


class NotificationDispatcher:
    """Sends rendered messages through the tenant's own mail server."""

    def __init__(self, transport_factory: TransportFactory = SMTPTransport):
        self.transport_factory = transport_factory

    def build_message(
        self,
        mail: MailSettings,
        to: str,
        subject: str,
        body: str,
        html: str | None = None,
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((mail.sender_name, mail.username))
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid()
        message.set_content(body)
        if html:
            message.add_alternative(html, subtype="html")
        return message

    async def send(
        self,
        mail: MailSettings,
        to: str | None,
        subject: str,
        body: str,
        html: str | None = None,
    ) -> None:
        """
        Send one message.

        Args:
            mail: Tenant SMTP settings
            to: Recipient address
            subject: Rendered subject
            body: Plain-text body
            html: Optional HTML alternative

        Raises:
            ConfigError: Credentials or recipient missing (do not retry)
            TransportError: Delivery failed at send time (may be retried)
        """
        if not mail.is_complete:
            raise ConfigError("SMTP host, user and password must be configured in settings")
        if not to:
            raise ConfigError("Recipient has no e-mail address")

        message = self.build_message(mail, to, subject, body, html)
        transport = self.transport_factory(mail)

        try:
            await asyncio.to_thread(transport.send, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP delivery via {mail.host}:{mail.port} to {to} failed: {e}")
            raise TransportError(str(e)) from e

        logger.info(f"Mail sent to {to} via {mail.username}")


# Singleton instance
notification_dispatcher = NotificationDispatcher()
