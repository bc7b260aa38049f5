"""Composes reminder and summary e-mails for a bid."""

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from bidtracker.config import settings
from bidtracker.models import Bid, Client

from .dispatcher import NotificationDispatcher, notification_dispatcher
from .template_renderer import TemplateRenderer, TemplateVariables, template_renderer
from .tenant_config import TenantConfig

logger = logging.getLogger(__name__)

# Setup Jinja2 environment
templates_dir = Path(__file__).parent.parent / "templates"
jinja_env = Environment(
    loader=FileSystemLoader(str(templates_dir)),
    autoescape=True,
)


def portal_link(client: Client, bid: Bid) -> str:
    """Client portal link; token-based when the client has a token."""
    if client.access_token:
        return f"{settings.portal_base_url}/portal/{client.access_token}?id={bid.id}"
    return f"{settings.portal_base_url}/portal?id={bid.id}"


class EmailService:
    """Renders tenant templates into e-mails and hands them to the dispatcher."""

    def __init__(
        self,
        renderer: TemplateRenderer = template_renderer,
        dispatcher: NotificationDispatcher = notification_dispatcher,
    ):
        self.renderer = renderer
        self.dispatcher = dispatcher

    async def send_reminder(self, config: TenantConfig, bid: Bid, client: Client) -> None:
        """
        Send the deadline reminder asking the client to decide.

        Raises:
            ConfigError: Incomplete credentials or client without e-mail
            TransportError: Mail server failure
        """
        link = portal_link(client, bid)
        message = self.renderer.render(
            config.reminder,
            TemplateVariables(
                client=client.name,
                bid_title=bid.title,
                link=link,
                sender_name=config.mail.sender_name,
            ),
        )
        subject = message.subject or f"Action needed: bid {bid.title}"

        html = jinja_env.get_template("emails/reminder.html").render(
            message=message.body,
            link=link,
            sender_name=config.mail.sender_name,
        )

        await self.dispatcher.send(config.mail, client.email, subject, message.body, html)
        logger.info(f"Reminder for bid {bid.id} sent to {client.email}")

    async def send_summary(self, config: TenantConfig, bid: Bid, client: Client) -> None:
        """
        Send the bid summary with its documents.

        Each attachment is listed as its own link; the single historical
        link is used when the bid has no attachments. ``{{LINK}}`` is
        dropped from the summary text because documents get their own block.

        Raises:
            ConfigError: Incomplete credentials or client without e-mail
            TransportError: Mail server failure
        """
        documents = bid.documents
        message = self.renderer.render(
            config.summary,
            TemplateVariables(
                client=client.name,
                bid_title=bid.title,
                link="",
                sender_name=config.mail.sender_name,
            ),
        )
        subject = message.subject or f"Summary: {bid.title}"

        text_lines = [message.body.rstrip()]
        if documents:
            text_lines.append("")
            text_lines.append("Documents:")
            text_lines.extend(f"- {doc['name']}: {doc['url']}" for doc in documents)
        else:
            text_lines.append("")
            text_lines.append("(No documents attached.)")
        text_lines.append("")
        text_lines.append(f"Sent by {config.mail.sender_name}")

        html = jinja_env.get_template("emails/summary.html").render(
            message=message.body,
            documents=documents,
            sender_name=config.mail.sender_name,
        )

        await self.dispatcher.send(config.mail, client.email, subject, "\n".join(text_lines), html)
        logger.info(f"Summary for bid {bid.id} sent to {client.email} ({len(documents)} documents)")


# Singleton instance
email_service = EmailService()
