"""Per-tenant mail configuration lookup."""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.config import settings
from bidtracker.models import TenantSettings

from .template_renderer import MessageTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailSettings:
    """SMTP credentials of one tenant."""

    host: str
    port: int
    username: str
    password: str
    sender_name: str

    @property
    def is_complete(self) -> bool:
        return bool(self.host and self.port and self.username and self.password)


@dataclass(frozen=True)
class TenantConfig:
    """Immutable snapshot of a tenant's settings used for one dispatch."""

    tenant_id: str
    mail: MailSettings
    reminder: MessageTemplate
    summary: MessageTemplate

    @classmethod
    def from_model(cls, row: TenantSettings) -> "TenantConfig":
        return cls(
            tenant_id=row.tenant_id,
            mail=MailSettings(
                host=row.smtp_host or settings.default_smtp_host,
                port=row.smtp_port or settings.default_smtp_port,
                username=row.smtp_user or "",
                password=row.smtp_password or "",
                sender_name=row.sender_name or settings.default_sender_name,
            ),
            reminder=MessageTemplate(
                subject=row.reminder_subject or settings.default_reminder_subject,
                body=row.reminder_body or settings.default_reminder_body,
            ),
            summary=MessageTemplate(
                subject=row.summary_subject or settings.default_summary_subject,
                body=row.summary_body or settings.default_summary_body,
            ),
        )


class TenantConfigResolver:
    """Resolves the mail configuration of a bid owner. No caching."""

    async def resolve(self, db: AsyncSession, tenant_id: str) -> TenantConfig | None:
        result = await db.execute(
            select(TenantSettings).where(TenantSettings.tenant_id == tenant_id)
        )
        row = result.scalar_one_or_none()
        if row is None:
            logger.debug(f"No mail settings for tenant {tenant_id}")
            return None
        return TenantConfig.from_model(row)


# Singleton instance
tenant_config_resolver = TenantConfigResolver()
