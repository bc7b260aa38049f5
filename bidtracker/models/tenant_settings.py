"""Per-tenant mail settings model."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class TenantSettings(BaseModel):
    """
    Outbound mail credentials and message templates of one consultant.

    At most one row per tenant. Bids of a tenant without a row are
    skipped by the reminder scheduler.
    """

    __tablename__ = "tenant_settings"

    tenant_id: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)

    # SMTP transport
    smtp_host: Mapped[str | None] = mapped_column(String(255), nullable=True)
    smtp_port: Mapped[int | None] = mapped_column(Integer, nullable=True)
    smtp_user: Mapped[str | None] = mapped_column(String(255), nullable=True)
    smtp_password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sender_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Templates with {{CLIENT}} / {{BID}} / {{LINK}} / {{SENDER}} placeholders
    reminder_subject: Mapped[str | None] = mapped_column(String(500), nullable=True)
    reminder_body: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary_subject: Mapped[str | None] = mapped_column(String(500), nullable=True)
    summary_body: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<TenantSettings(tenant_id={self.tenant_id}, smtp_host={self.smtp_host})>"
