"""Client (company) model."""

import secrets
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel, TenantMixin

if TYPE_CHECKING:
    from .bid import Bid


def generate_access_token() -> str:
    """Random token for the link-based client portal."""
    return secrets.token_urlsafe(24)


class Client(BaseModel, TenantMixin):
    """
    Company on whose behalf bids are tracked.

    The join date is ``created_at``. ``commission_rate`` is only a default:
    bids copy it when they are associated with the client.
    """

    __tablename__ = "clients"

    # Contact info
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    company: Mapped[str] = mapped_column(String(500), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Contract
    contract_value: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    commission_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2),
        default=Decimal("0"),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Portal access
    access_token: Mapped[str | None] = mapped_column(
        String(64),
        unique=True,
        index=True,
        nullable=True,
        default=generate_access_token,
    )
    auth_user_id: Mapped[str | None] = mapped_column(
        String(64),
        unique=True,
        index=True,
        nullable=True,
    )

    # Relationships
    bids: Mapped[list["Bid"]] = relationship(
        "Bid",
        back_populates="client",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, company={self.company}, active={self.is_active})>"
