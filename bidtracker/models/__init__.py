"""SQLAlchemy models."""

from .base import Base
from .bid import Bid, BidDecision, BidStatus, SettlementStatus
from .client import Client
from .tenant_settings import TenantSettings

__all__ = [
    "Base",
    "Bid",
    "BidStatus",
    "BidDecision",
    "SettlementStatus",
    "Client",
    "TenantSettings",
]
