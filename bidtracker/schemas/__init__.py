"""Pydantic schemas for API validation."""

from .bid import Attachment, BidCreate, BidResponse, BidStatusUpdate, BidUpdate, PortalBid
from .client import ClientCreate, ClientResponse, ClientUpdate, PortalClient
from .dashboard import ClientBidCountResponse, CriticalBidResponse, DashboardResponse
from .decision import DecisionRequest, DecisionResponse, PortalResponse
from .financial import MonthlyRevenueResponse, RevenueSummaryResponse
from .reminder import ReminderResultResponse, ReminderRunResponse
from .settings import TenantSettingsResponse, TenantSettingsUpdate

__all__ = [
    "Attachment",
    "BidCreate",
    "BidUpdate",
    "BidStatusUpdate",
    "BidResponse",
    "PortalBid",
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "PortalClient",
    "ClientBidCountResponse",
    "CriticalBidResponse",
    "DashboardResponse",
    "DecisionRequest",
    "DecisionResponse",
    "PortalResponse",
    "MonthlyRevenueResponse",
    "RevenueSummaryResponse",
    "ReminderResultResponse",
    "ReminderRunResponse",
    "TenantSettingsUpdate",
    "TenantSettingsResponse",
]
