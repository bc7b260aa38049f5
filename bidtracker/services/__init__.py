"""Business logic services."""

from .bid_service import BidService
from .dashboard_service import DashboardService
from .decision_service import DecisionService
from .dispatcher import NotificationDispatcher, SMTPTransport
from .email_service import EmailService
from .financial_service import FinancialService
from .reminder_service import ReminderService
from .template_renderer import TemplateRenderer
from .tenant_config import TenantConfigResolver

__all__ = [
    "BidService",
    "DashboardService",
    "DecisionService",
    "EmailService",
    "FinancialService",
    "NotificationDispatcher",
    "ReminderService",
    "SMTPTransport",
    "TemplateRenderer",
    "TenantConfigResolver",
]
