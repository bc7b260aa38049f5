"""Financial dashboard schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class MonthlyRevenueResponse(BaseModel):
    month: date
    fixed_revenue: Decimal
    commission_revenue: Decimal
    total: Decimal

    model_config = ConfigDict(from_attributes=True)


class RevenueSummaryResponse(BaseModel):
    current_fixed_revenue: Decimal
    active_contracts: int
    commission_pending: Decimal
    commission_paid: Decimal

    model_config = ConfigDict(from_attributes=True)
