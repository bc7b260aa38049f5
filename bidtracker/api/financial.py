"""Financial dashboard endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.config import settings
from bidtracker.db import get_db
from bidtracker.schemas import MonthlyRevenueResponse, RevenueSummaryResponse
from bidtracker.services.financial_service import financial_service

from .deps import get_tenant_id

router = APIRouter()


@router.get("/summary", response_model=RevenueSummaryResponse)
async def revenue_summary(
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Current fixed revenue and commissions receivable/received."""
    summary = await financial_service.summary(db, tenant_id)
    return RevenueSummaryResponse.model_validate(summary)


@router.get("/monthly", response_model=list[MonthlyRevenueResponse])
async def revenue_history(
    months: int | None = Query(None, ge=1, le=36),
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Reconstructed fixed + commission revenue for the last N months.

    Fixed revenue only counts clients that are active today.
    """
    history = await financial_service.revenue_history(
        db, tenant_id, months or settings.revenue_history_months
    )
    return [MonthlyRevenueResponse.model_validate(m) for m in history]


@router.get("/monthly/{year}/{month}", response_model=MonthlyRevenueResponse)
async def revenue_for_month(
    year: int = Path(ge=2000, le=2100),
    month: int = Path(ge=1, le=12),
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Revenue of a single month."""
    revenue = await financial_service.monthly_revenue(db, tenant_id, date(year, month, 1))
    return MonthlyRevenueResponse.model_validate(revenue)
