"""Board overview endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.db import get_db
from bidtracker.schemas import DashboardResponse
from bidtracker.services.dashboard_service import dashboard_service

from .deps import get_tenant_id

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Bids per status, win rate, deadlines in the next three days and top clients."""
    stats = await dashboard_service.stats(db, tenant_id)
    return DashboardResponse.model_validate(stats)
