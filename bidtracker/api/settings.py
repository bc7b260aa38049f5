"""Tenant mail settings endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.db import get_db
from bidtracker.models import TenantSettings
from bidtracker.schemas import TenantSettingsResponse, TenantSettingsUpdate

from .deps import get_tenant_id

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_row(db: AsyncSession, tenant_id: str) -> TenantSettings | None:
    result = await db.execute(select(TenantSettings).where(TenantSettings.tenant_id == tenant_id))
    return result.scalar_one_or_none()


@router.get("", response_model=TenantSettingsResponse)
async def get_settings(
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Current mail settings of the caller."""
    row = await _get_row(db, tenant_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Settings not configured")
    return TenantSettingsResponse.from_model(row)


@router.put("", response_model=TenantSettingsResponse)
async def save_settings(
    data: TenantSettingsUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Create or update the caller's single settings row."""
    row = await _get_row(db, tenant_id)
    if row is None:
        row = TenantSettings(tenant_id=tenant_id)
        db.add(row)

    values = data.model_dump(exclude_unset=True)
    if not values.get("smtp_password"):
        values.pop("smtp_password", None)
    for field, value in values.items():
        setattr(row, field, value)

    await db.commit()
    await db.refresh(row)

    logger.info(f"Mail settings saved for tenant {tenant_id}")
    return TenantSettingsResponse.from_model(row)
