"""Bid management endpoints for consultants."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.db import get_db
from bidtracker.models import Bid, BidStatus
from bidtracker.schemas import BidCreate, BidResponse, BidStatusUpdate, BidUpdate
from bidtracker.services.bid_service import bid_service
from bidtracker.services.exceptions import ConfigError, InvalidTransition, TransportError

from .clients import get_owned_client
from .deps import get_tenant_id

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_owned_bid(db: AsyncSession, tenant_id: str, bid_id: int) -> Bid:
    """Bid by id, 404 unless it belongs to the tenant."""
    result = await db.execute(select(Bid).where(Bid.id == bid_id, Bid.tenant_id == tenant_id))
    bid = result.scalar_one_or_none()
    if not bid:
        raise HTTPException(status_code=404, detail="Bid not found")
    return bid


@router.get("")
async def list_bids(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    status: Optional[str] = Query(None),
    client_id: Optional[int] = Query(None),
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """List bids ordered by deadline, with optional status/client filters."""
    base_query = select(Bid).where(Bid.tenant_id == tenant_id)

    if status:
        try:
            base_query = base_query.where(Bid.status == BidStatus(status))
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid status: {status}")
    if client_id is not None:
        base_query = base_query.where(Bid.client_id == client_id)

    count_result = await db.execute(select(func.count()).select_from(base_query.subquery()))
    total = count_result.scalar() or 0

    query = base_query.order_by(Bid.deadline, Bid.id).offset(skip).limit(limit)
    result = await db.execute(query)
    bids = result.scalars().all()

    return {
        "items": [BidResponse.model_validate(b) for b in bids],
        "total": total,
        "skip": skip,
        "limit": limit,
        "has_more": skip + len(bids) < total,
    }


@router.post("", response_model=BidResponse, status_code=201)
async def create_bid(
    bid_data: BidCreate,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Register a bid for one of the tenant's clients."""
    client = await get_owned_client(db, tenant_id, bid_data.client_id)
    return await bid_service.create_bid(db, tenant_id, client, bid_data)


@router.get("/{bid_id}", response_model=BidResponse)
async def get_bid(
    bid_id: int,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Get bid by ID."""
    return await get_owned_bid(db, tenant_id, bid_id)


@router.patch("/{bid_id}", response_model=BidResponse)
async def update_bid(
    bid_id: int,
    bid_data: BidUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Edit a bid, including its status and financial outcome."""
    bid = await get_owned_bid(db, tenant_id, bid_id)

    new_client = None
    if bid_data.client_id is not None:
        new_client = await get_owned_client(db, tenant_id, bid_data.client_id)

    try:
        return await bid_service.update_bid(db, bid, bid_data, new_client)
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{bid_id}/status", response_model=BidResponse)
async def move_bid(
    bid_id: int,
    move: BidStatusUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Board move to another column."""
    bid = await get_owned_bid(db, tenant_id, bid_id)
    try:
        return await bid_service.move_status(db, bid, move.status)
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{bid_id}/summary", response_model=BidResponse)
async def send_summary(
    bid_id: int,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Send the bid summary with its documents to the client now."""
    bid = await get_owned_bid(db, tenant_id, bid_id)
    try:
        return await bid_service.send_summary(db, bid)
    except ConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TransportError as e:
        raise HTTPException(status_code=502, detail=f"Mail server error: {e}")


@router.delete("/{bid_id}")
async def delete_bid(
    bid_id: int,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Delete a bid."""
    bid = await get_owned_bid(db, tenant_id, bid_id)

    await db.delete(bid)
    await db.commit()

    logger.info(f"Bid deleted: {bid_id}")
    return {"status": "deleted", "id": bid_id}
