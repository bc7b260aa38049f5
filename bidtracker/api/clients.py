"""Client management endpoints for consultants."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.db import get_db
from bidtracker.models import Client
from bidtracker.models.client import generate_access_token
from bidtracker.schemas import ClientCreate, ClientResponse, ClientUpdate

from .deps import get_tenant_id

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_owned_client(db: AsyncSession, tenant_id: str, client_id: int) -> Client:
    """Client by id, 404 unless it belongs to the tenant."""
    result = await db.execute(
        select(Client).where(Client.id == client_id, Client.tenant_id == tenant_id)
    )
    client = result.scalar_one_or_none()
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


async def commit_client(db: AsyncSession, client: Client) -> None:
    """Commit a client write; a login already linked elsewhere is a 409."""
    auth_user_id = client.auth_user_id
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning(f"Portal login {auth_user_id} is already linked to a client")
        raise HTTPException(status_code=409, detail="Account already linked to a client")
    await db.refresh(client)


@router.get("", response_model=list[ClientResponse])
async def list_clients(
    active_only: bool = Query(False),
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """List the tenant's clients."""
    query = select(Client).where(Client.tenant_id == tenant_id).order_by(Client.company)
    if active_only:
        query = query.where(Client.is_active.is_(True))

    result = await db.execute(query)
    return result.scalars().all()


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(
    client_data: ClientCreate,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Create a client; a portal access token is generated."""
    client = Client(tenant_id=tenant_id, **client_data.model_dump())

    db.add(client)
    await commit_client(db, client)

    logger.info(f"Client created: {client.id} ({client.company})")
    return client


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: int,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Get client by ID."""
    return await get_owned_client(db, tenant_id, client_id)


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: int,
    client_data: ClientUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Update client details.

    Changing the default commission rate does not touch existing bids.
    """
    client = await get_owned_client(db, tenant_id, client_id)

    update_data = client_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(client, field, value)

    await commit_client(db, client)

    logger.info(f"Client updated: {client.id}")
    return client


@router.delete("/{client_id}")
async def delete_client(
    client_id: int,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Delete a client and its bids."""
    client = await get_owned_client(db, tenant_id, client_id)

    await db.delete(client)
    await db.commit()

    logger.info(f"Client deleted: {client_id}")
    return {"status": "deleted", "id": client_id}


@router.post("/{client_id}/access-token", response_model=ClientResponse)
async def rotate_access_token(
    client_id: int,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Issue a new portal link token; old links stop working."""
    client = await get_owned_client(db, tenant_id, client_id)
    client.access_token = generate_access_token()

    await db.commit()
    await db.refresh(client)

    logger.info(f"Portal token rotated for client {client.id}")
    return client


@router.delete("/{client_id}/access-token", response_model=ClientResponse)
async def revoke_access_token(
    client_id: int,
    tenant_id: str = Depends(get_tenant_id),
    db: AsyncSession = Depends(get_db),
):
    """Disable link-based portal access for the client."""
    client = await get_owned_client(db, tenant_id, client_id)
    client.access_token = None

    await db.commit()
    await db.refresh(client)

    logger.info(f"Portal token revoked for client {client.id}")
    return client
